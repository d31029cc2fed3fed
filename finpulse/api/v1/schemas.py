"""Pydantic schemas for API request/response validation"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TransactionType(str, Enum):
    REVENUE = "revenue"
    EXPENDITURE = "expenditure"


class FlowType(str, Enum):
    INFLOW = "inflow"
    OUTFLOW = "outflow"


# Records


class TransactionCreate(BaseModel):
    """Request body for POST /v1/transactions"""

    type: TransactionType
    category: str = Field(..., min_length=1, description="Category label (free-form)")
    description: Optional[str] = None
    amount: Decimal = Field(..., ge=0, description="Magnitude; sign is implied by type")
    date: dt.date


class TransactionUpdate(BaseModel):
    """Request body for PATCH /v1/transactions/{id}"""

    type: Optional[TransactionType] = None
    category: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    amount: Optional[Decimal] = Field(None, ge=0)
    date: Optional[dt.date] = None


class TransactionResponse(BaseModel):
    """Stored transaction"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: str
    category: str
    description: Optional[str] = None
    amount: float
    date: dt.date
    created_at: Optional[dt.datetime] = None


class CashFlowCreate(BaseModel):
    """Request body for POST /v1/cash-flows"""

    flow_type: FlowType
    source: str = Field(..., min_length=1, description="Source label (free-form)")
    description: Optional[str] = None
    amount: Decimal = Field(..., ge=0, description="Magnitude; sign is implied by flow_type")
    date: dt.date


class CashFlowUpdate(BaseModel):
    """Request body for PATCH /v1/cash-flows/{id}"""

    flow_type: Optional[FlowType] = None
    source: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    amount: Optional[Decimal] = Field(None, ge=0)
    date: Optional[dt.date] = None


class CashFlowResponse(BaseModel):
    """Stored cash-flow entry"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    flow_type: str
    source: str
    description: Optional[str] = None
    amount: float
    date: dt.date
    created_at: Optional[dt.datetime] = None


class BudgetTargetCreate(BaseModel):
    """Request body for POST /v1/budgets"""

    category: str = Field(..., min_length=1)
    target_amount: Decimal = Field(..., ge=0)
    period: str = "monthly"


class BudgetTargetUpdate(BaseModel):
    """Request body for PATCH /v1/budgets/{id}"""

    category: Optional[str] = Field(None, min_length=1)
    target_amount: Optional[Decimal] = Field(None, ge=0)
    period: Optional[str] = None


class BudgetTargetResponse(BaseModel):
    """Stored budget target"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    category: str
    target_amount: float
    period: str
    created_at: Optional[dt.datetime] = None


class CategoryOptions(BaseModel):
    """Recommended (not enforced) labels for entry forms"""

    revenue: List[str]
    expenditure: List[str]
    inflow: List[str]
    outflow: List[str]


# Aggregates


class CategoryTotalSchema(BaseModel):
    name: str
    total: float


class MonthlyBucketSchema(BaseModel):
    month: str
    revenue: float
    expenses: float


class FinancialSummaryResponse(BaseModel):
    """Response for GET /v1/summary"""

    total_revenue: float
    total_expenditure: float
    total_profit: float
    monthly_revenue: float
    monthly_expenditure: float
    monthly_profit: float


class CashFlowSummaryResponse(BaseModel):
    """Response for GET /v1/cash-flows/summary"""

    total_inflow: float
    total_outflow: float
    net_cash_flow: float


class TransactionRecord(BaseModel):
    type: str
    category: str
    description: Optional[str] = None
    amount: float
    date: dt.date


class CashFlowRecord(BaseModel):
    flow_type: str
    source: str
    description: Optional[str] = None
    amount: float
    date: dt.date


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard"""

    summary: FinancialSummaryResponse
    cash_flow_summary: CashFlowSummaryResponse
    recent_transactions: List[TransactionRecord]
    recent_cash_flows: List[CashFlowRecord]
    expense_categories: List[CategoryTotalSchema]
    monthly_trends: List[MonthlyBucketSchema]


# Analysis


class AnalyzeRequest(BaseModel):
    """Request body for POST /v1/analyze"""

    rows: List[Any] = Field(default_factory=list, description="Uploaded rows, any shape")
    api_url: Optional[str] = Field(None, description="Optional remote analysis endpoint")


class QuickAnalysisSchema(BaseModel):
    inflow: float
    outflow: float
    net: float
    top_categories: List[CategoryTotalSchema]


class AnalyzeResponse(BaseModel):
    """Response for POST /v1/analyze and /v1/analyze/upload"""

    mode: str  # local | api
    row_count: int
    data: Dict[str, Any]
    source_file: Optional[str] = None


class RemoteStatusResponse(BaseModel):
    """Response for GET /v1/analyze/remote-status"""

    api_url: str
    reachable: bool
