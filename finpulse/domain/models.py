"""Domain models - pure Python dataclasses representing financial records and aggregates"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

REVENUE = "revenue"
EXPENDITURE = "expenditure"
INFLOW = "inflow"
OUTFLOW = "outflow"


@dataclass
class Transaction:
    """Ledger transaction; sign is implied by type, amount is a magnitude"""

    type: str  # "revenue" or "expenditure"
    category: str
    amount: Decimal
    date: date
    description: Optional[str] = None


@dataclass
class CashFlowEntry:
    """Cash movement; sign is implied by flow_type, amount is a magnitude"""

    flow_type: str  # "inflow" or "outflow"
    source: str
    amount: Decimal
    date: date
    description: Optional[str] = None


@dataclass
class CategoryTotal:
    """Summed amount for one category label"""

    name: str
    total: Decimal


@dataclass
class MonthlyBucket:
    """Revenue and expenses accumulated for one calendar month"""

    month: str  # "Jan 2024"
    revenue: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")


@dataclass
class FinancialSummary:
    """Overall and current-month revenue/expenditure/profit"""

    total_revenue: Decimal
    total_expenditure: Decimal
    total_profit: Decimal
    monthly_revenue: Decimal
    monthly_expenditure: Decimal
    monthly_profit: Decimal


@dataclass
class CashFlowSummary:
    """Inflow/outflow totals and net cash position"""

    total_inflow: Decimal
    total_outflow: Decimal
    net_cash_flow: Decimal


@dataclass
class QuickAnalysis:
    """Best-effort summary of an uploaded table"""

    inflow: Decimal
    outflow: Decimal
    net: Decimal
    top_categories: List[CategoryTotal] = field(default_factory=list)
