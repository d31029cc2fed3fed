"""Dashboard aggregates: summary, trends, and the combined dashboard load"""

import logging
import time
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from finpulse.api.dependencies import get_dashboard_loader, get_request_id
from finpulse.api.v1.schemas import (
    CashFlowRecord,
    CashFlowSummaryResponse,
    CategoryTotalSchema,
    DashboardResponse,
    FinancialSummaryResponse,
    MonthlyBucketSchema,
    TransactionRecord,
)
from finpulse.domain.aggregation import category_breakdown, monthly_trends
from finpulse.domain.exceptions import StorageFetchError
from finpulse.domain.models import CategoryTotal, FinancialSummary, MonthlyBucket
from finpulse.infrastructure.observability.logging import log_dashboard_load
from finpulse.services.dashboard import DashboardLoader

router = APIRouter()

# Dashboard list views show the most recent entries only
RECENT_TRANSACTIONS = 10
RECENT_CASH_FLOWS = 5


def _summary_schema(summary: FinancialSummary) -> FinancialSummaryResponse:
    return FinancialSummaryResponse(
        total_revenue=float(summary.total_revenue),
        total_expenditure=float(summary.total_expenditure),
        total_profit=float(summary.total_profit),
        monthly_revenue=float(summary.monthly_revenue),
        monthly_expenditure=float(summary.monthly_expenditure),
        monthly_profit=float(summary.monthly_profit),
    )


def _category_schemas(totals: List[CategoryTotal]) -> List[CategoryTotalSchema]:
    return [CategoryTotalSchema(name=c.name, total=float(c.total)) for c in totals]


def _bucket_schemas(buckets: List[MonthlyBucket]) -> List[MonthlyBucketSchema]:
    return [
        MonthlyBucketSchema(month=b.month, revenue=float(b.revenue), expenses=float(b.expenses))
        for b in buckets
    ]


@router.get("/summary", response_model=FinancialSummaryResponse)
async def get_financial_summary(
    as_of: Optional[datetime] = Query(None, description="Reference instant for the monthly figures; defaults to now"),
    loader: DashboardLoader = Depends(get_dashboard_loader),
):
    """Total and current-month revenue, expenditure and profit"""
    try:
        summary = await loader.financial_summary(as_of or datetime.now())
    except StorageFetchError:
        raise HTTPException(status_code=503, detail="Storage unavailable")
    return _summary_schema(summary)


@router.get("/trends/monthly", response_model=List[MonthlyBucketSchema])
async def get_monthly_trends(loader: DashboardLoader = Depends(get_dashboard_loader)):
    """Revenue and expenses per calendar month, oldest first"""
    try:
        transactions = await loader.fetch_transactions()
    except StorageFetchError:
        raise HTTPException(status_code=503, detail="Storage unavailable")
    return _bucket_schemas(monthly_trends(transactions))


@router.get("/trends/categories", response_model=List[CategoryTotalSchema])
async def get_category_totals(
    type: Optional[str] = Query(None, description="revenue | expenditure; all types when omitted"),
    loader: DashboardLoader = Depends(get_dashboard_loader),
):
    """Transaction totals per category, largest first"""
    try:
        transactions = await loader.fetch_transactions()
    except StorageFetchError:
        raise HTTPException(status_code=503, detail="Storage unavailable")
    return _category_schemas(category_breakdown(transactions, txn_type=type))


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    request: Request,
    as_of: Optional[datetime] = Query(None, description="Reference instant for the monthly figures; defaults to now"),
    loader: DashboardLoader = Depends(get_dashboard_loader),
):
    """
    Load everything the dashboard renders in one request.

    Four storage fetches run concurrently; if any fails the request fails with
    503 and nothing partial is returned.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        dashboard = await loader.load(as_of or datetime.now())
    except StorageFetchError as e:
        logging.error(f"Dashboard load failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Failed to load dashboard data")

    duration_ms = (time.time() - start_time) * 1000
    log_dashboard_load(request_id, len(dashboard.transactions), len(dashboard.cash_flows), duration_ms)

    cash_flow_summary = dashboard.cash_flow_summary
    return DashboardResponse(
        summary=_summary_schema(dashboard.summary),
        cash_flow_summary=CashFlowSummaryResponse(
            total_inflow=float(cash_flow_summary.total_inflow),
            total_outflow=float(cash_flow_summary.total_outflow),
            net_cash_flow=float(cash_flow_summary.net_cash_flow),
        ),
        recent_transactions=[
            TransactionRecord(
                type=t.type,
                category=t.category,
                description=t.description,
                amount=float(t.amount),
                date=t.date,
            )
            for t in dashboard.transactions[:RECENT_TRANSACTIONS]
        ],
        recent_cash_flows=[
            CashFlowRecord(
                flow_type=c.flow_type,
                source=c.source,
                description=c.description,
                amount=float(c.amount),
                date=c.date,
            )
            for c in dashboard.cash_flows[:RECENT_CASH_FLOWS]
        ],
        expense_categories=_category_schemas(dashboard.expense_categories),
        monthly_trends=_bucket_schemas(dashboard.monthly_trends),
    )
