"""Scalar summaries over transactions and cash-flow entries"""

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, List, Union

from finpulse.domain.coercion import ZERO, coerce_amount
from finpulse.domain.models import (
    EXPENDITURE,
    INFLOW,
    OUTFLOW,
    REVENUE,
    CashFlowSummary,
    CashFlowEntry,
    FinancialSummary,
    Transaction,
)
from finpulse.utils.date_utils import same_month


def _sum_of_type(transactions: List[Transaction], txn_type: str) -> Decimal:
    return sum((coerce_amount(t.amount) for t in transactions if t.type == txn_type), ZERO)


def summarize_transactions(
    transactions: Iterable[Transaction],
    as_of: Union[date, datetime],
) -> FinancialSummary:
    """
    Compute overall and current-month revenue, expenditure and profit.

    "Current month" is the calendar month/year of `as_of`; callers pass the
    wall-clock time explicitly so the result is reproducible.
    """
    transactions = list(transactions)
    monthly = [t for t in transactions if same_month(t.date, as_of)]

    total_revenue = _sum_of_type(transactions, REVENUE)
    total_expenditure = _sum_of_type(transactions, EXPENDITURE)
    monthly_revenue = _sum_of_type(monthly, REVENUE)
    monthly_expenditure = _sum_of_type(monthly, EXPENDITURE)

    return FinancialSummary(
        total_revenue=total_revenue,
        total_expenditure=total_expenditure,
        total_profit=total_revenue - total_expenditure,
        monthly_revenue=monthly_revenue,
        monthly_expenditure=monthly_expenditure,
        monthly_profit=monthly_revenue - monthly_expenditure,
    )


def summarize_cash_flow(entries: Iterable[CashFlowEntry]) -> CashFlowSummary:
    """Total inflow, total outflow and net cash position (no monthly variant)"""
    entries = list(entries)
    total_inflow = sum((coerce_amount(e.amount) for e in entries if e.flow_type == INFLOW), ZERO)
    total_outflow = sum((coerce_amount(e.amount) for e in entries if e.flow_type == OUTFLOW), ZERO)

    return CashFlowSummary(
        total_inflow=total_inflow,
        total_outflow=total_outflow,
        net_cash_flow=total_inflow - total_outflow,
    )
