"""Dashboard loading: four concurrent storage fetches joined all-or-nothing"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, List, TypeVar, Union

from sqlalchemy.exc import SQLAlchemyError

from finpulse.domain.aggregation import category_breakdown, monthly_trends
from finpulse.domain.exceptions import StorageFetchError
from finpulse.domain.models import (
    EXPENDITURE,
    CashFlowEntry,
    CashFlowSummary,
    CategoryTotal,
    FinancialSummary,
    MonthlyBucket,
    Transaction,
)
from finpulse.domain.summary import summarize_cash_flow, summarize_transactions
from finpulse.infrastructure.database.repositories import (
    CashFlowRepository,
    TransactionRepository,
    to_cash_flow_entry,
    to_transaction,
)
from finpulse.infrastructure.database.session import SessionFactory
from finpulse.infrastructure.observability.metrics import dashboard_fetch_failures_counter
from finpulse.utils.concurrency import join_all

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Dashboard:
    """Everything the dashboard view renders"""

    summary: FinancialSummary
    cash_flow_summary: CashFlowSummary
    transactions: List[Transaction]
    cash_flows: List[CashFlowEntry]
    expense_categories: List[CategoryTotal]
    monthly_trends: List[MonthlyBucket]


class DashboardLoader:
    """Fetches records from storage and feeds the aggregators"""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def _query(self, fetch: Callable) -> List:
        """Run one blocking fetch on its own session"""
        db = self.session_factory()
        try:
            return fetch(db)
        finally:
            db.close()

    async def _fetch(self, fetch: Callable[..., T]) -> T:
        """
        Run a fetch on a worker thread.

        Raises:
            StorageFetchError: On database or connection errors
        """
        try:
            return await asyncio.to_thread(self._query, fetch)
        except (SQLAlchemyError, OSError) as e:
            raise StorageFetchError(f"Storage fetch failed: {e}") from e

    async def fetch_transactions(self) -> List[Transaction]:
        """All transactions, newest date first"""
        return await self._fetch(
            lambda db: [to_transaction(row) for row in TransactionRepository(db).list_all()]
        )

    async def fetch_cash_flows(self) -> List[CashFlowEntry]:
        """All cash-flow entries, newest date first"""
        return await self._fetch(
            lambda db: [to_cash_flow_entry(row) for row in CashFlowRepository(db).list_all()]
        )

    async def financial_summary(self, as_of: Union[date, datetime]) -> FinancialSummary:
        return summarize_transactions(await self.fetch_transactions(), as_of)

    async def cash_flow_summary(self) -> CashFlowSummary:
        return summarize_cash_flow(await self.fetch_cash_flows())

    async def load(self, as_of: Union[date, datetime]) -> Dashboard:
        """
        Issue the four dashboard fetches concurrently and aggregate.

        Flow:
        1. Financial summary, transaction list, cash-flow list, cash-flow summary in parallel
        2. First failure cancels the rest; no partial dashboard is built
        3. Category and month aggregates computed from the fetched transactions

        Raises:
            StorageFetchError: If any fetch fails
        """
        try:
            summary, transactions, cash_flows, cash_flow_summary = await join_all(
                self.financial_summary(as_of),
                self.fetch_transactions(),
                self.fetch_cash_flows(),
                self.cash_flow_summary(),
            )
        except StorageFetchError as e:
            dashboard_fetch_failures_counter.inc()
            logger.error("Dashboard fetch failed: %s", e)
            raise

        return Dashboard(
            summary=summary,
            cash_flow_summary=cash_flow_summary,
            transactions=transactions,
            cash_flows=cash_flows,
            expense_categories=category_breakdown(transactions, txn_type=EXPENDITURE),
            monthly_trends=monthly_trends(transactions),
        )
