"""Data access layer for transactions, cash-flow entries and budget targets"""

import uuid
from typing import Any, Dict, List
from sqlalchemy.orm import Session
from finpulse.infrastructure.database.models import BudgetTarget, CashFlow, FinancialTransaction
from finpulse.domain.models import CashFlowEntry, Transaction
from finpulse.domain.exceptions import RecordNotFoundError


class _CrudRepository:
    """Shared get/create/update/delete for a single ORM model"""

    model: Any = None

    def __init__(self, db: Session):
        self.db = db

    def get(self, record_id: uuid.UUID):
        """Fetch one record or raise RecordNotFoundError"""
        record = self.db.get(self.model, record_id)
        if record is None:
            raise RecordNotFoundError(f"{self.model.__tablename__} {record_id} not found")
        return record

    def create(self, **fields: Any):
        """Insert a record and return it with generated id/created_at"""
        record = self.model(**fields)
        self.db.add(record)
        self.db.flush()
        self.db.refresh(record)
        return record

    def update(self, record_id: uuid.UUID, updates: Dict[str, Any]):
        """Apply a partial update; unknown fields are ignored"""
        record = self.get(record_id)
        for name, value in updates.items():
            if hasattr(record, name):
                setattr(record, name, value)
        self.db.flush()
        return record

    def delete(self, record_id: uuid.UUID) -> None:
        """Remove a record or raise RecordNotFoundError"""
        record = self.get(record_id)
        self.db.delete(record)
        self.db.flush()


class TransactionRepository(_CrudRepository):
    """Repository for revenue/expenditure transactions"""

    model = FinancialTransaction

    def list_all(self) -> List[FinancialTransaction]:
        """All transactions, newest date first"""
        return (
            self.db.query(FinancialTransaction)
            .order_by(FinancialTransaction.date.desc(), FinancialTransaction.created_at.desc())
            .all()
        )


class CashFlowRepository(_CrudRepository):
    """Repository for cash-flow entries"""

    model = CashFlow

    def list_all(self) -> List[CashFlow]:
        """All cash-flow entries, newest date first"""
        return (
            self.db.query(CashFlow)
            .order_by(CashFlow.date.desc(), CashFlow.created_at.desc())
            .all()
        )


class BudgetTargetRepository(_CrudRepository):
    """Repository for budget targets (opaque to aggregation)"""

    model = BudgetTarget

    def list_all(self) -> List[BudgetTarget]:
        """All budget targets, most recently created first"""
        return (
            self.db.query(BudgetTarget)
            .order_by(BudgetTarget.created_at.desc())
            .all()
        )


def to_transaction(row: FinancialTransaction) -> Transaction:
    """Map a stored row to the domain record"""
    return Transaction(
        type=row.type,
        category=row.category,
        amount=row.amount,
        date=row.date,
        description=row.description,
    )


def to_cash_flow_entry(row: CashFlow) -> CashFlowEntry:
    """Map a stored row to the domain record"""
    return CashFlowEntry(
        flow_type=row.flow_type,
        source=row.source,
        amount=row.amount,
        date=row.date,
        description=row.description,
    )
