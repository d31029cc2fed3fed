"""SQLAlchemy ORM models for stored records"""

import uuid
from sqlalchemy import Column, Date, DateTime, Numeric, Text, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class FinancialTransaction(Base):
    """Revenue or expenditure ledger entry"""

    __tablename__ = "financial_transactions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    type = Column(Text, nullable=False)  # revenue | expenditure
    category = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    amount = Column(Numeric(14, 2), nullable=False)
    date = Column(Date, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class CashFlow(Base):
    """Cash inflow or outflow entry"""

    __tablename__ = "cash_flow"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    flow_type = Column(Text, nullable=False)  # inflow | outflow
    source = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    amount = Column(Numeric(14, 2), nullable=False)
    date = Column(Date, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class BudgetTarget(Base):
    """Spending/revenue target per category"""

    __tablename__ = "budget_targets"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    category = Column(Text, nullable=False)
    target_amount = Column(Numeric(14, 2), nullable=False)
    period = Column(Text, nullable=False, default="monthly")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
