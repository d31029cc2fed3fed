"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from finpulse.api.main import create_app
from finpulse.infrastructure.database.models import Base
from finpulse.infrastructure.database.session import get_db, get_session_factory
from finpulse.domain.models import CashFlowEntry, Transaction


# Test database; check_same_thread off because dashboard fetches run on worker threads
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: TestingSessionLocal
    return TestClient(app)


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """Two months of activity: Jan has revenue and an expense, Feb only revenue"""
    return [
        Transaction(type="revenue", category="Consulting", amount=Decimal("100"), date=date(2024, 1, 15)),
        Transaction(type="expenditure", category="Rent", amount=Decimal("40"), date=date(2024, 1, 20)),
        Transaction(type="revenue", category="Sales Revenue", amount=Decimal("50"), date=date(2024, 2, 1)),
    ]


@pytest.fixture
def sample_cash_flows() -> list[CashFlowEntry]:
    return [
        CashFlowEntry(flow_type="inflow", source="Customer Payments", amount=Decimal("300.00"), date=date(2024, 1, 5)),
        CashFlowEntry(flow_type="outflow", source="Payroll", amount=Decimal("120.50"), date=date(2024, 1, 28)),
        CashFlowEntry(flow_type="outflow", source="Tax Payments", amount=Decimal("79.50"), date=date(2024, 2, 10)),
    ]


@pytest.fixture
def session_factory():
    """Session factory bound to the test database (for code that opens its own sessions)"""
    return TestingSessionLocal
