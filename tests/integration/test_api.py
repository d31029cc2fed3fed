"""Integration tests for API endpoints"""

import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from finpulse.domain.exceptions import RemoteAnalysisError
from finpulse.infrastructure.database.session import get_session_factory


@pytest.fixture
def seeded_client(client: TestClient) -> TestClient:
    """Client with two months of transactions and a handful of cash flows recorded"""
    for body in [
        {"type": "revenue", "category": "Consulting", "amount": "100", "date": "2024-01-15"},
        {"type": "expenditure", "category": "Rent", "amount": "40", "date": "2024-01-20"},
        {"type": "revenue", "category": "Sales Revenue", "amount": "50", "date": "2024-02-01"},
    ]:
        assert client.post("/v1/transactions", json=body).status_code == 201
    for body in [
        {"flow_type": "inflow", "source": "Customer Payments", "amount": "300", "date": "2024-01-05"},
        {"flow_type": "outflow", "source": "Payroll", "amount": "120.50", "date": "2024-01-28"},
    ]:
        assert client.post("/v1/cash-flows", json=body).status_code == 201
    return client


def _broken_session_factory():
    raise OperationalError("SELECT 1", {}, Exception("database is down"))


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/analyze", json={"rows": [{"amount": 1}]})

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "finpulse_analysis_total" in response.text


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_category_options(client: TestClient):
    response = client.get("/v1/categories")

    assert response.status_code == 200
    data = response.json()
    assert "Sales Revenue" in data["revenue"]
    assert "Rent" in data["expenditure"]
    assert set(data) == {"revenue", "expenditure", "inflow", "outflow"}


def test_transaction_crud(client: TestClient):
    """Create, read, update and delete a transaction"""
    response = client.post(
        "/v1/transactions",
        json={"type": "expenditure", "category": "Travel", "amount": "42.10", "date": "2024-03-02"},
    )
    assert response.status_code == 201
    created = response.json()
    assert created["type"] == "expenditure"
    assert created["amount"] == 42.1
    txn_id = created["id"]

    response = client.get(f"/v1/transactions/{txn_id}")
    assert response.status_code == 200
    assert response.json()["category"] == "Travel"

    response = client.patch(f"/v1/transactions/{txn_id}", json={"amount": "50", "description": "Flights"})
    assert response.status_code == 200
    assert response.json()["amount"] == 50.0
    assert response.json()["description"] == "Flights"
    assert response.json()["category"] == "Travel"

    response = client.delete(f"/v1/transactions/{txn_id}")
    assert response.status_code == 204
    assert client.get(f"/v1/transactions/{txn_id}").status_code == 404


def test_transaction_validation(client: TestClient):
    """Unknown type and negative amounts are rejected"""
    response = client.post(
        "/v1/transactions",
        json={"type": "refund", "category": "Travel", "amount": "1", "date": "2024-03-02"},
    )
    assert response.status_code == 422

    response = client.post(
        "/v1/transactions",
        json={"type": "revenue", "category": "Sales", "amount": "-1", "date": "2024-03-02"},
    )
    assert response.status_code == 422


def test_transaction_not_found(client: TestClient):
    missing = "00000000-0000-0000-0000-000000000000"

    assert client.get(f"/v1/transactions/{missing}").status_code == 404
    assert client.patch(f"/v1/transactions/{missing}", json={"amount": "1"}).status_code == 404
    assert client.delete(f"/v1/transactions/{missing}").status_code == 404


def test_transactions_listed_newest_first(seeded_client: TestClient):
    response = seeded_client.get("/v1/transactions")

    assert response.status_code == 200
    assert [t["date"] for t in response.json()] == ["2024-02-01", "2024-01-20", "2024-01-15"]


def test_cash_flow_crud(client: TestClient):
    response = client.post(
        "/v1/cash-flows",
        json={"flow_type": "outflow", "source": "Utilities", "amount": "75", "date": "2024-03-01"},
    )
    assert response.status_code == 201
    entry_id = response.json()["id"]

    response = client.patch(f"/v1/cash-flows/{entry_id}", json={"flow_type": "inflow"})
    assert response.status_code == 200
    assert response.json()["flow_type"] == "inflow"

    assert client.get(f"/v1/cash-flows/{entry_id}").status_code == 200
    assert client.delete(f"/v1/cash-flows/{entry_id}").status_code == 204
    assert client.get(f"/v1/cash-flows/{entry_id}").status_code == 404


def test_cash_flow_summary(seeded_client: TestClient):
    response = seeded_client.get("/v1/cash-flows/summary")

    assert response.status_code == 200
    assert response.json() == {
        "total_inflow": 300.0,
        "total_outflow": 120.5,
        "net_cash_flow": 179.5,
    }


def test_financial_summary_as_of(seeded_client: TestClient):
    """Totals cover everything; monthly figures only the as_of month"""
    response = seeded_client.get("/v1/summary", params={"as_of": "2024-01-31T12:00:00"})

    assert response.status_code == 200
    assert response.json() == {
        "total_revenue": 150.0,
        "total_expenditure": 40.0,
        "total_profit": 110.0,
        "monthly_revenue": 100.0,
        "monthly_expenditure": 40.0,
        "monthly_profit": 60.0,
    }


def test_monthly_trends(seeded_client: TestClient):
    response = seeded_client.get("/v1/trends/monthly")

    assert response.status_code == 200
    assert response.json() == [
        {"month": "Jan 2024", "revenue": 100.0, "expenses": 40.0},
        {"month": "Feb 2024", "revenue": 50.0, "expenses": 0.0},
    ]


def test_category_trends_filtered_by_type(seeded_client: TestClient):
    response = seeded_client.get("/v1/trends/categories", params={"type": "revenue"})

    assert response.status_code == 200
    assert response.json() == [
        {"name": "Consulting", "total": 100.0},
        {"name": "Sales Revenue", "total": 50.0},
    ]


def test_dashboard(seeded_client: TestClient):
    """Combined dashboard payload"""
    response = seeded_client.get("/v1/dashboard", params={"as_of": "2024-02-10T09:00:00"})

    assert response.status_code == 200
    data = response.json()
    assert data["summary"]["total_profit"] == 110.0
    assert data["summary"]["monthly_revenue"] == 50.0
    assert data["cash_flow_summary"]["net_cash_flow"] == 179.5
    assert len(data["recent_transactions"]) == 3
    assert data["recent_cash_flows"][0]["source"] == "Payroll"
    assert data["expense_categories"] == [{"name": "Rent", "total": 40.0}]
    assert [m["month"] for m in data["monthly_trends"]] == ["Jan 2024", "Feb 2024"]


def test_dashboard_empty_store(client: TestClient):
    response = client.get("/v1/dashboard")

    assert response.status_code == 200
    data = response.json()
    assert data["summary"]["total_revenue"] == 0.0
    assert data["recent_transactions"] == []
    assert data["monthly_trends"] == []


def test_dashboard_storage_failure(client: TestClient):
    """A failed fetch fails the whole dashboard with 503"""
    client.app.dependency_overrides[get_session_factory] = lambda: _broken_session_factory

    response = client.get("/v1/dashboard")
    assert response.status_code == 503
    assert response.json()["detail"] == "Failed to load dashboard data"

    assert client.get("/v1/summary").status_code == 503


def test_analyze_local(client: TestClient):
    """Without api_url the quick analysis runs in-process"""
    response = client.post(
        "/v1/analyze",
        json={
            "rows": [
                {"Category": "Food", "Amount": "12.50"},
                {"category": "Rent", "amount": -500},
                {"amount": "abc"},
            ]
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["mode"] == "local"
    assert data["row_count"] == 3
    assert data["data"]["inflow"] == 12.5
    assert data["data"]["outflow"] == 500.0
    assert data["data"]["net"] == -487.5
    assert [c["name"] for c in data["data"]["top_categories"]] == ["Rent", "Food", "Uncategorized"]


def test_analyze_rejects_empty_rows(client: TestClient):
    response = client.post("/v1/analyze", json={"rows": []})

    assert response.status_code == 422
    assert response.json()["detail"] == "No rows to analyze"


@patch("finpulse.infrastructure.clients.analysis.AnalysisClient.analyze", new_callable=AsyncMock)
def test_analyze_remote(mock_analyze: AsyncMock, client: TestClient):
    """With api_url the rows are forwarded and the remote JSON returned verbatim"""
    mock_analyze.return_value = {"insights": ["spend less on rent"]}

    response = client.post(
        "/v1/analyze",
        json={"rows": [{"amount": 1}], "api_url": "https://analysis.example.test/analyze"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["mode"] == "api"
    assert data["data"] == {"insights": ["spend less on rent"]}
    mock_analyze.assert_awaited_once()


@patch("finpulse.infrastructure.clients.analysis.AnalysisClient.analyze", new_callable=AsyncMock)
def test_analyze_remote_failure_leaves_data_untouched(mock_analyze: AsyncMock, seeded_client: TestClient):
    """Remote failure surfaces as 502 with a retry hint; stored records are unchanged"""
    mock_analyze.side_effect = RemoteAnalysisError("Analysis API error: 500")

    response = seeded_client.post(
        "/v1/analyze",
        json={"rows": [{"amount": 1}], "api_url": "https://analysis.example.test/analyze"},
    )

    assert response.status_code == 502
    assert "Analysis API error: 500" in response.json()["detail"]
    assert "Retry" in response.json()["detail"]
    assert len(seeded_client.get("/v1/transactions").json()) == 3


def test_analyze_upload_csv(client: TestClient):
    content = b"Category,Amount\nFood,12.50\nFood,-2.50\nRent,-500\n"

    response = client.post("/v1/analyze/upload", files={"file": ("march.csv", content, "text/csv")})

    assert response.status_code == 200
    data = response.json()
    assert data["mode"] == "local"
    assert data["row_count"] == 3
    assert data["source_file"] == "march.csv"
    assert data["data"]["inflow"] == 12.5
    assert data["data"]["outflow"] == 502.5


def test_analyze_upload_malformed_csv(client: TestClient):
    response = client.post(
        "/v1/analyze/upload", files={"file": ("bad.csv", b"a,b\n1,2\n3,4,5,6\n", "text/csv")}
    )
    assert response.status_code == 400


def test_analyze_upload_header_only(client: TestClient):
    response = client.post(
        "/v1/analyze/upload", files={"file": ("empty.csv", b"amount,category\n", "text/csv")}
    )
    assert response.status_code == 422


@patch("finpulse.infrastructure.clients.analysis.AnalysisClient.ping", new_callable=AsyncMock)
def test_remote_status(mock_ping: AsyncMock, client: TestClient):
    mock_ping.return_value = False

    response = client.get("/v1/analyze/remote-status", params={"api_url": "https://analysis.example.test"})

    assert response.status_code == 200
    assert response.json() == {"api_url": "https://analysis.example.test", "reachable": False}


def test_budget_crud(client: TestClient):
    response = client.post("/v1/budgets", json={"category": "Marketing", "target_amount": "2000"})
    assert response.status_code == 201
    budget = response.json()
    assert budget["period"] == "monthly"
    assert budget["target_amount"] == 2000.0

    response = client.patch(f"/v1/budgets/{budget['id']}", json={"target_amount": "2500"})
    assert response.status_code == 200
    assert response.json()["target_amount"] == 2500.0

    assert len(client.get("/v1/budgets").json()) == 1
    assert client.delete(f"/v1/budgets/{budget['id']}").status_code == 204
    assert client.get("/v1/budgets").json() == []


def test_analyze_survives_huge_exponent(client: TestClient):
    response = client.post("/v1/analyze", json={"rows": [{"amount": "1e1000000"}, {"amount": "3"}]})

    assert response.status_code == 200
    assert response.json()["data"]["inflow"] == 3.0
