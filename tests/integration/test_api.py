"""Integration tests for API endpoints"""

from datetime import timedelta
from fastapi.testclient import TestClient


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "lending-engine"}


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "lending_credit_assessment_total" in response.text
    assert "lending_due_today_total" in response.text


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"

    generated = client.get("/health")
    assert generated.headers["X-Request-ID"]


def test_assessment_new_borrower(client: TestClient):
    """No history: initial score path"""
    response = client.post(
        "/v1/credit/assessment",
        json={
            "borrower": {
                "monthly_income": 60000,
                "employment_status": "employed",
                "employment_years": 6,
                "years_at_address": 5,
            }
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["score"] == 750
    assert data["category"] == "Excellent"
    assert data["description"] == "Very low risk borrower"
    assert data["risk_rating"] == "Low"
    assert data["suggested_rate"] == 9
    assert data["initial"] is True
    assert data["sub_scores"] == {}


def test_assessment_with_history(client: TestClient, as_of):
    start = as_of - timedelta(days=4 * 365)
    first_due = as_of - timedelta(days=600)
    response = client.post(
        "/v1/credit/assessment",
        json={
            "borrower": {
                "monthly_income": 60000,
                "employment_status": "employed",
                "employment_years": 6,
                "years_at_address": 4,
            },
            "loans": [
                {
                    "loan_id": "l-1",
                    "principal": 100000,
                    "interest_rate": 12,
                    "term_months": 60,
                    "start_date": start.isoformat(),
                    "total_due": 160000,
                    "paid_amount": 130000,
                }
            ],
            "repayments": [
                {
                    "loan_id": "l-1",
                    "amount": 2666.67,
                    "due_date": (first_due + timedelta(days=i * 30)).isoformat(),
                    "payment_date": (first_due + timedelta(days=i * 30)).isoformat(),
                    "status": "paid",
                }
                for i in range(20)
            ],
            "base_rate": 14,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["score"] == 744
    assert data["category"] == "Good"
    assert data["suggested_rate"] == 13
    assert data["initial"] is False
    assert data["sub_scores"]["payment"] == 800


def test_assessment_rejects_unknown_employment_status(client: TestClient):
    response = client.post(
        "/v1/credit/assessment",
        json={"borrower": {"employment_status": "freelancer"}},
    )
    assert response.status_code == 422


def test_schedule_endpoint(client: TestClient):
    response = client.post(
        "/v1/loans/schedule",
        json={
            "loan_id": "l-7",
            "principal": 12000,
            "interest_rate": 12,
            "term_months": 6,
            "frequency": "monthly",
            "start_date": "2024-01-15",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["loan_id"] == "l-7"
    assert data["total_due"] == 12720
    assert data["end_date"] == "2024-07-15"
    assert len(data["installments"]) == 6
    assert data["installments"][0]["due_date"] == "2024-02-15"
    assert data["installments"][-1]["due_date"] == "2024-07-15"
    assert all(inst["amount"] == 2120 for inst in data["installments"])
    assert all(inst["status"] == "pending" for inst in data["installments"])


def test_schedule_endpoint_rejects_zero_term(client: TestClient):
    response = client.post(
        "/v1/loans/schedule",
        json={"principal": 1000, "interest_rate": 12, "term_months": 0, "start_date": "2024-01-15"},
    )
    assert response.status_code == 422


def test_due_today_endpoint_is_idempotent(client: TestClient, as_of):
    loan = {
        "loan_id": "l-1",
        "principal": 12000,
        "interest_rate": 12,
        "term_months": 6,
        "frequency": "weekly",
        "start_date": "2024-01-15",
    }

    first = client.post("/v1/repayments/due-today", json={"loan": loan})
    assert first.status_code == 200
    first_data = first.json()
    assert first_data["created"] is True
    assert len(first_data["installments"]) == 1
    installment = first_data["installments"][0]
    # 12720 / 24 = 530
    assert installment["amount"] == 530
    assert installment["due_date"] == as_of.isoformat()
    assert installment["description"] == "weekly installment due today"

    second = client.post(
        "/v1/repayments/due-today",
        json={"loan": loan, "existing_repayments": first_data["installments"]},
    )
    assert second.status_code == 200
    assert second.json() == {"created": False, "installments": []}


def test_portfolio_endpoint(client: TestClient, as_of):
    response = client.post(
        "/v1/reports/portfolio",
        json={
            "loans": [
                {"principal": 10000, "interest_rate": 12, "term_months": 12, "start_date": "2024-01-01"},
                {
                    "principal": 5000,
                    "interest_rate": 10,
                    "term_months": 6,
                    "start_date": "2023-01-01",
                    "status": "completed",
                    "paid_amount": 5250,
                },
            ],
            "repayments": [
                {"amount": 100, "due_date": as_of.isoformat()},
                {"amount": 200, "due_date": (as_of - timedelta(days=3)).isoformat()},
            ],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["as_of"] == as_of.isoformat()
    assert data["total_loans"] == 2
    assert data["active_loans"] == 1
    assert data["completed_loans"] == 1
    assert data["total_principal"] == 15000
    assert data["total_revenue"] == 1450
    assert data["overdue_count"] == 1
    assert data["due_today_count"] == 1
    assert data["due_today_amount"] == 100
