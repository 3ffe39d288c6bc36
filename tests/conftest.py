"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from fastapi.testclient import TestClient
from lending_engine.api.main import create_app
from lending_engine.api.dependencies import get_today
from lending_engine.domain.enums import (
    EmploymentStatus,
    LoanStatus,
    RepaymentFrequency,
    RepaymentStatus,
)
from lending_engine.domain.models import BorrowerProfile, Loan, Repayment


# Every calculation in the suite runs against this day
AS_OF = date(2024, 6, 15)


@pytest.fixture
def as_of() -> date:
    return AS_OF


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client with a frozen calendar date"""
    app = create_app()
    app.dependency_overrides[get_today] = lambda: AS_OF
    return TestClient(app)


@pytest.fixture
def strong_profile() -> BorrowerProfile:
    """Salaried borrower with long tenure"""
    return BorrowerProfile(
        monthly_income=60000,
        employment_status=EmploymentStatus.EMPLOYED,
        employment_years=6,
        years_at_address=4,
        borrower_id="b-1",
        name="Asha Rao",
    )


@pytest.fixture
def seasoned_loan() -> Loan:
    """Active loan opened four years before AS_OF, mostly repaid"""
    return Loan(
        principal=100000,
        interest_rate=12,
        term_months=60,
        start_date=AS_OF - timedelta(days=4 * 365),
        total_due=160000,
        frequency=RepaymentFrequency.MONTHLY,
        status=LoanStatus.ACTIVE,
        paid_amount=130000,
        loan_id="l-1",
        borrower_id="b-1",
    )


@pytest.fixture
def on_time_repayments() -> list[Repayment]:
    """Twenty installments, all paid on their due date"""
    first_due = AS_OF - timedelta(days=20 * 30)
    return [
        Repayment(
            amount=2666.67,
            due_date=first_due + timedelta(days=i * 30),
            payment_date=first_due + timedelta(days=i * 30),
            status=RepaymentStatus.PAID,
            type=RepaymentFrequency.MONTHLY,
            installment_number=i + 1,
            total_installments=60,
            loan_id="l-1",
            borrower_id="b-1",
        )
        for i in range(20)
    ]
