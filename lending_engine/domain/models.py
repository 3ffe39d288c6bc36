"""Domain models - pure Python dataclasses representing lending entities"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Optional

from lending_engine.domain.enums import (
    EmploymentStatus,
    LoanStatus,
    RepaymentFrequency,
    RepaymentStatus,
    RiskRating,
)
from lending_engine.utils.money import round_cents


@dataclass(frozen=True)
class BorrowerProfile:
    """Borrower attributes read by the scoring engine.

    Every numeric field is optional; a missing (or zero) value applies no
    bonus or penalty.
    """

    monthly_income: Optional[float] = None
    employment_status: Optional[EmploymentStatus] = None
    employment_years: Optional[float] = None
    years_at_address: Optional[float] = None
    borrower_id: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class Loan:
    """Loan terms plus repayment progress"""

    principal: float
    interest_rate: float  # annual percentage
    term_months: int
    start_date: date
    total_due: float
    frequency: RepaymentFrequency = RepaymentFrequency.MONTHLY
    status: LoanStatus = LoanStatus.ACTIVE
    paid_amount: float = 0.0
    end_date: Optional[date] = None
    created_at: Optional[date] = None
    loan_id: Optional[str] = None
    borrower_id: Optional[str] = None

    @property
    def remaining_amount(self) -> float:
        """Outstanding balance, never negative"""
        return max(0.0, round_cents(self.total_due - self.paid_amount))

    @property
    def opened_on(self) -> date:
        """Date the loan history counts from"""
        return self.start_date or self.created_at


@dataclass(frozen=True)
class Repayment:
    """Single installment of a loan"""

    amount: float
    due_date: date
    type: RepaymentFrequency
    status: RepaymentStatus = RepaymentStatus.PENDING
    payment_date: Optional[date] = None
    installment_number: int = 1
    total_installments: int = 1
    loan_id: Optional[str] = None
    borrower_id: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class ScoreCategory:
    """Human readable band for a credit score"""

    category: str
    description: str


@dataclass
class CreditAssessment:
    """Output of a borrower credit assessment"""

    score: int
    category: str
    description: str
    risk_rating: RiskRating
    suggested_rate: float
    initial: bool = False
    sub_scores: Dict[str, float] = field(default_factory=dict)


@dataclass
class PortfolioSummary:
    """Aggregate figures for a set of loans and repayments"""

    total_loans: int
    active_loans: int
    completed_loans: int
    defaulted_loans: int
    total_principal: float
    total_revenue: float
    total_collected: float
    overdue_count: int
    due_today_count: int
    due_today_amount: float
