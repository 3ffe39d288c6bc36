"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from lending_engine.domain.enums import (
    EmploymentStatus,
    LoanStatus,
    RepaymentFrequency,
    RepaymentStatus,
    RiskRating,
)
from lending_engine.domain.models import BorrowerProfile, Loan, Repayment
from lending_engine.domain.installments import compute_total_due


class BorrowerSchema(BaseModel):
    """Borrower attributes used for scoring"""

    borrower_id: Optional[str] = None
    name: Optional[str] = None
    monthly_income: Optional[float] = Field(None, ge=0)
    employment_status: Optional[EmploymentStatus] = None
    employment_years: Optional[float] = Field(None, ge=0)
    years_at_address: Optional[float] = Field(None, ge=0)

    def to_domain(self) -> BorrowerProfile:
        return BorrowerProfile(**self.model_dump())


class LoanSchema(BaseModel):
    """Loan record supplied by the caller"""

    loan_id: Optional[str] = None
    borrower_id: Optional[str] = None
    principal: float = Field(..., ge=0)
    interest_rate: float = Field(..., ge=0, description="Annual interest rate in percent")
    term_months: int = Field(..., ge=0)
    frequency: RepaymentFrequency = RepaymentFrequency.MONTHLY
    start_date: date
    status: LoanStatus = LoanStatus.ACTIVE
    paid_amount: float = Field(0.0, ge=0)
    total_due: Optional[float] = Field(None, ge=0, description="Computed from the terms when omitted")
    created_at: Optional[date] = None

    def to_domain(self) -> Loan:
        data = self.model_dump()
        if data["total_due"] is None:
            data["total_due"] = compute_total_due(self.principal, self.interest_rate, self.term_months)
        return Loan(**data)


class RepaymentSchema(BaseModel):
    """Single installment"""

    loan_id: Optional[str] = None
    borrower_id: Optional[str] = None
    amount: float = Field(..., ge=0)
    due_date: date
    payment_date: Optional[date] = None
    status: RepaymentStatus = RepaymentStatus.PENDING
    type: RepaymentFrequency = RepaymentFrequency.MONTHLY
    installment_number: int = 1
    total_installments: int = 1
    description: Optional[str] = None

    def to_domain(self) -> Repayment:
        return Repayment(**self.model_dump())

    @classmethod
    def from_domain(cls, repayment: Repayment) -> "RepaymentSchema":
        return cls(
            loan_id=repayment.loan_id,
            borrower_id=repayment.borrower_id,
            amount=repayment.amount,
            due_date=repayment.due_date,
            payment_date=repayment.payment_date,
            status=repayment.status,
            type=repayment.type,
            installment_number=repayment.installment_number,
            total_installments=repayment.total_installments,
            description=repayment.description,
        )


class AssessmentRequest(BaseModel):
    """Request body for POST /v1/credit/assessment"""

    borrower: BorrowerSchema
    loans: List[LoanSchema] = Field(default_factory=list)
    repayments: List[RepaymentSchema] = Field(default_factory=list)
    base_rate: Optional[float] = Field(None, ge=0)


class AssessmentResponse(BaseModel):
    """Response for POST /v1/credit/assessment"""

    score: int
    category: str
    description: str
    risk_rating: RiskRating
    suggested_rate: float
    initial: bool
    sub_scores: Dict[str, float]


class ScheduleRequest(BaseModel):
    """Request body for POST /v1/loans/schedule"""

    loan_id: Optional[str] = None
    borrower_id: Optional[str] = None
    principal: float = Field(..., ge=0)
    interest_rate: float = Field(..., ge=0)
    term_months: int = Field(..., gt=0)
    frequency: RepaymentFrequency = RepaymentFrequency.MONTHLY
    start_date: date


class ScheduleResponse(BaseModel):
    """Response for POST /v1/loans/schedule"""

    loan_id: Optional[str] = None
    total_due: float
    end_date: date
    installments: List[RepaymentSchema]


class DueTodayRequest(BaseModel):
    """Request body for POST /v1/repayments/due-today"""

    loan: LoanSchema
    borrower: Optional[BorrowerSchema] = None
    existing_repayments: List[RepaymentSchema] = Field(default_factory=list)


class DueTodayResponse(BaseModel):
    """Response for POST /v1/repayments/due-today"""

    created: bool
    installments: List[RepaymentSchema]


class PortfolioRequest(BaseModel):
    """Request body for POST /v1/reports/portfolio"""

    loans: List[LoanSchema] = Field(default_factory=list)
    repayments: List[RepaymentSchema] = Field(default_factory=list)


class PortfolioResponse(BaseModel):
    """Response for POST /v1/reports/portfolio"""

    as_of: date
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
