"""POST /v1/repayments/due-today - On-demand installment for today"""

from datetime import date
from fastapi import APIRouter, Depends

from lending_engine.api.v1.schemas import DueTodayRequest, DueTodayResponse, RepaymentSchema
from lending_engine.api.dependencies import get_today
from lending_engine.domain.installments import generate_due_today
from lending_engine.infrastructure.observability.metrics import record_due_today

router = APIRouter()


@router.post("/repayments/due-today", response_model=DueTodayResponse)
def create_due_today(request_body: DueTodayRequest, today: date = Depends(get_today)):
    """
    Build today's installment for a loan.

    Returns an empty list when a pending installment is already due today.
    Persisting the result is the caller's job.
    """
    borrower = request_body.borrower.to_domain() if request_body.borrower else None
    created = generate_due_today(
        request_body.loan.to_domain(),
        borrower,
        [r.to_domain() for r in request_body.existing_repayments],
        today,
    )
    record_due_today(bool(created))

    return DueTodayResponse(
        created=bool(created),
        installments=[RepaymentSchema.from_domain(r) for r in created],
    )
