"""POST /v1/loans/schedule - Loan quote with full repayment schedule"""

import logging
from fastapi import APIRouter, HTTPException, Request

from lending_engine.api.v1.schemas import RepaymentSchema, ScheduleRequest, ScheduleResponse
from lending_engine.api.dependencies import get_request_id
from lending_engine.domain.loans import create_loan
from lending_engine.domain.installments import generate_schedule
from lending_engine.domain.exceptions import DomainException
from lending_engine.infrastructure.observability.metrics import record_schedule
from lending_engine.infrastructure.observability.logging import log_schedule

router = APIRouter()


@router.post("/loans/schedule", response_model=ScheduleResponse)
def create_schedule(request_body: ScheduleRequest, request: Request):
    """
    Price a loan and lay out its installments.

    Returns:
        Total due, end date and one pending installment per period
    """
    request_id = get_request_id(request)

    try:
        loan = create_loan(
            principal=request_body.principal,
            interest_rate=request_body.interest_rate,
            term_months=request_body.term_months,
            start_date=request_body.start_date,
            frequency=request_body.frequency,
            loan_id=request_body.loan_id,
            borrower_id=request_body.borrower_id,
        )
        installments = generate_schedule(loan)
    except DomainException as e:
        logging.warning(f"Schedule rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_schedule(loan.frequency.value, len(installments))
    log_schedule(request_id, loan.loan_id, loan.frequency.value, len(installments), loan.total_due)

    return ScheduleResponse(
        loan_id=loan.loan_id,
        total_due=loan.total_due,
        end_date=loan.end_date,
        installments=[RepaymentSchema.from_domain(inst) for inst in installments],
    )
