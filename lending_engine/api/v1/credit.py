"""POST /v1/credit/assessment - Borrower credit score and suggested rate"""

import time
import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request

from lending_engine.api.v1.schemas import AssessmentRequest, AssessmentResponse
from lending_engine.api.dependencies import get_request_id, get_today
from lending_engine.domain.scoring import assess_borrower
from lending_engine.domain.exceptions import DomainException
from lending_engine.infrastructure.observability.metrics import record_assessment
from lending_engine.infrastructure.observability.logging import log_assessment

router = APIRouter()


@router.post("/credit/assessment", response_model=AssessmentResponse)
def create_assessment(
    request_body: AssessmentRequest,
    request: Request,
    today: date = Depends(get_today),
):
    """
    Score a borrower from profile, loan history and repayment history.

    Flow:
    1. Convert payload into domain records
    2. Score (initial path when there is no history)
    3. Derive category, risk rating and suggested rate
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        assessment = assess_borrower(
            request_body.borrower.to_domain(),
            [loan.to_domain() for loan in request_body.loans],
            [repayment.to_domain() for repayment in request_body.repayments],
            as_of=today,
            base_rate=request_body.base_rate,
        )
    except DomainException as e:
        logging.warning(f"Assessment rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_assessment(assessment.category, assessment.initial)
    log_assessment(request_id, assessment.score, assessment.category, assessment.initial, duration_ms)

    return AssessmentResponse(
        score=assessment.score,
        category=assessment.category,
        description=assessment.description,
        risk_rating=assessment.risk_rating,
        suggested_rate=assessment.suggested_rate,
        initial=assessment.initial,
        sub_scores=assessment.sub_scores,
    )
