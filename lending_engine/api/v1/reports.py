"""POST /v1/reports/portfolio - Loan book summary"""

from datetime import date
from fastapi import APIRouter, Depends

from lending_engine.api.v1.schemas import PortfolioRequest, PortfolioResponse
from lending_engine.api.dependencies import get_today
from lending_engine.domain.reports import portfolio_summary

router = APIRouter()


@router.post("/reports/portfolio", response_model=PortfolioResponse)
def get_portfolio_summary(request_body: PortfolioRequest, today: date = Depends(get_today)):
    summary = portfolio_summary(
        [loan.to_domain() for loan in request_body.loans],
        [r.to_domain() for r in request_body.repayments],
        today,
    )
    return PortfolioResponse(as_of=today, **vars(summary))
