"""Portfolio aggregates for dashboards and reports"""

from datetime import date
from typing import List, Sequence

from lending_engine.domain.enums import LoanStatus, RepaymentStatus
from lending_engine.domain.loans import evaluate_status
from lending_engine.domain.models import Loan, PortfolioSummary, Repayment
from lending_engine.utils.money import round_cents


def due_today(repayments: Sequence[Repayment], today: date) -> List[Repayment]:
    """Pending installments due on the given day"""
    return sorted(
        (r for r in repayments if r.status == RepaymentStatus.PENDING and r.due_date == today),
        key=lambda r: r.due_date,
    )


def overdue(repayments: Sequence[Repayment], today: date) -> List[Repayment]:
    """Installments that evaluate as overdue on the given day, oldest first"""
    return sorted(
        (r for r in repayments if evaluate_status(r, today) == RepaymentStatus.OVERDUE),
        key=lambda r: r.due_date,
    )


def portfolio_summary(
    loans: Sequence[Loan],
    repayments: Sequence[Repayment],
    as_of: date,
) -> PortfolioSummary:
    """
    Summarize a loan book.

    Revenue is the simple interest booked on every loan (total_due -
    principal). Collected is the sum of paid installments.
    """
    todays = due_today(repayments, as_of)

    return PortfolioSummary(
        total_loans=len(loans),
        active_loans=sum(1 for loan in loans if loan.status == LoanStatus.ACTIVE),
        completed_loans=sum(1 for loan in loans if loan.status == LoanStatus.COMPLETED),
        defaulted_loans=sum(1 for loan in loans if loan.status == LoanStatus.DEFAULTED),
        total_principal=round_cents(sum(loan.principal for loan in loans)),
        total_revenue=round_cents(sum(loan.total_due - loan.principal for loan in loans)),
        total_collected=round_cents(
            sum(r.amount for r in repayments if evaluate_status(r, as_of) == RepaymentStatus.PAID)
        ),
        overdue_count=len(overdue(repayments, as_of)),
        due_today_count=len(todays),
        due_today_amount=round_cents(sum(r.amount for r in todays)),
    )
