"""Repayment schedule generation for loan installments"""

import logging
import math
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Set

from lending_engine.domain.enums import LoanStatus, RepaymentFrequency, RepaymentStatus
from lending_engine.domain.models import BorrowerProfile, Loan, Repayment
from lending_engine.utils.date_utils import add_months
from lending_engine.utils.money import round_cents, round_units, to_decimal

logger = logging.getLogger(__name__)

# Nominal installments per month of term
INSTALLMENTS_PER_MONTH = {
    RepaymentFrequency.DAILY: 30,
    RepaymentFrequency.WEEKLY: 4,
    RepaymentFrequency.MONTHLY: 1,
}


def compute_total_due(principal: float, annual_rate_percent: float, term_months: int) -> float:
    """
    Principal plus simple interest over the term, rounded to cents.

    Example:
        10000 at 12% for 12 months -> 10000 + 10000 * 0.12 * 1 = 11200
    """
    p = to_decimal(principal)
    interest = p * to_decimal(annual_rate_percent) / 100 * to_decimal(term_months) / 12
    return round_cents(p + interest)


def number_of_installments(term_months: int, frequency: RepaymentFrequency) -> int:
    """Installment count for a term: 30 per month daily, 4 per month weekly, 1 per month monthly"""
    if frequency == RepaymentFrequency.MONTHLY:
        return int(term_months)
    return math.ceil(term_months * INSTALLMENTS_PER_MONTH[frequency])


def next_due_date(current: date, frequency: RepaymentFrequency, steps: int = 1) -> date:
    """Advance a date by one or more repayment periods"""
    if frequency == RepaymentFrequency.DAILY:
        return current + timedelta(days=steps)
    if frequency == RepaymentFrequency.WEEKLY:
        return current + timedelta(days=7 * steps)
    return add_months(current, steps)


def generate_schedule(loan: Loan) -> List[Repayment]:
    """
    Generate the full upfront installment schedule for a loan.

    Requirements:
    - One installment per period over the term
    - First due date one period after the start date
    - Equal amounts of total_due / count rounded to cents; the last
      installment is not adjusted, so the sum may drift by a few cents

    Returns:
        Pending Repayment records ordered by due date
    """
    if loan.term_months <= 0:
        return []

    count = number_of_installments(loan.term_months, loan.frequency)
    if count <= 0:
        return []

    amount = round_cents(to_decimal(loan.total_due) / count)

    installments = []
    for number in range(1, count + 1):
        installments.append(
            Repayment(
                amount=amount,
                due_date=next_due_date(loan.start_date, loan.frequency, number),
                type=loan.frequency,
                status=RepaymentStatus.PENDING,
                installment_number=number,
                total_installments=count,
                loan_id=loan.loan_id,
                borrower_id=loan.borrower_id,
            )
        )

    return installments


def due_today_amount(loan: Loan) -> int:
    """Whole-unit amount of a single on-demand installment"""
    total = to_decimal(compute_total_due(loan.principal, loan.interest_rate, loan.term_months))
    periods = to_decimal(loan.term_months) * INSTALLMENTS_PER_MONTH[loan.frequency]
    return round_units(total / periods)


def has_pending_due_today(loan: Loan, repayments: Iterable[Repayment], today: date) -> bool:
    """True when a pending installment for this loan is already due today.

    Loans without an id cannot be matched to stored installments and never
    count as already due.
    """
    if loan.loan_id is None:
        return False
    return any(
        r.loan_id == loan.loan_id and r.due_date == today and r.status == RepaymentStatus.PENDING
        for r in repayments
    )


def generate_due_today(
    loan: Loan,
    borrower: Optional[BorrowerProfile],
    existing_repayments: Sequence[Repayment],
    today: date,
) -> List[Repayment]:
    """
    Create today's installment for a loan unless one is already pending.

    The amount is total / (term * 30) daily, total / (term * 4) weekly or
    total / term monthly, rounded to a whole unit. This is independent of
    the per-installment split used by generate_schedule.

    Returns:
        Zero or one pending Repayment due today
    """
    if has_pending_due_today(loan, existing_repayments, today):
        logger.info(
            "Installment already pending for today",
            extra={"loan_id": loan.loan_id, "due_date": today.isoformat()},
        )
        return []

    if loan.term_months <= 0:
        return []

    borrower_id = borrower.borrower_id if borrower is not None else loan.borrower_id
    return [
        Repayment(
            amount=due_today_amount(loan),
            due_date=today,
            type=loan.frequency,
            status=RepaymentStatus.PENDING,
            installment_number=1,
            total_installments=loan.term_months,
            loan_id=loan.loan_id,
            borrower_id=borrower_id,
            description=f"{loan.frequency.value} installment due today",
        )
    ]


def generate_due_today_for_loans(
    loans: Sequence[Loan],
    borrowers: Dict[str, BorrowerProfile],
    existing_repayments: Sequence[Repayment],
    today: date,
) -> List[Repayment]:
    """Generate today's installments for every active loan, one per loan at most"""
    seen = list(existing_repayments)
    created: List[Repayment] = []
    # Loans handled in this run, by object identity so loans without ids stay distinct
    handled: Set[int] = set()

    for loan in loans:
        if loan.status != LoanStatus.ACTIVE or id(loan) in handled:
            continue
        handled.add(id(loan))
        borrower = borrowers.get(loan.borrower_id) if loan.borrower_id else None
        new_repayments = generate_due_today(loan, borrower, seen, today)
        seen.extend(new_repayments)
        created.extend(new_repayments)

    return created
