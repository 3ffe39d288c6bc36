"""Loan ledger - creation, payment application and installment status"""

import logging
from dataclasses import replace
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from lending_engine.domain.enums import LoanStatus, RepaymentFrequency, RepaymentStatus
from lending_engine.domain.installments import compute_total_due
from lending_engine.domain.exceptions import (
    InvalidLoanTermsError,
    InvalidPaymentError,
    InvalidStatusTransitionError,
)
from lending_engine.domain.models import Loan, Repayment
from lending_engine.utils.date_utils import add_months
from lending_engine.utils.money import round_cents

logger = logging.getLogger(__name__)


def create_loan(
    principal: float,
    interest_rate: float,
    term_months: int,
    start_date: date,
    frequency: RepaymentFrequency = RepaymentFrequency.MONTHLY,
    loan_id: Optional[str] = None,
    borrower_id: Optional[str] = None,
) -> Loan:
    """
    Build a new active loan with its simple-interest total and end date.

    Raises:
        InvalidLoanTermsError: Negative principal or rate, or a term under one month
    """
    if principal < 0:
        raise InvalidLoanTermsError("Principal cannot be negative")
    if interest_rate < 0:
        raise InvalidLoanTermsError("Interest rate cannot be negative")
    if term_months <= 0:
        raise InvalidLoanTermsError("Loan term must be at least one month")

    return Loan(
        principal=principal,
        interest_rate=interest_rate,
        term_months=term_months,
        start_date=start_date,
        total_due=compute_total_due(principal, interest_rate, term_months),
        frequency=frequency,
        status=LoanStatus.ACTIVE,
        paid_amount=0.0,
        end_date=add_months(start_date, term_months),
        created_at=start_date,
        loan_id=loan_id,
        borrower_id=borrower_id,
    )


def apply_payment(loan: Loan, amount: float) -> Loan:
    """
    Add a payment to the loan's paid amount.

    An active loan with nothing left to pay becomes completed. Completed
    loans are never reopened.

    Raises:
        InvalidPaymentError: Amount is zero or negative
    """
    if amount <= 0:
        raise InvalidPaymentError(f"Payment amount must be positive, got {amount}")

    updated = replace(loan, paid_amount=round_cents(loan.paid_amount + amount))
    if updated.remaining_amount <= 0 and updated.status == LoanStatus.ACTIVE:
        updated = replace(updated, status=LoanStatus.COMPLETED)
    return updated


def evaluate_status(repayment: Repayment, as_of: date) -> RepaymentStatus:
    """
    Effective status of an installment on a given day.

    A pending installment with a payment date counts as paid; one past its
    due date without a payment counts as overdue. Stored status is left to
    the caller.
    """
    if repayment.status != RepaymentStatus.PENDING:
        return repayment.status
    if repayment.payment_date is not None:
        return RepaymentStatus.PAID
    if repayment.due_date < as_of:
        return RepaymentStatus.OVERDUE
    return RepaymentStatus.PENDING


def mark_paid(repayment: Repayment, payment_date: date) -> Repayment:
    """
    Move a pending or overdue installment to paid.

    Raises:
        InvalidStatusTransitionError: Installment is already paid or cancelled
    """
    if repayment.status in (RepaymentStatus.PAID, RepaymentStatus.CANCELLED):
        raise InvalidStatusTransitionError(
            f"Cannot mark a {repayment.status.value} installment as paid"
        )
    return replace(repayment, status=RepaymentStatus.PAID, payment_date=payment_date)


def record_installment_payment(
    loan: Loan,
    repayment: Repayment,
    payment_date: date,
) -> Tuple[Loan, Repayment]:
    """Mark an installment paid and credit its amount to the loan"""
    paid = mark_paid(repayment, payment_date)
    return apply_payment(loan, paid.amount), paid


def record_installment_payments(
    loans_by_id: Dict[str, Loan],
    repayments: Sequence[Repayment],
    payment_date: date,
) -> Tuple[Dict[str, Loan], List[Repayment]]:
    """
    Mark several installments paid and credit each amount to its loan.

    Installments are checked before anything is applied, so one paid or
    cancelled entry rejects the whole batch. An installment whose loan is not
    in loans_by_id is still marked paid; no loan is credited for it.

    Returns:
        Updated copy of loans_by_id and the paid installments in input order

    Raises:
        InvalidStatusTransitionError: An installment is already paid or cancelled
    """
    paid = [mark_paid(repayment, payment_date) for repayment in repayments]

    loans = dict(loans_by_id)
    for installment in paid:
        loan = loans.get(installment.loan_id) if installment.loan_id is not None else None
        if loan is None:
            logger.warning(
                "Paid installment has no matching loan",
                extra={"loan_id": installment.loan_id, "due_date": installment.due_date.isoformat()},
            )
            continue
        loans[installment.loan_id] = apply_payment(loan, installment.amount)

    return loans, paid


def record_manual_repayment(loan: Loan, amount: float, payment_date: date) -> Tuple[Loan, Repayment]:
    """
    Record an off-schedule payment against a loan.

    The payment is stored as a paid installment due on the payment date.

    Raises:
        InvalidPaymentError: Amount is zero or negative
    """
    updated = apply_payment(loan, amount)
    repayment = Repayment(
        amount=round_cents(amount),
        due_date=payment_date,
        type=loan.frequency,
        status=RepaymentStatus.PAID,
        payment_date=payment_date,
        loan_id=loan.loan_id,
        borrower_id=loan.borrower_id,
        description="manual repayment",
    )
    return updated, repayment
