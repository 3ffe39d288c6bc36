"""Credit scoring engine - borrower score, risk band and interest rate"""

from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from lending_engine.config import settings
from lending_engine.domain.enums import (
    EmploymentStatus,
    LoanStatus,
    RepaymentStatus,
    RiskRating,
)
from lending_engine.domain.loans import evaluate_status
from lending_engine.domain.models import (
    BorrowerProfile,
    CreditAssessment,
    Loan,
    Repayment,
    ScoreCategory,
)
from lending_engine.utils.date_utils import add_months, months_between
from lending_engine.utils.money import round_units

MIN_SCORE = 300
MAX_SCORE = 850
NEUTRAL_SCORE = 650

NEW_BORROWER_MIN = 550
NEW_BORROWER_MAX = 750

# (name, weight) in blend order
SCORE_WEIGHTS: Tuple[Tuple[str, float], ...] = (
    ("payment", 0.40),
    ("debt", 0.25),
    ("history", 0.15),
    ("recent_activity", 0.10),
    ("profile", 0.10),
)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def calculate_initial_score(profile: BorrowerProfile) -> int:
    """
    Score a borrower with no loan or repayment history.

    Starts from 650 and adjusts for income, employment stability, employment
    status and residence stability. Ten or more employment years earn a
    further +10 on top of the employment-years tier. Result is limited to
    550-750 so a thin file never lands at the extremes.
    """
    score = NEUTRAL_SCORE

    if profile.monthly_income:
        income = float(profile.monthly_income)
        if income >= 50_000:
            score += 40
        elif income >= 30_000:
            score += 20
        elif income >= 15_000:
            score += 10
        elif income < 10_000:
            score -= 20

    if profile.employment_years:
        years = float(profile.employment_years)
        if years >= 5:
            score += 30
        elif years >= 3:
            score += 15
        elif years >= 1:
            score += 5
        elif years < 0.5:
            score -= 15

    if profile.employment_status == EmploymentStatus.EMPLOYED:
        score += 20
    elif profile.employment_status == EmploymentStatus.SELF_EMPLOYED:
        score += 10
    elif profile.employment_status == EmploymentStatus.UNEMPLOYED:
        score -= 30

    if profile.years_at_address:
        years_at_address = float(profile.years_at_address)
        if years_at_address >= 5:
            score += 15
        elif years_at_address >= 2:
            score += 8
        elif years_at_address < 1:
            score -= 10

    if profile.employment_years and profile.employment_years >= 10:
        score += 10

    return int(_clamp(score, NEW_BORROWER_MIN, NEW_BORROWER_MAX))


def calculate_payment_score(repayments: Sequence[Repayment], as_of: date) -> int:
    """
    Payment history component (40%).

    On-time: paid on or before the due date. Late: paid after it.
    Missed: overdue, including pending installments already past due.
    """
    if not repayments:
        return NEUTRAL_SCORE

    total = len(repayments)
    on_time = 0
    missed = 0
    for repayment in repayments:
        status = evaluate_status(repayment, as_of)
        if status == RepaymentStatus.PAID:
            if repayment.payment_date is not None and repayment.payment_date <= repayment.due_date:
                on_time += 1
        elif status == RepaymentStatus.OVERDUE:
            missed += 1

    on_time_ratio = on_time / total
    missed_ratio = missed / total

    if on_time_ratio >= 0.95 and missed_ratio == 0:
        return 800
    if on_time_ratio >= 0.90 and missed_ratio <= 0.05:
        return 750
    if on_time_ratio >= 0.80 and missed_ratio <= 0.10:
        return 680
    if on_time_ratio >= 0.70 and missed_ratio <= 0.15:
        return 620
    return 550


def calculate_debt_to_income(profile: BorrowerProfile, loans: Sequence[Loan]) -> float:
    """Estimated monthly debt as a percentage of monthly income (0 when income unknown)"""
    if not profile.monthly_income or profile.monthly_income <= 0:
        return 0.0
    outstanding = sum(loan.remaining_amount for loan in loans if loan.status == LoanStatus.ACTIVE)
    estimated_monthly_debt = outstanding / 12
    return estimated_monthly_debt / float(profile.monthly_income) * 100


def calculate_debt_score(profile: BorrowerProfile, loans: Sequence[Loan]) -> int:
    """Current debt load component (25%), limited to 300-800"""
    dti = calculate_debt_to_income(profile, loans)
    active_count = sum(1 for loan in loans if loan.status == LoanStatus.ACTIVE)

    score = NEUTRAL_SCORE
    if dti <= 20:
        score += 50
    elif dti <= 35:
        score += 25
    elif dti <= 50:
        score -= 20
    elif dti <= 65:
        score -= 50
    else:
        score -= 80

    if active_count == 0:
        score += 20
    elif active_count == 1:
        score += 10
    elif active_count >= 3:
        score -= (active_count - 2) * 15

    return int(_clamp(score, MIN_SCORE, 800))


def calculate_history_score(loans: Sequence[Loan], as_of: date) -> int:
    """Credit history length component (15%)"""
    opened = [loan.opened_on for loan in loans if loan.opened_on is not None]
    if not opened:
        return 600

    history_months = months_between(min(opened), as_of)
    if history_months >= 60:
        return 750
    if history_months >= 36:
        return 700
    if history_months >= 24:
        return 670
    if history_months >= 12:
        return 630
    return 580


def calculate_recent_activity_score(loans: Sequence[Loan], as_of: date) -> int:
    """Recent credit activity component (10%): loans opened in the last 3 months"""
    window_start = add_months(as_of, -3)
    recent = sum(1 for loan in loans if loan.opened_on is not None and loan.opened_on >= window_start)

    if recent == 0:
        return 700
    if recent == 1:
        return 680
    if recent == 2:
        return 650
    return 600


def calculate_profile_score(profile: BorrowerProfile) -> int:
    """Borrower profile strength component (10%)"""
    score = NEUTRAL_SCORE

    if profile.employment_status == EmploymentStatus.EMPLOYED:
        score += 30
    elif profile.employment_status == EmploymentStatus.SELF_EMPLOYED:
        score += 15
    elif profile.employment_status == EmploymentStatus.UNEMPLOYED:
        score -= 30

    if profile.monthly_income:
        income = float(profile.monthly_income)
        if income > 50_000:
            score += 25
        elif income > 25_000:
            score += 15
        elif income > 10_000:
            score += 5

    if profile.years_at_address:
        years = float(profile.years_at_address)
        if years >= 5:
            score += 20
        elif years >= 2:
            score += 10
        elif years < 1:
            score -= 10

    return score


def calculate_sub_scores(
    profile: BorrowerProfile,
    loans: Sequence[Loan],
    repayments: Sequence[Repayment],
    as_of: date,
) -> Dict[str, int]:
    """Compute the five weighted components keyed by name"""
    return {
        "payment": calculate_payment_score(repayments, as_of),
        "debt": calculate_debt_score(profile, loans),
        "history": calculate_history_score(loans, as_of),
        "recent_activity": calculate_recent_activity_score(loans, as_of),
        "profile": calculate_profile_score(profile),
    }


def blend_sub_scores(sub_scores: Dict[str, int]) -> int:
    """Weighted blend around 650, limited to 300-850 and rounded half-up"""
    score = float(NEUTRAL_SCORE)
    for name, weight in SCORE_WEIGHTS:
        score += (sub_scores[name] - NEUTRAL_SCORE) * weight
    return round_units(_clamp(score, MIN_SCORE, MAX_SCORE))


def compute_credit_score(
    profile: BorrowerProfile,
    loan_history: Sequence[Loan],
    repayment_history: Sequence[Repayment],
    as_of: date,
) -> int:
    """
    Main scoring entry point.

    Borrowers without any loan or repayment history get the initial score;
    everyone else gets the weighted blend of payment, debt, history, recent
    activity and profile components.
    """
    if not loan_history and not repayment_history:
        return calculate_initial_score(profile)

    sub_scores = calculate_sub_scores(profile, loan_history, repayment_history, as_of)
    return blend_sub_scores(sub_scores)


def suggest_interest_rate(score: int, base_rate: Optional[float] = None) -> float:
    """
    Map a credit score to an annual interest rate around the base rate.

    - 750+:    base - 3
    - 650-749: base - 1
    - 550-649: base + 2
    - <550:    base + 5
    """
    if base_rate is None:
        base_rate = settings.base_interest_rate

    if score >= 750:
        return base_rate - 3
    elif score >= 650:
        return base_rate - 1
    elif score >= 550:
        return base_rate + 2
    else:
        return base_rate + 5


def classify_score(score: int) -> ScoreCategory:
    """Map a credit score to its category and risk description"""
    if score >= 750:
        return ScoreCategory(category="Excellent", description="Very low risk borrower")
    elif score >= 650:
        return ScoreCategory(category="Good", description="Low risk borrower")
    elif score >= 550:
        return ScoreCategory(category="Fair", description="Medium risk borrower")
    else:
        return ScoreCategory(category="Poor", description="High risk borrower")


def derive_risk_rating(score: int) -> RiskRating:
    """Risk rating stored on the borrower record"""
    if score >= 700:
        return RiskRating.LOW
    elif score >= 550:
        return RiskRating.MEDIUM
    else:
        return RiskRating.HIGH


def borrower_history(
    borrower_id: str,
    loans: Sequence[Loan],
    repayments: Sequence[Repayment],
) -> Tuple[List[Loan], List[Repayment]]:
    """Select a borrower's loans and the repayments belonging to those loans"""
    borrower_loans = [loan for loan in loans if loan.borrower_id == borrower_id]
    loan_ids = {loan.loan_id for loan in borrower_loans}
    borrower_repayments = [r for r in repayments if r.loan_id is not None and r.loan_id in loan_ids]
    return borrower_loans, borrower_repayments


def assess_borrower(
    profile: BorrowerProfile,
    loans: Sequence[Loan],
    repayments: Sequence[Repayment],
    as_of: date,
    base_rate: Optional[float] = None,
) -> CreditAssessment:
    """
    Score a borrower and derive everything that hangs off the score.

    Returns complete CreditAssessment with score, category, risk rating,
    suggested rate and the component scores that produced it.
    """
    initial = not loans and not repayments
    if initial:
        sub_scores: Dict[str, float] = {}
        score = calculate_initial_score(profile)
    else:
        sub_scores = calculate_sub_scores(profile, loans, repayments, as_of)
        score = blend_sub_scores(sub_scores)

    category = classify_score(score)
    return CreditAssessment(
        score=score,
        category=category.category,
        description=category.description,
        risk_rating=derive_risk_rating(score),
        suggested_rate=suggest_interest_rate(score, base_rate),
        initial=initial,
        sub_scores=sub_scores,
    )
