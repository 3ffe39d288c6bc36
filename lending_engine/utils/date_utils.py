"""Date manipulation utilities"""

from datetime import date

from dateutil.relativedelta import relativedelta

AVERAGE_DAYS_PER_MONTH = 30.44


def add_months(from_date: date, months: int) -> date:
    """Add calendar months, clamping to the last day of shorter months"""
    return from_date + relativedelta(months=months)


def months_between(start: date, end: date) -> float:
    """Elapsed months between two dates using an average month length"""
    return (end - start).days / AVERAGE_DAYS_PER_MONTH
