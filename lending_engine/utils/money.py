"""Currency rounding helpers"""

from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")
UNIT = Decimal("1")


def to_decimal(value: float | int | Decimal) -> Decimal:
    """Convert through str so binary float noise is not carried over"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_cents(value: float | int | Decimal) -> float:
    """Round half-up to 2 decimal places"""
    return float(to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP))


def round_units(value: float | int | Decimal) -> int:
    """Round half-up to a whole currency unit"""
    return int(to_decimal(value).quantize(UNIT, rounding=ROUND_HALF_UP))
