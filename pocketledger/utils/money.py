"""Fixed-point helpers for cent amounts and percentages"""

from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("1")
HUNDREDTH = Decimal("0.01")


def to_decimal(value: float | int | Decimal) -> Decimal:
    """Convert without picking up binary float noise (12.1 -> Decimal('12.1'))"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_cents(value: Decimal) -> int:
    """Round a fractional cent amount half-up to a whole cent"""
    return int(value.quantize(CENT, rounding=ROUND_HALF_UP))


def round_percentage(value: Decimal) -> float:
    """Round a percentage half-up to two decimals"""
    return float(value.quantize(HUNDREDTH, rounding=ROUND_HALF_UP))

