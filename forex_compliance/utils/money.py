"""Money / rounding helpers"""

from decimal import Decimal, ROUND_HALF_UP

TWO_PLACES = Decimal("0.01")


def to_decimal(value) -> Decimal:
    """Coerce int/float/str/Decimal to Decimal without binary float noise"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round2(value) -> Decimal:
    return to_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
