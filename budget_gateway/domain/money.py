"""Currency helpers - all money is Decimal with exactly 2 fractional digits"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value) -> Decimal:
    """Coerce str/int/float/Decimal to a 2-place Decimal"""
    if isinstance(value, float):
        value = repr(value)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def total(amounts: Iterable) -> Decimal:
    """Sum amounts, returning 0.00 for an empty iterable"""
    return sum((to_money(a) for a in amounts), ZERO)


def percentage(part: Decimal, whole: Decimal) -> float:
    """part/whole as a percentage rounded half-up to one decimal; 0.0 when whole is 0"""
    if whole == 0:
        return 0.0
    ratio = (Decimal(part) / Decimal(whole)) * 100
    return float(ratio.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
