"""Installment split for bills that represent one part of a larger obligation"""

from decimal import Decimal
from typing import List, Optional

from budget_gateway.domain.exceptions import InvalidInputError
from budget_gateway.domain.money import CENT, to_money


def split_installments(original_amount: Decimal, total_installments: int) -> List[Decimal]:
    """
    Split an obligation into equal monthly installments.

    Last installment absorbs the rounding remainder so the parts add up exactly.

    Example:
        1000.03 over 4 -> [250.00, 250.00, 250.00, 250.03]
    """
    if total_installments < 1:
        raise InvalidInputError("total_installments must be at least 1")

    cents = int(to_money(original_amount) / CENT)
    base = cents // total_installments
    remainder = cents % total_installments

    parts = []
    for i in range(total_installments):
        amount_cents = base + (remainder if i == total_installments - 1 else 0)
        parts.append(to_money(Decimal(amount_cents) * CENT))
    return parts


def validate_installment_counters(total_installments: Optional[int], current_installment: Optional[int]) -> None:
    """1 <= current <= total"""
    if total_installments is None or current_installment is None:
        raise InvalidInputError("Installment bills need total_installments and current_installment")
    if total_installments < 1:
        raise InvalidInputError("total_installments must be at least 1")
    if not 1 <= current_installment <= total_installments:
        raise InvalidInputError(
            f"current_installment must be between 1 and {total_installments}, got {current_installment}"
        )


def installment_amount(original_amount: Decimal, total_installments: int, current_installment: int) -> Decimal:
    """Amount due for the given 1-based installment"""
    validate_installment_counters(total_installments, current_installment)
    return split_installments(original_amount, total_installments)[current_installment - 1]
