"""Bill lifecycle rules - paid/unpaid state machine and display status

A bill is either Pending (is_paid=False, no payment metadata) or Paid
(is_paid=True, payment_date and payment_method set). These helpers only
compute field changes; persisting them is the caller's job.
"""

from datetime import date
from typing import Any, Dict, Optional

from budget_gateway.domain.exceptions import InvalidInputError
from budget_gateway.domain.models import BillStatus, BillStatusInfo

PAYMENT_FIELDS = ("payment_date", "payment_method", "payment_source")


def validate_day_of_month(day: int, field_name: str = "due_day") -> int:
    """Reject days outside 1-31"""
    if day is None or not 1 <= day <= 31:
        raise InvalidInputError(f"{field_name} must be between 1 and 31, got {day}")
    return day


def payment_fields(
    payment_date: Optional[date],
    payment_method: Optional[str],
    payment_source: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Field changes for the Pending -> Paid transition.

    Raises:
        InvalidInputError: payment_date or payment_method missing
    """
    if payment_date is None:
        raise InvalidInputError("payment_date is required to mark a bill as paid")
    if payment_method is None or not payment_method.strip():
        raise InvalidInputError("payment_method is required to mark a bill as paid")

    return {
        "is_paid": True,
        "payment_date": payment_date,
        "payment_method": payment_method.strip(),
        "payment_source": payment_source.strip() if payment_source and payment_source.strip() else None,
    }


def cleared_payment_fields() -> Dict[str, Any]:
    """Field changes for Paid -> Pending. Unconditional, even if nothing was set."""
    return {"is_paid": False, "payment_date": None, "payment_method": None, "payment_source": None}


def resolve_payment_changes(currently_paid: bool, changes: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalize a partial update so the payment invariants still hold afterwards.

    - is_paid=True routes through payment_fields (date and method must be in the update)
    - is_paid=False clears all payment metadata
    - without is_paid, payment metadata may only be edited on a paid bill
    """
    resolved = dict(changes)

    if "is_paid" in resolved:
        if resolved["is_paid"]:
            resolved.update(
                payment_fields(
                    resolved.get("payment_date"),
                    resolved.get("payment_method"),
                    resolved.get("payment_source"),
                )
            )
        else:
            resolved.update(cleared_payment_fields())
        return resolved

    touched = [f for f in PAYMENT_FIELDS if f in resolved]
    if not touched:
        return resolved

    if not currently_paid:
        if any(resolved[f] is not None for f in touched):
            raise InvalidInputError("Payment details can only be set on a paid bill")
        return resolved

    for required in ("payment_date", "payment_method"):
        if required in resolved and resolved[required] is None:
            raise InvalidInputError(f"{required} cannot be cleared on a paid bill; mark it unpaid instead")
    return resolved


def derive_status(due_day: int, is_paid: bool, today: date, due_soon_days: int = 3) -> BillStatusInfo:
    """
    Display status relative to the caller's current date.

    Never stored: recomputed on every read.
    """
    days_until_due = due_day - today.day

    if is_paid:
        return BillStatusInfo(BillStatus.PAID, days_until_due)
    if days_until_due < 0:
        return BillStatusInfo(BillStatus.OVERDUE, days_until_due, days_overdue=-days_until_due)
    if days_until_due == 0:
        return BillStatusInfo(BillStatus.DUE_TODAY, 0)
    if days_until_due <= due_soon_days:
        return BillStatusInfo(BillStatus.DUE_SOON, days_until_due)
    return BillStatusInfo(BillStatus.SCHEDULED, days_until_due)


def field_diff(before: Dict[str, Any], after: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """{field: {"from": old, "to": new}} for every field whose value changed"""
    return {
        key: {"from": before.get(key), "to": value}
        for key, value in after.items()
        if before.get(key) != value
    }
