"""Unit tests for the bill state machine and status derivation"""

import pytest
from datetime import date
from budget_gateway.domain.billing import (
    cleared_payment_fields,
    derive_status,
    field_diff,
    payment_fields,
    resolve_payment_changes,
    validate_day_of_month,
)
from budget_gateway.domain.exceptions import InvalidInputError
from budget_gateway.domain.models import BillStatus


def test_payment_fields_require_date_and_method():
    with pytest.raises(InvalidInputError):
        payment_fields(None, "pix")
    with pytest.raises(InvalidInputError):
        payment_fields(date(2024, 3, 10), None)
    with pytest.raises(InvalidInputError):
        payment_fields(date(2024, 3, 10), "   ")


def test_payment_fields_strip_values():
    fields = payment_fields(date(2024, 3, 10), " pix ", " Nubank ")

    assert fields == {
        "is_paid": True,
        "payment_date": date(2024, 3, 10),
        "payment_method": "pix",
        "payment_source": "Nubank",
    }


def test_cleared_payment_fields():
    assert cleared_payment_fields() == {
        "is_paid": False,
        "payment_date": None,
        "payment_method": None,
        "payment_source": None,
    }


def test_resolve_mark_paid_without_method_rejected():
    with pytest.raises(InvalidInputError):
        resolve_payment_changes(False, {"is_paid": True, "payment_date": date(2024, 3, 10)})


def test_resolve_mark_unpaid_clears_payment():
    resolved = resolve_payment_changes(True, {"is_paid": False, "payment_method": "pix"})
    assert resolved["payment_method"] is None
    assert resolved["payment_date"] is None


def test_resolve_payment_details_on_unpaid_bill_rejected():
    with pytest.raises(InvalidInputError):
        resolve_payment_changes(False, {"payment_method": "pix"})


def test_resolve_edit_payment_method_on_paid_bill():
    assert resolve_payment_changes(True, {"payment_method": "debit"}) == {"payment_method": "debit"}


def test_resolve_clearing_date_on_paid_bill_rejected():
    with pytest.raises(InvalidInputError):
        resolve_payment_changes(True, {"payment_date": None})


def test_resolve_unrelated_changes_untouched():
    assert resolve_payment_changes(False, {"amount": 10}) == {"amount": 10}


@pytest.mark.parametrize(
    "due_day,is_paid,status,days_until_due",
    [
        (5, True, BillStatus.PAID, -5),
        (5, False, BillStatus.OVERDUE, -5),
        (10, False, BillStatus.DUE_TODAY, 0),
        (13, False, BillStatus.DUE_SOON, 3),
        (14, False, BillStatus.SCHEDULED, 4),
    ],
)
def test_derive_status(due_day, is_paid, status, days_until_due):
    info = derive_status(due_day, is_paid, date(2024, 3, 10))

    assert info.status == status
    assert info.days_until_due == days_until_due


def test_derive_status_days_overdue():
    assert derive_status(5, False, date(2024, 3, 10)).days_overdue == 5


@pytest.mark.parametrize("day", [None, 0, 32])
def test_validate_day_of_month_rejects(day):
    with pytest.raises(InvalidInputError):
        validate_day_of_month(day)


def test_field_diff_only_changed_fields():
    diff = field_diff({"amount": 100, "name": "Rent"}, {"amount": 120, "name": "Rent"})
    assert diff == {"amount": {"from": 100, "to": 120}}
