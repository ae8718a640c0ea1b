"""Unit tests for the recurrence projector"""

import pytest
from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from budget_gateway.domain.calendar import (
    calendar_events,
    income_entry,
    project_occurrences,
    validate_income_schedule,
)
from budget_gateway.domain.exceptions import InvalidInputError
from budget_gateway.domain.models import CalendarEntry, OneOffSchedule, RecurringSchedule


def entry(entity_id, day, amount="10.00", kind="bill"):
    return CalendarEntry(
        entity_id=entity_id,
        kind=kind,
        name=entity_id,
        amount=Decimal(amount),
        schedule=RecurringSchedule(day=day),
    )


def bill(bill_id, due_day, amount="100.00"):
    return SimpleNamespace(id=bill_id, name=bill_id, amount=Decimal(amount), due_day=due_day)


def income(income_id, amount="1000.00", receipt_day=None, is_recurring=True, on=None, description=""):
    return SimpleNamespace(
        id=income_id,
        source="Job",
        description=description,
        amount=Decimal(amount),
        receipt_day=receipt_day,
        is_recurring=is_recurring,
        date=on,
    )


def test_single_month_occurrence():
    occurrences = project_occurrences([entry("rent", 15)], date(2024, 3, 1), date(2024, 3, 31))

    assert [o.occurrence_date for o in occurrences] == [date(2024, 3, 15)]
    assert occurrences[0].entity_id == "rent"


def test_day_missing_from_month_is_skipped():
    """Day 31 does not exist in April: no occurrence, no clamping to the 30th"""
    occurrences = project_occurrences([entry("card", 31)], date(2024, 4, 1), date(2024, 4, 30))
    assert occurrences == []


def test_range_spanning_months():
    """A week crossing a month end still finds the early-month due day"""
    occurrences = project_occurrences(
        [entry("rent", 2), entry("gym", 29)],
        date(2024, 1, 28),
        date(2024, 2, 3),
    )

    assert [(o.entity_id, o.occurrence_date) for o in occurrences] == [
        ("gym", date(2024, 1, 29)),
        ("rent", date(2024, 2, 2)),
    ]


def test_quarter_range_and_leap_day():
    occurrences = project_occurrences([entry("ins", 29)], date(2024, 1, 1), date(2024, 3, 31))
    assert [o.occurrence_date for o in occurrences] == [
        date(2024, 1, 29),
        date(2024, 2, 29),
        date(2024, 3, 29),
    ]


def test_non_leap_february_skips_day_29():
    occurrences = project_occurrences([entry("ins", 29)], date(2023, 2, 1), date(2023, 2, 28))
    assert occurrences == []


def test_range_across_year_end():
    occurrences = project_occurrences([entry("rent", 5)], date(2023, 12, 1), date(2024, 1, 31))
    assert [o.occurrence_date for o in occurrences] == [date(2023, 12, 5), date(2024, 1, 5)]


def test_same_day_keeps_input_order():
    occurrences = project_occurrences(
        [entry("b", 10), entry("a", 10), entry("c", 10)],
        date(2024, 3, 1),
        date(2024, 3, 31),
    )
    assert [o.entity_id for o in occurrences] == ["b", "a", "c"]


def test_one_off_inside_and_outside_range():
    one_off = CalendarEntry(
        entity_id="bonus",
        kind="income",
        name="bonus",
        amount=Decimal("500.00"),
        schedule=OneOffSchedule(on=date(2024, 3, 20)),
    )

    assert len(project_occurrences([one_off], date(2024, 3, 1), date(2024, 3, 31))) == 1
    assert project_occurrences([one_off], date(2024, 4, 1), date(2024, 4, 30)) == []


def test_start_after_end_rejected():
    with pytest.raises(InvalidInputError):
        project_occurrences([entry("rent", 1)], date(2024, 3, 31), date(2024, 3, 1))


def test_single_day_range():
    occurrences = project_occurrences([entry("rent", 10)], date(2024, 3, 10), date(2024, 3, 10))
    assert len(occurrences) == 1


def test_income_entry_uses_description_then_source():
    assert income_entry(income("i1", receipt_day=5, description="Salary")).name == "Salary"
    assert income_entry(income("i2", receipt_day=5)).name == "Job"


def test_income_entry_without_schedule_is_ignored():
    assert income_entry(income("i1", receipt_day=None)) is None
    assert income_entry(income("i2", is_recurring=False, on=None)) is None


def test_calendar_events_bills_and_incomes():
    occurrences = calendar_events(
        [bill("rent", 5)],
        [income("salary", receipt_day=5), income("bonus", is_recurring=False, on=date(2024, 3, 1))],
        date(2024, 3, 1),
        date(2024, 3, 31),
    )

    assert [(o.kind, o.entity_id) for o in occurrences] == [
        ("income", "bonus"),
        ("bill", "rent"),
        ("income", "salary"),
    ]
    assert occurrences[1].amount == Decimal("100.00")


def test_validate_income_schedule():
    validate_income_schedule(True, 5, None)
    validate_income_schedule(False, None, date(2024, 3, 1))

    with pytest.raises(InvalidInputError):
        validate_income_schedule(True, None, None)
    with pytest.raises(InvalidInputError):
        validate_income_schedule(True, 5, date(2024, 3, 1))
    with pytest.raises(InvalidInputError):
        validate_income_schedule(False, None, None)
    with pytest.raises(InvalidInputError):
        validate_income_schedule(False, 5, date(2024, 3, 1))
    with pytest.raises(InvalidInputError):
        validate_income_schedule(True, 32, None)
