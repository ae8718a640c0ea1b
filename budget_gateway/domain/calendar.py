"""Recurrence projector - turns day-of-month schedules into dated occurrences

A range may span several months (a week view crossing a month end, a
quarter report), so every (year, month) the range touches is visited.
Days that do not exist in a month (31 in April, 30 in February) produce
no occurrence for that month: there is no clamping and no rollover.
"""

from datetime import date
from typing import Iterable, List, Sequence

from budget_gateway.domain.billing import validate_day_of_month
from budget_gateway.domain.exceptions import InvalidInputError
from budget_gateway.domain.models import CalendarEntry, Occurrence, OneOffSchedule, RecurringSchedule
from budget_gateway.domain.money import to_money
from budget_gateway.utils.date_utils import day_in_month, iter_months


def bill_entry(bill) -> CalendarEntry:
    """Calendar entry for a bill; bills always repeat on due_day"""
    return CalendarEntry(
        entity_id=bill.id,
        kind="bill",
        name=bill.name,
        amount=to_money(bill.amount),
        schedule=RecurringSchedule(day=bill.due_day),
    )


def income_entry(income) -> CalendarEntry | None:
    """
    Calendar entry for an income, or None when it has nothing to schedule.

    Recurring incomes use receipt_day, one-off incomes use date.
    """
    if income.is_recurring:
        if income.receipt_day is None:
            return None
        schedule = RecurringSchedule(day=income.receipt_day)
    else:
        if income.date is None:
            return None
        schedule = OneOffSchedule(on=income.date)

    return CalendarEntry(
        entity_id=income.id,
        kind="income",
        name=income.description or income.source,
        amount=to_money(income.amount),
        schedule=schedule,
    )


def project_occurrences(entries: Sequence[CalendarEntry], range_start: date, range_end: date) -> List[Occurrence]:
    """
    Enumerate every occurrence of entries within [range_start, range_end].

    Result is sorted by date; same-day occurrences keep the order of entries.

    Raises:
        InvalidInputError: range_start after range_end, or a day outside 1-31
    """
    if range_start > range_end:
        raise InvalidInputError(f"Range start {range_start} is after range end {range_end}")

    months = list(iter_months(range_start, range_end))
    occurrences: List[Occurrence] = []

    for entry in entries:
        for occurrence_date in _dates_for(entry, months, range_start, range_end):
            occurrences.append(
                Occurrence(
                    entity_id=entry.entity_id,
                    kind=entry.kind,
                    name=entry.name,
                    occurrence_date=occurrence_date,
                    amount=entry.amount,
                )
            )

    # sorted() is stable, so ties keep entry order
    return sorted(occurrences, key=lambda o: o.occurrence_date)


def _dates_for(entry: CalendarEntry, months, range_start: date, range_end: date) -> Iterable[date]:
    schedule = entry.schedule

    if isinstance(schedule, OneOffSchedule):
        if range_start <= schedule.on <= range_end:
            yield schedule.on
        return

    validate_day_of_month(schedule.day, "day")
    for year, month in months:
        candidate = day_in_month(year, month, schedule.day)
        if candidate is not None and range_start <= candidate <= range_end:
            yield candidate


def calendar_events(bills, incomes, range_start: date, range_end: date) -> List[Occurrence]:
    """Occurrences for bills followed by incomes, in the order given"""
    entries = [bill_entry(b) for b in bills]
    entries.extend(e for e in (income_entry(i) for i in incomes) if e is not None)
    return project_occurrences(entries, range_start, range_end)


def validate_income_schedule(is_recurring: bool, receipt_day: int | None, on: date | None) -> None:
    """
    Recurring incomes carry receipt_day and no date; one-off incomes carry date and no receipt_day.

    Raises:
        InvalidInputError: Shape does not match is_recurring
    """
    if is_recurring:
        if receipt_day is None:
            raise InvalidInputError("Recurring incomes need receipt_day")
        if on is not None:
            raise InvalidInputError("Recurring incomes cannot have a fixed date")
        validate_day_of_month(receipt_day, "receipt_day")
    else:
        if on is None:
            raise InvalidInputError("One-off incomes need a date")
        if receipt_day is not None:
            raise InvalidInputError("One-off incomes cannot have receipt_day")
