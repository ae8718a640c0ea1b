"""Aggregation engine - dashboard figures from a snapshot of bills, incomes and categories

Works on any objects exposing the ORM attribute names (amount, due_day,
is_recurring, category_id, ...). Missing data degrades to zero, never errors.
"""

from datetime import date
from decimal import Decimal
from typing import List, Sequence

from budget_gateway.domain.models import (
    CategoryTotal,
    DashboardSummary,
    FinancialSnapshot,
    SnapshotBill,
)
from budget_gateway.domain.money import percentage, to_money, total

UNCATEGORIZED = "Other"


def monthly_income(incomes: Sequence) -> Decimal:
    """Recurring incomes only; one-off incomes are not part of the monthly baseline"""
    return total(i.amount for i in incomes if i.is_recurring)


def monthly_expenses(bills: Sequence) -> Decimal:
    """Every bill counts, paid or not: this is the obligation, not the cash flow"""
    return total(b.amount for b in bills)


def upcoming_bills_count(bills: Sequence, today: date, window_days: int = 7) -> int:
    """
    Bills due between today and today + window_days (both inclusive).

    Paid bills are counted too; the figure tracks due-date proximity only.
    """
    return sum(1 for b in bills if 0 <= b.due_day - today.day <= window_days)


def category_breakdown(bills: Sequence, categories: Sequence, expenses: Decimal | None = None) -> List[CategoryTotal]:
    """Per-category totals and share of expenses, skipping categories with no spend"""
    if expenses is None:
        expenses = monthly_expenses(bills)

    breakdown = []
    for category in categories:
        category_total = total(b.amount for b in bills if b.category_id == category.id)
        if category_total <= 0:
            continue
        breakdown.append(
            CategoryTotal(
                category_id=category.id,
                name=category.name,
                color=category.color,
                icon=category.icon,
                total_amount=category_total,
                percentage=percentage(category_total, expenses),
            )
        )
    return breakdown


def summarize(
    bills: Sequence,
    incomes: Sequence,
    categories: Sequence,
    today: date,
    upcoming_window_days: int = 7,
) -> DashboardSummary:
    """All dashboard figures computed from the same snapshot"""
    income = monthly_income(incomes)
    expenses = monthly_expenses(bills)

    return DashboardSummary(
        monthly_income=income,
        monthly_expenses=expenses,
        monthly_balance=income - expenses,
        upcoming_bills=upcoming_bills_count(bills, today, upcoming_window_days),
        category_breakdown=category_breakdown(bills, categories, expenses),
    )


def financial_snapshot(bills: Sequence, incomes: Sequence, categories: Sequence) -> FinancialSnapshot:
    """Snapshot handed to the AI advisor"""
    names = {c.id: c.name for c in categories}
    expenses = monthly_expenses(bills)

    return FinancialSnapshot(
        monthly_income=monthly_income(incomes),
        monthly_expenses=expenses,
        bills=[
            SnapshotBill(
                name=b.name,
                amount=to_money(b.amount),
                category=names.get(b.category_id, UNCATEGORIZED),
                due_day=b.due_day,
            )
            for b in bills
        ],
        categories=category_breakdown(bills, categories, expenses),
    )


def goal_progress(current_amount: Decimal, target_amount: Decimal) -> float:
    """Progress toward a goal in percent, capped at 100"""
    return min(percentage(to_money(current_amount), to_money(target_amount)), 100.0)
