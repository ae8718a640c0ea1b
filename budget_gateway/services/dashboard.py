"""Read side: dashboard summary, calendar events and advisor snapshot"""

from dataclasses import dataclass
from datetime import date
from typing import List

from sqlalchemy.orm import Session

from budget_gateway.config import settings
from budget_gateway.domain.aggregation import financial_snapshot, summarize
from budget_gateway.domain.calendar import calendar_events
from budget_gateway.domain.models import DashboardSummary, FinancialSnapshot, Occurrence
from budget_gateway.infrastructure.database.models import Bill, Category, Income, Transaction
from budget_gateway.infrastructure.database.repositories import (
    BillRepository,
    CategoryRepository,
    IncomeRepository,
    TransactionRepository,
)
from budget_gateway.infrastructure.database.session import begin_snapshot
from budget_gateway.infrastructure.observability.metrics import dashboard_read_counter


@dataclass
class Dashboard:
    """Summary figures plus the records they were computed from"""

    summary: DashboardSummary
    bills: List[Bill]
    incomes: List[Income]
    categories: List[Category]
    transactions: List[Transaction]


class DashboardService:
    """Aggregated views over one user's bills and incomes"""

    def __init__(self, db: Session):
        self.db = db
        self.bills = BillRepository(db)
        self.incomes = IncomeRepository(db)
        self.categories = CategoryRepository(db)
        self.transactions = TransactionRepository(db)

    def get_dashboard(self, user_id: str, reference_date: date) -> Dashboard:
        """
        Monthly income, expenses, balance, upcoming bill count and category breakdown.

        All collections are read inside one transaction so the figures agree with each other.
        """
        begin_snapshot(self.db)
        bills = self.bills.list_by_user(user_id)
        incomes = self.incomes.list_by_user(user_id)
        categories = self.categories.list_all()
        transactions = self.transactions.list_by_user(user_id, reference_date.month, reference_date.year)

        dashboard_read_counter.inc()
        return Dashboard(
            summary=summarize(bills, incomes, categories, reference_date, settings.upcoming_window_days),
            bills=bills,
            incomes=incomes,
            categories=categories,
            transactions=transactions,
        )

    def get_calendar_events(self, user_id: str, range_start: date, range_end: date) -> List[Occurrence]:
        """Bill and income occurrences within [range_start, range_end]"""
        bills = self.bills.list_by_user(user_id)
        incomes = self.incomes.list_by_user(user_id)
        return calendar_events(bills, incomes, range_start, range_end)

    def get_snapshot(self, user_id: str) -> FinancialSnapshot:
        """Financial data handed to the AI advisor"""
        begin_snapshot(self.db)
        bills = self.bills.list_by_user(user_id)
        incomes = self.incomes.list_by_user(user_id)
        categories = self.categories.list_all()
        return financial_snapshot(bills, incomes, categories)
