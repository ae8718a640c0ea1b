"""Domain models - pure Python dataclasses representing business values"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class BillStatus(str, Enum):
    """Display status of a bill, derived from the caller's current date"""

    PAID = "paid"
    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    DUE_SOON = "due_soon"
    SCHEDULED = "scheduled"


@dataclass
class BillStatusInfo:
    """Derived status plus the distance to the due day"""

    status: BillStatus
    days_until_due: int
    days_overdue: int = 0


@dataclass
class RecurringSchedule:
    """Repeats every month on a fixed day-of-month (1-31)"""

    day: int


@dataclass
class OneOffSchedule:
    """Happens exactly once on a fixed date"""

    on: date


@dataclass
class CalendarEntry:
    """Anything that can be placed on the calendar: a bill or an income"""

    entity_id: str
    kind: str  # "bill" or "income"
    name: str
    amount: Decimal
    schedule: RecurringSchedule | OneOffSchedule


@dataclass
class Occurrence:
    """Concrete dated instance of a calendar entry"""

    entity_id: str
    kind: str
    name: str
    occurrence_date: date
    amount: Decimal


@dataclass
class CategoryTotal:
    """Bill total for one category and its share of monthly expenses"""

    category_id: str
    name: str
    color: str
    icon: str
    total_amount: Decimal
    percentage: float


@dataclass
class DashboardSummary:
    """Monthly aggregate figures for one user"""

    monthly_income: Decimal
    monthly_expenses: Decimal
    monthly_balance: Decimal
    upcoming_bills: int
    category_breakdown: List[CategoryTotal] = field(default_factory=list)


@dataclass
class SnapshotBill:
    """Bill as presented to the AI advisor"""

    name: str
    amount: Decimal
    category: str
    due_day: int


@dataclass
class FinancialSnapshot:
    """Read-only view of a user's finances handed to collaborators"""

    monthly_income: Decimal
    monthly_expenses: Decimal
    bills: List[SnapshotBill]
    categories: List[CategoryTotal]


@dataclass
class Advice:
    """Single savings suggestion"""

    suggestion: str
    potential_savings: Decimal
    priority: str  # "high" | "medium" | "low"
    category: str
    action_items: List[str]


@dataclass
class ReminderResult:
    """Outcome of a reminder run"""

    sent: int
    total: int
    skipped_reason: Optional[str] = None
