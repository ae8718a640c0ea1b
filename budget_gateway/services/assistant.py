"""AI advice, pattern analysis and e-mail reminders

Collaborator failures never fail these operations: the advisor falls back
to static content and the notifier reports undelivered mail as False.
"""

from datetime import date
from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from budget_gateway.config import settings
from budget_gateway.domain.billing import derive_status
from budget_gateway.domain.exceptions import NotFoundError, ServiceUnavailableError
from budget_gateway.domain.models import Advice, BillStatus, ReminderResult
from budget_gateway.infrastructure.clients.advisor import AdvisorClient
from budget_gateway.infrastructure.clients.mailer import EmailNotifier
from budget_gateway.infrastructure.database.repositories import BillRepository, UserRepository
from budget_gateway.infrastructure.observability.logging import log_collaborator_fallback
from budget_gateway.infrastructure.observability.metrics import advisor_fallback_counter
from budget_gateway.services.dashboard import DashboardService
from budget_gateway.utils.date_utils import day_in_month

DEFAULT_ADVICE = [
    Advice(
        suggestion="Review your subscriptions and cancel the ones you no longer use",
        potential_savings=Decimal("150.00"),
        priority="high",
        category="Leisure",
        action_items=[
            "List every active subscription",
            "Cancel services unused for more than 30 days",
            "Negotiate discounts on essential services",
        ],
    )
]

DEFAULT_ANALYSIS = (
    "Your spending is within the household average. Keep monitoring it to spot saving opportunities."
)


class AssistantService:
    """Bridges the store to the AI advisor and the e-mail notifier"""

    def __init__(self, db: Session, advisor: AdvisorClient, notifier: EmailNotifier):
        self.db = db
        self.advisor = advisor
        self.notifier = notifier
        self.users = UserRepository(db)
        self.bills = BillRepository(db)

    async def get_advice(self, user_id: str) -> List[Advice]:
        snapshot = DashboardService(self.db).get_snapshot(user_id)
        try:
            advice = await self.advisor.get_advice(snapshot)
        except ServiceUnavailableError as e:
            advisor_fallback_counter.labels(operation="advice").inc()
            log_collaborator_fallback("advisor", str(e))
            return list(DEFAULT_ADVICE)
        return advice or list(DEFAULT_ADVICE)

    async def analyze_patterns(self, user_id: str) -> str:
        snapshot = DashboardService(self.db).get_snapshot(user_id)
        try:
            return await self.advisor.analyze_patterns(snapshot)
        except ServiceUnavailableError as e:
            advisor_fallback_counter.labels(operation="analysis").inc()
            log_collaborator_fallback("advisor", str(e))
            return DEFAULT_ANALYSIS

    async def send_reminders(self, user_id: str, reference_date: date) -> ReminderResult:
        """
        E-mail the user about unpaid bills due within the reminder window and unpaid overdue bills.

        Raises:
            NotFoundError: Unknown user
        """
        user = self.users.get(user_id)
        if user is None:
            raise NotFoundError("user", user_id)

        due = []
        for bill in self.bills.list_by_user(user_id):
            status = derive_status(bill.due_day, bill.is_paid, reference_date, settings.due_soon_days)
            if status.status == BillStatus.PAID:
                continue
            if status.status == BillStatus.OVERDUE:
                due.append((bill, status, None))
                continue
            if status.days_until_due > settings.reminder_window_days:
                continue
            due_date = day_in_month(reference_date.year, reference_date.month, bill.due_day)
            # No due date this month (day 31 in a 30-day month)
            if due_date is not None:
                due.append((bill, status, due_date))

        if not user.email:
            return ReminderResult(sent=0, total=len(due), skipped_reason="User has no e-mail address")

        sent = 0
        for bill, status, due_date in due:
            if status.status == BillStatus.OVERDUE:
                delivered = await self.notifier.send_overdue_notice(
                    user.email, user.name, bill.name, bill.amount, status.days_overdue
                )
            else:
                delivered = await self.notifier.send_reminder(
                    user.email, user.name, bill.name, bill.amount, due_date.strftime("%d/%m/%Y")
                )
            sent += int(delivered)

        return ReminderResult(sent=sent, total=len(due))
