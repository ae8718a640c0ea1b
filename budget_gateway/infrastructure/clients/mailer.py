"""Email notifier over the SendGrid v3 REST API

Never raises: delivery problems are logged and reported as False.
"""

import logging
from decimal import Decimal

import httpx

from budget_gateway.config import settings
from budget_gateway.infrastructure.observability.metrics import email_delivery_counter

logger = logging.getLogger(__name__)


class EmailNotifier:
    """Sends bill reminder and overdue e-mails"""

    def __init__(self, api_key: str | None = None, base_url: str | None = None, sender: str | None = None):
        self.api_key = api_key or settings.sendgrid_api_key
        self.base_url = base_url or settings.sendgrid_api_base
        self.sender = sender or settings.email_from

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def send(self, to: str, subject: str, text: str) -> bool:
        """Deliver one message; False when unconfigured or when delivery fails"""
        if not self.configured:
            logger.info("Email disabled, would have sent", extra={"to": to, "subject": subject})
            email_delivery_counter.labels(outcome="disabled").inc()
            return False

        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
            try:
                response = await client.post(
                    f"{self.base_url}/mail/send",
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json={
                        "personalizations": [{"to": [{"email": to}]}],
                        "from": {"email": self.sender},
                        "subject": subject,
                        "content": [{"type": "text/plain", "value": text}],
                    },
                )
                response.raise_for_status()
            except (httpx.HTTPStatusError, httpx.RequestError) as e:
                logger.error("Email delivery failed", extra={"to": to, "subject": subject, "error": str(e)})
                email_delivery_counter.labels(outcome="failed").inc()
                return False

        email_delivery_counter.labels(outcome="sent").inc()
        return True

    async def send_reminder(self, to: str, user_name: str, bill_name: str, amount: Decimal, due_date: str) -> bool:
        """Bill is due soon"""
        subject = f"Reminder: {bill_name} is due soon"
        text = (
            f"Hello, {user_name}!\n\n"
            f"The bill {bill_name} of {amount} is due on {due_date}.\n\n"
            "Remember to pay it to avoid interest and late fees."
        )
        return await self.send(to, subject, text)

    async def send_overdue_notice(self, to: str, user_name: str, bill_name: str, amount: Decimal, days_overdue: int) -> bool:
        """Bill is past its due day and still unpaid"""
        subject = f"URGENT: {bill_name} is overdue"
        text = (
            f"Hello, {user_name}!\n\n"
            f"The bill {bill_name} ({amount}) has been overdue for {days_overdue} day(s).\n\n"
            "Please pay it as soon as possible."
        )
        return await self.send(to, subject, text)
