"""Dependency injection for FastAPI endpoints"""

from datetime import date

from budget_gateway.infrastructure.clients.advisor import AdvisorClient
from budget_gateway.infrastructure.clients.mailer import EmailNotifier


def get_today() -> date:
    """Caller's current date; status and upcoming figures are relative to it"""
    return date.today()


def get_advisor_client() -> AdvisorClient:
    """Provide AI advisor client instance"""
    return AdvisorClient()


def get_email_notifier() -> EmailNotifier:
    """Provide email notifier instance"""
    return EmailNotifier()
