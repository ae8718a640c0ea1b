"""Unit tests for the AI advisor and e-mail clients"""

import json
import pytest
import httpx
from decimal import Decimal
from unittest.mock import AsyncMock, patch
from budget_gateway.domain.exceptions import ServiceUnavailableError
from budget_gateway.domain.models import FinancialSnapshot, SnapshotBill
from budget_gateway.infrastructure.clients.advisor import AdvisorClient
from budget_gateway.infrastructure.clients.mailer import EmailNotifier


@pytest.fixture
def snapshot() -> FinancialSnapshot:
    return FinancialSnapshot(
        monthly_income=Decimal("5000.00"),
        monthly_expenses=Decimal("1500.00"),
        bills=[SnapshotBill(name="Rent", amount=Decimal("1200.00"), category="Housing", due_day=5)],
        categories=[],
    )


def gemini_response(text: str) -> httpx.Response:
    return httpx.Response(
        200,
        json={"candidates": [{"content": {"parts": [{"text": text}]}}]},
        request=httpx.Request("POST", "https://example.test/models/m:generateContent"),
    )


async def test_advisor_not_configured(snapshot: FinancialSnapshot):
    client = AdvisorClient(api_key="")
    client.api_key = None

    with pytest.raises(ServiceUnavailableError):
        await client.get_advice(snapshot)


@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
async def test_advisor_parses_suggestions(mock_post: AsyncMock, snapshot: FinancialSnapshot):
    mock_post.return_value = gemini_response(
        json.dumps(
            {
                "suggestions": [
                    {
                        "suggestion": "Cook at home",
                        "potentialSavings": 200.5,
                        "priority": "medium",
                        "category": "Food",
                        "actionItems": ["Plan meals"],
                    }
                ]
            }
        )
    )

    advice = await AdvisorClient(api_key="key").get_advice(snapshot)

    assert len(advice) == 1
    assert advice[0].suggestion == "Cook at home"
    assert advice[0].potential_savings == Decimal("200.5")
    assert advice[0].action_items == ["Plan meals"]


@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
async def test_advisor_malformed_advice(mock_post: AsyncMock, snapshot: FinancialSnapshot):
    mock_post.return_value = gemini_response("not json")

    with pytest.raises(ServiceUnavailableError):
        await AdvisorClient(api_key="key").get_advice(snapshot)


@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
async def test_advisor_timeout(mock_post: AsyncMock, snapshot: FinancialSnapshot):
    mock_post.side_effect = httpx.TimeoutException("timed out")

    with pytest.raises(ServiceUnavailableError):
        await AdvisorClient(api_key="key").analyze_patterns(snapshot)


@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
async def test_advisor_http_error(mock_post: AsyncMock, snapshot: FinancialSnapshot):
    mock_post.return_value = httpx.Response(
        500, request=httpx.Request("POST", "https://example.test/models/m:generateContent")
    )

    with pytest.raises(ServiceUnavailableError):
        await AdvisorClient(api_key="key").analyze_patterns(snapshot)


@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
async def test_advisor_analysis_text(mock_post: AsyncMock, snapshot: FinancialSnapshot):
    mock_post.return_value = gemini_response("  Housing dominates your spending.  ")

    analysis = await AdvisorClient(api_key="key").analyze_patterns(snapshot)

    assert analysis == "Housing dominates your spending."


async def test_mailer_disabled_returns_false():
    notifier = EmailNotifier(api_key="")
    notifier.api_key = None

    assert notifier.configured is False
    assert await notifier.send("maria@example.com", "Hi", "Body") is False


@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
async def test_mailer_sends_reminder(mock_post: AsyncMock):
    mock_post.return_value = httpx.Response(202, request=httpx.Request("POST", "https://example.test/mail/send"))

    delivered = await EmailNotifier(api_key="key").send_reminder(
        "maria@example.com", "Maria", "Rent", Decimal("1200.00"), "15/03/2024"
    )

    assert delivered is True
    payload = mock_post.call_args.kwargs["json"]
    assert payload["personalizations"][0]["to"][0]["email"] == "maria@example.com"
    assert "Rent" in payload["subject"]
    assert "15/03/2024" in payload["content"][0]["value"]


@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
async def test_mailer_failure_returns_false(mock_post: AsyncMock):
    mock_post.side_effect = httpx.ConnectError("refused")

    assert await EmailNotifier(api_key="key").send("maria@example.com", "Hi", "Body") is False
