"""AI advisor HTTP client (Gemini generateContent REST API)"""

import json
from decimal import Decimal
from typing import Any, Dict, List

import httpx

from budget_gateway.config import settings
from budget_gateway.domain.exceptions import ServiceUnavailableError
from budget_gateway.domain.models import Advice, FinancialSnapshot

ADVICE_SYSTEM_PROMPT = (
    "You are a financial advisor specialized in household budgets. "
    "Give practical, realistic advice. Always answer with valid JSON containing 3 suggestions."
)


def _advice_prompt(snapshot: FinancialSnapshot) -> str:
    bills = ", ".join(f"{b.name}: {b.amount}" for b in snapshot.bills) or "none"
    categories = ", ".join(f"{c.name}: {c.total_amount} ({c.percentage}%)" for c in snapshot.categories) or "none"
    return (
        "Analyze the household finances below and give 3 personalized savings suggestions.\n"
        "Include a realistic monthly savings estimate for each one.\n\n"
        f"- Monthly income: {snapshot.monthly_income}\n"
        f"- Monthly expenses: {snapshot.monthly_expenses}\n"
        f"- Bills: {bills}\n"
        f"- Spending by category: {categories}\n\n"
        'Answer as JSON: {"suggestions": [{"suggestion": str, "potentialSavings": number, '
        '"priority": "high|medium|low", "category": str, "actionItems": [str]}]}'
    )


def _analysis_prompt(snapshot: FinancialSnapshot) -> str:
    data = {
        "monthlyIncome": str(snapshot.monthly_income),
        "monthlyExpenses": str(snapshot.monthly_expenses),
        "bills": [
            {"name": b.name, "amount": str(b.amount), "category": b.category, "dueDay": b.due_day}
            for b in snapshot.bills
        ],
    }
    return (
        "Analyze these household spending patterns and point out trends or anomalies.\n\n"
        f"Data: {json.dumps(data)}\n\n"
        "Cover consumption patterns, possible anomalies, seasonal trends and preventive "
        "recommendations. Keep the answer under 200 characters."
    )


class AdvisorClient:
    """Client for the generative AI advisor"""

    def __init__(self, api_key: str | None = None, base_url: str | None = None, timeout: float | None = None):
        self.api_key = api_key or settings.gemini_api_key
        self.base_url = base_url or settings.gemini_api_base
        self.timeout = timeout or settings.http_timeout_seconds

    async def _generate(self, model: str, prompt: str, system_prompt: str | None = None, as_json: bool = False) -> str:
        if not self.api_key:
            raise ServiceUnavailableError("AI advisor is not configured")

        body: Dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
        if system_prompt:
            body["systemInstruction"] = {"parts": [{"text": system_prompt}]}
        if as_json:
            body["generationConfig"] = {"responseMimeType": "application/json"}

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(
                    f"{self.base_url}/models/{model}:generateContent",
                    params={"key": self.api_key},
                    json=body,
                )
                response.raise_for_status()
                data = response.json()
                return data["candidates"][0]["content"]["parts"][0]["text"]

            except httpx.TimeoutException as e:
                raise ServiceUnavailableError(f"AI advisor timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise ServiceUnavailableError(f"AI advisor error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise ServiceUnavailableError(f"AI advisor unreachable: {e}") from e
            except (KeyError, IndexError, ValueError, TypeError) as e:
                raise ServiceUnavailableError(f"Invalid response from AI advisor: {e}") from e

    async def get_advice(self, snapshot: FinancialSnapshot) -> List[Advice]:
        """
        Ranked savings suggestions for the snapshot.

        Raises:
            ServiceUnavailableError: Not configured, unreachable, or malformed answer
        """
        text = await self._generate(
            settings.advice_model,
            _advice_prompt(snapshot),
            system_prompt=ADVICE_SYSTEM_PROMPT,
            as_json=True,
        )
        try:
            payload = json.loads(text)
            return [
                Advice(
                    suggestion=item["suggestion"],
                    potential_savings=Decimal(str(item["potentialSavings"])),
                    priority=item["priority"],
                    category=item["category"],
                    action_items=list(item["actionItems"]),
                )
                for item in payload.get("suggestions", [])
            ]
        except (KeyError, ValueError, TypeError, ArithmeticError, AttributeError) as e:
            raise ServiceUnavailableError(f"Invalid advice payload: {e}") from e

    async def analyze_patterns(self, snapshot: FinancialSnapshot) -> str:
        """
        Short free-text summary of spending patterns.

        Raises:
            ServiceUnavailableError: Not configured, unreachable, or empty answer
        """
        text = await self._generate(settings.analysis_model, _analysis_prompt(snapshot))
        if not text or not text.strip():
            raise ServiceUnavailableError("Empty analysis from AI advisor")
        return text.strip()
