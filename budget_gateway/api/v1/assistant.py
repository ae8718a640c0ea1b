"""AI advice and reminder endpoints"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from budget_gateway.api.dependencies import get_advisor_client, get_email_notifier, get_today
from budget_gateway.api.v1.schemas import AdviceSchema, AnalysisResponse, ReminderResponse
from budget_gateway.api.v1.serializers import advice_response
from budget_gateway.infrastructure.clients.advisor import AdvisorClient
from budget_gateway.infrastructure.clients.mailer import EmailNotifier
from budget_gateway.infrastructure.database.session import get_db
from budget_gateway.services.assistant import AssistantService

router = APIRouter()


@router.post("/assistant/{user_id}/advice", response_model=List[AdviceSchema])
async def get_advice(
    user_id: str,
    db: Session = Depends(get_db),
    advisor: AdvisorClient = Depends(get_advisor_client),
    notifier: EmailNotifier = Depends(get_email_notifier),
):
    """Savings suggestions; static advice when the advisor is unavailable"""
    advice = await AssistantService(db, advisor, notifier).get_advice(user_id)
    return [advice_response(a) for a in advice]


@router.post("/assistant/{user_id}/analysis", response_model=AnalysisResponse)
async def analyze_patterns(
    user_id: str,
    db: Session = Depends(get_db),
    advisor: AdvisorClient = Depends(get_advisor_client),
    notifier: EmailNotifier = Depends(get_email_notifier),
):
    analysis = await AssistantService(db, advisor, notifier).analyze_patterns(user_id)
    return AnalysisResponse(analysis=analysis)


@router.post("/reminders/{user_id}", response_model=ReminderResponse)
async def send_reminders(
    user_id: str,
    reference_date: Optional[date] = Query(None),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
    advisor: AdvisorClient = Depends(get_advisor_client),
    notifier: EmailNotifier = Depends(get_email_notifier),
):
    """E-mail reminders for unpaid bills due soon and overdue notices"""
    result = await AssistantService(db, advisor, notifier).send_reminders(user_id, reference_date or today)
    return ReminderResponse(sent=result.sent, total=result.total, skipped_reason=result.skipped_reason)
