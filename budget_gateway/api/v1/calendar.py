"""GET /v1/calendar/{user_id} - bill and income occurrences in a date range"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from budget_gateway.api.v1.schemas import CalendarResponse
from budget_gateway.api.v1.serializers import occurrence_response
from budget_gateway.infrastructure.database.session import get_db
from budget_gateway.services.dashboard import DashboardService

router = APIRouter()


@router.get("/calendar/{user_id}", response_model=CalendarResponse)
def get_calendar_events(
    user_id: str,
    start: date = Query(..., description="First day of the range (inclusive)"),
    end: date = Query(..., description="Last day of the range (inclusive)"),
    db: Session = Depends(get_db),
):
    """
    Project recurring bills and incomes onto every month the range touches.

    Returns:
        Occurrences sorted by date
    """
    occurrences = DashboardService(db).get_calendar_events(user_id, start, end)
    return CalendarResponse(start=start, end=end, occurrences=[occurrence_response(o) for o in occurrences])
