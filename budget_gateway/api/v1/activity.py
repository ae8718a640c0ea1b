"""GET /v1/logs/{user_id} - activity audit trail"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from budget_gateway.api.v1.schemas import ActivityLogResponse
from budget_gateway.api.v1.serializers import activity_response
from budget_gateway.infrastructure.database.session import get_db
from budget_gateway.services.activity import ActivityLogWriter

router = APIRouter()


@router.get("/logs/{user_id}", response_model=List[ActivityLogResponse])
def get_activity_logs(
    user_id: str,
    limit: Optional[int] = Query(None, description="Maximum number of entries"),
    db: Session = Depends(get_db),
):
    """Newest entries first"""
    return [activity_response(e) for e in ActivityLogWriter(db).recent(user_id, limit)]
