"""Notification endpoints"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from budget_gateway.api.v1.schemas import MarkReadResponse, NotificationCreate, NotificationResponse
from budget_gateway.api.v1.serializers import notification_response
from budget_gateway.domain.exceptions import NotFoundError
from budget_gateway.infrastructure.database.session import get_db
from budget_gateway.infrastructure.database.repositories import NotificationRepository, UserRepository

router = APIRouter()


@router.get("/notifications/{user_id}", response_model=List[NotificationResponse])
def list_notifications(
    user_id: str,
    is_read: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
):
    """Newest first, optionally filtered on read state"""
    return [notification_response(n) for n in NotificationRepository(db).list_by_user(user_id, is_read)]


@router.post("/notifications/{user_id}", response_model=NotificationResponse, status_code=201)
def create_notification(user_id: str, body: NotificationCreate, db: Session = Depends(get_db)):
    if UserRepository(db).get(user_id) is None:
        raise NotFoundError("user", user_id)
    notification = NotificationRepository(db).create(user_id=user_id, **body.model_dump())
    db.commit()
    return notification_response(notification)


@router.patch("/notifications/item/{notification_id}/read", response_model=MarkReadResponse)
def mark_notification_read(notification_id: str, db: Session = Depends(get_db)):
    if not NotificationRepository(db).mark_read(notification_id):
        raise NotFoundError("notification", notification_id)
    db.commit()
    return MarkReadResponse(success=True, updated=1)


@router.patch("/notifications/{user_id}/read-all", response_model=MarkReadResponse)
def mark_all_notifications_read(user_id: str, db: Session = Depends(get_db)):
    updated = NotificationRepository(db).mark_all_read(user_id)
    db.commit()
    return MarkReadResponse(success=True, updated=updated)
