"""ORM/domain objects -> response schemas for fields that need derivation"""

from datetime import date

from budget_gateway.config import settings
from budget_gateway.api.v1.schemas import (
    ActivityLogResponse,
    AdviceSchema,
    BillResponse,
    GoalResponse,
    NotificationResponse,
    OccurrenceSchema,
)
from budget_gateway.domain.aggregation import goal_progress
from budget_gateway.domain.billing import derive_status
from budget_gateway.domain.notifications import style_for


def bill_response(bill, today: date) -> BillResponse:
    """Bill with its display status relative to today"""
    info = derive_status(bill.due_day, bill.is_paid, today, settings.due_soon_days)
    return BillResponse.model_validate(
        {
            **{column: getattr(bill, column) for column in BillResponse.model_fields if hasattr(bill, column)},
            "status": info.status.value,
            "days_until_due": info.days_until_due,
            "days_overdue": info.days_overdue,
        }
    )


def goal_response(goal) -> GoalResponse:
    response = GoalResponse.model_validate(goal)
    response.progress_percentage = goal_progress(goal.current_amount, goal.target_amount)
    return response


def notification_response(notification) -> NotificationResponse:
    style = style_for(notification.type)
    return NotificationResponse(
        id=notification.id,
        user_id=notification.user_id,
        title=notification.title,
        message=notification.message,
        type=notification.type,
        is_read=notification.is_read,
        related_id=notification.related_id,
        created_at=notification.created_at,
        icon=style.icon,
        color=style.color,
    )


def activity_response(entry) -> ActivityLogResponse:
    return ActivityLogResponse(
        id=entry.id,
        user_id=entry.user_id,
        action=entry.action,
        entity_type=entry.entity_type,
        entity_id=entry.entity_id,
        message=entry.message,
        metadata=entry.details,
        created_at=entry.created_at,
    )


def occurrence_response(occurrence) -> OccurrenceSchema:
    return OccurrenceSchema(
        entity_id=occurrence.entity_id,
        kind=occurrence.kind,
        name=occurrence.name,
        occurrence_date=occurrence.occurrence_date,
        amount=occurrence.amount,
    )


def advice_response(advice) -> AdviceSchema:
    return AdviceSchema(
        suggestion=advice.suggestion,
        potential_savings=advice.potential_savings,
        priority=advice.priority,
        category=advice.category,
        action_items=advice.action_items,
    )
