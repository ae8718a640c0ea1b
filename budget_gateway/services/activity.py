"""Activity log writer - best-effort audit trail appended after each mutation

The primary mutation is already committed when log() runs. A failed append
is rolled back, logged and counted, but never raised to the caller.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from budget_gateway.config import settings
from budget_gateway.domain.exceptions import InvalidInputError
from budget_gateway.infrastructure.database.models import ActivityLog
from budget_gateway.infrastructure.database.repositories import ActivityLogRepository
from budget_gateway.infrastructure.observability.logging import log_activity_failure, log_mutation
from budget_gateway.infrastructure.observability.metrics import activity_log_failure_counter


def to_metadata(value: Any) -> Any:
    """Make values JSON-safe: Decimal and dates become strings"""
    if isinstance(value, dict):
        return {k: to_metadata(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_metadata(v) for v in value]
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def record_snapshot(record) -> Dict[str, Any]:
    """Column values of an ORM record, keyed by attribute name"""
    return {attr.key: getattr(record, attr.key) for attr in inspect(record).mapper.column_attrs}


class ActivityLogWriter:
    """Appends audit entries; see module docstring for failure semantics"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ActivityLogRepository(db)

    def log(
        self,
        user_id: str,
        action: str,
        entity_type: str,
        entity_id: Optional[str],
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> Optional[ActivityLog]:
        log_mutation(user_id, action, entity_type, entity_id)
        try:
            entry = self.repo.append(
                user_id=user_id,
                action=action,
                entity_type=entity_type,
                entity_id=entity_id,
                message=message,
                details=to_metadata(details) if details is not None else None,
            )
            self.db.commit()
            return entry
        except SQLAlchemyError as e:
            self.db.rollback()
            activity_log_failure_counter.inc()
            log_activity_failure(user_id, action, entity_type, entity_id, e)
            return None

    def recent(self, user_id: str, limit: Optional[int] = None) -> List[ActivityLog]:
        """Newest-first entries, capped at limit (or the configured default)"""
        if limit is None:
            limit = settings.activity_log_limit
        if not 1 <= limit <= settings.activity_log_max_limit:
            raise InvalidInputError(f"limit must be between 1 and {settings.activity_log_max_limit}")
        return self.repo.list_by_user(user_id, limit)
