"""Structured JSON logging for production observability"""

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from budget_gateway.config import settings

logger = logging.getLogger("budget_gateway")

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    """Stamp every record with the current request id"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    root = logging.getLogger()
    root.setLevel(level)

    # Remove existing handlers
    root.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(request_id)s %(message)s"
    )
    handler.setFormatter(formatter)
    handler.addFilter(RequestIdFilter())
    root.addHandler(handler)


def log_mutation(user_id: str, action: str, entity_type: str, entity_id: Optional[str]) -> None:
    """Log a committed mutation"""
    logger.info(
        "Mutation committed",
        extra={
            "user_id": user_id,
            "action": action,
            "entity_type": entity_type,
            "entity_id": entity_id,
        },
    )


def log_activity_failure(user_id: str, action: str, entity_type: str, entity_id: Optional[str], error: Exception) -> None:
    """Activity log append failed after the mutation committed"""
    logger.error(
        "Activity log write failed",
        extra={
            "user_id": user_id,
            "action": action,
            "entity_type": entity_type,
            "entity_id": entity_id,
            "error": str(error),
        },
    )


def log_collaborator_fallback(collaborator: str, reason: str) -> None:
    """External service unavailable; a local fallback was used"""
    logger.warning(
        "Collaborator unavailable, using fallback",
        extra={"collaborator": collaborator, "reason": reason},
    )
