"""Notification variants and their display styles"""

from enum import Enum
from typing import Dict, NamedTuple


class NotificationType(str, Enum):
    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


class NotificationStyle(NamedTuple):
    icon: str
    color: str


NOTIFICATION_STYLES: Dict[NotificationType, NotificationStyle] = {
    NotificationType.WARNING: NotificationStyle(icon="fas fa-exclamation-triangle", color="#F59E0B"),
    NotificationType.INFO: NotificationStyle(icon="fas fa-info-circle", color="#3B82F6"),
    NotificationType.SUCCESS: NotificationStyle(icon="fas fa-check-circle", color="#10B981"),
    NotificationType.ERROR: NotificationStyle(icon="fas fa-times-circle", color="#EF4444"),
}


def style_for(notification_type: str) -> NotificationStyle:
    """Lookup with INFO as the fallback for unknown stored values"""
    try:
        return NOTIFICATION_STYLES[NotificationType(notification_type)]
    except ValueError:
        return NOTIFICATION_STYLES[NotificationType.INFO]
