from app.business.notifications.api import router
from app.business.notifications.schemas import MarkAllReadResult, NotificationRead
from app.business.notifications.service import NotificationService, notification_service

__all__ = [
    "router",
    "MarkAllReadResult",
    "NotificationRead",
    "NotificationService",
    "notification_service",
]
