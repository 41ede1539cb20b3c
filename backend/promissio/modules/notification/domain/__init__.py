"""Notification domain layer."""

from .enums import NotificationKind
from .services.notification_deriver import NotificationDeriver, derive_notifications
from .value_objects.notification import Notification

__all__ = ["Notification", "NotificationDeriver", "NotificationKind", "derive_notifications"]
