"""Notification enums."""

from enum import Enum


class NotificationKind(Enum):
    """Reason a contract surfaced in the notification feed."""

    EXPIRED = "expired"
    EXPIRING = "expiring"
    NEW = "new"
