from .read_notification_store import ReadNotificationStore

__all__ = ["ReadNotificationStore"]
