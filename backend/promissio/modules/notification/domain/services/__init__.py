from .notification_deriver import NotificationDeriver, derive_notifications

__all__ = ["NotificationDeriver", "derive_notifications"]
