"""Notification feed view model.

Combines one derivation pass with the user's read state into what the bell
popover renders: items with icon and read flag, the unread badge count, the
has-alerts indicator, and navigation targets.
"""

from dataclasses import dataclass

from promissio.core.errors import NotFoundError
from promissio.core.logging import get_logger
from promissio.modules.notification.application.queries.get_contract_notifications_query import (
    GetContractNotificationsQuery,
    GetContractNotificationsQueryHandler,
)
from promissio.modules.notification.domain.enums import NotificationKind
from promissio.modules.notification.domain.interfaces.read_notification_store import (
    ReadNotificationStore,
)
from promissio.modules.notification.domain.value_objects.notification import (
    Notification,
)

logger = get_logger(__name__)

CONTRACTS_ROUTE = "/contracts"
EMPTY_FEED_MESSAGE = "No recent notifications"
DEFAULT_ICON = "bell"
FEED_DATE_FORMAT = "%b %d, %Y"

ICONS = {
    NotificationKind.EXPIRED: "file-warning",
    NotificationKind.EXPIRING: "clock",
    NotificationKind.NEW: "file-plus",
}


def icon_for(kind: NotificationKind) -> str:
    """Icon name for a notification kind."""
    return ICONS.get(kind, DEFAULT_ICON)


def navigation_target(notification: Notification) -> str:
    """Contract list route, highlighting the notification's contract."""
    if notification.contract_id:
        return f"{CONTRACTS_ROUTE}?highlight={notification.contract_id}"
    return CONTRACTS_ROUTE


@dataclass(frozen=True)
class NotificationFeedItem:
    """One rendered row of the feed."""

    notification: Notification
    is_read: bool

    @property
    def id(self) -> str:
        return self.notification.id

    @property
    def icon(self) -> str:
        return icon_for(self.notification.kind)

    @property
    def display_date(self) -> str:
        return self.notification.date.strftime(FEED_DATE_FORMAT)


class NotificationFeed:
    """
    Notification bell state for one derivation pass.

    Usage Example:
        feed = await NotificationFeed.load(handler, read_store)
        if feed.has_alerts:
            target = feed.open(feed.items[0].id)
    """

    def __init__(
        self, notifications: list[Notification], read_store: ReadNotificationStore
    ):
        self.notifications = list(notifications)
        self.read_store = read_store

    @classmethod
    async def load(
        cls,
        handler: GetContractNotificationsQueryHandler,
        read_store: ReadNotificationStore,
        query: GetContractNotificationsQuery | None = None,
    ) -> "NotificationFeed":
        """Run a derivation pass and wrap it with the read state."""
        notifications = await handler.execute(query or GetContractNotificationsQuery())
        return cls(notifications, read_store)

    @property
    def items(self) -> list[NotificationFeedItem]:
        read_ids = self.read_store.read_ids()
        return [
            NotificationFeedItem(notification, notification.id in read_ids)
            for notification in self.notifications
        ]

    @property
    def unread_count(self) -> int:
        return sum(1 for item in self.items if not item.is_read)

    @property
    def has_alerts(self) -> bool:
        return bool(self.notifications)

    @property
    def empty_message(self) -> str | None:
        return None if self.notifications else EMPTY_FEED_MESSAGE

    @property
    def view_all_target(self) -> str:
        return CONTRACTS_ROUTE

    def open(self, notification_id: str) -> str:
        """
        Mark a notification read and return where to navigate.

        Raises:
            NotFoundError: If the id is not part of this feed
        """
        for notification in self.notifications:
            if notification.id == notification_id:
                self.read_store.mark_read(notification_id)
                logger.debug("Notification opened", notification_id=notification_id)
                return navigation_target(notification)

        raise NotFoundError("Notification", notification_id)


__all__ = [
    "NotificationFeed",
    "NotificationFeedItem",
    "icon_for",
    "navigation_target",
]
