"""Port for remembering which notifications a user has opened."""

from typing import Protocol


class ReadNotificationStore(Protocol):
    """Set of notification ids already opened by the current user."""

    def read_ids(self) -> frozenset[str]:
        ...

    def mark_read(self, notification_id: str) -> None:
        ...
