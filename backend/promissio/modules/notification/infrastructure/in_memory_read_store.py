"""Process-local read-state store."""

from collections.abc import Iterable


class InMemoryReadNotificationStore:
    """Keeps opened notification ids for the lifetime of the instance."""

    def __init__(self, read_ids: Iterable[str] = ()):
        self._read_ids = set(read_ids)

    def read_ids(self) -> frozenset[str]:
        return frozenset(self._read_ids)

    def mark_read(self, notification_id: str) -> None:
        self._read_ids.add(notification_id)
