"""Notification value object."""

from datetime import datetime

from promissio.core.domain.base import ValueObject
from promissio.core.errors import ValidationError
from promissio.modules.notification.domain.enums import NotificationKind
from promissio.utils.date import ensure_utc


class Notification(ValueObject):
    """
    A user-facing alert derived from one contract.

    The id is ``"{kind}-{contract_id}"``, unique per (kind, contract) within a
    derivation pass. Nothing about a notification survives the pass that
    built it.

    Attributes:
        kind: Why the contract surfaced
        title: Short headline, e.g. "Expiring in 5 days"
        description: Partner name, with the content label when present
        date: Instant the notification is anchored to (expiry or creation)
        contract_id: Contract this notification points at
    """

    def __init__(
        self,
        kind: NotificationKind,
        title: str,
        description: str,
        date: datetime,
        contract_id: str,
    ):
        super().__init__()

        if not isinstance(kind, NotificationKind):
            raise ValidationError("kind must be a NotificationKind", field="kind")
        self.validate_not_empty(title, "title")
        self.validate_not_empty(contract_id, "contract_id")

        self.id = f"{kind.value}-{contract_id}"
        self.kind = kind
        self.title = title
        self.description = description
        self.date = ensure_utc(date)
        self.contract_id = contract_id

        self._freeze()

    def __str__(self) -> str:
        return f"{self.title}: {self.description}"
