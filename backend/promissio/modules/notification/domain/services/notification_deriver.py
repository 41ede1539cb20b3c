"""
Notification Deriver

Domain service computing the contract notification feed: a bounded,
newest-first list of alerts derived from the contract collection and a
reference instant.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta

from promissio.core.errors import ValidationError
from promissio.modules.contracts.domain.entities.contract import (
    Contract,
    ContractStatus,
)
from promissio.modules.notification.domain.enums import NotificationKind
from promissio.modules.notification.domain.value_objects.notification import (
    Notification,
)
from promissio.utils.date import (
    calendar_days_between,
    ensure_utc,
    start_of_day,
    utc_now,
)

DEFAULT_WINDOW_DAYS = 30
DEFAULT_LIMIT = 10


class NotificationDeriver:
    """
    Derives notifications from contracts.

    For each contract, in this order:

    - expired: status is Expired and the end date falls within the last
      ``window_days`` days
    - expiring: status is Active and the end date is between today and
      ``window_days`` calendar days ahead, inclusive
    - new: the contract was created within the last ``window_days`` days,
      whatever its status

    One contract may yield several kinds. The merged list is sorted newest
    anchor date first (stable, so emission order breaks ties) and cut to
    ``limit`` entries.
    """

    def __init__(self, window_days: int = DEFAULT_WINDOW_DAYS, limit: int = DEFAULT_LIMIT):
        if window_days < 0:
            raise ValidationError("window_days cannot be negative", field="window_days")
        if limit < 1:
            raise ValidationError("limit must be at least 1", field="limit")

        self.window_days = window_days
        self.limit = limit

    def derive(
        self, contracts: Iterable[Contract], now: datetime | None = None
    ) -> list[Notification]:
        """
        Derive the notification feed.

        Args:
            contracts: Contract collection in source order
            now: Reference instant; wall-clock UTC time when omitted

        Returns:
            At most ``limit`` notifications, sorted by date descending
        """
        now = ensure_utc(now) if now is not None else utc_now()

        notifications: list[Notification] = []
        for contract in contracts:
            notifications.extend(self._derive_for_contract(contract, now))

        notifications.sort(key=lambda notification: notification.date, reverse=True)
        return notifications[: self.limit]

    def _derive_for_contract(self, contract: Contract, now: datetime) -> list[Notification]:
        emitted = []
        for build in (self._expired, self._expiring, self._new):
            notification = build(contract, now)
            if notification is not None:
                emitted.append(notification)
        return emitted

    def _expired(self, contract: Contract, now: datetime) -> Notification | None:
        if contract.status != ContractStatus.EXPIRED or contract.end_date is None:
            return None

        # End dates count from UTC midnight, so the edge day only qualifies at midnight.
        expired_at = start_of_day(contract.end_date)
        if expired_at < now - timedelta(days=self.window_days):
            return None

        return Notification(
            kind=NotificationKind.EXPIRED,
            title="Contract Expired",
            description=contract.label,
            date=expired_at,
            contract_id=contract.id,
        )

    def _expiring(self, contract: Contract, now: datetime) -> Notification | None:
        if contract.status != ContractStatus.ACTIVE or contract.end_date is None:
            return None

        days_remaining = calendar_days_between(now.date(), contract.end_date)
        if not 0 <= days_remaining <= self.window_days:
            return None

        return Notification(
            kind=NotificationKind.EXPIRING,
            title=f"Expiring in {days_remaining} days",
            description=contract.label,
            date=start_of_day(contract.end_date),
            contract_id=contract.id,
        )

    def _new(self, contract: Contract, now: datetime) -> Notification | None:
        if contract.created_at < now - timedelta(days=self.window_days):
            return None

        return Notification(
            kind=NotificationKind.NEW,
            title="New Contract",
            description=contract.label,
            date=contract.created_at,
            contract_id=contract.id,
        )


def derive_notifications(
    contracts: Iterable[Contract], now: datetime | None = None
) -> list[Notification]:
    """Derive notifications with the default 30-day window and limit of 10."""
    return NotificationDeriver().derive(contracts, now)


__all__ = ["DEFAULT_LIMIT", "DEFAULT_WINDOW_DAYS", "NotificationDeriver", "derive_notifications"]
