"""Get contract notifications query.

Fetches the contract collection and derives the notification feed at the
handler's clock time.
"""

from datetime import datetime

from promissio.core.cqrs.base import Query, QueryHandler
from promissio.core.logging import get_logger
from promissio.modules.contracts.domain.interfaces.contract_source import (
    ContractSource,
)
from promissio.modules.notification.domain.services.notification_deriver import (
    NotificationDeriver,
)
from promissio.modules.notification.domain.value_objects.notification import (
    Notification,
)
from promissio.utils.date import Clock, utc_now

logger = get_logger(__name__)


class GetContractNotificationsQuery(Query):
    """
    Query for the current notification feed.

    ``now`` pins the reference instant; when omitted the handler's clock is
    read at handling time.
    """

    def __init__(self, now: datetime | None = None):
        super().__init__()
        self.now = now
        self._freeze()


class GetContractNotificationsQueryHandler(
    QueryHandler[GetContractNotificationsQuery, list[Notification]]
):
    """Handler deriving notifications from a contract source."""

    def __init__(
        self,
        contract_source: ContractSource,
        deriver: NotificationDeriver | None = None,
        clock: Clock = utc_now,
    ):
        """
        Initialize handler.

        Args:
            contract_source: Where contracts are read from
            deriver: Derivation rules (30-day window, 10 entries by default)
            clock: Time source used when the query does not pin ``now``
        """
        self.contract_source = contract_source
        self.deriver = deriver or NotificationDeriver()
        self.clock = clock

    async def handle(self, query: GetContractNotificationsQuery) -> list[Notification]:
        contracts = await self.contract_source.fetch_contracts()
        now = query.now if query.now is not None else self.clock()

        notifications = self.deriver.derive(contracts, now)

        logger.debug(
            "Notifications derived",
            contract_count=len(contracts),
            notification_count=len(notifications),
        )
        return notifications

    @property
    def query_type(self) -> type[GetContractNotificationsQuery]:
        return GetContractNotificationsQuery


__all__ = ["GetContractNotificationsQuery", "GetContractNotificationsQueryHandler"]
