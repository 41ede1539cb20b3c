"""Get audit logs query."""

from promissio.core.cqrs.base import Query, QueryHandler
from promissio.core.logging import get_logger
from promissio.modules.audit.application.dtos.audit_log_filter_dto import (
    AuditLogFilterDTO,
)
from promissio.modules.audit.domain.entities.audit_log_entry import AuditLogEntry
from promissio.modules.audit.domain.interfaces.audit_log_source import AuditLogSource

logger = get_logger(__name__)


class GetAuditLogsQuery(Query):
    """Query for audit entries matching every supplied filter."""

    def __init__(self, filters: AuditLogFilterDTO | None = None):
        super().__init__()
        self.filters = filters or AuditLogFilterDTO()
        self._freeze()


class GetAuditLogsQueryHandler(QueryHandler[GetAuditLogsQuery, list[AuditLogEntry]]):
    """Handler reading filtered audit entries from an audit log source."""

    def __init__(self, audit_source: AuditLogSource):
        self.audit_source = audit_source

    async def handle(self, query: GetAuditLogsQuery) -> list[AuditLogEntry]:
        """
        Fetch entries, newest first as returned by the source.

        Raises:
            ValidationError: If the start date is after the end date
        """
        filters = query.filters.ensure_valid()

        entries = await self.audit_source.fetch_audit_logs(filters)

        logger.info(
            "Audit logs fetched",
            count=len(entries),
            filters=filters.to_query_params(),
        )
        return entries

    @property
    def query_type(self) -> type[GetAuditLogsQuery]:
        return GetAuditLogsQuery


__all__ = ["GetAuditLogsQuery", "GetAuditLogsQueryHandler"]
