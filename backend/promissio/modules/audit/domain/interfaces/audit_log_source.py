"""Port for querying the audit trail."""

from typing import TYPE_CHECKING, Protocol

from promissio.modules.audit.domain.entities.audit_log_entry import AuditLogEntry

if TYPE_CHECKING:
    from promissio.modules.audit.application.dtos.audit_log_filter_dto import (
        AuditLogFilterDTO,
    )


class AuditLogSource(Protocol):
    """
    Executes an audit query.

    The source AND-combines the filter fields and decides ordering; callers
    receive entries in source order.
    """

    async def fetch_audit_logs(self, filters: "AuditLogFilterDTO") -> list[AuditLogEntry]:
        ...
