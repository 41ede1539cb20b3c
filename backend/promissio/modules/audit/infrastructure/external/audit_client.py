"""HTTP implementation of the audit log source."""

from promissio.core.errors import ExternalServiceError, ValidationError
from promissio.core.infrastructure.http_client import RestApiClient
from promissio.core.logging import get_logger
from promissio.modules.audit.application.dtos.audit_log_filter_dto import (
    AuditLogFilterDTO,
)
from promissio.modules.audit.domain.entities.audit_log_entry import AuditLogEntry

logger = get_logger(__name__)

AUDIT_PATH = "/api/audit"


class HttpAuditLogClient(RestApiClient):
    """Reads filtered audit entries from ``GET /api/audit``."""

    async def fetch_audit_logs(
        self, filters: AuditLogFilterDTO | None = None
    ) -> list[AuditLogEntry]:
        params = (filters or AuditLogFilterDTO()).to_query_params()
        payload = await self.get_json(AUDIT_PATH, params=params)

        if not isinstance(payload, list):
            raise ExternalServiceError(
                "Audit log listing must be a JSON array", service=self.service_name
            )

        try:
            entries = [AuditLogEntry.from_dict(item) for item in payload]
        except ValidationError as e:
            raise ExternalServiceError(
                f"Malformed audit entry in listing: {e.message}",
                service=self.service_name,
                cause=e,
            ) from e

        logger.debug("Audit logs fetched", count=len(entries), params=params)
        return entries
