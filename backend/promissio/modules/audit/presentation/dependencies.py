"""FastAPI dependencies for the audit module."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from promissio.core.database import get_session
from promissio.modules.audit.application.queries.get_audit_logs_query import (
    GetAuditLogsQueryHandler,
)
from promissio.modules.audit.infrastructure.repositories.audit_log_repository import (
    AuditLogRepository,
)


def get_audit_log_repository(
    session: AsyncSession = Depends(get_session),
) -> AuditLogRepository:
    return AuditLogRepository(session)


def get_audit_logs_handler(
    repository: AuditLogRepository = Depends(get_audit_log_repository),
) -> GetAuditLogsQueryHandler:
    return GetAuditLogsQueryHandler(repository)
