"""Audit trail query route."""

from fastapi import APIRouter, Depends, Query

from promissio.modules.audit.application.dtos.audit_log_filter_dto import (
    AuditLogFilterDTO,
)
from promissio.modules.audit.application.queries.get_audit_logs_query import (
    GetAuditLogsQuery,
    GetAuditLogsQueryHandler,
)
from promissio.modules.audit.presentation.dependencies import get_audit_logs_handler
from promissio.modules.audit.presentation.schemas import AuditLogEntryResponse

router = APIRouter()


@router.get("", response_model=list[AuditLogEntryResponse])
async def list_audit_logs(
    action: str | None = Query(None, description="Substring of the action label"),
    user_id: str | None = Query(None, alias="userId"),
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    handler: GetAuditLogsQueryHandler = Depends(get_audit_logs_handler),
) -> list[AuditLogEntryResponse]:
    """
    Audit entries matching every supplied filter, newest first.

    Malformed dates and an inverted date range are rejected with 422.
    """
    filters = AuditLogFilterDTO.from_query_params(
        {
            "action": action,
            "userId": user_id,
            "startDate": start_date,
            "endDate": end_date,
        }
    )
    entries = await handler.execute(GetAuditLogsQuery(filters))
    return [AuditLogEntryResponse.from_domain(entry) for entry in entries]
