from .get_audit_logs_query import GetAuditLogsQuery, GetAuditLogsQueryHandler

__all__ = ["GetAuditLogsQuery", "GetAuditLogsQueryHandler"]
