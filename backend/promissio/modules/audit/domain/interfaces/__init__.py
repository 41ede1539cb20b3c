from .audit_log_source import AuditLogSource

__all__ = ["AuditLogSource"]
