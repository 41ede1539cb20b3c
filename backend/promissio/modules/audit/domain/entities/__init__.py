from .audit_log_entry import AuditActor, AuditLogEntry

__all__ = ["AuditActor", "AuditLogEntry"]
