"""Audit domain layer."""

from .entities.audit_log_entry import AuditActor, AuditLogEntry
from .enums import ActionCategory
from .interfaces.audit_log_source import AuditLogSource

__all__ = ["ActionCategory", "AuditActor", "AuditLogEntry", "AuditLogSource"]
