from .audit_client import HttpAuditLogClient

__all__ = ["HttpAuditLogClient"]
