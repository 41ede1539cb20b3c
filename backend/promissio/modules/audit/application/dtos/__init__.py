from .audit_log_filter_dto import AuditLogFilterDTO

__all__ = ["AuditLogFilterDTO"]
