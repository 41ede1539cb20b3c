"""Response schemas for the audit trail."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from promissio.modules.audit.domain.entities.audit_log_entry import (
    AuditActor,
    AuditLogEntry,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuditActorResponse(_CamelModel):
    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    @classmethod
    def from_domain(cls, actor: AuditActor) -> "AuditActorResponse":
        return cls(
            id=actor.id,
            email=actor.email,
            first_name=actor.first_name,
            last_name=actor.last_name,
        )


class AuditLogEntryResponse(_CamelModel):
    """Audit entry as served by ``GET /api/audit``."""

    id: str
    action: str
    category: str | None = Field(None, description="Category set by the writer")
    user: AuditActorResponse | None = None
    entity_type: str | None = None
    entity_id: str | None = None
    previous_values: dict[str, Any] | None = None
    new_values: dict[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime

    @classmethod
    def from_domain(cls, entry: AuditLogEntry) -> "AuditLogEntryResponse":
        return cls(
            id=entry.id,
            action=entry.action,
            category=entry.category.value if entry.category else None,
            user=AuditActorResponse.from_domain(entry.user) if entry.user else None,
            entity_type=entry.entity_type,
            entity_id=entry.entity_id,
            previous_values=dict(entry.previous_values)
            if entry.previous_values is not None
            else None,
            new_values=dict(entry.new_values) if entry.new_values is not None else None,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            created_at=entry.created_at,
        )
