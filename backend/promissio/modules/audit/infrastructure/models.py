"""Audit log table model."""

from uuid import uuid4

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func

from promissio.core.database import Base

# JSONB on PostgreSQL, plain JSON elsewhere.
JsonSnapshot = JSON().with_variant(JSONB(), "postgresql")


class AuditLogModel(Base):
    """Immutable record of a state-changing action."""

    __tablename__ = "audit_logs"
    __table_args__ = (
        Index("idx_audit_logs_created_at", "created_at"),
        Index("idx_audit_logs_user_created", "user_id", "created_at"),
        Index("idx_audit_logs_entity", "entity_type", "entity_id"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid4()))
    action = Column(String, nullable=False)
    category = Column(String(16))
    entity_type = Column(String)
    entity_id = Column(String)
    old_values = Column(JsonSnapshot)
    new_values = Column(JsonSnapshot)
    user_id = Column(String, ForeignKey("users.id"))
    ip_address = Column(String(45))
    user_agent = Column(Text)
    created_at = Column(DateTime, nullable=False, default=func.now())
