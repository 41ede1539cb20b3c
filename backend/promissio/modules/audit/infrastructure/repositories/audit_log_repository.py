"""Read-only SQL repository for audit logs."""

from datetime import datetime

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from promissio.core.database import strpos
from promissio.core.logging import get_logger
from promissio.modules.audit.application.dtos.audit_log_filter_dto import (
    AuditLogFilterDTO,
)
from promissio.modules.audit.domain.entities.audit_log_entry import (
    AuditActor,
    AuditLogEntry,
)
from promissio.modules.audit.domain.enums import ActionCategory
from promissio.modules.audit.infrastructure.models import AuditLogModel
from promissio.modules.identity.infrastructure.models import UserModel
from promissio.utils.date import ensure_utc

logger = get_logger(__name__)


class AuditLogRepository:
    """
    Audit log queries over an async session.

    Filters are AND-combined. ``action`` matches as a literal, case-sensitive
    substring so that ``Created`` selects every creation regardless of entity
    type; ``%`` and ``_`` carry no wildcard meaning.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_filter(self, filters: AuditLogFilterDTO) -> list[AuditLogEntry]:
        """Entries matching all filters, newest first."""
        conditions = []

        if filters.action:
            conditions.append(strpos(AuditLogModel.action, filters.action) > 0)

        if filters.user_id:
            conditions.append(AuditLogModel.user_id == filters.user_id)

        if filters.start_date:
            conditions.append(AuditLogModel.created_at >= _stored(filters.start_date))

        if filters.end_date:
            conditions.append(AuditLogModel.created_at <= _stored(filters.end_date))

        stmt = select(AuditLogModel, UserModel).outerjoin(
            UserModel, AuditLogModel.user_id == UserModel.id
        )
        if conditions:
            stmt = stmt.where(and_(*conditions))
        stmt = stmt.order_by(AuditLogModel.created_at.desc(), AuditLogModel.id)

        result = await self.session.execute(stmt)
        entries = [self._model_to_entity(log, user) for log, user in result.all()]

        logger.debug("Audit logs loaded", count=len(entries))
        return entries

    async def fetch_audit_logs(self, filters: AuditLogFilterDTO) -> list[AuditLogEntry]:
        return await self.find_by_filter(filters)

    @staticmethod
    def _model_to_entity(model: AuditLogModel, user: UserModel | None) -> AuditLogEntry:
        actor = None
        if user is not None:
            actor = AuditActor(
                id=user.id,
                email=user.email,
                first_name=user.first_name,
                last_name=user.last_name,
            )

        return AuditLogEntry(
            id=model.id,
            action=model.action,
            created_at=model.created_at,
            user=actor,
            entity_type=model.entity_type,
            entity_id=model.entity_id,
            previous_values=model.old_values,
            new_values=model.new_values,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            category=ActionCategory.parse(model.category),
        )


def _stored(value: datetime) -> datetime:
    """Timestamps are stored as naive UTC."""
    return ensure_utc(value).replace(tzinfo=None)
