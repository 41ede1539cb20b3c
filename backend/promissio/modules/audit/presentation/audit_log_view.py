"""Audit log view model.

Backs the activity log screen: a reverse-chronological list of rows and a
detail overlay for one selected entry. The view owns only ambient UI state
(current filters, loaded entries, selection); fetching goes through the
audit query handler.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from promissio.core.errors import ApplicationError, NotFoundError
from promissio.core.logging import get_logger
from promissio.modules.audit.application.dtos.audit_log_filter_dto import (
    AuditLogFilterDTO,
)
from promissio.modules.audit.application.queries.get_audit_logs_query import (
    GetAuditLogsQuery,
    GetAuditLogsQueryHandler,
)
from promissio.modules.audit.domain.entities.audit_log_entry import AuditLogEntry
from promissio.modules.audit.domain.enums import ActionCategory
from promissio.utils.date import format_display

logger = get_logger(__name__)

EMPTY_LOG_MESSAGE = "No audit logs found for the selected criteria."
SYSTEM_ACTOR = "System"
UNKNOWN_INITIALS = "?"
PLACEHOLDER = "-"
ENTITY_ID_PREVIEW_LENGTH = 8


class OverlayState(Enum):
    CLOSED = "closed"
    OPEN = "open"


def actor_name(entry: AuditLogEntry) -> str:
    """Display name of the acting user, ``System`` when there is none."""
    if entry.user is None:
        return SYSTEM_ACTOR
    return entry.user.display_name


def actor_initials(entry: AuditLogEntry) -> str:
    if entry.user is None:
        return UNKNOWN_INITIALS
    return entry.user.initials


def truncate_entity_id(entity_id: str | None) -> str | None:
    if not entity_id:
        return None
    return f"{entity_id[:ENTITY_ID_PREVIEW_LENGTH]}..."


def pretty_values(values: Mapping[str, Any] | None) -> str | None:
    """Two-space indented JSON, or ``None`` for a missing or empty snapshot."""
    if not values:
        return None
    return json.dumps(dict(values), indent=2, ensure_ascii=False, default=str)


@dataclass(frozen=True)
class AuditLogRow:
    """One list row of the activity log."""

    id: str
    initials: str
    action: str
    category: ActionCategory
    actor_name: str
    entity_type: str | None
    entity_id: str | None
    ip_address: str | None
    timestamp: str

    @property
    def color(self) -> str:
        return self.category.color

    @property
    def summary(self) -> str:
        """E.g. ``Jane Doe performed action on contract (ID: 3f2a9c1e...)``."""
        text = self.actor_name
        if self.entity_type:
            text += f" performed action on {self.entity_type}"
        if self.entity_id:
            text += f" (ID: {self.entity_id})"
        return text

    @classmethod
    def from_entry(cls, entry: AuditLogEntry) -> "AuditLogRow":
        return cls(
            id=entry.id,
            initials=actor_initials(entry),
            action=entry.action,
            category=entry.effective_category,
            actor_name=actor_name(entry),
            entity_type=entry.entity_type,
            entity_id=truncate_entity_id(entry.entity_id),
            ip_address=entry.ip_address,
            timestamp=format_display(entry.created_at),
        )


@dataclass(frozen=True)
class AuditLogDetail:
    """
    Content of the detail overlay.

    Snapshots and the user agent are ``None`` when there is nothing to show.
    """

    id: str
    action: str
    timestamp: str
    actor_name: str
    entity_type: str
    entity_id: str
    ip_address: str
    previous_values: str | None
    new_values: str | None
    user_agent: str | None

    @classmethod
    def from_entry(cls, entry: AuditLogEntry) -> "AuditLogDetail":
        return cls(
            id=entry.id,
            action=entry.action,
            timestamp=format_display(entry.created_at, with_seconds=True),
            actor_name=actor_name(entry),
            entity_type=entry.entity_type or PLACEHOLDER,
            entity_id=entry.entity_id or PLACEHOLDER,
            ip_address=entry.ip_address or PLACEHOLDER,
            previous_values=pretty_values(entry.previous_values),
            new_values=pretty_values(entry.new_values),
            user_agent=entry.user_agent or None,
        )


class AuditLogView:
    """
    Activity log state for one screen.

    The overlay is either closed (nothing selected) or open on exactly one
    entry. A ``load`` that completes after a newer ``load`` was started is
    discarded.

    Usage Example:
        view = AuditLogView(handler)
        await view.load(AuditLogFilterDTO(action="Created"))
        detail = view.select(view.rows()[0].id)
        view.dismiss()
    """

    def __init__(self, handler: GetAuditLogsQueryHandler):
        self.handler = handler
        self.filters = AuditLogFilterDTO()
        self.entries: list[AuditLogEntry] = []
        self._selected: AuditLogEntry | None = None
        self._generation = 0

    async def load(self, filters: AuditLogFilterDTO | None = None) -> list[AuditLogEntry]:
        """
        Fetch entries for ``filters`` and make them the current result.

        Raises:
            ValidationError: If the filter date range is inverted
            UnauthorizedError: If the audit source rejects the caller
            ExternalServiceError: If the audit source fails
        """
        self._generation += 1
        generation = self._generation
        filters = filters or AuditLogFilterDTO()

        entries = await self.handler.execute(GetAuditLogsQuery(filters))

        if generation != self._generation:
            logger.debug("Superseded audit log result discarded", generation=generation)
            return self.entries

        self.filters = filters
        self.entries = list(entries)
        if self._selected is not None:
            self._selected = self._find(self._selected.id)

        return self.entries

    def rows(self) -> list[AuditLogRow]:
        return [AuditLogRow.from_entry(entry) for entry in self.entries]

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def empty_message(self) -> str | None:
        return EMPTY_LOG_MESSAGE if self.is_empty else None

    @property
    def state(self) -> OverlayState:
        return OverlayState.CLOSED if self._selected is None else OverlayState.OPEN

    @property
    def selected(self) -> AuditLogEntry | None:
        return self._selected

    def select(self, entry_id: str) -> AuditLogDetail:
        """
        Open the overlay on an entry of the current result.

        Raises:
            NotFoundError: If no loaded entry has this id
        """
        entry = self._find(entry_id)
        if entry is None:
            raise NotFoundError("Audit log", entry_id)

        self._selected = entry
        return AuditLogDetail.from_entry(entry)

    def dismiss(self) -> None:
        self._selected = None

    def detail(self) -> AuditLogDetail:
        """
        Detail of the selected entry.

        Raises:
            ApplicationError: If the overlay is closed
        """
        if self._selected is None:
            raise ApplicationError("No audit log entry is selected")
        return AuditLogDetail.from_entry(self._selected)

    def _find(self, entry_id: str) -> AuditLogEntry | None:
        return next((entry for entry in self.entries if entry.id == entry_id), None)


__all__ = [
    "AuditLogDetail",
    "AuditLogRow",
    "AuditLogView",
    "OverlayState",
    "actor_initials",
    "actor_name",
    "pretty_values",
    "truncate_entity_id",
]
