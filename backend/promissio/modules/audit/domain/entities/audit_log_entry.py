"""Audit log entry read model.

Entries are immutable records of state-changing actions. They are created
server-side by the services performing the mutation; this code only reads
and displays them.
"""

from collections.abc import Mapping
from datetime import datetime
from types import MappingProxyType
from typing import Any

from promissio.core.domain.base import Entity, ValueObject
from promissio.core.errors import ValidationError
from promissio.modules.audit.domain.enums import ActionCategory
from promissio.utils.date import ensure_utc, parse_datetime


class AuditActor(ValueObject):
    """The user who performed an audited action."""

    def __init__(
        self,
        id: str,
        email: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
    ):
        super().__init__()
        self.validate_not_empty(id, "id")

        self.id = str(id)
        self.email = email or None
        self.first_name = first_name or None
        self.last_name = last_name or None

        self._freeze()

    @property
    def display_name(self) -> str:
        """Full name, falling back to the email address."""
        full_name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return full_name or self.email or ""

    @property
    def initials(self) -> str:
        """First letters of first and last name, else of the email, else ``?``."""
        initials = f"{(self.first_name or '')[:1]}{(self.last_name or '')[:1]}".upper()
        if initials:
            return initials
        if self.email:
            return self.email[:1].upper()
        return "?"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AuditActor":
        return cls(
            id=data["id"],
            email=data.get("email"),
            first_name=data.get("firstName"),
            last_name=data.get("lastName"),
        )

    def to_wire(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
        }

    def __str__(self) -> str:
        return self.display_name or self.id


def _snapshot(values: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    """Read-only copy of a value snapshot; ``None`` stays ``None``."""
    if values is None:
        return None
    if not isinstance(values, Mapping):
        raise ValidationError("Value snapshots must be key/value mappings")
    return MappingProxyType(dict(values))


class AuditLogEntry(Entity):
    """
    One recorded action.

    Attributes:
        action: Free-text action label, e.g. "Contract Created"
        user: Acting user; ``None`` for system-initiated actions
        entity_type: Type of the affected record
        entity_id: Identifier of the affected record
        previous_values: Snapshot before the change
        new_values: Snapshot after the change
        ip_address: Request origin
        user_agent: Request client
        created_at: When the action was recorded (UTC)
        category: Category supplied by the writer, if any
    """

    def __init__(
        self,
        id: str,
        action: str,
        created_at: datetime,
        user: AuditActor | None = None,
        entity_type: str | None = None,
        entity_id: str | None = None,
        previous_values: Mapping[str, Any] | None = None,
        new_values: Mapping[str, Any] | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
        category: ActionCategory | None = None,
    ):
        super().__init__(id)
        self.validate_not_empty(action, "action")
        if not isinstance(created_at, datetime):
            raise ValidationError("created_at must be a datetime", field="created_at")

        self.action = action
        self.user = user
        self.entity_type = entity_type or None
        self.entity_id = str(entity_id) if entity_id else None
        self.previous_values = _snapshot(previous_values)
        self.new_values = _snapshot(new_values)
        self.ip_address = ip_address or None
        self.user_agent = user_agent or None
        self.created_at = ensure_utc(created_at)
        self.category = category

        self._freeze()

    @property
    def is_system_action(self) -> bool:
        return self.user is None

    @property
    def effective_category(self) -> ActionCategory:
        """Explicit category when supplied, otherwise inferred from the label."""
        return self.category or ActionCategory.from_action(self.action)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AuditLogEntry":
        """
        Build an entry from its JSON wire representation.

        Accepts ``oldValues`` as an alias of ``previousValues``.

        Raises:
            ValidationError: If a required field is missing or malformed
        """
        try:
            user_data = data.get("user")
            previous_values = data.get("previousValues")
            if previous_values is None:
                previous_values = data.get("oldValues")

            return cls(
                id=data["id"],
                action=data["action"],
                created_at=parse_datetime(data["createdAt"], "createdAt"),
                user=AuditActor.from_dict(user_data) if user_data else None,
                entity_type=data.get("entityType"),
                entity_id=data.get("entityId"),
                previous_values=previous_values,
                new_values=data.get("newValues"),
                ip_address=data.get("ipAddress"),
                user_agent=data.get("userAgent"),
                category=ActionCategory.parse(data.get("category")),
            )
        except KeyError as e:
            raise ValidationError(
                f"Audit log payload is missing {e.args[0]}", field=e.args[0]
            ) from e

    def to_wire(self) -> dict[str, Any]:
        """JSON wire representation (camelCase keys)."""
        return {
            "id": self.id,
            "action": self.action,
            "category": self.category.value if self.category else None,
            "user": self.user.to_wire() if self.user else None,
            "entityType": self.entity_type,
            "entityId": self.entity_id,
            "previousValues": dict(self.previous_values)
            if self.previous_values is not None
            else None,
            "newValues": dict(self.new_values) if self.new_values is not None else None,
            "ipAddress": self.ip_address,
            "userAgent": self.user_agent,
            "createdAt": self.created_at.isoformat(),
        }

    def __str__(self) -> str:
        return f"AuditLogEntry({self.id}, {self.action})"


__all__ = ["AuditActor", "AuditLogEntry"]
