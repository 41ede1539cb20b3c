"""Contract read model."""

from datetime import date, datetime
from enum import Enum
from typing import Any

from promissio.core.domain.base import Entity
from promissio.core.errors import ValidationError
from promissio.utils.date import ensure_utc, parse_date, parse_datetime


class ContractStatus(str, Enum):
    """Lifecycle status of a licensing contract."""

    ACTIVE = "Active"
    EXPIRED = "Expired"
    PENDING = "Pending"
    TERMINATED = "Terminated"
    DRAFT = "Draft"

    @classmethod
    def parse(cls, value: "str | ContractStatus") -> "str | ContractStatus":
        """Known labels become members; unknown labels are kept verbatim."""
        try:
            return cls(value)
        except ValueError:
            return value


class Contract(Entity):
    """
    A rights/licensing agreement with a validity window and status.

    Attributes:
        id: Opaque contract identifier
        partner: Counterparty display name
        content: Optional free-text label of the licensed content
        status: ContractStatus, or the raw label when unrecognised
        start_date: Optional first day of validity
        end_date: Optional last day of validity
        created_at: Creation timestamp (UTC)
    """

    def __init__(
        self,
        id: str,
        partner: str,
        status: "str | ContractStatus",
        created_at: datetime,
        content: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ):
        super().__init__(id)

        self.validate_not_empty(partner, "partner")
        self.validate_not_empty(status, "status")
        if not isinstance(created_at, datetime):
            raise ValidationError("created_at must be a datetime", field="created_at")

        self.partner = partner
        self.content = content or None
        self.status = ContractStatus.parse(status)
        self.start_date = start_date
        self.end_date = end_date
        self.created_at = ensure_utc(created_at)

        self._freeze()

    @property
    def label(self) -> str:
        """Partner name followed by the content label when there is one."""
        if self.content:
            return f"{self.partner} - {self.content}"
        return self.partner

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Contract":
        """Build a contract from its JSON wire representation."""
        try:
            return cls(
                id=data["id"],
                partner=data["partner"],
                status=data["status"],
                content=data.get("content"),
                start_date=parse_date(data["startDate"], "startDate")
                if data.get("startDate")
                else None,
                end_date=parse_date(data["endDate"], "endDate")
                if data.get("endDate")
                else None,
                created_at=parse_datetime(data["createdAt"], "createdAt"),
            )
        except KeyError as e:
            raise ValidationError(
                f"Contract payload is missing {e.args[0]}", field=e.args[0]
            ) from e

    def to_wire(self) -> dict[str, Any]:
        """JSON wire representation (camelCase keys)."""
        return {
            "id": self.id,
            "partner": self.partner,
            "content": self.content,
            "status": str(getattr(self.status, "value", self.status)),
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "createdAt": self.created_at.isoformat(),
        }

    def __str__(self) -> str:
        return f"Contract({self.id}, {self.label})"


__all__ = ["Contract", "ContractStatus"]
