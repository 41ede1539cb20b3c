"""Audit log filter DTO.

Filter criteria for the activity log. Every field is optional; the query
side AND-combines whatever is present. Absent fields are left out of the
outgoing request entirely rather than sent as wildcards.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime

from promissio.core.errors import ValidationError
from promissio.utils.date import parse_datetime

# Wire name of each filter field.
QUERY_PARAM_NAMES = {
    "action": "action",
    "user_id": "userId",
    "start_date": "startDate",
    "end_date": "endDate",
}


@dataclass(frozen=True)
class AuditLogFilterDTO:
    """
    Data Transfer Object for audit log filter criteria.

    Attributes:
        action: Substring of the action label
        user_id: Acting user
        start_date: Earliest ``created_at`` (inclusive)
        end_date: Latest ``created_at`` (inclusive)
    """

    action: str | None = None
    user_id: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None

    def validate(self) -> list[str]:
        """
        Validate filter criteria.

        Returns:
            List of validation errors, empty if valid
        """
        errors = []

        if self.start_date and self.end_date and self.start_date > self.end_date:
            errors.append("Start date must be before end date")

        return errors

    def ensure_valid(self) -> "AuditLogFilterDTO":
        """Return self, or raise ValidationError listing every problem."""
        errors = self.validate()
        if errors:
            raise ValidationError.from_fields({"filters": errors})
        return self

    def is_empty(self) -> bool:
        return not self.to_query_params()

    def to_query_params(self) -> dict[str, str]:
        """Query parameters for the present, non-empty fields only."""
        params = {}

        if self.action:
            params[QUERY_PARAM_NAMES["action"]] = self.action

        if self.user_id:
            params[QUERY_PARAM_NAMES["user_id"]] = self.user_id

        if self.start_date:
            params[QUERY_PARAM_NAMES["start_date"]] = self.start_date.isoformat()

        if self.end_date:
            params[QUERY_PARAM_NAMES["end_date"]] = self.end_date.isoformat()

        return params

    @classmethod
    def from_query_params(cls, params: Mapping[str, str | None]) -> "AuditLogFilterDTO":
        """
        Parse wire query parameters; blank values count as absent.

        Raises:
            ValidationError: If a date cannot be parsed
        """

        def present(field_name: str) -> str | None:
            value = params.get(QUERY_PARAM_NAMES[field_name])
            if value is None or not str(value).strip():
                return None
            return str(value).strip()

        start_date = present("start_date")
        end_date = present("end_date")

        return cls(
            action=present("action"),
            user_id=present("user_id"),
            start_date=parse_datetime(start_date, "startDate") if start_date else None,
            end_date=parse_datetime(end_date, "endDate") if end_date else None,
        )


__all__ = ["AuditLogFilterDTO"]
