"""Error hierarchy for the Promissio backend.

Every error carries a stable machine code, the HTTP status the API answers
with, and a severity that decides how loudly it is logged. Errors log
themselves once, at construction, through the standard ``logging`` module so
that this module stays importable before structured logging is configured.
"""

import logging
import uuid
from collections.abc import Mapping
from enum import Enum
from typing import Any

REDACTED = "***REDACTED***"
_REDACTED_KEY_PARTS = ("password", "token", "secret", "credential", "authorization")


class ErrorSeverity(Enum):
    """How loudly an error is logged."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


_LOG_LEVELS = {
    ErrorSeverity.LOW: logging.INFO,
    ErrorSeverity.MEDIUM: logging.WARNING,
    ErrorSeverity.HIGH: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


def redact(details: Mapping[str, Any]) -> dict[str, Any]:
    """Copy of ``details`` with credential-like keys masked, nested mappings included."""
    redacted = {}
    for key, value in details.items():
        if any(part in key.lower() for part in _REDACTED_KEY_PARTS):
            redacted[key] = REDACTED
        elif isinstance(value, Mapping):
            redacted[key] = redact(value)
        else:
            redacted[key] = value
    return redacted


class PromissioError(Exception):
    """
    Base exception for all Promissio errors.

    Usage Example:
        raise PromissioError(
            "Audit store unavailable",
            code="AUDIT_UNAVAILABLE",
            recovery_hint="Retry in a few seconds",
        )
    """

    default_code = "ERROR"
    status_code = 500
    severity = ErrorSeverity.MEDIUM
    retryable = False

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        user_message: str | None = None,
        recovery_hint: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = dict(details or {})
        self.user_message = user_message or message
        self.recovery_hint = recovery_hint
        self.error_id = str(uuid.uuid4())
        if cause is not None:
            self.__cause__ = cause

        self._log_error()

    def _log_error(self) -> None:
        logging.getLogger(f"promissio.errors.{type(self).__name__}").log(
            _LOG_LEVELS[self.severity],
            "%s raised: %s",
            self.code,
            self.message,
            extra={
                "error_id": self.error_id,
                "error_code": self.code,
                "severity": self.severity.value,
                "status_code": self.status_code,
                "error_details": redact(self.details),
            },
        )

    def to_dict(self, include_details: bool = True) -> dict[str, Any]:
        """API error body: ``error`` and ``message``, plus optional extras."""
        body: dict[str, Any] = {"error": self.code, "message": self.user_message}

        if include_details and self.details:
            body["details"] = redact(self.details)
        if self.recovery_hint:
            body["recovery_hint"] = self.recovery_hint
        if self.retryable:
            body["retryable"] = True

        return body

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class DomainError(PromissioError):
    """A domain rule was broken."""

    default_code = "DOMAIN_ERROR"
    status_code = 400


class ApplicationError(PromissioError):
    """A use case cannot proceed with the given input or state."""

    default_code = "APPLICATION_ERROR"
    status_code = 400


class InfrastructureError(PromissioError):
    """Storage, network or other environment failure; usually transient."""

    default_code = "INFRASTRUCTURE_ERROR"
    severity = ErrorSeverity.HIGH
    retryable = True


class ConfigurationError(InfrastructureError):
    default_code = "CONFIGURATION_ERROR"
    severity = ErrorSeverity.CRITICAL
    retryable = False


class ValidationError(ApplicationError):
    """
    Rejected input.

    ``field`` names the single offending input; ``field_errors`` maps several
    inputs to their messages.
    """

    default_code = "VALIDATION_ERROR"
    status_code = 422
    severity = ErrorSeverity.LOW

    def __init__(
        self,
        message: str,
        field: str | None = None,
        field_errors: dict[str, list[str]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        if field:
            self.details["field"] = field
        if field_errors:
            self.details["field_errors"] = field_errors

    @classmethod
    def from_fields(cls, field_errors: dict[str, list[str]], **kwargs: Any) -> "ValidationError":
        """One error summarising messages for several fields."""
        messages = [message for errors in field_errors.values() for message in errors]
        return cls("; ".join(messages) or "Invalid input", field_errors=field_errors, **kwargs)


class NotFoundError(ApplicationError):
    default_code = "NOT_FOUND"
    status_code = 404
    severity = ErrorSeverity.LOW

    def __init__(self, resource: str, identifier: Any, **kwargs: Any) -> None:
        kwargs.setdefault("user_message", f"The requested {resource.lower()} was not found")
        super().__init__(f"{resource} not found: {identifier}", **kwargs)
        self.resource = resource
        self.identifier = str(identifier)
        self.details.update(resource=resource, identifier=self.identifier)


class UnauthorizedError(ApplicationError):
    """The REST API rejected the caller's credentials (HTTP 401)."""

    default_code = "UNAUTHORIZED"
    status_code = 401

    def __init__(self, message: str = "Authentication required", **kwargs: Any) -> None:
        kwargs.setdefault("user_message", "Please log in to access this resource")
        kwargs.setdefault("recovery_hint", "Sign in again")
        super().__init__(message, **kwargs)


class ExternalServiceError(InfrastructureError):
    """A collaborating service failed or answered with a non-success status."""

    default_code = "EXTERNAL_SERVICE_ERROR"
    status_code = 502

    def __init__(
        self,
        message: str,
        service: str,
        upstream_status: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.service = service
        self.upstream_status = upstream_status
        self.details.update(service=service, upstream_status=upstream_status)


__all__ = [
    "ApplicationError",
    "ConfigurationError",
    "DomainError",
    "ErrorSeverity",
    "ExternalServiceError",
    "InfrastructureError",
    "NotFoundError",
    "PromissioError",
    "UnauthorizedError",
    "ValidationError",
    "redact",
]
