"""Query side of the CQRS layer."""

from .base import Query, QueryHandler

__all__ = ["Query", "QueryHandler"]
