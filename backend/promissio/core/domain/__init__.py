"""Domain primitives."""

from .base import Entity, ValueObject

__all__ = ["Entity", "ValueObject"]
