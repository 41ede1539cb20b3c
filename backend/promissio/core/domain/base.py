"""Domain building blocks.

Both kinds of domain object are frozen once constructed: a ``ValueObject``
is equal to another with the same public attributes, an ``Entity`` to
another with the same ``id``.
"""

from abc import ABC
from collections.abc import Mapping
from typing import Any

from promissio.core.errors import ValidationError


def _hashable(value: Any) -> Any:
    if isinstance(value, Mapping):
        return tuple(sorted((key, _hashable(item)) for key, item in value.items()))
    if isinstance(value, list | tuple):
        return tuple(_hashable(item) for item in value)
    if isinstance(value, set | frozenset):
        return frozenset(_hashable(item) for item in value)
    return value


class _Frozen(ABC):
    def __init__(self):
        self._frozen = False

    def _freeze(self) -> None:
        self._frozen = True

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False) and not name.startswith("_cached"):
            raise AttributeError(f"{type(self).__name__} is read-only")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if getattr(self, "_frozen", False):
            raise AttributeError(f"{type(self).__name__} is read-only")
        super().__delattr__(name)

    def _fields(self) -> dict[str, Any]:
        return {k: v for k, v in vars(self).items() if not k.startswith("_")}

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self._fields().items())
        return f"{type(self).__name__}({fields})"

    @staticmethod
    def validate_not_empty(value: Any, field_name: str) -> None:
        """
        Reject ``None`` and blank strings.

        Raises:
            ValidationError: Naming ``field_name``
        """
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{field_name} cannot be empty", field=field_name)


class ValueObject(_Frozen):
    """
    Identity-less value.

    Usage Example:
        class Money(ValueObject):
            def __init__(self, amount: Decimal, currency: str):
                super().__init__()
                self.amount = amount
                self.currency = currency.upper()
                self._freeze()
    """

    def __eq__(self, other: Any) -> bool:
        return type(other) is type(self) and self._fields() == other._fields()

    def __hash__(self) -> int:
        cached = getattr(self, "_cached_hash", None)
        if cached is None:
            cached = hash(
                (type(self).__name__, _hashable(self._fields()))
            )
            self._cached_hash = cached
        return cached


class Entity(_Frozen):
    """Read model owned by another service, identified by ``id``."""

    def __init__(self, entity_id: str):
        super().__init__()
        self.validate_not_empty(entity_id, "id")
        self.id = str(entity_id)

    def __eq__(self, other: Any) -> bool:
        return type(other) is type(self) and self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))


__all__ = ["Entity", "ValueObject"]
