"""Read-side CQRS primitives.

A ``Query`` is an immutable request for information and a ``QueryHandler``
answers exactly one query type. Nothing here writes; audit entries and
contracts are owned by other services.
"""

import time
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar
from uuid import uuid4

from promissio.core.errors import ApplicationError
from promissio.core.logging import get_logger

logger = get_logger(__name__)

TQuery = TypeVar("TQuery", bound="Query")
TResult = TypeVar("TResult")


class Query(ABC):
    """
    Immutable request for information.

    Subclasses set their fields after ``super().__init__()`` and then call
    ``_freeze()``; later assignments raise ``AttributeError``.

    Usage Example:
        class GetContractQuery(Query):
            def __init__(self, contract_id: str):
                super().__init__()
                self.contract_id = contract_id
                self._freeze()
    """

    def __init__(self):
        self.query_id = uuid4()
        self.issued_at = datetime.now(UTC)
        self._frozen = False

    def _freeze(self) -> None:
        self._frozen = True

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise AttributeError(
                f"{type(self).__name__} is immutable; cannot set {name!r}"
            )
        super().__setattr__(name, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.query_id})"


class QueryHandler(ABC, Generic[TQuery, TResult]):
    """
    Answers one query type.

    Callers go through ``execute``, which checks the query type and logs the
    outcome; subclasses implement ``handle``.
    """

    @property
    @abstractmethod
    def query_type(self) -> type[TQuery]:
        """Query class this handler answers."""

    @abstractmethod
    async def handle(self, query: TQuery) -> TResult:
        """Produce the result for ``query``."""

    async def execute(self, query: TQuery) -> TResult:
        """
        Run ``handle`` for ``query``.

        Raises:
            ApplicationError: If ``query`` is not of the handled type
        """
        if not isinstance(query, self.query_type):
            raise ApplicationError(
                f"{type(self).__name__} cannot handle {type(query).__name__}",
                code="UNSUPPORTED_QUERY",
            )

        log = logger.bind(query=type(query).__name__, query_id=str(query.query_id))
        started = time.perf_counter()
        try:
            result = await self.handle(query)
        except Exception:
            log.exception("Query failed", elapsed=time.perf_counter() - started)
            raise

        log.debug("Query handled", elapsed=time.perf_counter() - started)
        return result


__all__ = ["Query", "QueryHandler"]
