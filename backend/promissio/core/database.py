"""Database connection and session management.

Owns the SQLAlchemy async engine and session factory used by the read-only
repositories. The engine is created by ``initialize_database`` during
application startup and disposed by ``shutdown_database``.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import Integer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql.functions import GenericFunction

from promissio.core.config import DatabaseConfig
from promissio.core.errors import InfrastructureError
from promissio.core.logging import get_logger

logger = get_logger(__name__)

DB_NOT_INITIALIZED_MSG = "Database not initialized"


class Base(DeclarativeBase):
    """Declarative base shared by all table models."""


class strpos(GenericFunction):  # noqa: N801
    """
    1-based position of a substring, 0 when absent.

    Case-sensitive and free of LIKE wildcards on every backend: PostgreSQL
    runs ``strpos`` itself, SQLite the equivalent ``instr``.
    """

    type = Integer()
    inherit_cache = True


@compiles(strpos, "sqlite")
def _strpos_sqlite(element, compiler, **kw):
    return f"instr({compiler.process(element.clauses, **kw)})"


class DatabaseManager:
    """
    Engine and session lifecycle.

    In-memory SQLite URLs get a ``StaticPool`` so every session sees the same
    database.
    """

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise InfrastructureError(DB_NOT_INITIALIZED_MSG)
        return self._engine

    def initialize(self) -> None:
        if self._engine is not None:
            return

        engine_kwargs = {"echo": self.config.echo}
        if self.config.url.startswith("sqlite") and ":memory:" in self.config.url:
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}

        self._engine = create_async_engine(self.config.url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self._engine, class_=AsyncSession, expire_on_commit=False
        )
        logger.info("Database engine created", driver=self._engine.url.drivername)

    async def create_tables(self) -> None:
        """Create every table registered on ``Base`` (development and tests)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def shutdown(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        if self._session_factory is None:
            raise InfrastructureError(DB_NOT_INITIALIZED_MSG)

        async with self._session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                logger.exception("Database session failed", error=str(e))
                raise InfrastructureError(f"Database operation failed: {e}", cause=e) from e


_database_manager: DatabaseManager | None = None


def initialize_database(config: DatabaseConfig) -> DatabaseManager:
    """Create the global database manager."""
    global _database_manager  # noqa: PLW0603

    _database_manager = DatabaseManager(config)
    _database_manager.initialize()
    return _database_manager


async def shutdown_database() -> None:
    """Dispose the global engine."""
    if _database_manager is not None:
        await _database_manager.shutdown()


def get_database_manager() -> DatabaseManager:
    if _database_manager is None:
        raise InfrastructureError(DB_NOT_INITIALIZED_MSG)
    return _database_manager


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding a database session.

    Yields:
        AsyncSession: Database session
    """
    async with get_database_manager().session() as session:
        yield session


__all__ = [
    "Base",
    "DatabaseManager",
    "get_database_manager",
    "get_session",
    "initialize_database",
    "shutdown_database",
    "strpos",
]
