"""Environment and logging enumerations shared by config and logging."""

import logging
from enum import Enum, IntEnum


class Environment(Enum):
    DEVELOPMENT = "dev"
    TESTING = "test"
    STAGING = "staging"
    PRODUCTION = "prod"

    @property
    def is_production(self) -> bool:
        return self is Environment.PRODUCTION

    @property
    def creates_tables(self) -> bool:
        """Whether the app may create its tables at startup."""
        return self in (Environment.DEVELOPMENT, Environment.TESTING)


class LogLevel(IntEnum):
    """Severity threshold; values match the standard ``logging`` levels."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @property
    def level_name(self) -> str:
        return self.name

    @property
    def priority(self) -> int:
        return int(self)

    def to_logging_level(self) -> int:
        return int(self)


class LogFormat(Enum):
    JSON = "json"
    CONSOLE = "console"
    PLAIN = "plain"

    def __str__(self) -> str:
        return self.value


__all__ = ["Environment", "LogFormat", "LogLevel"]
