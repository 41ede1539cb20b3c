# ruff: noqa: A005
"""Structured logging.

structlog configured on top of the standard library. Code obtains a logger
with ``get_logger(__name__)`` and passes context as keywords::

    logger.info("Audit logs fetched", count=3, action="Created")

Before rendering, values stored under credential-like keys are masked and
overlong strings are cut by structlog processors.
"""

import logging
import re
import sys
from dataclasses import dataclass
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars
from structlog.typing import EventDict, Processor, WrappedLogger

from promissio.core.enums import Environment, LogFormat, LogLevel
from promissio.core.errors import ConfigurationError

MASK = "***[MASKED]"
SENSITIVE_KEY = re.compile(
    r"password|token|secret|credential|authorization|cookie", re.IGNORECASE
)
MIN_VALUE_LENGTH = 100

_ENVIRONMENT_FORMATS = {
    Environment.DEVELOPMENT: LogFormat.CONSOLE,
    Environment.TESTING: LogFormat.PLAIN,
    Environment.STAGING: LogFormat.JSON,
    Environment.PRODUCTION: LogFormat.JSON,
}

# Chatty third-party loggers held at WARNING in production.
_NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "httpx")


@dataclass(frozen=True)
class LogConfig:
    """
    Logging configuration.

    ``format`` and ``include_callsite`` follow the environment unless set:
    colored console output with call sites in development, plain key/value
    lines in tests, JSON everywhere else.

    Usage Example:
        configure_logging(LogConfig(level=LogLevel.DEBUG, environment=Environment.TESTING))
    """

    level: LogLevel = LogLevel.INFO
    environment: Environment = Environment.DEVELOPMENT
    format: LogFormat | None = None
    include_callsite: bool | None = None
    mask_sensitive: bool = True
    max_value_length: int = 10000

    def __post_init__(self):
        if self.max_value_length < MIN_VALUE_LENGTH:
            raise ConfigurationError(
                f"max_value_length must be at least {MIN_VALUE_LENGTH}"
            )

    @property
    def resolved_format(self) -> LogFormat:
        return self.format or _ENVIRONMENT_FORMATS[self.environment]

    @property
    def resolved_callsite(self) -> bool:
        if self.include_callsite is not None:
            return self.include_callsite
        return self.environment == Environment.DEVELOPMENT


def _mask(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: MASK
            if isinstance(key, str) and SENSITIVE_KEY.search(key) and item is not None
            else _mask(item)
            for key, item in value.items()
        }
    if isinstance(value, list | tuple):
        return [_mask(item) for item in value]
    return value


def mask_sensitive_values(
    _logger: WrappedLogger, _method: str, event_dict: EventDict
) -> EventDict:
    """Processor masking values under credential-like keys, at any depth."""
    return _mask(event_dict)


class TruncateLongValues:
    """Processor cutting top-level string values longer than ``max_length``."""

    def __init__(self, max_length: int):
        self.max_length = max_length

    def __call__(
        self, _logger: WrappedLogger, _method: str, event_dict: EventDict
    ) -> EventDict:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > self.max_length:
                event_dict[key] = f"{value[: self.max_length]}...[truncated]"
        return event_dict


def build_processors(config: LogConfig) -> list[Processor]:
    """Processor chain for ``config``, ending in its renderer."""
    processors: list[Processor] = [
        merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if config.resolved_callsite:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                {
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                }
            )
        )

    processors += [
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if config.mask_sensitive:
        processors.append(mask_sensitive_values)
    processors += [
        TruncateLongValues(config.max_value_length),
        structlog.processors.UnicodeDecoder(),
    ]

    fmt = config.resolved_format
    if fmt is LogFormat.JSON:
        processors.append(structlog.processors.JSONRenderer())
    elif fmt is LogFormat.CONSOLE:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    else:
        processors.append(structlog.processors.KeyValueRenderer(key_order=["event"]))

    return processors


class StructuredLogger:
    """
    Named logger taking context as keyword arguments.

    Records below the configured level are dropped before they reach
    structlog; ``bind`` returns a logger that adds fixed context to every
    record.
    """

    def __init__(self, name: str, context: dict[str, Any] | None = None):
        self.name = name
        self._context = dict(context or {})
        self._logger = structlog.get_logger(name)

    def bind(self, **context: Any) -> "StructuredLogger":
        return StructuredLogger(self.name, {**self._context, **context})

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.CRITICAL, message, kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log at ERROR with the active exception's traceback."""
        self._log(LogLevel.ERROR, message, {**kwargs, "exc_info": True})

    def _log(self, level: LogLevel, message: str, kwargs: dict[str, Any]) -> None:
        if level.priority < current_config().level.priority:
            return
        method = getattr(self._logger, level.level_name.lower())
        method(message, **{**self._context, **kwargs})


_config: LogConfig | None = None


def configure_logging(config: LogConfig | None = None) -> LogConfig:
    """
    (Re)configure structlog and the standard library root logger.

    Loggers obtained earlier pick up the new configuration on their next
    record.
    """
    global _config  # noqa: PLW0603

    _config = config or LogConfig()

    structlog.configure(
        processors=build_processors(_config),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    root.setLevel(_config.level.to_logging_level())

    if _config.environment.is_production:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return _config


def current_config() -> LogConfig:
    """Active configuration, applying the defaults on first use."""
    return _config if _config is not None else configure_logging()


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger.

    Args:
        name: Logger name (usually __name__)
    """
    current_config()
    return StructuredLogger(name)


__all__ = [
    "LogConfig",
    "StructuredLogger",
    "TruncateLongValues",
    "build_processors",
    "configure_logging",
    "current_config",
    "get_logger",
    "mask_sensitive_values",
]
