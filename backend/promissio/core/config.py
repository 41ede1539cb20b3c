"""Application configuration.

Settings are read from environment variables, optionally seeded from a
``.env`` file. Variables already present in the environment take precedence
over the file. Every value is type-converted and range-checked on load;
invalid input raises ``ConfigurationError``.
"""

import os
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any

from promissio.core.enums import Environment, LogLevel
from promissio.core.errors import ConfigurationError

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


class EnvironmentLoader:
    """
    Environment variable loader with type conversion and validation.

    Usage Example:
        loader = EnvironmentLoader(".env")
        timeout = loader.get_float("API_TIMEOUT", 10.0, min_value=0.1)
    """

    def __init__(self, env_file: str | None = ".env"):
        """
        Initialize environment loader.

        Args:
            env_file: Optional environment file to load
        """
        self.env_file = env_file
        self._load_env_file()

    def _load_env_file(self) -> None:
        """Load environment variables from file if it exists."""
        if not self.env_file or not os.path.exists(self.env_file):
            return

        try:
            with open(self.env_file, encoding="utf-8") as f:
                for raw_line in f:
                    line = raw_line.strip()

                    if not line or line.startswith("#") or "=" not in line:
                        continue

                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip()

                    if (value.startswith('"') and value.endswith('"')) or (
                        value.startswith("'") and value.endswith("'")
                    ):
                        value = value[1:-1]

                    if key not in os.environ:
                        os.environ[key] = value

        except OSError as e:
            raise ConfigurationError(
                f"Failed to load environment file {self.env_file}: {e}"
            ) from e

    def get_string(
        self, key: str, default: str | None = None, required: bool = False
    ) -> str | None:
        """Get string value from environment."""
        value = os.environ.get(key, default)
        if value is None or str(value).strip() == "":
            if required:
                raise ConfigurationError(f"{key} is required")
            return default
        return str(value).strip()

    def get_integer(
        self,
        key: str,
        default: int | None = None,
        min_value: int | None = None,
        max_value: int | None = None,
    ) -> int | None:
        """Get integer value from environment."""
        raw = os.environ.get(key)
        if raw is None or raw.strip() == "":
            return default

        try:
            value = int(raw)
        except ValueError as e:
            raise ConfigurationError(f"{key} must be a valid integer") from e

        self._check_range(key, value, min_value, max_value)
        return value

    def get_float(
        self,
        key: str,
        default: float | None = None,
        min_value: float | None = None,
        max_value: float | None = None,
    ) -> float | None:
        """Get float value from environment."""
        raw = os.environ.get(key)
        if raw is None or raw.strip() == "":
            return default

        try:
            value = float(raw)
        except ValueError as e:
            raise ConfigurationError(f"{key} must be a valid number") from e

        self._check_range(key, value, min_value, max_value)
        return value

    def get_boolean(self, key: str, default: bool = False) -> bool:
        """Get boolean value from environment."""
        raw = os.environ.get(key)
        if raw is None or raw.strip() == "":
            return default

        normalized = raw.strip().lower()
        if normalized in TRUE_VALUES:
            return True
        if normalized in FALSE_VALUES:
            return False
        raise ConfigurationError(f"{key} must be a boolean, got {raw!r}")

    def get_list(
        self, key: str, default: list[str] | None = None, separator: str = ","
    ) -> list[str]:
        """Get a separator-delimited list from environment; blank items are dropped."""
        raw = os.environ.get(key)
        if raw is None or raw.strip() == "":
            return list(default or [])
        return [item.strip() for item in raw.split(separator) if item.strip()]

    def get_enum(self, key: str, enum_class: type[Enum], default: Enum) -> Enum:
        """Get enum value from environment, matching by value or by name."""
        raw = os.environ.get(key)
        if raw is None or raw.strip() == "":
            return default

        candidate = raw.strip()
        for member in enum_class:
            if candidate.lower() in (str(member.value).lower(), member.name.lower()):
                return member

        allowed = ", ".join(member.name for member in enum_class)
        raise ConfigurationError(f"{key} must be one of: {allowed}")

    @staticmethod
    def _check_range(key: str, value: float, min_value: Any, max_value: Any) -> None:
        if min_value is not None and value < min_value:
            raise ConfigurationError(f"{key} must be at least {min_value}")
        if max_value is not None and value > max_value:
            raise ConfigurationError(f"{key} must be at most {max_value}")


@dataclass(frozen=True)
class DatabaseConfig:
    """Relational store connection settings."""

    url: str
    echo: bool = False


@dataclass(frozen=True)
class ApiClientConfig:
    """Settings for the HTTP clients that read the REST API."""

    base_url: str
    timeout: float = 10.0


@dataclass(frozen=True)
class NotificationConfig:
    """Bounds applied when deriving contract notifications."""

    window_days: int = 30
    limit: int = 10


class Settings:
    """
    Main application settings.

    Usage Example:
        settings = get_settings()
        settings.database.url
        settings.notifications.window_days
    """

    def __init__(self, env_file: str | None = ".env"):
        self.env_loader = EnvironmentLoader(env_file)

        self._load_application_config()
        self._load_database_config()
        self._load_api_client_config()
        self._load_notification_config()

    def _load_application_config(self) -> None:
        self.app_name = self.env_loader.get_string("APP_NAME", "Promissio Backend")
        self.app_version = self.env_loader.get_string("APP_VERSION", "0.1.0")
        self.environment = self.env_loader.get_enum(
            "ENVIRONMENT", Environment, Environment.DEVELOPMENT
        )
        self.debug = self.env_loader.get_boolean("DEBUG", False)
        self.log_level = self.env_loader.get_enum("LOG_LEVEL", LogLevel, LogLevel.INFO)
        self.host = self.env_loader.get_string("HOST", "127.0.0.1")
        self.port = self.env_loader.get_integer("PORT", 8000, min_value=1, max_value=65535)
        self.cors_origins = self.env_loader.get_list(
            "CORS_ORIGINS", ["http://localhost:5173"]
        )

    def _load_database_config(self) -> None:
        self.database = DatabaseConfig(
            url=self.env_loader.get_string(
                "DATABASE_URL", "sqlite+aiosqlite:///./promissio.db"
            ),
            echo=self.env_loader.get_boolean("DATABASE_ECHO", False),
        )

    def _load_api_client_config(self) -> None:
        self.api_client = ApiClientConfig(
            base_url=self.env_loader.get_string("API_BASE_URL", "http://localhost:5000"),
            timeout=self.env_loader.get_float(
                "API_TIMEOUT", 10.0, min_value=0.1, max_value=300.0
            ),
        )

    def _load_notification_config(self) -> None:
        self.notifications = NotificationConfig(
            window_days=self.env_loader.get_integer(
                "NOTIFICATION_WINDOW_DAYS", 30, min_value=1, max_value=365
            ),
            limit=self.env_loader.get_integer(
                "NOTIFICATION_LIMIT", 10, min_value=1, max_value=100
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Non-secret view of the settings, suitable for logging."""
        return {
            "app_name": self.app_name,
            "app_version": self.app_version,
            "environment": self.environment.value,
            "debug": self.debug,
            "log_level": self.log_level.level_name,
            "api_base_url": self.api_client.base_url,
            "notification_window_days": self.notifications.window_days,
            "notification_limit": self.notifications.limit,
        }


@lru_cache
def get_settings(env_file: str | None = ".env") -> Settings:
    """
    Get cached settings instance.

    Args:
        env_file: Environment file to load
    """
    return Settings(env_file)


__all__ = [
    "ApiClientConfig",
    "DatabaseConfig",
    "EnvironmentLoader",
    "NotificationConfig",
    "Settings",
    "get_settings",
]
