"""
Runtime Configuration

Ambient settings for jsoncurl: logging and the default User-Agent.
Transport timeouts are fixed constants (see core.http.client).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


ENV_PREFIX = "JSONCURL_"

_DEFAULT_USER_AGENT = "jsoncurl/0.1.0"


@dataclass
class HttpConfig:
    """Configuration for the HTTP client."""
    user_agent: str = _DEFAULT_USER_AGENT

    @property
    def default_headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent} if self.user_agent else {}


@dataclass
class LoggingConfig:
    """Configuration for CLI logging."""
    level: str = "WARNING"
    file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (and a .env file in the working directory)
    - Programmatic construction
    """
    http: HttpConfig = field(default_factory=HttpConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - JSONCURL_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR)
        - JSONCURL_LOG_FILE: Also write log records to this file
        - JSONCURL_USER_AGENT: Default User-Agent header (empty disables it)
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        # Empty string is meaningful here: send no User-Agent default
        if os.getenv(f"{ENV_PREFIX}USER_AGENT") is not None:
            overrides.setdefault("http", {})["user_agent"] = os.getenv(f"{ENV_PREFIX}USER_AGENT")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Create configuration from a dictionary."""
        http_data = data.get("http", {})
        logging_data = data.get("logging", {})

        return cls(
            http=HttpConfig(**http_data) if http_data else HttpConfig(),
            logging=LoggingConfig(**logging_data) if logging_data else LoggingConfig(),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "http": {
                "user_agent": self.http.user_agent,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
        }
