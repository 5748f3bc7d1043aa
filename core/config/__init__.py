"""
Runtime Configuration Module

Provides configuration loading for jsoncurl.
"""

from .runtime import RuntimeConfig, HttpConfig, LoggingConfig

__all__ = [
    "RuntimeConfig",
    "HttpConfig",
    "LoggingConfig",
]
