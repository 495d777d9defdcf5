"""Structured logging configuration and utilities."""

from .config import LogFormat, setup_logging, setup_logging_from_settings
from .formatters import ConsoleFormatter, JSONFormatter

__all__ = [
    "setup_logging",
    "setup_logging_from_settings",
    "LogFormat",
    "JSONFormatter",
    "ConsoleFormatter",
]
