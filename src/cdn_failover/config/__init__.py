"""Configuration for the CDN failover resolver."""

from .settings import (
    ApplicationSettings,
    ConfigurationValidator,
    Environment,
    LogLevel,
    ObservabilitySettings,
    ResolverSettings,
    get_settings,
)

__all__ = [
    "ApplicationSettings",
    "ConfigurationValidator",
    "Environment",
    "LogLevel",
    "ObservabilitySettings",
    "ResolverSettings",
    "get_settings",
]
