"""
Configuration management for the CDN failover resolver.

This module implements environment-specific configuration with validation
and a factory for configuration selection.
"""

import os
import sys
from enum import Enum

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environments."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ResolverSettings(BaseSettings):
    """CDN resolution configuration."""

    model_config = SettingsConfigDict(env_prefix="CDN_", env_file=".env", extra="ignore")

    # Health cache
    cache_ttl_ms: int = 300_000

    # Health probes
    check_timeout_ms: int = 5000
    user_agent: str = "cdn-failover/0.1.0"

    # Default resources
    editor_engine_version: str = "0.52.2"
    runtime_core_version: str = "0.27.0"

    # Startup
    prewarm_on_startup: bool = True

    @field_validator("cache_ttl_ms", "check_timeout_ms")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Value must be a positive number of milliseconds")
        return v

    @property
    def cache_ttl(self) -> float:
        """Cache TTL in seconds."""
        return self.cache_ttl_ms / 1000


class ObservabilitySettings(BaseSettings):
    """Observability configuration."""

    model_config = SettingsConfigDict(
        env_prefix="OBSERVABILITY_", env_file=".env", extra="ignore"
    )

    log_level: LogLevel = LogLevel.INFO
    log_format: str = "json"
    log_file: str | None = None


class ApplicationSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    # Application info
    app_name: str = "CDN Failover Resolver"
    app_version: str = "0.1.0"

    # Environment
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000

    # Component settings
    resolver: ResolverSettings = Field(default_factory=ResolverSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        """Check if running in development."""
        return self.environment == Environment.DEVELOPMENT


# Environment-specific configurations
class DevelopmentSettings(ApplicationSettings):
    """Development environment settings."""

    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True

    # Verbose, human-readable logging for development
    observability: ObservabilitySettings = Field(
        default_factory=lambda: ObservabilitySettings(
            log_level=LogLevel.DEBUG, log_format="console"
        )
    )


class TestingSettings(ApplicationSettings):
    """Testing environment settings."""

    environment: Environment = Environment.TESTING
    debug: bool = True

    # Tests never touch real mirrors on startup
    resolver: ResolverSettings = Field(
        default_factory=lambda: ResolverSettings(
            check_timeout_ms=1000, prewarm_on_startup=False
        )
    )

    observability: ObservabilitySettings = Field(
        default_factory=lambda: ObservabilitySettings(log_level=LogLevel.WARNING)
    )


class ProductionSettings(ApplicationSettings):
    """Production environment settings."""

    environment: Environment = Environment.PRODUCTION
    debug: bool = False

    observability: ObservabilitySettings = Field(
        default_factory=lambda: ObservabilitySettings(
            log_level=LogLevel.INFO, log_format="json"
        )
    )


def get_settings() -> ApplicationSettings:
    """Get application settings based on environment."""
    environment = os.getenv("ENVIRONMENT", "development").lower()

    if environment == "development":
        return DevelopmentSettings()
    elif environment == "production":
        return ProductionSettings()
    elif environment == "testing":
        return TestingSettings()
    else:
        return ApplicationSettings()


# Configuration validation
class ConfigurationValidator:
    """Validates application configuration."""

    @staticmethod
    def validate_settings(settings: ApplicationSettings) -> list[str]:
        """Validate settings and return list of errors."""
        errors = []

        if settings.is_production and settings.debug:
            errors.append("Debug mode should be disabled in production")

        if settings.resolver.check_timeout_ms > settings.resolver.cache_ttl_ms:
            errors.append("Probe timeout should not exceed the health cache TTL")

        return errors

    @staticmethod
    def validate_or_exit(settings: ApplicationSettings) -> None:
        """Validate settings or exit with error."""
        errors = ConfigurationValidator.validate_settings(settings)
        if errors:
            logger = structlog.get_logger()
            logger.error("Configuration validation failed", errors=errors)
            for error in errors:
                logger.error("Configuration error", error=error)
            sys.exit(1)
