"""Shared API dependencies."""

from typing import Annotated

from fastapi import Depends

from cdn_failover.config.settings import ApplicationSettings
from cdn_failover.core.dependency_container import get_container
from cdn_failover.core.prewarmer import Prewarmer
from cdn_failover.core.resolver import Resolver


def get_resolver() -> Resolver:
    """Get the process-wide resolver from the dependency container."""
    return get_container().resolver


def get_prewarmer(resolver: Annotated[Resolver, Depends(get_resolver)]) -> Prewarmer:
    return Prewarmer(resolver)


def get_settings_dependency() -> ApplicationSettings:
    return get_container().settings
