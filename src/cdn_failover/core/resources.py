"""Module-level entry points bound to the process-wide resolver."""

from collections.abc import Mapping
from typing import Any

from cdn_failover.domain.models import CDNResource
from cdn_failover.registry.defaults import EDITOR_ENGINE, RUNTIME_CORE

from .dependency_container import get_container
from .resolver import Resolver


def _resolver(resolver: Resolver | None) -> Resolver:
    return resolver if resolver is not None else get_container().resolver


def register(resource: CDNResource | Mapping[str, Any]) -> None:
    """Register or replace a resource on the process-wide resolver."""
    get_container().resolver.register(resource)


async def resolve(resource_name: str, suffix_path: str | None = None) -> str:
    return await get_container().resolver.resolve(resource_name, suffix_path)


def clear_health_cache() -> None:
    get_container().resolver.clear_health_cache()


async def pre_check_all() -> None:
    """Prewarm the health cache for every registered resource."""
    await get_container().prewarmer.pre_check_all()


async def get_editor_engine_base_url(
    suffix_path: str | None = None, resolver: Resolver | None = None
) -> str:
    """URL of the editor engine build on the best available mirror."""
    return await _resolver(resolver).resolve(EDITOR_ENGINE, suffix_path)


async def get_runtime_core_base_url(
    suffix_path: str | None = None, resolver: Resolver | None = None
) -> str:
    """URL of the language runtime core on the best available mirror."""
    return await _resolver(resolver).resolve(RUNTIME_CORE, suffix_path)
