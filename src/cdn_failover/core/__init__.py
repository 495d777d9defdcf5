"""Core resolution services."""

from .dependency_container import (
    DependencyContainer,
    get_container,
    init_container,
    shutdown_container,
)
from .prewarmer import Prewarmer
from .resolver import Resolver
from .resources import (
    clear_health_cache,
    get_editor_engine_base_url,
    get_runtime_core_base_url,
    pre_check_all,
    register,
    resolve,
)

__all__ = [
    "DependencyContainer",
    "get_container",
    "init_container",
    "shutdown_container",
    "Prewarmer",
    "Resolver",
    "register",
    "resolve",
    "clear_health_cache",
    "pre_check_all",
    "get_editor_engine_base_url",
    "get_runtime_core_base_url",
]
