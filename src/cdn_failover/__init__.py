"""CDN failover resolver.

Picks, for a resource mirrored on several CDNs, the base URL a caller should
currently load it from, based on cached and freshly probed reachability.
"""

__version__ = "0.1.0"
__description__ = "Priority-based CDN mirror resolution with health caching"

from .core import (
    DependencyContainer,
    Prewarmer,
    Resolver,
    clear_health_cache,
    get_container,
    get_editor_engine_base_url,
    get_runtime_core_base_url,
    init_container,
    pre_check_all,
    register,
    resolve,
    shutdown_container,
)
from .domain import (
    CDNCandidate,
    CDNFailoverException,
    CDNResource,
    CDNResourceConfig,
    HealthCacheEntry,
    InvalidResourceError,
    Resolution,
    UnknownResourceError,
)
from .health import HealthCache, HealthChecker, HealthCheckStrategy
from .registry import EDITOR_ENGINE, RUNTIME_CORE, ResourceRegistry

__all__ = [
    "__version__",
    "__description__",
    "CDNCandidate",
    "CDNResource",
    "CDNResourceConfig",
    "HealthCacheEntry",
    "Resolution",
    "CDNFailoverException",
    "InvalidResourceError",
    "UnknownResourceError",
    "ResourceRegistry",
    "EDITOR_ENGINE",
    "RUNTIME_CORE",
    "HealthCache",
    "HealthChecker",
    "HealthCheckStrategy",
    "Resolver",
    "Prewarmer",
    "DependencyContainer",
    "get_container",
    "init_container",
    "shutdown_container",
    "register",
    "resolve",
    "clear_health_cache",
    "pre_check_all",
    "get_editor_engine_base_url",
    "get_runtime_core_base_url",
]
