"""Dependency injection container for the process-wide resolver."""

import httpx
import structlog

from cdn_failover.config.settings import ApplicationSettings, get_settings
from cdn_failover.health.cache import HealthCache
from cdn_failover.health.checker import HealthChecker
from cdn_failover.health.strategies import default_strategies
from cdn_failover.registry.defaults import build_default_registry

from .prewarmer import Prewarmer
from .resolver import Resolver

logger = structlog.get_logger()


class DependencyContainer:
    """Builds and owns one Resolver, its HealthCache and its HTTP client."""

    def __init__(
        self,
        settings: ApplicationSettings | None = None,
        resolver: Resolver | None = None,
    ) -> None:
        """Initialize the container.

        Args:
            settings: Application settings; read from the environment when omitted
            resolver: Prebuilt resolver, used instead of building one from settings
        """
        self.settings = settings or get_settings()
        self._resolver = resolver
        self._client: httpx.AsyncClient | None = None
        self._prewarmer: Prewarmer | None = None

    def _build_resolver(self) -> Resolver:
        resolver_settings = self.settings.resolver
        strategies = default_strategies()

        self._client = httpx.AsyncClient(
            timeout=resolver_settings.check_timeout_ms / 1000,
            follow_redirects=True,
            headers={"User-Agent": resolver_settings.user_agent},
        )
        resolver = Resolver(
            registry=build_default_registry(
                resolver_settings, strategy_names=list(strategies)
            ),
            cache=HealthCache(ttl=resolver_settings.cache_ttl),
            checker=HealthChecker(client=self._client, strategies=strategies),
        )
        logger.info(
            "Resolver initialized",
            resources=resolver.registry.names(),
            cache_ttl_ms=resolver_settings.cache_ttl_ms,
            check_timeout_ms=resolver_settings.check_timeout_ms,
        )
        return resolver

    @property
    def resolver(self) -> Resolver:
        if self._resolver is None:
            self._resolver = self._build_resolver()
        return self._resolver

    @property
    def prewarmer(self) -> Prewarmer:
        if self._prewarmer is None:
            self._prewarmer = Prewarmer(self.resolver)
        return self._prewarmer

    async def shutdown(self) -> None:
        """Close the HTTP client owned by the container."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        self._resolver = None
        self._prewarmer = None
        logger.info("Dependency container shutdown")


# Global container instance
_container: DependencyContainer | None = None


def init_container(
    settings: ApplicationSettings | None = None,
    resolver: Resolver | None = None,
) -> DependencyContainer:
    """Explicitly initialize the global container, replacing any existing one."""
    global _container
    _container = DependencyContainer(settings=settings, resolver=resolver)
    return _container


def get_container() -> DependencyContainer:
    """Get the global dependency container, creating it on first use."""
    global _container
    if _container is None:
        _container = DependencyContainer()
    return _container


async def shutdown_container() -> None:
    """Shutdown the global dependency container."""
    global _container
    if _container:
        await _container.shutdown()
        _container = None
