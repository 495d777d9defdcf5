"""CDN resolution: cache lookup, concurrent probing and priority selection."""

import asyncio
from collections.abc import Mapping
from typing import Any

import structlog

from cdn_failover.domain.models import CDNCandidate, CDNResource, Resolution
from cdn_failover.health.cache import HealthCache
from cdn_failover.health.checker import HealthChecker
from cdn_failover.health.strategies import HealthCheckStrategy
from cdn_failover.registry.registry import ResourceRegistry

logger = structlog.get_logger()


class Resolver:
    """Chooses the mirror a caller should use for a registered resource.

    The resolver owns its HealthCache for its whole lifetime. Cached healthy
    candidates are returned without network traffic; otherwise every
    candidate without a fresh verdict is probed concurrently and the
    lowest-priority-number healthy one wins. When nothing is healthy the
    priority-1 candidate is returned anyway, so CDN-level failures never
    surface as exceptions. Only unregistered names raise.
    """

    def __init__(
        self,
        registry: ResourceRegistry,
        cache: HealthCache | None = None,
        checker: HealthChecker | None = None,
    ):
        """Initialize resolver.

        Args:
            registry: Resource definitions
            cache: Verdict cache; a fresh one with the default TTL when omitted
            checker: Probe runner; a default HTTP checker when omitted
        """
        self.registry = registry
        self.cache = cache if cache is not None else HealthCache()
        self.checker = checker if checker is not None else HealthChecker()

    def register(self, resource: CDNResource | Mapping[str, Any]) -> None:
        self.registry.register(resource)

    async def resolve(self, resource_name: str, suffix_path: str | None = None) -> str:
        """Resolve a resource to the URL of its best known mirror.

        Args:
            resource_name: Registered resource name
            suffix_path: Optional path appended to the chosen base URL

        Returns:
            Base URL of the chosen candidate, plus the suffix when given

        Raises:
            UnknownResourceError: If the resource was never registered
        """
        resolution = await self.resolve_detailed(resource_name, suffix_path)
        return resolution.url

    async def resolve_detailed(
        self, resource_name: str, suffix_path: str | None = None
    ) -> Resolution:
        """Resolve a resource and report how the candidate was chosen."""
        resource = self.registry.get(resource_name)
        candidates = resource.sorted_candidates()

        healthy: list[CDNCandidate] = []
        unknown: list[CDNCandidate] = []
        for candidate in candidates:
            verdict = self.cache.get(resource.name, candidate.base_url)
            if verdict is None:
                unknown.append(candidate)
            elif verdict:
                healthy.append(candidate)

        if healthy:
            return self._finish(resource, healthy[0], suffix_path, probed=0)

        if unknown:
            strategy = self.checker.get_strategy(resource.health_check)
            results = await asyncio.gather(
                *(self._probe(resource, candidate, strategy) for candidate in unknown)
            )
            healthy = [
                candidate for candidate, ok in zip(unknown, results, strict=True) if ok
            ]

        if healthy:
            return self._finish(resource, healthy[0], suffix_path, probed=len(unknown))

        logger.warning(
            "No healthy CDN candidate, falling back to primary",
            resource=resource.name,
            candidate=candidates[0].name,
            candidates=len(candidates),
        )
        return self._finish(
            resource, candidates[0], suffix_path, probed=len(unknown), degraded=True
        )

    async def _probe(
        self,
        resource: CDNResource,
        candidate: CDNCandidate,
        strategy: HealthCheckStrategy,
    ) -> bool:
        try:
            healthy = await self.checker.check(
                candidate, resource.probe_path, resource.check_timeout_ms, strategy
            )
        except Exception as e:
            logger.warning(
                "CDN health probe raised",
                resource=resource.name,
                candidate=candidate.name,
                error=str(e),
            )
            healthy = False

        self.cache.set(resource.name, candidate.base_url, healthy)
        return healthy

    def _finish(
        self,
        resource: CDNResource,
        candidate: CDNCandidate,
        suffix_path: str | None,
        probed: int,
        degraded: bool = False,
    ) -> Resolution:
        resolution = Resolution(
            resource_name=resource.name,
            candidate=candidate,
            url=candidate.url_for(suffix_path),
            degraded=degraded,
            probed=probed,
        )
        logger.info(
            "CDN resolved",
            resource=resource.name,
            candidate=candidate.name,
            url=resolution.url,
            degraded=degraded,
            probed=probed,
        )
        return resolution

    def clear_health_cache(self) -> None:
        self.cache.clear()
        logger.info("CDN health cache cleared")

    def health_status(
        self, resource_name: str | None = None
    ) -> dict[str, list[dict[str, Any]]]:
        """Fresh cached verdicts per resource and candidate.

        Candidates without a fresh verdict are reported with ``healthy`` set
        to None.
        """
        if resource_name is not None:
            resources = [self.registry.get(resource_name)]
        else:
            resources = self.registry.resources()

        status: dict[str, list[dict[str, Any]]] = {}
        for resource in resources:
            entries = self.cache.entries(resource.name)
            rows = []
            for candidate in resource.sorted_candidates():
                entry = entries.get((resource.name, candidate.base_url))
                rows.append(
                    {
                        "name": candidate.name,
                        "base_url": candidate.base_url,
                        "priority": candidate.priority,
                        "healthy": entry.healthy if entry else None,
                        "age_seconds": (
                            round(self.cache.age(entry), 3) if entry else None
                        ),
                    }
                )
            status[resource.name] = rows
        return status
