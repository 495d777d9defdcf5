"""Reachability probe strategies for CDN candidates."""

from abc import ABC, abstractmethod

import httpx

NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


class HealthCheckStrategy(ABC):
    """Abstract base class for reachability probes.

    A strategy issues one HTTP request and reports whether the response is
    success-class. It does not handle timeouts or transport errors; the
    HealthChecker bounds and absorbs those.
    """

    name: str = ""

    @abstractmethod
    async def probe(
        self, client: httpx.AsyncClient, url: str, timeout: float
    ) -> bool:
        """Probe a URL.

        Args:
            client: HTTP client to issue the request with
            url: Exact URL to probe
            timeout: Request timeout in seconds, overriding the client default

        Returns:
            True if the response status is success-class
        """
        pass


class HeadRequestStrategy(HealthCheckStrategy):
    """Probe with a HEAD request; no response body is transferred."""

    name = "head"

    async def probe(
        self, client: httpx.AsyncClient, url: str, timeout: float
    ) -> bool:
        response = await client.head(url, headers=NO_CACHE_HEADERS, timeout=timeout)
        return response.is_success


class RangedGetStrategy(HealthCheckStrategy):
    """Probe with a single-byte ranged GET for mirrors that reject HEAD."""

    name = "get"

    async def probe(
        self, client: httpx.AsyncClient, url: str, timeout: float
    ) -> bool:
        headers = {**NO_CACHE_HEADERS, "Range": "bytes=0-0"}
        response = await client.get(url, headers=headers, timeout=timeout)
        return response.is_success


def default_strategies() -> dict[str, HealthCheckStrategy]:
    """Built-in strategies keyed by name."""
    strategies: list[HealthCheckStrategy] = [HeadRequestStrategy(), RangedGetStrategy()]
    return {strategy.name: strategy for strategy in strategies}
