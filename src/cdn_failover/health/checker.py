"""Bounded-time reachability checks for CDN candidates."""

import asyncio
import time

import httpx
import structlog

from cdn_failover.domain.models import CDNCandidate

from .strategies import HealthCheckStrategy, HeadRequestStrategy, default_strategies

logger = structlog.get_logger()


class HealthChecker:
    """Runs single reachability probes against CDN candidates.

    Every probe is bounded by its timeout. Errors of any kind, including
    timeouts, are logged and reported as an unhealthy result; nothing
    propagates to the caller.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        strategies: dict[str, HealthCheckStrategy] | None = None,
        user_agent: str | None = None,
    ):
        """Initialize health checker.

        Args:
            client: Shared HTTP client; a short-lived client is opened per
                probe when omitted
            strategies: Probe strategies keyed by name
            user_agent: User-Agent header for per-probe clients
        """
        self._client = client
        self.strategies = strategies if strategies is not None else default_strategies()
        self._headers = {"User-Agent": user_agent} if user_agent else {}

    def get_strategy(self, name: str | None) -> HealthCheckStrategy:
        """Look up a strategy by name, defaulting to HEAD requests."""
        if name is None:
            return self.strategies.get("head") or HeadRequestStrategy()
        try:
            return self.strategies[name]
        except KeyError:
            logger.warning(
                "Unknown health check strategy, using HEAD", strategy=name
            )
            return HeadRequestStrategy()

    async def check(
        self,
        candidate: CDNCandidate,
        probe_path: str,
        timeout_ms: int,
        strategy: HealthCheckStrategy | str | None = None,
    ) -> bool:
        """Probe one candidate.

        Args:
            candidate: Candidate to probe
            probe_path: Suffix appended to the candidate base URL
            timeout_ms: Upper bound for the whole probe
            strategy: Strategy instance or name

        Returns:
            True only for a success-class response within the timeout
        """
        if not isinstance(strategy, HealthCheckStrategy):
            strategy = self.get_strategy(strategy)

        url = candidate.url_for(probe_path)
        timeout = timeout_ms / 1000
        start_time = time.perf_counter()

        try:
            # wait_for cancels the in-flight request on expiry
            healthy = await asyncio.wait_for(
                self._probe(strategy, url, timeout), timeout=timeout
            )
        except TimeoutError:
            logger.warning(
                "CDN health probe timed out",
                candidate=candidate.name,
                url=url,
                timeout_ms=timeout_ms,
            )
            return False
        except Exception as e:
            logger.warning(
                "CDN health probe failed",
                candidate=candidate.name,
                url=url,
                error=str(e) or type(e).__name__,
            )
            return False

        response_time_ms = (time.perf_counter() - start_time) * 1000
        if healthy:
            logger.debug(
                "CDN health probe passed",
                candidate=candidate.name,
                url=url,
                response_time_ms=round(response_time_ms, 1),
            )
        else:
            logger.warning(
                "CDN health probe returned error status",
                candidate=candidate.name,
                url=url,
            )
        return healthy

    async def _probe(
        self, strategy: HealthCheckStrategy, url: str, timeout: float
    ) -> bool:
        # The per-resource timeout overrides the shared client default
        if self._client is not None:
            return await strategy.probe(self._client, url, timeout)

        async with httpx.AsyncClient(
            timeout=timeout, follow_redirects=True, headers=self._headers
        ) as client:
            return await strategy.probe(client, url, timeout)

    async def aclose(self) -> None:
        """Close the shared HTTP client, if any."""
        if self._client is not None:
            await self._client.aclose()
