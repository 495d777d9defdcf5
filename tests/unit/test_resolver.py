"""Tests for CDN resolution."""

import asyncio
from unittest.mock import patch

import httpx
import pytest

from cdn_failover.core.resolver import Resolver
from cdn_failover.domain.exceptions import UnknownResourceError
from cdn_failover.health.cache import HealthCache
from cdn_failover.health.checker import HealthChecker
from cdn_failover.registry.registry import ResourceRegistry

M1 = "https://mirror1.example.com"
M2 = "https://mirror2.example.com"
M3 = "https://mirror3.example.com"
M4 = "https://mirror4.example.com"
M5 = "https://mirror5.example.com"
ALL_MIRRORS = [M1, M2, M3, M4, M5]


def only_healthy(*urls: str) -> dict[str, bool]:
    return {url: url in urls for url in ALL_MIRRORS}


class TestCandidateSelection:
    """Test priority-based candidate selection."""

    @pytest.mark.asyncio
    async def test_all_healthy_returns_priority_one(self, resolver):
        url = await resolver.resolve("editor-engine")

        assert url == M1

    @pytest.mark.asyncio
    async def test_single_healthy_candidate_is_returned(self, resolver, checker):
        checker.outcomes = only_healthy(M4)

        url = await resolver.resolve("editor-engine")

        assert url == M4

    @pytest.mark.asyncio
    async def test_lowest_priority_wins_over_fastest(self, resolver, checker):
        """P1 fails, P2 succeeds slowly, P3 succeeds fastest: P2 wins."""
        checker.outcomes = only_healthy(M2, M3)
        checker.delays = {M1: 0.02, M2: 0.08, M3: 0.0}

        url = await resolver.resolve("editor-engine")

        assert url == M2
        assert checker.completed.index(M3) < checker.completed.index(M2)

    @pytest.mark.asyncio
    async def test_candidates_sorted_regardless_of_registration_order(
        self, health_cache, checker, resource_factory
    ):
        resource = resource_factory("shuffled")
        shuffled = resource.model_copy(
            update={"candidates": tuple(reversed(resource.candidates))}
        )
        resolver = Resolver(ResourceRegistry([shuffled]), health_cache, checker)
        checker.outcomes = only_healthy(M3, M5)

        assert await resolver.resolve("shuffled") == M3

    @pytest.mark.asyncio
    async def test_suffix_path_is_appended(self, resolver, checker):
        checker.outcomes = only_healthy(M2)

        url = await resolver.resolve("editor-engine", "/vs/loader.js")

        assert url == f"{M2}/vs/loader.js"

    @pytest.mark.asyncio
    async def test_empty_suffix_returns_base_url(self, resolver):
        assert await resolver.resolve("editor-engine", "") == M1

    @pytest.mark.asyncio
    async def test_resolve_detailed_reports_choice(self, resolver, checker):
        checker.outcomes = only_healthy(M3)

        resolution = await resolver.resolve_detailed("editor-engine")

        assert resolution.resource_name == "editor-engine"
        assert resolution.candidate.priority == 3
        assert resolution.url == M3
        assert resolution.degraded is False
        assert resolution.probed == 5


class TestDegradedResolution:
    """Test fallback when no candidate is healthy."""

    @pytest.mark.asyncio
    async def test_all_unhealthy_returns_priority_one(self, resolver, checker):
        checker.default = False

        url = await resolver.resolve("runtime-core")

        assert url == "https://runtime1.example.com"

    @pytest.mark.asyncio
    async def test_degraded_resolution_logs_warning(self, resolver, checker):
        checker.default = False

        with patch("cdn_failover.core.resolver.logger") as mock_logger:
            resolution = await resolver.resolve_detailed("runtime-core")

        assert resolution.degraded is True
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.kwargs["resource"] == "runtime-core"
        info_kwargs = mock_logger.info.call_args.kwargs
        assert info_kwargs["degraded"] is True
        assert info_kwargs["candidate"] == "mirror-1"

    @pytest.mark.asyncio
    async def test_degraded_resolution_keeps_suffix(self, resolver, checker):
        checker.default = False

        url = await resolver.resolve("editor-engine", "/vs/loader.js")

        assert url == f"{M1}/vs/loader.js"

    @pytest.mark.asyncio
    async def test_healthy_resolution_does_not_warn(self, resolver):
        with patch("cdn_failover.core.resolver.logger") as mock_logger:
            await resolver.resolve("editor-engine")

        mock_logger.warning.assert_not_called()
        assert mock_logger.info.call_args.kwargs["degraded"] is False

    @pytest.mark.asyncio
    async def test_checker_exception_is_absorbed(self, resolver, checker):
        async def broken_check(*args, **kwargs):
            raise RuntimeError("probe exploded")

        checker.check = broken_check

        url = await resolver.resolve("editor-engine")

        assert url == M1
        assert resolver.cache.get("editor-engine", M1) is False


class TestUnknownResource:
    """Test resolution of unregistered names."""

    @pytest.mark.asyncio
    async def test_unknown_resource_raises(self, resolver, checker):
        with pytest.raises(UnknownResourceError) as exc_info:
            await resolver.resolve("does-not-exist")

        assert exc_info.value.resource_name == "does-not-exist"
        assert checker.total_calls == 0


class TestCaching:
    """Test interaction with the health cache."""

    @pytest.mark.asyncio
    async def test_second_resolve_within_ttl_does_not_probe(self, resolver, checker):
        await resolver.resolve("editor-engine")
        await resolver.resolve("editor-engine")

        assert all(count == 1 for count in checker.calls.values())
        assert len(checker.calls) == 5

    @pytest.mark.asyncio
    async def test_cached_healthy_fast_path(self, resolver, checker, health_cache):
        health_cache.set("editor-engine", M3, True)

        resolution = await resolver.resolve_detailed("editor-engine")

        assert resolution.url == M3
        assert resolution.probed == 0
        assert checker.total_calls == 0

    @pytest.mark.asyncio
    async def test_cached_unhealthy_candidates_are_not_reprobed(
        self, resolver, checker
    ):
        checker.outcomes = only_healthy(M2)
        await resolver.resolve("editor-engine")
        checker.calls.clear()

        url = await resolver.resolve("editor-engine")

        assert url == M2
        assert checker.total_calls == 0

    @pytest.mark.asyncio
    async def test_only_unknown_candidates_are_probed(
        self, resolver, checker, health_cache
    ):
        health_cache.set("editor-engine", M1, False)
        health_cache.set("editor-engine", M2, False)

        url = await resolver.resolve("editor-engine")

        assert url == M3
        assert set(checker.calls) == {M3, M4, M5}

    @pytest.mark.asyncio
    async def test_all_cached_unhealthy_falls_back_without_probing(
        self, resolver, checker
    ):
        checker.default = False
        await resolver.resolve("editor-engine")
        checker.calls.clear()

        resolution = await resolver.resolve_detailed("editor-engine")

        assert resolution.degraded is True
        assert resolution.url == M1
        assert checker.total_calls == 0

    @pytest.mark.asyncio
    async def test_clear_health_cache_forces_reprobe(self, resolver, checker):
        await resolver.resolve("editor-engine")

        resolver.clear_health_cache()
        await resolver.resolve("editor-engine")

        assert all(checker.calls[url] == 2 for url in ALL_MIRRORS)

    @pytest.mark.asyncio
    async def test_stale_entries_are_reprobed(self, resolver, checker, clock):
        await resolver.resolve("editor-engine")

        clock.advance(301.0)
        await resolver.resolve("editor-engine")

        assert all(checker.calls[url] == 2 for url in ALL_MIRRORS)

    @pytest.mark.asyncio
    async def test_recovery_after_ttl(self, resolver, checker, clock):
        checker.outcomes = only_healthy(M2)
        assert await resolver.resolve("editor-engine") == M2

        checker.outcomes = only_healthy(M1, M2)
        assert await resolver.resolve("editor-engine") == M2

        clock.advance(301.0)
        assert await resolver.resolve("editor-engine") == M1

    @pytest.mark.asyncio
    async def test_cache_entries_do_not_cross_resources(
        self, health_cache, checker, resource_factory
    ):
        registry = ResourceRegistry(
            [resource_factory("first"), resource_factory("second")]
        )
        resolver = Resolver(registry, health_cache, checker)
        checker.outcomes = only_healthy(M2)
        assert await resolver.resolve("first") == M2

        checker.outcomes = only_healthy(M1)
        assert await resolver.resolve("second") == M1

        assert health_cache.get("first", M1) is False
        assert health_cache.get("second", M1) is True
        assert checker.calls[M1] == 2


class TestConcurrency:
    """Test fan-out probing and concurrent callers."""

    @pytest.mark.asyncio
    async def test_probes_run_concurrently(self, resolver, checker):
        checker.delays = {url: 0.1 for url in ALL_MIRRORS}

        loop = asyncio.get_running_loop()
        started = loop.time()
        await resolver.resolve("editor-engine")
        elapsed = loop.time() - started

        assert elapsed < 0.4

    @pytest.mark.asyncio
    async def test_concurrent_resolves_agree(self, resolver, checker):
        checker.outcomes = only_healthy(M2, M4)
        checker.delays = {url: 0.02 for url in ALL_MIRRORS}

        first, second = await asyncio.gather(
            resolver.resolve("editor-engine"), resolver.resolve("editor-engine")
        )

        assert first == second == M2
        # Duplicate probing by simultaneous first callers is tolerated
        assert all(1 <= checker.calls[url] <= 2 for url in ALL_MIRRORS)

    @pytest.mark.asyncio
    async def test_timed_out_probe_does_not_change_decision(
        self, health_cache, resource_factory
    ):
        """A probe abandoned on timeout never writes a late verdict."""

        async def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "mirror1.example.com":
                await asyncio.sleep(0.3)
            return httpx.Response(200)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        resource = resource_factory("slow-primary", count=2, check_timeout_ms=50)
        resolver = Resolver(
            ResourceRegistry([resource]), health_cache, HealthChecker(client=client)
        )

        url = await resolver.resolve("slow-primary")
        await asyncio.sleep(0.4)

        assert url == M2
        assert health_cache.get("slow-primary", M1) is False
        await client.aclose()


class TestHealthStatus:
    """Test cache status reporting."""

    @pytest.mark.asyncio
    async def test_health_status_reports_verdicts(self, resolver, checker):
        checker.outcomes = only_healthy(M2)
        await resolver.resolve("editor-engine")

        status = resolver.health_status()

        assert set(status) == {"editor-engine", "runtime-core"}
        rows = status["editor-engine"]
        assert [row["priority"] for row in rows] == [1, 2, 3, 4, 5]
        assert [row["healthy"] for row in rows] == [False, True, False, False, False]
        assert all(row["healthy"] is None for row in status["runtime-core"])

    def test_health_status_unknown_resource(self, resolver):
        with pytest.raises(UnknownResourceError):
            resolver.health_status("missing")

    def test_default_collaborators(self, registry):
        resolver = Resolver(registry)

        assert isinstance(resolver.cache, HealthCache)
        assert isinstance(resolver.checker, HealthChecker)
