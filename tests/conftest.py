"""Test configuration and fixtures."""

import asyncio
import os
from collections import Counter

import pytest

# Set required environment variables for tests
os.environ["ENVIRONMENT"] = "testing"

from cdn_failover.core import dependency_container  # noqa: E402
from cdn_failover.core.resolver import Resolver  # noqa: E402
from cdn_failover.domain.models import CDNCandidate, CDNResource  # noqa: E402
from cdn_failover.health.cache import HealthCache  # noqa: E402
from cdn_failover.health.checker import HealthChecker  # noqa: E402
from cdn_failover.registry.defaults import build_default_registry  # noqa: E402
from cdn_failover.registry.registry import ResourceRegistry  # noqa: E402


class ScriptedHealthChecker(HealthChecker):
    """Health checker that answers from a table instead of the network."""

    def __init__(
        self,
        outcomes: dict[str, bool] | None = None,
        delays: dict[str, float] | None = None,
        default: bool = True,
    ):
        super().__init__()
        self.outcomes = outcomes or {}
        self.delays = delays or {}
        self.default = default
        self.calls: Counter[str] = Counter()
        self.completed: list[str] = []

    async def check(self, candidate, probe_path, timeout_ms, strategy=None) -> bool:
        self.calls[candidate.base_url] += 1
        delay = self.delays.get(candidate.base_url, 0.0)
        if delay:
            await asyncio.sleep(delay)
        self.completed.append(candidate.base_url)
        return self.outcomes.get(candidate.base_url, self.default)

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_resource(
    name: str = "editor-engine",
    count: int = 5,
    host: str = "https://mirror{priority}.example.com",
    probe_path: str = "/loader.js",
    check_timeout_ms: int = 200,
) -> CDNResource:
    return CDNResource(
        name=name,
        candidates=[
            CDNCandidate(
                name=f"mirror-{priority}",
                base_url=host.format(priority=priority),
                priority=priority,
            )
            for priority in range(1, count + 1)
        ],
        probe_path=probe_path,
        check_timeout_ms=check_timeout_ms,
    )


@pytest.fixture
def resource_factory():
    """Factory for CDN resources with numbered mirrors."""
    return make_resource


@pytest.fixture
def checker_factory():
    """Factory for scripted health checkers."""
    return ScriptedHealthChecker


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def health_cache(clock):
    return HealthCache(ttl=300.0, clock=clock)


@pytest.fixture
def checker():
    return ScriptedHealthChecker()


@pytest.fixture
def registry():
    return ResourceRegistry(
        [
            make_resource("editor-engine"),
            make_resource("runtime-core", host="https://runtime{priority}.example.com"),
        ]
    )


@pytest.fixture
def resolver(registry, health_cache, checker):
    return Resolver(registry=registry, cache=health_cache, checker=checker)


@pytest.fixture
def default_resolver(health_cache, checker):
    """Resolver over the built-in resources with a scripted checker."""
    return Resolver(registry=build_default_registry(), cache=health_cache, checker=checker)


@pytest.fixture(autouse=True)
def reset_container(monkeypatch):
    """Isolate the process-wide container per test."""
    monkeypatch.setattr(dependency_container, "_container", None)
