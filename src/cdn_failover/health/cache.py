"""Short-lived memo of candidate reachability verdicts."""

import time
from collections.abc import Callable

from cdn_failover.domain.models import HealthCacheEntry


class HealthCache:
    """Per-resource, per-candidate health verdicts with TTL-on-read.

    Keys are ``(resource_name, base_url)`` so verdicts never leak between
    resources that happen to share a mirror URL.
    """

    def __init__(
        self,
        ttl: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize health cache.

        Args:
            ttl: Seconds a verdict stays fresh
            clock: Monotonic time source
        """
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[tuple[str, str], HealthCacheEntry] = {}

    def get(self, resource_name: str, url: str) -> bool | None:
        """Return the cached verdict, or None on miss or staleness."""
        entry = self._entries.get((resource_name, url))
        if entry is None or entry.is_stale(self._clock(), self.ttl):
            return None
        return entry.healthy

    def set(self, resource_name: str, url: str, healthy: bool) -> None:
        self._entries[(resource_name, url)] = HealthCacheEntry(
            healthy=healthy, checked_at=self._clock()
        )

    def clear(self) -> None:
        self._entries.clear()

    def entries(
        self, resource_name: str | None = None
    ) -> dict[tuple[str, str], HealthCacheEntry]:
        """Fresh entries, optionally restricted to one resource."""
        now = self._clock()
        return {
            key: entry
            for key, entry in self._entries.items()
            if not entry.is_stale(now, self.ttl)
            and (resource_name is None or key[0] == resource_name)
        }

    def age(self, entry: HealthCacheEntry) -> float:
        """Seconds since an entry was recorded."""
        return entry.age(self._clock())

    def __len__(self) -> int:
        return len(self._entries)
