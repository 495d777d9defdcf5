"""Tests for domain models."""

import pytest
from pydantic import ValidationError

from cdn_failover.domain.exceptions import InvalidResourceError, UnknownResourceError
from cdn_failover.domain.models import (
    CDNCandidate,
    CDNResource,
    ErrorCode,
    HealthCacheEntry,
    Resolution,
)


def candidate(priority: int, url: str | None = None) -> CDNCandidate:
    return CDNCandidate(
        name=f"mirror-{priority}",
        base_url=url or f"https://mirror{priority}.example.com",
        priority=priority,
    )


class TestCDNCandidate:
    """Test candidate validation."""

    def test_trailing_slash_is_stripped(self):
        assert candidate(1, "https://cdn.example.com/pkg/").base_url == (
            "https://cdn.example.com/pkg"
        )

    def test_url_for(self):
        c = candidate(1)

        assert c.url_for() == "https://mirror1.example.com"
        assert c.url_for("/a.js") == "https://mirror1.example.com/a.js"

    @pytest.mark.parametrize("priority", [0, -1])
    def test_priority_must_be_positive(self, priority):
        with pytest.raises(ValidationError):
            candidate(priority)

    def test_slash_only_url_is_rejected(self):
        with pytest.raises(ValidationError):
            CDNCandidate(name="bad", base_url="/", priority=1)

    def test_candidate_is_immutable(self):
        c = candidate(1)

        with pytest.raises(ValidationError):
            c.priority = 2


class TestCDNResource:
    """Test resource validation."""

    def test_defaults(self):
        resource = CDNResource(name="r", candidates=[candidate(1)])

        assert resource.check_timeout_ms == 5000
        assert resource.probe_path == ""
        assert resource.health_check == "head"

    def test_sorted_candidates(self):
        resource = CDNResource(
            name="r", candidates=[candidate(3), candidate(1), candidate(2)]
        )

        assert [c.priority for c in resource.sorted_candidates()] == [1, 2, 3]
        assert resource.primary.priority == 1

    def test_duplicate_priorities_rejected(self):
        with pytest.raises(ValidationError, match="duplicate"):
            CDNResource(name="r", candidates=[candidate(1), candidate(2), candidate(2)])

    def test_missing_priority_one_rejected(self):
        with pytest.raises(ValidationError, match="priority-1"):
            CDNResource(name="r", candidates=[candidate(2), candidate(3)])

    def test_empty_candidates_rejected(self):
        with pytest.raises(ValidationError):
            CDNResource(name="r", candidates=[])

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValidationError):
            CDNResource(name="r", candidates=[candidate(1)], check_timeout_ms=0)


class TestValueObjects:
    """Test cache entries and resolutions."""

    def test_cache_entry_staleness(self):
        entry = HealthCacheEntry(healthy=True, checked_at=100.0)

        assert entry.age(150.0) == 50.0
        assert not entry.is_stale(400.0, 300.0)
        assert entry.is_stale(400.1, 300.0)

    def test_resolution_to_dict(self):
        resolution = Resolution(
            resource_name="editor-engine",
            candidate=candidate(2),
            url="https://mirror2.example.com/x.js",
            degraded=False,
            probed=5,
        )

        assert resolution.to_dict() == {
            "resource": "editor-engine",
            "url": "https://mirror2.example.com/x.js",
            "candidate": "mirror-2",
            "priority": 2,
            "degraded": False,
            "probed": 5,
        }


class TestExceptions:
    """Test exception hierarchy."""

    def test_unknown_resource_error(self):
        error = UnknownResourceError("nope")

        assert error.error_code == ErrorCode.UNKNOWN_RESOURCE
        assert error.details == {"resource_name": "nope"}
        assert "nope" in str(error)

    def test_invalid_resource_error(self):
        error = InvalidResourceError("bad definition", resource_name="r")

        assert error.error_code == ErrorCode.INVALID_RESOURCE
        assert error.resource_name == "r"
