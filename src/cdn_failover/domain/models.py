"""Domain models for the CDN failover resolver."""

from dataclasses import dataclass
from enum import Enum
from operator import attrgetter
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ErrorCode(str, Enum):
    """Standardized error codes."""

    UNKNOWN_RESOURCE = "unknown_resource"
    INVALID_RESOURCE = "invalid_resource"
    INTERNAL_ERROR = "internal_error"


class FrozenModel(BaseModel):
    """Base model for immutable configuration values."""

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        extra="forbid",
    )


class CDNCandidate(FrozenModel):
    """One CDN mirror for a resource."""

    name: str = Field(min_length=1)
    base_url: str = Field(min_length=1)
    priority: int = Field(ge=1)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        stripped = v.rstrip("/")
        if not stripped:
            raise ValueError("base_url must not be empty")
        return stripped

    def url_for(self, suffix_path: str | None = None) -> str:
        """Join the base URL with an optional suffix path."""
        if not suffix_path:
            return self.base_url
        return f"{self.base_url}{suffix_path}"


class CDNResource(FrozenModel):
    """A resource delivered redundantly through several CDN candidates."""

    name: str = Field(min_length=1)
    candidates: tuple[CDNCandidate, ...] = Field(min_length=1)
    probe_path: str = ""
    check_timeout_ms: int = Field(default=5000, gt=0)
    health_check: str = "head"

    @model_validator(mode="after")
    def validate_priorities(self) -> "CDNResource":
        priorities = [candidate.priority for candidate in self.candidates]
        if len(set(priorities)) != len(priorities):
            raise ValueError(
                f"Resource '{self.name}' has duplicate candidate priorities: {priorities}"
            )
        if 1 not in priorities:
            raise ValueError(f"Resource '{self.name}' has no priority-1 candidate")
        return self

    def sorted_candidates(self) -> list[CDNCandidate]:
        """Candidates ordered by ascending priority (stable)."""
        return sorted(self.candidates, key=attrgetter("priority"))

    @property
    def primary(self) -> CDNCandidate:
        """The priority-1 candidate."""
        return self.sorted_candidates()[0]


# Public alias used by registration call sites
CDNResourceConfig = CDNResource


@dataclass
class HealthCacheEntry:
    """Cached reachability verdict for one candidate of one resource."""

    healthy: bool
    checked_at: float

    def age(self, now: float) -> float:
        """Seconds elapsed since the verdict was recorded."""
        return now - self.checked_at

    def is_stale(self, now: float, ttl: float) -> bool:
        return self.age(now) > ttl


@dataclass
class Resolution:
    """Outcome of resolving one resource."""

    resource_name: str
    candidate: CDNCandidate
    url: str
    degraded: bool
    probed: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "resource": self.resource_name,
            "url": self.url,
            "candidate": self.candidate.name,
            "priority": self.candidate.priority,
            "degraded": self.degraded,
            "probed": self.probed,
        }
