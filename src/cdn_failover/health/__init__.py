"""Health checking for CDN candidates.

This module provides bounded reachability probes, named probe strategies and
the short-TTL verdict cache.
"""

from .cache import HealthCache
from .checker import HealthChecker
from .strategies import (
    HealthCheckStrategy,
    HeadRequestStrategy,
    RangedGetStrategy,
    default_strategies,
)

__all__ = [
    "HealthCache",
    "HealthChecker",
    "HealthCheckStrategy",
    "HeadRequestStrategy",
    "RangedGetStrategy",
    "default_strategies",
]
