"""Domain layer for the CDN failover resolver.

This module contains the resource and candidate value objects, cache entries,
resolution results and the exception hierarchy.
"""

from .exceptions import (
    CDNFailoverException,
    InvalidResourceError,
    UnknownResourceError,
)
from .models import (
    CDNCandidate,
    CDNResource,
    CDNResourceConfig,
    ErrorCode,
    HealthCacheEntry,
    Resolution,
)

__all__ = [
    "CDNCandidate",
    "CDNResource",
    "CDNResourceConfig",
    "ErrorCode",
    "HealthCacheEntry",
    "Resolution",
    "CDNFailoverException",
    "InvalidResourceError",
    "UnknownResourceError",
]
