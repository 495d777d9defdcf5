"""Exception hierarchy for the CDN failover resolver."""

from typing import Any

from .models import ErrorCode


class CDNFailoverException(Exception):
    """Base exception for the CDN failover resolver."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class UnknownResourceError(CDNFailoverException):
    """Raised when resolving a resource name that was never registered."""

    def __init__(self, resource_name: str):
        super().__init__(
            f"Unknown CDN resource: {resource_name}",
            ErrorCode.UNKNOWN_RESOURCE,
            {"resource_name": resource_name},
        )
        self.resource_name = resource_name


class InvalidResourceError(CDNFailoverException):
    """Raised when a resource definition cannot be registered."""

    def __init__(self, message: str, resource_name: str | None = None):
        super().__init__(
            message,
            ErrorCode.INVALID_RESOURCE,
            {"resource_name": resource_name},
        )
        self.resource_name = resource_name
