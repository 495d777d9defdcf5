"""In-memory registry of CDN resources."""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from cdn_failover.domain.exceptions import InvalidResourceError, UnknownResourceError
from cdn_failover.domain.models import CDNResource

logger = structlog.get_logger()


class ResourceRegistry:
    """Maps resource names to their CDN definitions."""

    def __init__(
        self,
        resources: Iterable[CDNResource | Mapping[str, Any]] = (),
        strategy_names: Iterable[str] | None = None,
    ) -> None:
        """Initialize resource registry.

        Args:
            resources: Resources to register up front
            strategy_names: Known health check strategy names; when given,
                resources naming another strategy are rejected
        """
        self._resources: dict[str, CDNResource] = {}
        self._strategy_names = set(strategy_names) if strategy_names is not None else None
        for resource in resources:
            self.register(resource)

    def register(self, resource: CDNResource | Mapping[str, Any]) -> CDNResource:
        """Register a resource, replacing any prior definition of the same name."""
        if not isinstance(resource, CDNResource):
            try:
                resource = CDNResource.model_validate(resource)
            except ValidationError as e:
                name = resource.get("name") if isinstance(resource, Mapping) else None
                raise InvalidResourceError(
                    f"Invalid CDN resource definition: {e}", resource_name=name
                ) from e

        if (
            self._strategy_names is not None
            and resource.health_check not in self._strategy_names
        ):
            raise InvalidResourceError(
                f"Unknown health check strategy '{resource.health_check}' "
                f"for resource '{resource.name}'",
                resource_name=resource.name,
            )

        replaced = resource.name in self._resources
        self._resources[resource.name] = resource
        logger.debug(
            "CDN resource registered",
            resource=resource.name,
            candidates=len(resource.candidates),
            replaced=replaced,
        )
        return resource

    def get(self, name: str) -> CDNResource:
        try:
            return self._resources[name]
        except KeyError:
            raise UnknownResourceError(name) from None

    def names(self) -> list[str]:
        return list(self._resources)

    def resources(self) -> list[CDNResource]:
        return list(self._resources.values())

    def __contains__(self, name: object) -> bool:
        return name in self._resources

    def __iter__(self) -> Iterator[CDNResource]:
        return iter(list(self._resources.values()))

    def __len__(self) -> int:
        return len(self._resources)
