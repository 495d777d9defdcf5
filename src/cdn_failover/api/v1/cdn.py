"""CDN resolution API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel

from cdn_failover.api.dependencies import get_prewarmer, get_resolver
from cdn_failover.core.prewarmer import Prewarmer
from cdn_failover.core.resolver import Resolver

router = APIRouter(prefix="/cdn", tags=["cdn"])


class CandidateInfo(BaseModel):
    """A registered CDN candidate."""

    name: str
    base_url: str
    priority: int


class ResourceInfo(BaseModel):
    """A registered CDN resource."""

    name: str
    probe_path: str
    check_timeout_ms: int
    health_check: str
    candidates: list[CandidateInfo]


class ResolutionResponse(BaseModel):
    """Result of resolving a resource."""

    resource: str
    url: str
    candidate: str
    priority: int
    degraded: bool
    probed: int


@router.get("/resources", response_model=list[ResourceInfo])
async def list_resources(
    resolver: Annotated[Resolver, Depends(get_resolver)],
) -> list[ResourceInfo]:
    """List registered resources and their candidates in priority order."""
    return [
        ResourceInfo(
            name=resource.name,
            probe_path=resource.probe_path,
            check_timeout_ms=resource.check_timeout_ms,
            health_check=resource.health_check,
            candidates=[
                CandidateInfo(
                    name=candidate.name,
                    base_url=candidate.base_url,
                    priority=candidate.priority,
                )
                for candidate in resource.sorted_candidates()
            ],
        )
        for resource in resolver.registry.resources()
    ]


@router.get("/resolve/{resource_name}", response_model=ResolutionResponse)
async def resolve_resource(
    resource_name: str,
    resolver: Annotated[Resolver, Depends(get_resolver)],
    suffix_path: Annotated[str | None, Query()] = None,
) -> ResolutionResponse:
    """Resolve a resource to its best known mirror."""
    resolution = await resolver.resolve_detailed(resource_name, suffix_path)
    return ResolutionResponse(**resolution.to_dict())


@router.get("/health", response_model=dict[str, list[dict[str, Any]]])
async def cache_health(
    resolver: Annotated[Resolver, Depends(get_resolver)],
    resource_name: Annotated[str | None, Query(alias="resource")] = None,
) -> dict[str, list[dict[str, Any]]]:
    """Cached reachability verdicts per resource and candidate."""
    return resolver.health_status(resource_name)


@router.post("/cache/clear", status_code=status.HTTP_204_NO_CONTENT)
async def clear_cache(
    resolver: Annotated[Resolver, Depends(get_resolver)],
) -> Response:
    """Drop every cached verdict."""
    resolver.clear_health_cache()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/prewarm", response_model=dict[str, list[dict[str, Any]]])
async def prewarm(
    resolver: Annotated[Resolver, Depends(get_resolver)],
    prewarmer: Annotated[Prewarmer, Depends(get_prewarmer)],
) -> dict[str, list[dict[str, Any]]]:
    """Resolve every resource now and report the resulting verdicts."""
    await prewarmer.pre_check_all()
    return resolver.health_status()
