"""CDN resource registry and built-in resource definitions."""

from .defaults import (
    EDITOR_ENGINE,
    RUNTIME_CORE,
    build_default_registry,
    default_resources,
    editor_engine_resource,
    runtime_core_resource,
)
from .registry import ResourceRegistry

__all__ = [
    "ResourceRegistry",
    "EDITOR_ENGINE",
    "RUNTIME_CORE",
    "build_default_registry",
    "default_resources",
    "editor_engine_resource",
    "runtime_core_resource",
]
