"""Built-in CDN resources: the editor engine and the language runtime core."""

from cdn_failover.config.settings import ResolverSettings
from cdn_failover.domain.models import CDNCandidate, CDNResource

from .registry import ResourceRegistry

EDITOR_ENGINE = "editor-engine"
RUNTIME_CORE = "runtime-core"

EDITOR_ENGINE_PROBE_PATH = "/vs/loader.js"
RUNTIME_CORE_PROBE_PATH = "/pyodide.js"


def editor_engine_resource(
    version: str = "0.52.2", check_timeout_ms: int = 5000
) -> CDNResource:
    """Monaco editor builds, mirrored across five public CDNs."""
    return CDNResource(
        name=EDITOR_ENGINE,
        candidates=(
            CDNCandidate(
                name="jsDelivr",
                base_url=f"https://cdn.jsdelivr.net/npm/monaco-editor@{version}/min",
                priority=1,
            ),
            CDNCandidate(
                name="jsDelivr Fastly",
                base_url=f"https://fastly.jsdelivr.net/npm/monaco-editor@{version}/min",
                priority=2,
            ),
            CDNCandidate(
                name="UNPKG",
                base_url=f"https://unpkg.com/monaco-editor@{version}/min",
                priority=3,
            ),
            CDNCandidate(
                name="BootCDN",
                base_url=f"https://cdn.bootcdn.net/ajax/libs/monaco-editor/{version}/min",
                priority=4,
            ),
            CDNCandidate(
                name="npmmirror",
                base_url=f"https://registry.npmmirror.com/monaco-editor/{version}/files/min",
                priority=5,
            ),
        ),
        probe_path=EDITOR_ENGINE_PROBE_PATH,
        check_timeout_ms=check_timeout_ms,
    )


def runtime_core_resource(
    version: str = "0.27.0", check_timeout_ms: int = 5000
) -> CDNResource:
    """Pyodide distribution, mirrored across the same five CDN families."""
    return CDNResource(
        name=RUNTIME_CORE,
        candidates=(
            CDNCandidate(
                name="jsDelivr",
                base_url=f"https://cdn.jsdelivr.net/pyodide/v{version}/full",
                priority=1,
            ),
            CDNCandidate(
                name="jsDelivr Fastly",
                base_url=f"https://fastly.jsdelivr.net/pyodide/v{version}/full",
                priority=2,
            ),
            CDNCandidate(
                name="UNPKG",
                base_url=f"https://unpkg.com/pyodide@{version}",
                priority=3,
            ),
            CDNCandidate(
                name="BootCDN",
                base_url=f"https://cdn.bootcdn.net/ajax/libs/pyodide/{version}",
                priority=4,
            ),
            CDNCandidate(
                name="npmmirror",
                base_url=f"https://registry.npmmirror.com/pyodide/{version}/files",
                priority=5,
            ),
        ),
        probe_path=RUNTIME_CORE_PROBE_PATH,
        check_timeout_ms=check_timeout_ms,
    )


def default_resources(settings: ResolverSettings | None = None) -> list[CDNResource]:
    settings = settings or ResolverSettings()
    return [
        editor_engine_resource(
            settings.editor_engine_version, settings.check_timeout_ms
        ),
        runtime_core_resource(settings.runtime_core_version, settings.check_timeout_ms),
    ]


def build_default_registry(
    settings: ResolverSettings | None = None,
    strategy_names: list[str] | None = None,
) -> ResourceRegistry:
    """Registry pre-populated with the built-in resources."""
    return ResourceRegistry(default_resources(settings), strategy_names=strategy_names)
