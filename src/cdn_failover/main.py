"""FastAPI application entry point."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv

# Load .env file before reading settings
load_dotenv()

import structlog  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from . import __description__, __version__  # noqa: E402
from .api.error_handlers import (  # noqa: E402
    general_exception_handler,
    invalid_resource_exception_handler,
    unexpected_exception_handler,
    unknown_resource_exception_handler,
)
from .api.v1.router import router as v1_router  # noqa: E402
from .config.settings import ApplicationSettings, ConfigurationValidator  # noqa: E402
from .core.dependency_container import (  # noqa: E402
    get_container,
    init_container,
    shutdown_container,
)
from .domain.exceptions import (  # noqa: E402
    CDNFailoverException,
    InvalidResourceError,
    UnknownResourceError,
)
from .observability.logging import setup_logging_from_settings  # noqa: E402

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging, prewarm the health cache and release resources."""
    container = get_container()
    setup_logging_from_settings(container.settings.observability)
    ConfigurationValidator.validate_or_exit(container.settings)

    # Prewarm in the background so a slow or failing mirror never blocks startup
    prewarm_task: asyncio.Task[None] | None = None
    if container.settings.resolver.prewarm_on_startup:
        prewarm_task = asyncio.create_task(container.prewarmer.pre_check_all())

    logger.info(
        "Application started",
        environment=container.settings.environment.value,
        prewarm=prewarm_task is not None,
    )
    yield

    if prewarm_task is not None and not prewarm_task.done():
        prewarm_task.cancel()
        try:
            await prewarm_task
        except asyncio.CancelledError:
            pass
    await shutdown_container()


def create_app(settings: ApplicationSettings | None = None) -> FastAPI:
    """Create the FastAPI application."""
    if settings is not None:
        init_container(settings=settings)

    app = FastAPI(
        title="CDN Failover Resolver",
        description=__description__,
        version=__version__,
        lifespan=lifespan,
    )

    # Browser-side loaders call the resolver directly
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_exception_handler(UnknownResourceError, unknown_resource_exception_handler)
    app.add_exception_handler(InvalidResourceError, invalid_resource_exception_handler)
    app.add_exception_handler(CDNFailoverException, general_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)

    app.include_router(v1_router)
    return app


app = create_app()
