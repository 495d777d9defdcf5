"""Startup prewarming of the CDN health cache."""

import asyncio

import structlog

from .resolver import Resolver

logger = structlog.get_logger()


class Prewarmer:
    """Resolves every registered resource once so later calls hit a warm cache."""

    def __init__(self, resolver: Resolver):
        self.resolver = resolver

    async def pre_check_all(self) -> None:
        """Resolve all registered resources concurrently, discarding the URLs.

        Never raises for resolution errors; they are logged instead so that a
        host application's startup path cannot be broken by prewarming.
        """
        try:
            names = self.resolver.registry.names()
        except Exception as e:
            logger.error("CDN prewarm could not list resources", error=str(e))
            return

        results = await asyncio.gather(
            *(self.resolver.resolve(name) for name in names),
            return_exceptions=True,
        )

        failures = 0
        for name, result in zip(names, results, strict=True):
            if isinstance(result, BaseException):
                failures += 1
                logger.error("CDN prewarm failed", resource=name, error=str(result))

        logger.info("CDN prewarm completed", resources=len(names), failures=failures)
