#!/usr/bin/env python3
"""Server startup script for the CDN failover resolver."""

import uvicorn

from cdn_failover.config.settings import get_settings


def main():
    """Start the FastAPI server."""
    settings = get_settings()

    print("🚀 Starting CDN Failover Resolver...")
    print(f"🔍 Host: {settings.host}")
    print(f"🔍 Port: {settings.port}")
    print(f"🔍 Environment: {settings.environment.value}")

    uvicorn.run(
        "cdn_failover.main:app",
        host=settings.host,
        port=settings.port,
        log_level="info",
        access_log=True,
    )


if __name__ == "__main__":
    main()
