#!/usr/bin/env python3
"""Start the Haven API under uvicorn.

Logfire is configured before the app module is imported so that startup
failures (bad settings, unreachable identity provider keys) are traced.
"""

import sys

import logfire
import uvicorn

from haven.config import Settings
from haven.util.logging import setup_logging
from haven.util.observability import configure_logfire


def main() -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    reload = settings.environment == "development"
    try:
        logfire.info(
            "Starting Haven API",
            environment=settings.environment,
            port=settings.port,
            reload=reload,
        )
        uvicorn.run(
            "haven.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            reload=reload,
            proxy_headers=True,
        )
        return 0
    except Exception as e:
        logfire.error(
            "Haven API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
