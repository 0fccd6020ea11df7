"""Standard library logging setup.

Route modules log with ``logging.getLogger(__name__)``; those records are
forwarded to Logfire alongside the spans emitted by the services.
"""

import logging

import logfire

from haven.config import Settings

NOISY_LOGGERS = ("httpx", "httpcore", "asyncpg", "uvicorn.access")


def setup_logging(settings: Settings) -> int:
    """Send stdlib log records to Logfire.

    Call after configure_logfire().

    Args:
        settings: Application settings

    Returns:
        The level applied to the haven loggers
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        handlers=[logfire.LogfireLoggingHandler()],
        force=True,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("haven").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
    return level
