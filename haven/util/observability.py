"""Logfire setup and instrumentation.

Spans and events are written with logfire directly::

    with logfire.span("referral_service.claim_with_code", user_id=str(user.id)):
        logfire.info("Referral linked", referrer_id=str(inviter.id))
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from haven.config import Settings

# Attribute names whose values are redacted before export
SCRUB_PATTERNS = ["invite_token", "access_token", "session_token", "haven_session"]


def configure_logfire(settings: Settings) -> None:
    """Configure logfire for the process.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    logfire.configure(
        service_name="haven-api",
        service_version="0.1.0",
        environment=settings.environment,
        token=observability.logfire_token,
        send_to_logfire=observability.should_send,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )
    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=observability.should_send,
    )


def _request_attributes(request, attributes):
    mapped = dict(attributes)
    mapped["path"] = request.url.path
    if getattr(request, "method", None):
        mapped["method"] = request.method
    if request.client:
        mapped["client_host"] = request.client.host
    return mapped


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request, leaving headers (and the session cookie) out."""
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries issued through the engine."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_httpx() -> None:
    """Trace outbound calls to Privy."""
    logfire.instrument_httpx()
