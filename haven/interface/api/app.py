"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from haven.config import Settings
from haven.interface.api.errors import register_error_handlers
from haven.interface.api.routes import auth, contacts, health, invites, referrals
from haven.util.di.container import create_container, setup_di
from haven.util.observability import instrument_fastapi, instrument_httpx

ROUTERS = (health, auth, referrals, invites, contacts)


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Build the Haven API.

    Logfire has to be configured first; ``scripts/start_app.py`` does that
    before uvicorn imports this module.

    Args:
        container: DI container, the production one when omitted
    """
    settings = Settings()
    instrument_httpx()

    api = FastAPI(
        title="Haven API",
        description="Waitlist, referrals, personal invites and contacts",
        version="0.1.0",
    )
    instrument_fastapi(api)

    # Credentialed requests need explicit origins
    api.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    setup_di(api, container or create_container())
    register_error_handlers(api)

    for module in ROUTERS:
        api.include_router(module.router)

    return api


app = create_app()
