"""Production container and FastAPI wiring."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from haven.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Container with every component on its production implementation."""
    providers = [get_provider(base)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach a container to the app and close it on shutdown."""
    setup_dishka(container, app)

    @app.on_event("shutdown")
    async def _close_container() -> None:
        await container.close()
