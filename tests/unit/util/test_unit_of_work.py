"""Tests for the request transaction boundary.

Runs the production persistence provider against a recording session so
commit and rollback can be observed without a database.
"""

import pytest
from dishka import Provider, Scope, make_async_container, provide
from dishka.integrations.fastapi import (
    DishkaRoute,
    FastapiProvider,
    FromDishka,
    setup_dishka,
)
from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from haven.domain.error import AlreadyReferredError, DuplicateRecordError
from haven.interface.api.errors import register_error_handlers
from haven.util.di import ProdConfigProvider, ProdPersistenceProvider


class RecordingSession:
    """Stands in for AsyncSession and records what happens to it."""

    def __init__(self, events: list[str]) -> None:
        self.events = events

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.events.append("close")

    async def commit(self) -> None:
        self.events.append("commit")

    async def rollback(self) -> None:
        self.events.append("rollback")


class RecordingSessionProvider(Provider):
    """Replaces the engine-backed session factory."""

    def __init__(self, events: list[str]) -> None:
        super().__init__()
        self.events = events

    @provide(scope=Scope.APP)
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return lambda: RecordingSession(self.events)


@pytest.fixture
def events():
    return []


@pytest.fixture
def client(events):
    router = APIRouter(route_class=DishkaRoute)

    @router.post("/claim")
    async def claim(session: FromDishka[AsyncSession], outcome: str = "ok"):
        session.events.append("wrote")
        if outcome == "already_referred":
            raise AlreadyReferredError()
        if outcome == "conflict":
            raise DuplicateRecordError("contact", "email")
        if outcome == "crash":
            raise RuntimeError("boom")
        return {"ok": True}

    app = FastAPI()
    container = make_async_container(
        ProdConfigProvider(),
        ProdPersistenceProvider(),
        RecordingSessionProvider(events),
        FastapiProvider(),
    )
    setup_dishka(container, app)
    register_error_handlers(app)
    app.include_router(router)
    return TestClient(app, raise_server_exceptions=False)


def test_successful_request_commits(client, events):
    response = client.post("/claim")

    assert response.status_code == 200
    assert events == ["wrote", "commit", "close"]


def test_failed_claim_is_rolled_back(client, events):
    """A claim that wrote before failing leaves nothing committed."""
    response = client.post("/claim", params={"outcome": "already_referred"})

    assert response.status_code == 409
    assert response.json()["reason"] == "already_referred"
    assert events == ["wrote", "rollback", "close"]


def test_conflict_response_is_rolled_back(client, events):
    response = client.post("/claim", params={"outcome": "conflict"})

    assert response.status_code == 409
    assert "commit" not in events
    assert "rollback" in events


def test_unhandled_error_is_rolled_back(client, events):
    response = client.post("/claim", params={"outcome": "crash"})

    assert response.status_code == 500
    assert "commit" not in events
    assert "rollback" in events
