"""Unit tests for session JWT utilities."""

import pytest

from haven.config import AuthSettings
from haven.util.jwt import JWTError, create_token, verify_token


@pytest.fixture
def settings():
    return AuthSettings(jwt_secret="test-secret")


def test_round_trip_carries_identity(settings):
    token = create_token("did:privy:bob", settings, user_id="u-1", email="b@x.io")

    payload = verify_token(token, settings)

    assert payload.sub == "did:privy:bob"
    assert payload.user_id == "u-1"
    assert payload.email == "b@x.io"


def test_expired_token(settings):
    expired = settings.model_copy(update={"session_ttl_seconds": -10})
    token = create_token("did:privy:bob", expired)

    with pytest.raises(JWTError, match="expired"):
        verify_token(token, settings)


def test_other_secret(settings):
    token = create_token("did:privy:bob", AuthSettings(jwt_secret="other"))

    with pytest.raises(JWTError):
        verify_token(token, settings)


def test_empty_sub(settings):
    with pytest.raises(JWTError):
        create_token("", settings)
