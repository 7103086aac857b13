"""Unit tests for JWT helpers."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from listen.config import AuthSettings
from listen.util.jwt import JWTError, create_token, verify_token

SETTINGS = AuthSettings(jwt_secret="test-secret-with-enough-bytes-for-hs256")


def test_token_round_trip():
    token = create_token("7c0a3f9e-1f0e-4d59-9a4e-2a36f5d2a0f1", "alice", SETTINGS)

    payload = verify_token(token, SETTINGS)

    assert payload.user_id == "7c0a3f9e-1f0e-4d59-9a4e-2a36f5d2a0f1"
    assert payload.handle == "alice"
    assert payload.exp > datetime.now(timezone.utc)


def test_wrong_secret_rejected():
    other = AuthSettings(jwt_secret="other-secret-with-enough-bytes-for-hs256")
    token = create_token("user", "alice", other)

    with pytest.raises(JWTError, match="Invalid token"):
        verify_token(token, SETTINGS)


def test_expired_token_rejected():
    token = jwt.encode(
        {
            "user_id": "user",
            "handle": "alice",
            "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
        },
        SETTINGS.jwt_secret,
        algorithm=SETTINGS.jwt_algorithm,
    )

    with pytest.raises(JWTError, match="expired"):
        verify_token(token, SETTINGS)


def test_payload_missing_claims_rejected():
    """A correctly signed token without a user ID is still invalid."""
    token = jwt.encode(
        {"exp": datetime.now(timezone.utc) + timedelta(days=1)},
        SETTINGS.jwt_secret,
        algorithm=SETTINGS.jwt_algorithm,
    )

    with pytest.raises(JWTError):
        verify_token(token, SETTINGS)
