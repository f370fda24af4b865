"""Tests for bearer token verification."""

from datetime import timedelta

from jose import jwt

from houseledger.core.auth import create_access_token, decode_access_token
from houseledger.core.config import settings


def test_round_trip_token():
    token = create_access_token("user-123", "Alice")

    user = decode_access_token(token)

    assert user.id == "user-123"
    assert user.name == "Alice"


def test_expired_token():
    token = create_access_token("user-123", expires_delta=timedelta(minutes=-5))

    assert decode_access_token(token) is None


def test_wrong_secret():
    token = jwt.encode({"sub": "user-123"}, "some-other-secret", algorithm=settings.JWT_ALGORITHM)

    assert decode_access_token(token) is None


def test_missing_subject():
    token = jwt.encode({"name": "Nobody"}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

    assert decode_access_token(token) is None
