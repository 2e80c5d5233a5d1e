"""Tests for the PyJWT-backed token provider."""

from __future__ import annotations

from datetime import timedelta

import jwt
import pytest
from freezegun import freeze_time

from tubehub.infra.jwt.jwt_token_provider import JWTTokenProvider
from tubehub.services._shared.ports import ACCESS_TOKEN_TYPE, REFRESH_TOKEN_TYPE, InvalidTokenError

ACCESS_SECRET = "access-secret-for-tests-0123456789abcdef"
REFRESH_SECRET = "refresh-secret-for-tests-0123456789abcdef"


@pytest.fixture()
def provider() -> JWTTokenProvider:
    return JWTTokenProvider(
        access_secret=ACCESS_SECRET,
        refresh_secret=REFRESH_SECRET,
        access_expires=timedelta(minutes=15),
        refresh_expires=timedelta(days=10),
    )


def test_access_token_carries_identity_claims(provider):
    token = provider.create_access_token(
        identity=7, additional_claims={"email": "a@b.io", "userName": "al"}, fresh=True
    )
    claims = provider.decode(token, expected_type=ACCESS_TOKEN_TYPE)

    assert claims["sub"] == "7"
    assert claims["type"] == "access"
    assert claims["email"] == "a@b.io"
    assert claims["userName"] == "al"
    assert claims["fresh"] is True
    assert claims["exp"] - claims["iat"] == 15 * 60


def test_refresh_token_has_only_subject(provider):
    token = provider.create_refresh_token(identity=7)
    claims = provider.decode(token, expected_type=REFRESH_TOKEN_TYPE)

    assert claims["sub"] == "7"
    assert "email" not in claims
    assert claims["exp"] - claims["iat"] == 10 * 24 * 3600


def test_reserved_claims_cannot_be_overridden(provider):
    token = provider.create_access_token(identity=1, additional_claims={"sub": "999", "type": "x"})
    claims = provider.decode(token, expected_type=ACCESS_TOKEN_TYPE)
    assert (claims["sub"], claims["type"]) == ("1", "access")


def test_each_token_is_unique(provider):
    assert provider.create_refresh_token(identity=1) != provider.create_refresh_token(identity=1)


def test_kinds_use_separate_secrets(provider):
    refresh = provider.create_refresh_token(identity=1)
    with pytest.raises(InvalidTokenError):
        provider.decode(refresh, expected_type=ACCESS_TOKEN_TYPE)

    access = provider.create_access_token(identity=1)
    with pytest.raises(InvalidTokenError):
        provider.decode(access, expected_type=REFRESH_TOKEN_TYPE)


def test_wrong_type_with_right_secret_is_rejected(provider):
    forged = jwt.encode(
        {"sub": "1", "type": "access", "jti": "j", "iat": 0, "exp": 4102444800},
        REFRESH_SECRET,
        algorithm="HS256",
    )
    with pytest.raises(InvalidTokenError, match="wrong token type"):
        provider.decode(forged, expected_type=REFRESH_TOKEN_TYPE)


def test_tampered_and_garbage_tokens(provider):
    token = provider.create_refresh_token(identity=1)
    with pytest.raises(InvalidTokenError):
        provider.decode(token[:-2] + "xx", expected_type=REFRESH_TOKEN_TYPE)
    with pytest.raises(InvalidTokenError):
        provider.decode("not-a-jwt", expected_type=REFRESH_TOKEN_TYPE)
    with pytest.raises(InvalidTokenError):
        provider.decode("", expected_type=REFRESH_TOKEN_TYPE)


def test_expired_token(provider):
    with freeze_time("2026-01-01 00:00:00"):
        token = provider.create_refresh_token(identity=1)
    with freeze_time("2026-01-11 00:00:01"), pytest.raises(InvalidTokenError):
        provider.decode(token, expected_type=REFRESH_TOKEN_TYPE)


def test_from_config():
    provider = JWTTokenProvider.from_config(
        {
            "ACCESS_TOKEN_SECRET": ACCESS_SECRET,
            "REFRESH_TOKEN_SECRET": REFRESH_SECRET,
            "ACCESS_TOKEN_EXPIRY": timedelta(minutes=5),
            "REFRESH_TOKEN_EXPIRY": timedelta(days=1),
        }
    )
    assert provider.access_expires == timedelta(minutes=5)
    assert provider.algorithm == "HS256"
