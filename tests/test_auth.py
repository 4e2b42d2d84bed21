"""Tests for bearer token issuing and validation."""
from __future__ import annotations

import time

import pytest

from core.auth import (
    _b64url_encode,
    _jwt_encode,
    create_access_token,
    decode_access_token,
)
from core.config import Settings
from core.exceptions import ConfigurationError

SECRET = "unit-test-signing-key-0123456789abcdef"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        JWT_SECRET_KEY=SECRET,
        JWT_ISSUER="flightbook",
        JWT_AUDIENCE="flightbook-api",
    )


def _claims(**overrides):
    now = int(time.time())
    claims = {
        "sub": "user-1",
        "iss": "flightbook",
        "aud": "flightbook-api",
        "iat": now,
        "nbf": now,
        "exp": now + 600,
    }
    claims.update(overrides)
    return claims


class TestTokenRoundTrip:
    def test_valid_token(self, settings):
        token = create_access_token("user-1", settings=settings)
        payload = decode_access_token(token, settings=settings)

        assert payload is not None
        assert payload["sub"] == "user-1"
        assert payload["iss"] == "flightbook"
        assert payload["aud"] == "flightbook-api"
        assert payload["exp"] - payload["iat"] == 60 * settings.jwt_access_token_expire_minutes

    def test_custom_lifetime_and_claims(self, settings):
        token = create_access_token(
            "user-1", expires_minutes=5, extra_claims={"name": "Sam"}, settings=settings
        )
        payload = decode_access_token(token, settings=settings)

        assert payload["exp"] - payload["iat"] == 300
        assert payload["name"] == "Sam"

    def test_audience_list_accepted(self, settings):
        token = _jwt_encode(_claims(aud=["other", "flightbook-api"]), SECRET)
        assert decode_access_token(token, settings=settings) is not None


class TestRejectedTokens:
    def test_wrong_secret(self, settings):
        token = _jwt_encode(_claims(), "some-other-secret")
        assert decode_access_token(token, settings=settings) is None

    def test_tampered_payload(self, settings):
        header, _, signature = create_access_token("user-1", settings=settings).split(".")
        forged = _b64url_encode(b'{"sub":"admin","exp":9999999999}')
        assert decode_access_token(f"{header}.{forged}.{signature}", settings=settings) is None

    def test_expired(self, settings):
        token = _jwt_encode(_claims(exp=int(time.time()) - 3600), SECRET)
        assert decode_access_token(token, settings=settings) is None

    def test_missing_expiry(self, settings):
        claims = _claims()
        del claims["exp"]
        assert decode_access_token(_jwt_encode(claims, SECRET), settings=settings) is None

    def test_not_yet_valid(self, settings):
        token = _jwt_encode(_claims(nbf=int(time.time()) + 3600), SECRET)
        assert decode_access_token(token, settings=settings) is None

    def test_wrong_issuer(self, settings):
        token = _jwt_encode(_claims(iss="someone-else"), SECRET)
        assert decode_access_token(token, settings=settings) is None

    def test_wrong_audience(self, settings):
        token = _jwt_encode(_claims(aud="another-api"), SECRET)
        assert decode_access_token(token, settings=settings) is None

    def test_missing_subject(self, settings):
        claims = _claims()
        del claims["sub"]
        assert decode_access_token(_jwt_encode(claims, SECRET), settings=settings) is None

    def test_unsigned_algorithm(self, settings):
        header = _b64url_encode(b'{"alg":"none","typ":"JWT"}')
        valid = create_access_token("user-1", settings=settings)
        payload = valid.split(".")[1]
        assert decode_access_token(f"{header}.{payload}.", settings=settings) is None

    @pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c.d", "!!!.###.$$$"])
    def test_garbage(self, settings, token):
        assert decode_access_token(token, settings=settings) is None


def test_missing_secret_is_configuration_error():
    settings = Settings(JWT_SECRET_KEY="")
    with pytest.raises(ConfigurationError):
        create_access_token("user-1", settings=settings)
