"""Bearer token issuing and validation.

Tokens are HS256 JWTs signed with ``JWT_SECRET_KEY``. The signature is
computed with the stdlib ``hmac`` module; only the ``HS256`` algorithm is
accepted.
"""
from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import time
from typing import Any, Dict, Optional

from .config import Settings, get_settings
from .exceptions import ConfigurationError
from .logging_config import get_logger

LOGGER = get_logger(__name__)

ALGORITHM = "HS256"

# Seconds of clock skew tolerated on exp/nbf
LEEWAY_SECONDS = 30


# ---------------------------------------------------------------------------
# Pure-Python HS256 JWT
# ---------------------------------------------------------------------------

def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode()


def _b64url_decode(s: str) -> bytes:
    padding = 4 - len(s) % 4
    if padding != 4:
        s += "=" * padding
    return base64.urlsafe_b64decode(s)


def _sign(signing_input: str, secret: str) -> bytes:
    return hmac.new(secret.encode(), signing_input.encode(), hashlib.sha256).digest()


def _jwt_encode(payload: Dict[str, Any], secret: str) -> str:
    header = {"alg": ALGORITHM, "typ": "JWT"}
    segments = [
        _b64url_encode(json.dumps(header, separators=(",", ":")).encode()),
        _b64url_encode(json.dumps(payload, separators=(",", ":"), default=str).encode()),
    ]
    signing_input = f"{segments[0]}.{segments[1]}"
    segments.append(_b64url_encode(_sign(signing_input, secret)))
    return ".".join(segments)


def _jwt_decode(token: str, secret: str) -> Optional[Dict[str, Any]]:
    """Verify the header and signature; returns the payload or None."""
    parts = token.split(".")
    if len(parts) != 3:
        return None

    try:
        header = json.loads(_b64url_decode(parts[0]))
        if not isinstance(header, dict) or header.get("alg") != ALGORITHM:
            return None

        expected_sig = _sign(f"{parts[0]}.{parts[1]}", secret)
        if not hmac.compare_digest(expected_sig, _b64url_decode(parts[2])):
            return None

        payload = json.loads(_b64url_decode(parts[1]))
    except (ValueError, binascii.Error):
        # Malformed base64 or JSON
        return None

    return payload if isinstance(payload, dict) else None


def _audience_matches(claim: Any, audience: str) -> bool:
    if isinstance(claim, list):
        return audience in claim
    return claim == audience


# ---------------------------------------------------------------------------
# Token Creation/Decoding
# ---------------------------------------------------------------------------

def _secret(settings: Settings) -> str:
    if not settings.jwt_secret_key:
        raise ConfigurationError("JWT_SECRET_KEY is not set.")
    return settings.jwt_secret_key


def create_access_token(
    user_id: str,
    expires_minutes: Optional[int] = None,
    extra_claims: Optional[Dict[str, Any]] = None,
    settings: Optional[Settings] = None,
) -> str:
    """
    Create a signed access token for ``user_id``.

    Raises:
        ConfigurationError: If no signing key is configured.
    """
    settings = settings or get_settings()
    now = int(time.time())
    lifetime = expires_minutes or settings.jwt_access_token_expire_minutes

    payload: Dict[str, Any] = dict(extra_claims or {})
    payload.update({
        "sub": str(user_id),
        "iat": now,
        "nbf": now,
        "exp": now + lifetime * 60,
    })
    if settings.jwt_issuer:
        payload["iss"] = settings.jwt_issuer
    if settings.jwt_audience:
        payload["aud"] = settings.jwt_audience
    return _jwt_encode(payload, _secret(settings))


def decode_access_token(token: str, settings: Optional[Settings] = None) -> Optional[Dict[str, Any]]:
    """
    Decode and validate an access token.

    Checks the signature, expiry, not-before, issuer and audience.

    Returns:
        Token payload dict, or None if invalid/expired.
    """
    settings = settings or get_settings()
    payload = _jwt_decode(token, _secret(settings))
    if payload is None:
        LOGGER.debug("Rejected token: bad format or signature")
        return None

    now = time.time()
    exp = payload.get("exp")
    if not isinstance(exp, (int, float)) or exp + LEEWAY_SECONDS < now:
        LOGGER.debug("Rejected token: expired or missing exp")
        return None

    nbf = payload.get("nbf")
    if isinstance(nbf, (int, float)) and nbf - LEEWAY_SECONDS > now:
        LOGGER.debug("Rejected token: not yet valid")
        return None

    if settings.jwt_issuer and payload.get("iss") != settings.jwt_issuer:
        LOGGER.debug("Rejected token: issuer mismatch")
        return None

    if settings.jwt_audience and not _audience_matches(payload.get("aud"), settings.jwt_audience):
        LOGGER.debug("Rejected token: audience mismatch")
        return None

    if not payload.get("sub"):
        return None

    return payload
