"""Authentication dependencies for FastAPI routes."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.auth import decode_access_token
from core.logging_config import get_logger

LOGGER = get_logger(__name__)

security = HTTPBearer(auto_error=False)


@dataclass
class CurrentUser:
    """The authenticated caller, identified by the token subject."""

    user_id: str
    claims: Dict[str, Any] = field(default_factory=dict)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """
    Validate the bearer token and return the caller.

    Raises 401 if the token is missing, invalid or expired.
    """
    if credentials is None:
        raise _unauthorized("Authentication required")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        LOGGER.info("Rejected bearer token", extra={"extra_data": {"path": request.url.path}})
        raise _unauthorized("Invalid or expired token")

    return CurrentUser(user_id=str(payload["sub"]), claims=payload)
