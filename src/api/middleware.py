"""HTTPS enforcement middleware."""
from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from core.logging_config import get_logger

LOGGER = get_logger(__name__)

REDIRECT_METHODS = {"GET", "HEAD"}


class RequireHttpsMiddleware(BaseHTTPMiddleware):
    """
    Reject requests that did not arrive over HTTPS.

    Safe methods are redirected to the ``https`` URL; anything else gets a 403
    so that a request body is never replayed over an insecure channel.
    """

    def __init__(self, app: ASGIApp, trust_forwarded_proto: bool = False) -> None:
        super().__init__(app)
        self.trust_forwarded_proto = trust_forwarded_proto

    def is_secure(self, request: Request) -> bool:
        if request.url.scheme == "https":
            return True
        if self.trust_forwarded_proto:
            forwarded = request.headers.get("x-forwarded-proto", "")
            # First hop is the client-facing scheme
            return forwarded.split(",")[0].strip().lower() == "https"
        return False

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self.is_secure(request):
            return await call_next(request)

        LOGGER.warning(
            "Rejected non-HTTPS request",
            extra={"extra_data": {"method": request.method, "path": request.url.path}},
        )
        if request.method in REDIRECT_METHODS:
            return RedirectResponse(str(request.url.replace(scheme="https")), status_code=302)
        return JSONResponse(
            status_code=403,
            content={"error": "https_required", "message": "HTTPS is required."},
        )
