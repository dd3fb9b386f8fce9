"""
Zense Backend - JWT Authentication Middleware
==============================================

What:  Validates `Authorization: Bearer <jwt>` and exposes the caller's id
       as request.state.user_id.

Skip policy (no token needed):
    - OPTIONS requests (CORS preflight)
    - paths outside the API prefix (/health, /)
    - {prefix}/auth/login and {prefix}/auth/register
    - every GET except {prefix}/users/me

Everything else must carry a valid token. A missing, malformed, expired or
wrongly-signed token is answered here with 401 in the standard error body;
the route is never reached.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from zense.config import settings
from zense.exceptions import AuthenticationError
from zense.middleware.request_id import request_id_var
from zense.security import decode_access_token

logger = logging.getLogger(__name__)


def requires_auth(method: str, path: str, prefix: str = settings.api_prefix) -> bool:
    if method == "OPTIONS":
        return False
    if path != prefix and not path.startswith(prefix + "/"):
        return False
    if path in (f"{prefix}/auth/login", f"{prefix}/auth/register"):
        return False
    if method == "GET":
        return path.rstrip("/") == f"{prefix}/users/me"
    return True


def bearer_token(request: Request) -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Missing or malformed Authorization header")
    return token.strip()


class AuthMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not requires_auth(request.method, request.url.path):
            return await call_next(request)

        try:
            request.state.user_id = decode_access_token(bearer_token(request))
        except AuthenticationError as exc:
            logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
            return JSONResponse(
                status_code=401,
                content={
                    "error": "unauthorized",
                    "message": exc.message,
                    "request_id": request_id_var.get("") or None,
                },
                headers={"WWW-Authenticate": "Bearer"},
            )

        return await call_next(request)
