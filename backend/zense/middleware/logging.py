"""
Zense Backend - Access Logging Middleware
==========================================

What:  One access line per HTTP request on the `zense.access` logger.

Log line:
    POST /api/v1/journals 201 12.4ms [a1b2c3d4] user=7 from 10.0.0.5

    Structured fields (request_id, method, path, status, duration_ms,
    client_ip, user_id) are attached as `extra` for JSON formatters.

Never logged: request bodies (journal contents, passwords) and the
Authorization header.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from zense.middleware.request_id import request_id_var

logger = logging.getLogger("zense.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Level follows the status: 5xx ERROR, 4xx WARNING, everything else INFO.
    /health is skipped (probes poll it constantly).
    """

    QUIET_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        rid = request_id_var.get("")
        # Set by AuthMiddleware when the request carried a valid token
        user_id = getattr(request.state, "user_id", None)

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] user=%s from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            user_id if user_id is not None else "-",
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "user_id": user_id,
            },
        )
        return response
