"""
Zense Backend - FastAPI Application Factory
============================================

What:  Builds the FastAPI application: middleware, routers, exception
       handlers and the startup/shutdown lifecycle.
Who:   uvicorn (`uvicorn zense.main:app`) and the test suite.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware: RateLimit → RequestID → Logging → Auth      │
    │              → GZip → CORS                               │
    │                                                          │
    │  Routes (/api/v1):                                       │
    │    auth · users · journals · forums · topics ·           │
    │    comments · vents          + GET /health               │
    │                                                          │
    │  Exception Handlers:                                     │
    │    400 validation · 401 auth · 403 owner · 404 · 409     │
    │    429 rate limit · 503 LLM · 500 database/unexpected    │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → JWT secret check (fatal) → configuration check
              → create missing tables
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from zense import __version__
from zense.config import settings
from zense.database import create_tables, dispose_engine
from zense.exceptions import (
    AuthenticationError,
    CircuitBreakerOpenError,
    ConflictError,
    ForbiddenError,
    LLMServiceError,
    NotFoundError,
    RateLimitExceededError,
    ValidationError,
    ZenseError,
)
from zense.middleware.auth import AuthMiddleware
from zense.middleware.logging import RequestLoggingMiddleware
from zense.middleware.rate_limit import RateLimitMiddleware
from zense.middleware.request_id import RequestIDMiddleware, request_id_var
from zense.routes import auth, comments, forums, health, journals, topics, users, vents

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """
    Configure the root logger once, before anything else logs.

    Format: 2024-01-15T12:00:00 [INFO] zense.services.journal_service: ...
    Noisy third-party loggers are capped at WARNING.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("Zense Backend %s starting up...", __version__)

    try:
        settings.validate_jwt_secret()
    except ValueError as e:
        logger.critical("Refusing to start: %s", str(e))
        raise

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Reported, not fatal: CRUD works without Gemini, and a default
        # JWT secret only gets this far on local SQLite
        logger.error("Configuration error: %s", str(e))

    if settings.auto_create_tables:
        await create_tables()
        logger.info("Database tables verified")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info(
        "API docs: http://%s:%d%s/docs",
        settings.backend_host, settings.backend_port, settings.api_prefix,
    )
    logger.info("=" * 60)

    yield

    logger.info("Zense Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


def _error(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {"error": error, "message": message}
    if details:
        content["details"] = details
    content["request_id"] = request_id_var.get("") or None
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to HTTP responses.

    Handler hierarchy:
        ValidationError, RequestValidationError → 400
        AuthenticationError                     → 401
        ForbiddenError                          → 403
        NotFoundError                           → 404
        ConflictError                           → 409
        RateLimitExceededError                  → 429
        LLMServiceError, CircuitBreakerOpenError → 503
        SQLAlchemyError                         → 500 server_error
        ZenseError, Exception                   → 500 internal_server_error

    Responses never carry stack traces or SQL; those are logged.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error(400, "validation_error", exc.message, exc.context)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        # Body/path/query binding failures use the same 400 shape as ValidationError
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ())[1:]),
                "message": err.get("msg", "Invalid value"),
            }
            for err in exc.errors()
        ]
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), errors)
        return _error(400, "validation_error", "Request validation failed", {"errors": errors})

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return _error(
            401, "unauthorized", exc.message, headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(ForbiddenError)
    async def handle_forbidden(request: Request, exc: ForbiddenError):
        logger.warning("[%s] Forbidden: %s | %s", request_id_var.get(""), exc.message, exc.context)
        return _error(403, "forbidden", exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error(404, "not_found", exc.message)

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        return _error(409, "conflict", exc.message)

    @app.exception_handler(RateLimitExceededError)
    async def handle_rate_limit(request: Request, exc: RateLimitExceededError):
        return _error(
            429, "rate_limit_exceeded", exc.message, exc.context,
            headers={"Retry-After": str(exc.retry_after)},
        )

    @app.exception_handler(CircuitBreakerOpenError)
    async def handle_circuit_breaker(request: Request, exc: CircuitBreakerOpenError):
        logger.warning("[%s] Circuit breaker open: %s", request_id_var.get(""), exc.message)
        return _error(
            503, "service_unavailable", exc.message,
            {"recovery_time": exc.recovery_time},
            headers={"Retry-After": str(exc.recovery_time)},
        )

    @app.exception_handler(LLMServiceError)
    async def handle_llm_error(request: Request, exc: LLMServiceError):
        logger.error("[%s] LLM service error: %s", request_id_var.get(""), exc.message)
        headers = {"Retry-After": str(exc.retry_after)} if exc.retry_after else None
        details = {"retry_after": exc.retry_after} if exc.retry_after else None
        return _error(503, "llm_service_error", exc.message, details, headers=headers)

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        logger.error(
            "[%s] Database error: %s", request_id_var.get(""), str(exc), exc_info=True,
        )
        return _error(500, "server_error", "An internal error occurred. Please try again later.")

    @app.exception_handler(ZenseError)
    async def handle_zense_error(request: Request, exc: ZenseError):
        logger.error("[%s] Unhandled application error: %s", request_id_var.get(""), exc.message)
        return _error(500, "internal_server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True,
        )
        return _error(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


def create_app() -> FastAPI:
    app = FastAPI(
        title="Zense API",
        description=(
            "Journaling, forum and AI venting backend. Write mood journals, "
            "discuss in topic-tagged forums and talk things through with an "
            "empathetic Gemini-powered companion."
        ),
        version=__version__,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
        lifespan=lifespan,
    )

    # ── Middleware (last added runs first) ────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(AuthMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(RateLimitMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(journals.router)
    app.include_router(forums.router)
    app.include_router(topics.router)
    app.include_router(comments.router)
    app.include_router(vents.router)
    app.include_router(health.router)

    return app


app = create_app()
