"""
Zense Backend - Health Check Route
===================================

What:  GET /health for container probes and load balancers.

Status levels:
    healthy    database reachable and Gemini available          (200)
    degraded   database reachable, Gemini down or circuit open  (200)
    unhealthy  database unreachable                             (503)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text

from zense import __version__
from zense.database import engine
from zense.dependencies import get_llm_service
from zense.schemas.common import HealthResponse
from zense.services.gemini_service import CircuitBreaker
from zense.services.llm_base import LLMService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
)
async def health_check(llm: LLMService = Depends(get_llm_service)):
    db_status = "connected"
    gemini_status = "available"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        logger.warning("Health check: database unreachable: %s", str(e))

    breaker = getattr(llm, "circuit_breaker", None)
    if breaker is not None and breaker.state == CircuitBreaker.OPEN:
        gemini_status = "circuit_open"
    elif not await llm.health_check():
        gemini_status = "unavailable"

    if db_status != "connected":
        overall = "unhealthy"
    elif gemini_status != "available":
        overall = "degraded"
    else:
        overall = "healthy"

    body = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        gemini=gemini_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if overall == "unhealthy":
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
