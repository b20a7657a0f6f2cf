"""
Bookshelf API — Health Check Route
===================================

What:  GET /health for container probes and load balancers.
How:   Times a `SELECT 1` on the engine. A failed probe turns the answer into
       503 with status "unhealthy".

Mounted outside the API prefix: no JSON:API headers, no bearer token.
"""

import logging
import time
from typing import Optional

from fastapi import APIRouter, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from bookshelf import __version__
from bookshelf.config import settings
from bookshelf.database import engine
from bookshelf.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_started_at = time.monotonic()


async def probe_database() -> Optional[float]:
    """Milliseconds taken by `SELECT 1`, or None when the database is unreachable."""
    started = time.perf_counter()
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database probe failed: %s", e)
        return None
    return round((time.perf_counter() - started) * 1000, 2)


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check(response: Response) -> HealthResponse:
    latency = await probe_database()
    if latency is None:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="healthy" if latency is not None else "unhealthy",
        version=__version__,
        database="connected" if latency is not None else "disconnected",
        database_latency_ms=latency,
        api_prefix=settings.api_prefix,
        uptime_seconds=round(time.monotonic() - _started_at, 2),
    )
