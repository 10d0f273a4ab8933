"""
Health Endpoints.

    GET /health        liveness: the process answers
    GET /health/ready  readiness: the database answers SELECT 1 within 5 s
"""

import asyncio
import time
from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.backend.core.dependencies import DbSession
from notekeeper.backend.core.logging import get_logger
from notekeeper.backend.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)

READY_TIMEOUT_SECONDS = 5


async def check_database(session: AsyncSession) -> dict[str, Any]:
    """Probe the database; never raises, reports the failure type instead."""
    started = time.perf_counter()
    try:
        async with asyncio.timeout(READY_TIMEOUT_SECONDS):
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": type(e).__name__}

    return {
        "status": "healthy",
        "latency_ms": int((time.perf_counter() - started) * 1000),
    }


@router.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check(db: DbSession) -> Any:
    """200 when the database is reachable, 503 otherwise."""
    database = await check_database(db)
    healthy = database["status"] == "healthy"

    body = {
        "status": "healthy" if healthy else "unhealthy",
        "checks": {"database": database},
        "timestamp": utc_now().isoformat(),
    }
    if not healthy:
        logger.warning("Readiness check failed", extra={"checks": body["checks"]})
        return JSONResponse(status_code=503, content=body)
    return body
