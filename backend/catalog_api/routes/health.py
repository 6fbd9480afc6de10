"""
Catalog API — Liveness & Health Routes
========================================

What:  GET /ping (process is up) and GET /health (process + database).
Who:   Clients checking connectivity, Docker health checks, load balancers.

Status levels for /health:
    - healthy:   database reachable
    - unhealthy: database unreachable
"""

import logging
import time

from fastapi import APIRouter
from sqlalchemy import text

from catalog_api import __version__
from catalog_api.schemas.common import HealthResponse, StatusMessage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/ping",
    response_model=StatusMessage,
    summary="Liveness probe",
)
async def ping() -> StatusMessage:
    """Always answers pong; touches no dependency."""
    return StatusMessage(status="success", message="pong")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description=(
        "Returns the health status of the backend service and its database. "
        "Used by Docker health checks and load balancers."
    ),
)
async def health_check() -> HealthResponse:
    """
    Probe the database with SELECT 1 and report aggregate status.

    Returns:
        HealthResponse with database status and uptime.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        from catalog_api.database import engine
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
