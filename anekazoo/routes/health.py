"""
Anekazoo Animals API - Health Check Route
==========================================

What:  Health check endpoint for monitoring and container probes.
How:   Pings the animal store with `SELECT 1` and reports uptime.

Status levels:
    - healthy:   Store reachable
    - unhealthy: Store unreachable (still answered with HTTP 200 so the
                 body is readable by probes)
"""

import logging
import time

from fastapi import APIRouter, Depends

from anekazoo import __version__
from anekazoo.dependencies import get_animal_store
from anekazoo.schemas.animal import HealthResponse
from anekazoo.services.store_base import AnimalStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: AnimalStore = Depends(get_animal_store)) -> HealthResponse:
    """Report service status, version, store connectivity and uptime."""
    if await store.ping():
        db_status, overall = "connected", "healthy"
    else:
        db_status, overall = "disconnected", "unhealthy"
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
