"""
Notes App — Health Check Route
==============================

What:  GET /health for container probes and monitoring.
How:   Pings the record store with SELECT 1. The service is healthy only
       when the store answers; an uninitialized store counts as down.
"""

import logging
import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from notesapp import __version__
from notesapp.database import store
from notesapp.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Record store unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check():
    """
    Returns 200 with status "healthy" when the store answers, otherwise 503
    with status "unhealthy" so load balancers stop routing traffic here.
    """
    connected = store.is_initialized and await store.ping()
    if not connected:
        logger.warning("Health check: record store unreachable")

    body = HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    return JSONResponse(status_code=200 if connected else 503, content=body.model_dump())
