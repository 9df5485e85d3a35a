"""
BrandAgent Backend - Health Check Route
=========================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Runs SELECT 1 through the application's Store.
Who:   Called by Docker health checks, load balancers, and monitoring systems.

Status levels:
    - healthy:   store reachable (HTTP 200)
    - unhealthy: store unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from brandagent import __version__
from brandagent.database import Store, get_store
from brandagent.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Store unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(store: Store = Depends(get_store)):
    db_status = "connected"
    overall = "healthy"

    try:
        await store.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: store unreachable: %s", str(e))

    body = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if overall == "unhealthy":
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
