"""
Pokedex Backend — Health Check and Welcome Routes
==================================================

What:  GET /health for uptime monitors and GET / with API information.
How:   The health check loads the collection file to prove it is readable.
Who:   Docker health checks, load balancers, humans exploring the API.

Status levels:
    - healthy:   Collection file readable and well-formed (HTTP 200)
    - unhealthy: Collection file missing or corrupt (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app import __version__
from app.schemas.pokemon import HealthResponse, WelcomeResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["General"])

# Process start, for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Data store unreadable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request) -> JSONResponse:
    """Probe the data store and report aggregate status with uptime."""
    store = request.app.state.store
    readable = await store.is_readable()
    if not readable:
        logger.warning("Health check: data file %s unreadable", store.path)

    body = HealthResponse(
        status="healthy" if readable else "unhealthy",
        version=__version__,
        data_store="readable" if readable else "unreadable",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    return JSONResponse(status_code=200 if readable else 503, content=body.model_dump())


@router.get(
    "/",
    response_model=WelcomeResponse,
    summary="Welcome endpoint",
    description="Returns API information and available endpoints",
)
async def welcome() -> WelcomeResponse:
    return WelcomeResponse(
        message="Welcome to Pokemon API",
        version=__version__,
        endpoints={
            "getAll": "GET /api/pokemon",
            "getById": "GET /api/pokemon/:id",
            "create": "POST /api/pokemon",
            "update": "PUT /api/pokemon/:id",
            "delete": "DELETE /api/pokemon/:id",
        },
        documentation="/api-docs",
    )
