"""
Health Checks

Liveness (``/health``) reports that the process is up and never touches
the store. Readiness (``/api/health/db``) runs a trivial query so that
orchestrators stop routing traffic to an instance whose store is down.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from notes_service.core.config import settings
from notes_service.core.database import Database, get_database
from notes_service.models import utc_now
from notes_service.schemas.health import DatabaseHealth, HealthStatus

logger = logging.getLogger(__name__)

liveness_router = APIRouter()
readiness_router = APIRouter()


@liveness_router.get("/health", response_model=HealthStatus)
async def health_check() -> HealthStatus:
    """Health check for load balancers and orchestrators."""
    return HealthStatus(
        status="ok",
        service=settings.SERVICE_NAME,
        timestamp=utc_now(),
        version=settings.VERSION,
        environment=settings.ENVIRONMENT,
    )


@readiness_router.get(
    "/health/db",
    response_model=DatabaseHealth,
    response_model_exclude_none=True,
    responses={500: {"model": DatabaseHealth, "description": "Store unreachable"}},
)
async def database_health(database: Database = Depends(get_database)):
    """Check the store with ``SELECT 1``."""
    try:
        await database.ping()
    except Exception as e:
        logger.warning("Database health check failed: %s", e)
        body = DatabaseHealth(status="error", database="disconnected", error=str(e))
        return JSONResponse(status_code=500, content=body.model_dump())
    return DatabaseHealth(status="ok", database="connected")
