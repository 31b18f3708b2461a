"""Health check response schemas."""

from datetime import datetime

from pydantic import BaseModel


class HealthStatus(BaseModel):
    """Liveness payload. Never depends on the store."""

    status: str
    service: str
    timestamp: datetime
    version: str
    environment: str


class DatabaseHealth(BaseModel):
    """Readiness payload for the store dependency."""

    status: str
    database: str
    error: str | None = None
