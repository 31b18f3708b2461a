"""
Main Application Unit Tests

Startup/shutdown behaviour, health checks and top-level error handling,
with an in-memory store instead of Docker.
"""

import pytest
from fastapi.testclient import TestClient

from notes_service.core.config import settings
from notes_service.main import create_app
from notes_service.repositories.notes import get_note_repository


def test_startup_creates_schema_and_shutdown_disposes(fake_db, app):
    with TestClient(app):
        assert fake_db.schema_created
        assert not fake_db.disposed
    assert fake_db.disposed


def test_startup_fails_fast_when_database_unreachable(database_factory):
    db = database_factory(ready=False)
    with pytest.raises(RuntimeError, match="Database connection failed"):
        with TestClient(create_app(database=db)):
            pass
    assert not db.schema_created


def test_startup_fails_when_schema_bootstrap_fails(database_factory):
    class BrokenSchemaDatabase(database_factory):
        async def create_schema(self) -> None:
            raise OSError("permission denied for schema public")

    db = BrokenSchemaDatabase()
    with pytest.raises(RuntimeError, match="schema initialization failed"):
        with TestClient(create_app(database=db)):
            pass
    assert db.disposed


def test_health_check(client):
    """Verify /health endpoint returns correct response structure."""
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["service"] == settings.SERVICE_NAME
    assert data["version"] == settings.VERSION
    assert "timestamp" in data
    assert "environment" in data


def test_database_health_ok(client):
    response = client.get("/api/health/db")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "connected"}


def test_liveness_survives_store_outage_while_readiness_fails(client, fake_db):
    fake_db.down = True

    live = client.get("/health")
    ready = client.get("/api/health/db")

    assert live.status_code == 200
    assert ready.status_code == 500
    body = ready.json()
    assert body["status"] == "error"
    assert body["database"] == "disconnected"
    assert "connection refused" in body["error"]


def test_unknown_route_returns_route_not_found(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"error": "Route not found"}


def test_unhandled_exception_returns_generic_500(fake_db, fake_repo):
    fake_repo.error = RuntimeError("boom")
    app = create_app(database=fake_db)
    app.dependency_overrides[get_note_repository] = lambda: fake_repo

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/notes")

    assert response.status_code == 500
    assert response.json() == {
        "error": "Something went wrong!",
        "message": "Internal server error",
    }
