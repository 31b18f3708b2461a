"""
Pytest Configuration and Fixtures

Unit fixtures run the app against an in-memory store (no Docker needed).
Live fixtures wait for a running stack before integration tests.
"""

import os

from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Test environment defaults — MUST be before any notes_service imports.
#
# 1. Load .env first so that Docker-matching credentials are available.
# 2. setdefault fills in anything still missing (CI runners, fresh clones
#    without a .env file).
# ---------------------------------------------------------------------------
load_dotenv()  # .env → os.environ (no-op if file is missing)

_test_env = {
    "DB_USER": "postgres",
    "DB_PASSWORD": "password",
    "DB_HOST": "localhost",
    "DB_PORT": "5432",
    "DB_NAME": "notesdb",
    "ENVIRONMENT": "test",
}
for _key, _value in _test_env.items():
    os.environ.setdefault(_key, _value)

# ---------------------------------------------------------------------------
# Imports (safe now that env vars are set)
# ---------------------------------------------------------------------------
import time  # noqa: E402
import uuid  # noqa: E402
from collections.abc import AsyncIterator, Generator  # noqa: E402
from contextlib import asynccontextmanager  # noqa: E402
from datetime import timedelta  # noqa: E402
from types import SimpleNamespace  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.exc import OperationalError  # noqa: E402

from notes_service.main import create_app  # noqa: E402
from notes_service.models import utc_now  # noqa: E402
from notes_service.repositories.notes import get_note_repository  # noqa: E402

BASE_URL = os.getenv("NOTES_API_URL", "http://localhost:5000")


# ---------------------------------------------------------------------------
# In-memory doubles
# ---------------------------------------------------------------------------


def store_down_error() -> OperationalError:
    return OperationalError(
        "SELECT 1", {}, ConnectionRefusedError("connection refused")
    )


class FakeDatabase:
    """Stands in for notes_service.core.database.Database."""

    def __init__(self, ready: bool = True):
        self.ready = ready
        self.down = False
        self.schema_created = False
        self.disposed = False

    async def wait_until_ready(self, retries: int = 10, delay: float = 1.0) -> bool:
        return self.ready

    async def create_schema(self) -> None:
        self.schema_created = True

    async def ping(self) -> None:
        if self.down:
            raise store_down_error()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[None]:
        yield None

    async def dispose(self) -> None:
        self.disposed = True


class InMemoryNoteRepository:
    """NoteRepository replacement keeping notes in a dict."""

    def __init__(self):
        self.notes: dict[uuid.UUID, SimpleNamespace] = {}
        self.error: Exception | None = None
        self._clock = utc_now()

    def _now(self):
        # Strictly increasing so ordering by created_at is deterministic
        self._clock += timedelta(milliseconds=1)
        return self._clock

    def _check(self) -> None:
        if self.error is not None:
            raise self.error

    async def list_all(self, session):
        self._check()
        return sorted(self.notes.values(), key=lambda n: n.created_at, reverse=True)

    async def get_by_id(self, session, note_id):
        self._check()
        return self.notes.get(note_id)

    async def create(self, session, obj_in):
        self._check()
        now = self._now()
        note = SimpleNamespace(
            id=uuid.uuid4(),
            title=obj_in.title,
            content=obj_in.content,
            created_at=now,
            updated_at=now,
        )
        self.notes[note.id] = note
        return note

    async def update(self, session, note_id, obj_in):
        self._check()
        note = self.notes.get(note_id)
        if note is None:
            return None
        note.title = obj_in.title
        note.content = obj_in.content
        note.updated_at = self._now()
        return note

    async def delete(self, session, note_id):
        self._check()
        return self.notes.pop(note_id, None) is not None


# ---------------------------------------------------------------------------
# Unit fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def database_factory() -> type[FakeDatabase]:
    """The fake store class, for tests that need a custom instance."""
    return FakeDatabase


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def fake_repo() -> InMemoryNoteRepository:
    return InMemoryNoteRepository()


@pytest.fixture
def app(fake_db, fake_repo):
    """Application wired to the in-memory store."""
    application = create_app(database=fake_db)
    application.dependency_overrides[get_note_repository] = lambda: fake_repo
    return application


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """TestClient; entering it runs the lifespan (startup + schema bootstrap)."""
    with TestClient(app) as test_client:
        yield test_client


# ---------------------------------------------------------------------------
# Live fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def wait_for_api():
    """
    Block until the API is ready or timeout expires.

    Polls /health endpoint with 1s intervals for up to 30s.
    Fails the test session if API is unreachable (Docker likely not running).
    """
    url = f"{BASE_URL}/health"
    timeout = 30
    start = time.time()

    print("\n[Test] Waiting for API...")
    while time.time() - start < timeout:
        try:
            res = httpx.get(url, timeout=1.0)
            if res.status_code == 200:
                print("API Ready")
                return
        except httpx.RequestError:
            time.sleep(1)

    pytest.fail("API unreachable. Docker is likely down.")


@pytest.fixture(scope="session")
def api_client(wait_for_api) -> Generator[httpx.Client, None, None]:
    """
    Pre-configured HTTP client for integration tests.

    Base URL points to /api for cleaner test assertions.
    """
    with httpx.Client(base_url=f"{BASE_URL}/api", timeout=10.0) as client:
        yield client
