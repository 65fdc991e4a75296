"""
Shared pytest fixtures for the leaderboard test suite.

Strategy:
- Domain tests: pure in-memory, zero I/O.
- Repository tests: a real SQLite file under tmp_path.
- API tests: FastAPI TestClient on create_app() with tmp settings, so the
  lifespan runs the real storage initializer.
"""
import pytest
from fastapi.testclient import TestClient

from leaderboard.application.state import AppState
from leaderboard.config import Settings
from leaderboard.domain.entry import ValidatedEntry
from leaderboard.infrastructure.database.connection import initialize_storage
from leaderboard.infrastructure.repositories.leaderboard_repository import LeaderboardRepository
from leaderboard.main import create_app


def make_entry(name="Player", cash=100, sales=10, burn=5) -> ValidatedEntry:
    return ValidatedEntry(name=name, cash=cash, sales=sales, burn=burn)


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------

@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "leaderboard.db")


@pytest.fixture
def state():
    return AppState()


@pytest.fixture
def database(state, db_path):
    """Initialized storage attached to `state`; closed after the test."""
    db = initialize_storage(state, db_path)
    yield db
    db.close()


@pytest.fixture
def repo(state, database):
    return LeaderboardRepository(state)


# ---------------------------------------------------------------------------
# FastAPI TestClient
# ---------------------------------------------------------------------------

@pytest.fixture
def settings(tmp_path, db_path):
    return Settings(
        port=3000,
        db_path=db_path,
        static_dir=str(tmp_path / "static"),
        drain_timeout=1.0,
    )


@pytest.fixture
def test_app(settings):
    return create_app(settings)


@pytest.fixture
def client(test_app):
    """Client with the lifespan running: storage initialized and ready."""
    with TestClient(test_app) as c:
        yield c
