"""SQLite engine, session factory and the storage initializer.

The Database object is the single shared storage handle. It behaves like
a sessionmaker (``with database() as session: ...``) and reports
connectivity failures back to the readiness gate, which then stays closed.
"""
import logging
import os
from contextlib import contextmanager
from typing import Callable

from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError, ResourceClosedError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from leaderboard.application.state import AppState
from leaderboard.domain.errors import StorageError

log = logging.getLogger("leaderboard.storage")

# sqlite3 OperationalError messages that mean the file itself is gone or broken.
_CONNECTIVITY_HINTS = (
    "unable to open database file",
    "disk i/o error",
    "database disk image is malformed",
    "file is not a database",
)


def sqlite_url(path: str) -> str:
    return f"sqlite:///{os.path.abspath(path)}"


def is_connectivity_error(exc: OperationalError) -> bool:
    """True when the error means storage is unusable, not just this query."""
    if exc.connection_invalidated:
        return True
    message = str(exc.orig).lower()
    return any(hint in message for hint in _CONNECTIVITY_HINTS)


class Database:
    """Shared storage handle. Callable: returns a managed session."""

    def __init__(self, url: str, on_connection_lost: Callable[[Exception], None] | None = None):
        self._url = url
        self._on_connection_lost = on_connection_lost
        self._engine = None
        self._sf = None

    @property
    def url(self) -> str:
        return self._url

    @property
    def engine(self):
        return self._engine

    def open(self) -> None:
        if self._engine is not None:
            return
        self._engine = create_engine(
            self._url,
            connect_args={"check_same_thread": False},
            pool_pre_ping=True,
            echo=False,
        )
        self._sf = sessionmaker(bind=self._engine, expire_on_commit=False)

    def create_tables(self) -> None:
        """Create the leaderboard table if absent (idempotent)."""
        from leaderboard.infrastructure.database.models import Base

        Base.metadata.create_all(bind=self._engine)

    def check_health(self) -> bool:
        if self._engine is None:
            return False
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._sf = None
            log.info("Storage handle closed")

    def __call__(self):
        return self._managed_session()

    @contextmanager
    def _managed_session(self):
        if self._sf is None:
            raise ResourceClosedError("Storage handle is closed.")
        session = self._sf()
        try:
            yield session
        except OperationalError as exc:
            session.rollback()
            if self._on_connection_lost is not None and is_connectivity_error(exc):
                self._on_connection_lost(exc)
            raise
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


def initialize_storage(state: AppState, db_path: str) -> Database:
    """Open the SQLite file, ensure the schema, and flip readiness.

    Raises StorageError on any failure; callers treat that as fatal.
    """
    log.info("SQLite DB: %s", os.path.abspath(db_path))
    database = None
    try:
        directory = os.path.dirname(os.path.abspath(db_path))
        os.makedirs(directory, exist_ok=True)
        database = Database(sqlite_url(db_path), on_connection_lost=state.mark_unavailable)
        database.open()
        database.create_tables()
        if not database.check_health():
            raise StorageError("Storage health check failed.")
    except (SQLAlchemyError, OSError, StorageError) as exc:
        if database is not None:
            database.close()
        if isinstance(exc, StorageError):
            raise
        raise StorageError("Failed to initialize storage.") from exc

    state.attach(database)
    state.mark_ready()
    log.info("Leaderboard table ready")
    return database
