"""Application state -- the storage handle plus the readiness gate.

One AppState lives on ``app.state.leaderboard`` and is handed to every
request through FastAPI dependencies.
"""
import logging
import threading
from enum import Enum

from leaderboard.domain.errors import NotReadyError

log = logging.getLogger("leaderboard.storage")


class Readiness(str, Enum):
    STARTING = "starting"
    READY = "ready"
    UNAVAILABLE = "unavailable"


class AppState:
    """Holds the shared storage handle and whether it may be used."""

    def __init__(self):
        self._lock = threading.Lock()
        self._readiness = Readiness.STARTING
        self._database = None

    @property
    def readiness(self) -> Readiness:
        return self._readiness

    @property
    def database(self):
        return self._database

    def is_ready(self) -> bool:
        return self._readiness is Readiness.READY

    def require_ready(self) -> None:
        """Raise NotReadyError unless storage is usable."""
        if self._readiness is not Readiness.READY:
            raise NotReadyError()

    def attach(self, database) -> None:
        with self._lock:
            self._database = database

    def mark_ready(self) -> None:
        with self._lock:
            if self._database is None:
                raise RuntimeError("No storage attached. Call attach() first.")
            self._readiness = Readiness.READY

    def mark_unavailable(self, reason: object = None) -> None:
        """Storage was lost. Stays unavailable; no reconnection is attempted."""
        with self._lock:
            if self._readiness is Readiness.READY:
                log.error("Storage became unavailable: %s", reason)
            self._readiness = Readiness.UNAVAILABLE

    def detach(self):
        """Gate further access and hand back the storage handle for closing."""
        with self._lock:
            database, self._database = self._database, None
            self._readiness = Readiness.UNAVAILABLE
        return database
