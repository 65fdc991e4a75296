"""Process lifecycle -- startup gating, in-flight tracking, graceful drain.

    STARTING -> READY -> DRAINING -> STOPPED
    STARTING -> FAILED          (terminal, process exits non-zero)
"""
import logging
import threading
from enum import Enum
from typing import Callable

from leaderboard.application.state import AppState
from leaderboard.domain.errors import StorageError

log = logging.getLogger("leaderboard.startup")


class LifecyclePhase(str, Enum):
    STARTING = "starting"
    READY = "ready"
    DRAINING = "draining"
    STOPPED = "stopped"
    FAILED = "failed"


class LifecycleManager:
    """Runs the storage initializer and coordinates shutdown."""

    def __init__(
        self,
        state: AppState,
        initializer: Callable[[AppState], object],
        drain_timeout: float | None = 10.0,
    ):
        self._state = state
        self._initializer = initializer
        self._drain_timeout = drain_timeout
        self._phase = LifecyclePhase.STARTING
        self._cond = threading.Condition()
        self._in_flight = 0

    @property
    def phase(self) -> LifecyclePhase:
        return self._phase

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def accepting(self) -> bool:
        return self._phase in (LifecyclePhase.STARTING, LifecyclePhase.READY)

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Initialize storage. Raises StorageError and enters FAILED on error."""
        if self._phase is not LifecyclePhase.STARTING:
            raise RuntimeError(f"Cannot start from phase {self._phase.value}.")
        try:
            self._initializer(self._state)
        except StorageError as exc:
            self._phase = LifecyclePhase.FAILED
            log.critical("Storage initialization failed: %s", exc, exc_info=exc.__cause__ or exc)
            raise
        self._phase = LifecyclePhase.READY

    # ------------------------------------------------------------------
    # Request accounting
    # ------------------------------------------------------------------

    def request_started(self) -> bool:
        """Register a request. False means the caller must reject it."""
        with self._cond:
            if not self.accepting:
                return False
            self._in_flight += 1
            return True

    def request_finished(self) -> None:
        with self._cond:
            self._in_flight -= 1
            if self._in_flight <= 0:
                self._in_flight = 0
                self._cond.notify_all()

    def wait_idle(self, timeout: float | None = None) -> bool:
        with self._cond:
            return self._cond.wait_for(lambda: self._in_flight == 0, timeout)

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def begin_drain(self) -> None:
        with self._cond:
            if self._phase is LifecyclePhase.READY:
                self._phase = LifecyclePhase.DRAINING
                log.info("Draining %d in-flight request(s)", self._in_flight)

    def shutdown(self) -> bool:
        """Drain in-flight requests, then close storage.

        Blocking. Returns False if the drain timed out. Disposing the
        engine leaves checked-out connections alone, so a request still
        running after the timeout finishes on its own connection.
        """
        if self._phase is LifecyclePhase.FAILED:
            return True
        self.begin_drain()
        drained = self.wait_idle(self._drain_timeout)
        if not drained:
            log.warning(
                "Drain timed out after %ss with %d request(s) in flight",
                self._drain_timeout, self._in_flight,
            )
        database = self._state.detach()
        if database is not None:
            database.close()
        self._phase = LifecyclePhase.STOPPED
        log.info("Leaderboard service stopped")
        return drained
