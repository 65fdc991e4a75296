"""SQLite-backed leaderboard repository, gated on readiness."""
from typing import List

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError

from leaderboard.application.state import AppState
from leaderboard.domain.entry import Entry, ValidatedEntry
from leaderboard.domain.errors import NotReadyError, StorageError
from leaderboard.infrastructure.database.models import LeaderboardEntryModel

MAX_ENTRIES = 50

# cash DESC, sales DESC, burn ASC, then oldest first.
RANK_ORDER = (
    LeaderboardEntryModel.cash.desc(),
    LeaderboardEntryModel.sales.desc(),
    LeaderboardEntryModel.burn.asc(),
    LeaderboardEntryModel.id.asc(),
)


class LeaderboardRepository:
    """Leaderboard persistence. Every call checks readiness before storage."""

    def __init__(self, state: AppState):
        self._state = state

    def _session_factory(self):
        self._state.require_ready()
        sf = self._state.database
        # Shutdown may detach storage between the gate and this read.
        if sf is None:
            raise NotReadyError()
        return sf

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def list_top(self, limit: int = MAX_ENTRIES) -> List[Entry]:
        """Return up to `limit` (at most 50) entries in rank order."""
        sf = self._session_factory()
        limit = max(0, min(int(limit), MAX_ENTRIES))
        try:
            with sf() as session:
                rows = (
                    session.query(LeaderboardEntryModel)
                    .order_by(*RANK_ORDER)
                    .limit(limit)
                    .all()
                )
                return [row.to_entry() for row in rows]
        except SQLAlchemyError as exc:
            raise StorageError("Failed to load leaderboard.") from exc

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def insert(self, entry: ValidatedEntry) -> int:
        """Persist a validated entry and return its storage-assigned id."""
        sf = self._session_factory()
        try:
            with sf() as session:
                row = LeaderboardEntryModel(
                    name=entry.name,
                    cash=entry.cash,
                    sales=entry.sales,
                    burn=entry.burn,
                )
                session.add(row)
                session.commit()
                return row.id
        except (SQLAlchemyError, OverflowError) as exc:
            # sqlite3 raises OverflowError for ints beyond 64 bits.
            raise StorageError("Failed to save leaderboard entry.") from exc

    def reset_all(self) -> int:
        """Delete every entry in one statement. Returns the rows removed."""
        sf = self._session_factory()
        try:
            with sf() as session:
                result = session.execute(delete(LeaderboardEntryModel))
                session.commit()
                return result.rowcount or 0
        except SQLAlchemyError as exc:
            raise StorageError("Failed to reset leaderboard.") from exc
