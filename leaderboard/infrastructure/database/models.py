"""SQLAlchemy ORM models -- SQLite schema definition."""
from sqlalchemy import Column, DateTime, Index, Integer, String, func
from sqlalchemy.orm import DeclarativeBase

from leaderboard.domain.entry import NAME_MAX_LENGTH, Entry


class Base(DeclarativeBase):
    pass


# ---------------------------------------------------------------------------
# Leaderboard
# ---------------------------------------------------------------------------

class LeaderboardEntryModel(Base):
    __tablename__ = "leaderboard"
    # AUTOINCREMENT keeps ids from being reused after a reset.
    __table_args__ = (
        Index("idx_leaderboard_rank", "cash", "sales", "burn", "id"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True)
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    cash = Column(Integer, nullable=False)
    sales = Column(Integer, nullable=False)
    burn = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())

    def to_entry(self) -> Entry:
        return Entry(
            entry_id=self.id,
            name=self.name,
            cash=self.cash,
            sales=self.sales,
            burn=self.burn,
            created_at=self.created_at,
        )
