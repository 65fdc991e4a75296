"""Entry entity -- one leaderboard record."""
from datetime import datetime

NAME_MAX_LENGTH = 32

# SQLite CURRENT_TIMESTAMP text form.
CREATED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


class ValidatedEntry:
    """Normalized candidate that passed validation and may be inserted."""

    def __init__(self, name: str, cash: int, sales: int, burn: int):
        self._name = name
        self._cash = cash
        self._sales = sales
        self._burn = burn

    @property
    def name(self) -> str:
        return self._name

    @property
    def cash(self) -> int:
        return self._cash

    @property
    def sales(self) -> int:
        return self._sales

    @property
    def burn(self) -> int:
        return self._burn

    def __eq__(self, other):
        if not isinstance(other, ValidatedEntry):
            return NotImplemented
        return (self._name, self._cash, self._sales, self._burn) == (
            other.name, other.cash, other.sales, other.burn,
        )

    def __repr__(self) -> str:
        return (
            f"ValidatedEntry(name={self._name!r}, cash={self._cash}, "
            f"sales={self._sales}, burn={self._burn})"
        )


class Entry:
    """Stored entry. Never mutated; `id` and `created_at` come from storage."""

    def __init__(
        self,
        entry_id: int,
        name: str,
        cash: int,
        sales: int,
        burn: int,
        created_at: datetime | None = None,
    ):
        self._id = entry_id
        self._name = name
        self._cash = cash
        self._sales = sales
        self._burn = burn
        self._created_at = created_at

    @property
    def id(self) -> int:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def cash(self) -> int:
        return self._cash

    @property
    def sales(self) -> int:
        return self._sales

    @property
    def burn(self) -> int:
        return self._burn

    @property
    def created_at(self) -> datetime | None:
        return self._created_at

    def to_public_dict(self) -> dict:
        """Shape returned by GET /api/leaderboard (id is not exposed)."""
        return {
            "name": self._name,
            "cash": self._cash,
            "sales": self._sales,
            "burn": self._burn,
            "createdAt": self._created_at.strftime(CREATED_AT_FORMAT) if self._created_at else None,
        }

    def __repr__(self) -> str:
        return f"Entry(id={self._id}, name={self._name!r}, cash={self._cash})"
