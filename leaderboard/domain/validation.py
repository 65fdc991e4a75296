"""Validation of submitted leaderboard entries. Pure functions, no I/O."""
import math
from typing import Any, Mapping

from leaderboard.domain.entry import NAME_MAX_LENGTH, ValidatedEntry
from leaderboard.domain.errors import ValidationError

NAME_REQUIRED = "Name is required."
NUMBERS_REQUIRED = "cash, sales, burn must be numbers."

METRIC_FIELDS = ("cash", "sales", "burn")


def normalize_name(raw: Any) -> str:
    """Collapse whitespace runs, trim, truncate. Non-strings become ''."""
    if not isinstance(raw, str):
        return ""
    return " ".join(raw.split())[:NAME_MAX_LENGTH]


def coerce_number(raw: Any) -> float | int | None:
    """Return a finite number for `raw`, or None if it is not one.

    Accepts ints, floats and numeric strings. Booleans, None, empty
    strings and containers are rejected.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        number = raw
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def round_half_up(number: float | int) -> int:
    """12.5 -> 13, -12.5 -> -12."""
    if isinstance(number, int):
        return number
    return math.floor(number + 0.5)


def validate_entry(candidate: Mapping[str, Any] | Any) -> ValidatedEntry:
    """Normalize a submitted entry or raise ValidationError.

    The name is checked before the metrics, so a payload that is wrong
    on both counts reports the missing name.
    """
    if not isinstance(candidate, Mapping):
        candidate = {}

    name = normalize_name(candidate.get("name"))
    if not name:
        raise ValidationError(NAME_REQUIRED)

    numbers = [coerce_number(candidate.get(field)) for field in METRIC_FIELDS]
    if any(n is None for n in numbers):
        raise ValidationError(NUMBERS_REQUIRED)

    cash, sales, burn = (round_half_up(n) for n in numbers)
    return ValidatedEntry(name=name, cash=cash, sales=sales, burn=burn)
