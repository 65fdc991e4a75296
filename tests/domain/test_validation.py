"""Unit tests for entry validation."""
import pytest

from leaderboard.domain.entry import ValidatedEntry
from leaderboard.domain.errors import ValidationError
from leaderboard.domain.validation import (
    NAME_REQUIRED,
    NUMBERS_REQUIRED,
    coerce_number,
    normalize_name,
    round_half_up,
    validate_entry,
)


def _payload(**overrides):
    data = {"name": "Alice", "cash": 100, "sales": 10, "burn": 5}
    data.update(overrides)
    return data


class TestNormalizeName:
    def test_collapses_and_trims_whitespace(self):
        assert normalize_name("  Bob   Smith  ") == "Bob Smith"

    def test_tabs_and_newlines_collapse(self):
        assert normalize_name("Bob\t\n Smith") == "Bob Smith"

    def test_truncates_to_32_characters(self):
        assert normalize_name("x" * 40) == "x" * 32

    def test_truncation_happens_after_collapsing(self):
        assert normalize_name("a     " * 20) == ("a " * 16)[:32]

    def test_non_string_becomes_empty(self):
        assert normalize_name(123) == ""
        assert normalize_name(None) == ""


class TestCoerceNumber:
    @pytest.mark.parametrize("raw, expected", [
        (12, 12),
        (12.7, 12.7),
        ("42", 42.0),
        (" 3.5 ", 3.5),
        ("-7", -7.0),
    ])
    def test_accepts_finite_numbers(self, raw, expected):
        assert coerce_number(raw) == expected

    @pytest.mark.parametrize("raw", [
        "abc", "", "   ", None, True, False, [], {}, [1],
        float("nan"), float("inf"), float("-inf"), "NaN", "Infinity", "-inf",
    ])
    def test_rejects_non_finite_or_non_numeric(self, raw):
        assert coerce_number(raw) is None


class TestRoundHalfUp:
    def test_rounds_up_from_half(self):
        assert round_half_up(12.5) == 13
        assert round_half_up(2.5) == 3

    def test_negative_half_rounds_toward_positive(self):
        assert round_half_up(-12.5) == -12

    def test_rounds_nearest(self):
        assert round_half_up(12.7) == 13
        assert round_half_up(12.2) == 12

    def test_int_passes_through(self):
        assert round_half_up(10 ** 20) == 10 ** 20


class TestValidateEntry:
    def test_valid_entry(self):
        entry = validate_entry(_payload())
        assert entry == ValidatedEntry("Alice", 100, 10, 5)

    def test_name_is_normalized(self):
        assert validate_entry(_payload(name="  Bob   Smith  ")).name == "Bob Smith"

    def test_long_name_is_truncated_not_rejected(self):
        entry = validate_entry(_payload(name="N" * 50))
        assert entry.name == "N" * 32

    @pytest.mark.parametrize("name", ["", "    ", "\t\n", None, 42, ["Bob"]])
    def test_missing_name_rejected(self, name):
        with pytest.raises(ValidationError, match=NAME_REQUIRED):
            validate_entry(_payload(name=name))

    def test_absent_name_rejected(self):
        data = _payload()
        del data["name"]
        with pytest.raises(ValidationError, match=NAME_REQUIRED):
            validate_entry(data)

    @pytest.mark.parametrize("field", ["cash", "sales", "burn"])
    @pytest.mark.parametrize("bad", ["abc", float("nan"), float("inf"), "Infinity", None])
    def test_bad_metric_rejected(self, field, bad):
        with pytest.raises(ValidationError) as info:
            validate_entry(_payload(**{field: bad}))
        assert info.value.message == NUMBERS_REQUIRED

    def test_missing_metric_rejected(self):
        data = _payload()
        del data["burn"]
        with pytest.raises(ValidationError, match="must be numbers"):
            validate_entry(data)

    def test_fractional_values_are_rounded(self):
        entry = validate_entry(_payload(cash=12.7, sales="3.2", burn=0.5))
        assert (entry.cash, entry.sales, entry.burn) == (13, 3, 1)

    def test_rounded_values_are_ints(self):
        entry = validate_entry(_payload(cash=12.7))
        assert isinstance(entry.cash, int)

    def test_name_checked_before_numbers(self):
        with pytest.raises(ValidationError, match=NAME_REQUIRED):
            validate_entry({"name": " ", "cash": "abc"})

    @pytest.mark.parametrize("candidate", [None, [], "Alice", 12])
    def test_non_mapping_treated_as_empty(self, candidate):
        with pytest.raises(ValidationError, match=NAME_REQUIRED):
            validate_entry(candidate)

    def test_error_status_code_is_400(self):
        with pytest.raises(ValidationError) as info:
            validate_entry({})
        assert info.value.status_code == 400

    def test_input_not_mutated(self):
        data = _payload(name="  Bob  ")
        validate_entry(data)
        assert data["name"] == "  Bob  "
