"""Unit tests for status normalization and value interpretation helpers.

Covers the canonical status vocabulary (including the legacy ``warn`` alias),
numeric parsing, emptiness checks, and JSON-style text rendering used by
``in`` / ``eq`` comparisons.
"""

import math

import pytest

from app.models import (
    JudgeStatus,
    as_text,
    is_missing_value,
    normalize_status,
    to_number,
)


# ---------------------------------------------------------------------------
# normalize_status
# ---------------------------------------------------------------------------

class TestNormalizeStatus:
    @pytest.mark.parametrize("raw,expected", [
        ("allow", JudgeStatus.ALLOW),
        ("conditional", JudgeStatus.CONDITIONAL),
        ("deny", JudgeStatus.DENY),
        ("need_input", JudgeStatus.NEED_INPUT),
        ("unknown", JudgeStatus.UNKNOWN),
    ])
    def test_canonical_values(self, raw, expected):
        assert normalize_status(raw) == expected

    def test_legacy_warn_maps_to_conditional(self):
        assert normalize_status("warn") == JudgeStatus.CONDITIONAL

    def test_case_and_whitespace_ignored(self):
        assert normalize_status("  DENY ") == JudgeStatus.DENY
        assert normalize_status("WARN") == JudgeStatus.CONDITIONAL

    @pytest.mark.parametrize("raw", ["", None, "maybe", 3, "allowed"])
    def test_unrecognized_is_unknown(self, raw):
        assert normalize_status(raw) == JudgeStatus.UNKNOWN

    def test_enum_passthrough(self):
        assert normalize_status(JudgeStatus.NEED_INPUT) is JudgeStatus.NEED_INPUT

    def test_status_serializes_as_plain_string(self):
        assert JudgeStatus.NEED_INPUT.value == "need_input"
        assert JudgeStatus.ALLOW == "allow"


# ---------------------------------------------------------------------------
# to_number
# ---------------------------------------------------------------------------

class TestToNumber:
    @pytest.mark.parametrize("raw,expected", [
        (12, 12.0),
        (3.5, 3.5),
        ("12", 12.0),
        (" 3.5 ", 3.5),
        ("-2", -2.0),
        (True, 1.0),
        (False, 0.0),
    ])
    def test_numeric_inputs(self, raw, expected):
        assert to_number(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", "4m", "1_000", [], {}])
    def test_non_numeric_is_none(self, raw):
        assert to_number(raw) is None

    @pytest.mark.parametrize("raw", [math.nan, math.inf, -math.inf, "NaN", "Infinity"])
    def test_non_finite_is_none(self, raw):
        assert to_number(raw) is None


# ---------------------------------------------------------------------------
# is_missing_value
# ---------------------------------------------------------------------------

class TestIsMissingValue:
    @pytest.mark.parametrize("raw", [None, "", "   ", math.nan, math.inf])
    def test_missing(self, raw):
        assert is_missing_value(raw) is True

    @pytest.mark.parametrize("raw", [0, 0.0, "0", "no", False, True, ["a"], {"k": 1}, [], {}])
    def test_present(self, raw):
        assert is_missing_value(raw) is False

    def test_false_is_an_answer_not_a_gap(self):
        """A checkbox left unticked is still a provided value."""
        assert is_missing_value(False) is False


# ---------------------------------------------------------------------------
# as_text
# ---------------------------------------------------------------------------

class TestAsText:
    @pytest.mark.parametrize("raw,expected", [
        (None, ""),
        (True, "true"),
        (False, "false"),
        (5.0, "5"),
        (5.5, "5.5"),
        (7, "7"),
        ("yes", "yes"),
    ])
    def test_json_style_rendering(self, raw, expected):
        assert as_text(raw) == expected

