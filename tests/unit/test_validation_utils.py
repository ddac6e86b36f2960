"""Unit tests for input validation utilities.

Tests required text parameters, coordinate checks, list limits and flag
parsing. All tests are pure unit tests with no network access.
"""

import pytest

from app.exceptions import InputValidationError
from app.utils.validation import (
    MAX_LIST_LIMIT,
    parse_flag,
    require_text,
    validate_lat_lon,
    validate_list_limit,
)


class TestRequireText:
    def test_value_is_trimmed(self):
        assert require_text("zoning", "  일반상업지역 ") == "일반상업지역"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_rejected(self, value):
        with pytest.raises(InputValidationError) as exc_info:
            require_text("zoning", value)
        assert exc_info.value.details == {"field": "zoning"}
        assert "zoning" in exc_info.value.message


class TestValidateLatLon:
    def test_valid_strings(self):
        assert validate_lat_lon("37.5665", "126.978") == (37.5665, 126.978)

    @pytest.mark.parametrize("lat,lon", [
        (None, "127"),
        ("abc", "127"),
        ("37", ""),
        ("nan", "127"),
    ])
    def test_not_numbers(self, lat, lon):
        with pytest.raises(InputValidationError):
            validate_lat_lon(lat, lon)

    @pytest.mark.parametrize("lat,lon", [(91, 0), (-91, 0), (0, 181), (0, -180.5)])
    def test_out_of_range(self, lat, lon):
        with pytest.raises(InputValidationError) as exc_info:
            validate_lat_lon(lat, lon)
        assert "범위" in exc_info.value.message

    def test_boundaries_accepted(self):
        assert validate_lat_lon(90, -180) == (90.0, -180.0)


class TestValidateListLimit:
    def test_default_is_maximum(self):
        assert validate_list_limit(None) == MAX_LIST_LIMIT
        assert validate_list_limit("") == MAX_LIST_LIMIT

    def test_capped_at_maximum(self):
        assert validate_list_limit("10000") == MAX_LIST_LIMIT
        assert validate_list_limit(5, maximum=3) == 3

    def test_valid_limit(self):
        assert validate_list_limit("20") == 20

    @pytest.mark.parametrize("value", ["0", "-1", "many"])
    def test_invalid_limit(self, value):
        with pytest.raises(InputValidationError):
            validate_list_limit(value)


class TestParseFlag:
    @pytest.mark.parametrize("value", ["1", "true", "TRUE", " yes ", "on"])
    def test_truthy(self, value):
        assert parse_flag(value) is True

    @pytest.mark.parametrize("value", [None, "", "0", "false", "no", "all"])
    def test_falsy(self, value):
        assert parse_flag(value) is False
