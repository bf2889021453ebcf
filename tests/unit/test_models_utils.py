"""Unit tests for freight table utility functions."""

import pytest
from freight_calc.models.schema import Carrier
from freight_calc.models.utils import (
    parse_number,
    parse_number_or_zero,
    normalize_key,
    keys_match,
)


class TestParseNumber:
    """Test spreadsheet cell parsing."""

    def test_numeric_strings(self):
        assert parse_number("500") == 500.0
        assert parse_number(" 15.5 ") == 15.5
        assert parse_number("-3") == -3.0

    def test_thousands_separator(self):
        """Test that comma grouping is ignored."""
        assert parse_number("1,200") == 1200.0
        assert parse_number("12,34,567.5") == 1234567.5

    def test_numbers_pass_through(self):
        assert parse_number(7) == 7.0
        assert parse_number(2.5) == 2.5

    @pytest.mark.parametrize("value", [None, "", "   ", "n/a", "12kg", True, float("nan"), "inf"])
    def test_unusable_values(self, value):
        """Test that unusable cells become None instead of raising."""
        assert parse_number(value) is None

    def test_or_zero(self):
        assert parse_number_or_zero("abc") == 0.0
        assert parse_number_or_zero(None) == 0.0
        assert parse_number_or_zero("42") == 42.0


class TestKeys:
    """Test case-insensitive key matching."""

    def test_normalize_key(self):
        assert normalize_key("usa") == "USA"
        assert normalize_key(Carrier.FEDEX) == "FEDEX"

    def test_keys_match_ignores_case(self):
        assert keys_match("usa", "USA")
        assert keys_match("Usa", "uSA")
        assert keys_match("FedEx", Carrier.FEDEX)

    def test_keys_match_is_otherwise_exact(self):
        """Test that whitespace and spelling differences do not match."""
        assert not keys_match("USA ", "USA")
        assert not keys_match("United States", "USA")
