"""
Tests for amount parsing.
"""

from decimal import Decimal

import pytest

from double_entry_bank.amount import format_amount, parse_amount, to_fixed
from double_entry_bank.exceptions import ErrorKind, InvalidAmount


class TestParseAmount:

    @pytest.mark.parametrize("raw, expected", [
        ("100", Decimal("100.0000")),
        ("100.0000", Decimal("100.0000")),
        ("0.0001", Decimal("0.0001")),
        ("10.5", Decimal("10.5000")),
        (" 42.25 ", Decimal("42.2500")),
        ("1.50000", Decimal("1.5000")),
    ])
    def test_valid_amounts(self, raw, expected):
        value = parse_amount(raw)
        assert value == expected
        assert value.as_tuple().exponent == -4

    @pytest.mark.parametrize("raw", [
        "", "   ", "+", "-", "abc", "1,000", "NaN", "Infinity", "-Infinity",
        "1_000", "\u0661\u0660\u0660", "1e3", "1.2.3", ".", "--5",
    ])
    def test_malformed_rejected(self, raw):
        with pytest.raises(InvalidAmount):
            parse_amount(raw)

    @pytest.mark.parametrize("raw", ["0", "0.0000", "-0", "-5", "-0.0001"])
    def test_non_positive_rejected(self, raw):
        with pytest.raises(InvalidAmount):
            parse_amount(raw)

    def test_sign_only_empty_and_zero_fail_identically(self):
        errors = []
        for raw in ("+", "", "0"):
            with pytest.raises(InvalidAmount) as exc_info:
                parse_amount(raw)
            errors.append(exc_info.value)

        assert {e.kind for e in errors} == {ErrorKind.INVALID_AMOUNT}
        assert {type(e) for e in errors} == {InvalidAmount}

    def test_more_than_four_decimals_rejected(self):
        with pytest.raises(InvalidAmount):
            parse_amount("1.00005")

    def test_too_large_rejected(self):
        with pytest.raises(InvalidAmount):
            parse_amount("1000000000000000")

    def test_non_string_rejected(self):
        with pytest.raises(InvalidAmount):
            parse_amount(10.5)

    def test_error_carries_raw_value(self):
        with pytest.raises(InvalidAmount) as exc_info:
            parse_amount("abc")
        assert exc_info.value.details == {"value": "abc"}


class TestFormatting:

    def test_to_fixed_quantizes(self):
        assert to_fixed(5) == Decimal("5.0000")
        assert to_fixed(Decimal("1.23")).as_tuple().exponent == -4

    def test_format_amount(self):
        assert format_amount(Decimal("100")) == "100.0000"
        assert format_amount(Decimal("0.5")) == "0.5000"
        assert format_amount(Decimal("-30")) == "-30.0000"
