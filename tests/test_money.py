"""Tests for KWD money helpers."""

from decimal import Decimal

import pytest

from app.logger_config import logger
from app.utilities.money import add_kwd, format_kwd, parse_amount, quantize_kwd


@pytest.fixture
def captured_warnings(caplog):
    # The app logger does not propagate, so attach caplog directly
    logger.addHandler(caplog.handler)
    caplog.set_level("WARNING", logger=logger.name)
    yield caplog
    logger.removeHandler(caplog.handler)


class TestQuantize:

    def test_rounds_to_three_places_half_up(self):
        assert quantize_kwd(Decimal("1.2345")) == Decimal("1.235")
        assert quantize_kwd(Decimal("1.2344")) == Decimal("1.234")

    def test_negative_rounds_away_from_zero_on_half(self):
        assert quantize_kwd(Decimal("-0.0005")) == Decimal("-0.001")

    def test_add_rounds_result(self):
        assert add_kwd(Decimal("0.1"), Decimal("0.2")) == Decimal("0.300")
        assert str(add_kwd(Decimal("1"), Decimal("2"))) == "3.000"

    def test_negative_zero_becomes_zero(self):
        result = quantize_kwd(Decimal("-0.0004"))

        assert not result.is_signed()
        assert format_kwd(-Decimal("0")) == "0.000"


class TestParseAmount:

    @pytest.mark.parametrize("raw, expected", [
        (Decimal("100"), Decimal("100.000")),
        ("40.5", Decimal("40.500")),
        (" 12.3456 ", Decimal("12.346")),
        (7, Decimal("7.000")),
        (0.1, Decimal("0.100")),
        ("-25", Decimal("-25.000")),
    ])
    def test_parses_numbers(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "abc", "NaN", "Infinity", True, float("inf")])
    def test_malformed_becomes_zero(self, raw):
        assert parse_amount(raw) == Decimal("0.000")

    def test_malformed_logs_warning_with_context(self, captured_warnings):
        parse_amount("12,5x", context="sale #9")

        messages = [r.getMessage() for r in captured_warnings.records]
        assert any("sale #9" in m and "treating as zero" in m for m in messages)

    def test_valid_amount_does_not_warn(self, captured_warnings):
        parse_amount("1.000")
        assert not captured_warnings.records


class TestFormat:

    def test_always_three_places(self):
        assert format_kwd(Decimal("5")) == "5.000"
        assert format_kwd(Decimal("-0.1")) == "-0.100"
