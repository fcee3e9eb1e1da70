"""
Argument parser and comparator tests.
"""

import pytest

from sim.parsing import parse_id, parse_integer, parse_money

from console.compare import integer_match, money_match, numeric_match, string_match
from console.expression import Operator


class TestParseInteger:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("42", 42),
            ("-7", -7),
            ("+3", 3),
            ("0x1F", 31),
            ("010", 8),
            ("0", 0),
            ("12abc", 12),
            ("on", 1),
            ("true", 1),
            ("off", 0),
            ("false", 0),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_integer(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "-", "x10"])
    def test_malformed(self, text):
        assert parse_integer(text) is None

    def test_negative(self):
        assert parse_integer("-20") == -20

    def test_money_has_no_keywords(self):
        assert parse_money("on") is None
        assert parse_money("-1500") == -1500


class TestParseId:
    def test_whole_token_digits(self):
        assert parse_id("42") == 42
        assert parse_id("007") == 7

    @pytest.mark.parametrize("text", ["true", "on", "off", "12abc", "1x", "0x10", "-1", " 1", ""])
    def test_rejected(self, text):
        assert parse_id(text) is None


class TestNumericMatch:
    @pytest.mark.parametrize(
        "operator, expected",
        [
            (Operator.EQUAL, False),
            (Operator.NOT_EQUAL, True),
            (Operator.LESS, True),
            (Operator.LESS_OR_EQUAL, True),
            (Operator.GREATER_OR_EQUAL, False),
            (Operator.GREATER, False),
            (Operator.NONE, False),
        ],
    )
    def test_operators(self, operator, expected):
        assert numeric_match(3, operator, 5) is expected

    def test_malformed_operand_never_matches(self):
        for operator in Operator:
            assert not integer_match(5, operator, "abc")
            assert not money_match(5, operator, "abc")

    def test_money(self):
        assert money_match(-500, Operator.LESS, "0")


class TestStringMatch:
    def test_equal_ignores_case(self):
        assert string_match("Coal", Operator.EQUAL, "COAL")

    def test_ordering(self):
        assert string_match("Coal", Operator.LESS, "m")
        assert not string_match("Passengers", Operator.LESS, "m")
        assert string_match("Passengers", Operator.NOT_EQUAL, "coal")
