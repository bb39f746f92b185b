import math

import pytest

from recipe_ingestion.utils.coercion import format_number, is_blank, parse_leading_int, parse_leading_number


@pytest.mark.parametrize(
    "value, expected",
    [(45, 45), ("45 minutes", 45), (" 12", 12), ("-3", -3), (7.9, 7), ("2.5", 2), ("abc", None), (None, None), (True, None), (math.nan, None)],
)
def test_parse_leading_int(value, expected):
    assert parse_leading_int(value) == expected


def test_parse_leading_int_default():
    assert parse_leading_int("n/a", default=4) == 4


def test_parse_leading_number():
    assert parse_leading_number("12.5 oz") == 12.5
    assert parse_leading_number(".5") == 0.5
    assert parse_leading_number("oz") is None


def test_is_blank():
    assert is_blank(None)
    assert is_blank("  ")
    assert not is_blank(0)
    assert not is_blank("0")


def test_format_number():
    assert format_number(350.0) == "350"
    assert format_number(2.5) == "2.5"
    assert format_number(7) == "7"
