from __future__ import annotations

import pytest

from barcode_mapper.services.classifier import Comparison, classify, compare_key, parse_number


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1001", 1001.0),
        (" 1001 ", 1001.0),
        ("-3.5", -3.5),
        ("+7", 7.0),
        (".5", 0.5),
        ("12.", 12.0),
    ],
)
def test_parse_number_accepts_decimals(raw, expected):
    assert parse_number(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", None, "A12", "1e3", "inf", "nan", "1,000", "12-3", "0x10"])
def test_parse_number_rejects_non_decimals(raw):
    assert parse_number(raw) is None


def test_classify_numeric_only_when_all_parse():
    assert classify("1001", "1003", "1002") is Comparison.NUMERIC
    assert classify("1001", "1003", "EMPTY") is Comparison.LEXICOGRAPHIC
    assert classify("A1", "A9") is Comparison.LEXICOGRAPHIC


def test_classify_empty_group_is_lexicographic():
    assert classify() is Comparison.LEXICOGRAPHIC


def test_compare_key_numeric_orders_by_value():
    # "10" < "9" as text, but not as numbers
    assert compare_key("9", Comparison.NUMERIC) < compare_key("10", Comparison.NUMERIC)
    assert compare_key("10", Comparison.LEXICOGRAPHIC) < compare_key("9", Comparison.LEXICOGRAPHIC)


def test_compare_key_lexicographic_is_case_sensitive_and_untrimmed():
    assert compare_key("B", Comparison.LEXICOGRAPHIC) < compare_key("a", Comparison.LEXICOGRAPHIC)
    assert compare_key(" a", Comparison.LEXICOGRAPHIC) == " a"


def test_compare_key_numeric_rejects_text():
    with pytest.raises(ValueError):
        compare_key("abc", Comparison.NUMERIC)
