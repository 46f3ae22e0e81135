"""Unit tests for classification helpers and constants."""

import pytest

from colorpredict.constants import (
    BIG, SMALL, ODD, EVEN, TRX, WINGO,
    normalize_variant, round_seconds,
)
from colorpredict.utils.classify import (
    big_small,
    odd_even,
    opposite,
    color_for_digit,
    digit_from_hash,
    is_valid_digit,
    normalize_big_small,
)

@pytest.mark.parametrize("digit,expected", [(0, SMALL), (4, SMALL), (5, BIG), (9, BIG)])
def test_big_small(digit, expected):
    assert big_small(digit) == expected

def test_odd_even():
    assert odd_even(0) == EVEN
    assert odd_even(7) == ODD

def test_opposite():
    assert opposite(BIG) == SMALL
    assert opposite(SMALL) == BIG

@pytest.mark.parametrize("digit,expected", [
    (0, "red-violet"),
    (5, "green-violet"),
    (2, "red"),
    (8, "red"),
    (1, "green"),
    (9, "green"),
])
def test_wingo_colors(digit, expected):
    assert color_for_digit(digit, WINGO) == expected

def test_trx_colors():
    assert [color_for_digit(d, TRX) for d in range(4)] == ["green", "red", "green", "red"]

def test_unknown_variant_uses_wingo_table():
    assert color_for_digit(0, "other") == "red-violet"

def test_is_valid_digit():
    assert is_valid_digit(0)
    assert is_valid_digit(9)
    assert not is_valid_digit(10)
    assert not is_valid_digit(-1)
    assert not is_valid_digit(True)
    assert not is_valid_digit("3")

def test_normalize_big_small():
    assert normalize_big_small("big") == BIG
    assert normalize_big_small(" Small ") == SMALL
    assert normalize_big_small("maybe") is None
    assert normalize_big_small(None) is None

def test_digit_from_hash():
    assert digit_from_hash("0000a3f7") == 7
    assert digit_from_hash("4b2c9dde") == 9
    assert digit_from_hash("abcdef") is None
    assert digit_from_hash("") is None

def test_normalize_variant_aliases():
    assert normalize_variant("A") == WINGO
    assert normalize_variant("Win Go") == WINGO
    assert normalize_variant("b") == TRX
    assert normalize_variant("TRX Hash") == TRX
    assert normalize_variant("Roulette") == "roulette"

def test_round_seconds():
    assert round_seconds("30 SEC") == 30
    assert round_seconds("3 min") == 180
    assert round_seconds("10 MIN") == 60
