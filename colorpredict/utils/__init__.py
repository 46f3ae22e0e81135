"""Utility modules for colorpredict."""

from colorpredict.utils.classify import (
    is_valid_digit,
    big_small,
    odd_even,
    opposite,
    normalize_big_small,
    color_for_digit,
    digit_from_hash,
)

__all__ = [
    "is_valid_digit",
    "big_small",
    "odd_even",
    "opposite",
    "normalize_big_small",
    "color_for_digit",
    "digit_from_hash",
]
