"""
Digit classification helpers.

Provides:
- BIG/SMALL and ODD/EVEN classification of a 0-9 digit
- Color derivation per game variant
- Opposite-label lookup for BIG/SMALL
- Digit extraction from a variant B block hash
"""

import logging
from typing import Any, Optional

from colorpredict.constants import (
    BIG,
    BIG_SMALL_LABELS,
    SMALL,
    ODD,
    EVEN,
    BIG_THRESHOLD,
    MIN_DIGIT,
    MAX_DIGIT,
    WINGO,
    TRX,
    WINGO_SPECIAL_COLORS,
    WINGO_EVEN_COLOR,
    WINGO_ODD_COLOR,
    TRX_EVEN_COLOR,
    TRX_ODD_COLOR,
    normalize_variant,
)

logger = logging.getLogger(__name__)


def is_valid_digit(value: Any) -> bool:
    """True for an int (not bool) between 0 and 9 inclusive."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return MIN_DIGIT <= value <= MAX_DIGIT


def big_small(digit: int) -> str:
    """
    Classify a digit as BIG or SMALL.

    Examples:
        7 -> 'BIG'
        4 -> 'SMALL'
        5 -> 'BIG'
    """
    return BIG if digit >= BIG_THRESHOLD else SMALL


def odd_even(digit: int) -> str:
    return EVEN if digit % 2 == 0 else ODD


def opposite(label: str) -> str:
    """Opposite BIG/SMALL label."""
    return SMALL if label == BIG else BIG


def normalize_big_small(value: Any) -> Optional[str]:
    """Map 'big'/'Small'/... to the canonical label, None for anything else."""
    if value is None:
        return None
    label = str(value).strip().upper()
    if label in BIG_SMALL_LABELS:
        return label
    return None


def color_for_digit(digit: int, variant: str) -> str:
    """
    Color for a digit under a game variant.

    Variant A (wingo):
        0 -> 'red-violet', 5 -> 'green-violet',
        other even -> 'red', other odd -> 'green'
    Variant B (trx):
        even -> 'green', odd -> 'red'

    Unknown variants fall back to variant A.
    """
    canonical = normalize_variant(variant)
    if canonical == TRX:
        return TRX_EVEN_COLOR if digit % 2 == 0 else TRX_ODD_COLOR
    if canonical != WINGO:
        logger.debug("Unknown game variant %r, using %s colors", variant, WINGO)
    if digit in WINGO_SPECIAL_COLORS:
        return WINGO_SPECIAL_COLORS[digit]
    return WINGO_EVEN_COLOR if digit % 2 == 0 else WINGO_ODD_COLOR


def digit_from_hash(block_hash: str) -> Optional[int]:
    """
    Result digit of a variant B round: the last decimal digit in its block hash.

    Returns None when the hash carries no decimal digit.
    """
    for char in reversed(str(block_hash or "").strip()):
        if char.isdigit():
            return int(char)
    return None
