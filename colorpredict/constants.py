"""
Constants for colorpredict.

Provides the BIG/SMALL and ODD/EVEN labels, game variant names,
color tables per variant, and time option round lengths.
"""

from typing import Dict, List, Tuple


# =============================================================================
# CLASSIFICATION LABELS
# =============================================================================

BIG = "BIG"
SMALL = "SMALL"
ODD = "ODD"
EVEN = "EVEN"

BIG_SMALL_LABELS: Tuple[str, str] = (BIG, SMALL)

# Digits consistent with each BIG/SMALL label
DIGITS_BY_SIZE: Dict[str, List[int]] = {
    SMALL: [0, 1, 2, 3, 4],
    BIG: [5, 6, 7, 8, 9],
}

BIG_THRESHOLD = 5
MIN_DIGIT = 0
MAX_DIGIT = 9

WIN = "WIN"
LOSS = "LOSS"


# =============================================================================
# GAME VARIANTS
# =============================================================================

WINGO = "wingo"  # variant A
TRX = "trx"      # variant B

GAME_VARIANTS: Tuple[str, str] = (WINGO, TRX)

# Accepted spellings for each variant
VARIANT_ALIASES: Dict[str, str] = {
    "wingo": WINGO,
    "win go": WINGO,
    "win-go": WINGO,
    "a": WINGO,
    "trx": TRX,
    "trx hash": TRX,
    "trx-hash": TRX,
    "b": TRX,
}


def normalize_variant(variant: str) -> str:
    """
    Normalize a game variant reference to its canonical name.

    Returns the input lowercased when it is not a known alias so the
    caller can decide how to reject it.
    """
    key = str(variant or "").strip().lower()
    return VARIANT_ALIASES.get(key, key)


# =============================================================================
# COLORS
# =============================================================================

RED = "red"
GREEN = "green"
RED_VIOLET = "red-violet"
GREEN_VIOLET = "green-violet"

# Variant A special digits; everything else follows parity
WINGO_SPECIAL_COLORS: Dict[int, str] = {
    0: RED_VIOLET,
    5: GREEN_VIOLET,
}
WINGO_EVEN_COLOR = RED
WINGO_ODD_COLOR = GREEN

# Variant B colors follow parity only
TRX_EVEN_COLOR = GREEN
TRX_ODD_COLOR = RED


# =============================================================================
# TIME OPTIONS
# =============================================================================

TIME_OPTIONS: List[str] = ["30 SEC", "1 MIN", "3 MIN", "5 MIN"]

# Round length in seconds per time option
ROUND_SECONDS: Dict[str, int] = {
    "30 SEC": 30,
    "1 MIN": 60,
    "3 MIN": 180,
    "5 MIN": 300,
}
DEFAULT_ROUND_SECONDS = 60


def round_seconds(time_option: str) -> int:
    """Round length in seconds for a time option (60 when unknown)."""
    return ROUND_SECONDS.get((time_option or "").strip().upper(), DEFAULT_ROUND_SECONDS)


# =============================================================================
# PREDICTOR DEFAULTS
# =============================================================================

HISTORY_WINDOW = 10
MIN_HISTORY = 3
PATTERN_CONFIDENCE = 0.85
DEGRADED_CONFIDENCE = 0.5
LEDGER_LIMIT = 20
