"""
Pattern-following predictor.

Looks at the most recent rounds, classifies each as BIG or SMALL,
works out whether the prediction made for that round won, and runs a
fixed rule cascade to pick the next BIG/SMALL label. The digit is then
drawn uniformly from the five digits consistent with that label.

Rules, first match wins:
    R1  two most recent rounds share a label and both predictions won
    R2  the most recent round's prediction lost -> switch
    R3  the four most recent rounds alternate -> continue alternation
    R4  the three most recent rounds share a label -> follow the streak
    R5  follow the most recent round
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple
import logging

import numpy as np

from colorpredict.constants import (
    BIG,
    DIGITS_BY_SIZE,
    HISTORY_WINDOW,
    MIN_HISTORY,
    PATTERN_CONFIDENCE,
    DEGRADED_CONFIDENCE,
    WINGO,
    normalize_variant,
    round_seconds,
)
from colorpredict.models.records import Outcome, Prediction
from colorpredict.storage.cache import CacheStore, prediction_cache_key
from colorpredict.utils.classify import (
    big_small,
    odd_even,
    opposite,
    color_for_digit,
    is_valid_digit,
    normalize_big_small,
)

logger = logging.getLogger(__name__)

INSUFFICIENT_DATA_REASON = "Insufficient historical data for accurate prediction"


@dataclass
class _Round:
    period_id: str
    result: int
    big_small: str
    prediction: Optional[str]
    win: bool


def _sort_key(outcome: Outcome) -> float:
    ts = outcome.timestamp
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.timestamp()


def _usable(history: Optional[Sequence[Outcome]]) -> List[Outcome]:
    usable = []
    for outcome in history or []:
        if not is_valid_digit(getattr(outcome, "result", None)):
            continue
        if not isinstance(getattr(outcome, "timestamp", None), datetime):
            continue
        usable.append(outcome)
    dropped = len(history or []) - len(usable)
    if dropped:
        logger.debug("Dropped %d malformed history entries", dropped)
    return usable


def sort_newest_first(history: Optional[Sequence[Outcome]]) -> List[Outcome]:
    """Well-formed outcomes ordered newest timestamp first."""
    return sorted(_usable(history), key=_sort_key, reverse=True)


def _resolve_prior(outcome: Outcome, store) -> Optional[str]:
    if store is not None:
        stored = normalize_big_small(store.get_big_small(outcome.period_id))
        if stored is not None:
            return stored
    return normalize_big_small(outcome.prior_prediction)


def _annotate(recent: Sequence[Outcome], store) -> List[_Round]:
    rounds = []
    for outcome in recent:
        label = big_small(outcome.result)
        prediction = _resolve_prior(outcome, store)
        rounds.append(_Round(
            period_id=outcome.period_id,
            result=outcome.result,
            big_small=label,
            prediction=prediction,
            win=prediction == label,
        ))
    return rounds


def _count_streak(labels: Sequence[str]) -> int:
    if not labels:
        return 0
    count = 1
    for label in labels[1:]:
        if label != labels[0]:
            break
        count += 1
    return count


def _apply_rules(rounds: Sequence[_Round]) -> Tuple[str, str, str]:
    """Return (label, rule, reason) for the first rule that matches."""
    labels = [r.big_small for r in rounds]

    if len(rounds) >= 2 and labels[0] == labels[1] and rounds[0].win and rounds[1].win:
        label = labels[0]
        return label, "R1", f"Rule 1: Last 2 periods were both {label} and won - continuing streak"

    if rounds and rounds[0].prediction and not rounds[0].win:
        lost = rounds[0].prediction
        label = opposite(lost)
        return label, "R2", f"Rule 2: Last prediction {lost} lost - switching to {label}"

    if len(rounds) >= 4 and all(labels[i] != labels[i + 1] for i in range(3)):
        label = opposite(labels[0])
        return label, "R3", f"Rule 3: Detected alternating pattern - predicting {label} to continue pattern"

    if len(rounds) >= 3 and labels[0] == labels[1] == labels[2]:
        label = labels[0]
        return label, "R4", (
            f"Rule 4: Detected streak of {label} x{_count_streak(labels)} - continuing streak"
        )

    label = labels[0] if labels else BIG
    return label, "R5", f"Rule 5: No clear pattern - following most recent outcome {label}"


def _build(number: int, confidence: float, variant: str, time_option: str,
           reasoning: List[str], rule: str) -> Prediction:
    return Prediction(
        number=number,
        confidence=confidence,
        color=color_for_digit(number, variant),
        big_small=big_small(number),
        odd_even=odd_even(number),
        reasoning=reasoning,
        rule=rule,
        variant=variant,
        time_option=time_option,
    )


def predict_next(
    history: Sequence[Outcome],
    variant: str = WINGO,
    time_option: str = "",
    store=None,
    rng: Optional[np.random.Generator] = None,
    window: int = HISTORY_WINDOW,
    min_history: int = MIN_HISTORY,
    confidence: float = PATTERN_CONFIDENCE,
    degraded_confidence: float = DEGRADED_CONFIDENCE,
) -> Prediction:
    """
    Predict the next round from recent outcome history.

    Args:
        history: Outcome records in any order
        variant: Game variant ('wingo' or 'trx'), drives the color table
        time_option: Round length tag such as '1 MIN' (context only)
        store: Optional prediction store with get_big_small(period_id),
            used to find the prediction made for each past round
        rng: numpy Generator for the digit draw (fresh one when omitted)
        window: Most recent rounds the rules look at (at least 1)

    Returns:
        Prediction. Never raises; short or malformed history yields a
        random digit at degraded_confidence.
    """
    variant = normalize_variant(variant)
    rng = rng if rng is not None else np.random.default_rng()
    usable = _usable(history)

    if len(usable) < min_history:
        number = int(rng.integers(0, 10))
        logger.debug("Degraded prediction (%d usable entries): %d", len(usable), number)
        return _build(number, degraded_confidence, variant, time_option,
                      [INSUFFICIENT_DATA_REASON], "DEGRADED")

    recent = sorted(usable, key=_sort_key, reverse=True)[:max(1, window)]
    rounds = _annotate(recent, store)
    outcomes = [r.big_small for r in rounds]

    reasoning = [
        f"Analyzing last {len(rounds)} results to determine prediction pattern",
        f"Recent outcomes: {', '.join(outcomes[:5])}...",
    ]
    label, rule, reason = _apply_rules(rounds)
    reasoning.append(reason)

    number = int(rng.choice(DIGITS_BY_SIZE[label]))
    newest = rounds[0].period_id if rounds else "-"
    logger.debug("%s fired for period after %s: %s -> %d", rule, newest, label, number)
    return _build(number, confidence, variant, time_option, reasoning, rule)


class PatternPredictor:
    """
    Configured predictor with optional store and cache.

    The cache is owned by the caller; this class only reads and writes
    it. Entries are keyed by variant, time option and newest period, so
    repeated calls within one round return the same prediction.
    """

    def __init__(
        self,
        variant: str = WINGO,
        time_option: str = "",
        store=None,
        cache: Optional[CacheStore] = None,
        cache_ttl: Optional[int] = None,
        seed: Optional[int] = None,
        window: int = HISTORY_WINDOW,
        min_history: int = MIN_HISTORY,
        confidence: float = PATTERN_CONFIDENCE,
        degraded_confidence: float = DEGRADED_CONFIDENCE,
    ) -> None:
        self._variant = normalize_variant(variant)
        self._time_option = time_option
        self._store = store
        self._cache = cache
        self._cache_ttl = cache_ttl
        self._rng = np.random.default_rng(seed)
        self._window = window
        self._min_history = min_history
        self._confidence = confidence
        self._degraded_confidence = degraded_confidence

    @classmethod
    def from_config(cls, config, store=None, cache: Optional[CacheStore] = None,
                    variant: Optional[str] = None,
                    time_option: Optional[str] = None) -> "PatternPredictor":
        return cls(
            variant=variant or config.default_variant,
            time_option=time_option or config.default_time_option,
            store=store,
            cache=cache,
            cache_ttl=config.cache_ttl or None,
            seed=config.seed,
            window=config.history_window,
            min_history=config.min_history,
            confidence=config.pattern_confidence,
            degraded_confidence=config.degraded_confidence,
        )

    @property
    def variant(self) -> str:
        return self._variant

    @property
    def time_option(self) -> str:
        return self._time_option

    def cache_key(self, history: Sequence[Outcome]) -> Optional[str]:
        usable = _usable(history)
        if not usable:
            return None
        newest = max(usable, key=_sort_key)
        return prediction_cache_key(self._variant, self._time_option, newest.period_id)

    def predict(self, history: Sequence[Outcome]) -> Prediction:
        key = self.cache_key(history) if self._cache is not None else None
        if key is not None:
            cached = self._cache.get(key)
            if cached is not None:
                logger.debug("Prediction cache hit: %s", key)
                return Prediction.from_dict(cached)

        prediction = predict_next(
            history,
            variant=self._variant,
            time_option=self._time_option,
            store=self._store,
            rng=self._rng,
            window=self._window,
            min_history=self._min_history,
            confidence=self._confidence,
            degraded_confidence=self._degraded_confidence,
        )

        if key is not None:
            ttl = self._cache_ttl or round_seconds(self._time_option)
            self._cache.set(key, prediction.to_dict(), ttl)
        return prediction
