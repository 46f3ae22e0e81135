"""Normalize raw result feed rows into Outcome records."""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
import logging

from colorpredict.models.records import Outcome
from colorpredict.normalization.schema import (
    FIELD_ALIASES,
    PREDICTION_ALIASES,
    first_present,
    missing_fields,
)
from colorpredict.utils.classify import digit_from_hash, is_valid_digit, normalize_big_small

logger = logging.getLogger(__name__)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a feed timestamp.

    Accepts datetimes, ISO-8601 strings (trailing 'Z' allowed) and
    epoch numbers in seconds or milliseconds.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        seconds = value / 1000 if value > 1e12 else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    try:
        return datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    except ValueError:
        return None


def parse_result(row: Dict) -> Optional[int]:
    raw = first_present(row, ("result", "number"))
    if raw is None:
        block_hash = row.get("hash")
        return digit_from_hash(block_hash) if block_hash else None
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if is_valid_digit(raw) else None
    if not isinstance(raw, float):
        try:
            raw = float(str(raw).strip())
        except ValueError:
            return None
    # 7.0 from JSON numbers or "7.0" from spreadsheet exports
    if not raw.is_integer():
        return None
    digit = int(raw)
    return digit if is_valid_digit(digit) else None


def normalize_outcome(row: Dict) -> Optional[Outcome]:
    """Build one Outcome from a raw row, None when the row is unusable."""
    missing = missing_fields(row)
    if missing:
        logger.warning("Skipping outcome row missing fields: %s", ", ".join(missing))
        return None

    period_id = str(first_present(row, FIELD_ALIASES["period_id"])).strip()
    result = parse_result(row)
    if result is None:
        logger.warning("Skipping period %s: unusable result %r", period_id,
                       first_present(row, FIELD_ALIASES["result"]))
        return None

    timestamp = parse_timestamp(first_present(row, FIELD_ALIASES["timestamp"]))
    if timestamp is None:
        logger.warning("Skipping period %s: unparseable timestamp", period_id)
        return None

    prior = first_present(row, PREDICTION_ALIASES)
    if isinstance(prior, dict):
        prior = prior.get("bigSmallPrediction") or prior.get("big_small")
    return Outcome(
        period_id=period_id,
        result=result,
        timestamp=timestamp,
        prior_prediction=normalize_big_small(prior),
    )


def normalize_outcomes(rows: Iterable[Dict]) -> List[Outcome]:
    """
    Normalize raw rows, skipping malformed ones.

    Duplicate periods keep the first row seen.
    """
    outcomes: List[Outcome] = []
    seen = set()
    for row in rows or []:
        outcome = normalize_outcome(row)
        if outcome is None:
            continue
        if outcome.period_id in seen:
            logger.debug("Duplicate period %s ignored", outcome.period_id)
            continue
        seen.add(outcome.period_id)
        outcomes.append(outcome)
    return outcomes
