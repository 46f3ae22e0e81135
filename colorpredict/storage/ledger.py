"""
Prediction ledger.

Keeps the predictions made per period and settles them against the
outcomes that arrive later. A prediction wins when its BIG/SMALL label
matches the outcome's label; the exact digit is not compared.

The ledger doubles as the prediction store the predictor reads to
decide whether recent rounds were wins.
"""

from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Dict, List, Optional
import logging

from colorpredict.constants import LEDGER_LIMIT, WIN, LOSS
from colorpredict.exceptions import LedgerError
from colorpredict.models.records import Outcome, Prediction
from colorpredict.utils.classify import big_small, odd_even, is_valid_digit, normalize_big_small

logger = logging.getLogger(__name__)


class PredictionStore:
    """Lookup of the BIG/SMALL prediction made for a period."""

    def get_big_small(self, period_id: str) -> Optional[str]:
        raise NotImplementedError


class DictPredictionStore(PredictionStore):
    """Prediction store over a plain period -> label mapping."""

    def __init__(self, predictions: Optional[Dict[str, str]] = None) -> None:
        self._predictions = dict(predictions or {})

    def put(self, period_id: str, label: str) -> None:
        self._predictions[str(period_id)] = label

    def get_big_small(self, period_id: str) -> Optional[str]:
        return normalize_big_small(self._predictions.get(str(period_id)))


@dataclass
class LedgerEntry:
    period_id: str
    number: Optional[int]
    color: str
    big_small: str
    odd_even: str
    created_at: str
    actual_result: Optional[int] = None
    status: Optional[str] = None

    @property
    def has_prediction(self) -> bool:
        return self.number is not None

    @property
    def settled(self) -> bool:
        return self.status is not None


def period_sort_key(period_id: str):
    if period_id.isdigit():
        return (1, int(period_id), "")
    return (0, 0, period_id)


class PredictionLedger(PredictionStore):
    def __init__(self, limit: int = LEDGER_LIMIT) -> None:
        self._limit = limit
        self._entries: Dict[str, LedgerEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, period_id: str) -> bool:
        return str(period_id) in self._entries

    def entries(self) -> List[LedgerEntry]:
        """Entries sorted newest period first."""
        return sorted(
            self._entries.values(),
            key=lambda entry: period_sort_key(entry.period_id),
            reverse=True,
        )

    def get(self, period_id: str) -> Optional[LedgerEntry]:
        return self._entries.get(str(period_id))

    def get_big_small(self, period_id: str) -> Optional[str]:
        entry = self.get(period_id)
        if entry is None or not entry.has_prediction:
            return None
        return entry.big_small

    def record_prediction(self, period_id: str, prediction: Prediction) -> LedgerEntry:
        """Add the prediction made for period_id; an existing period is kept as is."""
        period_id = str(period_id)
        existing = self._entries.get(period_id)
        if existing is not None:
            logger.debug("Prediction for period %s already recorded", period_id)
            return existing
        entry = LedgerEntry(
            period_id=period_id,
            number=prediction.number,
            color=prediction.color,
            big_small=prediction.big_small,
            odd_even=prediction.odd_even,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self._entries[period_id] = entry
        logger.info("Recorded prediction for period %s: %s", period_id, entry.big_small)
        self._truncate()
        return entry

    def settle(self, outcome: Outcome) -> LedgerEntry:
        """
        Apply an outcome to the ledger.

        A known period gets its actual result and WIN/LOSS status. An
        unknown period is stored as a result-only row with no status.
        """
        if not is_valid_digit(outcome.result):
            raise LedgerError(
                f"Cannot settle period {outcome.period_id}: result {outcome.result!r} is not 0-9"
            )
        period_id = str(outcome.period_id)
        actual = big_small(outcome.result)
        entry = self._entries.get(period_id)

        if entry is None:
            entry = LedgerEntry(
                period_id=period_id,
                number=None,
                color="",
                big_small=actual,
                odd_even=odd_even(outcome.result),
                created_at=datetime.now(timezone.utc).isoformat(),
                actual_result=outcome.result,
            )
            self._entries[period_id] = entry
            logger.info("No prediction for period %s, recording result only", period_id)
            self._truncate()
            return entry

        entry.actual_result = outcome.result
        if entry.has_prediction:
            entry.status = WIN if entry.big_small == actual else LOSS
            logger.info("Settled period %s: %s (%s vs %s)", period_id, entry.status,
                        entry.big_small, actual)
        return entry

    def to_rows(self) -> List[Dict]:
        return [asdict(entry) for entry in self.entries()]

    @classmethod
    def from_rows(cls, rows: List[Dict], limit: int = LEDGER_LIMIT) -> "PredictionLedger":
        ledger = cls(limit=limit)
        for idx, row in enumerate(rows):
            try:
                entry = LedgerEntry(
                    period_id=str(row["period_id"]),
                    number=None if row.get("number") is None else int(row["number"]),
                    color=row.get("color") or "",
                    big_small=row["big_small"],
                    odd_even=row["odd_even"],
                    created_at=row.get("created_at") or "",
                    actual_result=(
                        None if row.get("actual_result") is None else int(row["actual_result"])
                    ),
                    status=row.get("status"),
                )
            except (KeyError, TypeError, ValueError) as exc:
                raise LedgerError(f"Malformed ledger row {idx}: {exc}") from exc
            ledger._entries[entry.period_id] = entry
        ledger._truncate()
        return ledger

    def _truncate(self) -> None:
        if len(self._entries) <= self._limit:
            return
        for entry in self.entries()[self._limit:]:
            del self._entries[entry.period_id]
