"""Unit tests for ledger review."""

from datetime import datetime

from colorpredict.constants import BIG, SMALL
from colorpredict.models import Outcome, Prediction
from colorpredict.review import summarize_ledger, format_summary
from colorpredict.storage import PredictionLedger


def _ledger(plays):
    """plays: (period, predicted digit or None, actual digit or None), any order."""
    ledger = PredictionLedger(limit=50)
    for period, predicted, actual in plays:
        if predicted is not None:
            ledger.record_prediction(period, Prediction(
                number=predicted,
                confidence=0.85,
                color="",
                big_small=BIG if predicted >= 5 else SMALL,
                odd_even="EVEN" if predicted % 2 == 0 else "ODD",
            ))
        if actual is not None:
            ledger.settle(Outcome(period_id=period, result=actual, timestamp=datetime(2025, 1, 1)))
    return ledger


def test_summary_counts_and_streaks():
    ledger = _ledger([
        ("101", 7, 8),   # WIN
        ("102", 7, 9),   # WIN
        ("103", 2, 6),   # LOSS
        ("104", 3, 1),   # WIN
        ("105", 3, 0),   # WIN
        ("106", 8, 9),   # WIN
        ("107", 8, 1),   # LOSS
        ("108", 1, None),
        ("099", None, 4),
    ])
    summary = summarize_ledger(ledger.entries())

    assert summary["settled"] == 7
    assert summary["wins"] == 5
    assert summary["losses"] == 2
    assert summary["win_rate"] == 5 / 7
    assert summary["pending"] == 1
    assert summary["result_only"] == 1
    assert summary["longest_win_streak"] == 3
    assert summary["longest_loss_streak"] == 1
    assert summary["current_streak"] == {"status": "LOSS", "length": 1}
    assert summary["by_label"][BIG] == {"settled": 4, "wins": 3, "win_rate": 0.75}
    assert summary["by_label"][SMALL]["settled"] == 3


def test_streaks_follow_period_order_not_input_order():
    ledger = _ledger([("3", 7, 1), ("1", 7, 8), ("2", 7, 9)])
    summary = summarize_ledger(list(reversed(ledger.entries())))
    assert summary["longest_win_streak"] == 2
    assert summary["current_streak"] == {"status": "LOSS", "length": 1}


def test_empty_ledger():
    summary = summarize_ledger([])
    assert summary["settled"] == 0
    assert summary["win_rate"] == 0.0
    assert summary["longest_win_streak"] == 0
    assert summary["current_streak"] == {"status": None, "length": 0}


def test_format_summary():
    text = format_summary(summarize_ledger(_ledger([("1", 7, 8), ("2", 2, 9)]).entries()))
    assert "Wins: 1  Losses: 1  Win rate: 50.0%" in text
    assert "Current streak: LOSS x1" in text
    assert "BIG: 1/1 (100.0%)" in text
