"""Win/loss review of recorded predictions."""

from dataclasses import asdict
from typing import Dict, List
import logging

import pandas as pd

from colorpredict.constants import BIG, SMALL, WIN, LOSS
from colorpredict.storage.ledger import LedgerEntry, period_sort_key

logger = logging.getLogger(__name__)

_COLUMNS = [
    "period_id", "number", "color", "big_small", "odd_even",
    "created_at", "actual_result", "status",
]


def _ledger_frame(entries: List[LedgerEntry]) -> pd.DataFrame:
    if not entries:
        return pd.DataFrame(columns=_COLUMNS)
    return pd.DataFrame([asdict(entry) for entry in entries], columns=_COLUMNS)


def _longest_run(statuses: pd.Series, value: str) -> int:
    if statuses.empty:
        return 0
    run_ids = (statuses != statuses.shift()).cumsum()
    runs = statuses.groupby(run_ids).agg(["first", "size"])
    matching = runs.loc[runs["first"] == value, "size"]
    return int(matching.max()) if not matching.empty else 0


def _current_run(statuses: pd.Series) -> Dict:
    if statuses.empty:
        return {"status": None, "length": 0}
    last = statuses.iloc[-1]
    length = 0
    for status in reversed(statuses.tolist()):
        if status != last:
            break
        length += 1
    return {"status": last, "length": length}


def summarize_ledger(entries: List[LedgerEntry]) -> Dict:
    """
    Summarize settled predictions.

    Args:
        entries: Ledger entries in any order

    Returns:
        Dict with counts, win rate, streaks and a per-label breakdown
    """
    # Oldest period first so streaks read in play order
    df = _ledger_frame(sorted(entries, key=lambda entry: period_sort_key(entry.period_id)))
    predicted = df[df["number"].notna()]
    settled = predicted[predicted["status"].isin([WIN, LOSS])]
    statuses = settled["status"].reset_index(drop=True)

    wins = int((settled["status"] == WIN).sum())
    losses = int((settled["status"] == LOSS).sum())
    total = wins + losses

    by_label = {}
    for label in (BIG, SMALL):
        subset = settled[settled["big_small"] == label]
        label_wins = int((subset["status"] == WIN).sum())
        by_label[label] = {
            "settled": int(len(subset)),
            "wins": label_wins,
            "win_rate": label_wins / len(subset) if len(subset) else 0.0,
        }

    summary = {
        "settled": total,
        "wins": wins,
        "losses": losses,
        "win_rate": wins / total if total else 0.0,
        "pending": int(len(predicted) - len(settled)),
        "result_only": int(len(df) - len(predicted)),
        "longest_win_streak": _longest_run(statuses, WIN),
        "longest_loss_streak": _longest_run(statuses, LOSS),
        "current_streak": _current_run(statuses),
        "by_label": by_label,
    }
    logger.debug("Ledger summary: %s", summary)
    return summary


def format_summary(summary: Dict) -> str:
    lines = [
        f"Settled predictions: {summary['settled']} "
        f"(pending {summary['pending']}, result-only {summary['result_only']})",
        f"Wins: {summary['wins']}  Losses: {summary['losses']}  "
        f"Win rate: {summary['win_rate'] * 100:.1f}%",
        f"Longest win streak: {summary['longest_win_streak']}  "
        f"Longest loss streak: {summary['longest_loss_streak']}",
    ]
    current = summary["current_streak"]
    if current["status"]:
        lines.append(f"Current streak: {current['status']} x{current['length']}")
    for label, stats in summary["by_label"].items():
        lines.append(
            f"  {label}: {stats['wins']}/{stats['settled']} "
            f"({stats['win_rate'] * 100:.1f}%)"
        )
    return "\n".join(lines)
