"""CLI entry points."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence
import argparse
import json
import logging
import sys
import uuid

import pandas as pd

from colorpredict.config import Config
from colorpredict.constants import GAME_VARIANTS, TIME_OPTIONS, normalize_variant
from colorpredict.exceptions import ColorPredictError, ConfigError, HistoryLoadError
from colorpredict.models import Outcome, PatternPredictor
from colorpredict.models.predictor import sort_newest_first
from colorpredict.normalization import normalize_outcomes
from colorpredict.ops.logging import configure_logging
from colorpredict.review import summarize_ledger, format_summary
from colorpredict.storage import FileCache, JsonStorage, PredictionLedger

logger = logging.getLogger(__name__)


def _extract_rows(payload) -> List[Dict]:
    # Feed responses nest the list under data.list
    if isinstance(payload, dict):
        if isinstance(payload.get("data"), dict):
            payload = payload["data"]
        payload = payload.get("list", payload.get("results", []))
    if not isinstance(payload, list):
        raise ValueError("expected a list of outcome rows")
    return payload


def load_history(path: str) -> List[Outcome]:
    """Load outcome history from a JSON or CSV file."""
    history_path = Path(path)
    if not history_path.exists():
        raise HistoryLoadError(path, "file not found")
    suffix = history_path.suffix.lower()
    try:
        if suffix == ".json":
            rows = _extract_rows(json.loads(history_path.read_text(encoding="utf-8")))
        elif suffix == ".csv":
            frame = pd.read_csv(history_path, dtype=str)
            frame = frame.astype(object).where(frame.notna(), None)
            rows = frame.to_dict("records")
        else:
            raise HistoryLoadError(path, f"unsupported file type {suffix or '(none)'}")
    except HistoryLoadError:
        raise
    except (OSError, ValueError, pd.errors.ParserError) as exc:
        raise HistoryLoadError(path, original_error=exc) from exc
    outcomes = normalize_outcomes(rows)
    logger.info("Loaded %d outcomes from %s (%d rows)", len(outcomes), path, len(rows))
    return outcomes


def _ledger_storage(path: str):
    ledger_path = Path(path)
    return JsonStorage(str(ledger_path.parent or Path("."))), ledger_path.stem


def load_ledger(path: str, limit: int) -> PredictionLedger:
    storage, name = _ledger_storage(path)
    try:
        rows = storage.read_table(name)
    except (OSError, ValueError) as exc:
        raise HistoryLoadError(path, "unreadable ledger", original_error=exc) from exc
    return PredictionLedger.from_rows(rows, limit=limit)


def save_ledger(ledger: PredictionLedger, path: str) -> str:
    storage, name = _ledger_storage(path)
    return storage.write_table(name, ledger.to_rows())


def next_period_id(period_id: str) -> Optional[str]:
    """Period after period_id for numeric ids, keeping zero padding."""
    if not period_id or not period_id.isdigit():
        return None
    return str(int(period_id) + 1).zfill(len(period_id))


def _resolve_variant(variant: Optional[str], config: Config) -> str:
    if not variant:
        return config.default_variant
    canonical = normalize_variant(variant)
    if canonical not in GAME_VARIANTS:
        raise ConfigError(f"unknown game variant {variant!r}", key="variant")
    return canonical


def _write(text: str) -> None:
    sys.stdout.write(text + "\n")


def run_predict(
    history_path: str,
    config_path: Optional[str] = None,
    variant: Optional[str] = None,
    time_option: Optional[str] = None,
    ledger_path: Optional[str] = None,
    period_id: Optional[str] = None,
    seed: Optional[int] = None,
    use_cache: bool = False,
    as_json: bool = False,
) -> int:
    """Predict the next round from a history file."""
    config = Config.load(config_path=config_path)
    if seed is not None:
        config.seed = seed
    history = load_history(history_path)

    ledger = load_ledger(ledger_path, config.ledger_limit) if ledger_path else None
    if ledger is not None:
        for outcome in sort_newest_first(history)[:config.ledger_limit]:
            ledger.settle(outcome)

    cache = FileCache(config.cache_dir) if use_cache else None
    predictor = PatternPredictor.from_config(
        config,
        store=ledger,
        cache=cache,
        variant=_resolve_variant(variant, config),
        time_option=(time_option or "").strip().upper() or None,
    )
    prediction = predictor.predict(history)

    if ledger is not None:
        ordered = sort_newest_first(history)
        newest = ordered[0].period_id if ordered else ""
        target = period_id or next_period_id(newest)
        if target:
            ledger.record_prediction(target, prediction)
        else:
            logger.warning("No period id to record the prediction under; pass --period")
        save_ledger(ledger, ledger_path)

    if as_json:
        _write(json.dumps(prediction.to_dict(), indent=2))
    else:
        for label, value in prediction.to_display_dict().items():
            _write(f"{label}: {value}")
        for reason in prediction.reasoning:
            _write(f"  - {reason}")
    return 0


def run_settle(
    ledger_path: str,
    period_id: str,
    result: int,
    config_path: Optional[str] = None,
) -> int:
    """Settle one period in a ledger file."""
    config = Config.load(config_path=config_path)
    ledger = load_ledger(ledger_path, config.ledger_limit)
    entry = ledger.settle(Outcome(
        period_id=str(period_id),
        result=result,
        timestamp=datetime.now(timezone.utc),
    ))
    save_ledger(ledger, ledger_path)
    _write(f"{entry.period_id}: {entry.status or 'RESULT ONLY'} (result {entry.actual_result})")
    return 0


def run_review(ledger_path: str, config_path: Optional[str] = None, as_json: bool = False) -> int:
    """Print a win/loss summary of a ledger file."""
    config = Config.load(config_path=config_path)
    ledger = load_ledger(ledger_path, config.ledger_limit)
    summary = summarize_ledger(ledger.entries())
    _write(json.dumps(summary, indent=2) if as_json else format_summary(summary))
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pattern-following color game predictor")
    subparsers = parser.add_subparsers(dest="command", required=True)

    predict = subparsers.add_parser("predict", help="Predict the next round from a history file")
    predict.add_argument("--history", dest="history_path", required=True,
                         help="JSON or CSV file of recent outcomes")
    predict.add_argument("--config", dest="config_path", help="Path to config file")
    predict.add_argument("--variant", dest="variant", help=f"Game variant ({', '.join(GAME_VARIANTS)})")
    predict.add_argument("--time-option", dest="time_option",
                         help=f"Round length tag ({', '.join(TIME_OPTIONS)})")
    predict.add_argument("--ledger", dest="ledger_path", help="Ledger JSON file to settle and record into")
    predict.add_argument("--period", dest="period_id", help="Period id to record the prediction under")
    predict.add_argument("--seed", dest="seed", type=int, help="Seed for the digit draw")
    predict.add_argument("--cache", dest="use_cache", action="store_true",
                         help="Memoize the prediction for the current round in the cache dir")
    predict.add_argument("--json", dest="as_json", action="store_true", help="Print JSON")

    settle = subparsers.add_parser("settle", help="Record a round result in a ledger")
    settle.add_argument("--ledger", dest="ledger_path", required=True, help="Ledger JSON file")
    settle.add_argument("--period", dest="period_id", required=True, help="Period id")
    settle.add_argument("--result", dest="result", type=int, required=True, help="Result digit 0-9")
    settle.add_argument("--config", dest="config_path", help="Path to config file")

    review = subparsers.add_parser("review", help="Summarize wins and losses in a ledger")
    review.add_argument("--ledger", dest="ledger_path", required=True, help="Ledger JSON file")
    review.add_argument("--config", dest="config_path", help="Path to config file")
    review.add_argument("--json", dest="as_json", action="store_true", help="Print JSON")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(run_id=uuid.uuid4().hex[:8])

    try:
        if args.command == "predict":
            return run_predict(
                history_path=args.history_path,
                config_path=getattr(args, "config_path", None),
                variant=getattr(args, "variant", None),
                time_option=getattr(args, "time_option", None),
                ledger_path=getattr(args, "ledger_path", None),
                period_id=getattr(args, "period_id", None),
                seed=getattr(args, "seed", None),
                use_cache=getattr(args, "use_cache", False),
                as_json=getattr(args, "as_json", False),
            )
        if args.command == "settle":
            return run_settle(
                ledger_path=args.ledger_path,
                period_id=args.period_id,
                result=args.result,
                config_path=getattr(args, "config_path", None),
            )
        if args.command == "review":
            return run_review(
                ledger_path=args.ledger_path,
                config_path=getattr(args, "config_path", None),
                as_json=getattr(args, "as_json", False),
            )
    except ColorPredictError as exc:
        logger.error("%s", exc)
        return 2

    parser.error("Unknown command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
