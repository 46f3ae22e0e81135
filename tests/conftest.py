"""
Pytest configuration and shared fixtures for colorpredict tests.
"""

import logging
from datetime import datetime, timedelta

import numpy as np
import pytest

from colorpredict.models import Outcome


_ENV_KEYS = [
    "COLORPREDICT_VARIANT",
    "COLORPREDICT_TIME_OPTION",
    "COLORPREDICT_HISTORY_WINDOW",
    "COLORPREDICT_MIN_HISTORY",
    "COLORPREDICT_CONFIDENCE",
    "COLORPREDICT_DEGRADED_CONFIDENCE",
    "COLORPREDICT_SEED",
    "COLORPREDICT_CACHE_TTL",
    "COLORPREDICT_CACHE_DIR",
    "COLORPREDICT_LEDGER_LIMIT",
    "COLORPREDICT_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host COLORPREDICT_* settings out of the tests."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """configure_logging replaces root handlers; put them back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def rng():
    """Seeded generator for the digit draw."""
    return np.random.default_rng(1234)


def build_history(rounds, start_period=20250101000100, start=None):
    """
    Build outcomes newest first.

    rounds: list of results or (result, prior_prediction) tuples, newest
    first. Period ids count down from start_period, timestamps go back
    one minute per round.
    """
    start = start or datetime(2025, 1, 1, 12, 0, 0)
    history = []
    for idx, item in enumerate(rounds):
        result, prior = item if isinstance(item, tuple) else (item, None)
        history.append(Outcome(
            period_id=str(start_period - idx),
            result=result,
            timestamp=start - timedelta(minutes=idx),
            prior_prediction=prior,
        ))
    return history


@pytest.fixture
def make_history():
    return build_history


@pytest.fixture
def sample_feed_rows():
    """Raw rows as the result feed returns them."""
    return [
        {"issueNumber": "20250101000100", "number": "7", "timestamp": "2025-01-01T12:00:00Z"},
        {"issueNumber": "20250101000099", "number": "6", "timestamp": "2025-01-01T11:59:00Z"},
        {"issueNumber": "20250101000098", "number": "2", "timestamp": "2025-01-01T11:58:00Z"},
        {"issueNumber": "20250101000097", "number": "9", "timestamp": "2025-01-01T11:57:00Z"},
    ]
