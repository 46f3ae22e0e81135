"""Unit tests for feed row normalization."""

import logging
from datetime import datetime, timezone

import pytest

from colorpredict.constants import BIG, SMALL
from colorpredict.exceptions import SchemaValidationError
from colorpredict.normalization import (
    normalize_outcome,
    normalize_outcomes,
    parse_result,
    parse_timestamp,
    validate_rows,
)


def test_normalize_feed_rows(sample_feed_rows):
    outcomes = normalize_outcomes(sample_feed_rows)
    assert [o.result for o in outcomes] == [7, 6, 2, 9]
    assert outcomes[0].period_id == "20250101000100"
    assert outcomes[0].timestamp == datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert outcomes[0].big_small == BIG


def test_canonical_keys_and_prior_prediction():
    outcome = normalize_outcome({
        "period_id": 42,
        "result": 3,
        "timestamp": "2025-01-01T10:00:00",
        "prior_prediction": "big",
    })
    assert outcome.period_id == "42"
    assert outcome.big_small == SMALL
    assert outcome.prior_prediction == BIG


def test_nested_prediction_payload():
    outcome = normalize_outcome({
        "periodNumber": "9",
        "result": 8,
        "timestamp": "2025-01-01T10:00:00",
        "prediction": {"bigSmallPrediction": "SMALL"},
    })
    assert outcome.prior_prediction == SMALL


def test_hash_rows_use_last_digit():
    outcome = normalize_outcome({"issueNumber": "5", "hash": "00ab3c", "time": 1735725600})
    assert outcome.result == 3
    assert outcome.timestamp.year == 2025


def test_epoch_milliseconds():
    ts = parse_timestamp(1735725600000)
    assert ts == datetime(2025, 1, 1, 10, 0, tzinfo=timezone.utc)


def test_parse_timestamp_rejects_garbage():
    assert parse_timestamp("yesterday") is None
    assert parse_timestamp("") is None
    assert parse_timestamp(True) is None


def test_malformed_rows_are_skipped(caplog):
    rows = [
        {"issueNumber": "1", "number": "12", "timestamp": "2025-01-01T10:00:00"},
        {"issueNumber": "2", "number": "4"},
        {"issueNumber": "3", "number": "x", "timestamp": "2025-01-01T10:00:00"},
        {"issueNumber": "4", "number": "4", "timestamp": "not a date"},
        "not a row",
        {"issueNumber": "5", "number": 5, "timestamp": "2025-01-01T10:05:00"},
    ]
    with caplog.at_level(logging.WARNING, logger="colorpredict.normalization.normalize"):
        outcomes = normalize_outcomes(rows)
    assert [o.period_id for o in outcomes] == ["5"]
    assert "Skipping" in caplog.text


def test_duplicate_periods_keep_first():
    rows = [
        {"issueNumber": "1", "number": 4, "timestamp": "2025-01-01T10:00:00"},
        {"issueNumber": "1", "number": 9, "timestamp": "2025-01-01T10:00:00"},
    ]
    outcomes = normalize_outcomes(rows)
    assert len(outcomes) == 1
    assert outcomes[0].result == 4


def test_validate_rows(sample_feed_rows):
    validate_rows(sample_feed_rows)
    with pytest.raises(SchemaValidationError, match="row 1 missing fields: timestamp"):
        validate_rows([sample_feed_rows[0], {"issueNumber": "2", "number": 4}])


def test_schema_error_is_value_error():
    with pytest.raises(ValueError):
        validate_rows([{}])


@pytest.mark.parametrize("raw, expected", [
    (7, 7),
    (7.0, 7),
    ("7.0", 7),
    (" 0 ", 0),
    (7.5, None),
    ("9.5", None),
    (10.0, None),
    (-1, None),
    (float("nan"), None),
    (True, None),
])
def test_parse_result_accepts_whole_numbers(raw, expected):
    assert parse_result({"number": raw}) == expected


def test_float_results_are_kept():
    rows = [
        {"issueNumber": "2", "number": 7.0, "timestamp": "2025-01-01T10:01:00"},
        {"issueNumber": "1", "number": "3.0", "timestamp": "2025-01-01T10:00:00"},
    ]
    assert [o.result for o in normalize_outcomes(rows)] == [7, 3]
