"""Normalization of raw result feed rows."""

from colorpredict.normalization.normalize import (
    normalize_outcome,
    normalize_outcomes,
    parse_result,
    parse_timestamp,
)
from colorpredict.normalization.schema import validate_rows, SCHEMA_VERSION

__all__ = [
    "normalize_outcome",
    "normalize_outcomes",
    "parse_result",
    "parse_timestamp",
    "validate_rows",
    "SCHEMA_VERSION",
]
