"""Schema validation for raw outcome rows."""

from typing import Dict, List, Sequence, Tuple

from colorpredict.exceptions import SchemaValidationError

SCHEMA_VERSION = "v1"

# Each required field accepts any one of its aliases
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "period_id": ("period_id", "periodNumber", "issueNumber", "period"),
    "result": ("result", "number", "hash"),
    "timestamp": ("timestamp", "time", "settledAt"),
}

PREDICTION_ALIASES: Tuple[str, ...] = ("prior_prediction", "bigSmallPrediction", "prediction")


def first_present(row: Dict, aliases: Sequence[str]):
    """Value of the first alias present and not None in row."""
    for key in aliases:
        if row.get(key) is not None:
            return row[key]
    return None


def missing_fields(row: Dict) -> List[str]:
    if not isinstance(row, dict):
        return list(FIELD_ALIASES)
    return [
        field for field, aliases in FIELD_ALIASES.items()
        if first_present(row, aliases) is None
    ]


def validate_rows(rows: list) -> None:
    """Validate a batch of raw outcome rows."""
    for idx, row in enumerate(rows):
        missing = missing_fields(row)
        if missing:
            raise SchemaValidationError(
                f"outcomes row {idx} missing fields: {', '.join(missing)}"
            )
