"""Configuration for the predictor and its command line."""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional, Dict
import json
import os

from colorpredict.constants import (
    GAME_VARIANTS,
    HISTORY_WINDOW,
    MIN_HISTORY,
    PATTERN_CONFIDENCE,
    DEGRADED_CONFIDENCE,
    LEDGER_LIMIT,
    WINGO,
    normalize_variant,
)
from colorpredict.exceptions import ConfigError


_DEFAULT_VARIANT = WINGO
_DEFAULT_TIME_OPTION = "1 MIN"
_DEFAULT_CACHE_TTL = 0  # 0 = use the round length of the time option
_DEFAULT_CACHE_DIR = ".cache"


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _coerce_float(value: Optional[str], default: float) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _coerce_int(value: Optional[str], default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _coerce_positive_int(value: Optional[str], default: int) -> int:
    return max(1, _coerce_int(value, default))


def _coerce_optional_int(value: Optional[str], default: Optional[int] = None) -> Optional[int]:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _coerce_variant(value: Optional[str], default: str) -> str:
    if value is None or value == "":
        return default
    variant = normalize_variant(value)
    if variant not in GAME_VARIANTS:
        raise ConfigError(f"unknown game variant {value!r}", key="COLORPREDICT_VARIANT")
    return variant


def _parse_env_file(path: Path) -> Dict[str, str]:
    data: Dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        data[key.strip()] = _strip_quotes(value.strip())
    return data


def _load_config_data(path: Path) -> Dict[str, str]:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        if path.suffix.lower() == ".json":
            payload = json.loads(path.read_text(encoding="utf-8"))
            return {str(k): str(v) for k, v in payload.items()}
        return _parse_env_file(path)
    except (OSError, json.JSONDecodeError, AttributeError) as exc:
        raise ConfigError(f"unreadable config file {path}: {exc}") from exc


@dataclass
class Config:
    default_variant: str = _DEFAULT_VARIANT
    default_time_option: str = _DEFAULT_TIME_OPTION

    # Predictor
    history_window: int = HISTORY_WINDOW
    min_history: int = MIN_HISTORY
    pattern_confidence: float = PATTERN_CONFIDENCE
    degraded_confidence: float = DEGRADED_CONFIDENCE
    seed: Optional[int] = None

    # Cache and ledger
    cache_ttl: int = _DEFAULT_CACHE_TTL
    cache_dir: str = _DEFAULT_CACHE_DIR
    ledger_limit: int = LEDGER_LIMIT

    @classmethod
    def from_env(cls) -> "Config":
        return cls._from_mapping(os.environ, cls())

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "Config":
        env_config = cls.from_env()
        if not config_path:
            return env_config
        file_data = _load_config_data(Path(config_path))
        return cls._from_mapping(file_data, env_config)

    @classmethod
    def _from_mapping(cls, data, base: "Config") -> "Config":
        return cls(
            default_variant=_coerce_variant(data.get("COLORPREDICT_VARIANT"), base.default_variant),
            default_time_option=(
                data.get("COLORPREDICT_TIME_OPTION") or base.default_time_option
            ).strip().upper(),
            history_window=_coerce_positive_int(
                data.get("COLORPREDICT_HISTORY_WINDOW"),
                base.history_window,
            ),
            min_history=_coerce_positive_int(data.get("COLORPREDICT_MIN_HISTORY"), base.min_history),
            pattern_confidence=_coerce_float(
                data.get("COLORPREDICT_CONFIDENCE"),
                base.pattern_confidence,
            ),
            degraded_confidence=_coerce_float(
                data.get("COLORPREDICT_DEGRADED_CONFIDENCE"),
                base.degraded_confidence,
            ),
            seed=_coerce_optional_int(data.get("COLORPREDICT_SEED"), base.seed),
            cache_ttl=_coerce_int(data.get("COLORPREDICT_CACHE_TTL"), base.cache_ttl),
            cache_dir=data.get("COLORPREDICT_CACHE_DIR") or base.cache_dir,
            ledger_limit=_coerce_int(data.get("COLORPREDICT_LEDGER_LIMIT"), base.ledger_limit),
        )

    def to_dict(self) -> Dict[str, str]:
        return {k: str(v) for k, v in asdict(self).items()}
