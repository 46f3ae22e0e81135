"""Prediction cache interfaces."""

from pathlib import Path
from typing import Optional, Any, Dict, Tuple, Union
import hashlib
import json
import logging
import threading
import time

logger = logging.getLogger(__name__)


def prediction_cache_key(variant: str, time_option: str, newest_period: str) -> str:
    """Memo key for one round: variant, time option and newest settled period."""
    return f"{variant}-{time_option}-{newest_period}"


def _expired(payload: Dict[str, Any], now: float) -> bool:
    expires_at = payload.get("expires_at")
    if expires_at is None:
        return False
    try:
        return now >= float(expires_at)
    except (TypeError, ValueError):
        return True


class CacheStore:
    """
    Keyed store for prediction payloads (Prediction.to_dict() output).

    Entries expire after ttl_seconds; a non-positive ttl stores nothing.
    Clearing and bulk eviction are up to the caller.
    """

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        raise NotImplementedError

    def invalidate(self, key: str) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError


class MemoryCache(CacheStore):
    """In-process cache, safe to share between threads."""

    def __init__(self) -> None:
        self._data: Dict[str, Tuple[Any, Optional[float]]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._data.get(key)
            if not entry:
                return None
            value, expires_at = entry
            if expires_at is not None and time.time() >= expires_at:
                self._data.pop(key, None)
                return None
            return value

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            return
        expires_at = time.time() + ttl_seconds
        with self._lock:
            self._data[key] = (value, expires_at)

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def evict_expired(self) -> int:
        """Drop expired entries; returns how many were removed."""
        now = time.time()
        with self._lock:
            expired = [
                key for key, (_, expires_at) in self._data.items()
                if expires_at is not None and now >= expires_at
            ]
            for key in expired:
                del self._data[key]
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()


class FileCache(CacheStore):
    """
    One JSON file per key under cache_dir, so a prediction survives
    between command runs within its round.

    Each file holds {"key", "expires_at", "value"}. A file that cannot
    be read back as such a payload is treated as a miss.
    """

    def __init__(self, cache_dir: Union[str, Path]) -> None:
        self._dir = Path(cache_dir)
        self._dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return sum(1 for _ in self._dir.glob("*.json"))

    def get(self, key: str) -> Optional[Any]:
        path = self._path_for_key(key)
        payload = self._read(path)
        if payload is None:
            return None
        if payload.get("key") != key:
            logger.warning("Cache entry %s belongs to another key", path.name)
            return None
        if _expired(payload, time.time()):
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("Could not remove expired cache entry %s: %s", path.name, exc)
            return None
        return payload.get("value")

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            return
        payload = {
            "key": key,
            "expires_at": time.time() + ttl_seconds,
            "value": value,
        }
        path = self._path_for_key(key)
        with self._lock:
            path.write_text(json.dumps(payload), encoding="utf-8")

    def invalidate(self, key: str) -> None:
        self._path_for_key(key).unlink(missing_ok=True)

    def evict_expired(self) -> int:
        """Delete expired and unreadable entry files; returns how many were removed."""
        now = time.time()
        removed = 0
        with self._lock:
            for path in self._dir.glob("*.json"):
                payload = self._read(path)
                if payload is None or _expired(payload, now):
                    path.unlink(missing_ok=True)
                    removed += 1
        return removed

    def clear(self) -> None:
        with self._lock:
            for path in self._dir.glob("*.json"):
                path.unlink(missing_ok=True)

    def _read(self, path: Path) -> Optional[Dict[str, Any]]:
        if not path.exists():
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Unreadable cache entry %s: %s", path.name, exc)
            return None
        if not isinstance(payload, dict):
            logger.warning("Unreadable cache entry %s: expected an object, got %s",
                           path.name, type(payload).__name__)
            return None
        return payload

    def _path_for_key(self, key: str) -> Path:
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return self._dir / f"{digest}.json"
