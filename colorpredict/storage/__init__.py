"""Storage and caching."""

from colorpredict.storage.cache import CacheStore, MemoryCache, FileCache, prediction_cache_key
from colorpredict.storage.json_storage import JsonStorage
from colorpredict.storage.ledger import (
    PredictionStore,
    DictPredictionStore,
    LedgerEntry,
    PredictionLedger,
)

__all__ = [
    "CacheStore",
    "MemoryCache",
    "FileCache",
    "prediction_cache_key",
    "JsonStorage",
    "PredictionStore",
    "DictPredictionStore",
    "LedgerEntry",
    "PredictionLedger",
]
