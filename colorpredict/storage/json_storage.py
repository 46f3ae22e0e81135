"""JSON-based storage for ledgers and outcome histories."""

from pathlib import Path
from typing import List, Dict
import json
import logging

logger = logging.getLogger(__name__)


class JsonStorage:
    def __init__(self, base_dir: str) -> None:
        self._base_dir = Path(base_dir)
        self._base_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Path:
        return self._base_dir / f"{name}.json"

    def write_table(self, name: str, rows: List[Dict]) -> str:
        path = self.path_for(name)
        path.write_text(json.dumps(rows, indent=2, sort_keys=True, default=str), encoding="utf-8")
        logger.debug("Wrote %d rows to %s", len(rows), path)
        return str(path)

    def read_table(self, name: str) -> List[Dict]:
        path = self.path_for(name)
        if not path.exists():
            return []
        return json.loads(path.read_text(encoding="utf-8"))
