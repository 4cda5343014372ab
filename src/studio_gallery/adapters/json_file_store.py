"""Key-value store persisted as a single JSON document on disk."""

import json
import logging
import threading
from dataclasses import dataclass
from pathlib import Path

from studio_gallery.services.storage import KeyValueStore

logger = logging.getLogger(__name__)


@dataclass
class JsonFileKeyValueStore(KeyValueStore):
    """File-backed store; every write rewrites the file atomically."""

    path: Path
    _values: dict[str, str]
    _lock: threading.Lock

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()
        self._values = self._load()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._values[key] = value
            self._save()

    def delete(self, key: str) -> None:
        with self._lock:
            if self._values.pop(key, None) is not None:
                self._save()

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.exception(
                "Failed to read store file", extra={"path": str(self.path)}
            )
            return {}
        if not isinstance(raw, dict):
            logger.warning(
                "Ignoring malformed store file", extra={"path": str(self.path)}
            )
            return {}
        return {str(key): str(value) for key, value in raw.items()}

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(self._values), encoding="utf-8")
        tmp_path.replace(self.path)
