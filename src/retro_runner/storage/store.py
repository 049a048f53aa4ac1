"""Key-value persistence for high score and character choice.

Persistence is best-effort: a failed read behaves like an empty store
and a failed write is logged and dropped. Nothing here raises into the
game loop.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional
import json
import logging
import os

logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "highScore"
SELECTED_CHARACTER_KEY = "selectedCharacter"


class KeyValueStore(ABC):
    """Abstract key-value store."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Read a value, or ``default`` when missing or unreadable."""
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> bool:
        """Write a value. Returns False if the write failed."""
        ...


class MemoryStore(KeyValueStore):
    """In-process store, used by tests and headless runs."""

    def __init__(self, data: Optional[Dict[str, Any]] = None, fail_writes: bool = False):
        self.data: Dict[str, Any] = dict(data or {})
        self.fail_writes = fail_writes
        self.writes = 0

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def set(self, key: str, value: Any) -> bool:
        if self.fail_writes:
            logger.error(f"Failed to save {key}: store is read-only")
            return False
        self.data[key] = value
        self.writes += 1
        return True


class JsonFileStore(KeyValueStore):
    """Persistent store backed by a single JSON object file."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._data: Optional[Dict[str, Any]] = None

    def _load(self) -> Dict[str, Any]:
        """Load data from file once; any failure yields an empty store."""
        if self._data is not None:
            return self._data

        self._data = {}
        if not self.path.exists():
            return self._data

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict):
                self._data = data
                logger.info(f"Loaded {len(data)} keys from {self.path}")
            else:
                logger.error(f"Ignoring {self.path}: expected a JSON object")
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load {self.path}: {e}")

        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> bool:
        """Write through a temp file so a failed save leaves the old file intact."""
        data = {**self._load(), key: value}
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            text = json.dumps(data, indent=2, ensure_ascii=False)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(text, encoding="utf-8")
            os.replace(tmp, self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to save {key} to {self.path}: {e}")
            tmp.unlink(missing_ok=True)
            return False

        self._data = data
        logger.debug(f"Saved {key} to {self.path}")
        return True
