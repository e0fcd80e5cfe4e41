"""
Key-value persistence for JSON documents.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

logger = logging.getLogger(__name__)

JSONValue = Any


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[JSONValue]:
        ...

    def set(self, key: str, value: JSONValue) -> None:
        ...


class InMemoryStore:
    """Dict-backed store; values are round-tripped through JSON so callers can't share state."""

    def __init__(self, initial: Optional[Dict[str, JSONValue]] = None):
        self._data: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Optional[JSONValue]:
        raw = self._data.get(key)
        return None if raw is None else json.loads(raw)

    def set(self, key: str, value: JSONValue) -> None:
        self._data[key] = json.dumps(value)


class JsonFileStore:
    """All keys live in a single JSON object on disk."""

    def __init__(self, file_path: Union[str, Path] = Path("data/patient_store.json")):
        self.file_path = Path(file_path)

    def _read_all(self) -> Dict[str, JSONValue]:
        if not self.file_path.exists():
            return {}
        try:
            with open(self.file_path, 'r') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Corrupt store file {self.file_path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[JSONValue]:
        return self._read_all().get(key)

    def set(self, key: str, value: JSONValue) -> None:
        data = self._read_all()
        data[key] = value
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.file_path, 'w') as f:
            json.dump(data, f, indent=2)
