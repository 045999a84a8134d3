# scoreboard_api/storage.py
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

from scoreboard_api.models import MatchState

logger = logging.getLogger(__name__)

NAMESPACE = "scoreboard"


class StorageError(Exception):
    """Raised when a persisted scoreboard document cannot be read or written."""
    pass


def make_key(namespace: str, key: str) -> str:
    """Namespaced slot key, e.g. make_key("scoreboard", "cricketState") -> "scoreboard:cricketState"."""
    namespace = namespace.strip()
    key = key.strip()
    if not namespace or not key:
        raise ValueError("Storage namespace and key must be non-empty")
    return f"{namespace}:{key}"


def dumps_state(state: MatchState) -> str:
    return json.dumps(state.to_dict(), ensure_ascii=False)


def loads_state(raw: str) -> MatchState:
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise StorageError(f"Stored scoreboard is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise StorageError("Stored scoreboard must be a JSON object")

    return MatchState.from_dict(data)


class StateStore(Protocol):
    """A single durable key-value slot holding the whole scoreboard."""

    def save(self, state: MatchState) -> None: ...

    def load(self) -> Optional[MatchState]: ...

    def clear(self) -> None: ...


class MemoryStore:
    """
    In-process slot (sufficient for single-instance deploys and tests).
    Values are kept serialized, so the stored copy never aliases live state.
    """

    def __init__(self, key: str = "cricketState") -> None:
        self.key = make_key(NAMESPACE, key)
        self._data: Dict[str, str] = {}

    def save(self, state: MatchState) -> None:
        self._data[self.key] = dumps_state(state)

    def load(self) -> Optional[MatchState]:
        raw = self._data.get(self.key)
        if raw is None:
            return None
        return loads_state(raw)

    def clear(self) -> None:
        self._data.pop(self.key, None)


class JsonFileStore:
    """
    One JSON document per key under `directory`.
    Writes go to a temp file first and are moved into place.
    """

    def __init__(self, directory: str | Path, key: str = "cricketState") -> None:
        self.directory = Path(directory)
        self.key = make_key(NAMESPACE, key)
        self.path = self.directory / f"{key.strip()}.json"

    def save(self, state: MatchState) -> None:
        payload = dumps_state(state)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=".tmp-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as e:
            raise StorageError(f"Unable to write {self.path}: {e}") from e

    def load(self) -> Optional[MatchState]:
        if not self.path.exists():
            return None
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Unable to read {self.path}: {e}") from e
        return loads_state(raw)

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass


def create_store(backend: str, directory: str, key: str) -> StateStore:
    if backend == "memory":
        return MemoryStore(key)
    if backend == "file":
        logger.info("Persisting scoreboard to %s", Path(directory) / f"{key}.json")
        return JsonFileStore(directory, key)
    raise ValueError(f"Unknown storage backend: {backend}")
