"""Key-value persistence for store snapshots."""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

from equipstore.exceptions import PersistenceError

_logger = logging.getLogger(__name__)


class PersistenceAdapter(Protocol):
    """Structural storage interface used by the store.

    ``load`` returns ``None`` when nothing is stored under *key*. Both
    methods raise :class:`PersistenceError` when the medium fails.
    """

    def load(self, key: str) -> dict[str, Any] | None:
        ...

    def save(self, key: str, data: dict[str, Any]) -> None:
        ...


class MemoryPersistence:
    """Dict-backed storage; lives as long as the object does."""

    def __init__(self, initial: dict[str, dict[str, Any]] | None = None) -> None:
        self._items: dict[str, dict[str, Any]] = copy.deepcopy(initial) if initial else {}

    def load(self, key: str) -> dict[str, Any] | None:
        data = self._items.get(key)
        return copy.deepcopy(data) if data is not None else None

    def save(self, key: str, data: dict[str, Any]) -> None:
        self._items[key] = copy.deepcopy(data)


class JsonFilePersistence:
    """One JSON document per key under *directory* (``<key>.json``)."""

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self._directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self._directory / f"{key}.json"

    def load(self, key: str) -> dict[str, Any] | None:
        path = self.path_for(key)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"Cannot read {path}: {exc}", key=key) from exc

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Invalid JSON in {path}: {text[:64]}", key=key) from exc

        if not isinstance(data, dict):
            raise PersistenceError(f"Expected a JSON object in {path}", key=key)
        return data

    def save(self, key: str, data: dict[str, Any]) -> None:
        path = self.path_for(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(data, handle, ensure_ascii=False, separators=(",", ":"))
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as exc:
            raise PersistenceError(f"Cannot write {path}: {exc}", key=key) from exc
        _logger.debug("Saved snapshot key=%s path=%s", key, path)
