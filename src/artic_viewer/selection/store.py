"""
Local Selection Storage
=======================

A browser-style key-value store backed by a single JSON file. Values are
string blobs; the selection map is kept as one serialized blob under a
versioned key.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import TypeAdapter, ValidationError

from ..api.models import Artwork
from ..errors import SelectionStoreError
from .reconcile import SelectionMap

logger = logging.getLogger(__name__)

_selection_adapter = TypeAdapter(Dict[int, Artwork])


class LocalStorage:
    """String key-value store persisted to ``path``."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable local storage file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring local storage file %s: not a JSON object", self.path)
            return {}
        return {str(k): v for k, v in data.items()}

    def _write_all(self, data: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False, indent=2)
                os.replace(tmp, self.path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except OSError as e:
            raise SelectionStoreError(f"Cannot write local storage {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            # non-string values are kept in the file but never returned
            logger.warning("Ignoring non-string value under %r in %s", key, self.path)
            return None
        return value

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)


class SelectionStore:
    """Loads and saves the selection map as one blob in ``LocalStorage``."""

    def __init__(self, storage: LocalStorage, key: str = "selected_artworks_map_v1"):
        self.storage = storage
        self.key = key

    def load(self) -> SelectionMap:
        raw = self.storage.get_item(self.key)
        if not raw:
            return {}
        try:
            return _selection_adapter.validate_json(raw)
        except ValidationError as e:
            # a stale or hand-edited blob must not block the viewer
            logger.warning("Ignoring unparsable selection under %r: %s", self.key, e.error_count())
            return {}

    def save(self, selection: SelectionMap) -> None:
        blob = _selection_adapter.dump_json(selection).decode("utf-8")
        self.storage.set_item(self.key, blob)
        logger.debug("Persisted %d selected artworks", len(selection))

    def clear(self) -> None:
        self.storage.remove_item(self.key)
