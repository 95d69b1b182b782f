"""Persistencia local de favoritos.

A JSON file used as a tiny key-value store: one key mapping to an array of
integer ids, e.g. `{"pokemon-favorites": [1, 25]}`. Unreadable or malformed
content is treated as "no favorites" and logged.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import FavoriteSet
from core.logging_utils import get_logger

FAVORITES_STORAGE_KEY = "pokemon-favorites"

logger = get_logger("favorites_store")


class FavoritesStore:
    def __init__(self, path: Path, *, key: str = FAVORITES_STORAGE_KEY) -> None:
        self._path = Path(path)
        self._key = key

    @property
    def path(self) -> Path:
        return self._path

    def _read_document(self) -> dict[str, object]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("favorites_unreadable", path=str(self._path), error=str(exc))
            return {}
        if not isinstance(data, dict):
            logger.warning("favorites_malformed", path=str(self._path))
            return {}
        return data

    def load_ids(self) -> list[int]:
        """Stored ids in insertion order (invalid entries are skipped)."""

        raw = self._read_document().get(self._key)
        if not isinstance(raw, list):
            return []
        ids: list[int] = []
        for value in raw:
            if isinstance(value, int) and not isinstance(value, bool) and value not in ids:
                ids.append(value)
        return ids

    def load(self) -> FavoriteSet:
        return FavoriteSet.of(self.load_ids())

    def save(self, ids: list[int]) -> None:
        document = self._read_document()
        document[self._key] = list(ids)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
        logger.info("favorites_saved", path=str(self._path), count=len(ids))

    def contains(self, record_id: int) -> bool:
        return record_id in self.load()

    def add(self, record_id: int) -> bool:
        """Add `record_id`; returns False when it was already a favorite."""

        ids = self.load_ids()
        if record_id in ids:
            return False
        ids.append(record_id)
        self.save(ids)
        return True

    def remove(self, record_id: int) -> bool:
        ids = self.load_ids()
        if record_id not in ids:
            return False
        self.save([i for i in ids if i != record_id])
        return True

    def toggle(self, record_id: int) -> bool:
        """Flip membership; returns True when the id is a favorite afterwards."""

        if self.remove(record_id):
            return False
        self.add(record_id)
        return True

    def clear(self) -> None:
        self.save([])
