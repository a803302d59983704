from __future__ import annotations

import json
import logging
import threading
from functools import lru_cache
from pathlib import Path
from typing import List

from catalog_search.core.config import settings

logger = logging.getLogger(__name__)


class RecentQueries:
    """
    Most-recent-first list of submitted queries, deduplicated and capped.

    Persisted as a small JSON object ``{key: [...]}`` so several lists can
    share one file. A broken or unreadable store loads as empty; a failed
    write is logged and the in-memory list keeps serving.
    """

    def __init__(self, path: str | Path, limit: int = 8, key: str = "recent_searches_v1") -> None:
        self._path = Path(path)
        self._limit = int(limit)
        self._key = key
        self._lock = threading.Lock()
        self._items: List[str] = self._load()

    def _read_store(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("ignoring unreadable recent-queries store %s: %s", self._path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _load(self) -> List[str]:
        raw = self._read_store().get(self._key)
        if not isinstance(raw, list):
            return []
        return [str(x) for x in raw][: self._limit]

    def _persist(self) -> None:
        store = self._read_store()
        if self._items:
            store[self._key] = list(self._items)
        else:
            store.pop(self._key, None)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(store, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            logger.warning("could not write recent-queries store %s: %s", self._path, e)

    def items(self) -> List[str]:
        return list(self._items)

    def save(self, value: str | None) -> List[str]:
        v = (value or "").strip()
        if not v:
            return self.items()
        with self._lock:
            self._items = [v, *[x for x in self._items if x != v]][: self._limit]
            self._persist()
            return list(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items = []
            self._persist()


@lru_cache(maxsize=1)
def get_recent_queries() -> RecentQueries:
    return RecentQueries(
        settings.recent_queries_path,
        limit=settings.recent_queries_limit,
        key=settings.recent_queries_key,
    )
