from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List

import pandas as pd

from catalog_search.core.config import settings
from catalog_search.schemas import Record, SortMode
from catalog_search.services import sorter
from catalog_search.services.ranker import MatchResult, rank
from catalog_search.services.search import get_categories

logger = logging.getLogger(__name__)


def _py(v: Any) -> Any:
    # pandas NA/NaN -> None, numpy scalars -> Python scalars; lists pass through
    if pd.api.types.is_list_like(v):
        return v
    if pd.isna(v):
        return None
    return v.item() if hasattr(v, "item") else v


def _str(v: Any) -> str | None:
    v = _py(v)
    return None if v is None else str(v)


def _tags(v: Any) -> tuple[str, ...] | None:
    v = _py(v)
    if v is None:
        return None
    if isinstance(v, str):
        v = v.split(";")
    return tuple(str(t).strip() for t in v if str(t).strip())


def _frame_to_rows(df: pd.DataFrame) -> list[dict]:
    cols = ["id", "title", "text", "category", "tags"]
    if "id" not in df.columns:
        raise ValueError("catalog is missing the 'id' column")
    for col in cols:
        if col not in df.columns:
            df[col] = None
    rows = []
    for rid, title, text, category, tags in df[cols].itertuples(index=False, name=None):
        rows.append(
            {
                "id": _py(rid),
                "title": _str(title),
                "text": _str(text),
                "category": _str(category),
                "tags": _tags(tags),
            }
        )
    return rows


def load_records(path: str | Path) -> tuple[Record, ...]:
    """Read a static record set from .json, .csv or .parquet."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"catalog not found: {p}")
    suffix = p.suffix.lower()
    if suffix == ".json":
        rows = json.loads(p.read_text(encoding="utf-8"))
        if isinstance(rows, dict):
            rows = rows.get("items", [])
    elif suffix == ".csv":
        rows = _frame_to_rows(pd.read_csv(p, encoding="utf-8"))
    elif suffix == ".parquet":
        rows = _frame_to_rows(pd.read_parquet(p))
    else:
        raise ValueError(f"unsupported catalog format: {suffix or p.name}")
    records = tuple(Record.model_validate(r) for r in rows)
    logger.info("loaded %d records from %s", len(records), p)
    return records


class Catalog:
    """Read-only record set plus the host-facing queries over it."""

    def __init__(self, records: Iterable[Record]) -> None:
        self._records: tuple[Record, ...] = tuple(records)
        self._categories: List[str] | None = None

    @classmethod
    def from_path(cls, path: str | Path | None = None) -> "Catalog":
        return cls(load_records(path or settings.catalog_path))

    @property
    def records(self) -> tuple[Record, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def categories(self) -> List[str]:
        # The record set never changes, so the list is computed once.
        if self._categories is None:
            self._categories = get_categories(self._records)
        return [settings.all_category, *self._categories]

    def rank(self, query: str | None, category: str | None = None, sort: SortMode | str = SortMode.relevance) -> List[MatchResult]:
        return sorter.sort_results(rank(self._records, query, category), sort)

    def search(self, query: str | None, category: str | None = None, sort: SortMode | str = SortMode.relevance) -> List[Record]:
        return [m.record for m in self.rank(query, category, sort)]


_catalog_singleton: Catalog | None = None


def get_catalog() -> Catalog:
    global _catalog_singleton
    if _catalog_singleton is None:
        _catalog_singleton = Catalog.from_path()
    return _catalog_singleton


def reset_catalog() -> None:
    global _catalog_singleton
    _catalog_singleton = None
