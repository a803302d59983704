from __future__ import annotations

from typing import Iterable, List

from catalog_search.core.text import collation_key
from catalog_search.schemas import Record, SortMode
from catalog_search.services import sorter
from catalog_search.services.highlighter import Segment, highlight
from catalog_search.services.ranker import rank

__all__ = ["get_categories", "search", "highlight", "Segment"]


def get_categories(records: Iterable[Record]) -> List[str]:
    """Distinct categories in collation order. The "all" sentinel is left to the caller."""
    seen = {r.category for r in records if r.category is not None}
    return sorted(seen, key=lambda c: (collation_key(c), c))


def search(
    records: Iterable[Record],
    query: str | None = "",
    category: str | None = None,
    sort: SortMode | str = SortMode.relevance,
) -> List[Record]:
    return sorter.sort(rank(records, query, category), sort)
