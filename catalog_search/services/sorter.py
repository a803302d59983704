from __future__ import annotations

import logging
from typing import List, Sequence

from catalog_search.core.text import collation_key
from catalog_search.schemas import Record, SortMode
from catalog_search.services.ranker import MatchResult

logger = logging.getLogger(__name__)


def _title_key(r: MatchResult) -> tuple:
    return collation_key(r.record.title)


def sort_results(results: Sequence[MatchResult], mode: SortMode | str = SortMode.relevance) -> List[MatchResult]:
    try:
        mode = SortMode(mode)
    except ValueError:
        # Unknown mode: leave the ranker's order alone
        logger.debug("unknown sort mode %r, keeping input order", mode)
        return list(results)
    # sorted() is stable, reverse=True included, so equal keys keep input order.
    if mode is SortMode.ascending:
        return sorted(results, key=_title_key)
    if mode is SortMode.descending:
        return sorted(results, key=_title_key, reverse=True)
    return sorted(results, key=lambda r: (-r.score, _title_key(r)))


def sort(results: Sequence[MatchResult], mode: SortMode | str = SortMode.relevance) -> List[Record]:
    return [r.record for r in sort_results(results, mode)]
