from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from catalog_search.core.config import settings
from catalog_search.core.text import normalize, tokenize
from catalog_search.schemas import Record


@dataclass(frozen=True)
class MatchResult:
    record: Record
    score: int
    matched: bool


def haystack(record: Record) -> str:
    """Searchable text of a record: title, body and tags, normalized."""
    tags = " ".join(t or "" for t in (record.tags or ()))
    return normalize(" ".join([record.title or "", record.text or "", tags]))


def score(terms: Sequence[str], hay: str) -> int:
    # str.count resumes just past each hit, so occurrences never overlap.
    return sum(hay.count(t) for t in terms if t)


def evaluate(records: Iterable[Record], query: str | None, category: str | None = None) -> List[MatchResult]:
    """
    Score every record of the selected category and flag whether it passes.

    A record passes when the query has no terms, when any term occurs in its
    haystack, or when the whole normalized query occurs verbatim. The last
    check is a fallback for phrases and rarely decides anything on its own.
    """
    all_category = settings.all_category
    if category is None:
        category = all_category
    q = normalize(query)
    terms = tokenize(query)
    out: List[MatchResult] = []
    for rec in records:
        if category != all_category and rec.category != category:
            continue
        hay = haystack(rec)
        s = score(terms, hay)
        out.append(MatchResult(record=rec, score=s, matched=not terms or s > 0 or q in hay))
    return out


def rank(records: Iterable[Record], query: str | None, category: str | None = None) -> List[MatchResult]:
    """Passing records with their scores, in input order; ordering is the sorter's job."""
    return [m for m in evaluate(records, query, category) if m.matched]
