from __future__ import annotations

import re
from functools import lru_cache
from typing import Any, Callable, Optional, Tuple

from pyuca import Collator

from catalog_search.core.config import settings

_WORD_RE = re.compile(r"\w")

# Locales whose tailoring moves their own script ahead of Latin (CLDR [reorder ...]).
_SCRIPT_BLOCKS = {
    "Cyrl": [(0x0400, 0x052F)],
}
_LOCALE_SCRIPT = {
    "ru": "Cyrl",
    "uk": "Cyrl",
    "be": "Cyrl",
    "bg": "Cyrl",
    "sr": "Cyrl",
    "mk": "Cyrl",
    "kk": "Cyrl",
}


def normalize(s: Any) -> str:
    """Lowercase and trim any value; ``None`` becomes the empty string."""
    if s is None:
        return ""
    return str(s).lower().strip()


def tokenize(query: Any) -> list[str]:
    """
    Split a query into normalized terms on runs of whitespace.
    A query without a single word character ("  ... ", "?!") has no terms;
    otherwise every non-empty token is kept, punctuation included.
    """
    q = normalize(query)
    if not _WORD_RE.search(q):
        return []
    return q.split()


@lru_cache(maxsize=1)
def get_collator() -> Collator:
    # Loading the collation table is the expensive part; the collator itself is read-only.
    return Collator()


def _primary(ch: str) -> int:
    key = get_collator().sort_key(ch)
    return key[0] if key else 0


@lru_cache(maxsize=None)
def _reorder_span(locale: str) -> Optional[Tuple[int, int, int]]:
    """
    Primary-weight bounds (latin_start, script_start, script_end) for a
    locale that puts its script first, or None for root order.
    In DUCET Latin starts the letters and the other scripts follow, so
    swapping [latin_start, script_start) with [script_start, script_end)
    moves the script in front of Latin and keeps everything else in place.
    """
    script = _LOCALE_SCRIPT.get(locale.replace("-", "_").split("_")[0].lower())
    if script is None:
        return None
    latin = _primary("a")
    weights = [
        _primary(chr(cp))
        for lo, hi in _SCRIPT_BLOCKS[script]
        for cp in range(lo, hi + 1)
        if chr(cp).isalpha()
    ]
    weights = [w for w in weights if w > latin]
    if not weights:
        return None
    return latin, min(weights), max(weights) + 1


@lru_cache(maxsize=None)
def _key_func(locale: str) -> Callable[[str], tuple]:
    span = _reorder_span(locale)
    sort_key = get_collator().sort_key
    if span is None:
        return sort_key
    latin, start, end = span

    def remap(p: int) -> int:
        if start <= p < end:
            return p - (start - latin)
        if latin <= p < start:
            return p + (end - start)
        return p

    def key(s: str) -> tuple:
        k = tuple(sort_key(s))
        # Primary weights run up to the first level separator (0).
        cut = k.index(0) if 0 in k else len(k)
        return tuple(remap(p) for p in k[:cut]) + k[cut:]

    return key


def collation_key(s: Any, locale: str | None = None) -> tuple:
    """Sort key for ``s`` in the catalog's working language (``settings.collation_locale``)."""
    return _key_func(locale or settings.collation_locale)("" if s is None else str(s))
