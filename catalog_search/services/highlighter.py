from __future__ import annotations

import logging
import re
from typing import List, NamedTuple, Optional

from catalog_search.core.text import tokenize

logger = logging.getLogger(__name__)


class Segment(NamedTuple):
    text: str
    match: bool


def _pattern(terms: List[str]) -> Optional[re.Pattern]:
    parts = [re.escape(t) for t in terms if t]
    if not parts:
        return None
    try:
        return re.compile("(" + "|".join(parts) + ")", re.IGNORECASE)
    except re.error:
        logger.debug("could not compile highlight pattern for %r", terms)
        return None


def highlight(query: str | None, text: str | None) -> List[Segment]:
    """
    Split ``text`` into matched / plain segments for display.

    Matching is case-insensitive but segments carry the original text, and
    joining all segment texts gives back ``text`` unchanged. Empty segments
    appear around adjacent matches and at the edges; they are kept.
    """
    raw = text or ""
    pattern = _pattern(tokenize(query))
    if pattern is None:
        return [Segment(raw, False)]
    # The capture group makes re.split keep the matched pieces.
    return [Segment(seg, pattern.fullmatch(seg) is not None) for seg in pattern.split(raw)]
