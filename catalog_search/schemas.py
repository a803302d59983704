from __future__ import annotations

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Tuple, Union


class SortMode(str, Enum):
    relevance = "relevance"
    ascending = "ascending-alphabetical"
    descending = "descending-alphabetical"


class Record(BaseModel):
    """One catalog entry. Frozen: the engine never mutates records."""

    model_config = ConfigDict(frozen=True)

    id: Union[int, str]
    title: Optional[str] = None
    text: Optional[str] = Field(default=None, description="Body / description")
    category: Optional[str] = None
    tags: Optional[Tuple[str, ...]] = None


class SearchRequest(BaseModel):
    query: str = ""
    category: Optional[str] = Field(default=None, description="Category or the \"all\" sentinel; omitted means all")
    sort: SortMode = SortMode.relevance


class Segment(BaseModel):
    text: str
    match: bool


class SearchItem(BaseModel):
    id: Union[int, str]
    category: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    score: int
    title: List[Segment] = Field(..., description="Highlighted title")
    text: List[Segment] = Field(..., description="Highlighted body")


class SearchResponse(BaseModel):
    total: int
    items: List[SearchItem]


class CategoriesResponse(BaseModel):
    categories: List[str]


class HighlightRequest(BaseModel):
    query: str = ""
    text: Optional[str] = None


class HighlightResponse(BaseModel):
    segments: List[Segment]


class RecentQueryRequest(BaseModel):
    query: str


class RecentQueriesResponse(BaseModel):
    items: List[str]
