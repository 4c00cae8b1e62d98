"""Application search – SearchResult generic container."""
from __future__ import annotations

import dataclasses
from typing import Generic, TypeVar

from mp_dal.application.search.query import OrderBy

T = TypeVar("T")

__all__ = ["SearchResult"]


@dataclasses.dataclass(frozen=True)
class SearchResult(Generic[T]):
    """One page of top-level entities.

    ``count`` is the number of distinct top-level matches for the whole
    query; ``row_count`` is the number of entities actually on this page and
    may be smaller than the requested window.
    """

    count: int
    offset: int
    row_count: int
    entities: tuple[T, ...]
    order: tuple[OrderBy, ...]

    @classmethod
    def empty(cls, offset: int, order: tuple[OrderBy, ...]) -> "SearchResult[T]":
        return cls(count=0, offset=offset, row_count=0, entities=(), order=order)

    @property
    def has_more(self) -> bool:
        return self.offset + self.row_count < self.count
