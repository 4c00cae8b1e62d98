"""FastAPI adapter – search-query dependency.

Usage::

    @app.get("/people")
    async def search_people(query: FastAPISearchQueryDep) -> dict:
        result = await people.search(query)
        ...

``cond``, ``params`` and ``order`` arrive as JSON strings in the query
string; ``offset`` and ``rowCount`` as integers.
"""
from __future__ import annotations

from typing import Annotated, Any, Awaitable, Callable

from fastapi import Depends, Request

from mp_dal.application.search import SearchQuery, parse_search_query


def make_search_query_dep(default_row_count: int = 10) -> Callable[[Request], Awaitable[SearchQuery]]:
    """Return a dependency that validates the request's query string."""

    async def search_query_dep(request: Request) -> SearchQuery:
        return parse_search_query(dict(request.query_params), default_row_count=default_row_count)

    return search_query_dep


FastAPISearchQueryDep = Annotated[SearchQuery, Depends(make_search_query_dep())]


def search_result_body(result: Any, serialize: Callable[[Any], Any]) -> dict[str, Any]:
    """JSON body for a :class:`~mp_dal.application.search.SearchResult`."""
    return {
        "count": result.count,
        "offset": result.offset,
        "rowCount": result.row_count,
        "entities": [serialize(e) for e in result.entities],
        "order": [o.to_dict() for o in result.order],
    }


__all__ = ["FastAPISearchQueryDep", "make_search_query_dep", "search_result_body"]
