"""FastAPI adapter – search-query dependency and exception mapper."""
from mp_dal.adapters.fastapi.deps import FastAPISearchQueryDep, make_search_query_dep, search_result_body
from mp_dal.adapters.fastapi.exception_mapper import FastAPIExceptionMapper

__all__ = [
    "FastAPIExceptionMapper",
    "FastAPISearchQueryDep",
    "make_search_query_dep",
    "search_result_body",
]
