"""Application search – page requests, validation and the search service."""
from mp_dal.application.search.query import OrderBy, SearchQuery, SortDirection
from mp_dal.application.search.result import SearchResult
from mp_dal.application.search.parser import parse_search_query, validate_search_query
from mp_dal.application.search.service import SearchDaoPort, SearchService
from mp_dal.application.search.validators import (
    ConditionValidator,
    IntValidator,
    JSONObjectValidator,
    JSONValidator,
    MinValidator,
    NotNullValidator,
    OrderByValidator,
    ParameterTypeValidator,
    Validator,
)

__all__ = [
    "ConditionValidator",
    "IntValidator",
    "JSONObjectValidator",
    "JSONValidator",
    "MinValidator",
    "NotNullValidator",
    "OrderBy",
    "OrderByValidator",
    "ParameterTypeValidator",
    "SearchDaoPort",
    "SearchQuery",
    "SearchResult",
    "SearchService",
    "SortDirection",
    "Validator",
    "parse_search_query",
    "validate_search_query",
]
