"""Application search – parse_search_query: raw request values to SearchQuery.

All fields are checked before anything is raised, so a single
:class:`~mp_dal.kernel.errors.ValidationError` lists every failing field.
Only the first failing validator of each field is reported.
"""
from __future__ import annotations

import json
from typing import Any, Mapping

from mp_dal.application.search.query import OrderBy, SearchQuery
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
from mp_dal.kernel.errors import ValidationError

SEARCH_QUERY_FIELDS: dict[str, tuple[Validator, ...]] = {
    "offset": (NotNullValidator(), IntValidator(), MinValidator(0)),
    "rowCount": (NotNullValidator(), IntValidator(), MinValidator(0)),
    "cond": (NotNullValidator(), JSONObjectValidator(), ConditionValidator()),
    "params": (NotNullValidator(), JSONObjectValidator(), ParameterTypeValidator()),
    "order": (NotNullValidator(), JSONValidator(), OrderByValidator()),
}


def _decode(value: Any) -> Any:
    return json.loads(value) if isinstance(value, str) else value


def validate_search_query(raw: Any) -> list[dict[str, str]]:
    """Return one ``{"field", "message"}`` entry per invalid field of *raw*."""
    errors: list[dict[str, str]] = []
    for field, validators in SEARCH_QUERY_FIELDS.items():
        if field not in raw:
            continue
        value = raw[field]
        for validator in validators:
            if not validator.validate(value):
                errors.append({"field": field, "message": validator.error_message(field)})
                break
    return errors


def parse_search_query(raw: Mapping[str, Any], *, default_row_count: int = 10) -> SearchQuery:
    """Validate and convert a raw request (e.g. query-string values)."""
    if not isinstance(raw, Mapping):
        raise ValidationError(
            "Invalid value type (search query must be an object).",
            field="query",
        )

    errors = validate_search_query(raw)
    if errors:
        raise ValidationError("Validation errors occurred.", errors=errors)

    order = None
    if "order" in raw:
        order = tuple(OrderBy.from_dict(o) for o in _decode(raw["order"]))

    return SearchQuery(
        offset=int(raw.get("offset", 0)),
        row_count=int(raw.get("rowCount", default_row_count)),
        cond=_decode(raw["cond"]) if "cond" in raw else None,
        params=_decode(raw["params"]) if "params" in raw else None,
        order=order,
    )


__all__ = ["SEARCH_QUERY_FIELDS", "parse_search_query", "validate_search_query"]
