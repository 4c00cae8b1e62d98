"""Application search – structural validators for page requests.

Every validator answers ``validate(value) -> bool`` without raising and
produces a fixed message naming the field through ``error_message``.
``None`` is valid for all of them except :class:`NotNullValidator`, so
absent inputs pass and only supplied ones are checked.
"""
from __future__ import annotations

import abc
import json
import re
from typing import Any

from mp_dal.application.condition.lexer import ConditionLexer
from mp_dal.application.condition.parameterized import PRIMITIVE_TYPES
from mp_dal.application.condition.parser import ConditionParser
from mp_dal.application.search.query import SortDirection
from mp_dal.kernel.errors import ConditionError

_INT_RE = re.compile(r"^[+-]?\d+$")


def _load_json(value: Any) -> tuple[bool, Any]:
    """Decode *value* when it is a string; other values pass through."""
    if not isinstance(value, str):
        return True, value
    try:
        return True, json.loads(value)
    except ValueError:
        return False, None


class Validator(abc.ABC):
    @abc.abstractmethod
    def validate(self, value: Any) -> bool: ...

    @abc.abstractmethod
    def error_message(self, field: str) -> str: ...


class NotNullValidator(Validator):
    def validate(self, value: Any) -> bool:
        return value is not None

    def error_message(self, field: str) -> str:
        return f'"{field}" must not be null.'


class IntValidator(Validator):
    """Integers, or strings that hold a base-10 integer."""

    def validate(self, value: Any) -> bool:
        if value is None:
            return True
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return True
        return isinstance(value, str) and bool(_INT_RE.match(value))

    def error_message(self, field: str) -> str:
        return f'"{field}" must be a valid integer.'


class MinValidator(Validator):
    def __init__(self, minimum: int) -> None:
        self.minimum = minimum

    def validate(self, value: Any) -> bool:
        if value is None:
            return True
        try:
            return int(value) >= self.minimum
        except (TypeError, ValueError):
            return False

    def error_message(self, field: str) -> str:
        return f'"{field}" must be greater than or equal to {self.minimum}.'


class JSONValidator(Validator):
    def validate(self, value: Any) -> bool:
        if value is None:
            return True
        ok, _ = _load_json(value)
        return ok

    def error_message(self, field: str) -> str:
        return f'"{field}" must be valid JSON.'


class JSONObjectValidator(Validator):
    def validate(self, value: Any) -> bool:
        if value is None:
            return True
        ok, decoded = _load_json(value)
        return ok and isinstance(decoded, dict)

    def error_message(self, field: str) -> str:
        return f'"{field}" must be a valid JSON object.'


class ConditionValidator(Validator):
    """A condition is valid if it lexes and parses."""

    def __init__(self) -> None:
        self._lexer = ConditionLexer()
        self._parser = ConditionParser()

    def validate(self, value: Any) -> bool:
        if value is None:
            return True
        try:
            self._parser.parse(self._lexer.parse(value))
        except ConditionError:
            return False
        return True

    def error_message(self, field: str) -> str:
        return f'"{field}" must be a valid condition.'


class ParameterTypeValidator(Validator):
    """An object (or JSON object string) whose values are all primitives."""

    def validate(self, value: Any) -> bool:
        if value is None:
            return True
        ok, decoded = _load_json(value)
        if not ok or not isinstance(decoded, dict):
            return False
        return all(isinstance(v, PRIMITIVE_TYPES) for v in decoded.values())

    def error_message(self, field: str) -> str:
        return f'"{field}" must be an object of primitives (Boolean, Number, String, or null values).'


class OrderByValidator(Validator):
    """An array (or JSON array string) of ``{property, direction}`` objects."""

    _directions = frozenset(d.value for d in SortDirection)

    def validate(self, value: Any) -> bool:
        if value is None:
            return True
        ok, decoded = _load_json(value)
        if not ok or not isinstance(decoded, list):
            return False
        for order in decoded:
            if not isinstance(order, dict):
                return False
            if not isinstance(order.get("property"), str):
                return False
            direction = order.get("direction")
            if not isinstance(direction, str) or direction not in self._directions:
                return False
        return True

    def error_message(self, field: str) -> str:
        return (
            f'"{field}" must be an OrderBy array '
            "([{property: string, direction: 'ASC' | 'DESC'}])."
        )


__all__ = [
    "ConditionValidator",
    "IntValidator",
    "JSONObjectValidator",
    "JSONValidator",
    "MinValidator",
    "NotNullValidator",
    "OrderByValidator",
    "ParameterTypeValidator",
    "Validator",
]
