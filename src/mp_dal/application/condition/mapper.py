"""ConditionMapper – rename logical properties in a condition to storage columns."""
from __future__ import annotations

from typing import Any, Mapping

from mp_dal.application.condition.ast import Condition, is_condition
from mp_dal.application.condition.lexer import ConditionLexer
from mp_dal.application.condition.lookup import ColumnLookup
from mp_dal.application.condition.parameterized import ParameterizedCondition
from mp_dal.application.condition.parser import ConditionParser


class ConditionMapper:
    """Parse (if needed), rename and normalise a condition.

    Raises a :class:`~mp_dal.kernel.errors.ConditionError` subclass when the
    condition does not lex or parse, a property does not resolve, or the
    parameters do not match the placeholders.
    """

    def __init__(self) -> None:
        self._lexer = ConditionLexer()
        self._parser = ConditionParser()

    def map(
        self,
        condition: Condition | str | dict[str, Any],
        lookup: ColumnLookup,
        params: Mapping[str, Any] | None = None,
    ) -> ParameterizedCondition:
        if not is_condition(condition):
            condition = self._parser.parse(self._lexer.parse(condition))  # type: ignore[arg-type]
        mapped = condition.rename(lookup.get_column)  # type: ignore[union-attr]
        return ParameterizedCondition.normalize(mapped, params)


__all__ = ["ConditionMapper"]
