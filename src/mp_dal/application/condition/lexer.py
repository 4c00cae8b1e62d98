"""Condition lexer – turn a JSON condition (string or object) into tokens.

Objects are serialised to JSON first, so both forms go through the same
tokenizer.  Only the subset of JSON the condition grammar uses is accepted:
strings, ``null`` and the punctuation characters.  Strings are classified as
operators (``$eq``), parameters (``:name``) or columns (anything else).
"""
from __future__ import annotations

import dataclasses
import json
import re
from enum import Enum
from typing import Any

from mp_dal.application.condition.ast import BooleanOperator, ComparisonOperator, InOperator, NullOperator
from mp_dal.kernel.errors import ConditionLexerError


class TokenType(str, Enum):
    CHAR = "char"
    BOOLEAN_OPERATOR = "boolean-operator"
    COMPARISON_OPERATOR = "comparison-operator"
    NULL_COMPARISON_OPERATOR = "null-comparison-operator"
    IN_COMPARISON_OPERATOR = "in-comparison-operator"
    PARAMETER = "parameter"
    COLUMN = "column"
    NULL = "null"


@dataclasses.dataclass(frozen=True)
class Token:
    type: TokenType
    value: Any
    position: int

    def describe(self) -> str:
        if self.type is TokenType.CHAR:
            return f'"{self.value}"'
        if self.type is TokenType.PARAMETER:
            return f'parameter ":{self.value}"'
        if self.type is TokenType.NULL:
            return "null"
        return f'{self.type.value} "{self.value}"'


_TOKEN_RE = re.compile(
    r"""
      (?P<ws>\s+)
    | (?P<char>[{}\[\]:,])
    | (?P<string>"(?:[^"\\]|\\.)*")
    | (?P<null>null\b)
    """,
    re.VERBOSE,
)

_OPERATORS: dict[str, tuple[TokenType, Enum]] = {}
for _type, _enum in (
    (TokenType.BOOLEAN_OPERATOR, BooleanOperator),
    (TokenType.COMPARISON_OPERATOR, ComparisonOperator),
    (TokenType.NULL_COMPARISON_OPERATOR, NullOperator),
    (TokenType.IN_COMPARISON_OPERATOR, InOperator),
):
    for _member in _enum:  # type: ignore[attr-defined]
        _OPERATORS[_member.value] = (_type, _member)


class ConditionLexer:
    """Tokenize a condition.  Raises :class:`ConditionLexerError` on bad input."""

    def parse(self, condition: str | dict[str, Any] | list[Any]) -> list[Token]:
        if isinstance(condition, str):
            text = condition
        elif isinstance(condition, (dict, list)):
            try:
                text = json.dumps(condition)
            except (TypeError, ValueError) as exc:
                raise ConditionLexerError(f"Condition is not JSON-serialisable: {exc}", cause=exc) from exc
        else:
            raise ConditionLexerError(
                f"Condition must be a JSON string or an object, not {type(condition).__name__}."
            )

        tokens: list[Token] = []
        pos = 0
        while pos < len(text):
            match = _TOKEN_RE.match(text, pos)
            if match is None:
                raise ConditionLexerError(f"Unexpected character {text[pos]!r} at position {pos}.")
            kind = match.lastgroup
            if kind == "char":
                tokens.append(Token(TokenType.CHAR, match.group(), pos))
            elif kind == "null":
                tokens.append(Token(TokenType.NULL, None, pos))
            elif kind == "string":
                try:
                    value = json.loads(match.group())
                except ValueError as exc:
                    raise ConditionLexerError(f"Invalid string at position {pos}: {exc}", cause=exc) from exc
                tokens.append(self._classify(value, pos))
            pos = match.end()
        return tokens

    def _classify(self, value: str, pos: int) -> Token:
        if value.startswith("$"):
            try:
                token_type, operator = _OPERATORS[value]
            except KeyError:
                raise ConditionLexerError(f'Unknown operator "{value}" at position {pos}.') from None
            return Token(token_type, operator, pos)
        if value.startswith(":"):
            if len(value) == 1:
                raise ConditionLexerError(f"Empty parameter name at position {pos}.")
            return Token(TokenType.PARAMETER, value[1:], pos)
        if not value:
            raise ConditionLexerError(f"Empty column name at position {pos}.")
        return Token(TokenType.COLUMN, value, pos)


__all__ = ["ConditionLexer", "Token", "TokenType"]
