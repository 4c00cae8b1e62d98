"""Condition parser – recursive descent over lexer tokens.

Grammar::

    condition   := "{" body "}"
    body        := BOOLEAN_OP ":" "[" condition ("," condition)* "]"
                 | COMPARISON_OP ":" "{" COLUMN ":" PARAMETER "}"
                 | NULL_OP ":" "{" COLUMN ":" NULL "}"
                 | IN_OP ":" "{" COLUMN ":" "[" PARAMETER ("," PARAMETER)* "]" "}"
"""
from __future__ import annotations

from typing import Any, Sequence

from mp_dal.application.condition.ast import (
    Comparison,
    Condition,
    InComparison,
    Logical,
    NullComparison,
)
from mp_dal.application.condition.lexer import ConditionLexer, Token, TokenType
from mp_dal.kernel.errors import ConditionParserError


class _TokenStream:
    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens = tokens
        self._index = 0

    def at_end(self) -> bool:
        return self._index >= len(self._tokens)

    def peek(self) -> Token | None:
        if self.at_end():
            return None
        return self._tokens[self._index]

    def next(self, expected: str) -> Token:
        token = self.peek()
        if token is None:
            raise ConditionParserError(f"Expected {expected} but reached the end of the condition.")
        self._index += 1
        return token

    def expect_char(self, char: str) -> Token:
        token = self.next(f'"{char}"')
        if token.type is not TokenType.CHAR or token.value != char:
            raise ConditionParserError(
                f'Expected "{char}" but found {token.describe()} at position {token.position}.'
            )
        return token

    def expect(self, token_type: TokenType) -> Token:
        token = self.next(token_type.value)
        if token.type is not token_type:
            raise ConditionParserError(
                f"Expected {token_type.value} but found {token.describe()} at position {token.position}."
            )
        return token

    def accept_char(self, char: str) -> bool:
        token = self.peek()
        if token is not None and token.type is TokenType.CHAR and token.value == char:
            self._index += 1
            return True
        return False


class ConditionParser:
    """Build a :data:`Condition` tree from tokens produced by :class:`ConditionLexer`."""

    def parse(self, tokens: Sequence[Token]) -> Condition:
        stream = _TokenStream(tokens)
        condition = self._condition(stream)
        extra = stream.peek()
        if extra is not None:
            raise ConditionParserError(
                f"Expected the end of the condition but found {extra.describe()} at position {extra.position}."
            )
        return condition

    def _condition(self, stream: _TokenStream) -> Condition:
        stream.expect_char("{")
        operator = stream.next("an operator")
        stream.expect_char(":")

        if operator.type is TokenType.BOOLEAN_OPERATOR:
            stream.expect_char("[")
            conditions = [self._condition(stream)]
            while stream.accept_char(","):
                conditions.append(self._condition(stream))
            stream.expect_char("]")
            node: Condition = Logical(operator.value, tuple(conditions))
        elif operator.type is TokenType.COMPARISON_OPERATOR:
            stream.expect_char("{")
            column = stream.expect(TokenType.COLUMN)
            stream.expect_char(":")
            parameter = stream.expect(TokenType.PARAMETER)
            stream.expect_char("}")
            node = Comparison(operator.value, column.value, parameter.value)
        elif operator.type is TokenType.NULL_COMPARISON_OPERATOR:
            stream.expect_char("{")
            column = stream.expect(TokenType.COLUMN)
            stream.expect_char(":")
            stream.expect(TokenType.NULL)
            stream.expect_char("}")
            node = NullComparison(operator.value, column.value)
        elif operator.type is TokenType.IN_COMPARISON_OPERATOR:
            stream.expect_char("{")
            column = stream.expect(TokenType.COLUMN)
            stream.expect_char(":")
            stream.expect_char("[")
            parameters = [stream.expect(TokenType.PARAMETER).value]
            while stream.accept_char(","):
                parameters.append(stream.expect(TokenType.PARAMETER).value)
            stream.expect_char("]")
            stream.expect_char("}")
            node = InComparison(operator.value, column.value, tuple(parameters))
        else:
            raise ConditionParserError(
                f"Expected an operator but found {operator.describe()} at position {operator.position}."
            )

        stream.expect_char("}")
        return node


def parse_condition(raw: str | dict[str, Any]) -> Condition:
    """Lex and parse *raw* in one step."""
    return ConditionParser().parse(ConditionLexer().parse(raw))


__all__ = ["ConditionParser", "parse_condition"]
