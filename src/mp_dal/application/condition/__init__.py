"""Application condition – filter grammar, column lookup and mapping."""
from mp_dal.application.condition.ast import (
    BooleanOperator,
    Comparison,
    ComparisonOperator,
    Condition,
    InComparison,
    InOperator,
    Logical,
    NullComparison,
    NullOperator,
    is_condition,
)
from mp_dal.application.condition.lexer import ConditionLexer, Token, TokenType
from mp_dal.application.condition.lookup import ColumnLookup
from mp_dal.application.condition.mapper import ConditionMapper
from mp_dal.application.condition.parameterized import ParameterizedCondition, Primitive
from mp_dal.application.condition.parser import ConditionParser, parse_condition

__all__ = [
    "BooleanOperator",
    "ColumnLookup",
    "Comparison",
    "ComparisonOperator",
    "Condition",
    "ConditionLexer",
    "ConditionMapper",
    "ConditionParser",
    "InComparison",
    "InOperator",
    "Logical",
    "NullComparison",
    "NullOperator",
    "ParameterizedCondition",
    "Primitive",
    "Token",
    "TokenType",
    "is_condition",
    "parse_condition",
]
