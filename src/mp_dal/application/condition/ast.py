"""Condition tree – tagged union of comparison and logical nodes.

Wire form (JSON object)::

    {"$and": [
        {"$eq": {"name": ":name"}},
        {"$in": {"phoneNumbers.type": [":home", ":mobile"]}},
        {"$is": {"deletedAt": null}},
    ]}

Placeholders are stored without their leading colon.
"""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Callable, Iterator, Union


class BooleanOperator(str, Enum):
    AND = "$and"
    OR = "$or"


class ComparisonOperator(str, Enum):
    EQ = "$eq"
    NEQ = "$neq"
    LT = "$lt"
    LTE = "$lte"
    GT = "$gt"
    GTE = "$gte"
    LIKE = "$like"
    NOT_LIKE = "$notLike"


class NullOperator(str, Enum):
    IS = "$is"
    ISNT = "$isnt"


class InOperator(str, Enum):
    IN = "$in"
    NOT_IN = "$notIn"


@dataclasses.dataclass(frozen=True)
class Comparison:
    """``column <op> :parameter``."""

    operator: ComparisonOperator
    column: str
    parameter: str

    def columns(self) -> Iterator[str]:
        yield self.column

    def parameters(self) -> Iterator[str]:
        yield self.parameter

    def rename(self, fn: Callable[[str], str]) -> "Comparison":
        return dataclasses.replace(self, column=fn(self.column))

    def to_dict(self) -> dict[str, Any]:
        return {self.operator.value: {self.column: f":{self.parameter}"}}


@dataclasses.dataclass(frozen=True)
class NullComparison:
    """``column IS [NOT] NULL``."""

    operator: NullOperator
    column: str

    def columns(self) -> Iterator[str]:
        yield self.column

    def parameters(self) -> Iterator[str]:
        return iter(())

    def rename(self, fn: Callable[[str], str]) -> "NullComparison":
        return dataclasses.replace(self, column=fn(self.column))

    def to_dict(self) -> dict[str, Any]:
        return {self.operator.value: {self.column: None}}


@dataclasses.dataclass(frozen=True)
class InComparison:
    """``column [NOT] IN (:p1, :p2, ...)``."""

    operator: InOperator
    column: str
    placeholders: tuple[str, ...]

    def columns(self) -> Iterator[str]:
        yield self.column

    def parameters(self) -> Iterator[str]:
        return iter(self.placeholders)

    def rename(self, fn: Callable[[str], str]) -> "InComparison":
        return dataclasses.replace(self, column=fn(self.column))

    def to_dict(self) -> dict[str, Any]:
        return {self.operator.value: {self.column: [f":{p}" for p in self.placeholders]}}


@dataclasses.dataclass(frozen=True)
class Logical:
    """``cond AND cond ...`` / ``cond OR cond ...`` (at least one operand)."""

    operator: BooleanOperator
    conditions: tuple["Condition", ...]

    def columns(self) -> Iterator[str]:
        for cond in self.conditions:
            yield from cond.columns()

    def parameters(self) -> Iterator[str]:
        for cond in self.conditions:
            yield from cond.parameters()

    def rename(self, fn: Callable[[str], str]) -> "Logical":
        return dataclasses.replace(self, conditions=tuple(c.rename(fn) for c in self.conditions))

    def to_dict(self) -> dict[str, Any]:
        return {self.operator.value: [c.to_dict() for c in self.conditions]}


Condition = Union[Comparison, NullComparison, InComparison, Logical]

CONDITION_TYPES: tuple[type, ...] = (Comparison, NullComparison, InComparison, Logical)


def is_condition(value: object) -> bool:
    return isinstance(value, CONDITION_TYPES)


__all__ = [
    "CONDITION_TYPES",
    "BooleanOperator",
    "Comparison",
    "ComparisonOperator",
    "Condition",
    "InComparison",
    "InOperator",
    "Logical",
    "NullComparison",
    "NullOperator",
    "is_condition",
]
