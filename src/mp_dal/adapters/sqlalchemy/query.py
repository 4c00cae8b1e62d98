"""SQLAlchemy adapter – compile a QueryShape and conditions into statements.

Each alias of the shape becomes an :func:`~sqlalchemy.orm.aliased` entity,
so qualified columns such as ``pn.active`` resolve to
``getattr(<aliased PhoneNumber "pn">, "active")``.
"""
from __future__ import annotations

from typing import Any, Callable, Sequence

from sqlalchemy import Select, and_, func, not_, or_
from sqlalchemy.orm import aliased, contains_eager

from mp_dal.application.condition import (
    BooleanOperator,
    Comparison,
    ComparisonOperator,
    Condition,
    InComparison,
    InOperator,
    Logical,
    NullComparison,
    NullOperator,
    ParameterizedCondition,
)
from mp_dal.application.search.query import OrderBy, SortDirection
from mp_dal.kernel.errors import MappingError
from mp_dal.kernel.metadata import ColumnMeta, EntityMeta, EntityRegistry, QueryShape

_COMPARATORS: dict[ComparisonOperator, Callable[[Any, Any], Any]] = {
    ComparisonOperator.EQ: lambda col, value: col == value,
    ComparisonOperator.NEQ: lambda col, value: col != value,
    ComparisonOperator.LT: lambda col, value: col < value,
    ComparisonOperator.LTE: lambda col, value: col <= value,
    ComparisonOperator.GT: lambda col, value: col > value,
    ComparisonOperator.GTE: lambda col, value: col >= value,
    ComparisonOperator.LIKE: lambda col, value: col.like(value),
    ComparisonOperator.NOT_LIKE: lambda col, value: col.not_like(value),
}


class SqlAlchemyQueryShape:
    def __init__(self, registry: EntityRegistry, shape: QueryShape) -> None:
        self.shape = shape
        self.metas: dict[str, EntityMeta] = shape.resolve(registry)
        self.entities: dict[str, Any] = {
            alias: aliased(meta.model, name=alias) for alias, meta in self.metas.items()
        }

    @property
    def meta(self) -> EntityMeta:
        return self.metas[self.shape.alias]

    @property
    def root(self) -> Any:
        return self.entities[self.shape.alias]

    def qualify(self, column: ColumnMeta, alias: str | None = None) -> str:
        return f"{alias or self.shape.alias}.{column.name}"

    def column(self, qualified: str) -> Any:
        alias, _, name = qualified.partition(".")
        meta = self.metas.get(alias)
        if meta is None or meta.column(name) is None:
            raise MappingError(f'Column "{qualified}" is not part of this query.', detail={"column": qualified})
        return getattr(self.entities[alias], name)

    def primary_key(self, operation: str) -> Any:
        return getattr(self.root, self.meta.single_primary_key(operation).name)

    # Statement building -----------------------------------------------
    def apply_joins(self, stmt: Select[Any]) -> Select[Any]:
        for join in self.shape.joins:
            parent = self.entities[join.parent_alias]
            target = getattr(parent, join.relation).of_type(self.entities[join.alias])
            stmt = stmt.join(target, isouter=join.outer)
        return stmt

    def eager_options(self) -> list[Any]:
        """One ``contains_eager`` chain per leaf join, rooted at the top entity."""
        by_alias = {j.alias: j for j in self.shape.joins}
        parents = {j.parent_alias for j in self.shape.joins}
        options: list[Any] = []
        for join in self.shape.joins:
            if join.alias in parents:
                continue
            chain = [join]
            while chain[0].parent_alias in by_alias:
                chain.insert(0, by_alias[chain[0].parent_alias])
            loader: Any = None
            for link in chain:
                attr = getattr(self.entities[link.parent_alias], link.relation).of_type(self.entities[link.alias])
                loader = contains_eager(attr) if loader is None else loader.contains_eager(attr)
            options.append(loader)
        return options

    def where(self, stmt: Select[Any], cond: ParameterizedCondition | None) -> Select[Any]:
        if cond is None:
            return stmt
        return stmt.where(self.compile(cond.condition, cond.params))

    def compile(self, node: Condition, params: Any) -> Any:
        match node:
            case Logical(operator=BooleanOperator.AND, conditions=conditions):
                return and_(*(self.compile(c, params) for c in conditions))
            case Logical(operator=BooleanOperator.OR, conditions=conditions):
                return or_(*(self.compile(c, params) for c in conditions))
            case Comparison(operator=operator, column=column, parameter=parameter):
                return _COMPARATORS[operator](self.column(column), params[parameter])
            case NullComparison(operator=NullOperator.IS, column=column):
                return self.column(column).is_(None)
            case NullComparison(operator=NullOperator.ISNT, column=column):
                return self.column(column).is_not(None)
            case InComparison(operator=operator, column=column, placeholders=placeholders):
                clause = self.column(column).in_([params[p] for p in placeholders])
                return not_(clause) if operator is InOperator.NOT_IN else clause
        raise MappingError(f"Unsupported condition node {node!r}.")

    def order_by(self, order: Sequence[OrderBy], *, grouped: bool = False) -> list[Any]:
        """ORDER BY clauses for *order*, then any primary-key columns it lacks.

        With ``grouped`` (one row per top-level id) columns of joined
        entities are aggregated: ``MIN`` ascending, ``MAX`` descending.
        """
        clauses: list[Any] = []
        for o in order:
            col = self.column(o.property)
            ascending = o.direction is SortDirection.ASC
            if grouped and o.property.partition(".")[0] != self.shape.alias:
                col = func.min(col) if ascending else func.max(col)
            clauses.append(col.asc() if ascending else col.desc())

        ordered = {o.property for o in order}
        for pk in self.meta.primary_key:
            if self.qualify(pk) not in ordered:
                clauses.append(getattr(self.root, pk.name).asc())
        return clauses


__all__ = ["SqlAlchemyQueryShape"]
