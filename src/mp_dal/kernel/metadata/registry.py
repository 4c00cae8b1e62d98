"""Schema metadata – EntityMeta, ColumnMeta, RelationMeta, EntityRegistry.

The registry is populated once at startup, either explicitly with
:class:`EntityMeta` instances or by reading SQLAlchemy mappers through
:meth:`EntityRegistry.register`.  After that every lookup is a plain dict
access.
"""
from __future__ import annotations

import dataclasses
from typing import Any

from mp_dal.kernel.errors import ConfigurationError


@dataclasses.dataclass(frozen=True)
class ColumnMeta:
    """A mapped column: attribute name on the model and name in storage."""

    name: str
    storage_name: str
    primary_key: bool = False


@dataclasses.dataclass(frozen=True)
class RelationMeta:
    """A relationship from one entity to another (``uselist`` for to-many)."""

    name: str
    target: str
    uselist: bool = True


@dataclasses.dataclass(frozen=True)
class EntityMeta:
    """Column and relation metadata for one entity type."""

    name: str
    model: type
    table: str
    columns: tuple[ColumnMeta, ...]
    relations: tuple[RelationMeta, ...] = ()

    @property
    def primary_key(self) -> tuple[ColumnMeta, ...]:
        return tuple(c for c in self.columns if c.primary_key)

    def single_primary_key(self, operation: str = "this operation") -> ColumnMeta:
        """Return the primary-key column, rejecting composite (or missing) keys."""
        pks = self.primary_key
        if len(pks) != 1:
            raise ConfigurationError(
                f'"{self.name}" has {len(pks)} primary-key columns; '
                f"{operation} requires exactly one.",
                detail={"entity": self.name, "primary_key": [c.name for c in pks]},
            )
        return pks[0]

    def column(self, name: str) -> ColumnMeta | None:
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def relation(self, name: str) -> RelationMeta | None:
        for rel in self.relations:
            if rel.name == name:
                return rel
        return None


class EntityRegistry:
    """Registry of :class:`EntityMeta` keyed by entity name and model class."""

    def __init__(self) -> None:
        self._by_name: dict[str, EntityMeta] = {}
        self._by_model: dict[type, EntityMeta] = {}

    def add(self, meta: EntityMeta) -> EntityMeta:
        if meta.name in self._by_name:
            raise ConfigurationError(f'Entity "{meta.name}" is already registered.')
        self._by_name[meta.name] = meta
        self._by_model[meta.model] = meta
        return meta

    def register(self, *models: type) -> list[EntityMeta]:
        """Read the SQLAlchemy mapper of each model and register its metadata."""
        from sqlalchemy import inspect as sa_inspect

        registered: list[EntityMeta] = []
        for model in models:
            mapper = sa_inspect(model)
            columns = tuple(
                ColumnMeta(
                    name=attr.key,
                    storage_name=attr.columns[0].name,
                    primary_key=bool(attr.columns[0].primary_key),
                )
                for attr in mapper.column_attrs
            )
            relations = tuple(
                RelationMeta(name=rel.key, target=rel.mapper.class_.__name__, uselist=bool(rel.uselist))
                for rel in mapper.relationships
            )
            registered.append(
                self.add(
                    EntityMeta(
                        name=model.__name__,
                        model=model,
                        table=mapper.local_table.name,
                        columns=columns,
                        relations=relations,
                    )
                )
            )
        return registered

    def get(self, entity: type | str) -> EntityMeta:
        meta: Any
        if isinstance(entity, str):
            meta = self._by_name.get(entity)
        else:
            meta = self._by_model.get(entity)
        if meta is None:
            name = entity if isinstance(entity, str) else entity.__name__
            raise ConfigurationError(f'Entity "{name}" is not registered.')
        return meta

    def __contains__(self, entity: object) -> bool:
        if isinstance(entity, str):
            return entity in self._by_name
        return entity in self._by_model

    def __len__(self) -> int:
        return len(self._by_name)


__all__ = ["ColumnMeta", "EntityMeta", "EntityRegistry", "RelationMeta"]
