"""Schema metadata – QueryShape: a top-level entity, its alias and its joins.

Usage::

    shape = (
        QueryShape.from_(Person, "p")
        .left_outer_join("pn", "p.phone_numbers")
    )

Shapes are immutable; each join returns a new shape.
"""
from __future__ import annotations

import dataclasses

from mp_dal.kernel.errors import ConfigurationError
from mp_dal.kernel.metadata.registry import EntityMeta, EntityRegistry


@dataclasses.dataclass(frozen=True)
class JoinSpec:
    """Join ``parent_alias.relation`` and expose the target as ``alias``."""

    alias: str
    parent_alias: str
    relation: str
    outer: bool = True


@dataclasses.dataclass(frozen=True)
class QueryShape:
    entity: type
    alias: str
    joins: tuple[JoinSpec, ...] = ()

    @classmethod
    def from_(cls, entity: type, alias: str) -> "QueryShape":
        if not alias or "." in alias:
            raise ConfigurationError(f'Invalid alias "{alias}".')
        return cls(entity=entity, alias=alias)

    def left_outer_join(self, alias: str, path: str) -> "QueryShape":
        return self._join(alias, path, outer=True)

    def inner_join(self, alias: str, path: str) -> "QueryShape":
        return self._join(alias, path, outer=False)

    def _join(self, alias: str, path: str, *, outer: bool) -> "QueryShape":
        if not alias or "." in alias:
            raise ConfigurationError(f'Invalid alias "{alias}".')
        if alias in self.aliases:
            raise ConfigurationError(f'Alias "{alias}" is already used in this query.')
        parent_alias, sep, relation = path.partition(".")
        if not sep or not relation or "." in relation:
            raise ConfigurationError(f'Join path "{path}" must have the form "<alias>.<relation>".')
        if parent_alias not in self.aliases:
            raise ConfigurationError(f'Join path "{path}" references unknown alias "{parent_alias}".')
        join = JoinSpec(alias=alias, parent_alias=parent_alias, relation=relation, outer=outer)
        return dataclasses.replace(self, joins=self.joins + (join,))

    @property
    def aliases(self) -> tuple[str, ...]:
        return (self.alias, *(j.alias for j in self.joins))

    @property
    def has_joins(self) -> bool:
        return bool(self.joins)

    def resolve(self, registry: EntityRegistry) -> dict[str, EntityMeta]:
        """Map every alias in the shape to the metadata of the entity it names."""
        resolved: dict[str, EntityMeta] = {self.alias: registry.get(self.entity)}
        for join in self.joins:
            parent = resolved[join.parent_alias]
            rel = parent.relation(join.relation)
            if rel is None:
                raise ConfigurationError(
                    f'"{parent.name}" has no relation "{join.relation}" (alias "{join.alias}").'
                )
            resolved[join.alias] = registry.get(rel.target)
        return resolved


__all__ = ["JoinSpec", "QueryShape"]
