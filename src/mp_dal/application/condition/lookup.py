"""ColumnLookup – logical property names to fully-qualified storage columns.

For the shape ``Person p LEFT JOIN p.phone_numbers pn``:

===================================  ======================
logical property                     column
===================================  ======================
``first_name``                       ``p.first_name``
``phone_numbers.active``             ``pn.active``
``active`` (only on PhoneNumber)     ``pn.active``
===================================  ======================
"""
from __future__ import annotations

from mp_dal.kernel.errors import MappingError
from mp_dal.kernel.metadata import EntityRegistry, QueryShape


class ColumnLookup:
    def __init__(self, registry: EntityRegistry, shape: QueryShape) -> None:
        resolved = shape.resolve(registry)
        paths: dict[str, str] = {shape.alias: ""}
        for join in shape.joins:
            parent_path = paths[join.parent_alias]
            paths[join.alias] = f"{parent_path}.{join.relation}" if parent_path else join.relation

        self._columns: dict[str, str] = {}
        self._properties: dict[str, str] = {}
        self._joined: dict[str, list[str]] = {}

        for alias, meta in resolved.items():
            path = paths[alias]
            for col in meta.columns:
                prop = f"{path}.{col.name}" if path else col.name
                column = f"{alias}.{col.name}"
                self._columns[prop] = column
                self._properties[column] = prop
                if alias != shape.alias:
                    self._joined.setdefault(col.name, []).append(column)

    def get_column(self, prop: str) -> str:
        """Return the qualified column for *prop* or raise :class:`MappingError`."""
        if not isinstance(prop, str) or not prop:
            raise MappingError(f"Property {prop!r} is not a valid property name.")

        column = self._columns.get(prop)
        if column is not None:
            return column

        if "." not in prop:
            candidates = self._joined.get(prop, [])
            if len(candidates) == 1:
                return candidates[0]
            if len(candidates) > 1:
                raise MappingError(
                    f'Property "{prop}" is ambiguous; qualify it with one of: '
                    + ", ".join(f'"{self._properties[c]}"' for c in candidates)
                    + ".",
                    detail={"property": prop},
                )

        raise MappingError(f'Property "{prop}" is not a valid property.', detail={"property": prop})

    def get_property(self, column: str) -> str:
        """Reverse of :meth:`get_column`: the canonical logical name of *column*."""
        try:
            return self._properties[column]
        except KeyError:
            raise MappingError(f'Column "{column}" is not part of this query.') from None

    def properties(self) -> list[str]:
        return list(self._columns)


__all__ = ["ColumnLookup"]
