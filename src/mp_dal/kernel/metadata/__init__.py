"""Kernel metadata – entity registry and query shapes."""
from mp_dal.kernel.metadata.registry import ColumnMeta, EntityMeta, EntityRegistry, RelationMeta
from mp_dal.kernel.metadata.shape import JoinSpec, QueryShape

__all__ = ["ColumnMeta", "EntityMeta", "EntityRegistry", "JoinSpec", "QueryShape", "RelationMeta"]
