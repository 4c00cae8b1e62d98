"""Application search – SearchQuery value object, OrderBy, SortDirection."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Mapping

from mp_dal.kernel.errors import ValidationError

__all__ = ["OrderBy", "SearchQuery", "SortDirection"]


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclasses.dataclass(frozen=True)
class OrderBy:
    """Single sort criterion over a property (logical) or column (qualified)."""

    property: str
    direction: SortDirection = SortDirection.ASC

    @classmethod
    def from_dict(cls, value: Mapping[str, Any]) -> "OrderBy":
        return cls(property=value["property"], direction=SortDirection(value["direction"]))

    def to_dict(self) -> dict[str, str]:
        return {"property": self.property, "direction": self.direction.value}


@dataclasses.dataclass(frozen=True)
class SearchQuery:
    """A validated page request: window, filter, bindings and order."""

    offset: int = 0
    row_count: int = 10
    cond: dict[str, Any] | None = None
    params: dict[str, Any] | None = None
    order: tuple[OrderBy, ...] | None = None

    def __post_init__(self) -> None:
        for name in ("offset", "row_count"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f'"{name}" must be a valid integer.', field=name)
            if value < 0:
                raise ValidationError(f'"{name}" must be greater than or equal to 0.', field=name)
