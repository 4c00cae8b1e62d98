"""ParameterizedCondition – a condition tree plus its parameter bindings."""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping, Union

from mp_dal.application.condition.ast import Condition
from mp_dal.kernel.errors import MappingError

Primitive = Union[bool, int, float, str, None]

PRIMITIVE_TYPES: tuple[type, ...] = (bool, int, float, str, type(None))


@dataclasses.dataclass(frozen=True)
class ParameterizedCondition:
    """A condition with every placeholder bound and every binding referenced.

    Build instances with :meth:`normalize`, which enforces both directions.
    """

    condition: Condition
    params: Mapping[str, Primitive] = dataclasses.field(default_factory=dict)

    @classmethod
    def normalize(
        cls,
        condition: Condition,
        params: Mapping[str, Any] | None = None,
    ) -> "ParameterizedCondition":
        params = dict(params or {})
        referenced = set(condition.parameters())

        missing = sorted(referenced - params.keys())
        if missing:
            raise MappingError(
                f'Replacement value for parameter "{missing[0]}" not present.',
                detail={"missing": missing},
            )

        unused = sorted(params.keys() - referenced)
        if unused:
            raise MappingError(
                f'Parameter "{unused[0]}" is not referenced in the condition.',
                detail={"unused": unused},
            )

        for name, value in params.items():
            if not isinstance(value, PRIMITIVE_TYPES):
                raise MappingError(
                    f'Parameter "{name}" must be a Boolean, Number, String, or null.',
                    detail={"parameter": name},
                )

        return cls(condition=condition, params=params)

    def to_dict(self) -> dict[str, Any]:
        return self.condition.to_dict()


__all__ = ["PRIMITIVE_TYPES", "ParameterizedCondition", "Primitive"]
