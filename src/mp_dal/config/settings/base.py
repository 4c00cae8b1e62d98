"""Config settings – Settings base class and DataAccessSettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from mp_dal.config.validation import InvalidSettingValueError

_ISOLATION_LEVELS = frozenset(
    {"READ UNCOMMITTED", "READ COMMITTED", "REPEATABLE READ", "SERIALIZABLE"}
)


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class DataAccessSettings(Settings):
    """Engine and search defaults, read from ``DAL_*`` variables.

    ``isolation_level`` is applied to every transaction begun by the data
    context; use ``REPEATABLE READ`` or stricter on servers whose default
    would let the count and page queries see different snapshots.
    """

    _prefix: ClassVar[str] = "DAL"

    database_url: str
    echo: bool = False
    isolation_level: str | None = None
    default_row_count: int = 10

    def _validate(self) -> None:
        if not self.database_url:
            raise InvalidSettingValueError("database_url", self.database_url, "must not be empty")
        if self.isolation_level is not None and self.isolation_level.upper() not in _ISOLATION_LEVELS:
            raise InvalidSettingValueError(
                "isolation_level", self.isolation_level, f"must be one of {sorted(_ISOLATION_LEVELS)}"
            )
        if self.default_row_count < 0:
            raise InvalidSettingValueError("default_row_count", self.default_row_count, "must be >= 0")


__all__ = ["DataAccessSettings", "Settings"]
