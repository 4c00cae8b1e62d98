"""SQLAlchemy adapter – StorageErrorClassifier.

Only two storage failures are reclassified into domain errors: foreign-key
violations and writes that affected no rows.  Everything else is returned
unchanged so the caller re-raises the original exception.
"""
from __future__ import annotations

import re

from mp_dal.kernel.errors import NotFoundError

_FOREIGN_KEY_PATTERNS = (
    re.compile(r"FOREIGN KEY constraint failed", re.IGNORECASE),
    re.compile(r"a foreign key constraint fails", re.IGNORECASE),
    re.compile(r"violates foreign key constraint", re.IGNORECASE),
)

_REFERENCED_TABLE_PATTERNS = (
    re.compile(r"REFERENCES [`\"]?(\w+)[`\"]?"),
    re.compile(r"is not present in table \"(\w+)\""),
)


class NoRowsAffectedError(Exception):
    """An UPDATE or DELETE matched no rows."""


class StorageErrorClassifier:
    def classify(self, exc: BaseException, entity: str, operation: str) -> BaseException:
        if isinstance(exc, NoRowsAffectedError):
            return NotFoundError(f'"{entity}" not found.', cause=exc)

        message = str(getattr(exc, "orig", None) or exc)
        if self.is_foreign_key_violation(message):
            table = self.referenced_table(message)
            reference = f'Invalid reference to "{table}."' if table else "Invalid reference."
            return NotFoundError(
                f'Failed to {operation} "{entity}."  {reference}',
                detail={"entity": entity, "operation": operation, "table": table},
                cause=exc,
            )
        return exc

    @staticmethod
    def is_foreign_key_violation(message: str) -> bool:
        return any(p.search(message) for p in _FOREIGN_KEY_PATTERNS)

    @staticmethod
    def referenced_table(message: str) -> str | None:
        for pattern in _REFERENCED_TABLE_PATTERNS:
            match = pattern.search(message)
            if match:
                return match.group(1)
        return None


__all__ = ["NoRowsAffectedError", "StorageErrorClassifier"]
