"""Domain errors – request data that cannot be honoured."""

from __future__ import annotations

from typing import Any

from mp_dal.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a request cannot be honoured for a data reason."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Input data does not meet validation rules.

    ``field`` names the offending input when a single field is at fault.
    ``errors`` is a list of field-level failures (``{"field", "message"}``)
    when several fields were checked in one pass.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.field = field
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        if self.field is not None:
            base["field"] = self.field
        base["errors"] = self.errors
        return base


class NotFoundError(DomainError):
    """The requested resource does not exist."""

    default_code = "not_found"


class ConflictError(DomainError):
    """The operation conflicts with existing state."""

    default_code = "conflict"


class DuplicateError(ConflictError):
    """A lookup that must be unique matched more than one record."""

    default_code = "duplicate"

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class ConditionError(DomainError):
    """A filter condition could not be lexed, parsed or mapped."""

    default_code = "condition_error"


class ConditionLexerError(ConditionError):
    """The condition contains a token that is not part of the grammar."""

    default_code = "condition_lexer_error"


class ConditionParserError(ConditionError):
    """The condition's tokens do not form a valid condition tree."""

    default_code = "condition_parser_error"


class MappingError(ConditionError):
    """A property or parameter could not be mapped to storage terms."""

    default_code = "mapping_error"


__all__ = [
    "ConditionError",
    "ConditionLexerError",
    "ConditionParserError",
    "ConflictError",
    "DomainError",
    "DuplicateError",
    "MappingError",
    "NotFoundError",
    "ValidationError",
]
