"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   ├── ValidationError
    │   ├── NotFoundError
    │   ├── ConflictError
    │   │   └── DuplicateError
    │   └── ConditionError
    │       ├── ConditionLexerError
    │       ├── ConditionParserError
    │       └── MappingError
    └── ApplicationError         (application.py)
        └── ConfigurationError
"""

from mp_dal.kernel.errors.application import ApplicationError, ConfigurationError
from mp_dal.kernel.errors.base import BaseError
from mp_dal.kernel.errors.domain import (
    ConditionError,
    ConditionLexerError,
    ConditionParserError,
    ConflictError,
    DomainError,
    DuplicateError,
    MappingError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "ConditionError",
    "ConditionLexerError",
    "ConditionParserError",
    "ConfigurationError",
    "ConflictError",
    "DomainError",
    "DuplicateError",
    "MappingError",
    "NotFoundError",
    "ValidationError",
]
