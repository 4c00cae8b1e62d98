"""Application-layer errors – schema and usage mismatches."""

from __future__ import annotations

from mp_dal.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class ConfigurationError(ApplicationError):
    """The schema or wiring does not support the requested operation.

    Raised, for example, when a composite primary key is used where a single
    unique identifier is required.  Never caused by request data.
    """

    default_code = "configuration_error"


__all__ = ["ApplicationError", "ConfigurationError"]
