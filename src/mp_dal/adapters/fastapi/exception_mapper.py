"""FastAPI adapter – FastAPIExceptionMapper."""
from __future__ import annotations

from typing import Any, Callable

from fastapi.responses import JSONResponse

from mp_dal.kernel.errors import BaseError, ConflictError, NotFoundError, ValidationError
from mp_dal.observability.logging import get_logger

_log = get_logger(__name__)


class FastAPIExceptionMapper:
    """Register mp_dal error → HTTP status-code mappings on a FastAPI app.

    Mappings
    --------
    ``ValidationError``   → 400
    ``NotFoundError``     → 404
    ``ConflictError``     → 409 (includes ``DuplicateError``)
    anything else         → 500, logged, with a generic body
    """

    unhandled_body: dict[str, str] = {
        "code": "unhandled_error",
        "message": "Oops, an error occurred.  The software development team has been notified.",
    }

    def __init__(self) -> None:
        self._map: list[tuple[type[Exception], int]] = [
            (ValidationError, 400),
            (NotFoundError, 404),
            (ConflictError, 409),
        ]

    def register(self, app: Any) -> None:
        """Register all error handlers on a ``FastAPI`` or ``Starlette`` app."""
        for exc_type, status in self._map:
            app.add_exception_handler(exc_type, self._make_handler(status))
        app.add_exception_handler(Exception, self.on_unhandled_error)

    def _make_handler(self, status: int) -> Callable[[Any, Any], Any]:
        def handler(request: Any, exc: Any) -> Any:  # noqa: ARG001
            body = exc.to_dict() if isinstance(exc, BaseError) else {"code": "error", "message": str(exc)}
            return JSONResponse(status_code=status, content=body)

        return handler

    def on_unhandled_error(self, request: Any, exc: Exception) -> Any:
        """Log the error and answer 500.  Override to add application-specific reporting."""
        _log.error(
            "http.unhandled_error",
            path=str(getattr(request, "url", "")),
            error=type(exc).__name__,
            detail=exc.to_dict() if isinstance(exc, BaseError) else str(exc),
        )
        return JSONResponse(status_code=500, content=self.unhandled_body)


__all__ = ["FastAPIExceptionMapper"]
