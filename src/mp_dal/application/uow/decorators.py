"""Application UoW – transactional decorator."""
from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

from mp_dal.application.uow.manager import TransactionCoordinator

F = TypeVar("F", bound=Callable[..., Any])


def transactional(coordinator_attribute: str = "_data_context") -> Callable[[F], F]:
    """Decorator: run an async method in a transaction and hand it ``tx=``.

    The wrapped method must accept a ``tx`` keyword argument.  A caller that
    already holds a transaction passes it through ``tx=`` and the method
    joins it.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(self: Any, *args: Any, tx: Any = None, **kwargs: Any) -> Any:
            coordinator: TransactionCoordinator = getattr(self, coordinator_attribute)

            async def run(active: Any) -> Any:
                return await func(self, *args, tx=active, **kwargs)

            return await coordinator.begin_transaction(run, tx)

        return wrapper  # type: ignore[return-value]

    return decorator


__all__ = ["transactional"]
