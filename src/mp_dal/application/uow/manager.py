"""Application UoW – TransactionCoordinator port."""
from __future__ import annotations

import abc
from typing import Any, Awaitable, Callable, TypeVar

R = TypeVar("R")


class TransactionCoordinator(abc.ABC):
    """Port: run an async function inside a transaction.

    Implementations pass an explicit transaction handle to *fn*.  When *tx*
    is already a handle the function runs inside it and no new transaction
    is started; otherwise a transaction is begun, committed when *fn*
    returns and rolled back (then re-raised) when it fails.
    """

    @abc.abstractmethod
    async def begin_transaction(
        self,
        fn: Callable[[Any], Awaitable[R]],
        tx: Any | None = None,
    ) -> R: ...


__all__ = ["TransactionCoordinator"]
