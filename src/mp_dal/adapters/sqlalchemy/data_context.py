"""SQLAlchemy adapter – SqlAlchemyDataContext and SqlAlchemyTransaction."""
from __future__ import annotations

import dataclasses
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from mp_dal.application.uow import TransactionCoordinator
from mp_dal.config.settings import DataAccessSettings
from mp_dal.adapters.sqlalchemy.session import SqlAlchemySessionFactory
from mp_dal.observability.logging import get_logger

R = TypeVar("R")

_log = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class SqlAlchemyTransaction:
    """Explicit transaction handle: the session bound to an open transaction."""

    session: AsyncSession


class SqlAlchemyDataContext(TransactionCoordinator):
    """Begin transactions on sessions from *session_factory*.

    Every statement issued through one :class:`SqlAlchemyTransaction` runs on
    the same connection.  ``isolation_level`` (e.g. ``"REPEATABLE READ"``) is
    set on that connection before the first statement.
    """

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        isolation_level: str | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._isolation_level = isolation_level

    @classmethod
    def from_settings(cls, settings: DataAccessSettings) -> "SqlAlchemyDataContext":
        return cls(SqlAlchemySessionFactory.from_settings(settings), settings.isolation_level)

    async def begin_transaction(
        self,
        fn: Callable[[SqlAlchemyTransaction], Awaitable[R]],
        tx: SqlAlchemyTransaction | None = None,
    ) -> R:
        if tx is not None:
            return await fn(tx)

        async with self._session_factory() as session:
            async with session.begin():
                if self._isolation_level is not None:
                    await session.connection(execution_options={"isolation_level": self._isolation_level})
                _log.debug("tx.begin", isolation_level=self._isolation_level)
                try:
                    result = await fn(SqlAlchemyTransaction(session))
                except Exception as exc:
                    _log.debug("tx.rollback", error=type(exc).__name__)
                    raise
            _log.debug("tx.commit")
            return result


__all__ = ["SqlAlchemyDataContext", "SqlAlchemyTransaction"]
