"""Application search – SearchDao port and SearchService."""
from __future__ import annotations

from typing import Any, Generic, Mapping, Protocol, Sequence, TypeVar, runtime_checkable

from mp_dal.application.condition import ColumnLookup, ConditionMapper, ParameterizedCondition
from mp_dal.application.search.query import OrderBy, SearchQuery
from mp_dal.application.search.result import SearchResult
from mp_dal.kernel.errors import ConditionError, ValidationError
from mp_dal.observability.logging import get_logger

T = TypeVar("T")

__all__ = ["SearchDaoPort", "SearchService"]

_log = get_logger(__name__)


@runtime_checkable
class SearchDaoPort(Protocol[T]):
    async def retrieve(
        self,
        offset: int,
        row_count: int,
        cond: ParameterizedCondition | None = None,
        order: Sequence[OrderBy] | None = None,
        *,
        tx: Any = None,
    ) -> SearchResult[T]: ...


class SearchService(Generic[T]):
    """Map logical conditions and order to storage columns, then search.

    Never touches storage itself; all reads go through the injected dao.
    """

    def __init__(self, dao: SearchDaoPort[T], lookup: ColumnLookup) -> None:
        self._dao = dao
        self._lookup = lookup
        self._mapper = ConditionMapper()

    async def retrieve(
        self,
        offset: int = 0,
        row_count: int = 10,
        cond: dict[str, Any] | str | None = None,
        params: Mapping[str, Any] | None = None,
        order: Sequence[OrderBy] | None = None,
        *,
        tx: Any = None,
    ) -> SearchResult[T]:
        mapped_cond = self.map_condition(cond, params)
        mapped_order = self.map_order(order)
        _log.debug(
            "search.retrieve",
            offset=offset,
            row_count=row_count,
            filtered=mapped_cond is not None,
            order=[o.to_dict() for o in mapped_order],
        )
        return await self._dao.retrieve(offset, row_count, mapped_cond, mapped_order, tx=tx)

    async def search(self, query: SearchQuery, *, tx: Any = None) -> SearchResult[T]:
        return await self.retrieve(
            query.offset,
            query.row_count,
            query.cond,
            query.params,
            query.order,
            tx=tx,
        )

    def map_condition(
        self,
        cond: dict[str, Any] | str | None,
        params: Mapping[str, Any] | None = None,
    ) -> ParameterizedCondition | None:
        """Rename the condition's properties to columns (``ValidationError`` on ``cond``)."""
        if not cond:
            return None
        try:
            return self._mapper.map(cond, self._lookup, params)
        except ConditionError as exc:
            raise ValidationError(exc.message, field="cond", cause=exc) from exc

    def map_order(self, order: Sequence[OrderBy] | None = None) -> list[OrderBy]:
        """Rename each order property to a column (``ValidationError`` on ``order``)."""
        try:
            return [OrderBy(self._lookup.get_column(o.property), o.direction) for o in order or ()]
        except ConditionError as exc:
            raise ValidationError(exc.message, field="order", cause=exc) from exc
