"""SQLAlchemy adapter – SearchDao: paginated search over a joined entity graph.

When the shape joins child collections one top-level entity can span many
rows, so a page is computed in three statements on one transaction:

1. ``COUNT(DISTINCT pk)`` over the filtered join.
2. The page of distinct ids: ``pk`` grouped, ordered, limited.
3. Hydration: the full shape restricted to ``pk IN (ids)``.  The filter is
   not re-applied, so children that did not match it are still loaded.

A shape without joins has one row per entity and is paged directly.
"""
from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import distinct, func, select

from mp_dal.adapters.sqlalchemy.data_context import SqlAlchemyDataContext, SqlAlchemyTransaction
from mp_dal.adapters.sqlalchemy.query import SqlAlchemyQueryShape
from mp_dal.application.condition import ParameterizedCondition
from mp_dal.application.search import OrderBy, SearchResult, SortDirection
from mp_dal.application.uow import transactional
from mp_dal.kernel.errors import ValidationError
from mp_dal.kernel.metadata import EntityRegistry, QueryShape
from mp_dal.observability.logging import get_logger

T = TypeVar("T")

_log = get_logger(__name__)


class SearchDao(Generic[T]):
    def __init__(
        self,
        data_context: SqlAlchemyDataContext,
        registry: EntityRegistry,
        shape: QueryShape,
    ) -> None:
        self._data_context = data_context
        self._query = SqlAlchemyQueryShape(registry, shape)

    async def retrieve(
        self,
        offset: int,
        row_count: int,
        cond: ParameterizedCondition | None = None,
        order: Sequence[OrderBy] | None = None,
        *,
        tx: SqlAlchemyTransaction | None = None,
    ) -> SearchResult[T]:
        """Return one page of entities matching *cond*, sorted by *order*.

        *cond* and *order* are in storage terms (qualified columns).  Without
        an order the page is sorted by the primary key, ascending.  Raises
        :class:`~mp_dal.kernel.errors.ConfigurationError` when the entity's
        primary key is composite and either no order is given or the shape
        has joins.
        """
        if offset < 0:
            raise ValidationError('"offset" must be greater than or equal to 0.', field="offset")
        if row_count < 0:
            raise ValidationError('"rowCount" must be greater than or equal to 0.', field="rowCount")

        effective_order = self.default_order(order)
        if self._query.shape.has_joins:
            self._query.primary_key("paginating across a join")
            return await self._retrieve_distinct(offset, row_count, cond, effective_order, tx=tx)
        return await self._retrieve_direct(offset, row_count, cond, effective_order, tx=tx)

    def default_order(self, order: Sequence[OrderBy] | None) -> tuple[OrderBy, ...]:
        if order:
            return tuple(order)
        pk = self._query.meta.single_primary_key("ordering by the default (primary key) column")
        return (OrderBy(self._query.qualify(pk), SortDirection.ASC),)

    @transactional()
    async def _retrieve_distinct(
        self,
        offset: int,
        row_count: int,
        cond: ParameterizedCondition | None,
        order: tuple[OrderBy, ...],
        *,
        tx: SqlAlchemyTransaction,
    ) -> SearchResult[T]:
        query = self._query
        pk = query.primary_key("paginating across a join")
        session = tx.session

        count_stmt = query.where(query.apply_joins(select(func.count(distinct(pk))).select_from(query.root)), cond)
        count = (await session.execute(count_stmt)).scalar_one()
        _log.debug("search.count", entity=query.meta.name, count=count)
        if count == 0:
            return SearchResult.empty(offset, order)

        id_stmt = (
            query.where(query.apply_joins(select(pk).select_from(query.root)), cond)
            .group_by(pk)
            .order_by(*query.order_by(order, grouped=True))
            .offset(offset)
            .limit(row_count)
        )
        ids = list((await session.execute(id_stmt)).scalars().all())
        _log.debug("search.ids", entity=query.meta.name, offset=offset, ids=len(ids))
        if not ids:
            return SearchResult(count=count, offset=offset, row_count=0, entities=(), order=order)

        hydrate_stmt = (
            query.apply_joins(select(query.root))
            .options(*query.eager_options())
            .where(pk.in_(ids))
            .order_by(*query.order_by(order))
            .execution_options(populate_existing=True)
        )
        hydrated = (await session.execute(hydrate_stmt)).unique().scalars().all()

        pk_name = query.meta.single_primary_key("paginating across a join").name
        by_id: dict[Any, T] = {getattr(entity, pk_name): entity for entity in hydrated}
        entities = tuple(by_id[i] for i in ids if i in by_id)
        _log.debug("search.hydrated", entity=query.meta.name, requested=len(ids), hydrated=len(entities))

        return SearchResult(count=count, offset=offset, row_count=len(entities), entities=entities, order=order)

    @transactional()
    async def _retrieve_direct(
        self,
        offset: int,
        row_count: int,
        cond: ParameterizedCondition | None,
        order: tuple[OrderBy, ...],
        *,
        tx: SqlAlchemyTransaction,
    ) -> SearchResult[T]:
        query = self._query
        session = tx.session

        count_stmt = query.where(select(func.count()).select_from(query.root), cond)
        count = (await session.execute(count_stmt)).scalar_one()
        _log.debug("search.count", entity=query.meta.name, count=count)
        if count == 0:
            return SearchResult.empty(offset, order)

        page_stmt = (
            query.where(select(query.root), cond)
            .order_by(*query.order_by(order))
            .offset(offset)
            .limit(row_count)
        )
        entities = tuple((await session.execute(page_stmt)).scalars().all())
        return SearchResult(count=count, offset=offset, row_count=len(entities), entities=entities, order=order)


__all__ = ["SearchDao"]
