"""SQLAlchemy adapter – generic Dao: create, retrieve, update and delete.

Conditions passed to :meth:`Dao.retrieve` and :meth:`Dao.delete` are in
storage terms (``{"$eq": {"p.id": ":id"}}``).  Foreign-key violations and
writes that affect no rows surface as
:class:`~mp_dal.kernel.errors.NotFoundError`; other storage errors propagate
unchanged.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Generic, Mapping, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError

from mp_dal.adapters.sqlalchemy.data_context import SqlAlchemyDataContext, SqlAlchemyTransaction
from mp_dal.adapters.sqlalchemy.errors import NoRowsAffectedError, StorageErrorClassifier
from mp_dal.adapters.sqlalchemy.query import SqlAlchemyQueryShape
from mp_dal.application.condition import (
    Comparison,
    ComparisonOperator,
    Condition,
    ParameterizedCondition,
    is_condition,
    parse_condition,
)
from mp_dal.application.uow import transactional
from mp_dal.kernel.errors import DuplicateError, NotFoundError, ValidationError
from mp_dal.kernel.metadata import EntityRegistry, QueryShape
from mp_dal.observability.logging import get_logger

T = TypeVar("T")

_log = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class MutateResult:
    affected_rows: int


class Dao(Generic[T]):
    def __init__(
        self,
        data_context: SqlAlchemyDataContext,
        registry: EntityRegistry,
        shape: QueryShape,
        classifier: StorageErrorClassifier | None = None,
    ) -> None:
        self._data_context = data_context
        self._query = SqlAlchemyQueryShape(registry, shape)
        self._classifier = classifier or StorageErrorClassifier()

    @property
    def entity_name(self) -> str:
        return self._query.meta.name

    @transactional()
    async def create(self, model: T, *, tx: SqlAlchemyTransaction) -> T:
        """Insert *model*; its generated primary key is populated on return."""
        tx.session.add(model)
        try:
            await tx.session.flush()
        except IntegrityError as exc:
            raise self._classifier.classify(exc, self.entity_name, "create")
        _log.debug("dao.create", entity=self.entity_name)
        return model

    @transactional()
    async def retrieve(
        self,
        cond: ParameterizedCondition | Condition | dict[str, Any] | str | None = None,
        params: Mapping[str, Any] | None = None,
        *,
        tx: SqlAlchemyTransaction,
    ) -> list[T]:
        """Return every entity (full shape) matching *cond*, ordered by primary key."""
        query = self._query
        stmt = query.apply_joins(select(query.root)).options(*query.eager_options())
        stmt = query.where(stmt, self._normalize(cond, params)).order_by(*query.order_by(()))
        result = await tx.session.execute(stmt)
        return list(result.unique().scalars().all())

    @transactional()
    async def retrieve_by_id(self, id: Any, *, tx: SqlAlchemyTransaction) -> T:
        pk = self._query.meta.single_primary_key("retrieve_by_id")
        cond = ParameterizedCondition.normalize(
            Comparison(ComparisonOperator.EQ, self._query.qualify(pk), pk.name),
            {pk.name: id},
        )
        resources = await self.retrieve(cond, tx=tx)

        if not resources:
            raise NotFoundError(f'"{self.entity_name}" not found using id "{id}."')
        if len(resources) > 1:
            raise DuplicateError(
                f'Multiple "{self.entity_name}" resources found matching id "{id}."',
                field="id",
                value=id,
            )
        return resources[0]

    @transactional()
    async def update_model(self, model: T, *, tx: SqlAlchemyTransaction) -> T:
        """Update the columns set on *model*, matched by its primary key."""
        meta = self._query.meta
        pk = meta.single_primary_key("update_model")
        pk_value = getattr(model, pk.name, None)
        if pk_value is None:
            raise ValidationError(f'"{pk.name}" is required.', field=pk.name)

        state = vars(model)
        values = {c.name: state[c.name] for c in meta.columns if not c.primary_key and c.name in state}
        if not values:
            raise ValidationError(f'No "{self.entity_name}" columns were supplied for update.')

        stmt = (
            update(meta.model)
            .where(getattr(meta.model, pk.name) == pk_value)
            .values({getattr(meta.model, name): value for name, value in values.items()})
            .execution_options(synchronize_session=False)
        )
        try:
            result = await tx.session.execute(stmt)
        except IntegrityError as exc:
            raise self._classifier.classify(exc, self.entity_name, "update")

        if result.rowcount == 0:
            raise self._classifier.classify(
                NoRowsAffectedError("Update operation did not affect any rows."), self.entity_name, "update"
            )
        _log.debug("dao.update", entity=self.entity_name, id=pk_value)
        return model

    @transactional()
    async def delete_by_id(self, id: Any, *, tx: SqlAlchemyTransaction) -> MutateResult:
        meta = self._query.meta
        pk = meta.single_primary_key("delete_by_id")
        stmt = (
            delete(meta.model)
            .where(getattr(meta.model, pk.name) == id)
            .execution_options(synchronize_session=False)
        )
        result = await tx.session.execute(stmt)
        if result.rowcount == 0:
            raise self._classifier.classify(
                NoRowsAffectedError("Delete operation did not affect any rows."), self.entity_name, "delete"
            )
        _log.debug("dao.delete", entity=self.entity_name, id=id)
        return MutateResult(affected_rows=result.rowcount)

    @transactional()
    async def delete(
        self,
        cond: ParameterizedCondition | Condition | dict[str, Any] | str | None = None,
        params: Mapping[str, Any] | None = None,
        *,
        tx: SqlAlchemyTransaction,
    ) -> MutateResult:
        """Delete every top-level entity matching *cond* (all of them when ``None``)."""
        query = self._query
        meta = query.meta
        stmt = delete(meta.model).execution_options(synchronize_session=False)

        normalized = self._normalize(cond, params)
        if normalized is not None:
            pk = meta.single_primary_key("delete with a condition")
            ids = query.apply_joins(select(getattr(query.root, pk.name)).select_from(query.root))
            stmt = stmt.where(getattr(meta.model, pk.name).in_(query.where(ids, normalized)))

        result = await tx.session.execute(stmt)
        _log.debug("dao.delete", entity=self.entity_name, affected_rows=result.rowcount)
        return MutateResult(affected_rows=result.rowcount)

    def _normalize(
        self,
        cond: ParameterizedCondition | Condition | dict[str, Any] | str | None,
        params: Mapping[str, Any] | None,
    ) -> ParameterizedCondition | None:
        if cond is None or isinstance(cond, ParameterizedCondition):
            return cond
        if not is_condition(cond):
            if not cond:
                return None
            cond = parse_condition(cond)  # type: ignore[arg-type]
        return ParameterizedCondition.normalize(cond, params)  # type: ignore[arg-type]


__all__ = ["Dao", "MutateResult"]
