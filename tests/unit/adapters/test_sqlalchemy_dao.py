"""Unit tests for the SQLAlchemy data context, Dao and storage error classification.

Uses an in-memory SQLite database via *aiosqlite* with foreign keys enforced.
"""
from __future__ import annotations

import asyncio

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from mp_dal.adapters.sqlalchemy import (
    Dao,
    MutateResult,
    NoRowsAffectedError,
    SqlAlchemyDataContext,
    SqlAlchemySessionFactory,
    StorageErrorClassifier,
)
from mp_dal.config.settings import DataAccessSettings
from mp_dal.kernel.errors import DuplicateError, NotFoundError, ValidationError
from mp_dal.kernel.metadata import QueryShape
from mp_dal.testing import (
    Call,
    Person,
    PhoneNumber,
    build_registry,
    create_engine_with_schema,
    make_session_factory,
    seed_people,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


async def _setup():
    engine = await create_engine_with_schema()
    sf = make_session_factory(engine)
    await seed_people(sf)
    return engine, sf, SqlAlchemyDataContext(sf)


def _people(ctx: SqlAlchemyDataContext) -> Dao[Person]:
    return Dao(ctx, build_registry(), QueryShape.from_(Person, "p").left_outer_join("pn", "p.phone_numbers"))


async def _count(sf, model) -> int:
    async with sf() as session:
        return (await session.execute(select(func.count()).select_from(model))).scalar_one()


# ---------------------------------------------------------------------------
# SqlAlchemySessionFactory
# ---------------------------------------------------------------------------


class TestSessionFactory:
    def test_from_settings(self) -> None:
        factory = SqlAlchemySessionFactory.from_settings(
            DataAccessSettings(database_url="sqlite+aiosqlite:///:memory:")
        )

        async def run() -> None:
            session = factory()
            assert session is not None
            await session.close()
            await factory.dispose()

        asyncio.run(run())


# ---------------------------------------------------------------------------
# SqlAlchemyDataContext
# ---------------------------------------------------------------------------


class TestDataContext:
    def test_commits_on_success(self) -> None:
        async def run() -> None:
            engine, sf, ctx = await _setup()

            async def add(tx):
                tx.session.add(Person(id=4, first_name="Di", last_name="Dunn"))
                return "ok"

            assert await ctx.begin_transaction(add) == "ok"
            assert await _count(sf, Person) == 4
            await engine.dispose()

        asyncio.run(run())

    def test_rolls_back_on_error(self) -> None:
        async def run() -> None:
            engine, sf, ctx = await _setup()

            async def add_then_fail(tx):
                tx.session.add(Person(id=4, first_name="Di", last_name="Dunn"))
                await tx.session.flush()
                raise RuntimeError("boom")

            with pytest.raises(RuntimeError):
                await ctx.begin_transaction(add_then_fail)
            assert await _count(sf, Person) == 3
            await engine.dispose()

        asyncio.run(run())

    def test_passed_transaction_is_reused(self) -> None:
        async def run() -> None:
            engine, sf, ctx = await _setup()
            people = _people(ctx)

            async def work(tx):
                await people.create(Person(id=4, first_name="Di", last_name="Dunn"), tx=tx)
                found = await people.retrieve_by_id(4, tx=tx)
                assert found.first_name == "Di"
                raise RuntimeError("undo")

            with pytest.raises(RuntimeError):
                await ctx.begin_transaction(work)
            assert await _count(sf, Person) == 3
            await engine.dispose()

        asyncio.run(run())

    def test_isolation_level(self) -> None:
        async def run() -> None:
            engine, sf, _ = await _setup()
            ctx = SqlAlchemyDataContext(sf, isolation_level="SERIALIZABLE")
            assert len(await _people(ctx).retrieve()) == 3
            await engine.dispose()

        asyncio.run(run())


# ---------------------------------------------------------------------------
# Dao
# ---------------------------------------------------------------------------


class TestDao:
    def test_create_and_retrieve_by_id(self) -> None:
        async def run() -> None:
            engine, _, ctx = await _setup()
            people = _people(ctx)
            created = await people.create(Person(id=4, first_name="Di", last_name="Dunn"))
            assert created.id == 4
            found = await people.retrieve_by_id(4)
            assert (found.first_name, found.phone_numbers) == ("Di", [])
            await engine.dispose()

        asyncio.run(run())

    def test_retrieve_loads_full_shape(self) -> None:
        async def run() -> None:
            engine, _, ctx = await _setup()
            people = await _people(ctx).retrieve()
            assert [p.id for p in people] == [1, 2, 3]
            assert len(people[0].phone_numbers) == 2
            await engine.dispose()

        asyncio.run(run())

    def test_retrieve_with_condition(self) -> None:
        async def run() -> None:
            engine, _, ctx = await _setup()
            people = _people(ctx)
            found = await people.retrieve({"$eq": {"p.last_name": ":n"}}, {"n": "Burr"})
            assert [p.first_name for p in found] == ["Bob"]
            assert await people.retrieve('{"$eq": {"pn.phone_number": ":n"}}', {"n": "none"}) == []
            await engine.dispose()

        asyncio.run(run())

    def test_retrieve_by_id_not_found(self) -> None:
        async def run() -> None:
            engine, _, ctx = await _setup()
            with pytest.raises(NotFoundError) as exc_info:
                await _people(ctx).retrieve_by_id(99)
            assert exc_info.value.message == '"Person" not found using id "99."'
            await engine.dispose()

        asyncio.run(run())

    def test_retrieve_by_id_duplicate(self) -> None:
        class TwoMatches(Dao):
            async def retrieve(self, cond=None, params=None, *, tx=None):
                return [object(), object()]

        async def run() -> None:
            engine, _, ctx = await _setup()
            dao = TwoMatches(ctx, build_registry(), QueryShape.from_(Person, "p"))
            with pytest.raises(DuplicateError) as exc_info:
                await dao.retrieve_by_id(1)
            assert exc_info.value.field == "id"
            await engine.dispose()

        asyncio.run(run())

    def test_create_with_invalid_reference(self) -> None:
        async def run() -> None:
            engine, _, ctx = await _setup()
            phones = Dao(ctx, build_registry(), QueryShape.from_(PhoneNumber, "pn"))
            with pytest.raises(NotFoundError) as exc_info:
                await phones.create(PhoneNumber(id=99, person_id=999, phone_number="555-9999", active=True))
            assert exc_info.value.message.startswith('Failed to create "PhoneNumber."')
            await engine.dispose()

        asyncio.run(run())

    def test_update_model(self) -> None:
        async def run() -> None:
            engine, _, ctx = await _setup()
            people = _people(ctx)
            await people.update_model(Person(id=2, first_name="Robert"))
            found = await people.retrieve_by_id(2)
            assert (found.first_name, found.last_name) == ("Robert", "Burr")
            await engine.dispose()

        asyncio.run(run())

    def test_update_model_errors(self) -> None:
        async def run() -> None:
            engine, _, ctx = await _setup()
            people = _people(ctx)
            with pytest.raises(NotFoundError) as exc_info:
                await people.update_model(Person(id=99, first_name="X"))
            assert exc_info.value.message == '"Person" not found.'
            with pytest.raises(ValidationError):
                await people.update_model(Person(first_name="X"))
            phones = Dao(ctx, build_registry(), QueryShape.from_(PhoneNumber, "pn"))
            with pytest.raises(NotFoundError, match="Failed to update"):
                await phones.update_model(PhoneNumber(id=11, person_id=999))
            await engine.dispose()

        asyncio.run(run())

    def test_delete_by_id(self) -> None:
        async def run() -> None:
            engine, sf, ctx = await _setup()
            calls = Dao(ctx, build_registry(), QueryShape.from_(Call, "c"))
            assert await calls.delete_by_id(1001) == MutateResult(affected_rows=1)
            assert await _count(sf, Call) == 1
            with pytest.raises(NotFoundError):
                await calls.delete_by_id(1001)
            await engine.dispose()

        asyncio.run(run())

    def test_delete_referenced_row_propagates_storage_error(self) -> None:
        async def run() -> None:
            engine, _, ctx = await _setup()
            with pytest.raises(IntegrityError):
                await _people(ctx).delete_by_id(1)
            await engine.dispose()

        asyncio.run(run())

    def test_delete_with_condition_across_join(self) -> None:
        async def run() -> None:
            engine, sf, ctx = await _setup()
            shape = QueryShape.from_(Call, "c").inner_join("pn", "c.phone_number")
            calls = Dao(ctx, build_registry(), shape)
            result = await calls.delete({"$eq": {"pn.active": ":a"}}, {"a": False})
            assert result.affected_rows == 1
            assert await _count(sf, Call) == 1
            assert (await calls.delete()).affected_rows == 1
            await engine.dispose()

        asyncio.run(run())


# ---------------------------------------------------------------------------
# StorageErrorClassifier
# ---------------------------------------------------------------------------


class TestStorageErrorClassifier:
    def test_no_rows_affected(self) -> None:
        err = StorageErrorClassifier().classify(NoRowsAffectedError("x"), "Person", "update")
        assert isinstance(err, NotFoundError)
        assert err.message == '"Person" not found.'

    def test_postgres_foreign_key(self) -> None:
        message = (
            'insert or update on table "phone_numbers" violates foreign key constraint "fk" '
            'DETAIL:  Key (personID)=(9) is not present in table "people".'
        )
        err = StorageErrorClassifier().classify(Exception(message), "PhoneNumber", "create")
        assert isinstance(err, NotFoundError)
        assert err.message == 'Failed to create "PhoneNumber."  Invalid reference to "people."'

    def test_mysql_foreign_key(self) -> None:
        message = (
            "Cannot add or update a child row: a foreign key constraint fails "
            "(`db`.`phone_numbers`, CONSTRAINT `fk` FOREIGN KEY (`personID`) REFERENCES `people` (`id`))"
        )
        err = StorageErrorClassifier().classify(Exception(message), "PhoneNumber", "update")
        assert err.detail["table"] == "people"

    def test_other_errors_are_returned_unchanged(self) -> None:
        original = ValueError("UNIQUE constraint failed")
        assert StorageErrorClassifier().classify(original, "Person", "create") is original
