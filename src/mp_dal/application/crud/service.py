"""Application CRUD – CrudService base class."""
from __future__ import annotations

from typing import Any, Generic, Mapping, Protocol, TypeVar

T = TypeVar("T")


class CrudDaoPort(Protocol[T]):
    async def create(self, model: T, *, tx: Any = None) -> T: ...
    async def retrieve(self, cond: Any = None, params: Mapping[str, Any] | None = None, *, tx: Any = None) -> list[T]: ...
    async def retrieve_by_id(self, id: Any, *, tx: Any = None) -> T: ...
    async def update_model(self, model: T, *, tx: Any = None) -> T: ...
    async def delete_by_id(self, id: Any, *, tx: Any = None) -> Any: ...


class CrudService(Generic[T]):
    """Base class for CRUD services; each operation delegates to the dao."""

    def __init__(self, dao: CrudDaoPort[T]) -> None:
        self._dao = dao

    async def create(self, model: T, *, tx: Any = None) -> T:
        return await self._dao.create(model, tx=tx)

    async def retrieve(self, cond: Any = None, params: Mapping[str, Any] | None = None, *, tx: Any = None) -> list[T]:
        return await self._dao.retrieve(cond, params, tx=tx)

    async def retrieve_by_id(self, id: Any, *, tx: Any = None) -> T:
        return await self._dao.retrieve_by_id(id, tx=tx)

    async def update_model(self, model: T, *, tx: Any = None) -> T:
        return await self._dao.update_model(model, tx=tx)

    async def delete_by_id(self, id: Any, *, tx: Any = None) -> Any:
        return await self._dao.delete_by_id(id, tx=tx)


__all__ = ["CrudDaoPort", "CrudService"]
