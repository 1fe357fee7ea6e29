"""Session-bound CRUD helpers shared by the repositories."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from questboard.db.base import Base

RowT = TypeVar("RowT", bound=Base)


class BaseRepository(Generic[RowT]):
    """Flushes but never commits; the session owner decides when to commit."""

    def __init__(self, session: AsyncSession, model_class: type[RowT]):
        self.session = session
        self.model_class = model_class

    def _column(self, name: str):
        return getattr(self.model_class, name)

    async def get_by_id(self, pk_field: str, pk_value: str) -> RowT | None:
        result = await self.session.execute(select(self.model_class).where(self._column(pk_field) == pk_value))
        return result.scalar_one_or_none()

    async def create(self, **values: Any) -> RowT:
        row = self.model_class(**values)
        self.session.add(row)
        await self.session.flush()
        return row

    async def update(self, row: RowT, **values: Any) -> RowT:
        for name, value in values.items():
            setattr(row, name, value)
        await self.session.flush()
        return row

    async def delete(self, row: RowT) -> None:
        await self.session.delete(row)
        await self.session.flush()

    async def list_by_field(self, field: str, value: Any) -> list[RowT]:
        result = await self.session.execute(select(self.model_class).where(self._column(field) == value))
        return list(result.scalars().all())
