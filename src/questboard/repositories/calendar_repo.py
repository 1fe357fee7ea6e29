"""Calendar state repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from questboard.db.models.calendar_state import CalendarStateRow
from questboard.repositories.base import BaseRepository

DEFAULT_CALENDAR_ID = "calendar_default"


class CalendarRepository(BaseRepository[CalendarStateRow]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, CalendarStateRow)

    async def get_day(self, calendar_id: str = DEFAULT_CALENDAR_ID) -> int | None:
        row = await self.get_by_id("calendar_id", calendar_id)
        return row.current_day if row is not None else None

    async def set_day(self, day: int, calendar_id: str = DEFAULT_CALENDAR_ID) -> CalendarStateRow:
        row = await self.get_by_id("calendar_id", calendar_id)
        if row is None:
            return await self.create(calendar_id=calendar_id, current_day=day)
        return await self.update(row, current_day=day)
