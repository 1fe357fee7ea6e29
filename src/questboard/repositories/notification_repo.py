"""Notification repository."""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from questboard.db.models.notification import NotificationRow
from questboard.repositories.base import BaseRepository
from questboard.services.id_generator import generate_id


class NotificationRepository(BaseRepository[NotificationRow]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, NotificationRow)

    async def add(self, body: str, title: str | None = None, job_id: str | None = None) -> NotificationRow:
        return await self.create(
            notification_id=generate_id("ntf_"),
            body=body,
            title=title,
            job_id=job_id,
            read=False,
        )

    async def list_recent(self, unread_only: bool = False, limit: int = 50) -> list[NotificationRow]:
        stmt = select(NotificationRow).order_by(NotificationRow.created_at.desc()).limit(limit)
        if unread_only:
            stmt = stmt.where(NotificationRow.read == False)  # noqa: E712
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_by_job(self, job_id: str) -> list[NotificationRow]:
        return await self.list_by_field("job_id", job_id)

    async def mark_read(self, notification_id: str) -> bool:
        stmt = (
            update(NotificationRow)
            .where(NotificationRow.notification_id == notification_id)
            .values(read=True)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0
