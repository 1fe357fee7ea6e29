"""Database-backed collaborators for the job board and calendar.

Each call opens its own session and commits before returning, so a
failure on one job never rolls back writes made for another.
"""

import logging
from collections.abc import Sequence
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from questboard.errors.exceptions import PersistenceError
from questboard.models.job import Job, ReputationImpact, RewardItem
from questboard.repositories.calendar_repo import CalendarRepository
from questboard.repositories.job_repo import JobRepository, row_to_job
from questboard.repositories.notification_repo import NotificationRepository
from questboard.repositories.party_repo import PartyRepository
from questboard.repositories.reputation_repo import ReputationRepository

logger = logging.getLogger(__name__)


class _SessionStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, action: str):
        try:
            async with self._session_factory() as session:
                yield session
                await session.commit()
        except SQLAlchemyError as exc:
            logger.error("Database error while trying to %s: %s", action, exc)
            raise PersistenceError(f"Failed to {action}", details={"error": str(exc)}) from exc


class DatabaseJobStore(_SessionStore):
    async def list_all(self, include_archived: bool = False) -> list[Job]:
        async with self._session("list jobs") as session:
            rows = await JobRepository(session).list_all(include_archived=include_archived)
            return [row_to_job(row) for row in rows]

    async def get(self, job_id: str) -> Job | None:
        async with self._session("load job") as session:
            row = await JobRepository(session).get(job_id)
            return row_to_job(row) if row is not None else None

    async def save(self, job: Job) -> None:
        async with self._session("save job") as session:
            await JobRepository(session).save(job)

    async def delete(self, job_id: str) -> bool:
        async with self._session("delete job") as session:
            return await JobRepository(session).delete_by_id(job_id)


class DatabaseNotificationSink(_SessionStore):
    async def notify(self, message: str, title: str | None = None, job_id: str | None = None) -> None:
        async with self._session("store notification") as session:
            await NotificationRepository(session).add(message, title=title, job_id=job_id)


class DatabaseReputationLedger(_SessionStore):
    async def apply(self, impacts: Sequence[ReputationImpact], source_job_id: str) -> None:
        if not impacts:
            return
        async with self._session("apply reputation") as session:
            repo = ReputationRepository(session)
            for impact in impacts:
                await repo.adjust(impact.target_type, impact.target_entity, impact.value)
        logger.info("Applied %d reputation impact(s) from job %s", len(impacts), source_job_id)


class DatabasePartyLedger(_SessionStore):
    async def credit(
        self,
        funds: int,
        xp: int,
        items: Sequence[RewardItem],
        source_job_id: str,
    ) -> None:
        async with self._session("credit party") as session:
            await PartyRepository(session).credit(funds, xp, list(items))
        logger.info("Credited party from job %s: %d gp, %d xp, %d item(s)", source_job_id, funds, xp, len(items))


class DatabaseCalendarState(_SessionStore):
    async def load_day(self) -> int | None:
        async with self._session("load calendar") as session:
            return await CalendarRepository(session).get_day()

    async def save_day(self, day: int) -> None:
        async with self._session("save calendar") as session:
            await CalendarRepository(session).set_day(day)
