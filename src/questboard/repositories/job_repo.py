"""Job repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from questboard.db.models.job import JobRow
from questboard.models.job import Job
from questboard.repositories.base import BaseRepository

_COLUMNS = (
    "title",
    "location",
    "questgiver",
    "prerequisites",
    "status",
    "post_date",
    "taken_date",
    "duration_availability",
    "duration_completion",
    "reward_funds",
    "reward_xp",
    "reward_items",
    "reputation_impacts",
    "narrative_consequence",
    "hide_from_players",
    "archived",
    "rewards_distributed",
)


def row_to_job(row: JobRow) -> Job:
    data = {column: getattr(row, column) for column in _COLUMNS}
    return Job.model_validate({"job_id": row.job_id, **data})


def job_to_columns(job: Job) -> dict:
    data = job.model_dump(mode="json")
    return {column: data[column] for column in _COLUMNS}


class JobRepository(BaseRepository[JobRow]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, JobRow)

    async def get(self, job_id: str) -> JobRow | None:
        return await self.get_by_id("job_id", job_id)

    async def list_all(self, include_archived: bool = False) -> list[JobRow]:
        stmt = select(JobRow).order_by(JobRow.post_date, JobRow.job_id)
        if not include_archived:
            stmt = stmt.where(JobRow.archived == False)  # noqa: E712
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def save(self, job: Job) -> JobRow:
        """Insert or overwrite the row for ``job``."""
        row = await self.get(job.job_id)
        if row is None:
            return await self.create(job_id=job.job_id, **job_to_columns(job))
        return await self.update(row, **job_to_columns(job))

    async def delete_by_id(self, job_id: str) -> bool:
        row = await self.get(job_id)
        if row is None:
            return False
        await self.delete(row)
        return True
