"""Job board API routes for the GM."""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from questboard.dependencies import get_job_board
from questboard.logging_config import bind_job_context
from questboard.models.enums import JobGroupField, JobSortField, JobStatus, SortDirection
from questboard.models.job import Job, JobDraft, JobUpdate
from questboard.services.authoring import authoring_warnings
from questboard.services.expiration import days_remaining, format_days_remaining
from questboard.services.job_board import JobBoard
from questboard.services.query import JobFilters, JobSortOptions, unique_locations, unique_questgivers

router = APIRouter(tags=["Jobs"])


class TransitionRequest(BaseModel):
    target_status: JobStatus


def job_view(job: Job, current_day: int) -> dict:
    """Serialize a job with its remaining-days annotation (open jobs only)."""
    remaining = days_remaining(job, current_day) if job.status.is_open else None
    return {
        **job.model_dump(mode="json"),
        "days_remaining": remaining,
        "days_remaining_text": format_days_remaining(remaining) if job.status.is_open else None,
    }


def _with_warnings(job: Job, current_day: int) -> dict:
    return {**job_view(job, current_day), "warnings": authoring_warnings(job)}


@router.get("/jobs")
async def list_jobs(
    status: list[JobStatus] | None = Query(None),
    location: list[str] | None = Query(None),
    search: str | None = None,
    include_archived: bool = False,
    hide_from_players: bool | None = None,
    sort: JobSortField = JobSortField.POST_DATE,
    direction: SortDirection = SortDirection.ASCENDING,
    group: JobGroupField = JobGroupField.NONE,
    board: JobBoard = Depends(get_job_board),
) -> dict:
    filters = JobFilters(
        statuses=set(status) if status else None,
        locations=location,
        search_text=search,
        include_archived=include_archived,
        hide_from_players=hide_from_players,
    )
    groups = await board.list_jobs(filters, JobSortOptions(field=sort, direction=direction), group)
    day = board.current_day()
    return {
        "current_day": day,
        "groups": [
            {"label": g.label, "jobs": [job_view(job, day) for job in g.jobs]}
            for g in groups
        ],
    }


@router.get("/jobs/locations")
async def list_locations(board: JobBoard = Depends(get_job_board)) -> list[str]:
    return unique_locations(await board.all_jobs())


@router.get("/jobs/questgivers")
async def list_questgivers(board: JobBoard = Depends(get_job_board)) -> list[str]:
    return unique_questgivers(await board.all_jobs())


@router.post("/jobs", status_code=201)
async def create_job(draft: JobDraft, board: JobBoard = Depends(get_job_board)) -> dict:
    job = await board.create_job(draft)
    bind_job_context(job.job_id)
    return _with_warnings(job, board.current_day())


@router.get("/jobs/{job_id}")
async def get_job(job_id: str, board: JobBoard = Depends(get_job_board)) -> dict:
    job = await board.get_job(job_id)
    return _with_warnings(job, board.current_day())


@router.patch("/jobs/{job_id}")
async def update_job(job_id: str, update: JobUpdate, board: JobBoard = Depends(get_job_board)) -> dict:
    bind_job_context(job_id)
    job = await board.update_job(job_id, update)
    return _with_warnings(job, board.current_day())


@router.delete("/jobs/{job_id}", status_code=204)
async def delete_job(job_id: str, board: JobBoard = Depends(get_job_board)) -> None:
    bind_job_context(job_id)
    await board.delete_job(job_id)


@router.post("/jobs/{job_id}/transition")
async def transition_job(
    job_id: str,
    body: TransitionRequest,
    board: JobBoard = Depends(get_job_board),
) -> dict:
    bind_job_context(job_id)
    job = await board.transition(job_id, body.target_status)
    return job_view(job, board.current_day())


@router.post("/jobs/{job_id}/archive")
async def archive_job(job_id: str, board: JobBoard = Depends(get_job_board)) -> dict:
    job = await board.archive_job(job_id)
    return job_view(job, board.current_day())


@router.post("/jobs/{job_id}/unarchive")
async def unarchive_job(job_id: str, board: JobBoard = Depends(get_job_board)) -> dict:
    job = await board.unarchive_job(job_id)
    return job_view(job, board.current_day())


@router.get("/jobs/{job_id}/rewards")
async def preview_job_rewards(job_id: str, board: JobBoard = Depends(get_job_board)) -> dict:
    preview = await board.preview_rewards(job_id)
    return preview.model_dump(mode="json")


@router.post("/jobs/{job_id}/rewards/distribute")
async def distribute_job_rewards(job_id: str, board: JobBoard = Depends(get_job_board)) -> dict:
    bind_job_context(job_id)
    result = await board.distribute_rewards(job_id)
    return result.model_dump(mode="json")
