"""Calendar API routes."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from questboard.dependencies import get_clock, get_job_board
from questboard.services.calendar import CalendarClock
from questboard.services.job_board import JobBoard

router = APIRouter(tags=["Calendar"])


class AdvanceRequest(BaseModel):
    days: int = 1


@router.get("/calendar")
async def get_calendar(clock: CalendarClock = Depends(get_clock)) -> dict:
    return {"current_day": clock.current_day()}


@router.post("/calendar/advance")
async def advance_calendar(
    body: AdvanceRequest,
    clock: CalendarClock = Depends(get_clock),
) -> dict:
    event = await clock.advance(body.days)
    return {
        "from_day": event.from_day,
        "to_day": event.to_day,
        "current_day": clock.current_day(),
    }


@router.post("/calendar/check-expirations")
async def check_expirations(board: JobBoard = Depends(get_job_board)) -> dict:
    """Sweep open jobs against the current day without advancing it."""
    result = await board.check_expirations()
    return result.model_dump(mode="json")
