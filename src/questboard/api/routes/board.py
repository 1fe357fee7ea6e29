"""Player-facing board view."""

from fastapi import APIRouter, Depends

from questboard.dependencies import get_job_board
from questboard.services.job_board import JobBoard
from questboard.services.player_board import build_player_board

router = APIRouter(tags=["Player Board"])


@router.get("/board/player")
async def player_board(board: JobBoard = Depends(get_job_board)) -> dict:
    day = board.current_day()
    jobs = build_player_board(await board.all_jobs(), day)
    return {
        "current_day": day,
        "jobs": [job.model_dump(mode="json") for job in jobs],
    }
