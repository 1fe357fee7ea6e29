"""Master API router mounted at /api/v1."""

from fastapi import APIRouter

from questboard.api.routes import board, calendar, health, jobs, ledger, notifications

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(jobs.router)
api_router.include_router(board.router)
api_router.include_router(calendar.router)
api_router.include_router(notifications.router)
api_router.include_router(ledger.router)
