"""FastAPI dependency injection providers."""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from questboard.services.calendar import CalendarClock
from questboard.services.job_board import JobBoard


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session from the app's session factory."""
    session_factory = request.app.state.db_session_factory
    async with session_factory() as session:
        yield session


def get_job_board(request: Request) -> JobBoard:
    return request.app.state.job_board


def get_clock(request: Request) -> CalendarClock:
    return request.app.state.clock


def get_trace_id(request: Request) -> str:
    """Extract trace_id from request state (set by middleware)."""
    return getattr(request.state, "trace_id", "unknown")
