"""FastAPI application factory and lifespan management."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from questboard.config import Settings, settings
from questboard.db.engine import create_db_engine, create_session_factory
from questboard.events.bus import EventBus
from questboard.logging_config import configure_logging
from questboard.repositories.stores import (
    DatabaseCalendarState,
    DatabaseJobStore,
    DatabaseNotificationSink,
    DatabasePartyLedger,
    DatabaseReputationLedger,
)
from questboard.services.calendar import CalendarClock
from questboard.services.job_board import JobBoard, JobBoardConfig

# Console output in local mode, JSON lines otherwise
configure_logging(log_level=settings.log_level, json_output=not settings.local_mode)

logger = logging.getLogger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables (SQLite / local dev only, no migrations)."""
    from questboard.db.base import Base
    import questboard.db.models  # noqa: F401  register all ORM models

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def init_services(app: FastAPI, engine: AsyncEngine, config: Settings = settings) -> JobBoard:
    """Wire the bus, calendar and job board onto ``app.state``."""
    session_factory = create_session_factory(engine)
    bus = EventBus()
    clock = CalendarClock(bus, DatabaseCalendarState(session_factory), start_day=config.start_day)
    await clock.load()

    board = JobBoard(
        store=DatabaseJobStore(session_factory),
        clock=clock,
        bus=bus,
        notifier=DatabaseNotificationSink(session_factory),
        reputation=DatabaseReputationLedger(session_factory),
        party=DatabasePartyLedger(session_factory),
        config=JobBoardConfig.from_settings(config),
    )
    board.initialize()

    app.state.db_engine = engine
    app.state.db_session_factory = session_factory
    app.state.event_bus = bus
    app.state.clock = clock
    app.state.job_board = board
    return board


@asynccontextmanager
async def lifespan(app: FastAPI):
    db_url = settings.effective_database_url
    engine = create_db_engine(db_url)
    if "sqlite" in db_url:
        await create_tables(engine)
        logger.info("SQLite tables created (local mode)")

    board = await init_services(app, engine)
    logger.info(
        "Quest board API started (db=%s, day=%d)",
        "sqlite" if "sqlite" in db_url else "postgresql",
        board.current_day(),
    )
    yield

    board.shutdown()
    await engine.dispose()
    logger.info("Quest board API shutdown complete")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Quest Board API",
        version="0.1.0",
        description="Job lifecycle and expiration engine for tabletop campaign job boards.",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from questboard.api.middleware.trace_id import TraceIdMiddleware
    app.add_middleware(TraceIdMiddleware)

    from questboard.errors.handlers import register_exception_handlers
    register_exception_handlers(app)

    from questboard.api.router import api_router
    app.include_router(api_router)

    return app


app = create_app()
