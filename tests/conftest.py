"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from questboard.config import Settings
from questboard.db.base import Base
from questboard.errors.exceptions import PersistenceError
from questboard.events.bus import EventBus
from questboard.models.enums import JobEventType
from questboard.models.job import Job
from questboard.services.id_generator import generate_id
from questboard.services.job_board import JobBoard, JobBoardConfig

# Import all models to register with Base.metadata
import questboard.db.models  # noqa: F401


class InMemoryJobStore:
    def __init__(self):
        self.jobs: dict[str, Job] = {}
        self.failing_ids: set[str] = set()
        self.saves: list[Job] = []

    def add(self, job: Job) -> Job:
        self.jobs[job.job_id] = job
        return job

    async def list_all(self, include_archived: bool = False) -> list[Job]:
        return [job for job in self.jobs.values() if include_archived or not job.archived]

    async def get(self, job_id: str) -> Job | None:
        return self.jobs.get(job_id)

    async def save(self, job: Job) -> None:
        if job.job_id in self.failing_ids:
            raise PersistenceError("Failed to save job")
        self.saves.append(job)
        self.jobs[job.job_id] = job

    async def delete(self, job_id: str) -> bool:
        return self.jobs.pop(job_id, None) is not None


class FixedClock:
    def __init__(self, day: int = 0):
        self.day = day

    def current_day(self) -> int:
        return self.day


class RecordingNotifier:
    def __init__(self):
        self.notices: list[dict] = []

    async def notify(self, message, title=None, job_id=None):
        self.notices.append({"message": message, "title": title, "job_id": job_id})


class RecordingReputation:
    def __init__(self):
        self.applied: list[tuple] = []
        self.fail = False

    async def apply(self, impacts, source_job_id):
        if self.fail:
            raise PersistenceError("Failed to apply reputation")
        self.applied.append((list(impacts), source_job_id))


class RecordingParty:
    def __init__(self):
        self.credits: list[dict] = []
        self.fail = False

    async def credit(self, funds, xp, items, source_job_id):
        if self.fail:
            raise PersistenceError("Failed to credit party")
        self.credits.append({"funds": funds, "xp": xp, "items": list(items), "job_id": source_job_id})


@pytest.fixture
def make_job():
    """Factory for valid jobs; keyword overrides replace the defaults."""

    def _make(**overrides) -> Job:
        fields = {
            "job_id": generate_id("job_"),
            "title": "Clear the Cellar Rats",
            "location": "[[Locations/The Docks]]",
            "questgiver": "[[NPCs/Bess|Innkeeper Bess]]",
            "post_date": 0,
        }
        fields.update(overrides)
        return Job.model_validate(fields)

    return _make


@pytest.fixture
def store():
    return InMemoryJobStore()


@pytest.fixture
def clock():
    return FixedClock(0)


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def reputation():
    return RecordingReputation()


@pytest.fixture
def party():
    return RecordingParty()


@pytest.fixture
def events(bus):
    """Every job lifecycle event published on the bus, in order."""
    captured: list[tuple[str, object]] = []
    for event_type in JobEventType:
        bus.subscribe(event_type, lambda payload, et=event_type: captured.append((et, payload)))
    return captured


@pytest.fixture
def board(store, clock, bus, notifier, reputation, party):
    job_board = JobBoard(store, clock, bus, notifier, reputation, party, JobBoardConfig())
    job_board.initialize()
    yield job_board
    job_board.shutdown()


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
async def app(db_engine):
    """Application wired to the in-memory database, starting on day 10."""
    from questboard.main import create_app, init_services

    _app = create_app()
    board = await init_services(_app, db_engine, Settings(start_day=10))
    yield _app
    board.shutdown()


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
