"""SQLAlchemy ORM models - import all to register with Base.metadata."""

from questboard.db.models.calendar_state import CalendarStateRow
from questboard.db.models.job import JobRow
from questboard.db.models.notification import NotificationRow
from questboard.db.models.party import PartyTreasuryRow
from questboard.db.models.reputation import ReputationStandingRow

__all__ = [
    "CalendarStateRow",
    "JobRow",
    "NotificationRow",
    "PartyTreasuryRow",
    "ReputationStandingRow",
]
