"""Pydantic payloads for job board and calendar events."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from questboard.models.enums import JobStatus, JobStatusChangeReason
from questboard.models.job import Job, ReputationImpact, RewardItem


def _now() -> datetime:
    return datetime.now(timezone.utc)


class EventPayload(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    occurred_at: datetime = Field(default_factory=_now)


class TimeAdvanced(EventPayload):
    from_day: int
    to_day: int

    @property
    def days_passed(self) -> int:
        return self.to_day - self.from_day


class JobCreated(EventPayload):
    job_id: str
    job: Job


class JobUpdated(EventPayload):
    job_id: str
    job: Job
    changed_fields: list[str]


class JobStatusChanged(EventPayload):
    job_id: str
    previous_status: JobStatus
    new_status: JobStatus
    reason: JobStatusChangeReason
    job: Job


class JobDeleted(EventPayload):
    job_id: str


class JobRewardsDistributed(EventPayload):
    job_id: str
    job: Job
    gold_distributed: int
    xp_distributed: int
    items_distributed: list[RewardItem]
    reputation_impacts_applied: list[ReputationImpact]
