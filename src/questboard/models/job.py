"""Pydantic models for the Job entity and its operator inputs."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from questboard.models.enums import JobStatus, ReputationCondition, ReputationTargetType

TITLE_MAX_LENGTH = 200
ITEM_QUANTITY_MAX = 9999

_TAKEN_REQUIRED = (JobStatus.TAKEN, JobStatus.COMPLETED, JobStatus.FAILED)
_TAKEN_FORBIDDEN = (JobStatus.POSTED, JobStatus.CANCELLED)


def _check_title(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("Title is required")
    if len(value) > TITLE_MAX_LENGTH:
        raise ValueError(f"Title must be {TITLE_MAX_LENGTH} characters or less")
    return value


class RewardItem(BaseModel):
    """Item reward with quantity."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    item: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1, le=ITEM_QUANTITY_MAX)

    @field_validator("item")
    @classmethod
    def _item_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Item name is required")
        return value


class ReputationImpact(BaseModel):
    """Conditional, signed standing adjustment for a location, faction or NPC."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    target_type: ReputationTargetType
    target_entity: str = Field(..., min_length=1)
    value: int
    condition: ReputationCondition

    @field_validator("target_entity")
    @classmethod
    def _target_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Target entity is required")
        return value


class Job(BaseModel):
    """A job posting on the board.

    Jobs are immutable values: every change produces a new, re-validated
    instance via ``evolve`` which must then be saved explicitly.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    job_id: str = Field(..., pattern=r"^job_[A-Za-z0-9_-]+$")
    title: str
    location: str | None = None
    questgiver: str | None = None
    prerequisites: str | None = None

    status: JobStatus = JobStatus.POSTED
    post_date: int = Field(..., ge=0)
    taken_date: int | None = Field(None, ge=0)
    duration_availability: int = Field(0, ge=0)
    duration_completion: int = Field(0, ge=0)

    reward_funds: int = Field(0, ge=0)
    reward_xp: int = Field(0, ge=0)
    reward_items: tuple[RewardItem, ...] = ()
    reputation_impacts: tuple[ReputationImpact, ...] = ()
    narrative_consequence: str | None = None

    hide_from_players: bool = False
    archived: bool = False
    rewards_distributed: bool = False

    @field_validator("title")
    @classmethod
    def _title_valid(cls, value: str) -> str:
        return _check_title(value)

    @model_validator(mode="after")
    def _check_taken_date(self) -> "Job":
        if self.status in _TAKEN_REQUIRED and self.taken_date is None:
            raise ValueError(f"Taken date must be set when status is {self.status}")
        if self.status in _TAKEN_FORBIDDEN and self.taken_date is not None:
            raise ValueError(f"Taken date must be empty when status is {self.status}")
        if self.taken_date is not None and self.taken_date < self.post_date:
            raise ValueError("Taken date cannot precede post date")
        return self

    def evolve(self, **changes) -> "Job":
        """Return a validated copy with ``changes`` applied."""
        return Job.model_validate({**self.model_dump(), **changes})


class JobDraft(BaseModel):
    """Operator input for creating a job. New jobs always start Posted."""

    model_config = ConfigDict(extra="forbid")

    title: str
    location: str | None = None
    questgiver: str | None = None
    prerequisites: str | None = None
    post_date: int | None = Field(None, ge=0)
    duration_availability: int = Field(0, ge=0)
    duration_completion: int = Field(0, ge=0)
    reward_funds: int = Field(0, ge=0)
    reward_xp: int = Field(0, ge=0)
    reward_items: list[RewardItem] = Field(default_factory=list)
    reputation_impacts: list[ReputationImpact] = Field(default_factory=list)
    narrative_consequence: str | None = None
    hide_from_players: bool = False

    @field_validator("title")
    @classmethod
    def _title_valid(cls, value: str) -> str:
        return _check_title(value)


class JobUpdate(BaseModel):
    """Operator edit of a job's descriptive fields.

    Status, dates and flags managed by the board are not editable here.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    location: str | None = None
    questgiver: str | None = None
    prerequisites: str | None = None
    duration_availability: int | None = Field(None, ge=0)
    duration_completion: int | None = Field(None, ge=0)
    reward_funds: int | None = Field(None, ge=0)
    reward_xp: int | None = Field(None, ge=0)
    reward_items: list[RewardItem] | None = None
    reputation_impacts: list[ReputationImpact] | None = None
    narrative_consequence: str | None = None
    hide_from_players: bool | None = None

    @field_validator("title")
    @classmethod
    def _title_valid(cls, value: str | None) -> str | None:
        if value is None:
            return value
        return _check_title(value)
