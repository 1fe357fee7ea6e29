"""Player-facing job view.

Excludes GM-only metadata: hide_from_players, archived,
narrative_consequence and rewards_distributed.
"""

from pydantic import BaseModel, ConfigDict

from questboard.models.enums import JobStatus
from questboard.models.job import ReputationImpact, RewardItem


class PlayerJob(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    job_id: str
    title: str
    location: str | None = None
    questgiver: str | None = None
    prerequisites: str | None = None
    status: JobStatus
    post_date: int
    taken_date: int | None = None
    days_remaining: int | None = None
    days_remaining_text: str
    reward_funds: int
    reward_xp: int
    reward_items: list[RewardItem]
    reputation_impacts: list[ReputationImpact]
