"""Reward and reputation calculation for resolved jobs."""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from questboard.models.enums import JobStatus, ReputationCondition
from questboard.models.job import Job, ReputationImpact, RewardItem
from questboard.services.wikilinks import display_name

# Impacts larger than this are probably typos.
LARGE_IMPACT_VALUE = 100

DEFAULT_REVIEW_THRESHOLD = 10

_OUTCOME_CONDITION = {
    JobStatus.COMPLETED: ReputationCondition.ON_SUCCESS,
    JobStatus.FAILED: ReputationCondition.ON_FAILURE,
}


class RewardResult(BaseModel):
    """Concrete rewards for a job's current outcome."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    gold_reward: int = 0
    xp_reward: int = 0
    item_rewards: list[RewardItem] = Field(default_factory=list)
    reputation_impacts: list[ReputationImpact] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


def outcome_impacts(job: Job) -> list[ReputationImpact]:
    """Reputation impacts whose condition matches the job's outcome.

    OnExpiration impacts are applied by the job board when the job
    expires and are never returned here.
    """
    condition = _OUTCOME_CONDITION.get(job.status)
    if condition is None:
        return []
    return [impact for impact in job.reputation_impacts if impact.condition == condition]


def calculate_rewards(job: Job) -> RewardResult:
    """Derive the reward payload for a job.

    Only completed jobs pay out funds, XP and items; failed jobs carry
    their OnFailure reputation impacts and nothing else.
    """
    warnings: list[str] = []

    if job.status.is_open:
        warnings.append(
            f"Job status is {job.status}. Rewards are only distributed "
            "once a job is Completed or Failed."
        )

    if job.status == JobStatus.COMPLETED:
        if job.reward_funds == 0 and job.reward_xp == 0 and not job.reward_items:
            warnings.append("Job has no rewards defined (currency, XP, or items)")
        return RewardResult(
            gold_reward=job.reward_funds,
            xp_reward=job.reward_xp,
            item_rewards=list(job.reward_items),
            reputation_impacts=outcome_impacts(job),
            warnings=warnings,
        )

    return RewardResult(reputation_impacts=outcome_impacts(job), warnings=warnings)


def should_prompt_gm_review(
    job: Job,
    result: RewardResult,
    threshold: int = DEFAULT_REVIEW_THRESHOLD,
) -> bool:
    """True when auto-distributing the rewards without GM review is risky.

    Triggers on a narrative consequence or on any reputation impact whose
    magnitude reaches ``threshold``. ``result`` is accepted so callers can
    pass what they are about to distribute; its warnings also count.
    """
    if job.narrative_consequence and job.narrative_consequence.strip():
        return True
    if any(abs(impact.value) >= threshold for impact in job.reputation_impacts):
        return True
    return bool(result.warnings)


def validate_reputation_impacts(impacts: Iterable[ReputationImpact]) -> list[str]:
    """Warnings for suspicious reputation impact definitions."""
    warnings = []
    for impact in impacts:
        if abs(impact.value) > LARGE_IMPACT_VALUE:
            warnings.append(
                f'Reputation impact for "{impact.target_entity}" has very large value '
                f"({impact.value}). Verify this is intentional."
            )
    return warnings


def format_reward_summary(result: RewardResult) -> str:
    """Multi-line reward summary for the GM."""
    lines = []
    if result.gold_reward > 0:
        lines.append(f"Currency: {result.gold_reward} gp")
    if result.xp_reward > 0:
        lines.append(f"XP: {result.xp_reward}")
    if result.item_rewards:
        items = ", ".join(f"{display_name(r.item)} ({r.quantity})" for r in result.item_rewards)
        lines.append(f"Items: {items}")
    if result.reputation_impacts:
        impacts = ", ".join(
            f"{display_name(i.target_entity)} {i.value:+d}" for i in result.reputation_impacts
        )
        lines.append(f"Reputation: {impacts}")
    if not lines:
        lines.append("No rewards to distribute")
    return "\n".join(lines)


class RewardPreview(BaseModel):
    """What distributing a job's rewards would do, for GM confirmation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    job_id: str
    result: RewardResult
    summary: str
    needs_review: bool
    already_distributed: bool


def preview_rewards(job: Job, threshold: int = DEFAULT_REVIEW_THRESHOLD) -> RewardPreview:
    result = calculate_rewards(job)
    return RewardPreview(
        job_id=job.job_id,
        result=result,
        summary=format_reward_summary(result),
        needs_review=should_prompt_gm_review(job, result, threshold),
        already_distributed=job.rewards_distributed,
    )
