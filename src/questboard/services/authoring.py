"""Non-blocking authoring checks for job definitions."""

from questboard.models.enums import JobStatus
from questboard.models.job import Job
from questboard.services.rewards import validate_reputation_impacts


def authoring_warnings(job: Job) -> list[str]:
    """Warnings the GM may want to act on; none of them block saving."""
    warnings = []
    if job.duration_availability == 0 and job.duration_completion == 0:
        warnings.append("Job has no time limits (both durations are 0 / No Limit)")
    if job.reward_funds == 0 and job.reward_xp == 0 and not job.reward_items:
        warnings.append("Job has no rewards defined (currency, XP, or items)")
    if job.status == JobStatus.TAKEN and job.duration_completion == 0:
        warnings.append("Taken job has no completion deadline")
    warnings.extend(validate_reputation_impacts(job.reputation_impacts))
    return warnings
