"""GM notice texts raised by the job board."""

from questboard.models.enums import JobStatus
from questboard.models.job import Job
from questboard.services.expiration import format_days_remaining

# Notice kinds
JOB_EXPIRED = "job.expired"
DEADLINE_WARNING = "job.deadline_warning"
DEADLINE_PASSED = "job.deadline_passed"
REPUTATION_NOT_APPLIED = "job.reputation_not_applied"
SWEEP_FAILURE = "job.sweep_failure"

NOTICE_TITLES = {
    JOB_EXPIRED: "Job Expired",
    DEADLINE_WARNING: "Job Deadline Approaching",
    DEADLINE_PASSED: "Job Deadline Reached",
    REPUTATION_NOT_APPLIED: "Reputation Not Applied",
    SWEEP_FAILURE: "Job Board Error",
}


def build_notice_body(kind: str, job: Job, days_remaining: int | None = None, error: str | None = None) -> str:
    """Build the human-readable notice for ``kind``."""
    if kind == JOB_EXPIRED:
        if job.taken_date is None:
            return f'Job "{job.title}" has expired (availability duration ended)'
        return f'Job "{job.title}" has expired (completion deadline passed)'
    elif kind == DEADLINE_WARNING:
        window = "availability" if job.status == JobStatus.POSTED else "completion deadline"
        return f'Job "{job.title}" {window}: {format_days_remaining(days_remaining)}'
    elif kind == DEADLINE_PASSED:
        return (
            f'Job "{job.title}" has passed its deadline. '
            "Review with the party to determine the outcome."
        )
    elif kind == REPUTATION_NOT_APPLIED:
        return f'Reputation impacts for "{job.title}" could not be applied: {error}'
    elif kind == SWEEP_FAILURE:
        return f'Could not process job "{job.title}" during the day sweep: {error}'
    return f"Job board notice: {kind}"
