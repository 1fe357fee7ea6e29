"""Job status state machine."""

from pydantic import BaseModel, ConfigDict

from questboard.models.enums import JobStatus
from questboard.models.job import Job
from questboard.services.expiration import boundary_day, is_overdue

# Legal transitions; anything absent here is rejected.
VALID_TRANSITIONS: dict[JobStatus, frozenset[JobStatus]] = {
    JobStatus.POSTED: frozenset({JobStatus.TAKEN, JobStatus.EXPIRED, JobStatus.CANCELLED}),
    JobStatus.TAKEN: frozenset({JobStatus.COMPLETED, JobStatus.FAILED, JobStatus.EXPIRED}),
    JobStatus.COMPLETED: frozenset(),
    JobStatus.FAILED: frozenset(),
    JobStatus.EXPIRED: frozenset(),
    JobStatus.CANCELLED: frozenset(),
}


class TransitionError(BaseModel):
    """Reason a status change was rejected."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    field: str = "status"
    from_status: JobStatus
    to_status: JobStatus
    message: str


def allowed_targets(status: JobStatus) -> frozenset[JobStatus]:
    return VALID_TRANSITIONS[status]


def validate_transition(
    current_status: JobStatus,
    target_status: JobStatus,
    job: Job,
    current_day: int | None = None,
) -> TransitionError | None:
    """Check whether ``job`` may move from ``current_status`` to ``target_status``.

    Expiring a job additionally requires its governing window (availability
    while Posted, completion while Taken) to have closed before
    ``current_day``. Without a day to compare against, or with an unlimited
    window, expiration is rejected.

    Returns None when the transition is legal. Never mutates ``job``.
    """
    if target_status not in VALID_TRANSITIONS[current_status]:
        return TransitionError(
            from_status=current_status,
            to_status=target_status,
            message=f"Cannot transition from {current_status} to {target_status}",
        )

    if target_status == JobStatus.EXPIRED:
        window = "availability" if current_status == JobStatus.POSTED else "completion"
        if boundary_day(job) is None:
            return TransitionError(
                from_status=current_status,
                to_status=target_status,
                message=f"Cannot expire job: {window} window is unlimited",
            )
        if current_day is None or not is_overdue(job, current_day):
            return TransitionError(
                from_status=current_status,
                to_status=target_status,
                message=f"Cannot expire job: {window} deadline has not passed",
            )

    return None
