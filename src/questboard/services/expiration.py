"""Expiration and deadline arithmetic for jobs.

All functions are pure and total: an unlimited boundary is reported as
``None`` rather than a sentinel number, so callers never have to tell a
zero-day window apart from "no limit".

A job's *remaining* window depends on whether it has been taken:
untaken jobs count down to the end of their availability window, taken
jobs count down to their completion deadline.
"""

from questboard.models.job import Job


def expiration_day(job: Job) -> int | None:
    """Day on which the availability window closes, or None if unlimited."""
    if job.duration_availability == 0:
        return None
    return job.post_date + job.duration_availability


def deadline_day(job: Job) -> int | None:
    """Day on which the completion window closes.

    None if the job has not been taken or has no completion limit.
    """
    if job.taken_date is None or job.duration_completion == 0:
        return None
    return job.taken_date + job.duration_completion


def boundary_day(job: Job) -> int | None:
    """The boundary that currently governs the job."""
    if job.taken_date is None:
        return expiration_day(job)
    return deadline_day(job)


def days_remaining(job: Job, current_day: int) -> int | None:
    """Days left before the governing boundary; negative means overdue."""
    boundary = boundary_day(job)
    if boundary is None:
        return None
    return boundary - current_day


def has_availability_expired(job: Job, current_day: int) -> bool:
    day = expiration_day(job)
    return day is not None and current_day > day


def has_deadline_passed(job: Job, current_day: int) -> bool:
    day = deadline_day(job)
    return day is not None and current_day > day


def is_overdue(job: Job, current_day: int) -> bool:
    """True once the governing boundary day is behind ``current_day``."""
    remaining = days_remaining(job, current_day)
    return remaining is not None and remaining < 0


def format_days_remaining(remaining: int | None) -> str:
    """Human-readable countdown text."""
    if remaining is None:
        return "No Limit"
    if remaining < 0:
        return f"Overdue by {abs(remaining)} day(s)"
    if remaining == 0:
        return "Due today"
    return f"{remaining} day(s) remaining"
