"""Player-safe projection of the job board."""

from collections.abc import Iterable

from questboard.models.job import Job
from questboard.models.player_job import PlayerJob
from questboard.services.expiration import days_remaining, format_days_remaining


def to_player_job(job: Job, current_day: int) -> PlayerJob:
    remaining = days_remaining(job, current_day)
    return PlayerJob(
        job_id=job.job_id,
        title=job.title,
        location=job.location,
        questgiver=job.questgiver,
        prerequisites=job.prerequisites,
        status=job.status,
        post_date=job.post_date,
        taken_date=job.taken_date,
        days_remaining=remaining,
        days_remaining_text=format_days_remaining(remaining),
        reward_funds=job.reward_funds,
        reward_xp=job.reward_xp,
        reward_items=list(job.reward_items),
        reputation_impacts=list(job.reputation_impacts),
    )


def build_player_board(jobs: Iterable[Job], current_day: int) -> list[PlayerJob]:
    """Open jobs the players may see, most recently posted first."""
    visible = [
        job
        for job in jobs
        if job.status.is_open and not job.archived and not job.hide_from_players
    ]
    visible.sort(key=lambda job: job.post_date, reverse=True)
    return [to_player_job(job, current_day) for job in visible]
