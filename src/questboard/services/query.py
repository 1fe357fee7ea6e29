"""Search, filter, sort and grouping of job collections.

Pure functions over sequences of jobs; inputs are never mutated.
"""

from collections.abc import Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field

from questboard.models.enums import JobGroupField, JobSortField, JobStatus, SortDirection
from questboard.models.job import Job
from questboard.services.expiration import days_remaining
from questboard.services.wikilinks import display_name, normalize

ALL_JOBS_LABEL = "All Jobs"
NO_LOCATION_LABEL = "No Location"

_STATUS_ORDER = {status: index for index, status in enumerate(JobStatus)}


class JobFilters(BaseModel):
    """Optional, AND-combined filter predicates."""

    model_config = ConfigDict(extra="forbid")

    statuses: set[JobStatus] | None = None
    locations: list[str] | None = None
    search_text: str | None = None
    include_archived: bool = False
    hide_from_players: bool | None = None


class JobSortOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    field: JobSortField = JobSortField.POST_DATE
    direction: SortDirection = SortDirection.ASCENDING


class JobGroup(BaseModel):
    label: str
    jobs: list[Job] = Field(default_factory=list)


def _matches_text(job: Job, needle: str) -> bool:
    for value in (job.title, job.questgiver, job.location):
        if value and needle in normalize(value):
            return True
    return False


def filter_jobs(jobs: Iterable[Job], filters: JobFilters) -> list[Job]:
    """Return the jobs matching every supplied predicate, in input order."""
    result = list(jobs)

    if not filters.include_archived:
        result = [job for job in result if not job.archived]

    if filters.hide_from_players is not None:
        result = [job for job in result if job.hide_from_players == filters.hide_from_players]

    if filters.statuses:
        result = [job for job in result if job.status in filters.statuses]

    if filters.locations:
        wanted = {normalize(location) for location in filters.locations}
        result = [job for job in result if job.location and normalize(job.location) in wanted]

    if filters.search_text and filters.search_text.strip():
        needle = filters.search_text.strip().casefold()
        result = [job for job in result if _matches_text(job, needle)]

    return result


def _sort_key(field: JobSortField):
    if field == JobSortField.TITLE:
        return lambda job: (job.title.casefold(), job.title)
    if field == JobSortField.STATUS:
        return lambda job: _STATUS_ORDER[job.status]
    if field == JobSortField.LOCATION:
        return lambda job: normalize(job.location or "")
    return lambda job: job.post_date


def sort_jobs(jobs: Sequence[Job], options: JobSortOptions, current_day: int) -> list[Job]:
    """Order jobs by ``options.field``.

    Descending order is the exact reverse of ascending order. When sorting
    by days remaining, jobs without a boundary always come last.
    """
    descending = options.direction == SortDirection.DESCENDING

    if options.field == JobSortField.DAYS_REMAINING:
        remaining = [(days_remaining(job, current_day), job) for job in jobs]
        bounded = sorted((pair for pair in remaining if pair[0] is not None), key=lambda pair: pair[0])
        unbounded = [job for days, job in remaining if days is None]
        ordered = [job for _, job in bounded]
        if descending:
            ordered.reverse()
        return ordered + unbounded

    ordered = sorted(jobs, key=_sort_key(options.field))
    if descending:
        ordered.reverse()
    return ordered


def _group_key(job: Job, group_field: JobGroupField) -> tuple[str, str]:
    """(matching key, display label) for the group ``job`` belongs to."""
    if group_field == JobGroupField.STATUS:
        return str(job.status), str(job.status)
    if not job.location or not job.location.strip():
        return "", NO_LOCATION_LABEL
    return normalize(job.location), display_name(job.location).strip()


def group_jobs(jobs: Sequence[Job], group_field: JobGroupField) -> list[JobGroup]:
    """Split sorted jobs into labelled groups, preserving order within each.

    Location groups appear in first-seen order; status groups follow the
    canonical status order.
    """
    if group_field == JobGroupField.NONE:
        return [JobGroup(label=ALL_JOBS_LABEL, jobs=list(jobs))]

    # Locations that differ only in wikilink syntax or case share a group
    groups: dict[str, JobGroup] = {}
    for job in jobs:
        key, label = _group_key(job, group_field)
        groups.setdefault(key, JobGroup(label=label)).jobs.append(job)

    ordered = list(groups.values())
    if group_field == JobGroupField.STATUS:
        ordered.sort(key=lambda group: _STATUS_ORDER[JobStatus(group.label)])
    return ordered


def _unique_display_names(values: Iterable[str | None]) -> list[str]:
    names = {display_name(value) for value in values if value and value.strip()}
    return sorted(names, key=str.casefold)


def unique_locations(jobs: Iterable[Job]) -> list[str]:
    """Distinct location display names, for populating filter choices."""
    return _unique_display_names(job.location for job in jobs)


def unique_questgivers(jobs: Iterable[Job]) -> list[str]:
    return _unique_display_names(job.questgiver for job in jobs)


def query_jobs(
    jobs: Iterable[Job],
    filters: JobFilters,
    sort: JobSortOptions,
    group_field: JobGroupField,
    current_day: int,
) -> list[JobGroup]:
    """Filter, sort, then group: the full listing pipeline."""
    filtered = filter_jobs(jobs, filters)
    return group_jobs(sort_jobs(filtered, sort, current_day), group_field)
