"""Tests for job filtering, sorting and grouping."""

from questboard.models.enums import JobGroupField, JobSortField, JobStatus, SortDirection
from questboard.services.query import (
    ALL_JOBS_LABEL,
    NO_LOCATION_LABEL,
    JobFilters,
    JobSortOptions,
    filter_jobs,
    group_jobs,
    query_jobs,
    sort_jobs,
    unique_locations,
    unique_questgivers,
)


def ids(jobs):
    return [job.job_id for job in jobs]


def test_search_matches_title_questgiver_or_location(make_job):
    by_title = make_job(job_id="job_title", title="Escort the Ferry", location="Riverside", questgiver="Mayor")
    by_giver = make_job(job_id="job_giver", title="Deliver Crates", location="Market", questgiver="[[NPCs/Ferryman Tom]]")
    by_place = make_job(job_id="job_place", title="Guard Duty", location="[[Locations/FERRY Landing]]", questgiver=None)
    unrelated = make_job(job_id="job_other", title="Rat Hunt", location="Cellar", questgiver="Bess")
    taken = make_job(job_id="job_taken", title="Ferry Repairs", status=JobStatus.TAKEN, taken_date=1)

    result = filter_jobs(
        [by_title, by_giver, by_place, unrelated, taken],
        JobFilters(statuses={JobStatus.POSTED}, search_text="ferry"),
    )

    assert ids(result) == ["job_title", "job_giver", "job_place"]


def test_filter_excludes_archived_by_default(make_job):
    active = make_job(job_id="job_active")
    archived = make_job(job_id="job_archived", archived=True)

    assert ids(filter_jobs([active, archived], JobFilters())) == ["job_active"]
    assert ids(filter_jobs([active, archived], JobFilters(include_archived=True))) == ["job_active", "job_archived"]


def test_filter_by_location_ignores_wikilinks_and_case(make_job):
    docks = make_job(job_id="job_docks", location="[[Locations/The Docks]]")
    market = make_job(job_id="job_market", location="Market")
    nowhere = make_job(job_id="job_none", location=None)

    result = filter_jobs([docks, market, nowhere], JobFilters(locations=["the docks"]))

    assert ids(result) == ["job_docks"]


def test_filter_by_hidden_flag(make_job):
    hidden = make_job(job_id="job_hidden", hide_from_players=True)
    shown = make_job(job_id="job_shown")

    assert ids(filter_jobs([hidden, shown], JobFilters(hide_from_players=True))) == ["job_hidden"]
    assert ids(filter_jobs([hidden, shown], JobFilters(hide_from_players=False))) == ["job_shown"]


def test_filter_does_not_mutate_input(make_job):
    jobs = [make_job(job_id="job_b", archived=True), make_job(job_id="job_a")]
    filter_jobs(jobs, JobFilters())
    assert ids(jobs) == ["job_b", "job_a"]


def test_unlimited_jobs_sort_last_in_both_directions(make_job):
    soon = make_job(job_id="job_soon", post_date=0, duration_availability=3)
    later = make_job(job_id="job_later", post_date=0, duration_availability=9)
    unlimited = make_job(job_id="job_unlimited", post_date=0, duration_availability=0)
    jobs = [unlimited, later, soon]

    ascending = sort_jobs(jobs, JobSortOptions(field=JobSortField.DAYS_REMAINING), current_day=1)
    descending = sort_jobs(
        jobs,
        JobSortOptions(field=JobSortField.DAYS_REMAINING, direction=SortDirection.DESCENDING),
        current_day=1,
    )

    assert ids(ascending) == ["job_soon", "job_later", "job_unlimited"]
    assert ids(descending) == ["job_later", "job_soon", "job_unlimited"]


def test_sort_by_title_is_case_insensitive(make_job):
    jobs = [
        make_job(job_id="job_b", title="bandit camp"),
        make_job(job_id="job_a", title="Ancient Tomb"),
        make_job(job_id="job_c", title="Cellar"),
    ]
    result = sort_jobs(jobs, JobSortOptions(field=JobSortField.TITLE), current_day=0)
    assert ids(result) == ["job_a", "job_b", "job_c"]


def test_descending_is_reverse_of_ascending(make_job):
    jobs = [make_job(job_id=f"job_{day}", post_date=day) for day in (4, 1, 3)]
    ascending = sort_jobs(jobs, JobSortOptions(), current_day=0)
    descending = sort_jobs(jobs, JobSortOptions(direction=SortDirection.DESCENDING), current_day=0)
    assert ids(ascending) == ["job_1", "job_3", "job_4"]
    assert ids(descending) == list(reversed(ids(ascending)))


def test_sort_by_status_uses_lifecycle_order(make_job):
    jobs = [
        make_job(job_id="job_cancelled", status=JobStatus.CANCELLED),
        make_job(job_id="job_taken", status=JobStatus.TAKEN, taken_date=0),
        make_job(job_id="job_posted"),
    ]
    result = sort_jobs(jobs, JobSortOptions(field=JobSortField.STATUS), current_day=0)
    assert ids(result) == ["job_posted", "job_taken", "job_cancelled"]


def test_group_none_returns_single_group(make_job):
    jobs = [make_job(), make_job()]
    groups = group_jobs(jobs, JobGroupField.NONE)
    assert len(groups) == 1
    assert groups[0].label == ALL_JOBS_LABEL
    assert len(groups[0].jobs) == 2


def test_group_by_location_in_first_seen_order(make_job):
    jobs = [
        make_job(job_id="job_1", location="Market"),
        make_job(job_id="job_2", location=None),
        make_job(job_id="job_3", location="Docks"),
        make_job(job_id="job_4", location="Market"),
    ]
    groups = group_jobs(jobs, JobGroupField.LOCATION)
    assert [g.label for g in groups] == ["Market", NO_LOCATION_LABEL, "Docks"]
    assert ids(groups[0].jobs) == ["job_1", "job_4"]


def test_group_by_location_merges_wikilink_and_plain_names(make_job):
    jobs = [
        make_job(job_id="job_1", location="[[Locations/The Docks]]"),
        make_job(job_id="job_2", location="Market"),
        make_job(job_id="job_3", location="the docks"),
    ]
    groups = group_jobs(jobs, JobGroupField.LOCATION)
    assert [g.label for g in groups] == ["The Docks", "Market"]
    assert ids(groups[0].jobs) == ["job_1", "job_3"]


def test_group_by_status_in_canonical_order(make_job):
    jobs = [
        make_job(job_id="job_expired", status=JobStatus.EXPIRED),
        make_job(job_id="job_posted"),
        make_job(job_id="job_done", status=JobStatus.COMPLETED, taken_date=0),
    ]
    groups = group_jobs(jobs, JobGroupField.STATUS)
    assert [g.label for g in groups] == ["Posted", "Completed", "Expired"]


def test_query_filters_sorts_then_groups(make_job):
    jobs = [
        make_job(job_id="job_late", post_date=5, location="Docks"),
        make_job(job_id="job_early", post_date=1, location="Docks"),
        make_job(job_id="job_gone", post_date=2, location="Docks", archived=True),
    ]
    groups = query_jobs(jobs, JobFilters(), JobSortOptions(), JobGroupField.LOCATION, current_day=0)
    assert [g.label for g in groups] == ["Docks"]
    assert ids(groups[0].jobs) == ["job_early", "job_late"]


def test_unique_locations_and_questgivers(make_job):
    jobs = [
        make_job(location="[[Locations/The Docks]]", questgiver="[[NPCs/Bess|Innkeeper Bess]]"),
        make_job(location="The Docks", questgiver="Mayor Hollis"),
        make_job(location="amber market", questgiver=None),
        make_job(location=None, questgiver="  "),
    ]
    assert unique_locations(jobs) == ["amber market", "The Docks"]
    assert unique_questgivers(jobs) == ["Innkeeper Bess", "Mayor Hollis"]
