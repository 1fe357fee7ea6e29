"""Validation tests for job models."""

import pytest
from pydantic import ValidationError

from questboard.models.enums import JobStatus, ReputationCondition, ReputationTargetType
from questboard.models.job import JobDraft, JobUpdate, ReputationImpact, RewardItem
from questboard.services.authoring import authoring_warnings


def test_title_is_required(make_job):
    with pytest.raises(ValidationError):
        make_job(title="   ")


def test_title_length_limit(make_job):
    assert make_job(title="x" * 200).title == "x" * 200
    with pytest.raises(ValidationError):
        make_job(title="x" * 201)


def test_negative_durations_rejected(make_job):
    with pytest.raises(ValidationError):
        make_job(duration_availability=-1)
    with pytest.raises(ValidationError):
        make_job(duration_completion=-1)


@pytest.mark.parametrize("status", [JobStatus.TAKEN, JobStatus.COMPLETED, JobStatus.FAILED])
def test_taken_date_required_once_taken(make_job, status):
    with pytest.raises(ValidationError):
        make_job(status=status)
    assert make_job(status=status, taken_date=0).taken_date == 0


@pytest.mark.parametrize("status", [JobStatus.POSTED, JobStatus.CANCELLED])
def test_taken_date_forbidden_before_taking(make_job, status):
    with pytest.raises(ValidationError):
        make_job(status=status, taken_date=3)


def test_taken_date_cannot_precede_post_date(make_job):
    with pytest.raises(ValidationError):
        make_job(status=JobStatus.TAKEN, post_date=5, taken_date=4)


def test_expired_job_may_or_may_not_have_taken_date(make_job):
    assert make_job(status=JobStatus.EXPIRED).taken_date is None
    assert make_job(status=JobStatus.EXPIRED, taken_date=2).taken_date == 2


def test_item_quantity_bounds():
    with pytest.raises(ValidationError):
        RewardItem(item="Arrow", quantity=0)
    with pytest.raises(ValidationError):
        RewardItem(item="Arrow", quantity=10000)
    with pytest.raises(ValidationError):
        RewardItem(item="  ")
    assert RewardItem(item="Arrow").quantity == 1


def test_reputation_impact_requires_target():
    with pytest.raises(ValidationError):
        ReputationImpact(
            target_type=ReputationTargetType.NPC,
            target_entity=" ",
            value=1,
            condition=ReputationCondition.ON_SUCCESS,
        )


def test_unknown_fields_rejected():
    with pytest.raises(ValidationError):
        JobDraft(title="Rats", difficulty="hard")


def test_evolve_revalidates(make_job):
    job = make_job()
    with pytest.raises(ValidationError):
        job.evolve(status=JobStatus.TAKEN)
    taken = job.evolve(status=JobStatus.TAKEN, taken_date=1)
    assert taken.status == JobStatus.TAKEN
    assert job.status == JobStatus.POSTED


def test_update_allows_partial_fields():
    update = JobUpdate(reward_xp=50)
    assert update.model_dump(exclude_unset=True) == {"reward_xp": 50}


def test_authoring_warnings(make_job):
    warnings = authoring_warnings(make_job())
    assert any("no time limits" in w for w in warnings)
    assert any("no rewards" in w for w in warnings)

    quiet = make_job(duration_availability=5, reward_funds=10)
    assert authoring_warnings(quiet) == []


def test_authoring_warns_on_taken_job_without_deadline(make_job):
    job = make_job(status=JobStatus.TAKEN, taken_date=0, duration_availability=3, reward_xp=5)
    assert authoring_warnings(job) == ["Taken job has no completion deadline"]
