"""Job board orchestrator.

The only stateful component of the engine. It reacts to calendar
day-advance events by sweeping open jobs for expirations and approaching
deadlines, and it validates and applies operator-issued changes. Every
mutation builds a new ``Job`` value, saves it through the injected store,
then publishes the matching lifecycle event on the injected bus.
"""

import logging
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from questboard.config import Settings
from questboard.errors.exceptions import ConflictError, NotFoundError, ValidationError
from questboard.events import board_notices
from questboard.events.bus import EventBus
from questboard.models.enums import (
    CalendarEventType,
    JobEventType,
    JobGroupField,
    JobStatus,
    JobStatusChangeReason,
    ReputationCondition,
)
from questboard.models.events import (
    JobCreated,
    JobDeleted,
    JobRewardsDistributed,
    JobStatusChanged,
    JobUpdated,
    TimeAdvanced,
)
from questboard.models.job import Job, JobDraft, JobUpdate, ReputationImpact
from questboard.services.expiration import days_remaining
from questboard.services.id_generator import generate_id
from questboard.services.ports import Clock, JobStore, NotificationSink, PartyLedger, ReputationLedger
from questboard.services.query import JobFilters, JobGroup, JobSortOptions, query_jobs
from questboard.services.rewards import (
    DEFAULT_REVIEW_THRESHOLD,
    RewardPreview,
    RewardResult,
    calculate_rewards,
    preview_rewards,
)
from questboard.services.transitions import validate_transition

logger = logging.getLogger(__name__)


class JobBoardConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    auto_expire_jobs: bool = True
    notify_on_deadlines: bool = True
    notify_on_expirations: bool = True
    deadline_warning_days: list[int] = Field(default_factory=lambda: [3, 1, 0])
    review_reputation_threshold: int = Field(DEFAULT_REVIEW_THRESHOLD, ge=0)

    @classmethod
    def from_settings(cls, settings: Settings) -> "JobBoardConfig":
        return cls(
            auto_expire_jobs=settings.auto_expire_jobs,
            notify_on_deadlines=settings.notify_on_deadlines,
            notify_on_expirations=settings.notify_on_expirations,
            deadline_warning_days=settings.deadline_warning_days,
            review_reputation_threshold=settings.review_reputation_threshold,
        )


class SweepResult(BaseModel):
    """Outcome of one pass over the open jobs."""

    from_day: int
    to_day: int
    expired: list[str] = Field(default_factory=list)
    warned: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)


def _changed_fields(before: Job, after: Job) -> list[str]:
    old, new = before.model_dump(), after.model_dump()
    return [name for name in new if old[name] != new[name]]


def _invalid_job(exc: PydanticValidationError) -> ValidationError:
    return ValidationError(
        "Invalid job",
        details=exc.errors(include_url=False, include_context=False, include_input=False),
    )


def _expiration_impacts(job: Job) -> list[ReputationImpact]:
    return [i for i in job.reputation_impacts if i.condition == ReputationCondition.ON_EXPIRATION]


class JobBoard:
    def __init__(
        self,
        store: JobStore,
        clock: Clock,
        bus: EventBus,
        notifier: NotificationSink,
        reputation: ReputationLedger,
        party: PartyLedger,
        config: JobBoardConfig | None = None,
    ):
        self._store = store
        self._clock = clock
        self._bus = bus
        self._notifier = notifier
        self._reputation = reputation
        self._party = party
        self._config = config or JobBoardConfig()
        self._unsubscribe: Callable[[], None] | None = None

    # --- lifecycle ---

    def initialize(self) -> None:
        """Start listening for day advances. Safe to call repeatedly."""
        if self._unsubscribe:
            self.shutdown()
        self._unsubscribe = self._bus.subscribe(CalendarEventType.TIME_ADVANCED, self.handle_time_advanced)

    def shutdown(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

    def get_config(self) -> JobBoardConfig:
        return self._config.model_copy()

    def update_config(self, **changes) -> JobBoardConfig:
        self._config = JobBoardConfig.model_validate({**self._config.model_dump(), **changes})
        return self.get_config()

    # --- calendar channel ---

    async def handle_time_advanced(self, event: TimeAdvanced) -> SweepResult:
        return await self._sweep(event.from_day, event.to_day)

    async def check_expirations(self, current_day: int | None = None) -> SweepResult:
        """Run a sweep on demand without advancing the calendar."""
        day = self._clock.current_day() if current_day is None else current_day
        return await self._sweep(day, day)

    async def _sweep(self, from_day: int, to_day: int) -> SweepResult:
        result = SweepResult(from_day=from_day, to_day=to_day)
        jobs = await self._store.list_all(include_archived=False)

        for job in jobs:
            if job.archived or not job.status.is_open:
                continue
            try:
                await self._sweep_job(job, from_day, to_day, result)
            except Exception as exc:
                logger.exception("Failed to process job %s during sweep to day %d", job.job_id, to_day)
                result.failed.append(job.job_id)
                await self._notify(board_notices.SWEEP_FAILURE, job, error=str(exc))

        if result.expired or result.failed:
            logger.info(
                "Sweep to day %d: %d expired, %d warned, %d failed",
                to_day, len(result.expired), len(result.warned), len(result.failed),
            )
        return result

    async def _sweep_job(self, job: Job, from_day: int, to_day: int, result: SweepResult) -> None:
        remaining = days_remaining(job, to_day)
        if remaining is None:
            return
        before = days_remaining(job, from_day)

        if remaining < 0:
            if self._config.auto_expire_jobs:
                await self._expire(job, to_day)
                result.expired.append(job.job_id)
            elif self._config.notify_on_deadlines and before is not None and before >= 0:
                await self._notify(board_notices.DEADLINE_PASSED, job)
                result.warned.append(job.job_id)
            return

        if self._config.notify_on_deadlines and self._crossed_threshold(before, remaining):
            await self._notify(board_notices.DEADLINE_WARNING, job, days_remaining=remaining)
            result.warned.append(job.job_id)

    def _crossed_threshold(self, before: int | None, after: int) -> bool:
        if before is None:
            return False
        return any(before > threshold >= after for threshold in self._config.deadline_warning_days)

    async def _expire(self, job: Job, current_day: int) -> Job:
        expired = await self._apply_transition(job, JobStatus.EXPIRED, current_day, JobStatusChangeReason.AUTO_EXPIRED)
        if self._config.notify_on_expirations:
            await self._notify(board_notices.JOB_EXPIRED, job)
        return expired

    # --- manual channel ---

    def current_day(self) -> int:
        return self._clock.current_day()

    async def all_jobs(self, include_archived: bool = False) -> list[Job]:
        return await self._store.list_all(include_archived=include_archived)

    async def get_job(self, job_id: str) -> Job:
        job = await self._store.get(job_id)
        if job is None:
            raise NotFoundError("Job", job_id)
        return job

    async def list_jobs(
        self,
        filters: JobFilters | None = None,
        sort: JobSortOptions | None = None,
        group_field: JobGroupField = JobGroupField.NONE,
    ) -> list[JobGroup]:
        filters = filters or JobFilters()
        jobs = await self._store.list_all(include_archived=filters.include_archived)
        return query_jobs(jobs, filters, sort or JobSortOptions(), group_field, self._clock.current_day())

    async def create_job(self, draft: JobDraft) -> Job:
        fields = draft.model_dump()
        if fields["post_date"] is None:
            fields["post_date"] = self._clock.current_day()
        job = self._build(job_id=generate_id("job_"), status=JobStatus.POSTED, **fields)

        await self._store.save(job)
        logger.info("Created job %s (%s)", job.job_id, job.title)
        await self._bus.publish(JobEventType.CREATED, JobCreated(job_id=job.job_id, job=job))
        return job

    async def update_job(self, job_id: str, update: JobUpdate) -> Job:
        job = await self.get_job(job_id)
        changes = update.model_dump(exclude_unset=True)
        return await self._save_changes(job, changes)

    async def archive_job(self, job_id: str) -> Job:
        job = await self.get_job(job_id)
        return await self._save_changes(job, {"archived": True})

    async def unarchive_job(self, job_id: str) -> Job:
        job = await self.get_job(job_id)
        return await self._save_changes(job, {"archived": False})

    async def delete_job(self, job_id: str) -> None:
        await self.get_job(job_id)
        await self._store.delete(job_id)
        logger.info("Deleted job %s", job_id)
        await self._bus.publish(JobEventType.DELETED, JobDeleted(job_id=job_id))

    async def transition(self, job_id: str, target_status: JobStatus) -> Job:
        """Apply an operator-requested status change."""
        job = await self.get_job(job_id)
        return await self._apply_transition(
            job, target_status, self._clock.current_day(), JobStatusChangeReason.MANUAL
        )

    async def take_job(self, job_id: str) -> Job:
        return await self.transition(job_id, JobStatus.TAKEN)

    async def complete_job(self, job_id: str) -> Job:
        return await self.transition(job_id, JobStatus.COMPLETED)

    async def fail_job(self, job_id: str) -> Job:
        return await self.transition(job_id, JobStatus.FAILED)

    async def cancel_job(self, job_id: str) -> Job:
        return await self.transition(job_id, JobStatus.CANCELLED)

    # --- rewards ---

    async def preview_rewards(self, job_id: str) -> RewardPreview:
        job = await self.get_job(job_id)
        return preview_rewards(job, self._config.review_reputation_threshold)

    async def distribute_rewards(self, job_id: str) -> RewardResult:
        """Credit the party and apply outcome reputation for a resolved job.

        The job is marked distributed before anything is credited. If the
        party credit fails the original job is restored so the operator can
        retry. Once the party has been paid the flag stays set: a failure
        applying reputation is reported to the GM and never retried, so a
        job can never pay out twice.
        """
        job = await self.get_job(job_id)
        if job.status not in (JobStatus.COMPLETED, JobStatus.FAILED):
            raise ValidationError(
                f"Rewards can only be distributed for Completed or Failed jobs (job is {job.status})",
                details={"job_id": job_id, "status": str(job.status)},
            )
        if job.rewards_distributed:
            raise ConflictError(f"Rewards for job '{job_id}' have already been distributed")

        result = calculate_rewards(job)
        claimed = self._build_from(job, rewards_distributed=True)
        await self._store.save(claimed)
        try:
            if result.gold_reward or result.xp_reward or result.item_rewards:
                await self._party.credit(result.gold_reward, result.xp_reward, result.item_rewards, job_id)
        except Exception:
            logger.exception("Party credit for job %s failed; restoring job", job_id)
            await self._store.save(job)
            raise

        applied = result.reputation_impacts
        if applied:
            try:
                await self._reputation.apply(applied, job_id)
            except Exception as exc:
                logger.exception("Could not apply outcome reputation for job %s", job_id)
                await self._notify(board_notices.REPUTATION_NOT_APPLIED, claimed, error=str(exc))
                applied = []
                result = result.model_copy(
                    update={"warnings": [*result.warnings, f"Reputation impacts were not applied: {exc}"]}
                )

        logger.info("Distributed rewards for job %s", job_id)
        await self._bus.publish(
            JobEventType.REWARDS_DISTRIBUTED,
            JobRewardsDistributed(
                job_id=job_id,
                job=claimed,
                gold_distributed=result.gold_reward,
                xp_distributed=result.xp_reward,
                items_distributed=result.item_rewards,
                reputation_impacts_applied=applied,
            ),
        )
        return result

    # --- internals ---

    async def _apply_transition(
        self,
        job: Job,
        target_status: JobStatus,
        current_day: int,
        reason: JobStatusChangeReason,
    ) -> Job:
        error = validate_transition(job.status, target_status, job, current_day)
        if error:
            raise ValidationError(error.message, details=error.model_dump(mode="json"))

        changes: dict = {"status": target_status}
        if target_status == JobStatus.TAKEN:
            changes["taken_date"] = current_day
        updated = self._build_from(job, **changes)

        await self._store.save(updated)
        logger.info("Job %s: %s -> %s (%s)", job.job_id, job.status, target_status, reason)

        if target_status == JobStatus.EXPIRED:
            await self._apply_expiration_impacts(updated)

        await self._bus.publish(
            JobEventType.STATUS_CHANGED,
            JobStatusChanged(
                job_id=job.job_id,
                previous_status=job.status,
                new_status=target_status,
                reason=reason,
                job=updated,
            ),
        )
        await self._bus.publish(
            JobEventType.UPDATED,
            JobUpdated(job_id=job.job_id, job=updated, changed_fields=_changed_fields(job, updated)),
        )
        return updated

    async def _apply_expiration_impacts(self, job: Job) -> None:
        """Fire OnExpiration impacts once; the job is already saved as Expired."""
        impacts = _expiration_impacts(job)
        if not impacts:
            return
        try:
            await self._reputation.apply(impacts, job.job_id)
        except Exception as exc:
            logger.exception("Could not apply expiration reputation for job %s", job.job_id)
            await self._notify(board_notices.REPUTATION_NOT_APPLIED, job, error=str(exc))

    async def _save_changes(self, job: Job, changes: dict) -> Job:
        updated = self._build_from(job, **changes)
        changed = _changed_fields(job, updated)
        if not changed:
            return job
        await self._store.save(updated)
        await self._bus.publish(
            JobEventType.UPDATED,
            JobUpdated(job_id=job.job_id, job=updated, changed_fields=changed),
        )
        return updated

    def _build(self, **fields) -> Job:
        try:
            return Job.model_validate(fields)
        except PydanticValidationError as exc:
            raise _invalid_job(exc) from exc

    def _build_from(self, job: Job, **changes) -> Job:
        try:
            return job.evolve(**changes)
        except PydanticValidationError as exc:
            raise _invalid_job(exc) from exc

    async def _notify(self, kind: str, job: Job, **context) -> None:
        """Best-effort GM notice; failures are logged and swallowed."""
        message = board_notices.build_notice_body(kind, job, **context)
        try:
            await self._notifier.notify(message, title=board_notices.NOTICE_TITLES.get(kind), job_id=job.job_id)
        except Exception as exc:
            logger.warning("Failed to deliver notice for job %s: %s", job.job_id, exc)
