"""Collaborator interfaces consumed by the job board."""

from collections.abc import Sequence
from typing import Protocol

from questboard.models.job import Job, ReputationImpact, RewardItem


class JobStore(Protocol):
    async def list_all(self, include_archived: bool = False) -> list[Job]: ...

    async def get(self, job_id: str) -> Job | None: ...

    async def save(self, job: Job) -> None: ...

    async def delete(self, job_id: str) -> bool: ...


class Clock(Protocol):
    def current_day(self) -> int: ...


class ReputationLedger(Protocol):
    async def apply(self, impacts: Sequence[ReputationImpact], source_job_id: str) -> None: ...


class PartyLedger(Protocol):
    async def credit(
        self,
        funds: int,
        xp: int,
        items: Sequence[RewardItem],
        source_job_id: str,
    ) -> None: ...


class NotificationSink(Protocol):
    async def notify(self, message: str, title: str | None = None, job_id: str | None = None) -> None: ...
