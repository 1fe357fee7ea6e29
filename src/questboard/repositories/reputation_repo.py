"""Reputation standing repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from questboard.db.models.reputation import ReputationStandingRow
from questboard.repositories.base import BaseRepository
from questboard.services.id_generator import generate_id
from questboard.services.wikilinks import display_name, normalize


class ReputationRepository(BaseRepository[ReputationStandingRow]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, ReputationStandingRow)

    async def find(self, target_type: str, entity: str) -> ReputationStandingRow | None:
        stmt = select(ReputationStandingRow).where(
            ReputationStandingRow.target_type == target_type,
            ReputationStandingRow.entity_key == normalize(entity),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def adjust(self, target_type: str, entity: str, delta: int) -> ReputationStandingRow:
        """Add ``delta`` to the standing, creating it at zero if needed."""
        row = await self.find(target_type, entity)
        if row is None:
            return await self.create(
                standing_id=generate_id("rep_"),
                target_type=target_type,
                entity_key=normalize(entity),
                display_name=display_name(entity).strip(),
                value=delta,
            )
        return await self.update(row, value=row.value + delta)

    async def list_all(self, target_type: str | None = None) -> list[ReputationStandingRow]:
        stmt = select(ReputationStandingRow).order_by(
            ReputationStandingRow.target_type, ReputationStandingRow.entity_key
        )
        if target_type is not None:
            stmt = stmt.where(ReputationStandingRow.target_type == target_type)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
