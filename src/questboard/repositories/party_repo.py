"""Party treasury repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from questboard.db.models.party import PartyTreasuryRow
from questboard.models.job import RewardItem
from questboard.repositories.base import BaseRepository

DEFAULT_PARTY_ID = "party_default"


def merge_items(holdings: list[dict], items: list[RewardItem]) -> list[dict]:
    """Merge reward items into holdings, summing quantities by item name."""
    merged = {entry["item"]: entry["quantity"] for entry in holdings}
    for reward in items:
        merged[reward.item] = merged.get(reward.item, 0) + reward.quantity
    return [{"item": name, "quantity": quantity} for name, quantity in merged.items()]


class PartyRepository(BaseRepository[PartyTreasuryRow]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, PartyTreasuryRow)

    async def get_or_create(self, party_id: str = DEFAULT_PARTY_ID) -> PartyTreasuryRow:
        row = await self.get_by_id("party_id", party_id)
        if row is None:
            row = await self.create(party_id=party_id, funds=0, xp=0, items=[])
        return row

    async def credit(
        self,
        funds: int,
        xp: int,
        items: list[RewardItem],
        party_id: str = DEFAULT_PARTY_ID,
    ) -> PartyTreasuryRow:
        row = await self.get_or_create(party_id)
        # JSON columns are reassigned, never mutated in place
        return await self.update(
            row,
            funds=row.funds + funds,
            xp=row.xp + xp,
            items=merge_items(list(row.items or []), items),
        )
