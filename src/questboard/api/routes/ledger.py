"""Reputation standings and party treasury routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from questboard.dependencies import get_db
from questboard.models.enums import ReputationTargetType
from questboard.repositories.party_repo import DEFAULT_PARTY_ID, PartyRepository
from questboard.repositories.reputation_repo import ReputationRepository

router = APIRouter(tags=["Ledger"])


@router.get("/reputation")
async def list_reputation(
    target_type: ReputationTargetType | None = None,
    db: AsyncSession = Depends(get_db),
) -> list[dict]:
    rows = await ReputationRepository(db).list_all(target_type)
    return [
        {"target_type": row.target_type, "target_entity": row.display_name, "value": row.value}
        for row in rows
    ]


@router.get("/party")
async def get_party(db: AsyncSession = Depends(get_db)) -> dict:
    row = await PartyRepository(db).get_by_id("party_id", DEFAULT_PARTY_ID)
    if row is None:
        return {"funds": 0, "xp": 0, "items": []}
    return {"funds": row.funds, "xp": row.xp, "items": row.items}
