"""Reputation standings per location, faction or NPC."""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from questboard.db.base import Base, TimestampMixin


class ReputationStandingRow(Base, TimestampMixin):
    __tablename__ = "reputation_standings"
    __table_args__ = (UniqueConstraint("target_type", "entity_key", name="uq_reputation_target"),)

    standing_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    target_type: Mapped[str] = mapped_column(String(20), nullable=False)
    # Normalized (display name, casefolded) form used for matching
    entity_key: Mapped[str] = mapped_column(String(500), nullable=False)
    display_name: Mapped[str] = mapped_column(String(500), nullable=False)
    value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
