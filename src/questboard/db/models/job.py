"""Job table."""

from sqlalchemy import JSON, Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from questboard.db.base import Base, TimestampMixin


class JobRow(Base, TimestampMixin):
    __tablename__ = "jobs"

    job_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    location: Mapped[str | None] = mapped_column(String(500), nullable=True, index=True)
    questgiver: Mapped[str | None] = mapped_column(String(500), nullable=True)
    prerequisites: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    post_date: Mapped[int] = mapped_column(Integer, nullable=False)
    taken_date: Mapped[int | None] = mapped_column(Integer, nullable=True)
    duration_availability: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    duration_completion: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    reward_funds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    reward_xp: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    reward_items: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    reputation_impacts: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    narrative_consequence: Mapped[str | None] = mapped_column(Text, nullable=True)
    hide_from_players: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    rewards_distributed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
