"""Party treasury table (single row)."""

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from questboard.db.base import Base, TimestampMixin


class PartyTreasuryRow(Base, TimestampMixin):
    __tablename__ = "party_treasury"

    party_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    funds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    xp: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    items: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
