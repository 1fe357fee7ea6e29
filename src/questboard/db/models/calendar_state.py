"""Persisted in-world calendar day (single row)."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from questboard.db.base import Base, TimestampMixin


class CalendarStateRow(Base, TimestampMixin):
    __tablename__ = "calendar_state"

    calendar_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    current_day: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
