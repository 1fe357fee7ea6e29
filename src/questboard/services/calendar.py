"""In-world calendar clock."""

import logging
from typing import Protocol

from questboard.errors.exceptions import ValidationError
from questboard.events.bus import EventBus
from questboard.models.enums import CalendarEventType
from questboard.models.events import TimeAdvanced

logger = logging.getLogger(__name__)


class CalendarStateStore(Protocol):
    async def load_day(self) -> int | None: ...

    async def save_day(self, day: int) -> None: ...


class CalendarClock:
    """Holds the current in-world day and announces advances on the bus.

    Day advances are processed one at a time: ``advance`` awaits every
    subscriber (including the job board sweep) before returning.
    """

    def __init__(self, bus: EventBus, state: CalendarStateStore | None = None, start_day: int = 0):
        self._bus = bus
        self._state = state
        self._day = start_day

    async def load(self) -> int:
        """Restore the stored day, if any."""
        if self._state is not None:
            stored = await self._state.load_day()
            if stored is not None:
                self._day = stored
        return self._day

    def current_day(self) -> int:
        return self._day

    async def advance(self, days: int = 1) -> TimeAdvanced:
        if days < 1:
            raise ValidationError("Days to advance must be at least 1", details={"days": days})

        event = TimeAdvanced(from_day=self._day, to_day=self._day + days)
        if self._state is not None:
            await self._state.save_day(event.to_day)
        self._day = event.to_day

        logger.info("Calendar advanced from day %d to day %d", event.from_day, event.to_day)
        await self._bus.publish(CalendarEventType.TIME_ADVANCED, event)
        return event
