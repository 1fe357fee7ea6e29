"""In-process publish/subscribe transport for board and calendar events."""

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Awaitable[None] | None]


@dataclass
class Subscription:
    """A handler registered for one event type."""

    event_type: str
    handler: Handler
    active: bool = True


class EventBus:
    """Dispatches events to subscribers in subscription order.

    Handlers may be plain callables or coroutine functions; coroutines are
    awaited before the next handler runs. A failing handler is logged and
    does not prevent the remaining handlers from running.
    """

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def subscribe(self, event_type: str, handler: Handler) -> Callable[[], None]:
        """Register ``handler``; returns a callable that unsubscribes it."""
        subscription = Subscription(event_type=event_type, handler=handler)
        self._subscriptions.append(subscription)
        return lambda: self._remove(subscription)

    def unsubscribe(self, event_type: str, handler: Handler) -> None:
        self._subscriptions = [
            s
            for s in self._subscriptions
            if not (s.event_type == event_type and s.handler == handler)
        ]

    def _remove(self, subscription: Subscription) -> None:
        subscription.active = False
        self._subscriptions = [s for s in self._subscriptions if s is not subscription]

    def get_subscribers(self, event_type: str) -> list[Subscription]:
        return [s for s in self._subscriptions if s.active and s.event_type == event_type]

    def list_all(self) -> list[Subscription]:
        return list(self._subscriptions)

    async def publish(self, event_type: str, payload: Any) -> int:
        """Deliver ``payload`` to every subscriber. Returns the failure count."""
        failures = 0
        for sub in self.get_subscribers(event_type):
            try:
                result = sub.handler(payload)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                failures += 1
                logger.exception("Event handler failed for %s", event_type)
        return failures
