"""In-process event dispatch for simulation notifications.

The scheduler publishes an event each time an interaction is scored, an agent
leaves the world, a generation closes or the scheduler changes phase.
Statistics collectors and host loggers listen for the classes they care about.
Handlers run immediately on the caller's stack, in the order they subscribed.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

E = TypeVar("E")

Handler = Callable[[Any], None]


class EventBus:
    """Routes each event to the handlers subscribed to its exact class.

    Subclasses are not matched: a handler for ``GenerationCompletedEvent``
    never sees some other event that happens to inherit from it.
    """

    def __init__(self) -> None:
        self._routes: dict[type, list[Handler]] = {}

    def subscribe(self, event_type: type[E], handler: Callable[[E], None]) -> None:
        self._routes.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: type[E], handler: Callable[[E], None]) -> bool:
        """Drop one registration of ``handler``; False when there was none."""
        route = self._routes.get(event_type, [])
        try:
            route.remove(handler)
        except ValueError:
            return False
        if not route:
            del self._routes[event_type]
        return True

    def emit(self, event: object) -> None:
        # Snapshot so a handler may (un)subscribe while the event is in flight.
        for handler in tuple(self._routes.get(type(event), ())):
            handler(event)

    def has_subscribers(self, event_type: type) -> bool:
        return event_type in self._routes

    def clear_subscribers(self) -> None:
        self._routes = {}
