"""
In-memory event bus for scheduling domain events.

The bus is the shipped ``EventSink``: components publish to it and
subscribers are called synchronously, in subscription order. Handler
failures are logged and never propagate back into the publishing
component, whose writes have already committed.
"""

import logging
from collections import defaultdict, deque
from collections.abc import Callable

from shiftcore.domain.scheduling.events.domain_events import EventSink
from shiftcore.domain.shared.base import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]
EventKey = type[DomainEvent] | str


class InMemoryEventBus(EventSink):
    """
    Callable-based event sink with a bounded history.

    Handlers subscribe either to an event class or to an ``event_name``
    routing key such as ``"shift.swapped"``. Class subscribers run before
    routing-key subscribers.
    """

    def __init__(self, max_history_size: int = 1000):
        self._subscribers: dict[EventKey, list[EventHandler]] = defaultdict(list)
        self._history: deque[DomainEvent] = deque(maxlen=max_history_size)

    @property
    def max_history_size(self) -> int | None:
        return self._history.maxlen

    def publish(self, event: DomainEvent) -> None:
        self._history.append(event)

        subscribers = [
            *self._subscribers.get(type(event), []),
            *self._subscribers.get(event.event_name, []),
        ]
        if not subscribers:
            logger.debug(f"{event.event_name} published with no subscribers")
            return

        logger.info(f"Delivering {event.event_name} to {len(subscribers)} subscribers")
        for subscriber in subscribers:
            try:
                subscriber(event)
            except Exception as e:
                logger.error(f"Subscriber {subscriber} failed on {event.event_name}: {e}")

    def subscribe(self, key: EventKey, handler: EventHandler) -> None:
        """
        Register ``handler`` for an event class or routing key.

        Subscribing the same handler twice to one key is a no-op.
        """
        subscribers = self._subscribers[key]
        if handler in subscribers:
            logger.warning(f"{handler} is already subscribed to {key}")
            return
        subscribers.append(handler)

    def unsubscribe(self, key: EventKey, handler: EventHandler) -> None:
        subscribers = self._subscribers.get(key, [])
        if handler not in subscribers:
            logger.warning(f"{handler} is not subscribed to {key}")
            return
        subscribers.remove(handler)

    def clear_handlers(self, key: EventKey | None = None) -> None:
        """Drop the subscribers of one key, or of every key when ``key`` is None."""
        if key is None:
            self._subscribers.clear()
        else:
            self._subscribers.pop(key, None)

    def get_handler_count(self, key: EventKey) -> int:
        return len(self._subscribers.get(key, []))

    def get_event_history(self, key: EventKey | None = None) -> list[DomainEvent]:
        """Published events, oldest first, optionally narrowed to one class or routing key."""
        if key is None:
            return list(self._history)
        if isinstance(key, str):
            return [e for e in self._history if e.event_name == key]
        return [e for e in self._history if type(e) is key]

    def clear_event_history(self) -> None:
        self._history.clear()
