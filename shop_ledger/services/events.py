"""
In-process notifications.

EventBus is a one-shot publish/subscribe registry. Handlers
registered when an event is emitted receive it; anything that
subscribes later does not. There is no queue and no replay.

Notifier is the user-facing counterpart: a short, bounded list of
success and error messages that a front end can show and clear.
Every message is also written to the log.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from threading import Lock
from typing import Any, Callable

from shop_ledger.time_utils import utcnow

logger = logging.getLogger(__name__)

FINANCIAL_DATA_CHANGE = "financial-data-change"

Handler = Callable[[Any], None]


class EventBus:
    """Thread-safe, in-memory subscriber registry."""

    def __init__(self):
        self._subscribers: dict[str, list[Handler]] = {}
        self._lock = Lock()

    def subscribe(self, event_type: str, handler: Handler) -> None:
        if not callable(handler):
            raise TypeError(f"Handler must be callable, got {type(handler)}")
        with self._lock:
            handlers = self._subscribers.setdefault(event_type, [])
            if handler not in handlers:
                handlers.append(handler)

    def unsubscribe(self, event_type: str, handler: Handler) -> bool:
        """Remove a handler. Returns False if it was not registered."""
        with self._lock:
            handlers = self._subscribers.get(event_type, [])
            if handler not in handlers:
                return False
            handlers.remove(handler)
            return True

    def subscribers(self, event_type: str) -> list[Handler]:
        with self._lock:
            return list(self._subscribers.get(event_type, []))

    def emit(self, event_type: str, payload: Any = None) -> int:
        """
        Call every handler registered for event_type.

        A handler that raises is logged and skipped; the rest still
        run. Returns the number of handlers that were called.
        """
        handlers = self.subscribers(event_type)
        for handler in handlers:
            try:
                handler(payload)
            except Exception:
                logger.exception(
                    "Handler %s failed for %s",
                    getattr(handler, "__qualname__", handler),
                    event_type,
                )
        logger.debug("Emitted %s to %d handler(s)", event_type, len(handlers))
        return len(handlers)

    def clear(self) -> None:
        with self._lock:
            self._subscribers.clear()


# Process-wide bus for "balances changed, refresh your figures"
financial_events = EventBus()


@dataclass(frozen=True)
class Notification:
    level: str
    message: str
    created_at: datetime = field(default_factory=utcnow)


class Notifier:
    """Bounded list of recent user-facing messages."""

    SUCCESS = "success"
    ERROR = "error"

    def __init__(self, max_entries: int = 50):
        self._entries: deque[Notification] = deque(maxlen=max_entries)

    def success(self, message: str) -> Notification:
        logger.info(message)
        return self._push(self.SUCCESS, message)

    def error(self, message: str) -> Notification:
        logger.error(message)
        return self._push(self.ERROR, message)

    def _push(self, level: str, message: str) -> Notification:
        note = Notification(level=level, message=message)
        self._entries.append(note)
        return note

    @property
    def entries(self) -> list[Notification]:
        return list(self._entries)

    @property
    def last(self) -> Notification | None:
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()
