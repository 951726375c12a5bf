"""A broadcast bus that forwards every message to all connected handlers."""

from __future__ import annotations

import itertools
from collections.abc import Callable

Handler = Callable[[str], None]


class EventBus:
    """Deliver each sent message to every connected handler."""

    def __init__(self) -> None:
        self._subscribers: dict[int, Handler] = {}
        self._ids = itertools.count(1)

    def connect(self, handler: Handler) -> int:
        """Subscribe a handler and return its id."""
        handler_id = next(self._ids)
        self._subscribers[handler_id] = handler
        return handler_id

    def disconnect(self, handler_id: int) -> None:
        """Remove a subscriber; unknown ids are ignored."""
        self._subscribers.pop(handler_id, None)

    def send(self, message: str) -> None:
        """Hand the message to every subscriber."""
        for handler in list(self._subscribers.values()):
            handler(message)

    def __len__(self) -> int:
        return len(self._subscribers)