"""Live update subscriptions for per-user collections."""

import logging
import threading
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Subscription:
    """Handle returned to a listener; cancel it to stop receiving updates."""

    def __init__(self, on_cancel: Callable[[], None]) -> None:
        self._on_cancel: Callable[[], None] | None = on_cancel
        self._lock = threading.Lock()

    @property
    def active(self) -> bool:
        return self._on_cancel is not None

    def cancel(self) -> None:
        """Stop delivery. Safe to call repeatedly or after the feed closed."""
        with self._lock:
            on_cancel, self._on_cancel = self._on_cancel, None
        if on_cancel is not None:
            on_cancel()


class ChangeFeed(Generic[T]):
    """Registry of listeners keyed by owner id."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._listeners: dict[str, dict[int, Callable[[T], None]]] = {}
        self._next_token = 0
        self._lock = threading.Lock()

    def subscribe(self, user_id: str, callback: Callable[[T], None]) -> Subscription:
        """Register a callback for the owner's updates."""
        with self._lock:
            token = self._next_token
            self._next_token += 1
            self._listeners.setdefault(user_id, {})[token] = callback

        def remove() -> None:
            with self._lock:
                listeners = self._listeners.get(user_id)
                if listeners is None:
                    return
                listeners.pop(token, None)
                if not listeners:
                    self._listeners.pop(user_id, None)

        return Subscription(remove)

    def has_listeners(self, user_id: str) -> bool:
        with self._lock:
            return bool(self._listeners.get(user_id))

    def publish(self, user_id: str, value: T) -> None:
        """Deliver a value to every listener registered for the owner."""
        with self._lock:
            callbacks = list(self._listeners.get(user_id, {}).values())
        for callback in callbacks:
            try:
                callback(value)
            except Exception:
                logger.exception("Listener failed on %s update", self.name)

    def close(self) -> None:
        """Drop all listeners."""
        with self._lock:
            self._listeners.clear()
