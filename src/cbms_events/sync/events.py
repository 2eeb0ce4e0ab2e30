"""In-process publish/subscribe channel.

The composing application owns one EventBus and hands it to every writer
and to the SyncController; nothing subscribes through global state.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)

# Published by any writer after records change in the store. No payload.
RECORDS_UPDATED = "records_updated"

Callback = Callable[[], None]


class Subscription:
    """Handle returned by EventBus.subscribe."""

    def __init__(self, bus: EventBus, name: str, callback: Callback):
        self._bus = bus
        self.name = name
        self.callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        """Remove the callback from the bus. Safe to call repeatedly."""
        if self.active:
            self._bus._remove(self)
            self.active = False


class EventBus:
    """Named, payload-free notifications delivered synchronously."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscriptions: dict[str, list[Subscription]] = {}

    def subscribe(self, name: str, callback: Callback) -> Subscription:
        """Register a callback for an event name.

        Args:
            name: Event name, e.g. RECORDS_UPDATED.
            callback: Zero-argument callable.

        Returns:
            Subscription handle used to unsubscribe.
        """
        subscription = Subscription(self, name, callback)
        with self._lock:
            self._subscriptions.setdefault(name, []).append(subscription)
        return subscription

    def publish(self, name: str) -> None:
        """Invoke every current subscriber of an event name.

        Subscribers run in registration order on the publishing thread.
        A failing subscriber is logged and does not stop delivery.
        """
        with self._lock:
            targets = list(self._subscriptions.get(name, []))

        for subscription in targets:
            try:
                subscription.callback()
            except Exception:
                logger.exception(f"Subscriber for '{name}' failed")

    def subscriber_count(self, name: str) -> int:
        with self._lock:
            return len(self._subscriptions.get(name, []))

    def _remove(self, subscription: Subscription) -> None:
        with self._lock:
            subs = self._subscriptions.get(subscription.name, [])
            if subscription in subs:
                subs.remove(subscription)
