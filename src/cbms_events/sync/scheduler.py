"""Cancellable periodic task scheduling.

- ThreadingScheduler: production, one daemon thread per task
- ManualScheduler: simulated clock for tests and scripted demos

Every periodic task is represented by a ScheduledTask handle owned by
whoever scheduled it; nothing runs implicitly.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable

logger = logging.getLogger(__name__)

# Upper bound on waiting for a running callback during cancel()
CANCEL_JOIN_TIMEOUT_SEC = 5.0


class ScheduledTask(ABC):
    """Handle for a periodic task."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop the task. No new callback starts after cancel() returns."""
        pass

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        pass


class Scheduler(ABC):
    """Abstract periodic scheduler."""

    @abstractmethod
    def call_every(self, interval: float, callback: Callable[[], None]) -> ScheduledTask:
        """Run callback every `interval` seconds until cancelled.

        The first call happens one interval after scheduling.

        Args:
            interval: Period in seconds, must be positive.
            callback: Zero-argument callable.

        Returns:
            ScheduledTask handle.
        """
        pass


# ============================================================================
# Threaded implementation
# ============================================================================


class _ThreadTask(ScheduledTask):
    def __init__(self, interval: float, callback: Callable[[], None], name: str):
        self._interval = interval
        self._callback = callback
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    def start(self) -> None:
        self._thread.start()

    def _run(self) -> None:
        # Event.wait returns True as soon as cancel() sets the flag
        while not self._stop.wait(self._interval):
            try:
                self._callback()
            except Exception:
                logger.exception("Scheduled task failed")

    def cancel(self) -> None:
        self._stop.set()
        if self._thread.is_alive() and threading.current_thread() is not self._thread:
            self._thread.join(timeout=CANCEL_JOIN_TIMEOUT_SEC)

    @property
    def cancelled(self) -> bool:
        return self._stop.is_set()


class ThreadingScheduler(Scheduler):
    """Runs each periodic task on its own daemon thread."""

    def __init__(self, thread_name: str = "cbms-poll"):
        self.thread_name = thread_name

    def call_every(self, interval: float, callback: Callable[[], None]) -> ScheduledTask:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        task = _ThreadTask(interval, callback, self.thread_name)
        task.start()
        return task


# ============================================================================
# Simulated-time implementation
# ============================================================================


class _ManualTask(ScheduledTask):
    def __init__(self, interval: float, callback: Callable[[], None], next_due: float):
        self.interval = interval
        self.callback = callback
        self.next_due = next_due
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """Deterministic scheduler driven by advance().

    Time only moves when advance() is called; due callbacks run on the
    caller's thread in due-time order.
    """

    def __init__(self, start: float = 0.0):
        self.now = start
        self._tasks: list[_ManualTask] = []

    def call_every(self, interval: float, callback: Callable[[], None]) -> ScheduledTask:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        task = _ManualTask(interval, callback, self.now + interval)
        self._tasks.append(task)
        return task

    @property
    def active_tasks(self) -> int:
        return sum(1 for t in self._tasks if not t.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing due callbacks.

        Args:
            seconds: Simulated time to advance.

        Returns:
            Number of callbacks fired.
        """
        target = self.now + seconds
        fired = 0

        while True:
            live = [t for t in self._tasks if not t.cancelled and t.next_due <= target]
            if not live:
                break
            task = min(live, key=lambda t: t.next_due)
            self.now = task.next_due
            task.next_due += task.interval
            task.callback()
            fired += 1

        self._tasks = [t for t in self._tasks if not t.cancelled]
        self.now = target
        return fired
