"""Sync module for the dashboard's record set.

Structure:
- sync/events.py     - injectable publish/subscribe channel
- sync/scheduler.py  - cancellable periodic tasks
- sync/controller.py - refresh lifecycle and sync status
"""

# Re-export commonly used items for convenience
from cbms_events.sync.controller import SyncController, SyncSnapshot
from cbms_events.sync.events import RECORDS_UPDATED, EventBus, Subscription
from cbms_events.sync.scheduler import (
    ManualScheduler,
    ScheduledTask,
    Scheduler,
    ThreadingScheduler,
)

__all__ = [
    # Controller
    "SyncController",
    "SyncSnapshot",
    # Events
    "RECORDS_UPDATED",
    "EventBus",
    "Subscription",
    # Scheduling
    "ManualScheduler",
    "ScheduledTask",
    "Scheduler",
    "ThreadingScheduler",
]
