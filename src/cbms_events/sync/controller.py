"""Sync controller for participant records.

Owns the refresh lifecycle of the dashboard's record set:
- startup: one refresh with the visible-loading flag
- timer: background refresh every poll interval
- RECORDS_UPDATED signal: immediate background refresh
- manual: refresh with the visible-loading flag

State machine: idle -> syncing -> idle (success) | error (failure).
No state is terminal; polling keeps running after errors.

Overlapping refreshes are sequenced by a monotonically increasing token:
only the completion of the most recently issued refresh is applied
(last-issued-wins). Completions arriving after dispose() are discarded.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone

from cbms_events.models.domain import ParticipantEntity, SyncStatus
from cbms_events.store.base import RecordStoreBase
from cbms_events.sync.events import RECORDS_UPDATED, EventBus, Subscription
from cbms_events.sync.scheduler import ScheduledTask, Scheduler

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SEC = 30.0


@dataclass(frozen=True)
class SyncSnapshot:
    """Read-only view of controller state.

    Attributes:
        records: Last successfully fetched records, in store order.
        status: One of 'idle', 'syncing', 'error'.
        is_loading: True while a refresh requested with the loading flag
            (startup or manual) is the latest in flight.
        last_synced_at: Time of the last applied successful fetch.
        last_error: Message of the last applied failure, cleared on success.
    """

    records: tuple[ParticipantEntity, ...]
    status: SyncStatus
    is_loading: bool
    last_synced_at: datetime | None
    last_error: str | None


class SyncController:
    """Keeps one authoritative, current view of participant records."""

    def __init__(
        self,
        store: RecordStoreBase,
        bus: EventBus,
        scheduler: Scheduler,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SEC,
    ):
        """Initialize controller. No fetch happens until start().

        Args:
            store: Record store to pull from.
            bus: Event bus carrying RECORDS_UPDATED.
            scheduler: Scheduler for the periodic poll.
            poll_interval: Seconds between background refreshes.
        """
        self._store = store
        self._bus = bus
        self._scheduler = scheduler
        self.poll_interval = poll_interval

        self._lock = threading.Lock()
        self._records: tuple[ParticipantEntity, ...] = ()
        self._status: SyncStatus = "idle"
        self._is_loading = False
        self._last_synced_at: datetime | None = None
        self._last_error: str | None = None

        self._latest_token = 0
        self._started = False
        self._disposed = False
        self._poll_task: ScheduledTask | None = None
        self._subscription: Subscription | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Subscribe to change signals, start polling, and load records.

        Raises:
            RuntimeError: If already started or disposed.
        """
        with self._lock:
            if self._disposed:
                raise RuntimeError("SyncController has been disposed")
            if self._started:
                raise RuntimeError("SyncController already started")
            self._started = True

        self._subscription = self._bus.subscribe(RECORDS_UPDATED, self._on_records_updated)
        self._poll_task = self._scheduler.call_every(self.poll_interval, self._on_poll)
        logger.info(f"Sync started (poll every {self.poll_interval:g}s)")

        self.refresh(force_loading=True)

    def dispose(self) -> None:
        """Cancel polling and the change subscription. Idempotent.

        Fetches still in flight may complete afterwards; their results
        are discarded. A sync cut short this way leaves the status idle.
        """
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            self._is_loading = False
            if self._status == "syncing":
                self._status = "idle"

        if self._poll_task is not None:
            self._poll_task.cancel()
            self._poll_task = None
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        logger.info("Sync disposed")

    @property
    def disposed(self) -> bool:
        return self._disposed

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    def refresh(self, force_loading: bool = False) -> bool:
        """Fetch records from the store and apply the result.

        Never raises on fetch failure: the failure is reflected only
        through status='error', with the previous records retained.

        Args:
            force_loading: Set the visible-loading flag for this refresh.

        Returns:
            True if this refresh's result was applied (success or error),
            False if it was superseded or the controller was disposed.
        """
        with self._lock:
            if self._disposed:
                return False
            self._latest_token += 1
            token = self._latest_token
            self._status = "syncing"
            if force_loading:
                self._is_loading = True
        logger.debug(f"Refresh #{token} issued (loading={force_loading})")

        try:
            records = self._store.fetch_all()
        except Exception as e:
            return self._apply_failure(token, e)

        return self._apply_success(token, records)

    def _apply_success(self, token: int, records: list[ParticipantEntity]) -> bool:
        with self._lock:
            if not self._is_current(token):
                return False
            self._records = tuple(records)
            self._status = "idle"
            self._is_loading = False
            self._last_synced_at = datetime.now(timezone.utc)
            self._last_error = None
        logger.debug(f"Refresh #{token} applied ({len(records)} records)")
        return True

    def _apply_failure(self, token: int, error: Exception) -> bool:
        with self._lock:
            if not self._is_current(token):
                return False
            self._status = "error"
            self._is_loading = False
            self._last_error = f"{type(error).__name__}: {error}"
        logger.warning(f"Refresh #{token} failed, keeping previous records: {error}")
        return True

    def _is_current(self, token: int) -> bool:
        """Check whether a completion may be applied. Caller holds the lock."""
        if self._disposed:
            logger.debug(f"Refresh #{token} completed after dispose, discarded")
            return False
        if token != self._latest_token:
            logger.debug(
                f"Refresh #{token} superseded by #{self._latest_token}, discarded"
            )
            return False
        return True

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------

    def _on_poll(self) -> None:
        self.refresh()

    def _on_records_updated(self) -> None:
        self.refresh()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def snapshot(self) -> SyncSnapshot:
        """Return a read-only copy of the current state."""
        with self._lock:
            return SyncSnapshot(
                records=self._records,
                status=self._status,
                is_loading=self._is_loading,
                last_synced_at=self._last_synced_at,
                last_error=self._last_error,
            )

    @property
    def status(self) -> SyncStatus:
        return self._status

    @property
    def records(self) -> tuple[ParticipantEntity, ...]:
        return self._records
