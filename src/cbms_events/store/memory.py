"""In-memory record store for demos and testing.

Keeps participants in a list guarded by a lock. Failures can be
injected to exercise the controller's error path without a database.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable

from cbms_events.core.errors import FetchError
from cbms_events.models.domain import ParticipantEntity
from cbms_events.models.types import ParticipantSubmission
from cbms_events.store.base import RecordStoreBase, build_participant
from cbms_events.sync.events import RECORDS_UPDATED, EventBus


class InMemoryRecordStore(RecordStoreBase):
    """Process-local participant store.

    Attributes:
        fetch_count: Number of fetch_all() calls, successful or not.
    """

    def __init__(self, bus: EventBus, initial: Iterable[ParticipantEntity] | None = None):
        """Initialize store.

        Args:
            bus: Event bus notified after each append.
            initial: Optional records to preload (no notification sent).
        """
        self._bus = bus
        self._lock = threading.Lock()
        self._records: list[ParticipantEntity] = list(initial or [])
        self._pending_failures: list[Exception] = []
        self.fetch_count = 0

    def fail_next_fetch(self, error: Exception | None = None) -> None:
        """Make the next fetch_all() raise.

        Args:
            error: Exception to raise. Defaults to a FetchError.
        """
        with self._lock:
            self._pending_failures.append(error or FetchError("store unavailable"))

    def fetch_all(self) -> list[ParticipantEntity]:
        with self._lock:
            self.fetch_count += 1
            if self._pending_failures:
                raise self._pending_failures.pop(0)
            return list(self._records)

    def append(self, submission: ParticipantSubmission) -> ParticipantEntity:
        participant = build_participant(submission)
        with self._lock:
            self._records.append(participant)
        self._bus.publish(RECORDS_UPDATED)
        return participant
