"""On-demand narrative insight over the current record set.

Runs one summarization call per explicit user action, independent of
the sync loop. Holds a single "active insight" slot: success replaces
it, dismiss() clears it, and no history is kept.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass

from cbms_events.aggregation.summary import filter_by_event
from cbms_events.core.errors import InsightValidationError
from cbms_events.insight.base import SummarizerBase
from cbms_events.models.domain import ParticipantEntity

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data available for analysis."


@dataclass(frozen=True)
class InsightResult:
    """Outcome of a single insight request.

    Exactly one of text / error is set.
    """

    text: str | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class InsightRequester:
    """Coordinates insight requests against a summarization collaborator."""

    def __init__(self, summarizer: SummarizerBase):
        self._summarizer = summarizer
        self._lock = threading.Lock()
        self._in_flight = 0
        self._insight: str | None = None
        self._last_error: str | None = None

    @property
    def busy(self) -> bool:
        """True while a request is in flight; callers disable the trigger."""
        return self._in_flight > 0

    @property
    def insight(self) -> str | None:
        return self._insight

    @property
    def last_error(self) -> str | None:
        return self._last_error

    def request_insight(
        self,
        records: Sequence[ParticipantEntity],
        event_filter: str | None = None,
    ) -> InsightResult:
        """Ask the collaborator for a narrative over the filtered records.

        Args:
            records: Current record snapshot.
            event_filter: Event name, or None / "all" for every event.

        Returns:
            InsightResult with the narrative, or with an error message if
            the collaborator failed.

        Raises:
            InsightValidationError: If records is empty. The collaborator
                is not contacted.
        """
        if not records:
            raise InsightValidationError(NO_DATA_MESSAGE)

        scoped = filter_by_event(records, event_filter)

        with self._lock:
            self._in_flight += 1
        try:
            text = self._summarizer.summarize(scoped)
        except Exception as e:
            message = f"Insight generation failed: {e}"
            logger.error(message)
            with self._lock:
                self._insight = None
                self._last_error = message
            return InsightResult(text=None, error=message)
        finally:
            with self._lock:
                self._in_flight -= 1

        with self._lock:
            self._insight = text
            self._last_error = None
        logger.info(f"Insight generated over {len(scoped)} records")
        return InsightResult(text=text)

    def dismiss(self) -> None:
        """Clear the active insight and any error message."""
        with self._lock:
            self._insight = None
            self._last_error = None
