"""Base summarizer interface.

Summarization adapter: narrow interface `summarize(records) -> text`
- Forbidden: store access, sync state, UI shaping
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from cbms_events.models.domain import ParticipantEntity


class SummarizerBase(ABC):
    """Abstract base class for narrative summarization collaborators."""

    @abstractmethod
    def summarize(self, records: Sequence[ParticipantEntity]) -> str:
        """Produce a narrative logistics summary.

        Args:
            records: Participant records already restricted to the event filter.

        Returns:
            Narrative text.

        Raises:
            SummarizationError: If the collaborator fails or replies malformed.
        """
        pass
