"""Mock summarizer for demo/testing.

Builds a deterministic narrative from the aggregate statistics without
calling a language model.
"""

from __future__ import annotations

from collections.abc import Sequence

from cbms_events.aggregation.summary import summarize
from cbms_events.insight.base import SummarizerBase
from cbms_events.models.domain import ParticipantEntity


class MockSummarizer(SummarizerBase):
    """Offline summarizer.

    Attributes:
        calls: Number of summarize() invocations.
    """

    def __init__(self) -> None:
        self.calls = 0

    def summarize(self, records: Sequence[ParticipantEntity]) -> str:
        self.calls += 1
        stats = summarize(records)

        if stats.total_participants == 0:
            return "No registrations in scope; no logistics requirements to report."

        top_municipality = max(
            sorted(stats.municipality_stats), key=lambda m: stats.municipality_stats[m]
        )
        gender_parts = ", ".join(
            f"{sex}: {count}" for sex, count in sorted(stats.gender_stats.items())
        )
        return (
            f"{stats.total_participants} participants registered across "
            f"{len(stats.event_stats)} event(s). "
            f"Largest delegation: {top_municipality} "
            f"({stats.municipality_stats[top_municipality]}). "
            f"Gender breakdown - {gender_parts}. "
            f"Accommodation demand: {stats.total_room_nights} room-night(s)."
        )
