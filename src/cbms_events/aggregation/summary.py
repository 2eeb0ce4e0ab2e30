"""Dashboard analytics aggregation.

Computes headcounts by municipality, sex and event, plus total
accommodation room-nights, over participant records.
Pure functions - no store access, no hidden state.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

from cbms_events.core.locations import ALL_EVENTS
from cbms_events.models.domain import ParticipantEntity
from cbms_events.models.types import AnalyticsSummary


def filter_by_event(
    records: Iterable[ParticipantEntity],
    event_filter: str | None,
) -> list[ParticipantEntity]:
    """Restrict records to a single event.

    Args:
        records: Participant records.
        event_filter: Event name, or None / "all" for no restriction.

    Returns:
        Records in scope, in input order.
    """
    if event_filter is None or event_filter == ALL_EVENTS:
        return list(records)
    return [r for r in records if r.event_name == event_filter]


def room_nights(record: ParticipantEntity) -> int:
    """Count accommodation days claimed by one participant.

    Day flags are ignored unless the participant asked for accommodation,
    whatever the store holds.
    """
    if not record.avail_accommodation:
        return 0
    return record.accommodation.selected_count()


def summarize(
    records: Sequence[ParticipantEntity],
    event_filter: str | None = None,
) -> AnalyticsSummary:
    """Compute dashboard analytics for a record set.

    Filtering happens once, so all four statistics describe the same subset.

    Args:
        records: Participant records (may be empty).
        event_filter: Event name, or None / "all" for every event.

    Returns:
        AnalyticsSummary with counts; mappings only hold non-zero keys.
    """
    in_scope = filter_by_event(records, event_filter)

    municipality_stats: Counter[str] = Counter()
    gender_stats: Counter[str] = Counter()
    event_stats: Counter[str] = Counter()
    total_room_nights = 0

    for record in in_scope:
        municipality_stats[record.municipality] += 1
        gender_stats[record.sex] += 1
        event_stats[record.event_name] += 1
        total_room_nights += room_nights(record)

    return AnalyticsSummary(
        total_participants=len(in_scope),
        total_room_nights=total_room_nights,
        municipality_stats=dict(municipality_stats),
        gender_stats=dict(gender_stats),
        event_stats=dict(event_stats),
    )


def list_event_names(records: Iterable[ParticipantEntity]) -> list[str]:
    """Sorted distinct event names present in a record set."""
    return sorted({r.event_name for r in records})
