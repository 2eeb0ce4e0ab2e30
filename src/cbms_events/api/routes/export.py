"""Export API endpoint.

GET /api/participants/export - Download the master record list as CSV
"""

from __future__ import annotations

import csv
import io

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from cbms_events.aggregation.summary import filter_by_event, room_nights
from cbms_events.api.app import DashboardContext, get_context
from cbms_events.core.locations import ACCOMMODATION_DAYS, ALL_EVENTS
from cbms_events.models.domain import ParticipantEntity

router = APIRouter()

CSV_COLUMNS = [
    "id",
    "event_name",
    "municipality",
    "name",
    "sex",
    "designation",
    "email",
    "avail_accommodation",
    *ACCOMMODATION_DAYS,
    "room_nights",
    "timestamp",
]


def _to_row(record: ParticipantEntity) -> list:
    """Flatten a participant into CSV column order."""
    return [
        record.participant_id,
        record.event_name,
        record.municipality,
        record.name,
        record.sex,
        record.designation,
        record.email,
        record.avail_accommodation,
        *record.accommodation.as_list(),
        room_nights(record),
        record.timestamp,
    ]


def render_csv(records: list[ParticipantEntity]) -> str:
    """Render records as CSV text with a header row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_COLUMNS)
    for record in records:
        writer.writerow(_to_row(record))
    return buffer.getvalue()


@router.get("/participants/export")
def export_participants(
    event: str | None = Query(default=None),
    context: DashboardContext = Depends(get_context),
) -> StreamingResponse:
    """Export current records as a downloadable CSV.

    Args:
        event: Event name filter, or "all".
        context: Dashboard context (injected).

    Returns:
        CSV response with Content-Disposition header for download.
    """
    records = filter_by_event(context.controller.snapshot().records, event)
    label = event if event and event != ALL_EVENTS else "all_events"
    filename = "".join(c if c.isalnum() else "_" for c in label)

    return StreamingResponse(
        iter([render_csv(records)]),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}_participants.csv"'},
    )
