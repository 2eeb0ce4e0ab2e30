"""Events API endpoint.

GET /api/events - List registered events
POST /api/events - Register an event
DELETE /api/events/{event_id} - Remove an event
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from cbms_events.api.app import get_db_session
from cbms_events.core.identity import new_event_id, now_ms
from cbms_events.db import repo
from cbms_events.db.repo import DbSession
from cbms_events.models.domain import EventEntity
from cbms_events.models.types import EventDetail, EventSubmission

router = APIRouter()


def _build_event_detail(event: EventEntity) -> EventDetail:
    return EventDetail(id=event.event_id, name=event.name, date_created=event.date_created)


@router.get("/events", response_model=list[EventDetail])
def list_events(session: DbSession = Depends(get_db_session)) -> list[EventDetail]:
    """List events, newest first."""
    return [_build_event_detail(e) for e in repo.list_events(session)]


@router.post("/events", response_model=EventDetail, status_code=201)
def create_event(
    submission: EventSubmission,
    session: DbSession = Depends(get_db_session),
) -> EventDetail:
    """Register a new event.

    Raises:
        HTTPException: 409 if an event with the same name exists.
    """
    if repo.get_event_by_name(session, submission.name) is not None:
        raise HTTPException(status_code=409, detail="Event already exists")

    event = EventEntity(event_id=new_event_id(), name=submission.name, date_created=now_ms())
    repo.create_event(session, event)
    repo.commit(session)

    return _build_event_detail(event)


@router.delete("/events/{event_id}", status_code=204)
def delete_event(
    event_id: str,
    session: DbSession = Depends(get_db_session),
) -> Response:
    """Remove an event. Existing registrations are kept.

    Raises:
        HTTPException: 404 if event not found.
    """
    if not repo.delete_event(session, event_id):
        raise HTTPException(status_code=404, detail="Event not found")
    repo.commit(session)

    return Response(status_code=204)
