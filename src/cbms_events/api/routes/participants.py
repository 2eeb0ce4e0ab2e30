"""Participants API endpoint.

GET /api/participants - List current records (optionally by event)
POST /api/participants - Register a participant
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from cbms_events.aggregation.summary import filter_by_event
from cbms_events.api.app import DashboardContext, get_context
from cbms_events.core.errors import AppendError
from cbms_events.models.types import ParticipantDetail, ParticipantSubmission

router = APIRouter()


@router.get("/participants", response_model=list[ParticipantDetail])
def list_participants(
    event: str | None = Query(default=None),
    context: DashboardContext = Depends(get_context),
) -> list[ParticipantDetail]:
    """List participants from the controller's current snapshot.

    Args:
        event: Event name filter, or "all".
        context: Dashboard context (injected).

    Returns:
        Participant records in store order.
    """
    snapshot = context.controller.snapshot()
    return [ParticipantDetail.from_entity(r) for r in filter_by_event(snapshot.records, event)]


@router.post("/participants", response_model=ParticipantDetail, status_code=201)
def register_participant(
    submission: ParticipantSubmission,
    context: DashboardContext = Depends(get_context),
) -> ParticipantDetail:
    """Register a participant.

    A successful append publishes RECORDS_UPDATED, which refreshes
    the controller's record set.

    Raises:
        HTTPException: 503 if the store could not save the record.
    """
    try:
        participant = context.store.append(submission)
    except AppendError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e

    return ParticipantDetail.from_entity(participant)
