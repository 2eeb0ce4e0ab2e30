"""Insight API endpoint.

POST /api/insight - Generate a narrative summary
GET /api/insight - Get the active insight
DELETE /api/insight - Dismiss the active insight
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from cbms_events.api.app import DashboardContext, get_context
from cbms_events.core.errors import InsightValidationError
from cbms_events.models.types import InsightDetail, InsightRequest

router = APIRouter()


def _build_insight_detail(context: DashboardContext) -> InsightDetail:
    requester = context.requester
    return InsightDetail(
        insight=requester.insight,
        busy=requester.busy,
        error=requester.last_error,
    )


@router.post("/insight", response_model=InsightDetail)
def generate_insight(
    request: InsightRequest,
    context: DashboardContext = Depends(get_context),
) -> InsightDetail:
    """Generate a narrative over the current (filtered) records.

    Raises:
        HTTPException: 409 if a request is already running, 422 if there
            are no records, 502 if the summarization service failed.
    """
    if context.requester.busy:
        raise HTTPException(status_code=409, detail="Insight generation already in progress")

    records = context.controller.snapshot().records
    try:
        result = context.requester.request_insight(records, request.event)
    except InsightValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    if not result.ok:
        raise HTTPException(status_code=502, detail=result.error)

    return _build_insight_detail(context)


@router.get("/insight", response_model=InsightDetail)
def get_insight(context: DashboardContext = Depends(get_context)) -> InsightDetail:
    """Get the active insight and busy flag."""
    return _build_insight_detail(context)


@router.delete("/insight", response_model=InsightDetail)
def dismiss_insight(context: DashboardContext = Depends(get_context)) -> InsightDetail:
    """Clear the active insight."""
    context.requester.dismiss()
    return _build_insight_detail(context)
