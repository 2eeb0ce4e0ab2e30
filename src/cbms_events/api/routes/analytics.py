"""Analytics API endpoint.

GET /api/analytics - Aggregate statistics (optionally by event)
GET /api/analytics/events - Event names present in the current records
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from cbms_events.aggregation.summary import list_event_names, summarize
from cbms_events.api.app import DashboardContext, get_context
from cbms_events.models.types import AnalyticsSummary

router = APIRouter()


@router.get("/analytics", response_model=AnalyticsSummary)
def get_analytics(
    event: str | None = Query(default=None),
    context: DashboardContext = Depends(get_context),
) -> AnalyticsSummary:
    """Summarize the current record set.

    Args:
        event: Event name filter, or "all".
        context: Dashboard context (injected).

    Returns:
        AnalyticsSummary over the filtered snapshot.
    """
    return summarize(context.controller.snapshot().records, event)


@router.get("/analytics/events", response_model=list[str])
def get_event_names(context: DashboardContext = Depends(get_context)) -> list[str]:
    """List distinct event names for the dashboard's event selector."""
    return list_event_names(context.controller.snapshot().records)
