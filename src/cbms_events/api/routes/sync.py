"""Sync API endpoint.

GET /api/sync - Current sync status
POST /api/sync/refresh - Manual refresh
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from cbms_events.api.app import DashboardContext, get_context
from cbms_events.models.types import SyncStatusDetail
from cbms_events.sync.controller import SyncSnapshot

router = APIRouter()


def _build_status_detail(snapshot: SyncSnapshot) -> SyncStatusDetail:
    return SyncStatusDetail(
        status=snapshot.status,
        is_loading=snapshot.is_loading,
        record_count=len(snapshot.records),
        last_synced_at=snapshot.last_synced_at,
        last_error=snapshot.last_error,
    )


@router.get("/sync", response_model=SyncStatusDetail)
def get_sync_status(context: DashboardContext = Depends(get_context)) -> SyncStatusDetail:
    """Get the controller's externally observable fetch state."""
    return _build_status_detail(context.controller.snapshot())


@router.post("/sync/refresh", response_model=SyncStatusDetail)
def refresh_records(context: DashboardContext = Depends(get_context)) -> SyncStatusDetail:
    """Refresh records now, with the visible-loading flag.

    Fetch failures are reported through status="error", not as HTTP errors.
    """
    context.controller.refresh(force_loading=True)
    return _build_status_detail(context.controller.snapshot())
