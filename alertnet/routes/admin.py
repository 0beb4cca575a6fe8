"""
Admin endpoints - operator verification panel.

DESIGN PRINCIPLES:
- Operators move reports freely between New, Under Review, Verified and
  Duplicate; duplicates are marked by hand
- Verifying a report escalates its derived zone to High
- Marking a duplicate removes its derived zone
- Reports are never deleted or edited here
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from alertnet.models.report import Report, ReportStatus, StatusUpdateRequest
from alertnet.models.zone import HazardZone, SeverityUpdateRequest
from alertnet.services.app_state import AppState, get_app_state
from alertnet.services.filter_engine import sort_for_review


router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/reports", response_model=List[Report])
async def review_queue(
    report_status: Optional[ReportStatus] = Query(None, alias="status", description="Only reports in this status"),
    state: AppState = Depends(get_app_state),
):
    """Reports in triage order: New, Under Review, Verified, Duplicate; newest first within each."""
    reports = sort_for_review(state.store.reports)
    if report_status is not None:
        reports = [r for r in reports if r.status == report_status]
    return reports


@router.patch("/reports/{report_id}/status")
async def change_status(report_id: str, request: StatusUpdateRequest, state: AppState = Depends(get_app_state)):
    """
    Change report status.

    **Side effects on the derived zone:**
    - Verified: severity High, name marked "(Verified)"
    - Duplicate: zone removed
    - New / Under Review: zone untouched

    Raises:
        404: Report not found
    """
    if state.store.get_report(report_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Report {report_id} not found"
        )

    state.store.update_report_status(report_id, request.status)
    zone_id = state.store.derived_zone_id_for(report_id)
    return {
        "success": True,
        "message": f"Status updated to {request.status.value}",
        "report": state.store.get_report(report_id),
        "zone": state.store.get_zone(zone_id) if zone_id else None,
    }


@router.patch("/zones/{zone_id}/severity", response_model=HazardZone)
async def change_zone_severity(zone_id: str, request: SeverityUpdateRequest, state: AppState = Depends(get_app_state)):
    if state.store.get_zone(zone_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Zone {zone_id} not found"
        )
    state.store.escalate_zone_severity(zone_id, request.severity)
    return state.store.get_zone(zone_id)


class SmsAlert(BaseModel):
    recipient: str
    report_id: str
    body: str


@router.get("/alerts", response_model=List[SmsAlert])
async def recent_alerts(state: AppState = Depends(get_app_state)):
    """
    Simulated SMS alerts, oldest first.

    Only the most recent ALERT_HISTORY_SIZE messages are kept.
    """
    return state.dispatcher.sent
