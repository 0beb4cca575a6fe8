"""
Report endpoints - API routes for citizen report submission and retrieval.

Submissions are accepted immediately (202) and committed in the background
after the processing delay; clients poll the submission record.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from alertnet.models.report import DisasterType, Report, ReportCreate, ReportStatus
from alertnet.services.app_state import AppState, get_app_state
from alertnet.services.submission_pipeline import Submission, SubmissionValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.post("", status_code=status.HTTP_202_ACCEPTED, response_model=Submission)
async def submit_report(report: ReportCreate, state: AppState = Depends(get_app_state)):
    """
    Submit a new citizen report.

    This endpoint:
    1. Validates the form fields (type, description, region)
    2. Starts the submission pipeline in the background
    3. Returns the submission record to poll
    """
    logger.info(f"📝 POST /reports - type={report.type.value}, region={report.location_text}")
    try:
        return state.pipeline.start(report)
    except SubmissionValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e)
        )


@router.get("", response_model=List[Report])
async def get_reports(
    type: Optional[DisasterType] = Query(None, description="Only reports of this disaster type"),
    report_status: Optional[ReportStatus] = Query(None, alias="status", description="Only reports in this status"),
    state: AppState = Depends(get_app_state),
):
    """All reports, most recent first."""
    reports = state.store.reports
    if type is not None:
        reports = [r for r in reports if r.type == type]
    if report_status is not None:
        reports = [r for r in reports if r.status == report_status]
    return reports


@router.get("/submissions/{submission_id}", response_model=Submission)
async def get_submission(submission_id: str, state: AppState = Depends(get_app_state)):
    submission = state.pipeline.get_submission(submission_id)
    if submission is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Submission {submission_id} not found"
        )
    return submission


@router.get("/{report_id}", response_model=Report)
async def get_report(report_id: str, state: AppState = Depends(get_app_state)):
    report = state.store.get_report(report_id)
    if report is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Report {report_id} not found"
        )
    return report
