"""
AI assistance endpoints for the report form.

AI only suggests: nothing returned here is written to a report unless the
citizen submits it.
"""

import base64
import binascii
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from alertnet.models.report import DisasterType
from alertnet.services.ai_plugin import AIAssistanceUnavailableError, match_disaster_type
from alertnet.services.app_state import AppState, get_app_state

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["AI"])


class AnalyzeRequest(BaseModel):
    description: str = Field(..., min_length=1, max_length=2000)
    image_base64: Optional[str] = Field(None, description="Optional JPEG photo, base64 encoded")


class AnalyzeResponse(BaseModel):
    summary: Optional[str] = None
    suggested_type: Optional[str] = None
    matched_type: Optional[DisasterType] = None
    safety_tip: Optional[str] = None


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_report(request: AnalyzeRequest, state: AppState = Depends(get_app_state)):
    """
    Summary, suggested disaster type and a safety tip for a report draft.

    Raises:
        400: image is not valid base64
        503: AI provider failed
    """
    image_bytes = None
    if request.image_base64:
        try:
            image_bytes = base64.b64decode(request.image_base64, validate=True)
        except (binascii.Error, ValueError):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="image_base64 is not valid base64"
            )

    try:
        suggestion = await state.ai.analyze(request.description, image_bytes)
    except AIAssistanceUnavailableError as e:
        logger.warning(f"⚠️ AI analysis unavailable: {e.__cause__ or e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e)
        )

    return AnalyzeResponse(
        summary=suggestion.summary,
        suggested_type=suggestion.suggested_type,
        matched_type=match_disaster_type(suggestion.suggested_type),
        safety_tip=suggestion.safety_tip,
    )


@router.get("/safety-tip/{disaster_type}")
async def safety_tip(disaster_type: DisasterType, state: AppState = Depends(get_app_state)):
    tip = await state.ai.generate_safety_tip(disaster_type)
    return {"disaster_type": disaster_type, "tip": tip}
