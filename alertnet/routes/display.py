"""
Display preferences (high contrast mode).

Switching contrast swaps the map base tiles and restyles every primitive.
"""

from fastapi import APIRouter, Depends

from alertnet.models.base import DisplayPreferences
from alertnet.services.app_state import AppState, get_app_state

router = APIRouter(prefix="/display", tags=["Display"])


@router.get("", response_model=DisplayPreferences)
async def get_display(state: AppState = Depends(get_app_state)):
    return state.display


@router.patch("", response_model=DisplayPreferences)
async def update_display(preferences: DisplayPreferences, state: AppState = Depends(get_app_state)):
    return state.set_contrast_mode(preferences.contrast_mode)
