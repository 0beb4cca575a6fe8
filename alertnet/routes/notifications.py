"""
Notification endpoints - the single display slot plus recent history.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from alertnet.models.base import Notification
from alertnet.services.app_state import AppState, get_app_state

router = APIRouter(prefix="/notifications", tags=["Notifications"])


class NotificationFeed(BaseModel):
    current: Optional[Notification] = None
    busy: bool
    history: List[Notification]


@router.get("", response_model=NotificationFeed)
async def get_notifications(state: AppState = Depends(get_app_state)):
    return NotificationFeed(
        current=state.notifications.current,
        busy=state.busy,
        history=state.notifications.history,
    )


@router.delete("/current")
async def dismiss_current(notification_id: Optional[int] = None, state: AppState = Depends(get_app_state)):
    """Manual dismiss. With an id, only dismisses if that notification is still shown."""
    return {"dismissed": state.notifications.dismiss(notification_id)}


class Announcement(BaseModel):
    text: str
    language: str


@router.get("/announcements", response_model=List[Announcement])
async def get_announcements(state: AppState = Depends(get_app_state)):
    """Recent voice confirmations, oldest first. Clients speak them locally."""
    return state.announcer.spoken
