"""
Pydantic models shared across routes: notifications, news, map views.

DESIGN PRINCIPLE:
- Models reflect data structure, not business logic
- Keep models simple and focused on validation
"""

from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import List
from enum import Enum

from alertnet.models.report import DisasterType, Report
from alertnet.models.resource import Resource
from alertnet.models.zone import HazardZone


class NotificationType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class Notification(BaseModel):
    """An ephemeral user-facing message."""
    id: int
    message: str
    type: NotificationType = NotificationType.INFO
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class NewsArticle(BaseModel):
    id: str
    title: str
    description: str
    image_url: str
    source: str
    link: str
    published_date: datetime
    disaster_type_tags: List[DisasterType] = Field(default_factory=list)


class MapFilter(str, Enum):
    """
    Main category filter of the live map.
    ALL and DISASTERS are view-level; the rest mirror resource categories.
    """
    ALL = "All"
    DISASTERS = "Disasters"
    MEDICAL = "Medical Facilities"
    FOOD = "Food Security"
    SHELTER = "Shelters"
    WATER = "Water Source"
    EMERGENCY_SERVICES = "Emergency Services"


class FilterState(BaseModel):
    active_filter: MapFilter = MapFilter.ALL
    search_term: str = Field("", max_length=200)


class VisibleSubset(BaseModel):
    """Filtered {reports, resources, zones} computed for rendering."""
    reports: List[Report] = Field(default_factory=list)
    resources: List[Resource] = Field(default_factory=list)
    zones: List[HazardZone] = Field(default_factory=list)


class DisplayPreferences(BaseModel):
    contrast_mode: bool = False
