"""
Relief resource models (hospitals, shelters, food and water points).
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List
from enum import Enum

from alertnet.models.geo import Coordinate


class ResourceCategory(str, Enum):
    MEDICAL = "Medical Facilities"
    FOOD = "Food Security"
    SHELTER = "Shelters"
    WATER = "Water Source"
    EMERGENCY_SERVICES = "Emergency Services"


class AvailabilityStatus(str, Enum):
    AVAILABLE = "Available"
    LIMITED = "Limited"
    FULL = "Full"
    UNKNOWN = "Unknown"


class Resource(BaseModel):
    """
    A relief resource shown on the map and in the resource directory.
    Seeded at startup; every field a live feed would refresh is optional.
    """
    id: str
    name: str
    category: ResourceCategory
    location: Coordinate
    address: str
    contact: str
    operating_hours: Optional[str] = None
    icon: str = Field(..., description="Icon key for list views")
    description: Optional[str] = None
    availability_status: AvailabilityStatus = AvailabilityStatus.UNKNOWN
    current_capacity: Optional[int] = Field(None, ge=0)
    max_capacity: Optional[int] = Field(None, ge=0)
    services: List[str] = Field(default_factory=list)
    distance_km: Optional[float] = Field(None, ge=0)
    last_update_time: Optional[datetime] = None
