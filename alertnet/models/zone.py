"""
Hazard zone models.

A zone covers either a polygon ring (at least 3 vertices) or a circle.
Seeded zones come from reference data; derived zones are generated from
a report's coordinate at submission time.
"""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional, List, Union
from enum import Enum

from alertnet.models.geo import Coordinate, CircleArea
from alertnet.models.report import DisasterType


class Severity(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class HazardZone(BaseModel):
    id: str
    name: str
    type: DisasterType
    area: Union[CircleArea, List[Coordinate]] = Field(..., description="Polygon ring or circle")
    severity: Severity
    last_updated: datetime
    description: Optional[str] = None

    @field_validator("area")
    @classmethod
    def polygon_has_three_vertices(cls, value):
        if isinstance(value, list) and len(value) < 3:
            raise ValueError("polygon zones need at least 3 vertices")
        return value

    @property
    def is_circle(self) -> bool:
        return isinstance(self.area, CircleArea)


class SeverityUpdateRequest(BaseModel):
    """Administrative severity escalation for a zone."""
    severity: Severity
