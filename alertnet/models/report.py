"""
Pydantic models for citizen reports.
These models handle validation for report submission and the committed report.
"""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional
from enum import Enum

from alertnet.models.geo import Coordinate


class DisasterType(str, Enum):
    """Kinds of events a citizen can report."""
    FLOOD = "Flood"
    EARTHQUAKE = "Earthquake"
    FIRE = "Fire"
    HURRICANE = "Hurricane"
    STORM = "Storm"
    LANDSLIDE = "Landslide"
    OTHER = "Other"


class ReportStatus(str, Enum):
    """
    Operator triage status.

    Reports start as NEW. Operators move them freely between the states;
    DUPLICATE is set manually, there is no automated similarity check.
    """
    NEW = "New"
    UNDER_REVIEW = "Under Review"
    VERIFIED = "Verified"
    DUPLICATE = "Duplicate"


class ReportCreate(BaseModel):
    """
    Model for a new submission (incoming POST request).
    These are the fields citizens provide; id, timestamp, status and
    submitter are assigned by the domain store.
    """
    type: DisasterType = Field(..., description="Disaster type (from form select)")
    description: str = Field(..., min_length=1, max_length=2000, description="What the citizen observed")
    location: Optional[Coordinate] = Field(None, description="Device coordinate, if the citizen shared it")
    location_text: Optional[str] = Field(None, max_length=200, description="Selected region/city label")
    photo_url: Optional[str] = Field(None, description="Uploaded photo reference")
    contact: Optional[str] = Field(None, max_length=200, description="Email or phone for follow-up")

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("description must not be blank")
        return value

    class Config:
        json_schema_extra = {
            "example": {
                "type": "Flood",
                "description": "River overflow near market",
                "location": None,
                "location_text": "Artibonite",
                "contact": "+509-00-0000-0000",
            }
        }
        extra = "ignore"


class Report(BaseModel):
    """A committed report, owned by the domain store."""
    id: str
    type: DisasterType
    description: str
    location: Optional[Coordinate] = None
    location_text: Optional[str] = None
    photo_url: Optional[str] = None
    contact: Optional[str] = None
    timestamp: datetime = Field(..., description="When the report was created")
    status: ReportStatus = ReportStatus.NEW
    submitter: Optional[str] = None


class StatusUpdateRequest(BaseModel):
    """Operator request to move a report to another status."""
    status: ReportStatus = Field(..., description="New status value")
