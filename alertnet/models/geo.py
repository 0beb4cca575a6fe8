"""
Geographic primitives shared by reports, resources and hazard zones.
"""

from pydantic import BaseModel, Field
from typing import List, Tuple


class Coordinate(BaseModel):
    """A WGS84 point."""
    lat: float = Field(..., ge=-90, le=90, description="Latitude")
    lng: float = Field(..., ge=-180, le=180, description="Longitude")

    class Config:
        frozen = True


class CircleArea(BaseModel):
    """Circular hazard area (radius in meters)."""
    center: Coordinate
    radius: float = Field(..., gt=0, description="Radius in meters")

    class Config:
        frozen = True


def bounds_of(points: List[Coordinate]) -> Tuple[Coordinate, Coordinate]:
    """Return the (south-west, north-east) corners enclosing a polygon ring."""
    lats = [p.lat for p in points]
    lngs = [p.lng for p in points]
    return (
        Coordinate(lat=min(lats), lng=min(lngs)),
        Coordinate(lat=max(lats), lng=max(lngs)),
    )
