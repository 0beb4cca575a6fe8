"""Map routes - the live map as seen by a thin client.

The visible subset, the rendered scene (primitives, camera, base tiles)
and the location lock all live server-side; the client renders what
these endpoints return.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from alertnet.models.base import FilterState, VisibleSubset
from alertnet.models.report import Report
from alertnet.models.resource import Resource
from alertnet.models.zone import HazardZone
from alertnet.services.app_state import AppState, get_app_state
from alertnet.services.filter_engine import latest_update
from alertnet.services.location_lock import LockState
from alertnet.services.rendering_surface import BaseLayer, CameraState, Primitive


class MapLayers(BaseModel):
    primitives: List[Primitive]
    camera: CameraState
    base_layer: Optional[BaseLayer] = None
    location_marker: Optional[str] = None
    last_updated: Optional[datetime] = None


class PrimitiveDetail(BaseModel):
    item_type: str
    item: Union[Report, Resource, HazardZone]


class LocationLockStatus(BaseModel):
    state: LockState
    loading: bool
    error: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


router = APIRouter(prefix="/map", tags=["Map"])


def _lock_status(state: AppState) -> LocationLockStatus:
    source = state.position_source
    position = source.data if state.location_lock.state == LockState.LOCKED else None
    return LocationLockStatus(
        state=state.location_lock.state,
        loading=source.loading,
        error=source.error,
        latitude=position.latitude if position else None,
        longitude=position.longitude if position else None,
    )


@router.get("/visible", response_model=VisibleSubset)
async def visible_entities(state: AppState = Depends(get_app_state)):
    """Reports, resources and zones passing the current filter and search term."""
    return state.visible()


@router.get("/filter", response_model=FilterState)
async def get_filter(state: AppState = Depends(get_app_state)):
    return state.filter_state


@router.put("/filter", response_model=VisibleSubset)
async def set_filter(filter_state: FilterState, state: AppState = Depends(get_app_state)):
    """Replace the active filter and search term; the map is reconciled immediately."""
    return state.set_filter(filter_state)


@router.get("/layers", response_model=MapLayers)
async def map_layers(state: AppState = Depends(get_app_state)):
    return MapLayers(
        primitives=state.surface.primitives(),
        camera=state.surface.camera,
        base_layer=state.surface.base_layer,
        location_marker=state.reconciler.location_marker,
        last_updated=latest_update(state.store),
    )


@router.get("/primitives/{handle}/detail", response_model=PrimitiveDetail)
async def primitive_detail(handle: str, state: AppState = Depends(get_app_state)):
    """What a click on a map primitive opens."""
    detail: Optional[Dict[str, Any]] = state.reconciler.open_detail(handle)
    if detail is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Primitive {handle} is not bound to any entity"
        )
    return detail


@router.post("/location-lock/toggle", response_model=LocationLockStatus)
async def toggle_location_lock(state: AppState = Depends(get_app_state)):
    await state.location_lock.toggle()
    return _lock_status(state)


@router.get("/location-lock", response_model=LocationLockStatus)
async def location_lock_status(state: AppState = Depends(get_app_state)):
    return _lock_status(state)
