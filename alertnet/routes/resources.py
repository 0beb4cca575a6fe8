"""
Relief resources directory.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from alertnet.models.resource import Resource, ResourceCategory
from alertnet.services.app_state import AppState, get_app_state
from alertnet.services.filter_engine import ResourceSort, query_resources

router = APIRouter(prefix="/resources", tags=["Resources"])


@router.get("", response_model=List[Resource])
async def list_resources(
    category: Optional[ResourceCategory] = Query(None, description="Only this category (all when omitted)"),
    search: str = Query("", max_length=200, description="Matches name, description and services"),
    sort_by: ResourceSort = Query(ResourceSort.NAME, description="name | distance_km | availability_status"),
    state: AppState = Depends(get_app_state),
):
    return query_resources(state.store.resources, category, search, sort_by)


@router.get("/{resource_id}", response_model=Resource)
async def get_resource(resource_id: str, state: AppState = Depends(get_app_state)):
    resource = state.store.get_resource(resource_id)
    if resource is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Resource {resource_id} not found"
        )
    return resource
