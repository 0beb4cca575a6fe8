"""
Filter & Query Engine.

Pure functions over store contents. Nothing here keeps state: the same
inputs always give the same outputs, so callers can recompute freely on
every change.
"""

from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional

from alertnet.models.base import MapFilter, NewsArticle, VisibleSubset
from alertnet.models.report import DisasterType, Report, ReportStatus
from alertnet.models.resource import AvailabilityStatus, Resource, ResourceCategory
from alertnet.models.zone import HazardZone


class ResourceSort(str, Enum):
    NAME = "name"
    DISTANCE = "distance_km"
    AVAILABILITY = "availability_status"


REVIEW_ORDER = [ReportStatus.NEW, ReportStatus.UNDER_REVIEW, ReportStatus.VERIFIED, ReportStatus.DUPLICATE]

AVAILABILITY_ORDER = {
    AvailabilityStatus.AVAILABLE: 1,
    AvailabilityStatus.LIMITED: 2,
    AvailabilityStatus.FULL: 3,
    AvailabilityStatus.UNKNOWN: 4,
}


def resource_category_of(active_filter: MapFilter) -> Optional[ResourceCategory]:
    """The resource category a map filter selects, or None for ALL / DISASTERS."""
    if active_filter in (MapFilter.ALL, MapFilter.DISASTERS):
        return None
    return ResourceCategory(active_filter.value)


def _matches(needle: str, *fields: Optional[str]) -> bool:
    if not needle:
        return True
    return any(field and needle in field.lower() for field in fields)


def compute_visible(store, active_filter: MapFilter, search_term: str) -> VisibleSubset:
    """
    Visible {reports, resources, zones} for the map.

    ALL shows everything, DISASTERS shows reports and zones only, a resource
    category shows only resources of that category. The search term is
    trimmed and matched case-insensitively as a substring.
    """
    needle = (search_term or "").strip().lower()
    category = resource_category_of(active_filter)
    show_disasters = category is None

    reports: List[Report] = []
    zones: List[HazardZone] = []
    if show_disasters:
        reports = [
            r for r in store.reports
            if _matches(needle, r.type.value, r.description, r.location_text)
        ]
        zones = [
            z for z in store.zones
            if _matches(needle, z.name, z.type.value)
        ]

    resources = [
        r for r in store.resources
        if (active_filter == MapFilter.ALL or r.category == category)
        and _matches(needle, r.name, r.address, r.category.value)
    ]

    return VisibleSubset(reports=reports, resources=resources, zones=zones)


def query_resources(
    resources: Iterable[Resource],
    category: Optional[ResourceCategory] = None,
    search_term: str = "",
    sort_by: ResourceSort = ResourceSort.NAME,
) -> List[Resource]:
    """
    Relief resources directory query.

    Search covers name, description and service tags. Distance sort puts
    resources without a known distance last.
    """
    needle = (search_term or "").strip().lower()
    result = [
        r for r in resources
        if (category is None or r.category == category)
        and _matches(needle, r.name, r.description, *r.services)
    ]

    if sort_by == ResourceSort.NAME:
        result.sort(key=lambda r: r.name.lower())
    elif sort_by == ResourceSort.DISTANCE:
        result.sort(key=lambda r: r.distance_km if r.distance_km else float("inf"))
    elif sort_by == ResourceSort.AVAILABILITY:
        result.sort(key=lambda r: AVAILABILITY_ORDER[r.availability_status])
    return result


def sort_for_review(reports: Iterable[Report]) -> List[Report]:
    """Operator triage order: by status (New first), then newest first."""
    return sorted(
        reports,
        key=lambda r: (REVIEW_ORDER.index(r.status), -r.timestamp.timestamp()),
    )


def latest_update(store) -> Optional[datetime]:
    """Most recent timestamp across reports, zones and resources."""
    stamps = [r.timestamp for r in store.reports]
    stamps += [z.last_updated for z in store.zones]
    stamps += [r.last_update_time for r in store.resources if r.last_update_time]
    return max(stamps) if stamps else None


def filter_news(articles: Iterable[NewsArticle], disaster_type: Optional[DisasterType] = None) -> List[NewsArticle]:
    if disaster_type is None:
        return list(articles)
    return [a for a in articles if disaster_type in a.disaster_type_tags]
