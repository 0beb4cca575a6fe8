"""
Map Reconciliation Layer.

Keeps exactly one rendering-surface primitive per visible entity and
updates the surface by id-set difference on every recomputation:

1. bindings whose entity is no longer visible are removed first
2. entities whose drawing changed (status, severity, contrast, ...) are
   redrawn in place under the same binding key
3. newly visible entities are added

After a pass the binding keys of a class equal the ids of its renderable
visible entities (reports without any coordinate cannot be drawn).

Freshly created reports and derived zones also get camera attention (fly
to + a short arrival animation). That runs after the pass and never
changes which primitives exist.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

from alertnet.config.reference_data import HAITI_CENTER, HAITI_INITIAL_ZOOM
from alertnet.core.messages import translate
from alertnet.models.base import VisibleSubset
from alertnet.models.geo import CircleArea, Coordinate, bounds_of
from alertnet.models.report import Report, ReportStatus
from alertnet.models.resource import Resource, ResourceCategory
from alertnet.models.zone import HazardZone, Severity
from alertnet.services.domain_store import EntityKind, utcnow
from alertnet.services.rendering_surface import MarkerStyle, RenderingSurface, ShapeStyle

logger = logging.getLogger(__name__)

ALL_KINDS: FrozenSet[EntityKind] = frozenset(EntityKind)

ARRIVAL_CLASS = "animate-markerBounceIn"
LOCATION_LAYER = "location"
SIMULATED_SUBMITTER = "AutoSim"

REPORT_FOCUS_ZOOM = 14
ZONE_FOCUS_ZOOM = 13

ALERT_RED = "#EF4444"
PRIMARY_BLUE = "#2563EB"

LIGHT_TILES = (
    "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
    '&copy; <a href="https://www.openstreetmap.org/copyright">OSM</a>',
)
DARK_TILES = (
    "https://{s}.basemaps.cartocdn.com/dark_all/{z}/{x}/{y}{r}.png",
    '&copy; <a href="https://www.openstreetmap.org/copyright">OSM</a>, '
    '&copy; <a href="https://carto.com/attributions">CARTO</a>',
)

# status -> (normal color, contrast color, glyph)
REPORT_STYLES = {
    ReportStatus.VERIFIED: ("#10B981", "#34D399", "fa-check-circle"),
    ReportStatus.UNDER_REVIEW: ("#F59E0B", "#FBBF24", "fa-circle-exclamation"),
    ReportStatus.NEW: (PRIMARY_BLUE, "#60A5FA", "fa-triangle-exclamation"),
    ReportStatus.DUPLICATE: ("#52525B", "#A0A0A0", "fa-clone"),
}

RESOURCE_STYLES = {
    ResourceCategory.MEDICAL: (ALERT_RED, ALERT_RED, "fa-kit-medical"),
    ResourceCategory.FOOD: ("#65A30D", "#A3E635", "fa-bowl-food"),
    ResourceCategory.SHELTER: (PRIMARY_BLUE, "#38BDF8", "fa-house-chimney-user"),
    ResourceCategory.WATER: ("#0284C7", "#0EA5E9", "fa-water"),
    ResourceCategory.EMERGENCY_SERVICES: ("#D97706", "#FACC15", "fa-truck-medical"),
}

ZONE_COLORS = {
    Severity.HIGH: (ALERT_RED, ALERT_RED),
    Severity.MEDIUM: ("#F59E0B", "#FBBF24"),
    Severity.LOW: ("#0EA5E9", "#38BDF8"),
}

Entity = Union[Report, Resource, HazardZone]


@dataclass(frozen=True)
class _DrawSpec:
    """Everything that decides how an entity looks on the surface."""
    geometry: Any
    style: Union[MarkerStyle, ShapeStyle]
    tooltip: str


@dataclass
class _Binding:
    handle: str
    spec: _DrawSpec
    entity: Entity


def report_style(status: ReportStatus, contrast_mode: bool) -> MarkerStyle:
    normal, contrast, glyph = REPORT_STYLES[status]
    return MarkerStyle(glyph=glyph, color=contrast if contrast_mode else normal, size_px=22)


def resource_style(category: ResourceCategory, contrast_mode: bool) -> MarkerStyle:
    normal, contrast, glyph = RESOURCE_STYLES[category]
    return MarkerStyle(glyph=glyph, color=contrast if contrast_mode else normal, size_px=24)


def zone_style(severity: Severity, contrast_mode: bool) -> ShapeStyle:
    normal, contrast = ZONE_COLORS[severity]
    color = contrast if contrast_mode else normal
    return ShapeStyle(color=color, fill_color=color, fill_opacity=0.35, weight=1.5)


class MapReconciler:

    def __init__(
        self,
        surface: RenderingSurface,
        is_derived_zone: Callable[[str], bool],
        clock: Optional[Callable[[], datetime]] = None,
        recent_window_seconds: float = 10.0,
        arrival_animation_ms: int = 600,
    ):
        self.surface = surface
        self.contrast_mode = False
        self._is_derived_zone = is_derived_zone
        self._clock = clock or utcnow
        self._recent_window = timedelta(seconds=recent_window_seconds)
        self._arrival_delay = arrival_animation_ms / 1000.0
        self._bindings: Dict[EntityKind, Dict[str, _Binding]] = {kind: {} for kind in EntityKind}
        self._handle_index: Dict[str, Tuple[EntityKind, str]] = {}
        self._location_handle: Optional[str] = None
        self._timers: Dict[str, asyncio.TimerHandle] = {}

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    def bindings(self, kind: EntityKind) -> Dict[str, str]:
        """entity id -> primitive handle for one entity class."""
        return {entity_id: b.handle for entity_id, b in self._bindings[kind].items()}

    def reconcile(self, visible: VisibleSubset, kinds: Iterable[EntityKind] = ALL_KINDS) -> None:
        kinds = set(kinds)
        attention: List[Tuple[EntityKind, Entity, str]] = []
        entities_by_kind = {
            EntityKind.REPORTS: visible.reports,
            EntityKind.RESOURCES: visible.resources,
            EntityKind.ZONES: visible.zones,
        }
        for kind in EntityKind:
            if kind in kinds:
                attention.extend(self._reconcile_kind(kind, entities_by_kind[kind]))

        for kind, entity, handle in attention:
            try:
                self._draw_attention(kind, entity, handle)
            except Exception as e:
                logger.warning(f"Camera attention failed for {entity.id}: {e}")

    def _reconcile_kind(self, kind: EntityKind, entities: List[Entity]) -> List[Tuple[EntityKind, Entity, str]]:
        bindings = self._bindings[kind]
        wanted: Dict[str, Tuple[Entity, _DrawSpec]] = {}
        for entity in entities:
            spec = self._spec_for(kind, entity)
            if spec is not None:
                wanted[entity.id] = (entity, spec)

        for entity_id in [i for i in bindings if i not in wanted]:
            self._unbind(kind, entity_id)

        touched = []
        added = updated = 0
        for entity_id, (entity, spec) in wanted.items():
            existing = bindings.get(entity_id)
            if existing is not None:
                existing.entity = entity
                if existing.spec == spec:
                    continue
                self._unbind(kind, entity_id)
                updated += 1
            else:
                added += 1
            handle = self._draw(kind, spec)
            bindings[entity_id] = _Binding(handle=handle, spec=spec, entity=entity)
            self._handle_index[handle] = (kind, entity_id)
            touched.append((kind, entity, handle))

        if added or updated:
            logger.debug(f"Reconciled {kind.value}: +{added} ~{updated}, {len(bindings)} bound")
        return touched

    def _unbind(self, kind: EntityKind, entity_id: str) -> None:
        binding = self._bindings[kind].pop(entity_id)
        self._handle_index.pop(binding.handle, None)
        self.surface.remove(binding.handle)

    def _spec_for(self, kind: EntityKind, entity) -> Optional[_DrawSpec]:
        if kind == EntityKind.REPORTS:
            if entity.location is None:
                return None
            tooltip = f"{entity.type.value} ({entity.status.value})\n{entity.description[:50]}..."
            return _DrawSpec(entity.location, report_style(entity.status, self.contrast_mode), tooltip)
        if kind == EntityKind.RESOURCES:
            tooltip = f"{entity.name}\n{entity.category.value}"
            return _DrawSpec(entity.location, resource_style(entity.category, self.contrast_mode), tooltip)
        geometry = entity.area if entity.is_circle else tuple(entity.area)
        tooltip = f"{entity.name}\n{translate('severity')}: {entity.severity.value}"
        return _DrawSpec(geometry, zone_style(entity.severity, self.contrast_mode), tooltip)

    def _draw(self, kind: EntityKind, spec: _DrawSpec) -> str:
        if kind == EntityKind.ZONES:
            area = spec.geometry if isinstance(spec.geometry, CircleArea) else list(spec.geometry)
            return self.surface.add_shape(kind.value, area, spec.style, spec.tooltip)
        return self.surface.add_marker(kind.value, spec.geometry, spec.style, spec.tooltip)

    # ------------------------------------------------------------------
    # Camera attention
    # ------------------------------------------------------------------

    def _is_recent(self, stamp: datetime) -> bool:
        return self._clock() - stamp < self._recent_window

    def _draw_attention(self, kind: EntityKind, entity, handle: str) -> None:
        if kind == EntityKind.REPORTS:
            if entity.status not in (ReportStatus.NEW, ReportStatus.UNDER_REVIEW):
                return
            if entity.submitter == SIMULATED_SUBMITTER or not self._is_recent(entity.timestamp):
                return
            self.surface.fly_to(entity.location, REPORT_FOCUS_ZOOM)
            self._animate_arrival(handle)
        elif kind == EntityKind.ZONES:
            if not self._is_derived_zone(entity.id) or not self._is_recent(entity.last_updated):
                return
            if entity.is_circle:
                self.surface.fly_to(entity.area.center, ZONE_FOCUS_ZOOM)
            else:
                self.surface.fly_to_bounds(*bounds_of(entity.area))

    def _animate_arrival(self, handle: str) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Nothing would ever clear the class without a loop
            return
        self.surface.add_class(handle, ARRIVAL_CLASS)
        previous = self._timers.pop(handle, None)
        if previous is not None:
            previous.cancel()
        self._timers[handle] = loop.call_later(self._arrival_delay, self._end_arrival, handle)

    def _end_arrival(self, handle: str) -> None:
        self._timers.pop(handle, None)
        self.surface.remove_class(handle, ARRIVAL_CLASS)

    # ------------------------------------------------------------------
    # Base layer, location marker, detail view
    # ------------------------------------------------------------------

    def apply_contrast(self, enabled: bool) -> None:
        """Swap the base tiles. Entity restyling happens on the next reconcile."""
        self.contrast_mode = enabled
        url, attribution = DARK_TILES if enabled else LIGHT_TILES
        self.surface.set_base_layer(url, attribution)

    @property
    def location_marker(self) -> Optional[str]:
        return self._location_handle

    def show_location_marker(self, position: Coordinate) -> str:
        """Create the "my location" marker, or move it if it already exists."""
        self.clear_location_marker()
        self._location_handle = self.surface.add_marker(
            LOCATION_LAYER,
            position,
            MarkerStyle(glyph="leaflet-user-location-marker", color=PRIMARY_BLUE, size_px=18),
        )
        return self._location_handle

    def clear_location_marker(self) -> None:
        if self._location_handle is not None:
            self.surface.remove(self._location_handle)
            self._location_handle = None

    def fly_to(self, position: Coordinate, zoom: int) -> None:
        self.surface.fly_to(position, zoom)

    def reset_camera(self) -> None:
        self.surface.fly_to(HAITI_CENTER, HAITI_INITIAL_ZOOM)

    def open_detail(self, handle: str) -> Optional[Dict[str, Any]]:
        """Resolve a clicked primitive to the entity it was drawn for."""
        bound = self._handle_index.get(handle)
        if bound is None:
            return None
        kind, entity_id = bound
        item_type = {EntityKind.REPORTS: "report", EntityKind.RESOURCES: "resource", EntityKind.ZONES: "zone"}[kind]
        return {"item_type": item_type, "item": self._bindings[kind][entity_id].entity}

    def close(self) -> None:
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
