import asyncio

import pytest

from alertnet.config.reference_data import HAITI_CENTER, HAITI_INITIAL_ZOOM, HAITI_REGIONS
from alertnet.models.base import MapFilter
from alertnet.models.geo import Coordinate
from alertnet.models.report import DisasterType, Report, ReportCreate, ReportStatus
from alertnet.services.domain_store import DomainStore, EntityKind, derived_zone_id
from alertnet.services.filter_engine import compute_visible
from alertnet.services.map_reconciler import ARRIVAL_CLASS, DARK_TILES, LIGHT_TILES, MapReconciler
from alertnet.services.rendering_surface import InMemoryRenderingSurface


@pytest.fixture
def surface():
    return InMemoryRenderingSurface(HAITI_CENTER, HAITI_INITIAL_ZOOM)


@pytest.fixture
def reconciler(surface, store, clock):
    return MapReconciler(surface, store.is_derived_zone, clock=clock, arrival_animation_ms=10)


def render(reconciler, store, active_filter=MapFilter.ALL, search="", kinds=tuple(EntityKind)):
    visible = compute_visible(store, active_filter, search)
    reconciler.reconcile(visible, kinds)
    return visible


def assert_bound_to(reconciler, visible):
    assert set(reconciler.bindings(EntityKind.REPORTS)) == {r.id for r in visible.reports if r.location}
    assert set(reconciler.bindings(EntityKind.RESOURCES)) == {r.id for r in visible.resources}
    assert set(reconciler.bindings(EntityKind.ZONES)) == {z.id for z in visible.zones}


def new_flood(store, **overrides):
    data = {"type": DisasterType.FLOOD, "description": "River overflow near market", "location_text": "Artibonite"}
    data.update(overrides)
    return store.add_report(ReportCreate(**data))


def test_initial_render_binds_every_visible_entity(reconciler, store, surface):
    visible = render(reconciler, store)
    assert_bound_to(reconciler, visible)
    assert len(surface.primitives()) == 3 + 6 + 3
    assert {p.kind for p in surface.primitives("zones")} == {"polygon", "circle"}


def test_unchanged_entities_are_not_redrawn(reconciler, store, surface):
    render(reconciler, store)
    adds, removes = surface.adds, surface.removes
    render(reconciler, store)
    assert (surface.adds, surface.removes) == (adds, removes)


def test_filter_change_removes_stale_bindings(reconciler, store, surface):
    render(reconciler, store)
    visible = render(reconciler, store, MapFilter.SHELTER)
    assert_bound_to(reconciler, visible)
    assert reconciler.bindings(EntityKind.REPORTS) == {}
    assert reconciler.bindings(EntityKind.ZONES) == {}
    assert [p.layer for p in surface.primitives()] == ["resources"]

    visible = render(reconciler, store)
    assert_bound_to(reconciler, visible)


def test_status_change_redraws_only_that_report(reconciler, store, surface):
    render(reconciler, store)
    old_handle = reconciler.bindings(EntityKind.REPORTS)["HTreport3"]
    adds, removes = surface.adds, surface.removes

    store.update_report_status("HTreport3", ReportStatus.VERIFIED)
    render(reconciler, store)

    new_handle = reconciler.bindings(EntityKind.REPORTS)["HTreport3"]
    assert new_handle != old_handle
    assert surface.get(old_handle) is None
    assert surface.get(new_handle).style.glyph == "fa-check-circle"
    assert (surface.adds - adds, surface.removes - removes) == (1, 1)


def test_report_tooltip_and_zone_tooltip(reconciler, store, surface):
    render(reconciler, store)
    report = surface.get(reconciler.bindings(EntityKind.REPORTS)["HTreport1"])
    assert report.tooltip.startswith("Flood (Verified)\n")
    assert report.tooltip.endswith("...")
    zone = surface.get(reconciler.bindings(EntityKind.ZONES)["HTzone3"])
    assert zone.tooltip == "Coastal Storm Surge Zone - South\nSeverity: Medium"
    assert zone.style.fill_opacity == 0.35
    assert zone.style.weight == 1.5


def test_report_without_coordinate_is_not_rendered(reconciler, store):
    report = new_flood(store, location_text="Atlantis")
    visible = render(reconciler, store)
    assert report.id in {r.id for r in visible.reports}
    assert report.id not in reconciler.bindings(EntityKind.REPORTS)
    assert_bound_to(reconciler, visible)


def test_duplicate_removes_zone_primitive(reconciler, store, surface):
    report = new_flood(store)
    render(reconciler, store)
    zone_handle = reconciler.bindings(EntityKind.ZONES)[derived_zone_id(report.id)]

    store.update_report_status(report.id, ReportStatus.DUPLICATE)
    visible = render(reconciler, store)
    assert surface.get(zone_handle) is None
    assert_bound_to(reconciler, visible)


def test_contrast_swaps_tiles_and_keeps_bindings(reconciler, store, surface):
    reconciler.apply_contrast(False)
    render(reconciler, store)
    keys = {kind: set(reconciler.bindings(kind)) for kind in EntityKind}
    assert surface.base_layer.url == LIGHT_TILES[0]

    reconciler.apply_contrast(True)
    assert surface.base_layer.url == DARK_TILES[0]
    render(reconciler, store)
    assert {kind: set(reconciler.bindings(kind)) for kind in EntityKind} == keys
    verified = surface.get(reconciler.bindings(EntityKind.REPORTS)["HTreport1"])
    assert verified.style.color == "#34D399"


def test_new_report_gets_camera_attention(reconciler, store, surface):
    render(reconciler, store)
    report = new_flood(store)
    render(reconciler, store, kinds={EntityKind.REPORTS})
    assert surface.camera.center == report.location
    assert surface.camera.zoom == 14


def test_new_derived_zone_gets_camera_attention(reconciler, store, surface):
    render(reconciler, store)
    new_flood(store)
    render(reconciler, store, kinds={EntityKind.ZONES})
    assert surface.camera.center == HAITI_REGIONS["Artibonite"]
    assert surface.camera.zoom == 13


def test_old_or_simulated_reports_get_no_attention(store, clock, surface):
    reconciler = MapReconciler(surface, store.is_derived_zone, clock=clock)
    render(reconciler, store)
    assert surface.camera.zoom == HAITI_INITIAL_ZOOM

    simulated = Report(
        id="sim-1", type=DisasterType.FIRE, description="Simulated", timestamp=clock(),
        location=Coordinate(lat=18.6, lng=-72.3), submitter="AutoSim",
    )
    other = DomainStore(reports=[simulated], clock=clock)
    reconciler.reconcile(compute_visible(other, MapFilter.ALL, ""))
    assert surface.camera.zoom == HAITI_INITIAL_ZOOM

    clock.advance(11)
    fresh_store = DomainStore(clock=clock)
    late = fresh_store.add_report(ReportCreate(type=DisasterType.FIRE, description="x", location_text="Nord"))
    clock.advance(11)
    reconciler.reconcile(compute_visible(fresh_store, MapFilter.ALL, ""))
    assert late.id in reconciler.bindings(EntityKind.REPORTS)
    assert surface.camera.zoom == HAITI_INITIAL_ZOOM


def test_arrival_animation_class_is_transient(reconciler, store, surface):
    async def scenario():
        render(reconciler, store)
        report = new_flood(store)
        render(reconciler, store)
        handle = reconciler.bindings(EntityKind.REPORTS)[report.id]
        assert ARRIVAL_CLASS in surface.get(handle).css_classes
        await asyncio.sleep(0.05)
        return handle

    handle = asyncio.run(scenario())
    assert surface.get(handle).css_classes == []


def test_open_detail_resolves_entity(reconciler, store):
    render(reconciler, store)
    handle = reconciler.bindings(EntityKind.RESOURCES)["HTshelter1"]
    detail = reconciler.open_detail(handle)
    assert detail["item_type"] == "resource"
    assert detail["item"].id == "HTshelter1"
    assert reconciler.open_detail("reports-999") is None


def test_location_marker_moves_instead_of_duplicating(reconciler, surface):
    reconciler.show_location_marker(Coordinate(lat=18.5, lng=-72.3))
    reconciler.show_location_marker(Coordinate(lat=18.6, lng=-72.4))
    markers = surface.primitives("location")
    assert len(markers) == 1
    assert markers[0].coordinates == [Coordinate(lat=18.6, lng=-72.4)]

    reconciler.clear_location_marker()
    assert surface.primitives("location") == []
    assert reconciler.location_marker is None
