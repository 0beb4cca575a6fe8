import logging

from alertnet.config.reference_data import HAITI_REGIONS, default_image_for
from alertnet.models.geo import CircleArea, Coordinate
from alertnet.models.report import DisasterType, ReportCreate, ReportStatus
from alertnet.models.zone import Severity
from alertnet.services.domain_store import DomainStore, EntityKind, derived_zone_id


def flood_in_artibonite(**overrides):
    data = {"type": DisasterType.FLOOD, "description": "River overflow near market", "location_text": "Artibonite"}
    data.update(overrides)
    return ReportCreate(**data)


def test_seeded_store_contents(store):
    assert [r.id for r in store.reports] == ["HTreport1", "HTreport2", "HTreport3"]
    assert len(store.resources) == 6
    assert [z.id for z in store.zones] == ["HTzone1", "HTzone2", "HTzone3"]
    assert not any(store.is_derived_zone(z.id) for z in store.zones)


def test_add_report_resolves_region_and_derives_zone(store, clock):
    report = store.add_report(flood_in_artibonite())

    assert store.reports[0].id == report.id
    assert report.id.startswith("report-")
    assert report.status == ReportStatus.NEW
    assert report.submitter == "User"
    assert report.timestamp == clock()
    assert report.location == Coordinate(lat=19.45, lng=-72.6833)

    zone = store.zones[0]
    assert zone.id == derived_zone_id(report.id) == f"zone-from-{report.id}"
    assert zone.name == "Reported Flood Area"
    assert zone.severity == Severity.MEDIUM
    assert zone.area == CircleArea(center=HAITI_REGIONS["Artibonite"], radius=500)
    assert store.derived_zone_id_for(report.id) == zone.id
    assert store.is_derived_zone(zone.id)


def test_add_report_fills_default_photo(store):
    report = store.add_report(flood_in_artibonite(type=DisasterType.FIRE))
    assert report.photo_url == default_image_for(DisasterType.FIRE)

    kept = store.add_report(flood_in_artibonite(photo_url="https://example.org/p.jpg"))
    assert kept.photo_url == "https://example.org/p.jpg"


def test_explicit_coordinate_wins_over_region(store):
    report = store.add_report(flood_in_artibonite(location=Coordinate(lat=18.1, lng=-72.9)))
    assert report.location == Coordinate(lat=18.1, lng=-72.9)
    assert store.get_zone(derived_zone_id(report.id)).area.center == report.location


def test_unknown_region_creates_no_zone(store):
    zones_before = store.zones
    report = store.add_report(flood_in_artibonite(location_text="Atlantis"))
    assert report.location is None
    assert store.zones == zones_before
    assert store.derived_zone_id_for(report.id) is None


def test_verified_then_duplicate(store):
    report = store.add_report(flood_in_artibonite())
    zone_id = derived_zone_id(report.id)

    store.update_report_status(report.id, ReportStatus.VERIFIED)
    zone = store.get_zone(zone_id)
    assert store.get_report(report.id).status == ReportStatus.VERIFIED
    assert zone.severity == Severity.HIGH
    assert zone.name == "Reported Flood Area (Verified)"

    store.update_report_status(report.id, ReportStatus.DUPLICATE)
    assert store.get_report(report.id).status == ReportStatus.DUPLICATE
    assert store.get_zone(zone_id) is None
    assert store.derived_zone_id_for(report.id) is None


def test_under_review_leaves_zone_alone(store):
    report = store.add_report(flood_in_artibonite())
    zone_before = store.get_zone(derived_zone_id(report.id))
    store.update_report_status(report.id, ReportStatus.UNDER_REVIEW)
    assert store.get_zone(derived_zone_id(report.id)) == zone_before


def test_status_update_is_idempotent(store, clock):
    report = store.add_report(flood_in_artibonite())
    store.update_report_status(report.id, ReportStatus.VERIFIED)
    once = store.snapshot()

    clock.advance(30)
    store.update_report_status(report.id, ReportStatus.VERIFIED)
    assert store.snapshot() == once


def test_unknown_ids_are_ignored(store):
    before = store.snapshot()
    calls = []
    store.subscribe(calls.append)

    store.update_report_status("nope", ReportStatus.VERIFIED)
    store.escalate_zone_severity("nope", Severity.LOW)

    assert store.snapshot() == before
    assert calls == []


def test_seeded_report_status_change_touches_no_zone(store):
    zones_before = store.zones
    store.update_report_status("HTreport3", ReportStatus.DUPLICATE)
    assert store.zones == zones_before


def test_listeners_get_changed_kinds_after_mutation(store):
    seen = []

    def listener(kinds):
        seen.append((kinds, len(store.reports)))

    unsubscribe = store.subscribe(listener)
    store.add_report(flood_in_artibonite())
    assert seen == [(frozenset({EntityKind.REPORTS, EntityKind.ZONES}), 4)]

    unsubscribe()
    store.add_report(flood_in_artibonite())
    assert len(seen) == 1


def test_failing_listener_does_not_break_mutation(store, caplog):
    def broken(kinds):
        raise RuntimeError("boom")

    store.subscribe(broken)
    report = store.add_report(flood_in_artibonite())
    assert store.get_report(report.id) is not None
    assert "Store listener failed" in caplog.text


def test_escalate_zone_severity(store, clock):
    clock.advance(60)
    store.escalate_zone_severity("HTzone3", Severity.HIGH)
    zone = store.get_zone("HTzone3")
    assert zone.severity == Severity.HIGH
    assert zone.last_updated == clock()


def test_report_ids_are_unique(clock):
    store = DomainStore(clock=clock)
    ids = {store.add_report(flood_in_artibonite()).id for _ in range(50)}
    assert len(ids) == 50


def test_broken_zone_relation_is_logged_and_listeners_still_run(store, caplog):
    report = store.add_report(flood_in_artibonite())
    seen = []
    store.subscribe(seen.append)
    # zone vanished behind the store's back
    store._zones = [z for z in store.zones if z.id != derived_zone_id(report.id)]

    with caplog.at_level(logging.ERROR):
        store.update_report_status(report.id, ReportStatus.UNDER_REVIEW)

    assert store.get_report(report.id).status == ReportStatus.UNDER_REVIEW
    assert seen == [frozenset({EntityKind.REPORTS})]
    assert f"Derived zone {derived_zone_id(report.id)} for report {report.id} found 0 times" in caplog.text
