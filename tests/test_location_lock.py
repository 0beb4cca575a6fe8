import asyncio

import pytest
import requests

from alertnet.config.reference_data import HAITI_CENTER, HAITI_INITIAL_ZOOM
from alertnet.core.settings import Settings
from alertnet.models.base import NotificationType
from alertnet.services.geo_position import (
    GeoPosition,
    GeoPositionError,
    GeoPositionSource,
    IPGeolocationProvider,
    PositionProvider,
    StaticPositionProvider,
    UnavailablePositionProvider,
    build_position_provider,
)
from alertnet.services.location_lock import LockState, LocationLock
from alertnet.services.map_reconciler import MapReconciler
from alertnet.services.notification_center import NotificationCenter
from alertnet.services.rendering_surface import InMemoryRenderingSurface


class CountingProvider(PositionProvider):
    def __init__(self, result=None, error=None, delay=0.0):
        self.result = result
        self.error = error
        self.delay = delay
        self.calls = 0

    async def get_current_position(self):
        self.calls += 1
        await asyncio.sleep(self.delay)
        if self.error:
            raise GeoPositionError(self.error)
        return self.result


def make_lock(provider):
    surface = InMemoryRenderingSurface(HAITI_CENTER, HAITI_INITIAL_ZOOM)
    reconciler = MapReconciler(surface, lambda zone_id: False)
    notifications = NotificationCenter()
    busy = []
    lock = LocationLock(GeoPositionSource(provider), reconciler, notifications, busy.append)
    return lock, surface, notifications, busy


def test_lock_success_places_marker_and_flies():
    provider = CountingProvider(result=GeoPosition(latitude=18.55, longitude=-72.33))
    lock, surface, notifications, busy = make_lock(provider)

    state = asyncio.run(lock.toggle())

    assert state == LockState.LOCKED
    assert provider.calls == 1
    assert len(surface.primitives("location")) == 1
    assert surface.camera.zoom == 15
    assert surface.camera.center.lat == 18.55
    assert busy == [True, False]
    assert notifications.current is None


def test_lock_failure_reports_error_and_stays_unlocked():
    provider = CountingProvider(error="Timeout expired.")
    lock, surface, notifications, busy = make_lock(provider)

    state = asyncio.run(lock.toggle())

    assert state == LockState.UNLOCKED
    assert surface.primitives("location") == []
    assert busy == [True, False]
    assert notifications.current.type == NotificationType.ERROR
    assert notifications.current.message == "Could not get GPS location.: Timeout expired."
    assert lock.source.error == "Timeout expired."


def test_unlock_resets_camera():
    provider = CountingProvider(result=GeoPosition(latitude=18.55, longitude=-72.33))
    lock, surface, _, _ = make_lock(provider)

    async def scenario():
        await lock.toggle()
        return await lock.toggle()

    assert asyncio.run(scenario()) == LockState.UNLOCKED
    assert surface.primitives("location") == []
    assert surface.camera.center == HAITI_CENTER
    assert surface.camera.zoom == HAITI_INITIAL_ZOOM
    assert provider.calls == 1


def test_toggle_while_pending_is_ignored():
    provider = CountingProvider(result=GeoPosition(latitude=18.55, longitude=-72.33), delay=0.02)
    lock, _, _, _ = make_lock(provider)

    async def scenario():
        first = asyncio.ensure_future(lock.toggle())
        await asyncio.sleep(0)
        assert lock.state == LockState.PENDING
        assert await lock.toggle() == LockState.PENDING
        return await first

    assert asyncio.run(scenario()) == LockState.LOCKED
    assert provider.calls == 1


def test_static_provider_requires_coordinates():
    with pytest.raises(GeoPositionError):
        asyncio.run(StaticPositionProvider(None, None).get_current_position())
    position = asyncio.run(StaticPositionProvider(18.5, -72.3).get_current_position())
    assert position == GeoPosition(latitude=18.5, longitude=-72.3)


def test_unavailable_provider():
    with pytest.raises(GeoPositionError, match="not supported"):
        asyncio.run(UnavailablePositionProvider().get_current_position())


def test_ip_provider_timeout(monkeypatch):
    def fake_get(*args, **kwargs):
        raise requests.Timeout("slow")

    monkeypatch.setattr("alertnet.services.geo_position.requests.get", fake_get)
    with pytest.raises(GeoPositionError, match="Timeout expired."):
        asyncio.run(IPGeolocationProvider().get_current_position())


def test_ip_provider_parses_payload(monkeypatch):
    class FakeResponse:
        status_code = 200

        def json(self):
            return {"latitude": 18.54, "longitude": -72.34, "city": "Port-au-Prince"}

    monkeypatch.setattr("alertnet.services.geo_position.requests.get", lambda *a, **kw: FakeResponse())
    position = asyncio.run(IPGeolocationProvider().get_current_position())
    assert position == GeoPosition(latitude=18.54, longitude=-72.34)


def test_build_position_provider():
    assert isinstance(build_position_provider(Settings(GEO_PROVIDER="static")), StaticPositionProvider)
    assert isinstance(build_position_provider(Settings(GEO_PROVIDER="ip")), IPGeolocationProvider)
    assert isinstance(build_position_provider(Settings(GEO_PROVIDER="none")), UnavailablePositionProvider)


class ExplodingProvider(PositionProvider):
    def __init__(self):
        self.calls = 0

    async def get_current_position(self):
        self.calls += 1
        raise RuntimeError("provider exploded")


def test_unexpected_provider_error_unlocks_and_allows_retry():
    provider = ExplodingProvider()
    lock, surface, notifications, busy = make_lock(provider)

    async def scenario():
        first = await lock.toggle()
        second = await lock.toggle()
        return first, second

    assert asyncio.run(scenario()) == (LockState.UNLOCKED, LockState.UNLOCKED)
    assert provider.calls == 2
    assert busy == [True, False, True, False]
    assert surface.primitives("location") == []
    assert notifications.current.type == NotificationType.ERROR
    assert notifications.current.message == "Could not get GPS location.: Position unavailable."
    assert lock.source.error == "Position unavailable."
    assert lock.source.loading is False


def test_out_of_range_static_position_unlocks_with_error():
    lock, _, notifications, _ = make_lock(StaticPositionProvider(95, -72.3))

    assert asyncio.run(lock.toggle()) == LockState.UNLOCKED
    assert notifications.current.type == NotificationType.ERROR
    assert notifications.current.message == "Could not get GPS location.: Device position is invalid."


def test_ip_provider_non_json_body(monkeypatch):
    class HtmlResponse:
        status_code = 200

        def json(self):
            raise ValueError("Expecting value: line 1 column 1 (char 0)")

    monkeypatch.setattr("alertnet.services.geo_position.requests.get", lambda *a, **kw: HtmlResponse())
    with pytest.raises(GeoPositionError, match="Position unavailable."):
        asyncio.run(IPGeolocationProvider().get_current_position())


def test_lock_survives_source_failure_outside_provider():
    class BrokenSource(GeoPositionSource):
        async def request_position(self):
            raise RuntimeError("source broken")

    surface = InMemoryRenderingSurface(HAITI_CENTER, HAITI_INITIAL_ZOOM)
    notifications = NotificationCenter()
    lock = LocationLock(
        BrokenSource(UnavailablePositionProvider()),
        MapReconciler(surface, lambda zone_id: False),
        notifications,
        lambda busy: None,
    )

    assert asyncio.run(lock.toggle()) == LockState.UNLOCKED
    assert notifications.current.message == "Could not get GPS location.: Position unavailable."
