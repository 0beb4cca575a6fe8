"""
Location Lock - "show my location on the map" toggle.

Unlocked -> Pending -> Locked | Unlocked
Locked   -> Unlocked (toggle)

A toggle arriving while a fetch is in flight is ignored, so each lock
attempt performs exactly one position fetch.
"""

import logging
from enum import Enum
from typing import Callable

from alertnet.core.messages import translate
from alertnet.models.base import NotificationType
from alertnet.models.geo import Coordinate
from alertnet.services.geo_position import GeoPositionError, GeoPositionSource
from alertnet.services.map_reconciler import MapReconciler
from alertnet.services.notification_center import NotificationCenter

logger = logging.getLogger(__name__)

LOCKED_ZOOM = 15


class LockState(str, Enum):
    UNLOCKED = "Unlocked"
    PENDING = "Pending"
    LOCKED = "Locked"


class LocationLock:

    def __init__(
        self,
        source: GeoPositionSource,
        reconciler: MapReconciler,
        notifications: NotificationCenter,
        set_busy: Callable[[bool], None],
    ):
        self.source = source
        self.reconciler = reconciler
        self.notifications = notifications
        self._set_busy = set_busy
        self.state = LockState.UNLOCKED

    async def toggle(self) -> LockState:
        if self.state == LockState.PENDING:
            logger.debug("Location lock toggle ignored while a fetch is pending")
        elif self.state == LockState.LOCKED:
            self.unlock()
        else:
            await self.lock()
        return self.state

    async def lock(self) -> LockState:
        if self.state != LockState.UNLOCKED:
            return self.state

        self.state = LockState.PENDING
        self.reconciler.clear_location_marker()
        self._set_busy(True)
        try:
            position = await self.source.request_position()
        except GeoPositionError as e:
            return self._fail(str(e))
        except Exception as e:
            logger.error(f"Unexpected position failure: {e}", exc_info=True)
            return self._fail("Position unavailable.")
        finally:
            self._set_busy(False)

        coordinate = Coordinate(lat=position.latitude, lng=position.longitude)
        self.reconciler.show_location_marker(coordinate)
        self.reconciler.fly_to(coordinate, LOCKED_ZOOM)
        self.state = LockState.LOCKED
        logger.info(f"Location locked at ({coordinate.lat}, {coordinate.lng})")
        return self.state

    def _fail(self, reason: str) -> LockState:
        self.state = LockState.UNLOCKED
        self.notifications.show(f"{translate('gpsError')}: {reason}", NotificationType.ERROR)
        logger.warning(f"⚠️ Location lock failed: {reason}")
        return self.state

    def unlock(self) -> LockState:
        if self.state != LockState.LOCKED:
            return self.state
        self.reconciler.clear_location_marker()
        self.reconciler.reset_camera()
        self.state = LockState.UNLOCKED
        logger.info("Location unlocked, camera reset to default view")
        return self.state
