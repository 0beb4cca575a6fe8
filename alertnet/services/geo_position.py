"""
Geo-Position Source.

Device position is only ever requested on demand (location lock); nothing
here polls. Providers report failure by raising GeoPositionError with a
human-readable reason, which the caller turns into a notification.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

UNSUPPORTED_REASON = "Geolocation is not supported by this device."


class GeoPosition(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class GeoPositionError(Exception):
    """Position could not be determined. The message is shown to the user."""


class PositionProvider(ABC):

    name = "base"

    @abstractmethod
    async def get_current_position(self) -> GeoPosition:
        raise NotImplementedError


class StaticPositionProvider(PositionProvider):
    """Fixed device coordinates from configuration."""

    name = "static"

    def __init__(self, latitude: Optional[float], longitude: Optional[float]):
        self.latitude = latitude
        self.longitude = longitude

    async def get_current_position(self) -> GeoPosition:
        if self.latitude is None or self.longitude is None:
            raise GeoPositionError("Device position is not configured.")
        try:
            return GeoPosition(latitude=self.latitude, longitude=self.longitude)
        except ValidationError as e:
            logger.warning(f"Configured device position is out of range: {e}")
            raise GeoPositionError("Device position is invalid.") from e


class UnavailablePositionProvider(PositionProvider):

    name = "none"

    async def get_current_position(self) -> GeoPosition:
        raise GeoPositionError(UNSUPPORTED_REASON)


class IPGeolocationProvider(PositionProvider):
    """
    Approximate position from the public IP address.

    - No API key required
    - Strict network timeout
    - The blocking HTTP call runs in the default executor so the event
      loop keeps serving other work while waiting
    """

    name = "ip"
    BASE_URL = "https://ipapi.co/json/"

    def __init__(self, timeout_seconds: float = 3.0, user_agent: str = "haiti-alertnet/1.0"):
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent

    async def get_current_position(self) -> GeoPosition:
        loop = asyncio.get_running_loop()
        data = await loop.run_in_executor(None, self._fetch)
        try:
            return GeoPosition(latitude=float(data["latitude"]), longitude=float(data["longitude"]))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"IP geolocation returned unusable payload: {e}")
            raise GeoPositionError("Position unavailable.") from e

    def _fetch(self) -> Dict[str, Any]:
        try:
            resp = requests.get(
                self.BASE_URL,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout_seconds,
            )
        except requests.Timeout as e:
            raise GeoPositionError("Timeout expired.") from e
        except requests.RequestException as e:
            logger.warning(f"IP geolocation request failed: {e}")
            raise GeoPositionError("Position unavailable.") from e

        if resp.status_code != 200:
            logger.warning(f"IP geolocation failed with status {resp.status_code}")
            raise GeoPositionError("Position unavailable.")
        try:
            return resp.json()
        except ValueError as e:
            logger.warning(f"IP geolocation returned a non-JSON body: {e}")
            raise GeoPositionError("Position unavailable.") from e


class GeoPositionSource:
    """
    Request wrapper exposing {loading, error, data} for the UI.

    Every call to request_position() performs exactly one provider fetch.
    """

    def __init__(self, provider: PositionProvider):
        self.provider = provider
        self.loading = False
        self.error: Optional[str] = None
        self.data: Optional[GeoPosition] = None

    async def request_position(self) -> GeoPosition:
        self.loading = True
        self.error = None
        try:
            position = await self.provider.get_current_position()
        except GeoPositionError as e:
            self.error = str(e)
            self.data = None
            raise
        except Exception as e:
            logger.error(f"Position provider {self.provider.name} failed: {e}", exc_info=True)
            self.error = "Position unavailable."
            self.data = None
            raise GeoPositionError(self.error) from e
        finally:
            self.loading = False
        self.data = position
        return position


def build_position_provider(app_settings) -> PositionProvider:
    """
    Resolve the position provider from settings.

    Rules:
    - GEO_PROVIDER='static' uses DEVICE_LATITUDE / DEVICE_LONGITUDE
    - GEO_PROVIDER='ip' uses the IP lookup service
    - anything else reports geolocation as unsupported
    """
    provider_name = (getattr(app_settings, "GEO_PROVIDER", "static") or "static").lower()

    if provider_name == "static":
        provider: PositionProvider = StaticPositionProvider(
            getattr(app_settings, "DEVICE_LATITUDE", None),
            getattr(app_settings, "DEVICE_LONGITUDE", None),
        )
    elif provider_name == "ip":
        provider = IPGeolocationProvider(timeout_seconds=getattr(app_settings, "GEO_TIMEOUT_SECONDS", 3.0))
    else:
        provider = UnavailablePositionProvider()

    logger.info(f"Position provider initialized: {provider.name}")
    return provider
