"""
Rendering Surface - the drawing capability the map view draws onto.

Contract:
- add_marker / add_shape return an opaque handle for the new primitive
- remove(handle) deletes a primitive; unknown handles are ignored
- fly_to / fly_to_bounds animate the camera
- set_base_layer swaps the tile style without touching primitives
- add_class / remove_class toggle transient CSS-style classes

The tile/rendering SDK behind a real frontend is external. The in-memory
surface below keeps the full scene (primitives, camera, base layer) so it
can be served as JSON to a thin client and inspected in tests.
"""

import itertools
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

from alertnet.models.geo import CircleArea, Coordinate

logger = logging.getLogger(__name__)


class MarkerStyle(BaseModel):
    glyph: str
    color: str
    size_px: int = 24

    class Config:
        frozen = True


class ShapeStyle(BaseModel):
    color: str
    fill_color: str
    fill_opacity: float = 0.35
    weight: float = 1.5

    class Config:
        frozen = True


class Primitive(BaseModel):
    handle: str
    layer: str
    kind: str = Field(..., description="marker | circle | polygon")
    coordinates: List[Coordinate]
    radius: Optional[float] = None
    style: Union[MarkerStyle, ShapeStyle]
    tooltip: Optional[str] = None
    css_classes: List[str] = Field(default_factory=list)


class CameraState(BaseModel):
    center: Coordinate
    zoom: Optional[int] = None
    bounds: Optional[List[Coordinate]] = None


class BaseLayer(BaseModel):
    url: str
    attribution: str


class RenderingSurface(ABC):

    @abstractmethod
    def add_marker(self, layer: str, position: Coordinate, style: MarkerStyle, tooltip: Optional[str] = None) -> str:
        raise NotImplementedError

    @abstractmethod
    def add_shape(
        self,
        layer: str,
        area: Union[CircleArea, List[Coordinate]],
        style: ShapeStyle,
        tooltip: Optional[str] = None,
    ) -> str:
        raise NotImplementedError

    @abstractmethod
    def remove(self, handle: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def fly_to(self, center: Coordinate, zoom: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def fly_to_bounds(self, south_west: Coordinate, north_east: Coordinate) -> None:
        raise NotImplementedError

    @abstractmethod
    def set_base_layer(self, url: str, attribution: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def add_class(self, handle: str, css_class: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove_class(self, handle: str, css_class: str) -> None:
        raise NotImplementedError


class InMemoryRenderingSurface(RenderingSurface):
    """Scene graph kept in process memory."""

    def __init__(self, center: Coordinate, zoom: int):
        self._primitives: Dict[str, Primitive] = {}
        self._handles = itertools.count(1)
        self.camera = CameraState(center=center, zoom=zoom)
        self.base_layer: Optional[BaseLayer] = None
        # Operation counters, useful to check that reconciliation stays minimal
        self.adds = 0
        self.removes = 0

    def primitives(self, layer: Optional[str] = None) -> List[Primitive]:
        return [p for p in self._primitives.values() if layer is None or p.layer == layer]

    def get(self, handle: str) -> Optional[Primitive]:
        return self._primitives.get(handle)

    def add_marker(self, layer, position, style, tooltip=None):
        handle = self._next_handle(layer)
        self._primitives[handle] = Primitive(
            handle=handle, layer=layer, kind="marker",
            coordinates=[position], style=style, tooltip=tooltip,
        )
        self.adds += 1
        return handle

    def add_shape(self, layer, area, style, tooltip=None):
        handle = self._next_handle(layer)
        if isinstance(area, CircleArea):
            primitive = Primitive(
                handle=handle, layer=layer, kind="circle",
                coordinates=[area.center], radius=area.radius, style=style, tooltip=tooltip,
            )
        else:
            primitive = Primitive(
                handle=handle, layer=layer, kind="polygon",
                coordinates=list(area), style=style, tooltip=tooltip,
            )
        self._primitives[handle] = primitive
        self.adds += 1
        return handle

    def remove(self, handle):
        if self._primitives.pop(handle, None) is None:
            logger.debug(f"remove() ignored, unknown primitive {handle}")
            return
        self.removes += 1

    def fly_to(self, center, zoom):
        self.camera = CameraState(center=center, zoom=zoom)

    def fly_to_bounds(self, south_west, north_east):
        center = Coordinate(
            lat=(south_west.lat + north_east.lat) / 2,
            lng=(south_west.lng + north_east.lng) / 2,
        )
        self.camera = CameraState(center=center, bounds=[south_west, north_east])

    def set_base_layer(self, url, attribution):
        self.base_layer = BaseLayer(url=url, attribution=attribution)

    def add_class(self, handle, css_class):
        primitive = self._primitives.get(handle)
        if primitive is not None and css_class not in primitive.css_classes:
            primitive.css_classes.append(css_class)

    def remove_class(self, handle, css_class):
        primitive = self._primitives.get(handle)
        if primitive is not None and css_class in primitive.css_classes:
            primitive.css_classes.remove(css_class)

    def _next_handle(self, layer: str) -> str:
        return f"{layer}-{next(self._handles)}"
