"""Coordinate projection strategies.

A projector turns a device geocoordinate into whatever the renderer
places markers with:

* :class:`TileMapProjector` hands ``(lat, lng)`` straight through; the
  tile-map widget does its own Web-Mercator work.
* :class:`LocalProjector` maps into a percentage grid over the facility
  bounds and clamps to the grid edges.  Simulator drift is unbounded, so
  the clamp is what keeps long-running sessions on screen.

Both satisfy :class:`Projector`; pick one with :func:`build_projector`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Protocol, TypeAlias

from netsentry.config import FacilityBounds, ProjectionMode, SentryConfig
from netsentry.exceptions import SentryConfigError
from netsentry.models.device import Zone

_logger = logging.getLogger(__name__)

GRID_MIN = 0.0
GRID_MAX = 100.0


@dataclass(frozen=True, slots=True)
class ProjectedPoint:
    """Position in the local grid, each axis a percentage of the viewport."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """Raw geographic position for tile-map rendering."""

    lat: float
    lng: float


MapPosition: TypeAlias = ProjectedPoint | GeoPoint


class Projector(Protocol):
    """Structural projection interface consumed by the reconciler."""

    mode: ProjectionMode

    def project(self, lat: float, lng: float) -> MapPosition:
        ...


def _clamp(value: float) -> float:
    return max(GRID_MIN, min(GRID_MAX, value))


class LocalProjector:
    """Linear facility-grid projection clamped to ``[0, 100]`` on both axes."""

    mode = ProjectionMode.LOCAL

    def __init__(self, bounds: FacilityBounds) -> None:
        if bounds.east == bounds.west:
            raise SentryConfigError(f"Facility bounds have zero width (east == west == {bounds.east})")
        if bounds.north == bounds.south:
            raise SentryConfigError(f"Facility bounds have zero height (north == south == {bounds.north})")
        self._bounds = bounds
        self._width = bounds.east - bounds.west
        self._height = bounds.north - bounds.south

    @property
    def bounds(self) -> FacilityBounds:
        return self._bounds

    def project(self, lat: float, lng: float) -> ProjectedPoint:
        x = ((lng - self._bounds.west) / self._width) * 100
        y = ((self._bounds.north - lat) / self._height) * 100
        return ProjectedPoint(x=_clamp(x), y=_clamp(y))

    def unproject(self, point: ProjectedPoint) -> GeoPoint:
        """Inverse of :meth:`project` for points inside the grid."""
        lng = self._bounds.west + (point.x / 100) * self._width
        lat = self._bounds.north - (point.y / 100) * self._height
        return GeoPoint(lat=lat, lng=lng)


class TileMapProjector:
    """Pass-through projection for the global tile map."""

    mode = ProjectionMode.TILE_MAP

    def project(self, lat: float, lng: float) -> GeoPoint:
        return GeoPoint(lat=lat, lng=lng)


def build_projector(config: SentryConfig) -> Projector:
    """Create the projector selected by ``config.projection_mode``.

    Raises :class:`SentryConfigError` for degenerate facility bounds in
    local mode, so a bad configuration fails at startup.
    """
    if config.projection_mode == ProjectionMode.LOCAL:
        _logger.debug("Using local facility projection bounds=%s", config.facility)
        return LocalProjector(config.facility)
    if config.projection_mode == ProjectionMode.TILE_MAP:
        return TileMapProjector()
    raise SentryConfigError(f"Unsupported projection mode: {config.projection_mode!r}")


# ------------------------------------------------------------------
# Zone overlay geometry (normalized facility space)
# ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ZoneRect:
    """Overlay rectangle in percent of the facility grid."""

    x: float
    y: float
    width: float
    height: float


ZONE_GEOMETRY: MappingProxyType[Zone, ZoneRect] = MappingProxyType(
    {
        Zone.SERVER_ROOM: ZoneRect(x=5.0, y=5.0, width=25.0, height=30.0),
        Zone.OFFICE_NORTH: ZoneRect(x=35.0, y=5.0, width=60.0, height=30.0),
        Zone.LOBBY: ZoneRect(x=5.0, y=40.0, width=40.0, height=20.0),
        Zone.OFFICE_SOUTH: ZoneRect(x=50.0, y=40.0, width=45.0, height=20.0),
        Zone.WAREHOUSE: ZoneRect(x=5.0, y=65.0, width=55.0, height=30.0),
        Zone.PARKING_LOT: ZoneRect(x=65.0, y=65.0, width=30.0, height=30.0),
    }
)
"""Overlay rectangles for the local grid. ``Zone.UNKNOWN`` has no area."""


def zone_rect(zone: Zone) -> ZoneRect | None:
    """Overlay rectangle for *zone*, or ``None`` for ``Zone.UNKNOWN``."""
    return ZONE_GEOMETRY.get(zone)

