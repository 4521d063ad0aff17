"""Render-side marker bookkeeping."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from netsentry.projection import MapPosition
from netsentry.render.visuals import VisualDescriptor


@dataclass(frozen=True, slots=True)
class MarkerState:
    """What was last drawn for one device."""

    device_id: str
    position: MapPosition
    visual: VisualDescriptor


MarkerTable = Mapping[str, MarkerState]
"""Marker states keyed by device id, in render order."""


def _empty_table() -> MarkerTable:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class RenderPlan:
    """Minimal set of renderer operations for one frame.

    ``to_create`` and ``to_update`` follow device order; ``to_remove``
    follows the previous marker order.  ``markers`` carries the new state
    for every created or updated id so the renderer does not recompute it.
    """

    to_create: tuple[str, ...] = ()
    to_update: tuple[str, ...] = ()
    to_remove: tuple[str, ...] = ()
    markers: MarkerTable = field(default_factory=_empty_table)

    @property
    def is_empty(self) -> bool:
        return not (self.to_create or self.to_update or self.to_remove)

    def __len__(self) -> int:
        return len(self.to_create) + len(self.to_update) + len(self.to_remove)
