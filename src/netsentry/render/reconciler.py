"""Render reconciliation.

Given the current device snapshot and the markers drawn last time,
:func:`reconcile` works out which markers to create, update or remove.

Position comparison is exact equality between the last drawn position and
the freshly projected one.  A device pinned to a grid edge by the clamp
keeps the same projected position however far it drifts, so it is not
reissued.  Visual changes (color, pulse, popup) are compared separately.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from types import MappingProxyType

from netsentry._clock import Clock, now_ms
from netsentry.exceptions import DeviceInvariantError
from netsentry.models.device import Device
from netsentry.projection import Projector
from netsentry.render.markers import MarkerState, MarkerTable, RenderPlan
from netsentry.render.visuals import VisualDescriptor

_logger = logging.getLogger(__name__)


def reconcile(
    devices: Iterable[Device],
    prior_markers: MarkerTable,
    projector: Projector,
    *,
    now: int,
) -> tuple[RenderPlan, MarkerTable]:
    """Diff *devices* against *prior_markers*.

    Pure: the inputs are not modified.  Returns the plan and the marker
    table that reflects the device set exactly.  Raises
    :class:`DeviceInvariantError` if *devices* repeats an id.
    """
    next_markers: dict[str, MarkerState] = {}
    to_create: list[str] = []
    to_update: list[str] = []
    changed: dict[str, MarkerState] = {}

    for device in devices:
        if device.id in next_markers:
            raise DeviceInvariantError(f"Duplicate device id in snapshot: {device.id}")
        marker = MarkerState(
            device_id=device.id,
            position=projector.project(device.latitude, device.longitude),
            visual=VisualDescriptor.for_device(device, now),
        )
        previous = prior_markers.get(device.id)
        if previous is None:
            to_create.append(device.id)
            changed[device.id] = marker
            next_markers[device.id] = marker
        elif previous.position != marker.position or previous.visual != marker.visual:
            to_update.append(device.id)
            changed[device.id] = marker
            next_markers[device.id] = marker
        else:
            next_markers[device.id] = previous

    to_remove = tuple(device_id for device_id in prior_markers if device_id not in next_markers)

    plan = RenderPlan(
        to_create=tuple(to_create),
        to_update=tuple(to_update),
        to_remove=to_remove,
        markers=MappingProxyType(changed),
    )
    return plan, MappingProxyType(next_markers)


class RenderReconciler:
    """Stateful wrapper around :func:`reconcile` that owns the marker table."""

    def __init__(self, projector: Projector, *, clock: Clock = now_ms) -> None:
        self._projector = projector
        self._clock = clock
        self._markers: MarkerTable = MappingProxyType({})

    @property
    def projector(self) -> Projector:
        return self._projector

    @property
    def markers(self) -> MarkerTable:
        """Read-only view of what the renderer currently shows."""
        return self._markers

    def reconcile(self, devices: Iterable[Device]) -> RenderPlan:
        plan, self._markers = reconcile(devices, self._markers, self._projector, now=self._clock())
        if not plan.is_empty:
            _logger.debug(
                "Render plan create=%s update=%s remove=%s",
                len(plan.to_create),
                len(plan.to_update),
                len(plan.to_remove),
            )
        return plan

    def reset(self) -> None:
        """Forget every marker, e.g. after the map widget was torn down."""
        self._markers = MappingProxyType({})
