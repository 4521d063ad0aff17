"""Marker visual descriptors.

The presentation layer styles markers by class name; this module only
decides which classes apply and what the popup says, and reduces the
popup to a digest so the reconciler can compare it cheaply.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import StrEnum

from netsentry.models.device import Device, DeviceStatus, RiskLevel

_MS_PER_MINUTE = 60_000
_MS_PER_HOUR = 3_600_000


class MarkerColor(StrEnum):
    CRITICAL = "bg-rose-500 shadow-rose-500/50"
    WARNING = "bg-amber-500 shadow-amber-500/50"
    SAFE = "bg-emerald-500 shadow-emerald-500/50"


def marker_color(device: Device) -> MarkerColor:
    if device.status == DeviceStatus.CRITICAL or device.risk_level == RiskLevel.HIGH:
        return MarkerColor.CRITICAL
    if device.status == DeviceStatus.WARNING or device.risk_level == RiskLevel.MEDIUM:
        return MarkerColor.WARNING
    return MarkerColor.SAFE


def format_duration(ms: int) -> str:
    """Compact uptime text: ``"5d 3h"`` from a day upwards, else ``"2h 15m"``."""
    ms = max(0, int(ms))
    hours = ms // _MS_PER_HOUR
    days = hours // 24
    if days > 0:
        return f"{days}d {hours % 24}h"
    return f"{hours}h {(ms // _MS_PER_MINUTE) % 60}m"


def popup_text(device: Device, now: int) -> str:
    """Plain-text popup body; layout is the presentation layer's business."""
    lines = [
        f"{device.name} [{device.risk_level.value}]",
        device.mac_address,
        f"Zone: {device.zone.value}",
        f"Status: {device.status.value}",
        f"Active for: {format_duration(now - device.first_seen)}",
        f"{device.latitude:.4f}, {device.longitude:.4f}",
    ]
    return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class VisualDescriptor:
    """Everything about a marker's look that can change between renders."""

    color: MarkerColor
    pulse: bool
    popup_hash: str

    @classmethod
    def for_device(cls, device: Device, now: int) -> VisualDescriptor:
        digest = hashlib.sha1(popup_text(device, now).encode("utf-8"), usedforsecurity=False).hexdigest()
        return cls(
            color=marker_color(device),
            pulse=device.status == DeviceStatus.ONLINE,
            popup_hash=digest,
        )
