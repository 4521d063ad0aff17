"""Pydantic models for netsentry records."""

from netsentry.models.device import Device, DeviceStatus, RiskLevel, Zone
from netsentry.models.profile import DeviceProfile

__all__ = [
    "Device",
    "DeviceProfile",
    "DeviceStatus",
    "RiskLevel",
    "Zone",
]
