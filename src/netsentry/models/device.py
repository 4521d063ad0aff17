"""Tracked device record and its classification enums."""

from __future__ import annotations

import re
from typing import Any

from pydantic import Field, field_validator, model_validator

from netsentry._constants import DEFAULT_MAC, DEFAULT_MANUAL_TYPE, clamp_signal, signal_quality_percent
from netsentry.models._base import SentryBaseModel, SentryEnum

_HIGH_TOKEN = re.compile(r"\bHigh\b")
_MEDIUM_TOKEN = re.compile(r"\bMedium\b")


class DeviceStatus(SentryEnum):
    """Connectivity state of a device."""

    ONLINE = "Online"
    OFFLINE = "Offline"
    WARNING = "Warning"
    CRITICAL = "Critical"


class RiskLevel(SentryEnum):
    """Security risk assessment."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def from_assessment(cls, text: str | None) -> RiskLevel:
        """Pick a level out of a free-text assessment such as ``"High - open telnet"``.

        Only the capitalized level words count, so prose like ``"highly unlikely"``
        does not raise the level.  Anything without ``High`` or ``Medium`` is ``Low``.
        """
        if not text:
            return cls.LOW
        bare = text.strip().lower()
        for member in cls:
            if member.value.lower() == bare:
                return member
        if _HIGH_TOKEN.search(text):
            return cls.HIGH
        if _MEDIUM_TOKEN.search(text):
            return cls.MEDIUM
        return cls.LOW


class Zone(SentryEnum):
    """Named facility areas."""

    SERVER_ROOM = "Server Room"
    LOBBY = "Lobby"
    OFFICE_NORTH = "Office North"
    OFFICE_SOUTH = "Office South"
    WAREHOUSE = "Warehouse"
    PARKING_LOT = "Parking Lot"
    UNKNOWN = "Unknown"

    @classmethod
    def _fallback(cls) -> Zone:
        return cls.UNKNOWN


class Device(SentryBaseModel):
    """One tracked network asset.

    Records are immutable; every change produces a new record through
    :meth:`evolve` (validated) or ``model_copy(update=...)`` (trusted
    internal paths only).

    Parameters
    ----------
    id : str
        Unique, stable identifier.
    mac_address : str
        Hardware address as entered or scanned.
    ip_address : str
        Last known IP address.
    name, manufacturer, device_type, notes : str
        Descriptive fields. ``device_type`` is exposed as ``type`` on the wire.
    status : DeviceStatus
        Connectivity state.
    risk_level : RiskLevel
        Security assessment.
    zone : Zone
        Facility area the device was last placed in.
    signal_strength : int
        dBm, always within ``[-95, -30]``.
    latitude, longitude : float
        Degrees.
    first_seen, last_seen : int
        Epoch milliseconds; ``first_seen <= last_seen``.
    """

    id: str
    mac_address: str = DEFAULT_MAC
    ip_address: str = ""
    name: str = ""
    manufacturer: str = "Unknown"
    device_type: str = Field(default=DEFAULT_MANUAL_TYPE, alias="type")
    status: DeviceStatus = DeviceStatus.ONLINE
    zone: Zone = Zone.UNKNOWN
    risk_level: RiskLevel = RiskLevel.LOW
    notes: str = ""
    signal_strength: int = -60
    latitude: float = 0.0
    longitude: float = 0.0
    first_seen: int
    last_seen: int

    @field_validator("id")
    @classmethod
    def _normalize_id(cls, value: str) -> str:
        device_id = value.strip()
        if not device_id:
            raise ValueError("id must be non-empty")
        return device_id

    @field_validator("signal_strength", mode="before")
    @classmethod
    def _clamp_signal(cls, value: Any) -> int:
        return clamp_signal(int(round(float(value))))

    @model_validator(mode="after")
    def _check_timestamps(self) -> Device:
        if self.last_seen < self.first_seen:
            raise ValueError(f"last_seen ({self.last_seen}) precedes first_seen ({self.first_seen})")
        return self

    def evolve(self, **changes: Any) -> Device:
        """Return a validated copy with *changes* applied.

        Unlike ``model_copy`` this re-runs validation, so the signal is
        clamped and the timestamp ordering is checked.
        """
        data = self.model_dump()
        data.update(changes)
        return Device.model_validate(data)

    @property
    def is_online(self) -> bool:
        return self.status == DeviceStatus.ONLINE

    @property
    def is_at_risk(self) -> bool:
        """Anything above Low risk counts towards the fleet's at-risk total."""
        return self.risk_level != RiskLevel.LOW

    @property
    def signal_quality(self) -> int:
        """Signal bar width in percent."""
        return signal_quality_percent(self.signal_strength)
