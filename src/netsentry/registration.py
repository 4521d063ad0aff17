"""Building new device records from scans and manual entry.

Placement is simulated: real triangulation is out of reach, so a device
registered into a known zone is dropped at a random point inside that
zone's overlay, and anything else lands somewhere in the inner 10-90%
band of the facility grid.
"""

from __future__ import annotations

import random
import string

from netsentry._constants import DEFAULT_DEVICE_NAME, DEFAULT_MAC, DEFAULT_MANUAL_TYPE
from netsentry.config import FacilityBounds
from netsentry.models.device import Device, DeviceStatus, RiskLevel, Zone
from netsentry.models.profile import DeviceProfile
from netsentry.projection import LocalProjector, ProjectedPoint, zone_rect

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_LENGTH = 9


def new_device_id(rng: random.Random) -> str:
    return "".join(rng.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


def _placement(zone: Zone, rng: random.Random) -> ProjectedPoint:
    rect = zone_rect(zone)
    if rect is None:
        return ProjectedPoint(x=float(rng.randint(10, 89)), y=float(rng.randint(10, 89)))
    return ProjectedPoint(
        x=rng.uniform(rect.x, rect.x + rect.width),
        y=rng.uniform(rect.y, rect.y + rect.height),
    )


def build_device(
    *,
    now: int,
    facility: FacilityBounds,
    rng: random.Random,
    existing_ids: frozenset[str] | set[str] = frozenset(),
    mac_address: str = "",
    name: str = "",
    manufacturer: str = "Unknown",
    device_type: str = DEFAULT_MANUAL_TYPE,
    zone: Zone = Zone.LOBBY,
    risk_level: RiskLevel = RiskLevel.LOW,
    notes: str = "",
) -> Device:
    """Create a freshly seen, online device.

    ``first_seen`` and ``last_seen`` are both *now*; the id is a random
    9-character base-36 string that does not collide with *existing_ids*.
    """
    device_id = new_device_id(rng)
    while device_id in existing_ids:
        device_id = new_device_id(rng)

    geo = LocalProjector(facility).unproject(_placement(zone, rng))
    return Device(
        id=device_id,
        mac_address=mac_address or DEFAULT_MAC,
        ip_address=f"192.168.1.{rng.randint(0, 253)}",
        name=name or DEFAULT_DEVICE_NAME,
        manufacturer=manufacturer,
        device_type=device_type,
        status=DeviceStatus.ONLINE,
        zone=zone,
        risk_level=risk_level,
        notes=notes,
        signal_strength=-rng.randint(30, 69),
        latitude=geo.lat,
        longitude=geo.lng,
        first_seen=now,
        last_seen=now,
    )


def build_scanned_device(
    identifier: str,
    profile: DeviceProfile,
    *,
    now: int,
    facility: FacilityBounds,
    rng: random.Random,
    existing_ids: frozenset[str] | set[str] = frozenset(),
) -> Device:
    """Register a scanned identifier using its classification profile.

    The zone is left ``Unknown`` until someone places the device.
    """
    return build_device(
        now=now,
        facility=facility,
        rng=rng,
        existing_ids=existing_ids,
        mac_address=identifier,
        name=profile.display_name,
        manufacturer=profile.manufacturer,
        device_type=profile.device_type,
        zone=Zone.UNKNOWN,
        risk_level=profile.risk_level,
        notes=profile.usage_note,
    )
