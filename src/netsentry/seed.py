"""Demo fleet used when a tracker is activated with an empty store."""

from __future__ import annotations

from netsentry.models.device import Device, DeviceStatus, RiskLevel, Zone

_MINUTE = 60_000
_HOUR = 3_600_000
_DAY = 24 * _HOUR


def initial_devices(now: int) -> list[Device]:
    """Five globally distributed devices with timestamps relative to *now*."""
    return [
        Device(
            id="1",
            mac_address="A4:C3:F0:89:12:34",
            ip_address="192.168.1.105",
            name="HQ Server Node",
            manufacturer="Dell Inc.",
            device_type="Server",
            status=DeviceStatus.ONLINE,
            zone=Zone.SERVER_ROOM,
            last_seen=now,
            first_seen=now - 5 * _DAY,
            signal_strength=-45,
            latitude=34.0522,
            longitude=-118.2437,
            risk_level=RiskLevel.LOW,
            notes="Main backend infrastructure",
        ),
        Device(
            id="2",
            mac_address="00:1B:44:11:3A:B7",
            ip_address="10.0.5.20",
            name="NYC Branch IoT",
            manufacturer="Espressif Inc.",
            device_type="Smart Sensor",
            status=DeviceStatus.WARNING,
            zone=Zone.LOBBY,
            last_seen=now - 5 * _MINUTE,
            first_seen=now - 2 * _DAY,
            signal_strength=-72,
            latitude=40.7128,
            longitude=-74.0060,
            risk_level=RiskLevel.MEDIUM,
            notes="Unauthorized firmware version",
        ),
        Device(
            id="3",
            mac_address="BC:D1:12:88:99:00",
            ip_address="172.16.0.45",
            name="London Workstation",
            manufacturer="Apple, Inc.",
            device_type="MacBook Pro",
            status=DeviceStatus.ONLINE,
            zone=Zone.OFFICE_NORTH,
            last_seen=now - _MINUTE,
            first_seen=now - 3 * _HOUR,
            signal_strength=-55,
            latitude=51.5074,
            longitude=-0.1278,
            risk_level=RiskLevel.LOW,
            notes="Remote developer asset",
        ),
        Device(
            id="4",
            mac_address="11:22:33:44:55:66",
            ip_address="192.168.50.10",
            name="Tokyo Gateway",
            manufacturer="Cisco Systems",
            device_type="Router",
            status=DeviceStatus.CRITICAL,
            zone=Zone.WAREHOUSE,
            last_seen=now - 10_000,
            first_seen=now - 30 * _DAY,
            signal_strength=-30,
            latitude=35.6762,
            longitude=139.6503,
            risk_level=RiskLevel.HIGH,
            notes="Unusual traffic patterns detected",
        ),
        Device(
            id="5",
            mac_address="AA:BB:CC:DD:EE:FF",
            ip_address="10.5.1.99",
            name="SG Logistics Pad",
            manufacturer="Samsung",
            device_type="Tablet",
            status=DeviceStatus.ONLINE,
            zone=Zone.WAREHOUSE,
            last_seen=now,
            first_seen=now - _HOUR,
            signal_strength=-60,
            latitude=1.3521,
            longitude=103.8198,
            risk_level=RiskLevel.LOW,
            notes="Inventory management",
        ),
    ]
