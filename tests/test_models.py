"""Tests for the pydantic device/profile models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from netsentry.models.device import Device, DeviceStatus, RiskLevel, Zone
from netsentry.models.profile import DeviceProfile


def _device(**overrides: object) -> Device:
    data: dict[str, object] = {
        "id": "dev-1",
        "first_seen": 1_000,
        "last_seen": 2_000,
        "signal_strength": -50,
    }
    data.update(overrides)
    return Device.model_validate(data)


class TestEnums:
    def test_zone_unknown_value_falls_back(self) -> None:
        assert Zone("Rooftop") == Zone.UNKNOWN

    def test_zone_matches_case_insensitively(self) -> None:
        assert Zone("server room") == Zone.SERVER_ROOM

    def test_status_rejects_unknown_value(self) -> None:
        with pytest.raises(ValueError):
            DeviceStatus("Sleeping")

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("High - open telnet port", RiskLevel.HIGH),
            ("Medium risk: default credentials", RiskLevel.MEDIUM),
            ("Low - Unable to verify OUI", RiskLevel.LOW),
            ("Low - highly unlikely to be targeted", RiskLevel.LOW),
            ("Low - medium-sized vendor, well patched", RiskLevel.LOW),
            ("high", RiskLevel.HIGH),
            ("", RiskLevel.LOW),
            (None, RiskLevel.LOW),
        ],
    )
    def test_risk_from_assessment(self, text: str | None, expected: RiskLevel) -> None:
        assert RiskLevel.from_assessment(text) == expected


class TestDevice:
    def test_camel_case_payload(self) -> None:
        device = Device.model_validate(
            {
                "id": "1",
                "macAddress": "A4:C3:F0:89:12:34",
                "ipAddress": "192.168.1.105",
                "type": "Server",
                "status": "Online",
                "zone": "Server Room",
                "riskLevel": "Low",
                "signalStrength": -45,
                "latitude": 34.0522,
                "longitude": -118.2437,
                "firstSeen": 10,
                "lastSeen": 20,
            }
        )
        assert device.mac_address == "A4:C3:F0:89:12:34"
        assert device.device_type == "Server"
        assert device.zone == Zone.SERVER_ROOM
        assert device.model_dump(by_alias=True)["type"] == "Server"

    @pytest.mark.parametrize(("raw", "expected"), [(-120, -95), (-10, -30), (-64.6, -65)])
    def test_signal_clamped_on_construction(self, raw: float, expected: int) -> None:
        assert _device(signal_strength=raw).signal_strength == expected

    def test_last_seen_before_first_seen_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _device(first_seen=5_000, last_seen=4_999)

    def test_blank_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _device(id="   ")

    def test_frozen(self) -> None:
        device = _device()
        with pytest.raises(ValidationError):
            device.name = "renamed"  # type: ignore[misc]

    def test_evolve_revalidates(self) -> None:
        device = _device()
        evolved = device.evolve(signal_strength=-200, name="Printer")
        assert evolved.signal_strength == -95
        assert evolved.name == "Printer"
        assert device.name == ""

    def test_placeholders_fall_back_to_defaults(self) -> None:
        device = _device(mac_address="--", notes="")
        assert device.mac_address == "00:00:00:00:00:00"

    def test_derived_properties(self) -> None:
        device = _device(risk_level=RiskLevel.MEDIUM, status=DeviceStatus.OFFLINE, signal_strength=-60)
        assert device.is_at_risk
        assert not device.is_online
        assert device.signal_quality == 80


class TestDeviceProfile:
    def test_backend_payload_keys(self) -> None:
        profile = DeviceProfile.model_validate(
            {
                "manufacturer": "Espressif Inc.",
                "deviceType": "IoT Sensor",
                "securityRisk": "Medium - firmware rarely patched",
                "likelyUsage": "Home automation",
            }
        )
        assert profile.manufacturer == "Espressif Inc."
        assert profile.device_type == "IoT Sensor"
        assert profile.risk_level == RiskLevel.MEDIUM
        assert profile.usage_note == "Home automation"
        assert profile.display_name == "Espressif Inc. IoT Sensor"

    def test_risk_level_text_is_parsed(self) -> None:
        profile = DeviceProfile.model_validate({"riskLevel": "High - exposed admin UI"})
        assert profile.risk_level == RiskLevel.HIGH

    def test_lowercase_prose_does_not_raise_risk(self) -> None:
        profile = DeviceProfile.model_validate({"securityRisk": "Low - highly unlikely to be targeted"})
        assert profile.risk_level == RiskLevel.LOW

    def test_missing_fields_use_fallback_values(self) -> None:
        assert DeviceProfile.model_validate({}) == DeviceProfile.fallback()

    def test_fallback_values(self) -> None:
        fallback = DeviceProfile.fallback()
        assert fallback.manufacturer == "Unknown"
        assert fallback.device_type == "Unidentified Generic Device"
        assert fallback.risk_level == RiskLevel.LOW
        assert fallback.usage_note == "General Network Traffic"
