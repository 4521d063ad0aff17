from __future__ import annotations

import asyncio
import json
import random
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from netsentry._clock import ManualClock
from netsentry.config import ProjectionMode, SentryConfig
from netsentry.exceptions import DeviceInvariantError, DeviceNotFoundError, SentryTransportError
from netsentry.models.device import Device, DeviceStatus, RiskLevel, Zone
from netsentry.tracker import FleetStats, FleetTracker

NOW = 1_700_000_000_000


@dataclass
class FakeBackend:
    """Answers classification prompts with JSON and everything else with a summary."""

    fail: bool = False
    prompts: list[str] = field(default_factory=list)

    async def generate(self, prompt: str, *, response_schema: Mapping[str, Any] | None = None) -> str:
        self.prompts.append(prompt)
        if self.fail:
            raise SentryTransportError("backend down")
        if response_schema is not None:
            return json.dumps(
                {
                    "manufacturer": "Raspberry Pi Foundation",
                    "deviceType": "Single Board Computer",
                    "securityRisk": "Medium - often runs default images",
                    "likelyUsage": "Hobbyist or lab automation",
                }
            )
        return "Fleet stable. Two anomalies under review."


class _FixedJitter:
    def signal_step(self) -> int:
        return 2

    def coordinate_offset(self) -> float:
        return 0.00001


def _tracker(backend: FakeBackend | None = None, **config: Any) -> tuple[FleetTracker, ManualClock]:
    clock = ManualClock(NOW)
    tracker = FleetTracker(
        SentryConfig(tick_interval=0.01, **config),
        transport=backend,
        clock=clock,
        rng=random.Random(0),
        jitter=_FixedJitter(),
    )
    return tracker, clock


@pytest.mark.asyncio
async def test_activate_seeds_fleet_and_summarizes() -> None:
    backend = FakeBackend()
    tracker, _ = _tracker(backend)

    async with tracker:
        await tracker.activate()
        assert tracker.is_active
        assert [d.id for d in tracker.devices()] == ["1", "2", "3", "4", "5"]
        assert tracker.stats() == FleetStats(total=5, at_risk=2, high_risk=1, online=3)
        assert tracker.status_report == "Fleet stable. Two anomalies under review."
        assert "5 active tracked devices and 2 potential" in backend.prompts[0]

    assert not tracker.is_active


@pytest.mark.asyncio
async def test_summary_failure_uses_fallback_text() -> None:
    tracker, _ = _tracker(FakeBackend(fail=True))
    async with tracker:
        await tracker.activate()
        assert tracker.status_report == "System analysis unavailable."


@pytest.mark.asyncio
async def test_without_api_key_everything_degrades() -> None:
    tracker, _ = _tracker(None)
    async with tracker:
        await tracker.activate()
        assert tracker.status_report == "API Key missing. Cannot generate report."
        device = await tracker.scan("invalid-mac")
    assert device.manufacturer == "Unknown"
    assert device.device_type == "Unidentified Generic Device"
    assert device.risk_level == RiskLevel.LOW
    assert device.notes == "General Network Traffic"


@pytest.mark.asyncio
async def test_ticks_run_until_deactivated() -> None:
    tracker, clock = _tracker(FakeBackend())
    async with tracker:
        await tracker.activate()
        clock.advance(2_000)
        await asyncio.sleep(0.05)
        await tracker.deactivate()
        ticks = tracker.simulator.ticks
        assert ticks > 0
        server = tracker.store.get("1")
        assert server is not None and server.last_seen == NOW + 2_000
        sensor = tracker.store.get("2")
        assert sensor is not None and sensor.last_seen == NOW - 5 * 60_000

        await asyncio.sleep(0.05)
        assert tracker.simulator.ticks == ticks
        await tracker.deactivate()


@pytest.mark.asyncio
async def test_scan_registers_classified_device() -> None:
    tracker, _ = _tracker(FakeBackend())
    async with tracker:
        device = await tracker.scan("B8:27:EB:12:34:56")

    assert tracker.store.get(device.id) == device
    assert device.name == "Raspberry Pi Foundation Single Board Computer"
    assert device.risk_level == RiskLevel.MEDIUM
    assert device.zone == Zone.UNKNOWN
    assert device.status == DeviceStatus.ONLINE
    assert device.first_seen == device.last_seen == NOW


def test_manual_edits() -> None:
    tracker, _ = _tracker()
    device = tracker.register(name="Lobby Kiosk", zone=Zone.LOBBY)

    updated = tracker.update_device(device.id, status=DeviceStatus.WARNING, notes="screen cracked")
    assert updated.status == DeviceStatus.WARNING
    assert updated.first_seen == device.first_seen
    assert tracker.store.get(device.id) == updated

    with pytest.raises(DeviceInvariantError):
        tracker.update_device(device.id, first_seen=0)
    with pytest.raises(DeviceNotFoundError):
        tracker.update_device("nope", name="x")
    with pytest.raises(DeviceInvariantError):
        tracker.add_device(updated)

    assert tracker.remove_device(device.id) == updated
    assert len(tracker.store) == 0


@pytest.mark.parametrize(
    "changes",
    [
        {"last_seen": NOW + 60_000},
        {"signal_strength": -40},
        {"latitude": 34.0525},
        {"longitude": -118.2430},
        {"id": "other"},
    ],
)
def test_manual_edits_reject_telemetry_and_identity(changes: dict[str, Any]) -> None:
    tracker, clock = _tracker()
    device = tracker.register(name="Badge Reader", zone=Zone.LOBBY)
    offline = tracker.update_device(device.id, status=DeviceStatus.OFFLINE)
    clock.advance(60_000)

    with pytest.raises(DeviceInvariantError, match="cannot be edited"):
        tracker.update_device(device.id, **changes)
    assert tracker.store.get(device.id) == offline


def test_manual_edits_accept_classification_fields() -> None:
    tracker, _ = _tracker()
    device = tracker.register(name="Badge Reader", zone=Zone.LOBBY)

    updated = tracker.update_device(
        device.id,
        manufacturer="HID Global",
        device_type="Access Control",
        risk_level=RiskLevel.MEDIUM,
        zone=Zone.OFFICE_SOUTH,
        ip_address="192.168.1.77",
    )

    assert updated.device_type == "Access Control"
    assert updated.zone == Zone.OFFICE_SOUTH
    assert updated.last_seen == device.last_seen
    assert updated.signal_strength == device.signal_strength


def test_render_flow_in_local_mode() -> None:
    tracker, clock = _tracker(projection_mode=ProjectionMode.LOCAL)
    tracker.add_device(
        Device(
            id="1",
            signal_strength=-45,
            latitude=34.0522,
            longitude=-118.2437,
            status=DeviceStatus.ONLINE,
            first_seen=NOW - 1_000,
            last_seen=NOW,
        )
    )
    far = tracker.add_device(
        Device(id="far", latitude=51.5, longitude=-0.12, status=DeviceStatus.OFFLINE, first_seen=NOW, last_seen=NOW)
    )

    first = tracker.render()
    assert first.to_create == ("1", "far")
    assert tracker.render().is_empty

    tracker.simulator.tick()
    second = tracker.render()
    # The centred device moved a fraction of the grid; the clamped one did not.
    assert second.to_update == ("1",)
    assert "far" not in second.to_update

    tracker.remove_device(far.id)
    assert tracker.render().to_remove == ("far",)


def test_single_tick_end_to_end() -> None:
    tracker, clock = _tracker()
    tracker.add_device(
        Device(
            id="1",
            signal_strength=-45,
            latitude=34.0522,
            longitude=-118.2437,
            status=DeviceStatus.ONLINE,
            first_seen=NOW - 5_000,
            last_seen=NOW - 5_000,
        )
    )
    clock.advance(2_000)

    tracker.simulator.tick()

    device = tracker.store.get("1")
    assert device is not None
    assert device.signal_strength == -43
    assert device.latitude == pytest.approx(34.05221)
    assert device.longitude == pytest.approx(-118.24369)
    assert device.last_seen == NOW + 2_000
