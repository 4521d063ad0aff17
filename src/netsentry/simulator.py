"""Telemetry drift simulator.

Every tick nudges each device's drift fields:

* signal strength moves by ``+step`` or ``-step`` (coin flip per device)
  and is clamped to ``[-95, -30]`` dBm,
* latitude and longitude each move by independent uniform noise in
  ``[-jitter, +jitter]`` degrees, unclamped,
* ``last_seen`` is stamped with the clock, for online devices only.

A tick reads the whole snapshot, computes every new record and writes them
back with one :meth:`DeviceStore.upsert_many` call, so no reader ever sees
half a tick.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import random
from typing import Protocol

from netsentry._clock import Clock, now_ms
from netsentry.models.device import Device, DeviceStatus
from netsentry.state.store import DeviceStore

_logger = logging.getLogger(__name__)


class JitterSource(Protocol):
    """Source of per-device, per-tick noise."""

    def signal_step(self) -> int:
        ...

    def coordinate_offset(self) -> float:
        ...


class RandomJitter:
    """Default noise: fair coin for signal, uniform for coordinates.

    Pass a seeded ``random.Random`` for reproducible runs.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        signal_step: int = 2,
        coordinate_jitter: float = 0.00001,
    ) -> None:
        self._rng = rng or random.Random()
        self._signal_step = signal_step
        self._coordinate_jitter = coordinate_jitter

    def signal_step(self) -> int:
        return self._signal_step if self._rng.random() < 0.5 else -self._signal_step

    def coordinate_offset(self) -> float:
        return self._rng.uniform(-self._coordinate_jitter, self._coordinate_jitter)


def advance(device: Device, jitter: JitterSource, now: int) -> Device:
    """Compute one tick of drift for a single device."""
    update: dict[str, object] = {
        # Clamped by the store on write.
        "signal_strength": device.signal_strength + jitter.signal_step(),
        "latitude": device.latitude + jitter.coordinate_offset(),
        "longitude": device.longitude + jitter.coordinate_offset(),
    }
    if device.status == DeviceStatus.ONLINE:
        update["last_seen"] = max(device.last_seen, now)
    return device.model_copy(update=update)


class TelemetrySimulator:
    """Owns the recurring drift task for one :class:`DeviceStore`.

    ``start()`` and ``stop()`` are idempotent.  ``tick()`` can be driven
    directly (tests, replay) without starting the task.
    """

    def __init__(
        self,
        store: DeviceStore,
        *,
        interval: float = 2.0,
        jitter: JitterSource | None = None,
        clock: Clock = now_ms,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._store = store
        self._interval = interval
        self._jitter = jitter or RandomJitter()
        self._clock = clock
        self._task: asyncio.Task[None] | None = None
        self._ticks = 0

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def ticks(self) -> int:
        """Number of ticks applied so far."""
        return self._ticks

    def tick(self) -> tuple[Device, ...]:
        """Apply one round of drift to every device and return the new snapshot."""
        now = self._clock()
        snapshot = self._store.all()
        if snapshot:
            self._store.upsert_many(advance(device, self._jitter, now) for device in snapshot)
        self._ticks += 1
        _logger.debug("Telemetry tick=%s devices=%s now=%s", self._ticks, len(snapshot), now)
        return self._store.all()

    def start(self) -> None:
        """Schedule the recurring task on the running loop (no-op if already running)."""
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name="netsentry-telemetry")
        _logger.info("Telemetry simulator started interval=%.2fs", self._interval)

    async def stop(self) -> None:
        """Cancel the recurring task and wait for it to finish (no-op if idle)."""
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        _logger.info("Telemetry simulator stopped after %s ticks", self._ticks)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self.tick()
            except Exception:
                _logger.exception("Telemetry tick failed; keeping previous snapshot")
