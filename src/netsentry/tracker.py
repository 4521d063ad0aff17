"""High-level fleet tracker."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any

import aiohttp

from netsentry._clock import Clock, now_ms
from netsentry._constants import DEFAULT_MANUAL_TYPE, SUMMARY_PENDING
from netsentry.config import SentryConfig
from netsentry.enrichment._transport import GenerativeTransport, Transport
from netsentry.enrichment.classifier import DeviceClassifier
from netsentry.enrichment.summarizer import FleetSummarizer
from netsentry.exceptions import DeviceInvariantError
from netsentry.models.device import Device, RiskLevel, Zone
from netsentry.models.profile import DeviceProfile
from netsentry.projection import build_projector
from netsentry.registration import build_device, build_scanned_device
from netsentry.render.markers import RenderPlan
from netsentry.render.reconciler import RenderReconciler
from netsentry.seed import initial_devices
from netsentry.simulator import JitterSource, RandomJitter, TelemetrySimulator
from netsentry.state.store import DeviceStore

_logger = logging.getLogger(__name__)

# Fields a manual edit may change.
_EDITABLE_FIELDS = frozenset(
    {"name", "manufacturer", "device_type", "notes", "mac_address", "ip_address", "status", "risk_level", "zone"}
)


@dataclass(frozen=True, slots=True)
class FleetStats:
    """Aggregate counts shown on the dashboard."""

    total: int
    at_risk: int
    high_risk: int
    online: int

    @classmethod
    def from_devices(cls, devices: tuple[Device, ...]) -> FleetStats:
        return cls(
            total=len(devices),
            at_risk=sum(1 for d in devices if d.is_at_risk),
            high_risk=sum(1 for d in devices if d.risk_level == RiskLevel.HIGH),
            online=sum(1 for d in devices if d.is_online),
        )


class FleetTracker:
    """Bundles store, simulator, reconciler, classifier and summarizer.

    Usage::

        async with FleetTracker(SentryConfig.from_env()) as tracker:
            await tracker.activate()
            plan = tracker.render()
            ...
            await tracker.deactivate()

    All store writes happen on the event loop the tracker runs on.
    Classification and summaries are awaited independently of the
    simulator and merged with single upserts when they complete.
    """

    def __init__(
        self,
        config: SentryConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        store: DeviceStore | None = None,
        clock: Clock = now_ms,
        rng: random.Random | None = None,
        jitter: JitterSource | None = None,
    ) -> None:
        self._config = config.validate()
        self._clock = clock
        self._rng = rng or random.Random()
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport
        self._store = store if store is not None else DeviceStore()
        self._simulator = TelemetrySimulator(
            self._store,
            interval=config.tick_interval,
            jitter=jitter
            or RandomJitter(
                self._rng,
                signal_step=config.signal_step,
                coordinate_jitter=config.coordinate_jitter,
            ),
            clock=clock,
        )
        self._reconciler = RenderReconciler(build_projector(config), clock=clock)
        self._classifier = DeviceClassifier(transport)
        self._summarizer = FleetSummarizer(transport)
        self._status_report = SUMMARY_PENDING

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> FleetTracker:
        if self._transport is None and self._config.api_key:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = GenerativeTransport(self._config, self._http_session)
            self._classifier = DeviceClassifier(self._transport)
            self._summarizer = FleetSummarizer(self._transport)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.deactivate()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def store(self) -> DeviceStore:
        return self._store

    @property
    def simulator(self) -> TelemetrySimulator:
        return self._simulator

    @property
    def reconciler(self) -> RenderReconciler:
        return self._reconciler

    @property
    def status_report(self) -> str:
        """Latest fleet summary text."""
        return self._status_report

    @property
    def is_active(self) -> bool:
        return self._simulator.is_running

    def devices(self) -> tuple[Device, ...]:
        return self._store.all()

    def stats(self) -> FleetStats:
        return FleetStats.from_devices(self._store.all())

    # ------------------------------------------------------------------
    # Activation
    # ------------------------------------------------------------------

    async def activate(self, *, seed: bool = True) -> None:
        """Start live tracking: seed an empty store, start ticks, refresh the summary."""
        if seed and not len(self._store):
            self._store.upsert_many(initial_devices(self._clock()))
        self._simulator.start()
        await self.refresh_summary()

    async def deactivate(self) -> None:
        """Stop ticking.  Safe to call when already inactive."""
        await self._simulator.stop()

    # ------------------------------------------------------------------
    # Fleet edits
    # ------------------------------------------------------------------

    async def classify(self, identifier: str) -> DeviceProfile:
        return await self._classifier.classify(identifier)

    async def scan(self, identifier: str) -> Device:
        """Classify *identifier* and register it as a new online device."""
        profile = await self._classifier.classify(identifier)
        device = build_scanned_device(
            identifier,
            profile,
            now=self._clock(),
            facility=self._config.facility,
            rng=self._rng,
            existing_ids=set(self._store.ids()),
        )
        return self._store.upsert(device)

    def register(
        self,
        *,
        mac_address: str = "",
        name: str = "",
        manufacturer: str = "Unknown",
        device_type: str = DEFAULT_MANUAL_TYPE,
        zone: Zone = Zone.LOBBY,
        risk_level: RiskLevel = RiskLevel.LOW,
        notes: str = "",
    ) -> Device:
        """Manual registration."""
        device = build_device(
            now=self._clock(),
            facility=self._config.facility,
            rng=self._rng,
            existing_ids=set(self._store.ids()),
            mac_address=mac_address,
            name=name,
            manufacturer=manufacturer,
            device_type=device_type,
            zone=zone,
            risk_level=risk_level,
            notes=notes,
        )
        return self._store.upsert(device)

    def add_device(self, device: Device) -> Device:
        if device.id in self._store:
            raise DeviceInvariantError(f"Device id already tracked: {device.id}")
        return self._store.upsert(device)

    def update_device(self, device_id: str, **changes: Any) -> Device:
        """Apply a manual edit to descriptive/classification fields."""
        forbidden = set(changes) - _EDITABLE_FIELDS
        if forbidden:
            raise DeviceInvariantError(f"Fields cannot be edited: {', '.join(sorted(forbidden))}")
        current = self._store.require(device_id)
        return self._store.upsert(current.evolve(**changes))

    def remove_device(self, device_id: str) -> Device | None:
        return self._store.remove(device_id)

    # ------------------------------------------------------------------
    # Rendering and reporting
    # ------------------------------------------------------------------

    def render(self) -> RenderPlan:
        """Reconcile the current snapshot against what was last drawn."""
        return self._reconciler.reconcile(self._store.all())

    async def refresh_summary(self) -> str:
        stats = self.stats()
        if stats.total == 0:
            return self._status_report
        self._status_report = await self._summarizer.summarize(stats.total, stats.at_risk)
        _logger.debug("Fleet summary refreshed total=%s at_risk=%s", stats.total, stats.at_risk)
        return self._status_report

