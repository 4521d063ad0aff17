"""netsentry - live asset telemetry engine for network device fleets."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("netsentry")
except PackageNotFoundError:
    __version__ = "0+local"
from netsentry._clock import Clock, ManualClock, now_ms
from netsentry.config import FacilityBounds, ProjectionMode, SentryConfig
from netsentry.enrichment.classifier import DeviceClassifier
from netsentry.enrichment.summarizer import FleetSummarizer
from netsentry.exceptions import (
    DeviceInvariantError,
    DeviceNotFoundError,
    SentryApiError,
    SentryConfigError,
    SentryError,
    SentryTransportError,
)
from netsentry.models import Device, DeviceProfile, DeviceStatus, RiskLevel, Zone
from netsentry.projection import (
    GeoPoint,
    LocalProjector,
    ProjectedPoint,
    Projector,
    TileMapProjector,
    build_projector,
)
from netsentry.render.markers import MarkerState, RenderPlan
from netsentry.render.reconciler import RenderReconciler, reconcile
from netsentry.simulator import RandomJitter, TelemetrySimulator
from netsentry.state.store import DeviceStore
from netsentry.tracker import FleetStats, FleetTracker

__all__ = [
    "__version__",
    "Clock",
    "Device",
    "DeviceClassifier",
    "DeviceInvariantError",
    "DeviceNotFoundError",
    "DeviceProfile",
    "DeviceStatus",
    "DeviceStore",
    "FacilityBounds",
    "FleetStats",
    "FleetSummarizer",
    "FleetTracker",
    "GeoPoint",
    "LocalProjector",
    "ManualClock",
    "MarkerState",
    "ProjectedPoint",
    "ProjectionMode",
    "Projector",
    "RandomJitter",
    "RenderPlan",
    "RenderReconciler",
    "RiskLevel",
    "SentryApiError",
    "SentryConfig",
    "SentryConfigError",
    "SentryError",
    "SentryTransportError",
    "TelemetrySimulator",
    "TileMapProjector",
    "Zone",
    "now_ms",
    "reconcile",
]
