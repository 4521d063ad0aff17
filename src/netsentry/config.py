"""Engine configuration for netsentry."""

from __future__ import annotations

import dataclasses
import os
from enum import StrEnum
from typing import Any

from netsentry.exceptions import SentryConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise SentryConfigError(f"{env_key} must be numeric, got {value!r}") from exc


class ProjectionMode(StrEnum):
    """How geocoordinates are turned into renderable positions."""

    TILE_MAP = "tile_map"
    LOCAL = "local"


@dataclasses.dataclass(frozen=True)
class FacilityBounds:
    """Geographic rectangle covered by the local facility grid.

    The defaults frame the headquarters campus so that the seeded
    server node lands in the middle of the grid.
    """

    north: float = 34.0530
    south: float = 34.0514
    east: float = -118.2425
    west: float = -118.2449

    @property
    def is_degenerate(self) -> bool:
        """Whether either axis has zero extent."""
        return self.east == self.west or self.north == self.south


@dataclasses.dataclass(frozen=True)
class SentryConfig:
    """Engine configuration.

    Parameters
    ----------
    api_key : str or None
        Key for the generative backend used by the classifier and the
        fleet summarizer.  Without it both degrade to their fallbacks.
    base_url : str
        Generative backend base URL.
    model : str
        Model name used for ``generateContent`` calls.
    request_timeout : float
        Total seconds allowed for one classification or summary call.
    tick_interval : float
        Seconds between telemetry simulator ticks.
    projection_mode : ProjectionMode
        Projection strategy used when rendering markers.
    facility : FacilityBounds
        Bounds of the local facility grid (local projection only).
    signal_step : int
        Absolute dBm change applied to every device on each tick.
    coordinate_jitter : float
        Half-width in degrees of the uniform GPS jitter per tick.
    api_trace_enabled : bool
        Log redacted request/response bodies at DEBUG level.
    """

    api_key: str | None = None
    base_url: str = "https://generativelanguage.googleapis.com"
    model: str = "gemini-2.5-flash"
    request_timeout: float = 15.0
    tick_interval: float = 2.0
    projection_mode: ProjectionMode = ProjectionMode.TILE_MAP
    facility: FacilityBounds = dataclasses.field(default_factory=FacilityBounds)
    signal_step: int = 2
    coordinate_jitter: float = 0.00001
    api_trace_enabled: bool = False

    def validate(self) -> SentryConfig:
        """Raise :class:`SentryConfigError` for values the engine cannot run with."""
        if self.tick_interval <= 0:
            raise SentryConfigError(f"tick_interval must be positive, got {self.tick_interval}")
        if self.request_timeout <= 0:
            raise SentryConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.signal_step < 0:
            raise SentryConfigError(f"signal_step must not be negative, got {self.signal_step}")
        if self.coordinate_jitter < 0:
            raise SentryConfigError(f"coordinate_jitter must not be negative, got {self.coordinate_jitter}")
        if self.projection_mode == ProjectionMode.LOCAL and self.facility.is_degenerate:
            raise SentryConfigError(f"Facility bounds have zero extent: {self.facility}")
        return self

    @classmethod
    def from_env(cls, **overrides: Any) -> SentryConfig:
        """Create configuration from environment variables.

        Reads ``NETSENTRY_API_KEY`` and the optional ``NETSENTRY_*``
        variables below.  Explicit keyword arguments override environment
        values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        SentryConfig
            Populated configuration.
        """
        env = os.environ

        facility_kwargs: dict[str, float] = {}
        _ENV_FACILITY_MAP = {
            "NETSENTRY_FACILITY_NORTH": "north",
            "NETSENTRY_FACILITY_SOUTH": "south",
            "NETSENTRY_FACILITY_EAST": "east",
            "NETSENTRY_FACILITY_WEST": "west",
        }
        for env_key, field_name in _ENV_FACILITY_MAP.items():
            val = env.get(env_key)
            if val is not None:
                facility_kwargs[field_name] = _env_float(env_key, val)

        facility_overrides = overrides.pop("facility", None)
        if isinstance(facility_overrides, dict):
            facility_kwargs.update(facility_overrides)
        elif isinstance(facility_overrides, FacilityBounds):
            facility_kwargs = dataclasses.asdict(facility_overrides)

        facility = FacilityBounds(**facility_kwargs) if facility_kwargs else FacilityBounds()

        _ENV_CONFIG_MAP = {
            "NETSENTRY_API_KEY": "api_key",
            "NETSENTRY_BASE_URL": "base_url",
            "NETSENTRY_MODEL": "model",
        }
        config_kwargs: dict[str, Any] = {"facility": facility}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # Numeric settings, handled separately
        _ENV_FLOAT_MAP = {
            "NETSENTRY_REQUEST_TIMEOUT": "request_timeout",
            "NETSENTRY_TICK_INTERVAL": "tick_interval",
            "NETSENTRY_COORDINATE_JITTER": "coordinate_jitter",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        step_env = env.get("NETSENTRY_SIGNAL_STEP")
        if step_env is not None and "signal_step" not in overrides:
            config_kwargs["signal_step"] = int(_env_float("NETSENTRY_SIGNAL_STEP", step_env))

        mode_env = env.get("NETSENTRY_PROJECTION_MODE")
        if mode_env is not None and "projection_mode" not in overrides:
            try:
                config_kwargs["projection_mode"] = ProjectionMode(mode_env.strip().lower())
            except ValueError as exc:
                raise SentryConfigError(f"Unknown projection mode: {mode_env!r}") from exc

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(
                env.get("NETSENTRY_API_TRACE_ENABLED"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
