"""Internal constants shared across the library."""

from __future__ import annotations

# ------------------------------------------------------------------
# Signal strength domain (dBm)
# ------------------------------------------------------------------

SIGNAL_MIN_DBM = -95
SIGNAL_MAX_DBM = -30


def clamp_signal(dbm: int) -> int:
    """Clamp *dbm* into ``[SIGNAL_MIN_DBM, SIGNAL_MAX_DBM]``."""
    return max(SIGNAL_MIN_DBM, min(SIGNAL_MAX_DBM, int(dbm)))


def signal_quality_percent(dbm: int) -> int:
    """Map a dBm reading to the 0-100 bar width shown next to each device.

    -50 dBm and stronger render as a full bar; -100 dBm as empty.
    """
    return max(0, min(100, (100 + int(dbm)) * 2))


# ------------------------------------------------------------------
# Classification / summary fallbacks
# ------------------------------------------------------------------

FALLBACK_MANUFACTURER = "Unknown"
FALLBACK_DEVICE_TYPE = "Unidentified Generic Device"
FALLBACK_USAGE_NOTE = "General Network Traffic"

SUMMARY_FALLBACK = "System analysis unavailable."
SUMMARY_EMPTY = "System status normal."
SUMMARY_NO_API_KEY = "API Key missing. Cannot generate report."
SUMMARY_PENDING = "Generating security assessment..."

# ------------------------------------------------------------------
# Registration defaults
# ------------------------------------------------------------------

DEFAULT_MAC = "00:00:00:00:00:00"
DEFAULT_DEVICE_NAME = "Unnamed Device"
DEFAULT_MANUAL_TYPE = "Generic Device"
