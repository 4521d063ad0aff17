"""Custom exception hierarchy for netsentry."""

from __future__ import annotations


class SentryError(Exception):
    """Base exception for all netsentry errors."""


class SentryConfigError(SentryError):
    """Invalid or missing configuration."""


class SentryTransportError(SentryError):
    """HTTP-level failure (network, non-200, invalid JSON, timeout)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class SentryApiError(SentryError):
    """The generative backend answered, but not with something usable."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "",
        endpoint: str = "",
    ) -> None:
        self.code = code
        self.endpoint = endpoint
        super().__init__(message)


class DeviceInvariantError(SentryError, ValueError):
    """A record or argument would break a fleet invariant.

    Raised at the boundary of the component that detects it (store upsert,
    summarizer arguments).  The offending value never reaches stored state.
    """


class DeviceNotFoundError(SentryError, KeyError):
    """No device with the requested id is tracked."""

    def __init__(self, device_id: str) -> None:
        self.device_id = device_id
        super().__init__(device_id)

    def __str__(self) -> str:
        return f"Unknown device id: {self.device_id!r}"
