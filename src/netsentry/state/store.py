"""Deterministic in-memory device store.

This is the only component allowed to hold fleet state.  Records are
frozen models and every write replaces whole records, so a snapshot handed
out by :meth:`DeviceStore.all` never changes underneath its reader.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from netsentry._constants import clamp_signal
from netsentry.exceptions import DeviceInvariantError, DeviceNotFoundError
from netsentry.models.device import Device

_logger = logging.getLogger(__name__)


def _check_record(device: Device, existing: Device | None) -> Device:
    """Validate *device* against the stored record and normalise its signal.

    ``model_copy`` skips pydantic validation, so trusted writers can still
    hand over an out-of-range signal; it is clamped here rather than
    rejected.
    """
    if device.last_seen < device.first_seen:
        raise DeviceInvariantError(
            f"Device {device.id}: last_seen ({device.last_seen}) precedes first_seen ({device.first_seen})"
        )
    if existing is not None:
        if device.first_seen != existing.first_seen:
            raise DeviceInvariantError(
                f"Device {device.id}: first_seen is immutable ({existing.first_seen} -> {device.first_seen})"
            )
        if device.last_seen < existing.last_seen:
            raise DeviceInvariantError(
                f"Device {device.id}: last_seen moved backwards ({existing.last_seen} -> {device.last_seen})"
            )
    clamped = clamp_signal(device.signal_strength)
    if clamped != device.signal_strength:
        device = device.model_copy(update={"signal_strength": clamped})
    return device


class DeviceStore:
    """In-memory store of tracked devices, keyed by id, in insertion order.

    All reads return immutable values: single :class:`Device` records or a
    tuple snapshot.  The snapshot tuple is rebuilt on write, so
    :meth:`all` is O(1) for the many readers between writes.
    """

    def __init__(self, devices: Iterable[Device] = ()) -> None:
        self._devices: dict[str, Device] = {}
        self._snapshot: tuple[Device, ...] = ()
        self._revision = 0
        initial = list(devices)
        if initial:
            self.upsert_many(initial)

    def __len__(self) -> int:
        return len(self._devices)

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._devices

    @property
    def revision(self) -> int:
        """Incremented once per successful write."""
        return self._revision

    def _commit(self, devices: dict[str, Device]) -> None:
        self._devices = devices
        self._snapshot = tuple(devices.values())
        self._revision += 1

    def get(self, device_id: str) -> Device | None:
        return self._devices.get(device_id)

    def require(self, device_id: str) -> Device:
        """Like :meth:`get` but raises :class:`DeviceNotFoundError`."""
        device = self._devices.get(device_id)
        if device is None:
            raise DeviceNotFoundError(device_id)
        return device

    def all(self) -> tuple[Device, ...]:
        """Consistent snapshot of every device in insertion order."""
        return self._snapshot

    def ids(self) -> tuple[str, ...]:
        return tuple(self._devices)

    def upsert(self, device: Device) -> Device:
        """Insert *device* or replace the record with the same id.

        Replacing keeps the record's position in insertion order.  Returns
        the record as stored (signal clamped).
        """
        stored = _check_record(device, self._devices.get(device.id))
        devices = dict(self._devices)
        devices[stored.id] = stored
        self._commit(devices)
        _logger.debug("Upserted device id=%s revision=%s", stored.id, self._revision)
        return stored

    def upsert_many(self, devices: Iterable[Device]) -> tuple[Device, ...]:
        """Replace or insert several records as one atomic write.

        Either every record passes validation and the new snapshot is
        published at once, or nothing changes.
        """
        staged = dict(self._devices)
        seen: set[str] = set()
        stored: list[Device] = []
        for device in devices:
            if device.id in seen:
                raise DeviceInvariantError(f"Duplicate device id in batch: {device.id}")
            seen.add(device.id)
            checked = _check_record(device, self._devices.get(device.id))
            staged[checked.id] = checked
            stored.append(checked)
        if not stored:
            return ()
        self._commit(staged)
        return tuple(stored)

    def remove(self, device_id: str) -> Device | None:
        """Drop the record for *device_id*; returns it, or ``None`` if absent."""
        if device_id not in self._devices:
            return None
        devices = dict(self._devices)
        removed = devices.pop(device_id)
        self._commit(devices)
        _logger.debug("Removed device id=%s revision=%s", device_id, self._revision)
        return removed
