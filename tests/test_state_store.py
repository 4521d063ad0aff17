from __future__ import annotations

import pytest

from netsentry.exceptions import DeviceInvariantError, DeviceNotFoundError
from netsentry.models.device import Device
from netsentry.state.store import DeviceStore


def _device(device_id: str, **overrides: object) -> Device:
    data: dict[str, object] = {
        "id": device_id,
        "first_seen": 1_000,
        "last_seen": 2_000,
        "signal_strength": -50,
    }
    data.update(overrides)
    return Device.model_validate(data)


def test_all_preserves_insertion_order_across_replacement() -> None:
    store = DeviceStore([_device("a"), _device("b"), _device("c")])

    store.upsert(_device("b", name="renamed", last_seen=3_000))

    assert [d.id for d in store.all()] == ["a", "b", "c"]
    assert store.get("b").name == "renamed"  # type: ignore[union-attr]


def test_snapshot_is_not_affected_by_later_writes() -> None:
    store = DeviceStore([_device("a")])
    snapshot = store.all()

    store.upsert(_device("a", last_seen=9_000))
    store.upsert(_device("z"))

    assert snapshot == (_device("a"),)
    assert len(store.all()) == 2


def test_last_seen_before_first_seen_rejected_without_state_change() -> None:
    store = DeviceStore([_device("a")])
    bad = _device("a").model_copy(update={"last_seen": 500})

    with pytest.raises(DeviceInvariantError):
        store.upsert(bad)

    assert store.get("a") == _device("a")


def test_first_seen_is_immutable() -> None:
    store = DeviceStore([_device("a")])

    with pytest.raises(DeviceInvariantError, match="first_seen"):
        store.upsert(_device("a", first_seen=900))


def test_last_seen_never_moves_backwards() -> None:
    store = DeviceStore([_device("a", last_seen=5_000)])

    with pytest.raises(DeviceInvariantError, match="backwards"):
        store.upsert(_device("a", last_seen=4_000))


def test_out_of_range_signal_from_trusted_copy_is_clamped() -> None:
    store = DeviceStore([_device("a")])

    stored = store.upsert(_device("a").model_copy(update={"signal_strength": -20}))

    assert stored.signal_strength == -30
    assert store.get("a").signal_strength == -30  # type: ignore[union-attr]


def test_upsert_many_is_all_or_nothing() -> None:
    store = DeviceStore([_device("a"), _device("b")])
    revision = store.revision

    with pytest.raises(DeviceInvariantError):
        store.upsert_many(
            [
                _device("a", name="first"),
                _device("b").model_copy(update={"first_seen": 1}),
            ]
        )

    assert store.get("a").name == ""  # type: ignore[union-attr]
    assert store.revision == revision


def test_upsert_many_rejects_duplicate_ids() -> None:
    store = DeviceStore()

    with pytest.raises(DeviceInvariantError, match="Duplicate"):
        store.upsert_many([_device("a"), _device("a")])

    assert len(store) == 0


def test_upsert_many_counts_as_one_revision() -> None:
    store = DeviceStore()
    store.upsert_many([_device("a"), _device("b"), _device("c")])
    assert store.revision == 1


def test_remove() -> None:
    store = DeviceStore([_device("a"), _device("b")])

    removed = store.remove("a")

    assert removed is not None and removed.id == "a"
    assert "a" not in store
    assert store.ids() == ("b",)
    assert store.remove("a") is None


def test_require_unknown_id() -> None:
    store = DeviceStore()
    with pytest.raises(DeviceNotFoundError):
        store.require("missing")
    assert store.get("missing") is None
