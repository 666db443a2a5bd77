from __future__ import annotations

import dataclasses
import threading

import pytest

from forcelayout import config
from forcelayout.errors import UnknownParameterError
from forcelayout.model.parameters import ForceParameters, ParameterStore


def test_defaults_match_config() -> None:
    store = ParameterStore()

    assert store.as_dict() == config.DEFAULT_PARAMETERS
    assert store.k == pytest.approx(198.16, abs=0.05)


def test_get_and_set_by_name() -> None:
    store = ParameterStore()

    store.set("repulsion", 1000)

    assert store.get("repulsion") == 1000.0
    assert isinstance(store.get("repulsion"), float)


def test_property_accessors_write_through() -> None:
    store = ParameterStore()

    store.max_step = 2.5
    store.center = 0.0

    assert store.snapshot().max_step == 2.5
    assert store.get("center") == 0.0


def test_overrides_in_constructor() -> None:
    store = ParameterStore(attraction=10, center=0)

    assert store.attraction == 10.0
    assert store.center == 0.0
    assert store.repulsion == config.DEFAULT_PARAMETERS["repulsion"]


def test_unknown_name_raises() -> None:
    store = ParameterStore()

    with pytest.raises(UnknownParameterError):
        store.set("gravity", 1.0)
    with pytest.raises(KeyError):
        store.get("gravity")
    with pytest.raises(UnknownParameterError):
        store.update(repulsion=1.0, gravity=1.0)
    # A rejected update changes nothing
    assert store.repulsion == config.DEFAULT_PARAMETERS["repulsion"]


def test_values_are_not_validated() -> None:
    store = ParameterStore()

    store.set("max_step", -5.0)

    assert store.max_step == -5.0


def test_snapshot_is_immutable_and_detached() -> None:
    store = ParameterStore()
    snap = store.snapshot()

    store.set("attraction", 5.0)

    assert snap.attraction == config.DEFAULT_PARAMETERS["attraction"]
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.attraction = 1.0  # type: ignore[misc]


def test_reset_restores_defaults() -> None:
    store = ParameterStore(repulsion=1.0)

    store.reset()

    assert store.snapshot() == ForceParameters()


def test_clamped_uses_suggested_ranges() -> None:
    params = ForceParameters(repulsion=1.0, max_step=500.0)

    clamped = params.clamped()

    assert clamped.repulsion == 90.0
    assert clamped.max_step == 100.0
    assert clamped.attraction == params.attraction


def test_snapshot_never_sees_partial_update() -> None:
    store = ParameterStore(repulsion=0.0, attraction=0.0)
    stop = threading.Event()

    def writer() -> None:
        value = 0.0
        while not stop.is_set():
            value += 1.0
            store.update(repulsion=value, attraction=value)

    thread = threading.Thread(target=writer)
    thread.start()
    try:
        for _ in range(5000):
            snap = store.snapshot()
            assert snap.repulsion == snap.attraction
    finally:
        stop.set()
        thread.join()


def test_defaults_survive_clamping() -> None:
    assert ForceParameters().clamped() == ForceParameters()
