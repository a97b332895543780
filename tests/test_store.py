"""Tests for the bounded telemetry store."""

import pytest

from vcu_engine.core.faults import evaluate_faults
from vcu_engine.core.simulator import TelemetrySimulator
from vcu_engine.core.snapshot import Snapshot
from vcu_engine.core.store import HistoryLimits, TelemetryStore


def _hot_snapshot(i: int) -> Snapshot:
    """A snapshot that always raises one thermal fault."""
    return Snapshot(
        timestamp=f"2026-03-01T12:00:{i % 60:02d}.000Z",
        voltage=400.0,
        current=100.0,
        velocity=60.0,
        acceleration=0.0,
        temperature=60.0 + i * 0.01,
        soc=80.0,
        power=40.0,
        battery_packs=(50.0,) * 8,
    )


def test_default_limits() -> None:
    """The store must keep 300 snapshots and 50 faults by default."""
    store = TelemetryStore()
    assert store.limits.snapshot_limit == 300
    assert store.limits.fault_limit == 50


def test_snapshot_window_keeps_most_recent_oldest_first() -> None:
    """Only the newest snapshot_limit entries are kept, in arrival order."""
    store = TelemetryStore()
    sim = TelemetrySimulator(seed=0)
    produced = [sim.step() for _ in range(350)]
    for snap in produced:
        store.add_snapshot(snap)
    assert len(store) == 300
    assert store.history == produced[-300:]
    assert store.latest == produced[-1]


def test_fault_window_newest_first() -> None:
    """Faults are kept newest first and capped at fault_limit."""
    store = TelemetryStore()
    emitted = []
    for i in range(60):
        faults = evaluate_faults(_hot_snapshot(i))
        emitted.extend(faults)
        store.add_faults(faults)
    kept = store.faults
    assert len(kept) == 50
    assert kept[0] == emitted[-1]
    assert kept[-1] == emitted[10]


def test_clear_empties_both_windows() -> None:
    """clear must drop snapshots and faults but keep the streaming flag."""
    store = TelemetryStore()
    store.add_snapshot(_hot_snapshot(0))
    store.add_faults(evaluate_faults(_hot_snapshot(0)))
    store.set_streaming(False)
    store.clear()
    assert store.history == []
    assert store.faults == []
    assert store.latest is None
    assert store.streaming is False


def test_custom_limits_and_validation() -> None:
    """Custom windows apply; non-positive limits are rejected."""
    store = TelemetryStore(HistoryLimits(snapshot_limit=3, fault_limit=2))
    for i in range(5):
        store.add_snapshot(_hot_snapshot(i))
    assert len(store) == 3
    with pytest.raises(ValueError):
        HistoryLimits(snapshot_limit=0)
    with pytest.raises(ValueError):
        HistoryLimits(fault_limit=0)
    with pytest.raises(ValueError):
        HistoryLimits(seed_count=-1)
