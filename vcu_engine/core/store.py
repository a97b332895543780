"""Bounded in-memory telemetry history for the VCU simulation engine."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterable

from vcu_engine.core.snapshot import FaultEvent, Snapshot


@dataclass(frozen=True)
class HistoryLimits:
    """Window sizes used by storage, seeding and summaries.

    Attributes:
        snapshot_limit: Most recent snapshots retained.
        fault_limit: Most recent faults retained.
        seed_count: Snapshots generated when pre-populating history.
        summary_window: Snapshots aggregated by the text summary.
        summary_fault_count: Faults listed by the text summary.
    """

    snapshot_limit: int = 300
    fault_limit: int = 50
    seed_count: int = 120
    summary_window: int = 30
    summary_fault_count: int = 10

    def __post_init__(self) -> None:
        if self.snapshot_limit < 1:
            raise ValueError("snapshot_limit must be >= 1.")
        if self.fault_limit < 1:
            raise ValueError("fault_limit must be >= 1.")
        if self.seed_count < 0:
            raise ValueError("seed_count must be >= 0.")
        if self.summary_window < 1:
            raise ValueError("summary_window must be >= 1.")
        if self.summary_fault_count < 0:
            raise ValueError("summary_fault_count must be >= 0.")


class TelemetryStore:
    """Sliding windows of recent snapshots and faults.

    Snapshots are kept oldest first; faults are kept newest first.  When a
    window is full the oldest entry is discarded.
    """

    def __init__(self, limits: HistoryLimits | None = None) -> None:
        self.limits: HistoryLimits = limits if limits is not None else HistoryLimits()
        self._history: deque[Snapshot] = deque(maxlen=self.limits.snapshot_limit)
        self._faults: deque[FaultEvent] = deque(maxlen=self.limits.fault_limit)
        self.streaming: bool = True

    @property
    def history(self) -> list[Snapshot]:
        return list(self._history)

    @property
    def faults(self) -> list[FaultEvent]:
        return list(self._faults)

    @property
    def latest(self) -> Snapshot | None:
        return self._history[-1] if self._history else None

    def add_snapshot(self, snapshot: Snapshot) -> None:
        self._history.append(snapshot)

    def add_fault(self, fault: FaultEvent) -> None:
        self._faults.appendleft(fault)

    def add_faults(self, faults: Iterable[FaultEvent]) -> None:
        for fault in faults:
            self.add_fault(fault)

    def set_streaming(self, streaming: bool) -> None:
        self.streaming = streaming

    def clear(self) -> None:
        """Drop all snapshots and faults.  The streaming flag is unchanged."""
        self._history.clear()
        self._faults.clear()

    def __len__(self) -> int:
        return len(self._history)
