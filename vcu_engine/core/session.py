"""Tick-by-tick driver wiring the simulator, evaluator and store together."""

from __future__ import annotations

from vcu_engine.core.faults import FaultEvaluator
from vcu_engine.core.seed import generate_seed_data
from vcu_engine.core.simulator import TelemetrySimulator
from vcu_engine.core.snapshot import FaultEvent, Snapshot
from vcu_engine.core.store import HistoryLimits, TelemetryStore


class TelemetrySession:
    """One simulated drive: a simulator feeding a bounded store.

    The session owns no timer.  Callers invoke :meth:`tick` on their own
    cadence (nominally once per second of simulated time).

    Args:
        simulator: Source of snapshots.  A fresh one is created when omitted.
        evaluator: Fault classifier.  Default thresholds when omitted.
        limits: Window sizes for the store and seeding.
    """

    def __init__(
        self,
        simulator: TelemetrySimulator | None = None,
        evaluator: FaultEvaluator | None = None,
        limits: HistoryLimits | None = None,
    ) -> None:
        self.simulator: TelemetrySimulator = (
            simulator if simulator is not None else TelemetrySimulator()
        )
        self.evaluator: FaultEvaluator = (
            evaluator if evaluator is not None else FaultEvaluator()
        )
        self.store: TelemetryStore = TelemetryStore(limits)

    def seed(self, count: int | None = None) -> list[Snapshot]:
        """Pre-populate history with back-dated snapshots.

        Seed snapshots are stored but not evaluated for faults.  A store
        that already holds history is left untouched.

        Args:
            count: Number of snapshots.  Defaults to ``limits.seed_count``.

        Returns:
            The generated snapshots, oldest first; empty when the store
            already had history.
        """
        if len(self.store):
            return []
        n = self.store.limits.seed_count if count is None else count
        data = generate_seed_data(n, simulator=self.simulator)
        for snapshot in data:
            self.store.add_snapshot(snapshot)
        return data

    def tick(self) -> tuple[Snapshot | None, list[FaultEvent]]:
        """Step once, evaluate, and record both outputs.

        Returns:
            ``(snapshot, faults)``; ``(None, [])`` while streaming is paused.
        """
        if not self.store.streaming:
            return None, []
        snapshot = self.simulator.step()
        faults = self.evaluator.evaluate(snapshot)
        self.store.add_snapshot(snapshot)
        self.store.add_faults(faults)
        return snapshot, faults

    def run(self, ticks: int) -> list[FaultEvent]:
        """Call :meth:`tick` *ticks* times and return every emitted fault.

        Raises:
            ValueError: If ticks is negative.
        """
        if ticks < 0:
            raise ValueError("ticks must be >= 0.")
        emitted: list[FaultEvent] = []
        for _ in range(ticks):
            _, faults = self.tick()
            emitted.extend(faults)
        return emitted
