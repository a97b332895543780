"""CLI entrypoint for the EV VCU Telemetry Engine."""

from __future__ import annotations

import sys

from vcu_engine import __version__
from vcu_engine.config import load_history_limits, load_thresholds
from vcu_engine.core.faults import FaultEvaluator
from vcu_engine.core.session import TelemetrySession
from vcu_engine.core.simulator import TelemetrySimulator
from vcu_engine.core.summary import build_telemetry_summary

STREAM_TICKS: int = 180
SEED: int = 7


def main() -> None:
    """Seed a session, stream live ticks, and print the fault log and digest."""
    print(f"EV VCU Telemetry Engine v{__version__}")
    print("=" * 56)

    # -- Load profile ---------------------------------------------------------
    thresholds = load_thresholds()
    limits = load_history_limits()
    print(
        f"\nProfile: {limits.snapshot_limit} snapshot window, "
        f"{limits.fault_limit} fault window"
    )

    session = TelemetrySession(
        simulator=TelemetrySimulator(seed=SEED),
        evaluator=FaultEvaluator(thresholds),
        limits=limits,
    )

    # -- Seed history ---------------------------------------------------------
    seeded = session.seed()
    print(f"Seeded {len(seeded)} snapshots")
    if seeded:
        print(f"  {seeded[0].timestamp} .. {seeded[-1].timestamp}")
    print("-" * 56)

    # -- Stream ---------------------------------------------------------------
    print(f"\nStreaming {STREAM_TICKS} ticks:\n")
    print(f"  {'Tick':>4}  {'Speed':>7}  {'Current':>8}  {'Temp':>6}  {'SoC':>5}  Faults")
    print(f"  {'----':>4}  {'-------':>7}  {'--------':>8}  {'------':>6}  {'-----':>5}  ------")

    for _ in range(STREAM_TICKS):
        snapshot, faults = session.tick()
        tick = session.simulator.tick
        if snapshot is None or (tick % 20 and not faults):
            continue
        print(
            f"  {tick:4d}  {snapshot.velocity:7.1f}  {snapshot.current:8.1f}  "
            f"{snapshot.temperature:6.1f}  {snapshot.soc:5.1f}  {len(faults)}"
        )

    # -- Fault log ------------------------------------------------------------
    faults = session.store.faults
    print(f"\nFault log ({len(faults)} most recent):")
    for fault in faults[:10]:
        print(f"  [{fault.severity.upper():8s}] {fault.system:<20s} {fault.message}")

    # -- Diagnostic digest ----------------------------------------------------
    print("\n" + "=" * 56)
    print(
        build_telemetry_summary(
            session.store.history,
            faults,
            window=limits.summary_window,
            fault_count=limits.summary_fault_count,
        )
    )


if __name__ == "__main__":
    sys.exit(main() or 0)
