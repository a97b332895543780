"""Monte Carlo fault survey for the VCU simulation engine.

Runs many independently seeded drive sessions and aggregates how often
each subsystem faults, how often a session ever reaches a critical
condition, and when the drifting pack first trips its imbalance check.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any

from vcu_engine.core.faults import FaultEvaluator, FaultThresholds
from vcu_engine.core.simulator import DRIFTING_PACK_INDEX, TelemetrySimulator
from vcu_engine.core.snapshot import CRITICAL, SEVERITIES

_DRIFTING_PACK_SYSTEM: str = f"Battery Pack {DRIFTING_PACK_INDEX + 1}"


def survey_faults(
    ticks: int,
    sessions: int,
    base_seed: int = 42,
    thresholds: FaultThresholds | None = None,
) -> dict[str, Any]:
    """Run a Monte Carlo ensemble of simulated drive sessions.

    Session *i* drives its own simulator seeded with ``base_seed + i``, so
    a survey repeats exactly for the same ``base_seed`` and never touches
    numpy's module-level generator.

    Collected statistics:
      - **Fault rate** per system -- faults emitted per simulated tick,
        averaged over all sessions.
      - **Severity counts** -- total events per severity.
      - **Critical session probability** -- fraction of sessions with at
        least one critical event.
      - **Pack drift onset** -- mean tick at which the drifting pack first
        raised an imbalance fault, over sessions where it did.

    Args:
        ticks: Steps per session (>= 1).
        sessions: Number of replications (>= 1).
        base_seed: Starting seed value.  Session *i* uses ``base_seed + i``.
        thresholds: Fault boundaries.  Defaults to the standard set.

    Returns:
        Dictionary with keys:
            fault_rate                    -- ``{system: float}``
            severity_counts               -- ``{severity: int}``
            critical_session_probability  -- ``float``
            pack_drift_onset              -- ``float | None``
            pack_drift_probability        -- ``float``

    Raises:
        ValueError: If ticks < 1 or sessions < 1.
    """
    if ticks < 1:
        raise ValueError("ticks must be >= 1.")
    if sessions < 1:
        raise ValueError("sessions must be >= 1.")

    evaluator = FaultEvaluator(thresholds)

    # Accumulators
    system_counts: dict[str, int] = defaultdict(int)
    severity_counts: dict[str, int] = {severity: 0 for severity in SEVERITIES}
    critical_sessions: int = 0
    onset_ticks: list[int] = []

    for i in range(sessions):
        simulator = TelemetrySimulator(seed=base_seed + i)
        saw_critical: bool = False
        onset: int | None = None

        for _ in range(ticks):
            snapshot = simulator.step()
            for fault in evaluator.evaluate(snapshot):
                system_counts[fault.system] += 1
                severity_counts[fault.severity] += 1
                if fault.severity == CRITICAL:
                    saw_critical = True
                if onset is None and fault.system == _DRIFTING_PACK_SYSTEM:
                    onset = simulator.tick

        if saw_critical:
            critical_sessions += 1
        if onset is not None:
            onset_ticks.append(onset)

    # -- Normalise ------------------------------------------------------------
    total_ticks: int = ticks * sessions
    fault_rate: dict[str, float] = {
        system: count / total_ticks for system, count in sorted(system_counts.items())
    }

    return {
        "fault_rate": fault_rate,
        "severity_counts": severity_counts,
        "critical_session_probability": critical_sessions / sessions,
        "pack_drift_onset": (
            sum(onset_ticks) / len(onset_ticks) if onset_ticks else None
        ),
        "pack_drift_probability": len(onset_ticks) / sessions,
    }
