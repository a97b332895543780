#!/usr/bin/env python
"""Monte Carlo fault survey and session export.

This script:

1. Runs a Monte Carlo fault survey (default: 200 sessions of 600 ticks)
   with the thresholds from ``data/vcu_profile.yaml``.
2. Saves the aggregated statistics to ``results/fault_survey.json``.
3. Records one reference session and exports its history and fault log
   to ``results/reference_session_*.csv``.
4. Prints a structured summary.

Usage
-----
::

    python scripts/run_fault_survey.py
"""

from __future__ import annotations

import json
import os
import sys

# Ensure the project root is on the import path.
_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from vcu_engine.config import load_thresholds  # noqa: E402
from vcu_engine.core.faults import FaultEvaluator  # noqa: E402
from vcu_engine.core.monte_carlo import survey_faults  # noqa: E402
from vcu_engine.core.session import TelemetrySession  # noqa: E402
from vcu_engine.core.simulator import TelemetrySimulator  # noqa: E402
from vcu_engine.core.store import HistoryLimits  # noqa: E402
from vcu_engine.data_export.frames import (  # noqa: E402
    faults_to_frame,
    snapshots_to_frame,
)

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

SESSIONS: int = 200
TICKS_PER_SESSION: int = 600
BASE_SEED: int = 2024
RESULTS_DIR: str = os.path.join(_project_root, "results")
OUTPUT_PATH: str = os.path.join(RESULTS_DIR, "fault_survey.json")
HISTORY_PATH: str = os.path.join(RESULTS_DIR, "reference_session_history.csv")
FAULTS_PATH: str = os.path.join(RESULTS_DIR, "reference_session_faults.csv")


def main() -> None:
    """Run the survey, export a reference session, and print a summary."""
    print("=" * 60)
    print("VCU FAULT SURVEY")
    print("=" * 60)
    print()

    # -- Step 1: Survey -------------------------------------------------------
    thresholds = load_thresholds()
    print(f"[1/3] Running fault survey ({SESSIONS} x {TICKS_PER_SESSION} ticks)")
    result = survey_faults(
        TICKS_PER_SESSION,
        SESSIONS,
        base_seed=BASE_SEED,
        thresholds=thresholds,
    )
    print("      Survey complete.")
    print()

    # -- Step 2: Save survey --------------------------------------------------
    print("[2/3] Saving survey results")
    output: dict[str, object] = {
        "metadata": {
            "sessions": SESSIONS,
            "ticks_per_session": TICKS_PER_SESSION,
            "base_seed": BASE_SEED,
        },
        **result,
    }
    os.makedirs(RESULTS_DIR, exist_ok=True)
    with open(OUTPUT_PATH, "w", encoding="utf-8") as fh:
        json.dump(output, fh, indent=2, sort_keys=True)
    print(f"      Results saved to {OUTPUT_PATH}")
    print()

    # -- Step 3: Reference session export -------------------------------------
    print("[3/3] Recording reference session")
    # Windows sized to keep the whole run.
    limits = HistoryLimits(
        snapshot_limit=TICKS_PER_SESSION, fault_limit=TICKS_PER_SESSION * 16
    )
    session = TelemetrySession(
        simulator=TelemetrySimulator(seed=BASE_SEED),
        evaluator=FaultEvaluator(thresholds),
        limits=limits,
    )
    session.run(TICKS_PER_SESSION)
    snapshots_to_frame(session.store.history).to_csv(HISTORY_PATH, index=False)
    faults_to_frame(reversed(session.store.faults)).to_csv(FAULTS_PATH, index=False)
    print(f"      History saved to {HISTORY_PATH}")
    print(f"      Faults saved to {FAULTS_PATH}")
    print()

    # -- Structured summary ---------------------------------------------------
    print("=" * 60)
    print("FAULT RATE PER TICK")
    print("=" * 60)
    ranked = sorted(result["fault_rate"].items(), key=lambda x: x[1], reverse=True)
    for rank, (system, rate) in enumerate(ranked, start=1):
        print(f"  {rank:2d}. {system:<25s}  rate: {rate:.4f}")
    print()
    for severity, count in result["severity_counts"].items():
        print(f"  {severity:<10s} events: {count}")
    print(
        f"  P(session reaches critical): {result['critical_session_probability']:.3f}"
    )
    onset = result["pack_drift_onset"]
    print(
        "  Mean pack drift onset tick: "
        + (f"{onset:.1f}" if onset is not None else "never")
    )
    print()
    print("Survey complete.")


if __name__ == "__main__":
    main()
