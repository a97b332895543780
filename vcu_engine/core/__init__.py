"""Core simulation modules for the VCU telemetry engine."""

from vcu_engine.core.faults import (
    DEFAULT_THRESHOLDS,
    FaultEvaluator,
    FaultThresholds,
    evaluate_faults,
)
from vcu_engine.core.monte_carlo import survey_faults
from vcu_engine.core.noise import UniformSource, gaussian_noise, make_source
from vcu_engine.core.seed import generate_seed_data
from vcu_engine.core.session import TelemetrySession
from vcu_engine.core.simulator import TelemetrySimulator, clamp
from vcu_engine.core.snapshot import (
    CRITICAL,
    PACK_COUNT,
    WARNING,
    FaultEvent,
    Snapshot,
    format_timestamp,
    parse_timestamp,
)
from vcu_engine.core.state import SimulatorState
from vcu_engine.core.status import metric_status, pack_status, snapshot_statuses
from vcu_engine.core.store import HistoryLimits, TelemetryStore
from vcu_engine.core.summary import (
    SYSTEM_PROMPT,
    build_telemetry_summary,
    compose_diagnostic_prompt,
    split_diagnostic_prompt,
)

__all__ = [
    "CRITICAL",
    "DEFAULT_THRESHOLDS",
    "FaultEvaluator",
    "FaultEvent",
    "FaultThresholds",
    "HistoryLimits",
    "PACK_COUNT",
    "SYSTEM_PROMPT",
    "SimulatorState",
    "Snapshot",
    "TelemetrySession",
    "TelemetrySimulator",
    "TelemetryStore",
    "UniformSource",
    "WARNING",
    "build_telemetry_summary",
    "clamp",
    "compose_diagnostic_prompt",
    "evaluate_faults",
    "format_timestamp",
    "gaussian_noise",
    "generate_seed_data",
    "make_source",
    "metric_status",
    "pack_status",
    "parse_timestamp",
    "snapshot_statuses",
    "split_diagnostic_prompt",
    "survey_faults",
]
