"""Plain-text telemetry digest handed to the diagnostics assistant.

The assistant itself lives outside this package.  This module only
formats recent history and faults into a compact block that can be
appended to a user question, and recovers the question afterwards.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from vcu_engine.core.snapshot import FaultEvent, Snapshot

PROMPT_SEPARATOR: str = "\n\n---\n"
NO_DATA_MESSAGE: str = "No telemetry data available."

SYSTEM_PROMPT: str = """\
You are an EV diagnostics assistant attached to a Vehicle Control Unit \
(VCU) monitoring system. Each user question is followed by a "---" \
separator and a block of live telemetry. Reference specific values from \
that block, compare them with typical operating ranges, call out trends \
and cross-subsystem interactions, rate each issue Normal / Warning / \
Critical, and suggest maintenance actions with a priority.

TYPICAL OPERATING RANGES:
- System Voltage: 360-410V (nominal 400V, 96S configuration)
- System Current: 0-300A continuous, 400A peak
- Motor Temperature: 20-60°C normal, >65°C warning, >80°C critical
- Battery Pack Voltage Balance: <1V deviation normal, >2V warning, >3.5V critical
- State of Charge: 10-90% optimal operating range
- Acceleration: -3 to 3 m/s² normal driving"""


def build_telemetry_summary(
    history: Sequence[Snapshot],
    faults: Sequence[FaultEvent],
    window: int = 30,
    fault_count: int = 10,
) -> str:
    """Format recent telemetry into a natural-language block.

    Args:
        history: Snapshots ordered oldest first.
        faults: Faults ordered newest first.
        window: Number of trailing snapshots aggregated into averages
            and extremes.
        fault_count: Number of leading faults listed.

    Returns:
        The summary text, or :data:`NO_DATA_MESSAGE` for empty history.
    """
    if not history:
        return NO_DATA_MESSAGE

    latest = history[-1]
    recent = history[-window:]

    voltage = np.array([s.voltage for s in recent])
    current = np.array([s.current for s in recent])
    temperature = np.array([s.temperature for s in recent])

    packs = np.array(latest.battery_packs)
    pack_avg = float(packs.mean())
    pack_lines = [
        f"Pack {i + 1}: {v:.2f}V (dev: {v - pack_avg:.2f}V)"
        for i, v in enumerate(latest.battery_packs)
    ]

    recent_faults = list(faults[:fault_count])
    if recent_faults:
        fault_text = "\n".join(
            f"[{f.severity.upper()}] {f.system}: {f.message}" for f in recent_faults
        )
    else:
        fault_text = "No recent faults."

    lines = [
        "CURRENT EV TELEMETRY DATA:",
        f"- System Voltage: {latest.voltage:.1f}V "
        f"({len(recent)}s avg: {voltage.mean():.1f}V, min: {voltage.min():.1f}V)",
        f"- System Current: {latest.current:.1f}A "
        f"({len(recent)}s avg: {current.mean():.1f}A, max: {current.max():.1f}A)",
        f"- Vehicle Speed: {latest.velocity:.1f} km/h",
        f"- Acceleration: {latest.acceleration:.2f} m/s²",
        f"- Temperature: {latest.temperature:.1f}°C "
        f"({len(recent)}s avg: {temperature.mean():.1f}°C, "
        f"max: {temperature.max():.1f}°C)",
        f"- State of Charge: {latest.soc:.1f}%",
        f"- Power Output: {latest.power:.1f} kW",
        "",
        "BATTERY PACK VOLTAGES:",
        *pack_lines,
        f"Pack Average: {pack_avg:.2f}V",
        f"Max Imbalance: {packs.max() - packs.min():.2f}V",
        "",
        f"RECENT FAULT EVENTS ({len(recent_faults)}):",
        fault_text,
        "",
        f"DATA HISTORY: {len(history)} snapshots over {len(history)}s",
    ]
    return "\n".join(lines)


def compose_diagnostic_prompt(question: str, summary: str) -> str:
    return f"{question}{PROMPT_SEPARATOR}{summary}"


def split_diagnostic_prompt(text: str) -> str:
    """Return the user question with any appended telemetry block removed."""
    return text.split(PROMPT_SEPARATOR, 1)[0]
