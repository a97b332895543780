"""Display status classification for individual telemetry readings.

These levels drive the metric cards of the dashboard.  They are
deliberately separate from fault evaluation: the card limits are
slightly more conservative for voltage and state of charge so that a
reading turns amber before a fault is raised.
"""

from __future__ import annotations

from vcu_engine.core.snapshot import CRITICAL, WARNING, Snapshot

NORMAL: str = "normal"

# (warning, critical, inverted)
METRIC_LIMITS: dict[str, tuple[float, float, bool]] = {
    "voltage": (345.0, 335.0, True),
    "current": (350.0, 420.0, False),
    "acceleration": (3.0, 3.8, False),
    "temperature": (55.0, 65.0, False),
    "soc": (15.0, 5.0, True),
}

PACK_DEVIATION_WARNING: float = 2.0
PACK_DEVIATION_CRITICAL: float = 3.5


def metric_status(
    value: float,
    warning: float,
    critical: float,
    inverted: bool = False,
) -> str:
    """Return ``"normal"``, ``"warning"`` or ``"critical"`` for *value*.

    Comparisons are strict.  With ``inverted=True`` lower values are worse.
    """
    if inverted:
        if value < critical:
            return CRITICAL
        if value < warning:
            return WARNING
        return NORMAL
    if value > critical:
        return CRITICAL
    if value > warning:
        return WARNING
    return NORMAL


def snapshot_statuses(snapshot: Snapshot) -> dict[str, str]:
    """Status of every card metric for one snapshot.

    Acceleration is judged on magnitude so hard braking counts too.
    """
    statuses: dict[str, str] = {}
    for name, (warning, critical, inverted) in METRIC_LIMITS.items():
        value: float = getattr(snapshot, name)
        if name == "acceleration":
            value = abs(value)
        statuses[name] = metric_status(value, warning, critical, inverted)
    return statuses


def pack_status(deviation: float) -> str:
    return metric_status(
        abs(deviation), PACK_DEVIATION_WARNING, PACK_DEVIATION_CRITICAL
    )
