"""Immutable telemetry value objects for the VCU simulation engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from datetime import datetime, timezone
from typing import Any

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

PACK_COUNT: int = 8

WARNING: str = "warning"
CRITICAL: str = "critical"
SEVERITIES: tuple[str, ...] = (WARNING, CRITICAL)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Render *moment* as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC.

    Naive datetimes are read as local time.
    """
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(text: str) -> datetime:
    """Inverse of :func:`format_timestamp`."""
    return datetime.fromisoformat(text.replace("Z", "+00:00"))


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Snapshot:
    """One set of simulated vehicle and battery readings for a single tick.

    Attributes:
        timestamp: ISO-8601 UTC instant with millisecond precision.
        voltage: Bus voltage in volts.
        current: Bus current draw in amps.
        velocity: Vehicle speed in km/h.
        acceleration: Longitudinal acceleration in m/s².
        temperature: Drive-train temperature in °C.
        soc: State of charge in percent (0-100).
        power: Electrical power in kW, derived as ``voltage * current / 1000``.
        battery_packs: Voltages of the 8 cell groups.  Index ``i`` always
            refers to the same physical pack.
    """

    timestamp: str
    voltage: float
    current: float
    velocity: float
    acceleration: float
    temperature: float
    soc: float
    power: float
    battery_packs: tuple[float, ...]

    def __post_init__(self) -> None:
        """Validate pack count and normalise the pack sequence."""
        packs = tuple(float(v) for v in self.battery_packs)
        if len(packs) != PACK_COUNT:
            raise ValueError(
                f"battery_packs must contain {PACK_COUNT} values, got {len(packs)}."
            )
        object.__setattr__(self, "battery_packs", packs)

    def pack_average(self) -> float:
        """Mean voltage across all packs."""
        return sum(self.battery_packs) / len(self.battery_packs)

    def with_timestamp(self, timestamp: str) -> Snapshot:
        """Return a copy of this snapshot carrying *timestamp*."""
        return replace(self, timestamp=timestamp)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["battery_packs"] = list(self.battery_packs)
        return data


# ---------------------------------------------------------------------------
# Fault event
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FaultEvent:
    """A severity-tagged record of one threshold violation.

    Attributes:
        id: Unique event identifier.
        timestamp: Timestamp of the snapshot that triggered the event.
        severity: Either ``"warning"`` or ``"critical"``.
        system: Subsystem label, e.g. ``"Thermal Management"``.
        message: Human-readable description embedding the reading.
        value: The offending reading.
        threshold: Boundary crossed.  For pack imbalance this is the pack
            average the deviation was measured from.
    """

    id: str
    timestamp: str
    severity: str
    system: str
    message: str
    value: float
    threshold: float

    def __post_init__(self) -> None:
        if self.severity not in SEVERITIES:
            raise ValueError(
                f"severity must be one of {SEVERITIES}, got {self.severity!r}."
            )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
