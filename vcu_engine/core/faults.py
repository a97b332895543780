"""Threshold-based fault evaluation for the VCU simulation engine.

:func:`evaluate_faults` is a pure function of one :class:`Snapshot`.  Five
condition families are checked independently, so a single snapshot can
produce any number of simultaneous faults:

    ===================  =========  ==========  ==========================
    Condition            Warning    Critical    System label
    ===================  =========  ==========  ==========================
    temperature above    > 55 °C    > 65 °C     Thermal Management
    current above        > 350 A    > 420 A     Power Electronics
    voltage below        < 340 V    < 330 V     Battery System
    pack deviation       > 2 V      > 3.5 V     Battery Pack N
    state of charge      < 10 %     < 5 %       Battery System
    ===================  =========  ==========  ==========================

For each condition instance the severity is exclusive: a critical reading
emits only a critical event.  Repeated conditions are never suppressed.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from vcu_engine.core.snapshot import CRITICAL, WARNING, FaultEvent, Snapshot

THERMAL_SYSTEM: str = "Thermal Management"
POWER_SYSTEM: str = "Power Electronics"
BATTERY_SYSTEM: str = "Battery System"


@dataclass(frozen=True)
class FaultThresholds:
    """Warning and critical boundaries for every fault family.

    ``*_high`` families fire when the reading is strictly above the
    boundary; ``*_low`` families fire when it is strictly below.
    """

    temperature_warning: float = 55.0
    temperature_critical: float = 65.0
    current_warning: float = 350.0
    current_critical: float = 420.0
    voltage_warning: float = 340.0
    voltage_critical: float = 330.0
    pack_deviation_warning: float = 2.0
    pack_deviation_critical: float = 3.5
    soc_warning: float = 10.0
    soc_critical: float = 5.0

    def __post_init__(self) -> None:
        """Ensure every critical boundary lies beyond its warning boundary."""
        if self.temperature_critical < self.temperature_warning:
            raise ValueError("temperature_critical must be >= temperature_warning.")
        if self.current_critical < self.current_warning:
            raise ValueError("current_critical must be >= current_warning.")
        if self.voltage_critical > self.voltage_warning:
            raise ValueError("voltage_critical must be <= voltage_warning.")
        if self.pack_deviation_warning < 0.0:
            raise ValueError("pack_deviation_warning must be >= 0.")
        if self.pack_deviation_critical < self.pack_deviation_warning:
            raise ValueError(
                "pack_deviation_critical must be >= pack_deviation_warning."
            )
        if self.soc_critical > self.soc_warning:
            raise ValueError("soc_critical must be <= soc_warning.")


DEFAULT_THRESHOLDS: FaultThresholds = FaultThresholds()


def _event(
    snapshot: Snapshot,
    suffix: str,
    severity: str,
    system: str,
    message: str,
    value: float,
    threshold: float,
) -> FaultEvent:
    return FaultEvent(
        id=f"fault-{uuid.uuid4().hex}-{suffix}",
        timestamp=snapshot.timestamp,
        severity=severity,
        system=system,
        message=message,
        value=value,
        threshold=threshold,
    )


def evaluate_faults(
    snapshot: Snapshot,
    thresholds: FaultThresholds | None = None,
) -> list[FaultEvent]:
    """Classify one snapshot into zero or more fault events.

    Events are returned in a fixed order: thermal, current, voltage,
    pack imbalance (ascending pack index), state of charge.

    Args:
        snapshot: Readings to classify.
        thresholds: Boundaries to apply.  Defaults to
            :data:`DEFAULT_THRESHOLDS`.

    Returns:
        A new list of freshly identified events; empty when every
        reading is within bounds.
    """
    th = thresholds if thresholds is not None else DEFAULT_THRESHOLDS
    faults: list[FaultEvent] = []

    # -- Thermal --------------------------------------------------------------
    temp = snapshot.temperature
    if temp > th.temperature_warning:
        critical = temp > th.temperature_critical
        faults.append(
            _event(
                snapshot,
                "temp",
                CRITICAL if critical else WARNING,
                THERMAL_SYSTEM,
                f"Motor temperature {'critically high' if critical else 'elevated'}: "
                f"{temp}°C",
                temp,
                th.temperature_critical if critical else th.temperature_warning,
            )
        )

    # -- Overcurrent ----------------------------------------------------------
    current = snapshot.current
    if current > th.current_warning:
        critical = current > th.current_critical
        faults.append(
            _event(
                snapshot,
                "current",
                CRITICAL if critical else WARNING,
                POWER_SYSTEM,
                f"Overcurrent {'critical' if critical else 'detected'}: {current}A",
                current,
                th.current_critical if critical else th.current_warning,
            )
        )

    # -- Undervoltage ---------------------------------------------------------
    voltage = snapshot.voltage
    if voltage < th.voltage_warning:
        critical = voltage < th.voltage_critical
        faults.append(
            _event(
                snapshot,
                "voltage",
                CRITICAL if critical else WARNING,
                BATTERY_SYSTEM,
                f"Undervoltage {'critical' if critical else 'warning'}: {voltage}V",
                voltage,
                th.voltage_critical if critical else th.voltage_warning,
            )
        )

    # -- Pack imbalance -------------------------------------------------------
    pack_avg = snapshot.pack_average()
    for i, pack_v in enumerate(snapshot.battery_packs):
        deviation = abs(pack_v - pack_avg)
        if deviation > th.pack_deviation_warning:
            critical = deviation > th.pack_deviation_critical
            faults.append(
                _event(
                    snapshot,
                    f"pack{i}",
                    CRITICAL if critical else WARNING,
                    f"Battery Pack {i + 1}",
                    f"Pack {i + 1} voltage deviation: {pack_v}V "
                    f"(avg: {pack_avg:.1f}V)",
                    pack_v,
                    pack_avg,
                )
            )

    # -- State of charge ------------------------------------------------------
    soc = snapshot.soc
    if soc < th.soc_warning:
        critical = soc < th.soc_critical
        faults.append(
            _event(
                snapshot,
                "soc",
                CRITICAL if critical else WARNING,
                BATTERY_SYSTEM,
                f"Low state of charge: {soc}%",
                soc,
                th.soc_critical if critical else th.soc_warning,
            )
        )

    return faults


class FaultEvaluator:
    """Stateless evaluator bound to a fixed set of thresholds."""

    def __init__(self, thresholds: FaultThresholds | None = None) -> None:
        self.thresholds: FaultThresholds = (
            thresholds if thresholds is not None else DEFAULT_THRESHOLDS
        )

    def evaluate(self, snapshot: Snapshot) -> list[FaultEvent]:
        return evaluate_faults(snapshot, self.thresholds)
