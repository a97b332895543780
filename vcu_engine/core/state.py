"""Mutable physical state carried by the telemetry simulator across ticks."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Defaults and clamp ranges
# ---------------------------------------------------------------------------

DEFAULT_VOLTAGE: float = 400.0
DEFAULT_CURRENT: float = 120.0
DEFAULT_VELOCITY: float = 60.0
DEFAULT_ACCELERATION: float = 0.0
DEFAULT_TEMPERATURE: float = 35.0
DEFAULT_SOC: float = 85.0

VOLTAGE_RANGE: tuple[float, float] = (320.0, 420.0)
CURRENT_RANGE: tuple[float, float] = (0.0, 500.0)
VELOCITY_RANGE: tuple[float, float] = (0.0, 180.0)
ACCELERATION_RANGE: tuple[float, float] = (-4.0, 4.0)
TEMPERATURE_RANGE: tuple[float, float] = (15.0, 80.0)
SOC_RANGE: tuple[float, float] = (0.0, 100.0)
PACK_VOLTAGE_RANGE: tuple[float, float] = (38.0, 54.0)


class SimulatorState:
    """Running physical quantities of one simulated vehicle.

    The state is owned by a single :class:`TelemetrySimulator` and is
    only mutated by its ``step`` and ``reset`` operations.  After every
    step all fields lie inside their clamp ranges.

    Attributes:
        tick: Number of steps taken since the last reset.
        voltage: Bus voltage in V.
        current: Current draw in A.
        velocity: Speed in km/h.
        acceleration: Acceleration in m/s².
        temperature: Temperature in °C.
        soc: State of charge in percent.
    """

    __slots__ = (
        "tick",
        "voltage",
        "current",
        "velocity",
        "acceleration",
        "temperature",
        "soc",
    )

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Restore the tick counter and every field to its documented default."""
        self.tick: int = 0
        self.voltage: float = DEFAULT_VOLTAGE
        self.current: float = DEFAULT_CURRENT
        self.velocity: float = DEFAULT_VELOCITY
        self.acceleration: float = DEFAULT_ACCELERATION
        self.temperature: float = DEFAULT_TEMPERATURE
        self.soc: float = DEFAULT_SOC

    def as_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in self.__slots__}
