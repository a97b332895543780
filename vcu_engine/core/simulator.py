"""Stochastic EV telemetry simulator for the VCU simulation engine.

Each call to :meth:`TelemetrySimulator.step` advances a small set of
correlated physical quantities by one tick using bounded random-walk
dynamics:

    drive cycle  ->  acceleration  ->  velocity  ->  current
                 ->  voltage sag   ->  temperature  ->  state of charge
                 ->  per-pack voltages

Rare discrete events (acceleration and braking bursts) perturb the
acceleration state, and pack 4 develops a slow one-sided voltage drift
once the warm-up period has elapsed.  All randomness is drawn from an
injectable uniform source so that runs are reproducible when a seed or a
scripted source is supplied.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Callable

from vcu_engine.core.noise import UniformSource, gaussian_noise, make_source
from vcu_engine.core.snapshot import PACK_COUNT, Snapshot, format_timestamp, utc_now
from vcu_engine.core.state import (
    ACCELERATION_RANGE,
    CURRENT_RANGE,
    PACK_VOLTAGE_RANGE,
    SOC_RANGE,
    TEMPERATURE_RANGE,
    VELOCITY_RANGE,
    VOLTAGE_RANGE,
    SimulatorState,
)

# ---------------------------------------------------------------------------
# Model constants
# ---------------------------------------------------------------------------

ACCELERATION_EVENT_PROBABILITY: float = 0.03
BRAKING_EVENT_PROBABILITY: float = 0.02

NOMINAL_BUS_VOLTAGE: float = 400.0
AMBIENT_TEMPERATURE: float = 25.0

DRIFTING_PACK_INDEX: int = 3
DRIFT_WARMUP_TICKS: int = 100


def clamp(value: float, low: float, high: float) -> float:
    """Restrict *value* to the closed interval ``[low, high]``."""
    return max(low, min(high, value))


class TelemetrySimulator:
    """Advances simulated vehicle state by one discrete time step per call.

    Args:
        rng: Uniform random source exposing ``random()``.  Takes
            precedence over *seed*.
        seed: Seed for a fresh ``numpy.random.Generator`` when *rng* is
            not given.  ``None`` uses entropy from the OS.
        clock: Callable returning the current instant.  Defaults to UTC
            wall-clock time.
    """

    def __init__(
        self,
        rng: UniformSource | None = None,
        seed: int | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._rng: UniformSource = rng if rng is not None else make_source(seed)
        self._clock: Callable[[], datetime] = clock if clock is not None else utc_now
        self._state: SimulatorState = SimulatorState()

    @property
    def state(self) -> SimulatorState:
        return self._state

    @property
    def tick(self) -> int:
        return self._state.tick

    def reset(self) -> None:
        """Return to tick 0 and the default operating point."""
        self._state.reset()

    def step(self) -> Snapshot:
        """Advance the simulation by one tick and return the new readings.

        Returns:
            A :class:`Snapshot` whose fields are all inside their clamp
            ranges, rounded to 2 decimals (``soc`` to 1 decimal).
        """
        s = self._state
        rng = self._rng

        # 1. Tick
        s.tick += 1

        # 2. Slow speed-profile undulation (hills, traffic)
        cycle: float = 0.5 * math.sin(s.tick * 0.02) + 0.3 * math.sin(s.tick * 0.005)

        # 3. Discrete events; acceleration wins when both fire
        braking_event: bool = rng.random() < BRAKING_EVENT_PROBABILITY
        acceleration_event: bool = rng.random() < ACCELERATION_EVENT_PROBABILITY

        if acceleration_event:
            accel = s.acceleration + gaussian_noise(rng, 2.0, 1.0)
        elif braking_event:
            accel = s.acceleration - gaussian_noise(rng, 3.0, 1.0)
        else:
            accel = s.acceleration * 0.95 + gaussian_noise(rng, 0.0, 0.3)
        s.acceleration = clamp(accel, *ACCELERATION_RANGE)

        # 4. Velocity
        s.velocity = clamp(
            s.velocity + s.acceleration * 0.5 + cycle * 2.0, *VELOCITY_RANGE
        )

        # 5. Current draw from manoeuvring and cruising
        s.current = clamp(
            abs(s.acceleration) * 40.0
            + s.velocity * 0.8
            + gaussian_noise(rng, 0.0, 5.0),
            *CURRENT_RANGE,
        )

        # 6. Terminal voltage sag
        s.voltage = clamp(
            NOMINAL_BUS_VOLTAGE - s.current * 0.05 + gaussian_noise(rng, 0.0, 2.0),
            *VOLTAGE_RANGE,
        )

        # 7. Resistive heating with passive cooling toward ambient
        s.temperature = clamp(
            s.temperature
            + s.current * 0.002
            - (s.temperature - AMBIENT_TEMPERATURE) * 0.01
            + gaussian_noise(rng, 0.0, 0.2),
            *TEMPERATURE_RANGE,
        )

        # 8. Discharge only; no charging path
        s.soc = clamp(s.soc - s.current * 0.0001, *SOC_RANGE)

        # 9. Pack voltages around the nominal share of the bus
        packs = self._pack_voltages(s.voltage / PACK_COUNT, s.tick)

        # 10. Rounding; power is derived from the reported readings
        voltage: float = round(s.voltage, 2)
        current: float = round(s.current, 2)

        return Snapshot(
            timestamp=format_timestamp(self._clock()),
            voltage=voltage,
            current=current,
            velocity=round(s.velocity, 2),
            acceleration=round(s.acceleration, 2),
            temperature=round(s.temperature, 2),
            soc=round(s.soc, 1),
            power=round(voltage * current / 1000.0, 2),
            battery_packs=tuple(round(v, 2) for v in packs),
        )

    def _pack_voltages(self, nominal: float, tick: int) -> list[float]:
        rng = self._rng
        packs: list[float] = []
        for i in range(PACK_COUNT):
            drift: float = 0.0
            if i == DRIFTING_PACK_INDEX and tick > DRIFT_WARMUP_TICKS:
                drift = -abs(gaussian_noise(rng, 1.5, 0.5))
            packs.append(
                clamp(nominal + gaussian_noise(rng, 0.0, 0.3) + drift, *PACK_VOLTAGE_RANGE)
            )
        return packs
