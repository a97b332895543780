"""Back-dated history generation used to pre-populate telemetry storage."""

from __future__ import annotations

from datetime import datetime, timedelta

from vcu_engine.core.simulator import TelemetrySimulator
from vcu_engine.core.snapshot import Snapshot, format_timestamp, utc_now

SEED_INTERVAL: timedelta = timedelta(milliseconds=1000)


def generate_seed_data(
    count: int = 120,
    simulator: TelemetrySimulator | None = None,
    now: datetime | None = None,
) -> list[Snapshot]:
    """Produce *count* snapshots spaced one second apart ending before *now*.

    The simulator is reset first, then stepped *count* times.  Snapshot
    ``i`` is re-stamped with ``now - (count - i) * 1000 ms`` so the series
    reads as history that led up to the call time.

    Args:
        count: Number of snapshots to produce (>= 0).
        simulator: Simulator to drive.  A fresh unseeded one is created
            when omitted.
        now: Timezone-aware reference instant.  Defaults to the current
            UTC time.

    Returns:
        Snapshots ordered oldest first.

    Raises:
        ValueError: If count is negative or now is a naive datetime.
    """
    if count < 0:
        raise ValueError("count must be >= 0.")
    if now is not None and now.tzinfo is None:
        raise ValueError("now must be timezone-aware.")

    sim = simulator if simulator is not None else TelemetrySimulator()
    reference: datetime = now if now is not None else utc_now()

    sim.reset()
    data: list[Snapshot] = []
    for i in range(count):
        snapshot = sim.step()
        stamp = format_timestamp(reference - (count - i) * SEED_INTERVAL)
        data.append(snapshot.with_timestamp(stamp))
    return data
