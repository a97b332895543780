"""pandas conversions for recorded snapshots and fault events.

Frames are the exchange format for the dashboard charts and for the CSV
exports written by the command-line scripts.
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from vcu_engine.core.snapshot import PACK_COUNT, FaultEvent, Snapshot

# ---------------------------------------------------------------------------
# Column layout
# ---------------------------------------------------------------------------

SCALAR_COLUMNS: tuple[str, ...] = (
    "timestamp",
    "voltage",
    "current",
    "velocity",
    "acceleration",
    "temperature",
    "soc",
    "power",
)
PACK_COLUMNS: tuple[str, ...] = tuple(f"pack_{i + 1}" for i in range(PACK_COUNT))
SNAPSHOT_COLUMNS: tuple[str, ...] = SCALAR_COLUMNS + PACK_COLUMNS

FAULT_COLUMNS: tuple[str, ...] = (
    "id",
    "timestamp",
    "severity",
    "system",
    "message",
    "value",
    "threshold",
)


def snapshots_to_frame(snapshots: Iterable[Snapshot]) -> pd.DataFrame:
    """Flatten snapshots into one row each, packs as ``pack_1``..``pack_8``.

    The ``timestamp`` column is parsed to timezone-aware UTC datetimes.

    Args:
        snapshots: Snapshots in the desired row order.

    Returns:
        A :class:`pandas.DataFrame` with :data:`SNAPSHOT_COLUMNS`.  Empty
        input yields an empty frame with the same columns.
    """
    rows = []
    for snap in snapshots:
        row = {name: getattr(snap, name) for name in SCALAR_COLUMNS}
        row.update(zip(PACK_COLUMNS, snap.battery_packs))
        rows.append(row)

    df = pd.DataFrame(rows, columns=list(SNAPSHOT_COLUMNS))
    df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True)
    return df


def faults_to_frame(faults: Iterable[FaultEvent]) -> pd.DataFrame:
    """One row per fault in the given order."""
    rows = [fault.to_dict() for fault in faults]
    df = pd.DataFrame(rows, columns=list(FAULT_COLUMNS))
    df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True)
    return df
