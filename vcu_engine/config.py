"""Configuration loader for the VCU simulation engine."""

from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from vcu_engine.core.faults import FaultThresholds
from vcu_engine.core.store import HistoryLimits

DATA_DIR: Path = Path(__file__).resolve().parent.parent / "data"
PROFILE_PATH: Path = DATA_DIR / "vcu_profile.yaml"

_THRESHOLD_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(FaultThresholds))
_HISTORY_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(HistoryLimits))


def _load_section(path: Path | None, section: str) -> dict[str, Any]:
    """Read one top-level mapping from the profile file.

    Raises:
        FileNotFoundError: If the profile file does not exist.
        ValueError: If the section is missing or is not a mapping.
    """
    profile_path = path or PROFILE_PATH
    if not profile_path.exists():
        raise FileNotFoundError(f"Profile file not found: {profile_path}")

    with open(profile_path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}

    entry = data.get(section) if isinstance(data, dict) else None
    if not isinstance(entry, dict):
        raise ValueError(f"Profile {profile_path} has no '{section}' mapping")
    return entry


def load_thresholds(path: Path | None = None) -> FaultThresholds:
    """Load fault boundaries from the profile's ``thresholds`` section.

    Args:
        path: Optional override for the profile file path.

    Returns:
        A validated :class:`FaultThresholds` instance.

    Raises:
        FileNotFoundError: If the profile file does not exist.
        ValueError: If a boundary is missing, non-numeric, or a critical
            boundary is less severe than its warning boundary.
    """
    entry = _load_section(path, "thresholds")

    values: dict[str, float] = {}
    for field in _THRESHOLD_FIELDS:
        if field not in entry:
            raise ValueError(f"thresholds is missing required field '{field}'")
        val = entry[field]
        # bool is an int subclass; reject it explicitly
        if isinstance(val, bool) or not isinstance(val, (int, float)):
            raise ValueError(
                f"thresholds: '{field}' must be numeric, got {type(val).__name__}"
            )
        values[field] = float(val)

    return FaultThresholds(**values)


def load_history_limits(path: Path | None = None) -> HistoryLimits:
    """Load window sizes from the profile's ``history`` section.

    Fields absent from the file keep their defaults.

    Raises:
        FileNotFoundError: If the profile file does not exist.
        ValueError: If a value is not an integer or is out of range.
    """
    entry = _load_section(path, "history")

    values: dict[str, int] = {}
    for field in _HISTORY_FIELDS:
        if field not in entry:
            continue
        val = entry[field]
        if isinstance(val, bool) or not isinstance(val, int):
            raise ValueError(
                f"history: '{field}' must be an integer, got {type(val).__name__}"
            )
        values[field] = val

    return HistoryLimits(**values)
