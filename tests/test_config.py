"""Tests for YAML profile loading."""

from dataclasses import asdict
from pathlib import Path

import pytest
import yaml

from vcu_engine.config import load_history_limits, load_thresholds
from vcu_engine.core.faults import DEFAULT_THRESHOLDS, FaultThresholds
from vcu_engine.core.store import HistoryLimits


def _write_profile(tmp_path: Path, data: dict) -> Path:
    path = tmp_path / "profile.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_bundled_profile_matches_defaults() -> None:
    """The shipped profile must reproduce the built-in boundaries."""
    assert load_thresholds() == DEFAULT_THRESHOLDS
    assert load_history_limits() == HistoryLimits()


def test_custom_thresholds_loaded(tmp_path: Path) -> None:
    """Values from a custom file must be applied as floats."""
    data = {"thresholds": asdict(DEFAULT_THRESHOLDS)}
    data["thresholds"]["temperature_warning"] = 50
    thresholds = load_thresholds(_write_profile(tmp_path, data))
    assert isinstance(thresholds, FaultThresholds)
    assert thresholds.temperature_warning == 50.0


def test_missing_threshold_field(tmp_path: Path) -> None:
    """A missing boundary must raise ValueError naming the field."""
    fields = asdict(DEFAULT_THRESHOLDS)
    del fields["soc_critical"]
    with pytest.raises(ValueError, match="soc_critical"):
        load_thresholds(_write_profile(tmp_path, {"thresholds": fields}))


def test_non_numeric_threshold(tmp_path: Path) -> None:
    fields = asdict(DEFAULT_THRESHOLDS)
    fields["current_warning"] = "high"
    with pytest.raises(ValueError, match="current_warning"):
        load_thresholds(_write_profile(tmp_path, {"thresholds": fields}))


def test_partial_history_section_keeps_defaults(tmp_path: Path) -> None:
    """Absent history fields fall back to their defaults."""
    limits = load_history_limits(
        _write_profile(tmp_path, {"history": {"snapshot_limit": 10}})
    )
    assert limits.snapshot_limit == 10
    assert limits.fault_limit == 50


def test_missing_section_and_file(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        load_history_limits(_write_profile(tmp_path, {"thresholds": {}}))
    with pytest.raises(FileNotFoundError):
        load_thresholds(tmp_path / "absent.yaml")
