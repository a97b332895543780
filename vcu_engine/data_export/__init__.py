"""Tabular export helpers for recorded telemetry."""
