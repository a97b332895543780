"""EV vehicle control unit telemetry simulation and fault-detection engine."""

__version__ = "0.1.0"
