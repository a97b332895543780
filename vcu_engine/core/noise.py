"""Random sources and Gaussian noise for the telemetry simulator.

The simulator only needs uniform draws in ``[0, 1)``.  Anything exposing a
``random()`` method qualifies, so a seeded ``numpy.random.Generator`` can be
passed in directly and tests can inject a scripted sequence.
"""

from __future__ import annotations

import math
from typing import Protocol

import numpy as np


class UniformSource(Protocol):
    """Source of uniform floats in ``[0, 1)``."""

    def random(self) -> float: ...


def make_source(seed: int | None = None) -> np.random.Generator:
    """Return a numpy generator.  ``None`` uses entropy from the OS."""
    return np.random.default_rng(seed)


def gaussian_noise(source: UniformSource, mean: float, std_dev: float) -> float:
    """Draw one normal variate via the Box–Muller transform.

    Two uniform draws are consumed.  The first is reflected to ``(0, 1]``
    so the logarithm stays finite when the source returns exactly 0.

    Args:
        source: Uniform random source.
        mean: Mean of the distribution.
        std_dev: Standard deviation of the distribution.

    Returns:
        A sample from ``N(mean, std_dev²)``.
    """
    u1: float = 1.0 - float(source.random())
    u2: float = float(source.random())
    return mean + std_dev * math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
