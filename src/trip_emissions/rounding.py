"""Decimal rounding used by every figure the calculator reports.

Values are scaled by ``10**decimals``, rounded to the nearest integer with
halves going away from zero, then scaled back. ``-0.005`` rounds to ``-0.01``
and ``0.005`` to ``0.01``. Negative zero is reported as ``0.0``; NaN and
infinities are returned unchanged.
"""

from __future__ import annotations

import math

import numpy as np


def round_half_away_from_zero(value: float, decimals: int) -> float:
    factor = 10**decimals
    scaled = value * factor
    if not math.isfinite(scaled):
        return value
    rounded = math.floor(abs(scaled) + 0.5)
    if rounded == 0:
        return 0.0
    result = rounded / factor
    return -result if scaled < 0 else result


def round2(value: float) -> float:
    return round_half_away_from_zero(value, 2)


def round4(value: float) -> float:
    return round_half_away_from_zero(value, 4)


def round_array(values, decimals: int) -> np.ndarray:
    """Vectorised :func:`round_half_away_from_zero` for numpy/pandas inputs."""
    factor = 10**decimals
    scaled = np.asarray(values, dtype=float) * factor
    rounded = np.sign(scaled) * np.floor(np.abs(scaled) + 0.5) / factor
    return rounded + 0.0
