"""Trapezoidal integration of sampled time series.

A time series is a sequence of ``(time, value)`` pairs with strictly
increasing times. Values may be scalars or numpy arrays of any fixed shape.
Sums are accumulated in input order so results are reproducible bit for bit.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

TimeSeries = Sequence[tuple[float, Any]]


def _check_series(data: TimeSeries) -> None:
    if len(data) == 0:
        raise ValueError("Cannot integrate an empty time series")
    for (t0, _), (t1, _) in zip(data[:-1], data[1:]):
        if not t1 > t0:
            raise ValueError(f"Time series must be strictly increasing, got {t0} then {t1}")


def trap_integration_once(data: TimeSeries) -> np.ndarray:
    """Definite integral of a time series with the trapezoidal rule.

    Computes sum((v_i + v_j) * (t_j - t_i) * 0.5) over consecutive pairs.

    Args:
        data: Time series with at least one sample

    Returns:
        Integral, shaped like the values; zero for a single sample

    Raises:
        ValueError: If the series is empty or not strictly increasing
    """
    _check_series(data)
    total = np.zeros_like(np.asarray(data[0][1], dtype=np.float64))
    for (ti, vi), (tj, vj) in zip(data[:-1], data[1:]):
        total = total + (np.asarray(vi, dtype=np.float64) + vj) * (tj - ti) * 0.5
    return total


def trap_integration_twice(data: TimeSeries) -> np.ndarray:
    """Double integral of a time series using two trapezoidal passes.

    The first pass produces the running integral after each interval, stamped
    at the interval midpoint ``(t_i + t_j) * 0.5``. The second pass integrates
    that derived series with :func:`trap_integration_once`. Because the
    derived series spans only the first to the last midpoint, the result is
    not the closed-form double integral: a constant 1 sampled at t = 0, 1, 2
    gives 1.5, not 2.

    Args:
        data: Time series with at least one sample

    Returns:
        Double integral, shaped like the values; zero for fewer than 3 samples

    Raises:
        ValueError: If the series is empty or not strictly increasing
    """
    _check_series(data)
    running = np.zeros_like(np.asarray(data[0][1], dtype=np.float64))
    once: list[tuple[float, np.ndarray]] = []
    for (ti, vi), (tj, vj) in zip(data[:-1], data[1:]):
        running = running + (np.asarray(vi, dtype=np.float64) + vj) * (tj - ti) * 0.5
        once.append(((tj + ti) * 0.5, running))

    if not once:
        return running
    return trap_integration_once(once)
