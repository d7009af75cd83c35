"""Normalized IMU sample."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from ..util.format import format_value_vector


def _frozen_vector3(value: Any, name: str) -> np.ndarray:
    vec = np.array(value, dtype=np.float64).flatten()
    if vec.shape != (3,):
        raise ValueError(f"{name} must have 3 components, got shape {vec.shape}")
    if not np.all(np.isfinite(vec)):
        raise ValueError(f"{name} contains non-finite values: {vec}")
    vec.setflags(write=False)
    return vec


@dataclass(frozen=True, eq=False)
class IMUFrame:
    """One IMU sample in the normalized convention.

    Both vectors are expressed in the sensor's FLU body frame
    (x forward, y left, z up).

    Attributes:
        timestamp: Sensor clock time in seconds (finite, non-negative)
        acce: Linear acceleration (ax, ay, az) in m/s²
        gyro: Angular velocity (wx, wy, wz) in rad/s
    """

    timestamp: float
    acce: np.ndarray  # (3,) m/s²
    gyro: np.ndarray  # (3,) rad/s

    def __post_init__(self) -> None:
        """Validate values and freeze the arrays."""
        timestamp = float(self.timestamp)
        if not math.isfinite(timestamp) or timestamp < 0.0:
            raise ValueError(f"IMU timestamp must be finite and non-negative, got {timestamp}")
        object.__setattr__(self, "timestamp", timestamp)
        object.__setattr__(self, "acce", _frozen_vector3(self.acce, "acce"))
        object.__setattr__(self, "gyro", _frozen_vector3(self.gyro, "gyro"))

    def to_dict(self) -> dict[str, float]:
        return {
            "timestamp": self.timestamp,
            "ax": float(self.acce[0]),
            "ay": float(self.acce[1]),
            "az": float(self.acce[2]),
            "wx": float(self.gyro[0]),
            "wy": float(self.gyro[1]),
            "wz": float(self.gyro[2]),
        }

    def __repr__(self) -> str:
        values = format_value_vector(
            ["ax", "ay", "az", "wx", "wy", "wz"],
            [*self.acce, *self.gyro],
        )
        return f"IMUFrame(timestamp={self.timestamp:.9f}, {values})"
