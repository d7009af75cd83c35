"""Normalized radar targets and scans.

Every radar decoder produces positions in the same sensor frame:
x forward (boresight), y left, z up. Spherical measurements map to it as

    x = r * cos(elevation) * cos(azimuth)
    y = r * cos(elevation) * sin(azimuth)
    z = r * sin(elevation)

with azimuth positive towards +y and elevation positive towards +z. Radial
velocity is the range rate: positive when the target moves away from the sensor.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class RadarTarget:
    """Single radar detection.

    Attributes:
        position: Target position [x, y, z] in meters (sensor frame)
        radial_velocity: Range rate in m/s, None if the format has no velocity
        intensity: Reflected power, None if the format has no intensity
    """

    position: np.ndarray  # (3,) meters
    radial_velocity: float | None = None
    intensity: float | None = None

    def __post_init__(self) -> None:
        position = np.array(self.position, dtype=np.float64).flatten()
        if position.shape != (3,):
            raise ValueError(f"Target position must have 3 components, got {position.shape}")
        position.setflags(write=False)
        object.__setattr__(self, "position", position)
        if self.radial_velocity is not None:
            object.__setattr__(self, "radial_velocity", float(self.radial_velocity))
        if self.intensity is not None:
            object.__setattr__(self, "intensity", float(self.intensity))

    @classmethod
    def from_spherical(
        cls,
        range_m: float,
        azimuth: float,
        elevation: float,
        radial_velocity: float | None = None,
        intensity: float | None = None,
    ) -> RadarTarget:
        """Create a target from a range/azimuth/elevation measurement.

        Args:
            range_m: Range in meters
            azimuth: Azimuth in radians, positive towards +y
            elevation: Elevation in radians, positive towards +z
            radial_velocity: Range rate in m/s
            intensity: Reflected power

        Returns:
            RadarTarget with Cartesian position
        """
        cos_el = math.cos(elevation)
        position = np.array(
            [
                range_m * cos_el * math.cos(azimuth),
                range_m * cos_el * math.sin(azimuth),
                range_m * math.sin(elevation),
            ],
            dtype=np.float64,
        )
        return cls(position=position, radial_velocity=radial_velocity, intensity=intensity)

    @property
    def range(self) -> float:
        """Distance from the sensor origin in meters."""
        return float(np.linalg.norm(self.position))

    @property
    def direction(self) -> np.ndarray:
        """Unit line-of-sight vector (zero vector for a target at the origin)."""
        r = self.range
        if r == 0.0:
            return np.zeros(3)
        return self.position / r


@dataclass(frozen=True, eq=False)
class RadarTargetArray:
    """One radar scan: an ordered set of targets sharing a timestamp.

    An empty scan is valid.

    Attributes:
        timestamp: Scan time in seconds (sensor clock)
        targets: Targets in the order the sensor reported them
    """

    timestamp: float
    targets: tuple[RadarTarget, ...] = ()

    def __post_init__(self) -> None:
        timestamp = float(self.timestamp)
        if not math.isfinite(timestamp) or timestamp < 0.0:
            raise ValueError(f"Scan timestamp must be finite and non-negative, got {timestamp}")
        object.__setattr__(self, "timestamp", timestamp)
        object.__setattr__(self, "targets", tuple(self.targets))

    def __len__(self) -> int:
        return len(self.targets)

    def __iter__(self) -> Iterator[RadarTarget]:
        return iter(self.targets)

    def __getitem__(self, idx: int) -> RadarTarget:
        return self.targets[idx]

    def positions(self) -> np.ndarray:
        """Return target positions as an Nx3 array."""
        if not self.targets:
            return np.zeros((0, 3))
        return np.stack([t.position for t in self.targets])

    def radial_velocities(self) -> np.ndarray | None:
        """Return radial velocities (N,), or None if the format has none."""
        if any(t.radial_velocity is None for t in self.targets):
            return None
        return np.array([t.radial_velocity for t in self.targets], dtype=np.float64)

    def intensities(self) -> np.ndarray | None:
        """Return intensities (N,), or None if the format has none."""
        if any(t.intensity is None for t in self.targets):
            return None
        return np.array([t.intensity for t in self.targets], dtype=np.float64)

    def __repr__(self) -> str:
        return f"RadarTargetArray(timestamp={self.timestamp:.9f}, num_targets={len(self)})"
