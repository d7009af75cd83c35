"""Timestamped SE(3) pose."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy.spatial.transform import Rotation


@dataclass(frozen=True, eq=False)
class Pose:
    """Rigid body pose at a given time.

    Represents T_world_body, transforming points from the body frame to the
    world frame:

        p_world = R @ p_body + t

    The rotation is stored as a unit quaternion so that serializing and
    reading back a pose reproduces it exactly.

    Attributes:
        timestamp: Pose time in seconds
        quaternion: Unit quaternion [qx, qy, qz, qw] (scalar last)
        translation: 3D translation vector
    """

    timestamp: float
    quaternion: np.ndarray  # (4,) [qx, qy, qz, qw]
    translation: np.ndarray  # (3,)

    def __post_init__(self) -> None:
        """Validate inputs and freeze the arrays."""
        quaternion = np.array(self.quaternion, dtype=np.float64).flatten()
        translation = np.array(self.translation, dtype=np.float64).flatten()

        if quaternion.shape != (4,):
            raise ValueError(f"Quaternion must be (4,), got {quaternion.shape}")
        if not np.isclose(np.linalg.norm(quaternion), 1.0, atol=1e-6):
            raise ValueError(f"Quaternion must have unit norm, got {np.linalg.norm(quaternion)}")
        if translation.shape != (3,):
            raise ValueError(f"Translation must be (3,), got {translation.shape}")

        quaternion.setflags(write=False)
        translation.setflags(write=False)
        object.__setattr__(self, "timestamp", float(self.timestamp))
        object.__setattr__(self, "quaternion", quaternion)
        object.__setattr__(self, "translation", translation)

    @classmethod
    def identity(cls, timestamp: float = 0.0) -> Pose:
        """Create the identity pose (no rotation, no translation)."""
        return cls(timestamp=timestamp, quaternion=[0.0, 0.0, 0.0, 1.0], translation=np.zeros(3))

    @classmethod
    def from_rotation(cls, timestamp: float, R: np.ndarray, t: np.ndarray) -> Pose:
        """Create a pose from a 3x3 rotation matrix and translation vector.

        Args:
            timestamp: Pose time in seconds
            R: 3x3 rotation matrix
            t: 3D translation vector (any shape that flattens to 3)

        Returns:
            Pose
        """
        R = np.asarray(R, dtype=np.float64)
        if R.shape != (3, 3):
            raise ValueError(f"Rotation must be 3x3, got {R.shape}")
        return cls(timestamp=timestamp, quaternion=Rotation.from_matrix(R).as_quat(), translation=t)

    @classmethod
    def from_matrix(cls, timestamp: float, T: np.ndarray) -> Pose:
        """Create a pose from a 4x4 homogeneous transformation matrix.

        Args:
            timestamp: Pose time in seconds
            T: 4x4 transformation matrix [[R, t], [0, 1]]

        Returns:
            Pose
        """
        T = np.asarray(T, dtype=np.float64)
        if T.shape != (4, 4):
            raise ValueError(f"Transform must be 4x4, got {T.shape}")
        return cls.from_rotation(timestamp, T[:3, :3], T[:3, 3])

    @property
    def rotation(self) -> np.ndarray:
        """Return the 3x3 rotation matrix."""
        return Rotation.from_quat(self.quaternion).as_matrix()

    def to_matrix(self) -> np.ndarray:
        """Convert to 4x4 homogeneous transformation matrix.

        Returns:
            4x4 transformation matrix [[R, t], [0, 1]]
        """
        T = np.eye(4, dtype=np.float64)
        T[:3, :3] = self.rotation
        T[:3, 3] = self.translation
        return T

    def to_dict(self) -> dict[str, float]:
        return {
            "timestamp": self.timestamp,
            "qx": float(self.quaternion[0]),
            "qy": float(self.quaternion[1]),
            "qz": float(self.quaternion[2]),
            "qw": float(self.quaternion[3]),
            "tx": float(self.translation[0]),
            "ty": float(self.translation[1]),
            "tz": float(self.translation[2]),
        }

    @classmethod
    def from_dict(cls, data: dict[str, float]) -> Pose:
        return cls(
            timestamp=data["timestamp"],
            quaternion=[data["qx"], data["qy"], data["qz"], data["qw"]],
            translation=[data["tx"], data["ty"], data["tz"]],
        )

    def __repr__(self) -> str:
        t = self.translation
        return f"Pose(timestamp={self.timestamp:.6f}, position=[{t[0]:.3f}, {t[1]:.3f}, {t[2]:.3f}])"
