"""Numeric and persistence utilities for the calibration pipeline."""

from .archive import ArchiveType, load_pose_sequence, save_pose_sequence
from .format import format_value_vector
from .integration import trap_integration_once, trap_integration_twice
from .mean import compute_karcher_mean, compute_mat_vec_mean, compute_numerical_mean
from .pose import Pose
from .so3 import exp_so3, log_so3, skew

__all__ = [
    # Rotations
    "skew",
    "exp_so3",
    "log_so3",
    # Means
    "compute_karcher_mean",
    "compute_mat_vec_mean",
    "compute_numerical_mean",
    # Integration
    "trap_integration_once",
    "trap_integration_twice",
    # Poses
    "Pose",
    "ArchiveType",
    "save_pose_sequence",
    "load_pose_sequence",
    # Formatting
    "format_value_vector",
]
