"""riscalib - sensor record decoding and manifold utilities for radar-inertial calibration."""

import logging

__version__ = "0.1.0"

# Re-export main classes for convenient imports
from .config import DataStreamConfig, load_config
from .errors import (
    MalformedMessageError,
    NonConvergenceError,
    PersistenceError,
    RISCalibError,
    UnknownModelError,
)
from .sensor import (
    IMUFrame,
    IMUModelType,
    RadarModelType,
    RadarTarget,
    RadarTargetArray,
    RawRecord,
    imu_models,
    radar_models,
    resolve_imu_loader,
    resolve_radar_loader,
)
from .util import (
    ArchiveType,
    Pose,
    compute_karcher_mean,
    load_pose_sequence,
    save_pose_sequence,
    trap_integration_once,
    trap_integration_twice,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Configuration
    "DataStreamConfig",
    "load_config",
    # Errors
    "RISCalibError",
    "UnknownModelError",
    "MalformedMessageError",
    "NonConvergenceError",
    "PersistenceError",
    # Frames
    "IMUFrame",
    "RadarTarget",
    "RadarTargetArray",
    "RawRecord",
    # Registry
    "IMUModelType",
    "RadarModelType",
    "imu_models",
    "radar_models",
    "resolve_imu_loader",
    "resolve_radar_loader",
    # Numerics
    "compute_karcher_mean",
    "trap_integration_once",
    "trap_integration_twice",
    # Poses
    "Pose",
    "ArchiveType",
    "save_pose_sequence",
    "load_pose_sequence",
]
