"""Data stream configuration loaded from YAML.

Example file::

    data_stream:
      imu_topic: /imu/data
      imu_model: SENSOR_IMU
      radar_topic: /radar/scan
      radar_model: AINSTEIN_RADAR
      output_path: ./output
      archive_type: JSON
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from .sensor.imu_data_loader import IMUDecoder
from .sensor.radar_data_loader import RadarDecoder
from .sensor.registry import resolve_imu_loader, resolve_radar_loader
from .util.archive import ArchiveType


@dataclass
class DataStreamConfig:
    """Which topics to decode, with which models, and where to write output.

    Attributes:
        imu_topic: Topic carrying IMU messages
        imu_model: IMU model identifier (see ``imu_models()``)
        radar_topic: Topic carrying radar messages
        radar_model: Radar model identifier (see ``radar_models()``)
        output_path: Directory for output files
        archive_type: Encoding used for pose sequence output
    """

    imu_topic: str
    imu_model: str
    radar_topic: str
    radar_model: str
    output_path: Path
    archive_type: ArchiveType = ArchiveType.JSON

    def __post_init__(self) -> None:
        self.output_path = Path(self.output_path)
        # Fail early on a misspelled model instead of at the first record
        resolve_imu_loader(self.imu_model)
        resolve_radar_loader(self.radar_model)

    def create_imu_loader(self) -> IMUDecoder:
        """Return a decoder for the configured IMU model."""
        return resolve_imu_loader(self.imu_model)

    def create_radar_loader(self) -> RadarDecoder:
        """Return a decoder for the configured radar model."""
        return resolve_radar_loader(self.radar_model)

    def pose_sequence_path(self, name: str) -> Path:
        """Return the output path for a pose sequence called ``name``."""
        return self.output_path / f"{name}{self.archive_type.extension}"


_REQUIRED_KEYS = ("imu_topic", "imu_model", "radar_topic", "radar_model", "output_path")


def load_config(yaml_path: str | Path) -> DataStreamConfig:
    """Load a data stream configuration file.

    Args:
        yaml_path: Path to the YAML configuration

    Returns:
        DataStreamConfig

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If required keys are missing or values are invalid
        UnknownModelError: If a model identifier is not supported
    """
    path = Path(yaml_path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    stream = data.get("data_stream") if isinstance(data, dict) else None
    if not isinstance(stream, dict):
        raise ValueError(f"Missing 'data_stream' section in {yaml_path}")

    missing = [key for key in _REQUIRED_KEYS if key not in stream]
    if missing:
        raise ValueError(f"Missing keys {missing} in 'data_stream' section of {yaml_path}")

    archive_name = stream.get("archive_type", ArchiveType.JSON.value)
    try:
        archive_type = ArchiveType(archive_name)
    except ValueError:
        raise ValueError(
            f"Invalid archive_type '{archive_name}' in {yaml_path}, "
            f"expected one of {[a.value for a in ArchiveType]}"
        ) from None

    return DataStreamConfig(
        imu_topic=str(stream["imu_topic"]),
        imu_model=str(stream["imu_model"]),
        radar_topic=str(stream["radar_topic"]),
        radar_model=str(stream["radar_model"]),
        output_path=Path(stream["output_path"]),
        archive_type=archive_type,
    )
