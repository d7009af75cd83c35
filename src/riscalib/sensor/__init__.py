"""Sensor records, normalized frames and the decoders between them."""

from .imu import IMUFrame
from .imu_data_loader import IMUDecoder, IMUModelType, SbgIMULoader, SensorIMULoader
from .point_cloud import read_point_fields
from .radar import RadarTarget, RadarTargetArray
from .radar_data_loader import (
    AinsteinRadarLoader,
    AWR1843BOOSTCustomLoader,
    AWR1843BOOSTPC2POSIVLoader,
    AWR1843BOOSTPC2POSVLoader,
    AWR1843BOOSTRawLoader,
    RadarDecoder,
    RadarModelType,
)
from .raw_record import RawRecord, normalize_msgtype, stamp_to_sec
from .registry import imu_models, radar_models, resolve_imu_loader, resolve_radar_loader

__all__ = [
    # Frames
    "IMUFrame",
    "RadarTarget",
    "RadarTargetArray",
    # Raw records
    "RawRecord",
    "normalize_msgtype",
    "stamp_to_sec",
    "read_point_fields",
    # IMU decoders
    "IMUDecoder",
    "IMUModelType",
    "SensorIMULoader",
    "SbgIMULoader",
    # Radar decoders
    "RadarDecoder",
    "RadarModelType",
    "AinsteinRadarLoader",
    "AWR1843BOOSTRawLoader",
    "AWR1843BOOSTCustomLoader",
    "AWR1843BOOSTPC2POSVLoader",
    "AWR1843BOOSTPC2POSIVLoader",
    # Registry
    "imu_models",
    "radar_models",
    "resolve_imu_loader",
    "resolve_radar_loader",
]
