"""Resolve sensor model identifiers to decoder instances.

Identifiers are matched exactly (case-sensitive) against a fixed table.
"""

from __future__ import annotations

import logging

from ..errors import UnknownModelError
from .imu_data_loader import IMUDecoder, IMUModelType, SbgIMULoader, SensorIMULoader
from .radar_data_loader import (
    AinsteinRadarLoader,
    AWR1843BOOSTCustomLoader,
    AWR1843BOOSTPC2POSIVLoader,
    AWR1843BOOSTPC2POSVLoader,
    AWR1843BOOSTRawLoader,
    RadarDecoder,
    RadarModelType,
)

logger = logging.getLogger(__name__)

_IMU_LOADERS: dict[str, type] = {
    IMUModelType.SENSOR_IMU.value: SensorIMULoader,
    IMUModelType.SBG_IMU.value: SbgIMULoader,
}

_RADAR_LOADERS: dict[str, type] = {
    RadarModelType.AINSTEIN_RADAR.value: AinsteinRadarLoader,
    RadarModelType.AWR1843BOOST_RAW.value: AWR1843BOOSTRawLoader,
    RadarModelType.AWR1843BOOST_CUSTOM.value: AWR1843BOOSTCustomLoader,
    RadarModelType.AWR1843BOOST_PC2_POSV.value: AWR1843BOOSTPC2POSVLoader,
    RadarModelType.AWR1843BOOST_PC2_POSIV.value: AWR1843BOOSTPC2POSIVLoader,
}


def imu_models() -> list[str]:
    """Return the identifiers of all supported IMU models."""
    return list(_IMU_LOADERS)


def radar_models() -> list[str]:
    """Return the identifiers of all supported radar models."""
    return list(_RADAR_LOADERS)


def resolve_imu_loader(model: str) -> IMUDecoder:
    """Create the decoder for an IMU model.

    Args:
        model: IMU model identifier, e.g. ``"SENSOR_IMU"``

    Returns:
        New decoder instance owned by the caller

    Raises:
        UnknownModelError: If the identifier is not registered
    """
    loader_cls = _IMU_LOADERS.get(model) if isinstance(model, str) else None
    if loader_cls is None:
        raise UnknownModelError(str(model), imu_models())
    logger.debug("Resolved IMU model %s to %s", model, loader_cls.__name__)
    return loader_cls()


def resolve_radar_loader(model: str) -> RadarDecoder:
    """Create the decoder for a radar model.

    Args:
        model: Radar model identifier, e.g. ``"AINSTEIN_RADAR"``

    Returns:
        New decoder instance owned by the caller

    Raises:
        UnknownModelError: If the identifier is not registered
    """
    loader_cls = _RADAR_LOADERS.get(model) if isinstance(model, str) else None
    if loader_cls is None:
        raise UnknownModelError(str(model), radar_models())
    logger.debug("Resolved radar model %s to %s", model, loader_cls.__name__)
    return loader_cls()
