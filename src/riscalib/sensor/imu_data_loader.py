"""IMU decoders: one per supported IMU message format.

Each decoder turns one raw record into an :class:`IMUFrame` expressed in the
normalized convention (FLU body frame, m/s², rad/s, seconds).
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Protocol

import numpy as np

from ..errors import MalformedMessageError
from .imu import IMUFrame
from .raw_record import RawRecord, check_msgtype, stamp_to_sec


class IMUModelType(Enum):
    """Supported IMU models."""

    SENSOR_IMU = "SENSOR_IMU"
    SBG_IMU = "SBG_IMU"


class IMUDecoder(Protocol):
    """Interface shared by all IMU decoders."""

    model: IMUModelType

    def decode(self, record: RawRecord) -> IMUFrame: ...


def _extract_vector3(vec: Any) -> np.ndarray:
    """Extract [x, y, z] from a Vector3 message."""
    return np.array([vec.x, vec.y, vec.z], dtype=np.float64)


# Errors raised while reading a payload that doesn't have the expected shape
_PAYLOAD_ERRORS = (AttributeError, TypeError, ValueError)


class _IMULoader(ABC):
    """Type check and error translation shared by the IMU decoders.

    Subclasses set ``model`` and ``msgtype`` and implement ``_unpack``.
    """

    model: IMUModelType
    msgtype: str

    def decode(self, record: RawRecord) -> IMUFrame:
        """Convert one raw record to an IMU frame.

        Args:
            record: Raw record carrying a message of this decoder's type

        Returns:
            Normalized IMU frame

        Raises:
            MalformedMessageError: If the record type or payload shape does not
                match this decoder, or the values are not finite
        """
        check_msgtype(record, self.msgtype, self.model.value)
        try:
            return self._unpack(record.message)
        except _PAYLOAD_ERRORS as e:
            raise MalformedMessageError(self.model.value, record.msgtype, str(e)) from e

    @abstractmethod
    def _unpack(self, msg: Any) -> IMUFrame:
        """Build a frame from the message payload."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self.model.value})"


class SensorIMULoader(_IMULoader):
    """Decoder for ``sensor_msgs/Imu``.

    The standard message already uses the normalized units and axes, so
    decoding is a plain field copy.
    """

    model = IMUModelType.SENSOR_IMU
    msgtype = "sensor_msgs/Imu"

    def _unpack(self, msg: Any) -> IMUFrame:
        return IMUFrame(
            timestamp=stamp_to_sec(msg.header.stamp),
            acce=_extract_vector3(msg.linear_acceleration),
            gyro=_extract_vector3(msg.angular_velocity),
        )


class SbgIMULoader(_IMULoader):
    """Decoder for ``sbg_driver/SbgImuData``.

    SBG units report ``accel`` (m/s²) and ``gyro`` (rad/s) in their FRD body
    frame (x forward, y right, z down). The normalized frame is FLU, so the
    y and z components of both vectors change sign. Units need no scaling.

    A zero header stamp means the driver had no ROS time reference yet. The
    decoder then falls back to the ``time_stamp`` field, microseconds since
    the unit powered up.
    """

    model = IMUModelType.SBG_IMU
    msgtype = "sbg_driver/SbgImuData"

    FRD_TO_FLU = np.array([1.0, -1.0, -1.0])

    def _unpack(self, msg: Any) -> IMUFrame:
        timestamp = stamp_to_sec(msg.header.stamp)
        if timestamp == 0.0:
            timestamp = self._device_time(msg)
        return IMUFrame(
            timestamp=timestamp,
            acce=_extract_vector3(msg.accel) * self.FRD_TO_FLU,
            gyro=_extract_vector3(msg.gyro) * self.FRD_TO_FLU,
        )

    @staticmethod
    def _device_time(msg: Any) -> float:
        """Convert the SBG ``time_stamp`` (µs since power-up) to seconds."""
        time_stamp = getattr(msg, "time_stamp", None)
        if time_stamp is None:
            raise ValueError("header stamp is zero and the message has no time_stamp")
        timestamp = float(time_stamp) * 1e-6
        if not math.isfinite(timestamp):
            raise ValueError(f"time_stamp is not finite: {time_stamp}")
        return timestamp
