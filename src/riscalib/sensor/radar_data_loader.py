"""Radar decoders: one per supported radar message format.

All decoders keep every target the message carries, in message order, and
express positions in the shared sensor frame documented in
:mod:`riscalib.sensor.radar`.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Protocol

from ..errors import MalformedMessageError
from .point_cloud import read_point_fields
from .radar import RadarTarget, RadarTargetArray
from .raw_record import RawRecord, check_msgtype, stamp_to_sec


class RadarModelType(Enum):
    """Supported radar models."""

    AINSTEIN_RADAR = "AINSTEIN_RADAR"
    AWR1843BOOST_RAW = "AWR1843BOOST_RAW"
    AWR1843BOOST_CUSTOM = "AWR1843BOOST_CUSTOM"
    AWR1843BOOST_PC2_POSV = "AWR1843BOOST_PC2_POSV"
    AWR1843BOOST_PC2_POSIV = "AWR1843BOOST_PC2_POSIV"


class RadarDecoder(Protocol):
    """Interface shared by all radar decoders."""

    model: RadarModelType

    def decode(self, record: RawRecord) -> RadarTargetArray: ...


_PAYLOAD_ERRORS = (AttributeError, TypeError, ValueError)


class _RadarLoader(ABC):
    """Type check and error translation shared by the radar decoders.

    Subclasses set ``model`` and ``msgtype`` and implement ``_unpack``.
    """

    model: RadarModelType
    msgtype: str

    def decode(self, record: RawRecord) -> RadarTargetArray:
        """Convert one raw record to a radar scan.

        Args:
            record: Raw record carrying a message of this decoder's type

        Returns:
            Radar scan with one target per detection in the message

        Raises:
            MalformedMessageError: If the record type or payload shape does not
                match this decoder
        """
        check_msgtype(record, self.msgtype, self.model.value)
        try:
            return self._unpack(record.message)
        except _PAYLOAD_ERRORS as e:
            raise MalformedMessageError(self.model.value, record.msgtype, str(e)) from e

    @abstractmethod
    def _unpack(self, msg: Any) -> RadarTargetArray:
        """Build a scan from the message payload."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self.model.value})"


class AinsteinRadarLoader(_RadarLoader):
    """Decoder for ``ainstein_radar_msgs/RadarTargetArray``.

    Each target has ``range`` (m), ``speed`` (m/s, range rate), ``azimuth``
    and ``elevation`` (degrees).
    """

    model = RadarModelType.AINSTEIN_RADAR
    msgtype = "ainstein_radar_msgs/RadarTargetArray"

    def _unpack(self, msg: Any) -> RadarTargetArray:
        targets = [
            RadarTarget.from_spherical(
                range_m=tar.range,
                azimuth=math.radians(tar.azimuth),
                elevation=math.radians(tar.elevation),
                radial_velocity=tar.speed,
            )
            for tar in msg.targets
        ]
        return RadarTargetArray(timestamp=stamp_to_sec(msg.header.stamp), targets=tuple(targets))


class AWR1843BOOSTRawLoader(_RadarLoader):
    """Decoder for raw TI AWR1843BOOST detections (``ti_mmwave_rospkg/RadarScan``).

    Detections in ``points`` only carry the polar measurement: ``range`` (m),
    ``bearing`` and ``elevation`` (degrees) and ``velocity`` (m/s, range rate).
    Cartesian positions are computed here.
    """

    model = RadarModelType.AWR1843BOOST_RAW
    msgtype = "ti_mmwave_rospkg/RadarScan"

    def _unpack(self, msg: Any) -> RadarTargetArray:
        targets = [
            RadarTarget.from_spherical(
                range_m=point.range,
                azimuth=math.radians(point.bearing),
                elevation=math.radians(point.elevation),
                radial_velocity=point.velocity,
            )
            for point in msg.points
        ]
        return RadarTargetArray(timestamp=stamp_to_sec(msg.header.stamp), targets=tuple(targets))


class AWR1843BOOSTCustomLoader(_RadarLoader):
    """Decoder for ``ti_mmwave_rospkg/RadarScanCustom``.

    Targets already carry Cartesian ``x``, ``y``, ``z`` and ``velocity``.
    """

    model = RadarModelType.AWR1843BOOST_CUSTOM
    msgtype = "ti_mmwave_rospkg/RadarScanCustom"

    def _unpack(self, msg: Any) -> RadarTargetArray:
        targets = [
            RadarTarget(position=[tar.x, tar.y, tar.z], radial_velocity=tar.velocity)
            for tar in msg.targets
        ]
        return RadarTargetArray(timestamp=stamp_to_sec(msg.header.stamp), targets=tuple(targets))


class AWR1843BOOSTPC2POSVLoader(_RadarLoader):
    """Decoder for PointCloud2 scans with ``x, y, z, velocity`` fields."""

    model = RadarModelType.AWR1843BOOST_PC2_POSV
    msgtype = "sensor_msgs/PointCloud2"

    def _unpack(self, msg: Any) -> RadarTargetArray:
        cols = read_point_fields(msg, ["x", "y", "z", "velocity"])
        targets = [
            RadarTarget(position=[x, y, z], radial_velocity=v)
            for x, y, z, v in zip(cols["x"], cols["y"], cols["z"], cols["velocity"])
        ]
        return RadarTargetArray(timestamp=stamp_to_sec(msg.header.stamp), targets=tuple(targets))


class AWR1843BOOSTPC2POSIVLoader(_RadarLoader):
    """Decoder for PointCloud2 scans with ``x, y, z, intensity, velocity`` fields."""

    model = RadarModelType.AWR1843BOOST_PC2_POSIV
    msgtype = "sensor_msgs/PointCloud2"

    def _unpack(self, msg: Any) -> RadarTargetArray:
        cols = read_point_fields(msg, ["x", "y", "z", "intensity", "velocity"])
        targets = [
            RadarTarget(position=[x, y, z], radial_velocity=v, intensity=i)
            for x, y, z, i, v in zip(
                cols["x"], cols["y"], cols["z"], cols["intensity"], cols["velocity"]
            )
        ]
        return RadarTargetArray(timestamp=stamp_to_sec(msg.header.stamp), targets=tuple(targets))
