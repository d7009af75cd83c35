"""Tests for the radar decoders."""

import math
from types import SimpleNamespace

import numpy as np
import pytest

from riscalib.errors import MalformedMessageError
from riscalib.sensor.radar_data_loader import (
    AinsteinRadarLoader,
    AWR1843BOOSTCustomLoader,
    AWR1843BOOSTPC2POSIVLoader,
    AWR1843BOOSTPC2POSVLoader,
    AWR1843BOOSTRawLoader,
    RadarModelType,
    _RadarLoader,
)
from riscalib.sensor.raw_record import RawRecord

FLOAT32 = 7


def _header(secs: int = 42, nsecs: int = 0) -> SimpleNamespace:
    return SimpleNamespace(stamp=SimpleNamespace(secs=secs, nsecs=nsecs), frame_id="radar")


def make_ainstein_record(targets: list[tuple[float, float, float, float]]) -> RawRecord:
    """Build an ainstein_radar_msgs/RadarTargetArray from (range, speed, az_deg, el_deg)."""
    msg = SimpleNamespace(
        header=_header(),
        targets=[
            SimpleNamespace(target_id=i, snr=10.0, range=r, speed=s, azimuth=az, elevation=el)
            for i, (r, s, az, el) in enumerate(targets)
        ],
    )
    return RawRecord(topic="/radar/targets", msgtype="ainstein_radar_msgs/RadarTargetArray", message=msg)


def make_ti_raw_record(points: list[tuple[float, float, float, float]]) -> RawRecord:
    """Build a ti_mmwave_rospkg/RadarScan from (range, bearing_deg, el_deg, velocity)."""
    msg = SimpleNamespace(
        header=_header(),
        points=[
            SimpleNamespace(point_id=i, range=r, bearing=b, elevation=el, velocity=v,
                            doppler_bin=0, intensity=30.0)
            for i, (r, b, el, v) in enumerate(points)
        ],
    )
    return RawRecord(topic="/ti_mmwave/radar_scan", msgtype="ti_mmwave_rospkg/RadarScan", message=msg)


def make_ti_custom_record(targets: list[tuple[float, float, float, float]]) -> RawRecord:
    """Build a ti_mmwave_rospkg/RadarScanCustom from (x, y, z, velocity)."""
    msg = SimpleNamespace(
        header=_header(),
        targets=[SimpleNamespace(x=x, y=y, z=z, velocity=v) for x, y, z, v in targets],
    )
    return RawRecord(
        topic="/ti_mmwave/radar_scan_custom",
        msgtype="ti_mmwave_rospkg/RadarScanCustom",
        message=msg,
    )


def make_pointcloud2_record(points: np.ndarray, field_names: list[str]) -> RawRecord:
    """Build a sensor_msgs/PointCloud2 record with float32 fields.

    Args:
        points: (N, len(field_names)) values
        field_names: Field names in storage order
    """
    dtype = np.dtype([(name, "<f4") for name in field_names])
    cloud = np.zeros(len(points), dtype=dtype)
    for i, name in enumerate(field_names):
        cloud[name] = points[:, i]
    msg = SimpleNamespace(
        header=_header(),
        height=1,
        width=len(points),
        fields=[
            SimpleNamespace(name=name, offset=dtype.fields[name][1], datatype=FLOAT32, count=1)
            for name in field_names
        ],
        is_bigendian=False,
        point_step=dtype.itemsize,
        row_step=dtype.itemsize * len(points),
        data=cloud.tobytes(),
        is_dense=True,
    )
    return RawRecord(topic="/ti_mmwave/radar_scan_pcl", msgtype="sensor_msgs/PointCloud2", message=msg)


class TestAinsteinRadarLoader:
    """Test suite for the Ainstein decoder."""

    def test_model(self):
        assert AinsteinRadarLoader().model is RadarModelType.AINSTEIN_RADAR

    def test_boresight_target(self):
        """Test that a target straight ahead lies on +x."""
        scan = AinsteinRadarLoader().decode(make_ainstein_record([(10.0, -1.5, 0.0, 0.0)]))

        assert scan.timestamp == 42.0
        np.testing.assert_allclose(scan[0].position, [10.0, 0.0, 0.0])
        assert scan[0].radial_velocity == -1.5
        assert scan[0].intensity is None

    def test_angles_are_degrees(self):
        """Test azimuth towards +y and elevation towards +z, in degrees."""
        scan = AinsteinRadarLoader().decode(
            make_ainstein_record([(10.0, 0.0, 90.0, 0.0), (10.0, 0.0, 0.0, 30.0)])
        )

        np.testing.assert_allclose(scan[0].position, [0.0, 10.0, 0.0], atol=1e-12)
        np.testing.assert_allclose(scan[1].position, [10.0 * math.cos(math.radians(30.0)), 0.0, 5.0])

    def test_preserves_count_and_order(self):
        """Test that K targets in give K targets out, in order."""
        raw = [(float(r), 0.1 * r, 5.0 * r, -2.0 * r) for r in range(1, 8)]
        scan = AinsteinRadarLoader().decode(make_ainstein_record(raw))

        assert len(scan) == 7
        np.testing.assert_allclose([t.range for t in scan], [r for r, _, _, _ in raw])
        np.testing.assert_allclose(scan.radial_velocities(), [s for _, s, _, _ in raw])

    def test_empty_scan(self):
        """Test that a scan without targets is valid."""
        scan = AinsteinRadarLoader().decode(make_ainstein_record([]))

        assert len(scan) == 0
        assert scan.timestamp == 42.0

    def test_wrong_type(self):
        with pytest.raises(MalformedMessageError, match="AINSTEIN_RADAR"):
            AinsteinRadarLoader().decode(make_ti_custom_record([(1.0, 2.0, 3.0, 0.5)]))

    def test_untagged_record(self):
        record = RawRecord(topic="/radar", msgtype=None, message=None)

        with pytest.raises(MalformedMessageError, match="missing type tag"):
            AinsteinRadarLoader().decode(record)

    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            _RadarLoader()


class TestAWR1843BOOSTRawLoader:
    """Test suite for the raw TI decoder."""

    def test_model(self):
        assert AWR1843BOOSTRawLoader().model is RadarModelType.AWR1843BOOST_RAW

    def test_polar_to_cartesian(self):
        """Test that range/bearing/elevation are converted to x, y, z."""
        scan = AWR1843BOOSTRawLoader().decode(make_ti_raw_record([(2.0, 45.0, 0.0, 0.75)]))

        np.testing.assert_allclose(scan[0].position, [math.sqrt(2.0), math.sqrt(2.0), 0.0])
        assert scan[0].radial_velocity == 0.75

    def test_range_is_preserved(self):
        """Test that the converted position keeps the measured range."""
        scan = AWR1843BOOSTRawLoader().decode(make_ti_raw_record([(7.5, -30.0, 12.0, -0.2)]))

        assert scan[0].range == pytest.approx(7.5)
        assert scan[0].position[1] < 0.0
        assert scan[0].position[2] > 0.0

    def test_preserves_count_and_order(self):
        raw = [(1.0 + i, -20.0 + 10.0 * i, 0.0, 0.1 * i) for i in range(5)]
        scan = AWR1843BOOSTRawLoader().decode(make_ti_raw_record(raw))

        assert len(scan) == 5
        np.testing.assert_allclose([t.range for t in scan], [r for r, _, _, _ in raw])

    def test_empty_scan(self):
        assert len(AWR1843BOOSTRawLoader().decode(make_ti_raw_record([]))) == 0

    def test_custom_payload_with_raw_tag(self):
        """Test that a custom payload labelled as raw is rejected."""
        record = make_ti_custom_record([(1.0, 2.0, 3.0, 0.5)])
        record = RawRecord(topic=record.topic, msgtype="ti_mmwave_rospkg/RadarScan", message=record.message)

        with pytest.raises(MalformedMessageError, match="points"):
            AWR1843BOOSTRawLoader().decode(record)


class TestAWR1843BOOSTCustomLoader:
    """Test suite for the custom TI decoder."""

    def test_model(self):
        assert AWR1843BOOSTCustomLoader().model is RadarModelType.AWR1843BOOST_CUSTOM

    def test_direct_mapping(self):
        """Test that Cartesian fields are copied without recomputation."""
        scan = AWR1843BOOSTCustomLoader().decode(make_ti_custom_record([(1.0, -2.0, 0.5, 0.25)]))

        np.testing.assert_array_equal(scan[0].position, [1.0, -2.0, 0.5])
        assert scan[0].radial_velocity == 0.25
        assert scan[0].intensity is None

    def test_preserves_count_and_order(self):
        raw = [(float(i), float(-i), 0.0, 0.5 * i) for i in range(10)]
        scan = AWR1843BOOSTCustomLoader().decode(make_ti_custom_record(raw))

        assert len(scan) == 10
        np.testing.assert_array_equal(scan.positions(), np.array(raw)[:, :3])

    def test_empty_scan(self):
        assert len(AWR1843BOOSTCustomLoader().decode(make_ti_custom_record([]))) == 0


class TestAWR1843BOOSTPC2POSVLoader:
    """Test suite for the x, y, z, velocity point cloud decoder."""

    def test_model(self):
        assert AWR1843BOOSTPC2POSVLoader().model is RadarModelType.AWR1843BOOST_PC2_POSV

    def test_decode(self):
        points = np.array([[1.0, 2.0, 0.5, -0.25], [4.0, -1.5, 0.0, 1.0], [2.5, 0.0, -0.5, 0.0]])
        scan = AWR1843BOOSTPC2POSVLoader().decode(
            make_pointcloud2_record(points, ["x", "y", "z", "velocity"])
        )

        assert len(scan) == 3
        np.testing.assert_array_equal(scan.positions(), points[:, :3])
        np.testing.assert_array_equal(scan.radial_velocities(), points[:, 3])
        assert scan.intensities() is None

    def test_ignores_extra_fields(self):
        """Test that a cloud with intensity still decodes as position + velocity."""
        points = np.array([[1.0, 2.0, 0.5, 30.0, -0.25]])
        scan = AWR1843BOOSTPC2POSVLoader().decode(
            make_pointcloud2_record(points, ["x", "y", "z", "intensity", "velocity"])
        )

        assert scan[0].radial_velocity == -0.25
        assert scan[0].intensity is None

    def test_keeps_nan_points(self):
        """Test that no point is filtered out, not even NaN ones."""
        points = np.array([[np.nan, 0.0, 0.0, 0.0], [1.0, 1.0, 1.0, 1.0]])
        scan = AWR1843BOOSTPC2POSVLoader().decode(
            make_pointcloud2_record(points, ["x", "y", "z", "velocity"])
        )

        assert len(scan) == 2
        assert np.isnan(scan[0].position[0])

    def test_empty_scan(self):
        scan = AWR1843BOOSTPC2POSVLoader().decode(
            make_pointcloud2_record(np.zeros((0, 4)), ["x", "y", "z", "velocity"])
        )
        assert len(scan) == 0

    def test_missing_velocity(self):
        points = np.array([[1.0, 2.0, 0.5]])
        with pytest.raises(MalformedMessageError, match="velocity"):
            AWR1843BOOSTPC2POSVLoader().decode(make_pointcloud2_record(points, ["x", "y", "z"]))


class TestAWR1843BOOSTPC2POSIVLoader:
    """Test suite for the x, y, z, intensity, velocity point cloud decoder."""

    def test_model(self):
        assert AWR1843BOOSTPC2POSIVLoader().model is RadarModelType.AWR1843BOOST_PC2_POSIV

    def test_decode(self):
        points = np.array([[1.0, 2.0, 0.5, 30.0, -0.25], [4.0, -1.5, 0.0, 12.5, 1.0]])
        scan = AWR1843BOOSTPC2POSIVLoader().decode(
            make_pointcloud2_record(points, ["x", "y", "z", "intensity", "velocity"])
        )

        assert len(scan) == 2
        np.testing.assert_array_equal(scan.positions(), points[:, :3])
        np.testing.assert_array_equal(scan.intensities(), points[:, 3])
        np.testing.assert_array_equal(scan.radial_velocities(), points[:, 4])

    def test_field_order_does_not_matter(self):
        """Test that fields are found by name, not position."""
        points = np.array([[-0.25, 30.0, 1.0, 2.0, 0.5]])
        scan = AWR1843BOOSTPC2POSIVLoader().decode(
            make_pointcloud2_record(points, ["velocity", "intensity", "x", "y", "z"])
        )

        np.testing.assert_array_equal(scan[0].position, [1.0, 2.0, 0.5])
        assert scan[0].intensity == 30.0
        assert scan[0].radial_velocity == -0.25

    def test_posv_cloud_is_malformed(self):
        """Test that a cloud without intensity is rejected."""
        points = np.array([[1.0, 2.0, 0.5, -0.25]])
        with pytest.raises(MalformedMessageError, match="intensity"):
            AWR1843BOOSTPC2POSIVLoader().decode(
                make_pointcloud2_record(points, ["x", "y", "z", "velocity"])
            )

    def test_wrong_type(self):
        with pytest.raises(MalformedMessageError, match="sensor_msgs/PointCloud2"):
            AWR1843BOOSTPC2POSIVLoader().decode(make_ainstein_record([(1.0, 0.0, 0.0, 0.0)]))


@pytest.mark.parametrize(
    "loader, record",
    [
        (AinsteinRadarLoader(), make_ainstein_record([(1.0 + i, 0.0, 0.0, 0.0) for i in range(4)])),
        (AWR1843BOOSTRawLoader(), make_ti_raw_record([(1.0 + i, 0.0, 0.0, 0.0) for i in range(4)])),
        (AWR1843BOOSTCustomLoader(), make_ti_custom_record([(1.0 + i, 0.0, 0.0, 0.0) for i in range(4)])),
        (
            AWR1843BOOSTPC2POSVLoader(),
            make_pointcloud2_record(
                np.array([[1.0 + i, 0.0, 0.0, 0.0] for i in range(4)]), ["x", "y", "z", "velocity"]
            ),
        ),
        (
            AWR1843BOOSTPC2POSIVLoader(),
            make_pointcloud2_record(
                np.array([[1.0 + i, 0.0, 0.0, 1.0, 0.0] for i in range(4)]),
                ["x", "y", "z", "intensity", "velocity"],
            ),
        ),
    ],
)
def test_all_variants_share_frame_convention(loader, record):
    """Test that a target 1..4 m straight ahead decodes identically for every format."""
    scan = loader.decode(record)

    assert scan.timestamp == 42.0
    np.testing.assert_allclose(scan.positions(), [[1.0, 0, 0], [2.0, 0, 0], [3.0, 0, 0], [4.0, 0, 0]])
    np.testing.assert_allclose(scan.radial_velocities(), np.zeros(4))
