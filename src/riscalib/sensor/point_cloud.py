"""Field extraction from ``sensor_msgs/PointCloud2`` payloads."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

# sensor_msgs/PointField datatype constants
_POINT_FIELD_DTYPES = {
    1: "i1",  # INT8
    2: "u1",  # UINT8
    3: "i2",  # INT16
    4: "u2",  # UINT16
    5: "i4",  # INT32
    6: "u4",  # UINT32
    7: "f4",  # FLOAT32
    8: "f8",  # FLOAT64
}


def pointfield_to_dtype(datatype: int, is_bigendian: bool = False) -> np.dtype:
    """Map a PointField datatype constant to a numpy dtype.

    Args:
        datatype: PointField datatype constant (1..8)
        is_bigendian: Byte order of the cloud

    Returns:
        Numpy dtype with explicit byte order

    Raises:
        ValueError: If the datatype is not a PointField constant
    """
    code = _POINT_FIELD_DTYPES.get(int(datatype))
    if code is None:
        raise ValueError(f"Unsupported PointField datatype: {datatype}")
    return np.dtype(code).newbyteorder(">" if is_bigendian else "<")


def read_point_fields(msg: Any, names: Sequence[str]) -> dict[str, np.ndarray]:
    """Decode the named fields of every point in a PointCloud2 message.

    Points are returned in storage order (row by row), NaN points included.

    Args:
        msg: PointCloud2 message (``fields``, ``point_step``, ``row_step``,
            ``width``, ``height``, ``is_bigendian``, ``data``)
        names: Field names to extract

    Returns:
        Mapping from field name to float64 array of shape (width * height,)

    Raises:
        ValueError: If a field is missing, has an unsupported layout, or the
            data buffer is shorter than the declared cloud size
    """
    field_map = {f.name: f for f in msg.fields}
    missing = [name for name in names if name not in field_map]
    if missing:
        raise ValueError(
            f"PointCloud2 missing required fields {missing}, "
            f"present fields: {sorted(field_map)}"
        )

    width = int(msg.width)
    height = int(msg.height)
    point_step = int(msg.point_step)
    row_step = int(msg.row_step)
    n_points = width * height
    if n_points == 0:
        return {name: np.zeros(0, dtype=np.float64) for name in names}

    formats = []
    offsets = []
    for name in names:
        field = field_map[name]
        if int(getattr(field, "count", 1)) != 1:
            raise ValueError(f"PointCloud2 field '{name}' has count {field.count}, expected 1")
        formats.append(pointfield_to_dtype(field.datatype, bool(msg.is_bigendian)))
        offsets.append(int(field.offset))
    dtype = np.dtype(
        {"names": list(names), "formats": formats, "offsets": offsets, "itemsize": point_step}
    )

    data = bytes(msg.data)
    if row_step < width * point_step or len(data) < row_step * height:
        raise ValueError(
            f"PointCloud2 data too short: {len(data)} bytes for {height} rows "
            f"of {width} points (point_step={point_step}, row_step={row_step})"
        )

    # Rows may carry padding beyond width * point_step
    rows = np.frombuffer(data, dtype=np.uint8, count=row_step * height).reshape(height, row_step)
    packed = np.ascontiguousarray(rows[:, : width * point_step])
    points = np.frombuffer(packed.tobytes(), dtype=dtype, count=n_points)

    return {name: points[name].astype(np.float64) for name in names}
