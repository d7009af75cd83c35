"""Persistence of pose sequences.

A pose archive holds a single named field, ``pose_seq``, containing the poses
in order. Each pose is stored as timestamp, quaternion [qx, qy, qz, qw] and
translation [tx, ty, tz].
"""

from __future__ import annotations

import json
import logging
import pickle
from collections.abc import Sequence
from enum import Enum
from pathlib import Path
from typing import Any

import numpy as np
import yaml

from ..errors import PersistenceError
from .pose import Pose

logger = logging.getLogger(__name__)

POSE_SEQ_FIELD = "pose_seq"

# Column layout of the portable binary array
_POSE_COLUMNS = ["timestamp", "qx", "qy", "qz", "qw", "tx", "ty", "tz"]


class ArchiveType(Enum):
    """Supported serialized encodings."""

    JSON = "JSON"  # human-readable text
    YAML = "YAML"  # human-readable text
    BINARY = "BINARY"  # pickle
    PORTABLE_BINARY = "PORTABLE_BINARY"  # little-endian float64 array in .npz

    @property
    def extension(self) -> str:
        """Conventional file extension for this encoding."""
        return _EXTENSIONS[self]


_EXTENSIONS = {
    ArchiveType.JSON: ".json",
    ArchiveType.YAML: ".yaml",
    ArchiveType.BINARY: ".bin",
    ArchiveType.PORTABLE_BINARY: ".npz",
}


def _write_json(pose_seq: Sequence[Pose], path: Path) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump({POSE_SEQ_FIELD: [p.to_dict() for p in pose_seq]}, f, indent=2)


def _write_yaml(pose_seq: Sequence[Pose], path: Path) -> None:
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump({POSE_SEQ_FIELD: [p.to_dict() for p in pose_seq]}, f, sort_keys=False)


def _write_binary(pose_seq: Sequence[Pose], path: Path) -> None:
    with open(path, "wb") as f:
        pickle.dump({POSE_SEQ_FIELD: [p.to_dict() for p in pose_seq]}, f,
                    protocol=pickle.HIGHEST_PROTOCOL)


def _write_portable_binary(pose_seq: Sequence[Pose], path: Path) -> None:
    rows = np.array(
        [[p.timestamp, *p.quaternion, *p.translation] for p in pose_seq],
        dtype="<f8",
    ).reshape(-1, len(_POSE_COLUMNS))
    # A file object keeps numpy from appending its own .npz suffix
    with open(path, "wb") as f:
        np.savez_compressed(f, **{POSE_SEQ_FIELD: rows})


_WRITERS = {
    ArchiveType.JSON: _write_json,
    ArchiveType.YAML: _write_yaml,
    ArchiveType.BINARY: _write_binary,
    ArchiveType.PORTABLE_BINARY: _write_portable_binary,
}


def save_pose_sequence(
    pose_seq: Sequence[Pose],
    filename: str | Path,
    archive_type: ArchiveType | str,
) -> bool:
    """Write a pose sequence to ``filename`` in the chosen encoding.

    Missing parent directories are created. An existing file is overwritten.

    Args:
        pose_seq: Poses to write, in order
        filename: Output file path
        archive_type: Encoding to use, as a member or its value (e.g. ``"JSON"``)

    Returns:
        True on success, False if the directory could not be created or the
        file could not be written

    Raises:
        ValueError: If ``archive_type`` is not a supported encoding
    """
    archive_type = ArchiveType(archive_type)
    path = Path(filename)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("Cannot create directory %s: %s", path.parent, e)
        return False

    try:
        _WRITERS[archive_type](pose_seq, path)
    except OSError as e:
        logger.warning("Failed to write pose sequence to %s: %s", path, e)
        return False

    logger.debug("Saved %d poses to %s (%s)", len(pose_seq), path, archive_type.value)
    return True


def _poses_from_dicts(records: Any) -> list[Pose]:
    if not isinstance(records, list):
        raise PersistenceError(f"'{POSE_SEQ_FIELD}' must be a list, got {type(records).__name__}")
    try:
        return [Pose.from_dict(r) for r in records]
    except (KeyError, TypeError, ValueError) as e:
        raise PersistenceError(f"Invalid pose record in '{POSE_SEQ_FIELD}': {e}") from e


def _field(data: Any) -> Any:
    if not isinstance(data, dict) or POSE_SEQ_FIELD not in data:
        raise PersistenceError(f"Archive has no '{POSE_SEQ_FIELD}' field")
    return data[POSE_SEQ_FIELD]


def load_pose_sequence(filename: str | Path, archive_type: ArchiveType | str) -> list[Pose]:
    """Read a pose sequence written by :func:`save_pose_sequence`.

    Args:
        filename: Archive file path
        archive_type: Encoding the archive was written with, as a member or its value

    Returns:
        Poses in stored order

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If ``archive_type`` is not a supported encoding
        PersistenceError: If the archive content is not a pose sequence
    """
    archive_type = ArchiveType(archive_type)
    path = Path(filename)
    if not path.exists():
        raise FileNotFoundError(f"Pose archive not found: {path}")

    if archive_type is ArchiveType.JSON:
        with open(path, "r", encoding="utf-8") as f:
            return _poses_from_dicts(_field(json.load(f)))

    if archive_type is ArchiveType.YAML:
        with open(path, "r", encoding="utf-8") as f:
            return _poses_from_dicts(_field(yaml.safe_load(f)))

    if archive_type is ArchiveType.BINARY:
        with open(path, "rb") as f:
            return _poses_from_dicts(_field(pickle.load(f)))

    with np.load(path, allow_pickle=False) as data:
        if POSE_SEQ_FIELD not in data.files:
            raise PersistenceError(f"Archive has no '{POSE_SEQ_FIELD}' field")
        rows = data[POSE_SEQ_FIELD]
    if rows.ndim != 2 or rows.shape[1] != len(_POSE_COLUMNS):
        raise PersistenceError(f"'{POSE_SEQ_FIELD}' must be Nx{len(_POSE_COLUMNS)}, got {rows.shape}")
    return [Pose(timestamp=row[0], quaternion=row[1:5], translation=row[5:8]) for row in rows]
