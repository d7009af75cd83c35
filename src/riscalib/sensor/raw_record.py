"""Type-tagged raw records as handed over by a bag reader.

A record wraps one deserialized message together with its declared type. The
message is only ever accessed by attribute, so genuine ROS 1 / ROS 2 message
objects work as well as any other attribute-bearing object.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Any

from ..errors import MalformedMessageError


def normalize_msgtype(msgtype: str) -> str:
    """Normalize a message type tag to the ROS 1 ``pkg/Type`` spelling.

    ROS 2 tags (``pkg/msg/Type``) and ROS 1 tags (``pkg/Type``) compare equal
    after normalization.

    Args:
        msgtype: Declared message type tag

    Returns:
        Tag in ``pkg/Type`` form
    """
    parts = msgtype.strip("/").split("/")
    if len(parts) == 3 and parts[1] == "msg":
        return f"{parts[0]}/{parts[2]}"
    return "/".join(parts)


@dataclass(frozen=True)
class RawRecord:
    """One raw message read from a recorded data stream.

    Attributes:
        topic: Topic the message was recorded on
        msgtype: Declared message type, e.g. ``sensor_msgs/Imu``
        message: Deserialized message payload
        timestamp: Receive time assigned by the transport (seconds), if known
    """

    topic: str
    msgtype: str
    message: Any
    timestamp: float | None = None

    @property
    def normalized_msgtype(self) -> str:
        """Message type tag in ``pkg/Type`` form."""
        return normalize_msgtype(self.msgtype)


def stamp_to_sec(stamp: Any) -> float:
    """Convert a header stamp to floating-point seconds.

    Accepts ROS 1 stamps (``secs``/``nsecs``), ROS 2 stamps (``sec``/``nanosec``),
    objects exposing ``to_sec()``, and plain numbers.

    Args:
        stamp: Header stamp

    Returns:
        Stamp in seconds

    Raises:
        TypeError: If the stamp has none of the supported layouts
    """
    if hasattr(stamp, "to_sec"):
        return float(stamp.to_sec())
    if hasattr(stamp, "secs") and hasattr(stamp, "nsecs"):
        return stamp.secs + stamp.nsecs * 1e-9
    if hasattr(stamp, "sec") and hasattr(stamp, "nanosec"):
        return stamp.sec + stamp.nanosec * 1e-9
    if isinstance(stamp, numbers.Real):
        return float(stamp)
    raise TypeError(f"Unsupported header stamp type: {type(stamp).__name__}")


def check_msgtype(record: RawRecord, expected: str, model: str) -> None:
    """Reject a record whose declared type differs from ``expected``.

    Args:
        record: Record routed to a decoder
        expected: Message type the decoder understands (``pkg/Type`` form)
        model: Model identifier of the decoder, for the error message

    Raises:
        MalformedMessageError: If the record has no type tag or the tags differ
    """
    if not isinstance(record.msgtype, str):
        raise MalformedMessageError(
            model, str(record.msgtype), f"missing type tag, expected '{expected}'"
        )
    if record.normalized_msgtype != expected:
        raise MalformedMessageError(
            model,
            record.msgtype,
            f"expected '{expected}', the sensor model is probably set incorrectly",
        )
