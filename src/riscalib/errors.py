"""Exception types raised by the decoding and numerics layers."""

from __future__ import annotations

import numpy as np


class RISCalibError(Exception):
    """Base class for all riscalib errors."""


class UnknownModelError(RISCalibError, ValueError):
    """Raised when a model identifier is not in the loader registry.

    Attributes:
        model: The identifier that failed to resolve
        supported: Identifiers the registry does know about
    """

    def __init__(self, model: str, supported: list[str]) -> None:
        self.model = model
        self.supported = list(supported)
        super().__init__(
            f"Unknown sensor model '{model}', supported models: {', '.join(self.supported)}"
        )


class MalformedMessageError(RISCalibError, ValueError):
    """Raised when a raw record does not have the shape a decoder expects.

    This almost always means a topic was routed to the wrong decoder, i.e. the
    sensor model was configured incorrectly.

    Attributes:
        model: Model identifier of the decoder that rejected the record
        msgtype: Declared type tag of the rejected record
    """

    def __init__(self, model: str, msgtype: str, reason: str) -> None:
        self.model = model
        self.msgtype = msgtype
        super().__init__(f"[{model}] cannot decode '{msgtype}' message: {reason}")


class NonConvergenceError(RISCalibError, RuntimeError):
    """Raised when an iterative estimate exceeds its iteration limit.

    Attributes:
        estimate: Last estimate before giving up (unreliable)
        iterations: Number of update steps performed
    """

    def __init__(self, estimate: np.ndarray, iterations: int) -> None:
        self.estimate = estimate
        self.iterations = iterations
        super().__init__(f"Karcher mean did not converge after {iterations} iterations")


class PersistenceError(RISCalibError):
    """Raised when a persisted pose archive has unexpected content."""
