"""
Engine Errors Module

Exception classes raised by the geometry and calibration helpers, and the
Failure value the session's public operations hand back instead of raising.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """
    Recoverable failure kinds reported by the engine.

    Values:
        INVALID_ROTATION: Rotation outside {0, 90, 180, 270}
        INSUFFICIENT_POINTS: Reference curve has fewer than 2 points
        ZERO_EXTENT_AXIS: Reference curve has no extent along its own axis
        NON_POSITIVE_LOG_DOMAIN: Log scale with a bound <= 0
        NOT_CALIBRATED: Conversion requested before both axes are complete
        VALUE_OUT_OF_RANGE: Converted value too large to represent as a float
    """
    INVALID_ROTATION = "INVALID_ROTATION"
    INSUFFICIENT_POINTS = "INSUFFICIENT_POINTS"
    ZERO_EXTENT_AXIS = "ZERO_EXTENT_AXIS"
    NON_POSITIVE_LOG_DOMAIN = "NON_POSITIVE_LOG_DOMAIN"
    NOT_CALIBRATED = "NOT_CALIBRATED"
    VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"


class DigitizerError(Exception):
    """Base class for engine errors. Carries the failure kind and axis."""

    kind: ErrorKind

    def __init__(self, message: str, axis: Optional[str] = None):
        super().__init__(message)
        self.axis = axis


class InvalidRotationError(DigitizerError):
    """Raised when a rotation is not a multiple of 90 degrees."""
    kind = ErrorKind.INVALID_ROTATION


class InsufficientPointsError(DigitizerError):
    """Raised when a reference curve has fewer than 2 points."""
    kind = ErrorKind.INSUFFICIENT_POINTS


class ZeroExtentAxisError(DigitizerError):
    """Raised when a reference curve has no span along its axis."""
    kind = ErrorKind.ZERO_EXTENT_AXIS


class NonPositiveLogDomainError(DigitizerError):
    """Raised when a log axis has a bound <= 0."""
    kind = ErrorKind.NON_POSITIVE_LOG_DOMAIN


class NotCalibratedError(DigitizerError):
    """Raised when converting before both axes are calibrated."""
    kind = ErrorKind.NOT_CALIBRATED


class ValueOutOfRangeError(DigitizerError):
    """Raised when a log-axis value overflows a float."""
    kind = ErrorKind.VALUE_OUT_OF_RANGE


@dataclass(frozen=True)
class Failure:
    """Explicit failure result returned by session operations."""
    kind: ErrorKind
    message: str
    axis: Optional[str] = None

    @classmethod
    def from_error(cls, error: DigitizerError) -> "Failure":
        return cls(kind=error.kind, message=str(error), axis=error.axis)

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"
