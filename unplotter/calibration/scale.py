"""
Axis Scale Module

Axis identifiers, scale kinds, and the linear / logarithmic maps from an
axis-space coordinate to a real-world value.
"""

import math
from enum import Enum
from typing import Tuple

from ..errors import (
    NonPositiveLogDomainError,
    ValueOutOfRangeError,
    ZeroExtentAxisError,
)


class Axis(Enum):
    """Logical calibration axis."""
    X = "x"
    Y = "y"

    @classmethod
    def from_string(cls, value) -> "Axis":
        """
        Parse an axis name ("x", "X", "xAxis", Axis.X).

        Raises:
            ValueError: If the value names no axis
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if text in ("x", "xaxis", "x-axis", "x_axis"):
            return cls.X
        if text in ("y", "yaxis", "y-axis", "y_axis"):
            return cls.Y
        raise ValueError(f"Unknown axis: {value!r}")


class Bound(Enum):
    """Which end of an axis a real-world value belongs to."""
    MIN = "min"
    MAX = "max"

    @classmethod
    def from_string(cls, value) -> "Bound":
        """Parse "min"/"start" or "max"/"end"."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if text in ("min", "start"):
            return cls.MIN
        if text in ("max", "end"):
            return cls.MAX
        raise ValueError(f"Unknown bound: {value!r}")


class ScaleKind(Enum):
    """How real-world values vary with axis-space position."""
    LINEAR = "linear"
    LOGARITHMIC = "log"

    @classmethod
    def from_string(cls, value) -> "ScaleKind":
        """Parse "linear" or "log"/"log10"/"logarithmic"."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if text in ("linear", "lin"):
            return cls.LINEAR
        if text in ("log", "log10", "logarithmic"):
            return cls.LOGARITHMIC
        raise ValueError(f"Unknown scale kind: {value!r}")


def linear_factors(
    pdf_min: float,
    pdf_max: float,
    real_min: float,
    real_max: float
) -> Tuple[float, float]:
    """
    Calculate scale and offset of a linear axis.

    value = coord * scale + offset

    Args:
        pdf_min: Extent minimum along the axis (axis space)
        pdf_max: Extent maximum along the axis (axis space)
        real_min: Real-world value at pdf_min
        real_max: Real-world value at pdf_max

    Returns:
        Tuple of (scale, offset)

    Raises:
        ZeroExtentAxisError: If pdf_min == pdf_max
    """
    pdf_distance = pdf_max - pdf_min
    if pdf_distance == 0:
        raise ZeroExtentAxisError("Calibration curve has no extent along its axis")

    scale = (real_max - real_min) / pdf_distance
    offset = real_min - pdf_min * scale
    return scale, offset


def linear_value(
    coord: float,
    pdf_min: float,
    pdf_max: float,
    real_min: float,
    real_max: float
) -> float:
    """Map an axis-space coordinate onto a linear axis."""
    scale, offset = linear_factors(pdf_min, pdf_max, real_min, real_max)

    # calibration endpoints map back to the entered values exactly
    if coord == pdf_min:
        return float(real_min)
    if coord == pdf_max:
        return float(real_max)

    return coord * scale + offset


def log_value(
    coord: float,
    pdf_min: float,
    pdf_max: float,
    real_min: float,
    real_max: float
) -> float:
    """
    Map an axis-space coordinate onto a base-10 logarithmic axis.

    Interpolates in log space:
        t = (coord - pdf_min) / (pdf_max - pdf_min)
        value = 10 ** (log10(real_min) + t * (log10(real_max) - log10(real_min)))

    Raises:
        ZeroExtentAxisError: If pdf_min == pdf_max
        NonPositiveLogDomainError: If either bound is <= 0
        ValueOutOfRangeError: If the value is too large to represent
    """
    pdf_range = pdf_max - pdf_min
    if pdf_range == 0:
        raise ZeroExtentAxisError("Calibration curve has no extent along its axis")

    if real_min <= 0 or real_max <= 0:
        raise NonPositiveLogDomainError(
            f"Log scale requires positive bounds, got min={real_min}, max={real_max}"
        )

    t = (coord - pdf_min) / pdf_range

    # endpoints are returned as entered; 10 ** log10(v) can drift in the last bit
    if t == 0:
        return float(real_min)
    if t == 1:
        return float(real_max)

    log_min = math.log10(real_min)
    log_max = math.log10(real_max)
    exponent = log_min + t * (log_max - log_min)
    try:
        return 10 ** exponent
    except OverflowError:
        raise ValueOutOfRangeError(
            f"Value 10^{exponent:.1f} at coordinate {coord} is out of range"
        )
