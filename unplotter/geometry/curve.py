"""
Curve Data Structures Module

Polylines handed over by the curve provider, and the axis-space extent
derived from them.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

from ..constants import MIN_CURVE_POINTS
from .rotation import normalize_points

# (x, y) in raw document coordinates (PDF user space, y up)
Point = Tuple[float, float]


@dataclass
class Curve:
    """
    An identity-bearing polyline.

    curve_id is the index assigned by the curve provider for the current
    page/rotation; points are in raw document coordinates.
    """
    curve_id: int
    points: List[Point] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_measurable(self) -> bool:
        """True if the curve has at least one segment."""
        return len(self.points) >= MIN_CURVE_POINTS


@dataclass(frozen=True)
class AxisExtent:
    """Bounding box of a reference curve in axis space."""
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    def span(self, dimension: str) -> Tuple[float, float]:
        """
        Get the (min, max) pair along one axis-space dimension.

        Args:
            dimension: "x" or "y"

        Returns:
            Tuple of (min, max)
        """
        if dimension == "x":
            return (self.min_x, self.max_x)
        if dimension == "y":
            return (self.min_y, self.max_y)
        raise ValueError(f"Unknown dimension: {dimension}")


def compute_extent(points: Sequence[Point], rotation: int) -> AxisExtent:
    """
    Compute the axis-space bounding box of raw points.

    Every point is normalized for the given rotation before the elementwise
    min/max is taken.

    Args:
        points: Raw points (at least one)
        rotation: View rotation in degrees

    Returns:
        AxisExtent in the rotation's axis space
    """
    if len(points) == 0:
        raise ValueError("Cannot compute the extent of an empty point list")

    axis_points = np.asarray(normalize_points(points, rotation), dtype=float)
    mins = axis_points.min(axis=0)
    maxs = axis_points.max(axis=0)

    return AxisExtent(
        min_x=float(mins[0]),
        max_x=float(maxs[0]),
        min_y=float(mins[1]),
        max_y=float(maxs[1]),
    )
