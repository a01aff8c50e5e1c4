# Geometry: curves, rotation normalization and hit testing

from .rotation import (
    normalize_rotation,
    normalize,
    denormalize,
    normalize_points,
)

from .curve import (
    Point,
    Curve,
    AxisExtent,
    compute_extent,
)

from .hit_test import (
    point_to_segment_distance,
    distance_to_curve,
    find_nearest_curve,
)

__all__ = [
    # Rotation
    "normalize_rotation",
    "normalize",
    "denormalize",
    "normalize_points",
    # Curves
    "Point",
    "Curve",
    "AxisExtent",
    "compute_extent",
    # Hit testing
    "point_to_segment_distance",
    "distance_to_curve",
    "find_nearest_curve",
]
