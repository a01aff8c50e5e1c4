"""
Rotation Normalizer Module

Maps raw document coordinates into "axis space": the frame whose +x and +y
point right and up on screen for the current view rotation.
"""

from typing import List, Sequence, Tuple

from ..constants import VALID_ROTATIONS, FULL_TURN_DEG
from ..errors import InvalidRotationError


def normalize_rotation(rotation: float) -> int:
    """
    Reduce a rotation to one of 0, 90, 180, 270.

    Negative values wrap around (-90 -> 270, 450 -> 90).

    Args:
        rotation: Rotation in degrees clockwise

    Returns:
        Rotation as an int in VALID_ROTATIONS

    Raises:
        InvalidRotationError: If the rotation is not a multiple of 90
    """
    try:
        reduced = rotation % FULL_TURN_DEG
        whole = int(reduced)
    except (TypeError, ValueError, OverflowError):
        raise InvalidRotationError(f"Rotation must be a finite number, got {rotation!r}")

    if reduced != whole or whole not in VALID_ROTATIONS:
        raise InvalidRotationError(
            f"Invalid rotation: {rotation}. Must be one of {VALID_ROTATIONS} (mod 360)."
        )
    return whole


def normalize(raw_x: float, raw_y: float, rotation: int) -> Tuple[float, float]:
    """
    Map a raw point into axis space.

    0:   (x, y) -> (x, y)
    90:  (x, y) -> (y, -x)
    180: (x, y) -> (-x, -y)
    270: (x, y) -> (-y, x)

    Args:
        raw_x: Raw X coordinate
        raw_y: Raw Y coordinate
        rotation: View rotation in degrees clockwise

    Returns:
        Tuple of (axis_x, axis_y)

    Raises:
        InvalidRotationError: If the rotation is not a multiple of 90
    """
    r = normalize_rotation(rotation)

    if r == 90:
        return (raw_y, -raw_x)
    if r == 180:
        return (-raw_x, -raw_y)
    if r == 270:
        return (-raw_y, raw_x)
    return (raw_x, raw_y)


def denormalize(axis_x: float, axis_y: float, rotation: int) -> Tuple[float, float]:
    """Inverse of normalize(): map an axis-space point back to raw coordinates."""
    r = normalize_rotation(rotation)

    if r == 90:
        return (-axis_y, axis_x)
    if r == 180:
        return (-axis_x, -axis_y)
    if r == 270:
        return (axis_y, -axis_x)
    return (axis_x, axis_y)


def normalize_points(
    points: Sequence[Tuple[float, float]],
    rotation: int
) -> List[Tuple[float, float]]:
    """Apply normalize() to every point."""
    r = normalize_rotation(rotation)
    return [normalize(x, y, r) for x, y in points]
