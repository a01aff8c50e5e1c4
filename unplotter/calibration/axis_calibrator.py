"""
Axis Calibrator Module

Holds the X/Y calibration of one document-viewing session and converts raw
document coordinates into calibrated data values.

Each axis keeps the raw points of its reference curve, not just the derived
extent: the extent depends on the view rotation and is re-derived from the
raw points whenever the rotation changes.
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, Tuple

from ..constants import MIN_CURVE_POINTS
from ..errors import (
    DigitizerError,
    Failure,
    InsufficientPointsError,
    InvalidRotationError,
    NotCalibratedError,
)
from ..geometry.curve import AxisExtent, Curve, Point, compute_extent
from ..geometry.rotation import normalize, normalize_rotation
from .scale import Axis, Bound, ScaleKind, linear_value, log_value

logger = logging.getLogger(__name__)


@dataclass
class AxisCalibration:
    """Calibration state of one logical axis."""
    axis: Axis

    # Reference curve, retained in raw coordinates
    curve_id: Optional[int] = None
    raw_points: Optional[List[Point]] = None

    # Derived from raw_points for the session's current rotation
    extent: Optional[AxisExtent] = None

    # User-entered real-world values
    real_min: Optional[float] = None
    real_max: Optional[float] = None
    scale_kind: ScaleKind = ScaleKind.LINEAR

    @property
    def has_extent(self) -> bool:
        return self.extent is not None

    @property
    def is_complete(self) -> bool:
        """True once the extent and both bounds are present."""
        return (
            self.extent is not None
            and self.real_min is not None
            and self.real_max is not None
        )

    def span(self) -> Tuple[float, float]:
        """Extent (min, max) along this axis's own dimension."""
        return self.extent.span(self.axis.value)

    def to_value(self, axis_coord: float) -> float:
        """
        Convert an axis-space coordinate to a real-world value.

        Args:
            axis_coord: Coordinate along this axis, in axis space

        Returns:
            Real-world value

        Raises:
            NotCalibratedError: If the axis is incomplete
            ZeroExtentAxisError: If the reference curve has no span
            NonPositiveLogDomainError: If a log axis has a bound <= 0
            ValueOutOfRangeError: If a log-axis value overflows a float
        """
        label = self.axis.value.upper()
        if not self.is_complete:
            raise NotCalibratedError(f"{label}-axis is not calibrated", axis=self.axis.value)

        pdf_min, pdf_max = self.span()
        mapper = log_value if self.scale_kind == ScaleKind.LOGARITHMIC else linear_value

        try:
            return mapper(axis_coord, pdf_min, pdf_max, self.real_min, self.real_max)
        except DigitizerError as e:
            raise type(e)(f"{label}-axis: {e}", axis=self.axis.value) from e

    def clear(self) -> None:
        self.curve_id = None
        self.raw_points = None
        self.extent = None
        self.real_min = None
        self.real_max = None
        self.scale_kind = ScaleKind.LINEAR


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of CalibrationSession.convert: a value pair or a failure."""
    value: Optional[Tuple[float, float]] = None
    failure: Optional[Failure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def x(self) -> Optional[float]:
        return self.value[0] if self.value is not None else None

    @property
    def y(self) -> Optional[float]:
        return self.value[1] if self.value is not None else None


@dataclass
class CalibrationStatus:
    """Snapshot of a session's calibration for display or logging."""
    is_calibrated: bool
    x_calibrated: bool
    y_calibrated: bool
    rotation: int
    extents: Dict[str, Optional[AxisExtent]] = field(default_factory=dict)
    bounds: Dict[str, Tuple[Optional[float], Optional[float]]] = field(default_factory=dict)
    scale_kinds: Dict[str, str] = field(default_factory=dict)
    curve_ids: Dict[str, Optional[int]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert status to a JSON-friendly dictionary."""
        return {
            "is_calibrated": self.is_calibrated,
            "rotation": self.rotation,
            "axes": {
                name: {
                    "calibrated": self.x_calibrated if name == "x" else self.y_calibrated,
                    "curve_id": self.curve_ids.get(name),
                    "extent": (
                        asdict(self.extents[name])
                        if self.extents.get(name) is not None else None
                    ),
                    "min": self.bounds[name][0],
                    "max": self.bounds[name][1],
                    "scale": self.scale_kinds[name],
                }
                for name in ("x", "y")
            },
        }


class CalibrationSession:
    """
    Calibration set for one document-viewing session.

    Owned by the caller and never shared between sessions. Public operations
    report problems as Failure values instead of raising.
    """

    def __init__(self, rotation: int = 0):
        self.rotation = normalize_rotation(rotation)
        self.x = AxisCalibration(Axis.X)
        self.y = AxisCalibration(Axis.Y)
        self.pending_axis: Optional[Axis] = None

    def axis_calibration(self, axis) -> AxisCalibration:
        """Get the AxisCalibration for "x"/"y" or an Axis."""
        return self.x if Axis.from_string(axis) == Axis.X else self.y

    def begin_calibration(self, axis) -> str:
        """
        Mark an axis as waiting for its reference curve.

        Returns:
            Prompt for the user
        """
        self.pending_axis = Axis.from_string(axis)
        return f"Click on a line segment representing the {self.pending_axis.value.upper()}-axis"

    def cancel_calibration(self) -> None:
        self.pending_axis = None

    def set_rotation(self, rotation) -> Optional[Failure]:
        """
        Change the view rotation and re-derive both extents.

        Both extents are computed before anything is committed, so callers
        never observe one axis in the old rotation and the other in the new.

        Args:
            rotation: New rotation in degrees (reduced mod 360)

        Returns:
            None on success, INVALID_ROTATION failure otherwise (prior
            rotation and extents kept)
        """
        try:
            new_rotation = normalize_rotation(rotation)
        except InvalidRotationError as e:
            logger.warning(f"Rejected rotation: {e}")
            return Failure.from_error(e)

        new_extents = {}
        for cal in (self.x, self.y):
            if cal.raw_points:
                new_extents[cal.axis] = compute_extent(cal.raw_points, new_rotation)
            else:
                new_extents[cal.axis] = None

        self.rotation = new_rotation
        self.x.extent = new_extents[Axis.X]
        self.y.extent = new_extents[Axis.Y]

        logger.debug(
            f"Rotation set to {new_rotation}; extents X={self.x.extent} Y={self.y.extent}"
        )
        return None

    def set_reference_curve(self, axis, curve: Curve) -> Optional[Failure]:
        """
        Use a curve as the reference segment of an axis.

        Args:
            axis: "x"/"y" or Axis
            curve: Selected curve (raw coordinates)

        Returns:
            None on success, INSUFFICIENT_POINTS failure if the curve has
            fewer than 2 points (existing calibration for the axis kept)
        """
        axis = Axis.from_string(axis)
        cal = self.axis_calibration(axis)

        if len(curve.points) < MIN_CURVE_POINTS:
            error = InsufficientPointsError(
                f"{axis.value.upper()}-axis reference curve {curve.curve_id} has "
                f"{len(curve.points)} point(s); at least {MIN_CURVE_POINTS} required",
                axis=axis.value,
            )
            logger.warning(str(error))
            return Failure.from_error(error)

        points = [(float(x), float(y)) for x, y in curve.points]
        cal.extent = compute_extent(points, self.rotation)
        cal.raw_points = points
        cal.curve_id = curve.curve_id

        if self.pending_axis == axis:
            self.pending_axis = None

        logger.info(
            f"{axis.value.upper()}-axis reference set to curve {curve.curve_id} "
            f"({len(points)} points), extent {cal.span()}"
        )
        return None

    def set_bound(self, axis, which, value: float) -> None:
        """
        Store a real-world bound. Min and max may be entered in either order
        and need not be ascending.
        """
        cal = self.axis_calibration(axis)
        bound = Bound.from_string(which)
        if bound == Bound.MIN:
            cal.real_min = float(value)
        else:
            cal.real_max = float(value)

        logger.debug(f"Set {cal.axis.value}-axis {bound.value} = {value}")

    def set_scale_kind(self, axis, kind) -> None:
        cal = self.axis_calibration(axis)
        cal.scale_kind = ScaleKind.from_string(kind)
        logger.debug(f"Set {cal.axis.value}-axis scale to {cal.scale_kind.value}")

    def is_axis_calibrated(self, axis) -> bool:
        return self.axis_calibration(axis).is_complete

    def is_calibrated(self) -> bool:
        return self.x.is_complete and self.y.is_complete

    def convert(self, raw_x: float, raw_y: float) -> ConversionResult:
        """
        Convert a raw point into data values.

        X is evaluated before Y; the first failure is returned.

        Args:
            raw_x: Raw X coordinate
            raw_y: Raw Y coordinate

        Returns:
            ConversionResult holding (data_x, data_y) or a Failure
        """
        if not self.is_calibrated():
            error = NotCalibratedError("Both axes must be calibrated before converting")
            return ConversionResult(failure=Failure.from_error(error))

        axis_x, axis_y = normalize(raw_x, raw_y, self.rotation)

        try:
            data_x = self.x.to_value(axis_x)
            data_y = self.y.to_value(axis_y)
        except DigitizerError as e:
            logger.warning(f"Conversion failed: {e}")
            return ConversionResult(failure=Failure.from_error(e))

        return ConversionResult(value=(data_x, data_y))

    def reset(self) -> None:
        """Clear both axes at once. Rotation is view state and is kept."""
        self.x.clear()
        self.y.clear()
        self.pending_axis = None
        logger.info("Calibration reset")

    def status(self) -> CalibrationStatus:
        return CalibrationStatus(
            is_calibrated=self.is_calibrated(),
            x_calibrated=self.x.is_complete,
            y_calibrated=self.y.is_complete,
            rotation=self.rotation,
            extents={"x": self.x.extent, "y": self.y.extent},
            bounds={
                "x": (self.x.real_min, self.x.real_max),
                "y": (self.y.real_min, self.y.real_max),
            },
            scale_kinds={"x": self.x.scale_kind.value, "y": self.y.scale_kind.value},
            curve_ids={"x": self.x.curve_id, "y": self.y.curve_id},
        )
