# Axis calibration module

from .scale import (
    Axis,
    Bound,
    ScaleKind,
    linear_factors,
    linear_value,
    log_value,
)

from .axis_calibrator import (
    AxisCalibration,
    CalibrationSession,
    CalibrationStatus,
    ConversionResult,
)

__all__ = [
    # Scale
    "Axis",
    "Bound",
    "ScaleKind",
    "linear_factors",
    "linear_value",
    "log_value",
    # Calibrator
    "AxisCalibration",
    "CalibrationSession",
    "CalibrationStatus",
    "ConversionResult",
]
