"""
Data Exporter Module

Converts labeled curves through the session's calibration and writes the
resulting data as CSV (long format, one row per point) or JSON.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from .. import __version__
from ..calibration.axis_calibrator import CalibrationSession
from ..constants import EXPORT_FLOAT_PRECISION, EXPORT_FILENAME_SUFFIX
from ..selection.labels import LabeledCurve

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["label", "curve_id", "x", "y"]


class ExportError(Exception):
    """Raised when labeled curves cannot be exported."""
    pass


@dataclass
class CurveData:
    """Calibrated data points of one labeled curve."""
    label: str
    curve_id: int
    points: List[Tuple[float, float]] = field(default_factory=list)

    def to_dict(self, precision: int = EXPORT_FLOAT_PRECISION) -> Dict[str, Any]:
        return {
            "label": self.label,
            "curve_id": self.curve_id,
            "points": [
                {"x": round(x, precision), "y": round(y, precision)}
                for x, y in self.points
            ],
        }


def build_curve_data(
    labeled_curves: Sequence[LabeledCurve],
    session: CalibrationSession
) -> List[CurveData]:
    """
    Convert every point of every labeled curve into data values.

    Args:
        labeled_curves: Curves to export, in order
        session: Fully calibrated session

    Returns:
        List of CurveData in the same order

    Raises:
        ExportError: If there is nothing to export, the session is not
            calibrated, or any point fails to convert
    """
    if not labeled_curves:
        raise ExportError("No labeled curves to export")

    if not session.is_calibrated():
        raise ExportError("Calibration required before export")

    curve_data = []
    for entry in labeled_curves:
        points = []
        for raw_x, raw_y in entry.curve.points:
            result = session.convert(raw_x, raw_y)
            if not result.ok:
                raise ExportError(f"Cannot convert curve \"{entry.label}\": {result.failure}")
            points.append(result.value)

        curve_data.append(CurveData(label=entry.label, curve_id=entry.curve_id, points=points))

    logger.debug(f"Converted {sum(len(c.points) for c in curve_data)} points "
                 f"from {len(curve_data)} curves")
    return curve_data


def curves_to_dataframe(curve_data: Sequence[CurveData]) -> pd.DataFrame:
    """
    Flatten curve data into a long-format table.

    Args:
        curve_data: Converted curves

    Returns:
        DataFrame with columns label, curve_id, x, y
    """
    rows = [
        (curve.label, curve.curve_id, x, y)
        for curve in curve_data
        for x, y in curve.points
    ]
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def generate_csv_filename(input_pdf: str, output_dir: str) -> str:
    """Output CSV path: <output_dir>/<input stem>_data.csv"""
    return str(Path(output_dir) / f"{Path(input_pdf).stem}{EXPORT_FILENAME_SUFFIX}.csv")


def generate_json_filename(input_pdf: str, output_dir: str) -> str:
    """Output JSON path: <output_dir>/<input stem>_data.json"""
    return str(Path(output_dir) / f"{Path(input_pdf).stem}{EXPORT_FILENAME_SUFFIX}.json")


def write_curves_to_csv(
    curve_data: Sequence[CurveData],
    output_path: str,
    precision: int = EXPORT_FLOAT_PRECISION
) -> str:
    """
    Write curve data to a CSV file.

    Args:
        curve_data: Converted curves
        output_path: Destination file
        precision: Decimal places kept for x and y

    Returns:
        Path of the written file
    """
    df = curves_to_dataframe(curve_data)
    df[["x", "y"]] = df[["x", "y"]].round(precision)

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False)

    logger.info(f"Wrote {len(df)} rows to {output_path}")
    return output_path


def build_output_json(
    curve_data: Sequence[CurveData],
    input_file: str,
    page_number: int,
    calibration: Optional[Dict[str, Any]] = None,
    precision: int = EXPORT_FLOAT_PRECISION
) -> Dict[str, Any]:
    """
    Build the JSON export document.

    Args:
        curve_data: Converted curves
        input_file: Source PDF path
        page_number: 1-indexed page the curves came from
        calibration: CalibrationStatus.to_dict() of the session
        precision: Decimal places kept for x and y

    Returns:
        JSON-serialisable dictionary
    """
    return {
        "version": __version__,
        "exported_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "source": str(input_file),
        "page": page_number,
        "rotation": (calibration or {}).get("rotation", 0),
        "calibration": calibration,
        "curve_count": len(curve_data),
        "curves": [curve.to_dict(precision) for curve in curve_data],
    }


def write_curves_to_json(
    curve_data: Sequence[CurveData],
    output_path: str,
    input_file: str,
    page_number: int,
    calibration: Optional[Dict[str, Any]] = None,
    precision: int = EXPORT_FLOAT_PRECISION
) -> str:
    """
    Write curve data to a JSON file.

    Returns:
        Path of the written file
    """
    document = build_output_json(curve_data, input_file, page_number, calibration, precision)

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2)

    logger.info(f"Wrote {len(curve_data)} curves to {output_path}")
    return output_path
