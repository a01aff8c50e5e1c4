"""
Pipeline Orchestration Module

Coordinates a non-interactive digitizing run: PDF page -> curves -> axis
calibration -> labeled curves -> output files.

The run drives the same SelectionStateMachine and CalibrationSession an
interactive viewer would, selecting curves by id instead of by pointer.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .calibration.axis_calibrator import CalibrationSession, CalibrationStatus
from .calibration.scale import Axis, Bound, ScaleKind
from .config import load_settings
from .constants import DEFAULT_BEZIER_STEPS, EXPORT_FORMATS
from .output.exporter import (
    CurveData,
    build_curve_data,
    generate_csv_filename,
    generate_json_filename,
    write_curves_to_csv,
    write_curves_to_json,
)
from .pdf.curves import describe_curve, extract_page_curves
from .pdf.reader import get_page, open_pdf
from .pdf.viewport import Viewport
from .selection.labels import LabeledCurveStore
from .selection.state_machine import SelectionResult, SelectionStateMachine


logger = logging.getLogger(__name__)


@dataclass
class DigitizeConfig:
    """Configuration for one digitizing run."""
    input_pdf: str
    output_dir: str
    page: int = 1  # 1-indexed
    rotation: int = 0
    x_curve: Optional[int] = None
    y_curve: Optional[int] = None
    x_min: Optional[float] = None
    x_max: Optional[float] = None
    y_min: Optional[float] = None
    y_max: Optional[float] = None
    x_log: bool = False
    y_log: bool = False
    labels: List[Tuple[int, str]] = field(default_factory=list)
    output_format: Optional[str] = None  # csv, json, both; settings when None
    settings_path: Optional[str] = None
    verbose: bool = False


@dataclass
class DigitizeResult:
    """Result from a digitizing run."""
    input_file: str
    output_dir: str
    page: int
    rotation: int
    total_curves: int
    calibration: CalibrationStatus
    curves: List[CurveData]
    warnings: List[str]
    csv_path: Optional[str]
    json_path: Optional[str]
    processing_time: float


def config_from_args(args) -> DigitizeConfig:
    """Build a DigitizeConfig from parsed command-line arguments."""
    return DigitizeConfig(
        input_pdf=args.input,
        output_dir=args.output,
        page=args.page,
        rotation=args.rotation,
        x_curve=args.x_curve,
        y_curve=args.y_curve,
        x_min=args.x_min,
        x_max=args.x_max,
        y_min=args.y_min,
        y_max=args.y_max,
        x_log=args.x_log,
        y_log=args.y_log,
        labels=list(args.label or []),
        output_format=getattr(args, 'format', None),
        settings_path=getattr(args, 'config', None),
        verbose=args.verbose,
    )


def resolve_formats(output_format: Optional[str], default_formats: Tuple[str, ...]) -> Tuple[str, ...]:
    """
    Turn a --format value into the list of formats to write.

    Args:
        output_format: "csv", "json", "both" or None
        default_formats: Formats from settings, used when output_format is None

    Returns:
        Tuple of format names
    """
    if output_format is None:
        return tuple(default_formats)
    if output_format == "both":
        return EXPORT_FORMATS
    return (output_format,)


def calibrate_axes(machine: SelectionStateMachine, config: DigitizeConfig) -> List[str]:
    """
    Pick the reference curve of each axis and apply the entered bounds.

    Args:
        machine: Selection machine holding the page's curves
        config: Run configuration

    Returns:
        List of warnings (calibration problems do not abort the run here)
    """
    warnings = []
    session = machine.session

    axis_settings = (
        (Axis.X, config.x_curve, config.x_min, config.x_max, config.x_log),
        (Axis.Y, config.y_curve, config.y_min, config.y_max, config.y_log),
    )

    for axis, curve_id, real_min, real_max, use_log in axis_settings:
        name = axis.value.upper()

        if curve_id is None:
            warnings.append(f"No reference curve given for the {name}-axis")
        else:
            machine.begin_calibration(axis)
            try:
                result = machine.select_curve(curve_id)
            except ValueError as e:
                machine.cancel_calibration()
                warnings.append(f"{name}-axis: {e}")
            else:
                if not result.ok:
                    warnings.append(str(result.failure))

        if real_min is not None:
            session.set_bound(axis, Bound.MIN, real_min)
        if real_max is not None:
            session.set_bound(axis, Bound.MAX, real_max)
        if real_min is None or real_max is None:
            warnings.append(f"{name}-axis needs both a minimum and a maximum value")

        session.set_scale_kind(axis, ScaleKind.LOGARITHMIC if use_log else ScaleKind.LINEAR)

    return warnings


def label_curves(
    machine: SelectionStateMachine,
    labeler: LabeledCurveStore,
    labels: List[Tuple[int, str]]
) -> List[str]:
    """
    Select and label curves in free-selection mode.

    With no explicit labels, every measurable curve that is not an axis
    reference is labeled "curve_<id>".

    Args:
        machine: Selection machine holding the page's curves
        labeler: Store receiving the selections
        labels: (curve_id, label) pairs

    Returns:
        List of warnings
    """
    warnings = []

    if not labels:
        reference_ids = {machine.session.x.curve_id, machine.session.y.curve_id}
        labels = [
            (curve.curve_id, f"curve_{curve.curve_id}")
            for curve in machine.curves
            if curve.is_measurable and curve.curve_id not in reference_ids
        ]
        logger.info(f"No labels given, exporting all {len(labels)} data curves")

    machine.toggle_free_selection()
    try:
        for curve_id, label in labels:
            try:
                machine.select_curve(curve_id)
            except ValueError as e:
                warnings.append(f"Label \"{label}\": {e}")
                continue
            labeler.save_label(label)
    finally:
        machine.toggle_free_selection()

    return warnings


def _log_selection(result: SelectionResult) -> None:
    if result.axis is not None:
        outcome = "ok" if result.ok else str(result.failure)
        logger.debug(f"Curve {result.curve.curve_id} -> {result.axis.value}-axis ({outcome})")
    else:
        logger.debug(f"Curve {result.curve.curve_id} selected for labeling")


def list_curves(
    input_pdf: str,
    page: int = 1,
    bezier_steps: int = DEFAULT_BEZIER_STEPS
) -> List[Dict[str, Any]]:
    """
    Describe every curve on a page, for choosing axis and data curves.

    Args:
        input_pdf: PDF path
        page: 1-indexed page number
        bezier_steps: Segments used to flatten each cubic Bezier

    Returns:
        List of describe_curve() dictionaries
    """
    doc = open_pdf(input_pdf)
    try:
        curves = extract_page_curves(get_page(doc, page - 1), bezier_steps)
    finally:
        doc.close()

    return [describe_curve(curve) for curve in curves]


def run_digitize(config: DigitizeConfig) -> DigitizeResult:
    """
    Run a full digitizing pass.

    Args:
        config: Run configuration

    Returns:
        DigitizeResult with the converted curves and output paths

    Raises:
        PDFReadError: If the PDF or page cannot be read
        ExportError: If the calibration is unusable or nothing is labeled
    """
    start_time = time.time()

    # Setup logging
    log_level = logging.DEBUG if config.verbose else logging.INFO
    logging.basicConfig(level=log_level, format='%(message)s')

    settings = load_settings(config.settings_path)
    formats = resolve_formats(config.output_format, settings.export_formats)

    logger.info(f"Processing: {config.input_pdf} (page {config.page})")

    all_warnings = []

    doc = open_pdf(config.input_pdf)
    try:
        page = get_page(doc, config.page - 1)
        curves = extract_page_curves(page, settings.bezier_steps)
        viewport = Viewport.for_page(page, scale=settings.render_scale, rotation=config.rotation)
    finally:
        doc.close()

    if not curves:
        all_warnings.append(f"No vector curves found on page {config.page}")

    session = CalibrationSession(rotation=viewport.rotation)
    labeler = LabeledCurveStore()
    machine = SelectionStateMachine(
        session,
        labeler=labeler,
        threshold=settings.hit_threshold_px,
        transform=viewport.to_display,
    )
    machine.set_curves(curves)
    machine.add_observer(_log_selection)

    all_warnings.extend(calibrate_axes(machine, config))

    status = session.status()
    if status.is_calibrated:
        logger.info(
            f"Calibrated: X {status.bounds['x']} ({status.scale_kinds['x']}), "
            f"Y {status.bounds['y']} ({status.scale_kinds['y']})"
        )
    else:
        logger.warning("Calibration incomplete")

    all_warnings.extend(label_curves(machine, labeler, config.labels))

    curve_data = build_curve_data(labeler.labeled_curves, session)

    # Generate outputs
    output_dir = Path(config.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    csv_path = None
    json_path = None

    if "csv" in formats:
        csv_path = generate_csv_filename(config.input_pdf, config.output_dir)
        write_curves_to_csv(curve_data, csv_path, precision=settings.float_precision)
        logger.info(f"CSV written: {csv_path}")

    if "json" in formats:
        json_path = generate_json_filename(config.input_pdf, config.output_dir)
        write_curves_to_json(
            curve_data, json_path,
            input_file=config.input_pdf,
            page_number=config.page,
            calibration=status.to_dict(),
            precision=settings.float_precision,
        )
        logger.info(f"JSON written: {json_path}")

    processing_time = time.time() - start_time

    # Summary
    total_points = sum(len(c.points) for c in curve_data)
    logger.info(f"\nSummary:")
    logger.info(f"  Curves on page: {len(curves)}")
    logger.info(f"  Curves exported: {len(curve_data)}")
    logger.info(f"  Points exported: {total_points}")
    logger.info(f"  Processing time: {processing_time:.1f}s")

    if all_warnings:
        logger.info(f"\nWarnings ({len(all_warnings)}):")
        for w in all_warnings[:10]:
            logger.info(f"  - {w}")
        if len(all_warnings) > 10:
            logger.info(f"  ... and {len(all_warnings) - 10} more")

    return DigitizeResult(
        input_file=config.input_pdf,
        output_dir=config.output_dir,
        page=config.page,
        rotation=session.rotation,
        total_curves=len(curves),
        calibration=status,
        curves=curve_data,
        warnings=all_warnings,
        csv_path=csv_path,
        json_path=json_path,
        processing_time=processing_time,
    )
