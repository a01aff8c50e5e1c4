"""
Curve Extractor Module

Functions for turning the vector drawings of a PDF page into polylines
(Curves) the selection engine can hit-test and calibrate against.
"""

import logging
import math
from typing import Any, Dict, List

import numpy as np
import pymupdf

from ..constants import DEFAULT_BEZIER_STEPS, PATH_JOIN_TOLERANCE_POINTS
from ..geometry.curve import Curve, Point

logger = logging.getLogger(__name__)


def extract_all_paths(page: pymupdf.Page) -> List[dict]:
    """
    Extract all drawing paths from a PDF page.

    Args:
        page: pymupdf.Page object

    Returns:
        List of path dictionaries containing items, width, color, fill
    """
    try:
        drawings = page.get_drawings()
        logger.debug(f"Extracted {len(drawings)} drawing paths from page")
        return drawings
    except Exception as e:
        logger.warning(f"Error extracting paths: {e}")
        return []


def flatten_bezier(p0: Point, p1: Point, p2: Point, p3: Point, steps: int) -> List[Point]:
    """
    Sample a cubic Bezier curve.

    Args:
        p0: Start point
        p1: First control point
        p2: Second control point
        p3: End point
        steps: Number of line segments to produce

    Returns:
        steps points along the curve, excluding p0 and ending at p3
    """
    t = np.linspace(0.0, 1.0, steps + 1)[1:, np.newaxis]
    ctrl = np.asarray([p0, p1, p2, p3], dtype=float)

    pts = (
        ((1 - t) ** 3) * ctrl[0]
        + 3 * ((1 - t) ** 2) * t * ctrl[1]
        + 3 * (1 - t) * (t ** 2) * ctrl[2]
        + (t ** 3) * ctrl[3]
    )
    return [(float(x), float(y)) for x, y in pts]


def _joined(a: Point, b: Point) -> bool:
    return math.hypot(a[0] - b[0], a[1] - b[1]) <= PATH_JOIN_TOLERANCE_POINTS


def path_to_polylines(
    path: dict,
    to_pdf: pymupdf.Matrix,
    bezier_steps: int = DEFAULT_BEZIER_STEPS
) -> List[List[Point]]:
    """
    Convert one drawing path into contiguous polylines.

    Consecutive line and Bezier items that share endpoints form one
    polyline; a gap starts a new one. Rectangles and quads become closed
    polylines of their own.

    Args:
        path: Path dictionary from page.get_drawings()
        to_pdf: Matrix from MuPDF page coordinates to PDF user space
        bezier_steps: Segments used to flatten each cubic Bezier

    Returns:
        List of point lists in PDF user space
    """
    def convert(p) -> Point:
        q = pymupdf.Point(p) * to_pdf
        return (q.x, q.y)

    polylines = []
    current: List[Point] = []

    def flush():
        if path.get("closePath") and len(current) > 2 and not _joined(current[0], current[-1]):
            current.append(current[0])
        if current:
            polylines.append(list(current))
        current.clear()

    for item in path.get("items", []):
        item_type = item[0]

        if item_type == "l":  # Line
            # item = ("l", start_point, end_point)
            start, end = convert(item[1]), convert(item[2])
            if not current or not _joined(current[-1], start):
                flush()
                current.append(start)
            current.append(end)

        elif item_type == "c":  # Cubic Bezier
            # item = ("c", p1, p2, p3, p4)
            p0, p1, p2, p3 = (convert(p) for p in item[1:5])
            if not current or not _joined(current[-1], p0):
                flush()
                current.append(p0)
            current.extend(flatten_bezier(p0, p1, p2, p3, bezier_steps))

        elif item_type == "re":  # Rectangle
            # item = ("re", rect, orientation)
            flush()
            rect = item[1]
            corners = [convert(p) for p in (rect.tl, rect.tr, rect.br, rect.bl)]
            polylines.append(corners + [corners[0]])

        elif item_type == "qu":  # Quad
            # item = ("qu", quad)
            flush()
            quad = item[1]
            corners = [convert(p) for p in (quad.ul, quad.ur, quad.lr, quad.ll)]
            polylines.append(corners + [corners[0]])

    flush()
    return polylines


def extract_page_curves(
    page: pymupdf.Page,
    bezier_steps: int = DEFAULT_BEZIER_STEPS
) -> List[Curve]:
    """
    Extract every vector polyline on a page as a Curve.

    This is the main entry point for curve extraction. Curve ids are
    assigned sequentially in drawing order, so they are stable for a given
    page.

    Args:
        page: pymupdf.Page object
        bezier_steps: Segments used to flatten each cubic Bezier

    Returns:
        List of Curves in PDF user space (y up)
    """
    to_pdf = ~page.transformation_matrix

    curves = []
    for path in extract_all_paths(page):
        for points in path_to_polylines(path, to_pdf, bezier_steps):
            curves.append(Curve(curve_id=len(curves), points=points))

    logger.info(f"Extracted {len(curves)} curves from page {page.number + 1}")
    return curves


def describe_curve(curve: Curve) -> Dict[str, Any]:
    """
    Summarise a curve for listings.

    Args:
        curve: Curve to describe

    Returns:
        Dictionary with curve_id, point count and raw bounding box
    """
    info = {"curve_id": curve.curve_id, "points": len(curve.points)}

    if curve.points:
        pts = np.asarray(curve.points, dtype=float)
        info.update({
            "min_x": float(pts[:, 0].min()),
            "max_x": float(pts[:, 0].max()),
            "min_y": float(pts[:, 1].min()),
            "max_y": float(pts[:, 1].max()),
        })

    return info
