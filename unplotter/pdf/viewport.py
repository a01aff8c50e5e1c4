"""
Viewport Module

Raw document coordinates -> display pixels for a zoom level and view
rotation. This is the rendering side's transform; the calibration engine
never uses it and works in raw/axis space only.

Raw coordinates are PDF user space of the unrotated page (origin bottom-left,
y up). Display coordinates have their origin top-left with y down. For every
rotation, moving right on screen increases axis-space x and moving up
increases axis-space y (see geometry/rotation.py).
"""

import logging
from typing import Tuple

import pymupdf

from ..constants import (
    DEFAULT_RENDER_SCALE,
    MIN_RENDER_SCALE,
    MAX_RENDER_SCALE,
    ROTATION_STEP_DEG,
)
from ..geometry.rotation import normalize_rotation
from .reader import get_page_dimensions

logger = logging.getLogger(__name__)


class Viewport:
    """Display transform of one page."""

    def __init__(
        self,
        page_width: float,
        page_height: float,
        scale: float = DEFAULT_RENDER_SCALE,
        rotation: int = 0
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.scale = max(MIN_RENDER_SCALE, min(MAX_RENDER_SCALE, scale))
        self.rotation = normalize_rotation(rotation)
        self._matrix = self._build_matrix()

    @classmethod
    def for_page(
        cls,
        page: pymupdf.Page,
        scale: float = DEFAULT_RENDER_SCALE,
        rotation: int = 0
    ) -> "Viewport":
        width, height = get_page_dimensions(page)
        return cls(width, height, scale=scale, rotation=rotation)

    def _build_matrix(self) -> pymupdf.Matrix:
        s = self.scale
        w = self.page_width
        h = self.page_height

        if self.rotation == 90:
            return pymupdf.Matrix(0, s, s, 0, 0, 0)
        if self.rotation == 180:
            return pymupdf.Matrix(-s, 0, 0, s, s * w, 0)
        if self.rotation == 270:
            return pymupdf.Matrix(0, -s, -s, 0, s * h, s * w)
        # y flip: PDF user space is y-up, display is y-down
        return pymupdf.Matrix(s, 0, 0, -s, 0, s * h)

    @property
    def matrix(self) -> pymupdf.Matrix:
        return pymupdf.Matrix(self._matrix)

    def to_display(self, x: float, y: float) -> Tuple[float, float]:
        """Map a raw point to display pixels."""
        p = pymupdf.Point(x, y) * self._matrix
        return (p.x, p.y)

    def to_raw(self, x: float, y: float) -> Tuple[float, float]:
        """Map a display position back to raw coordinates."""
        p = pymupdf.Point(x, y) * ~self._matrix
        return (p.x, p.y)

    def display_size(self) -> Tuple[float, float]:
        """(width, height) of the rendered page in display pixels."""
        if self.rotation in (90, 270):
            return (self.page_height * self.scale, self.page_width * self.scale)
        return (self.page_width * self.scale, self.page_height * self.scale)

    def set_scale(self, scale: float) -> float:
        """Set the zoom level (clamped). Returns the scale in effect."""
        self.scale = max(MIN_RENDER_SCALE, min(MAX_RENDER_SCALE, scale))
        self._matrix = self._build_matrix()
        logger.debug(f"Viewport scale set to {self.scale:.2f}")
        return self.scale

    def set_rotation(self, rotation: int) -> int:
        """
        Set the view rotation.

        Raises:
            InvalidRotationError: If rotation is not a multiple of 90
        """
        self.rotation = normalize_rotation(rotation)
        self._matrix = self._build_matrix()
        logger.debug(f"Viewport rotation set to {self.rotation}")
        return self.rotation

    def rotate_clockwise(self) -> int:
        return self.set_rotation(self.rotation + ROTATION_STEP_DEG)

    def rotate_counterclockwise(self) -> int:
        return self.set_rotation(self.rotation - ROTATION_STEP_DEG)
