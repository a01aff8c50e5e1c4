#!/usr/bin/env python
"""
Rotation Tests

Tests for:
- Rotation validation and wrap-around
- Raw -> axis space mapping for each rotation
- Inverse mapping
"""

import math
import sys
from pathlib import Path

# Add project root to path so we can import unplotter modules
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from unplotter.errors import ErrorKind, InvalidRotationError
from unplotter.geometry import (
    normalize_rotation,
    normalize,
    denormalize,
    normalize_points,
)


class TestNormalizeRotation:
    """Tests for rotation validation."""

    def test_valid_rotations(self):
        """Test the four quarter turns pass through unchanged."""
        for rotation in (0, 90, 180, 270):
            assert normalize_rotation(rotation) == rotation
        print("  [PASS] valid rotations")

    def test_wrap_around(self):
        """Test rotations are reduced modulo 360."""
        assert normalize_rotation(360) == 0
        assert normalize_rotation(450) == 90
        assert normalize_rotation(-90) == 270, "-90 should wrap to 270"
        assert normalize_rotation(-180) == 180
        assert normalize_rotation(90.0) == 90
        print("  [PASS] rotation wrap-around")

    def test_invalid_rotations(self):
        """Test non-quarter-turn rotations are rejected."""
        for bad in (45, 89, 90.5, -45, float("nan"), float("inf"), "abc", None):
            with pytest.raises(InvalidRotationError) as exc_info:
                normalize_rotation(bad)
            assert exc_info.value.kind == ErrorKind.INVALID_ROTATION
        print("  [PASS] invalid rotations rejected")


class TestNormalize:
    """Tests for raw -> axis space mapping."""

    def test_rotation_0_identity(self):
        """Test rotation 0 leaves points unchanged."""
        assert normalize(3.0, 4.0, 0) == (3.0, 4.0)
        print("  [PASS] rotation 0")

    def test_rotation_90(self):
        """Test rotation 90 maps (x, y) -> (y, -x)."""
        assert normalize(3.0, 4.0, 90) == (4.0, -3.0)
        print("  [PASS] rotation 90")

    def test_rotation_180(self):
        """Test rotation 180 maps (x, y) -> (-x, -y)."""
        assert normalize(3.0, 4.0, 180) == (-3.0, -4.0)
        print("  [PASS] rotation 180")

    def test_rotation_270(self):
        """Test rotation 270 maps (x, y) -> (-y, x)."""
        assert normalize(3.0, 4.0, 270) == (-4.0, 3.0)
        print("  [PASS] rotation 270")

    def test_negative_rotation_matches_wrapped(self):
        """Test -90 behaves exactly like 270."""
        assert normalize(3.0, 4.0, -90) == normalize(3.0, 4.0, 270)
        print("  [PASS] -90 == 270")

    def test_invalid_rotation_raises(self):
        """Test an invalid rotation is reported, not silently treated as 0."""
        with pytest.raises(InvalidRotationError):
            normalize(1.0, 2.0, 45)
        print("  [PASS] normalize rejects 45")

    def test_preserves_distances(self):
        """Test every mapping is a rigid rotation."""
        a, b = (10.0, 20.0), (40.0, -5.0)
        expected = math.dist(a, b)
        for rotation in (0, 90, 180, 270):
            na = normalize(*a, rotation)
            nb = normalize(*b, rotation)
            assert math.isclose(math.dist(na, nb), expected)
        print("  [PASS] distances preserved")


class TestDenormalize:
    """Tests for the inverse mapping."""

    def test_inverse(self):
        """Test denormalize(normalize(p)) == p for every rotation."""
        for rotation in (0, 90, 180, 270):
            for point in [(0.0, 0.0), (3.0, 4.0), (-12.5, 7.25)]:
                axis_point = normalize(*point, rotation)
                assert denormalize(*axis_point, rotation) == point, \
                    f"Round trip failed at rotation {rotation} for {point}"
        print("  [PASS] denormalize inverts normalize")

    def test_normalize_points(self):
        """Test sequence mapping."""
        result = normalize_points([(1.0, 2.0), (3.0, 4.0)], 180)
        assert result == [(-1.0, -2.0), (-3.0, -4.0)]
        print("  [PASS] normalize_points")
