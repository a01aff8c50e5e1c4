"""
UnPlotter - Master Constants Reference

Default values for the calibration engine and its collaborators.
Any of the tunable values below can be overridden from settings.yaml
(see config.py); the ones marked FIXED cannot.
"""

# =============================================================================
# ROTATION CONSTANTS
# =============================================================================

# FIXED: the only view rotations the engine understands (degrees clockwise)
VALID_ROTATIONS = (0, 90, 180, 270)

# Degrees in a full turn
FULL_TURN_DEG = 360

# Rotation step used by rotate-clockwise / rotate-counterclockwise
ROTATION_STEP_DEG = 90

# =============================================================================
# HIT TEST CONSTANTS
# =============================================================================

# Pointer-to-curve distance below which a curve counts as hovered.
# Measured in the pointer's coordinate space (display pixels in practice),
# so the tolerance in document units shrinks as the view zooms in.
HIT_TEST_THRESHOLD_PX = 25.0

# FIXED: a curve needs at least this many points to be hit-tested or
# used as an axis reference
MIN_CURVE_POINTS = 2

# =============================================================================
# RENDERING CONSTANTS
# =============================================================================

# Default display scale (1.0 = one display pixel per PDF point)
DEFAULT_RENDER_SCALE = 1.0

# Zoom limits applied by Viewport.set_scale
MIN_RENDER_SCALE = 0.1
MAX_RENDER_SCALE = 10.0

# =============================================================================
# CURVE EXTRACTION CONSTANTS
# =============================================================================

# Line segments used to flatten one cubic Bezier item
DEFAULT_BEZIER_STEPS = 16

# Two path points closer than this (PDF points) are treated as joined
PATH_JOIN_TOLERANCE_POINTS = 0.01

# =============================================================================
# EXPORT CONSTANTS
# =============================================================================

# Decimal places written to CSV / JSON output
EXPORT_FLOAT_PRECISION = 6

# Suffix appended to the input file stem for output files
EXPORT_FILENAME_SUFFIX = "_data"

# Supported export formats
EXPORT_FORMATS = ("csv", "json")
