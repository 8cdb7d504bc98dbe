"""
Geometry primitives for orthogonal edge routing.

Provides box padding, the axis-aligned segment/box overlap test, side
classification and the tolerance helpers every routing stage shares.
"""

import math
from typing import Union

from .models import Box, Point, Side

# =============================================================================
# ROUTING CONFIGURATION - Tolerances, bounds and layout constants
# =============================================================================

# --- Tolerances (in pixels) ---

# Two points closer than this on both axes are the same point (dedupe,
# collinearity checks)
POINT_EPSILON = 0.5

# A segment whose endpoints differ by less than this on one axis is
# horizontal/vertical (orthogonality and side checks)
AXIS_EPSILON = 1

# --- Obstacle avoidance ---

# Stand-off from an obstacle boundary when no clearance is given
DEFAULT_CLEARANCE = 1

# Maximum number of detour passes over a path
MAX_AVOIDANCE_PASSES = 12

# Detours stop once a path has this many points
MAX_PATH_POINTS = 60

# --- Container layout constants (shared with the placement layer) ---

# Offset of the header lane below a container's top edge
HEADER_LANE_OFFSET = 38

# Padding between a container's top edge and its first row of children
ROW_TOP_PADDING = 70

# Vertical gap between rows of children
ROW_GAP = 40

# Inset of the left/right vertical lanes from the container's sides
CHANNEL_MARGIN = 20

# =============================================================================


def pad(box: Box, margin: float) -> Box:
    """Return a copy of box grown by margin on all four sides."""
    return Box(box.x - margin, box.y - margin, box.w + 2 * margin, box.h + 2 * margin)


def segment_intersects_box(
    x1: float, y1: float, x2: float, y2: float, box: Box
) -> bool:
    """
    Check whether a segment's bounding box overlaps a box.

    Exact for the horizontal and vertical segments the router produces.
    Touching edges count as an overlap.
    """
    return not (
        max(x1, x2) < box.x
        or min(x1, x2) > box.right
        or max(y1, y2) < box.y
        or min(y1, y2) > box.bottom
    )


def is_horizontal_side(side: Union[Side, str]) -> bool:
    """True for left/right anchors."""
    return Side(side).is_horizontal


def is_horizontal_segment(a: Point, b: Point) -> bool:
    return abs(a.y - b.y) < AXIS_EPSILON


def is_vertical_segment(a: Point, b: Point) -> bool:
    return abs(a.x - b.x) < AXIS_EPSILON


def is_orthogonal(a: Point, b: Point) -> bool:
    return is_horizontal_segment(a, b) or is_vertical_segment(a, b)


def points_coincide(a: Point, b: Point, epsilon: float = POINT_EPSILON) -> bool:
    """True if a and b are within epsilon of each other on both axes."""
    return abs(a.x - b.x) <= epsilon and abs(a.y - b.y) <= epsilon


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return int(math.floor(value + 0.5))
