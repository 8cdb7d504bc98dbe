"""
Path postprocessing for routed edges.

Cleans up point lists produced by the routers before they are rendered:
- Duplicate and collinear point removal (simplify)
- Collapsing of near-zero-length segments without creating diagonals
- Bend counting, used as a route quality metric
"""

import math
from typing import List

from .geometry import AXIS_EPSILON, POINT_EPSILON, points_coincide
from .models import Point


def dedupe_points(points: List[Point]) -> List[Point]:
    """
    Drop every point within POINT_EPSILON of its predecessor.

    The first point is always kept. The last point is the caller's anchor,
    so when it coincides with the point before it, that earlier point is
    dropped instead.
    """
    if not points:
        return []

    kept = [points[0]]
    last_dropped = False
    for point in points[1:]:
        last_dropped = points_coincide(point, kept[-1])
        if not last_dropped:
            kept.append(point)

    if last_dropped and len(kept) > 1:
        kept[-1] = points[-1]
    return kept


def _shares_axis(a: Point, b: Point, c: Point) -> bool:
    same_x = abs(a.x - b.x) < POINT_EPSILON and abs(b.x - c.x) < POINT_EPSILON
    same_y = abs(a.y - b.y) < POINT_EPSILON and abs(b.y - c.y) < POINT_EPSILON
    return same_x or same_y


def drop_collinear(points: List[Point]) -> List[Point]:
    """
    Drop middle points that lie on one axis with both neighbours.

    The left neighbour is the last point kept, so runs of collinear points
    collapse in a single pass. A middle point whose segments backtrack along
    the same axis is dropped as well.
    """
    if len(points) <= 2:
        return list(points)

    kept = [points[0]]
    for i in range(1, len(points) - 1):
        if not _shares_axis(kept[-1], points[i], points[i + 1]):
            kept.append(points[i])
    kept.append(points[-1])
    return kept


def simplify(points: List[Point]) -> List[Point]:
    """
    Remove duplicate and collinear points.

    Dedupe and collinear removal are repeated until the point count stops
    shrinking, so simplify(simplify(p)) == simplify(p). Diagonals are left
    alone: merging two points that were each slightly off-axis can leave one
    between their neighbours. Callers needing an orthogonal path split it
    again with collision.decompose_diagonals.

    Args:
        points: Path to clean up.

    Returns:
        New list of points; the input is not modified.
    """
    result = dedupe_points(points)
    while True:
        before = len(result)
        result = dedupe_points(drop_collinear(result))
        if len(result) >= before:
            return result


def merge_short_segments(points: List[Point], min_length: float) -> List[Point]:
    """
    Collapse segments shorter than min_length.

    An interior point closer than min_length to the last kept point is
    dropped, unless the segment from the last kept point to the next point
    would then be diagonal. First and last points are always kept.
    """
    if len(points) <= 2:
        return list(points)

    out = [points[0]]
    for i in range(1, len(points) - 1):
        prev = out[-1]
        cur = points[i]
        nxt = points[i + 1]
        if math.hypot(cur.x - prev.x, cur.y - prev.y) >= min_length:
            out.append(cur)
            continue
        would_be_diagonal = (
            abs(prev.x - nxt.x) > POINT_EPSILON and abs(prev.y - nxt.y) > POINT_EPSILON
        )
        if would_be_diagonal:
            out.append(cur)
    out.append(points[-1])
    return out


def count_bends(points: List[Point]) -> int:
    """Count interior points where travel switches between horizontal and vertical."""
    bends = 0
    for i in range(1, len(points) - 1):
        was_horizontal = abs(points[i - 1].y - points[i].y) < AXIS_EPSILON
        now_horizontal = abs(points[i].y - points[i + 1].y) < AXIS_EPSILON
        if was_horizontal != now_horizontal:
            bends += 1
    return bends
