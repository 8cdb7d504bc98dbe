"""
Obstacle collision resolver.

Takes a candidate path (possibly with diagonal segments) and greedily
detours it around obstacle boxes:
1. Diagonal segments are split into a horizontal and a vertical leg
2. Segments hitting an obstacle get a two-point detour past its nearer edge
3. The result is cleaned (duplicates, collinear points, zigzags)

The avoidance loop is bounded by MAX_AVOIDANCE_PASSES and MAX_PATH_POINTS.
When the bounds run out the path is returned as it stands, which may still
overlap an obstacle.
"""

from typing import Iterable, List, Optional

from .geometry import (
    DEFAULT_CLEARANCE,
    MAX_AVOIDANCE_PASSES,
    MAX_PATH_POINTS,
    is_horizontal_segment,
    is_orthogonal,
    is_vertical_segment,
    segment_intersects_box,
)
from .models import Box, Point
from .postprocess import dedupe_points, drop_collinear
from .tracer import RouteTrace


def decompose_diagonals(points: List[Point]) -> List[Point]:
    """Split each diagonal segment at the corner (next.x, prev.y)."""
    if not points:
        return []
    work = [points[0]]
    for cur in points[1:]:
        prev = work[-1]
        if not is_orthogonal(prev, cur):
            work.append(Point(cur.x, prev.y))
        work.append(cur)
    return work


def _detour(
    a: Point, b: Point, obstacle: Box, clearance: float
) -> Optional[List[Point]]:
    """Two detour points taking segment a-b past the nearer side of obstacle."""
    if is_horizontal_segment(a, b):
        above = obstacle.y - clearance
        below = obstacle.bottom + clearance
        y = above if abs(a.y - above) <= abs(a.y - below) else below
        return [Point(a.x, y), Point(b.x, y)]
    if is_vertical_segment(a, b):
        left = obstacle.x - clearance
        right = obstacle.right + clearance
        x = left if abs(a.x - left) <= abs(a.x - right) else right
        return [Point(x, a.y), Point(x, b.y)]
    return None


def _first_collision(points: List[Point], obstacles: List[Box]):
    """Return (segment index, obstacle) of the first hit, or None."""
    for i in range(len(points) - 1):
        a, b = points[i], points[i + 1]
        for obstacle in obstacles:
            if segment_intersects_box(a.x, a.y, b.x, b.y, obstacle):
                return i, obstacle
    return None


def avoid_obstacles(
    points: List[Point],
    obstacles: List[Box],
    clearance: float,
    trace: Optional[RouteTrace] = None,
) -> List[Point]:
    """
    Splice detours into points until no segment hits an obstacle.

    Each pass fixes only the first collision found, then rescans the whole
    path. Stops after MAX_AVOIDANCE_PASSES passes or once the path reaches
    MAX_PATH_POINTS points.
    """
    pts = list(points)
    for pass_index in range(MAX_AVOIDANCE_PASSES):
        if len(pts) >= MAX_PATH_POINTS:
            break
        hit = _first_collision(pts, obstacles)
        if hit is None:
            break
        i, obstacle = hit
        a, b = pts[i], pts[i + 1]
        detour = _detour(a, b, obstacle, clearance)
        if detour is None:
            break
        pts[i + 1:i + 1] = detour
        if trace is not None:
            horizontal = is_horizontal_segment(a, b)
            trace.add_detour(
                pass_index,
                i,
                "horizontal" if horizontal else "vertical",
                detour[0].y if horizontal else detour[0].x,
                obstacle,
            )
    return pts


def drop_zigzags(points: List[Point]) -> List[Point]:
    """Repeat collinear removal until the point count stops shrinking."""
    out = list(points)
    while True:
        before = len(out)
        out = dedupe_points(drop_collinear(out))
        if len(out) >= before:
            return out


def resolve_collisions(
    points: List[Point],
    obstacles: Iterable[Box],
    clearance: float = DEFAULT_CLEARANCE,
    trace: Optional[RouteTrace] = None,
) -> List[Point]:
    """
    Detour a path around obstacles and clean the result.

    Args:
        points: Candidate path. Diagonal segments are allowed.
        obstacles: Boxes to keep clear of. Not modified.
        clearance: Stand-off from an obstacle's edge for detour segments.
            A falsy value falls back to DEFAULT_CLEARANCE.
        trace: Optional trace receiving detour records, and an unresolved
            flag when the bounds ran out with a collision left.

    Returns:
        New orthogonal path with the same first and last points. Best
        effort: residual overlap is possible when the bounds are exhausted.
    """
    if not points:
        return []

    obstacles = list(obstacles)
    clearance = clearance or DEFAULT_CLEARANCE

    pts = decompose_diagonals(points)
    pts = avoid_obstacles(pts, obstacles, clearance, trace)
    pts = dedupe_points(pts)
    pts = drop_collinear(pts)
    pts = drop_zigzags(pts)
    # Dropping a near-duplicate can join two sub-unit offsets into a diagonal
    pts = decompose_diagonals(pts)

    if trace is not None and _first_collision(pts, obstacles) is not None:
        trace.mark_unresolved()
    return pts
