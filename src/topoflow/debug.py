"""
Debug utilities for topoflow.

This module provides tools for inspecting routed paths when a route looks
wrong or when writing targeted tests.

Key Components:
- PathInspector: Segment-level view of a point list
- path_diff: Compare two point lists point by point

Usage:
    >>> from topoflow.debug import PathInspector, path_diff
    >>> inspector = PathInspector(route.points)
    >>> inspector.diagonal_segments()
    []
    >>> print(path_diff(expected_points, route.points))
"""

from typing import Iterable, List, Tuple

from .geometry import (
    is_horizontal_segment,
    is_vertical_segment,
    points_coincide,
    segment_intersects_box,
)
from .models import Box, Point


class PathInspector:
    """
    Utilities for inspecting a routed path.

    Example:
        >>> inspector = PathInspector([Point(0, 0), Point(100, 0), Point(100, 50)])
        >>> inspector.orientations()
        ['horizontal', 'vertical']
    """

    def __init__(self, points: List[Point]):
        self.points = list(points)

    def segments(self) -> List[Tuple[Point, Point]]:
        return list(zip(self.points, self.points[1:]))

    def orientations(self) -> List[str]:
        """Orientation of each segment: horizontal, vertical or diagonal."""
        result = []
        for a, b in self.segments():
            if is_horizontal_segment(a, b):
                result.append("horizontal")
            elif is_vertical_segment(a, b):
                result.append("vertical")
            else:
                result.append("diagonal")
        return result

    def diagonal_segments(self) -> List[int]:
        """Indices of segments that are neither horizontal nor vertical."""
        return [i for i, o in enumerate(self.orientations()) if o == "diagonal"]

    def collisions(self, obstacles: Iterable[Box]) -> List[Tuple[int, Box]]:
        """(segment index, obstacle) for every segment/obstacle overlap."""
        obstacles = list(obstacles)
        hits = []
        for i, (a, b) in enumerate(self.segments()):
            for o in obstacles:
                if segment_intersects_box(a.x, a.y, b.x, b.y, o):
                    hits.append((i, o))
        return hits

    def length(self) -> float:
        """Total Manhattan length of the path."""
        return sum(abs(b.x - a.x) + abs(b.y - a.y) for a, b in self.segments())

    def describe(self) -> str:
        """One line per segment, for printing while debugging."""
        lines = []
        for i, ((a, b), o) in enumerate(zip(self.segments(), self.orientations())):
            lines.append(f"{i:3d}: ({a.x},{a.y}) -> ({b.x},{b.y}) {o}")
        return "\n".join(lines)


def path_diff(expected: List[Point], actual: List[Point]) -> str:
    """
    Compare two point lists point by point.

    Args:
        expected: The expected points
        actual: The actual points

    Returns:
        "" if the lists match within the dedupe tolerance, otherwise a
        report of the differing indices

    Example:
        >>> print(path_diff([Point(0, 0)], [Point(0, 5)]))
        Paths differ at 1 point(s):
          [0] expected (0,0), got (0,5)
    """
    lines = []
    if len(expected) != len(actual):
        lines.append(f"Length differs: expected {len(expected)}, got {len(actual)}")

    diffs = []
    for i, (e, a) in enumerate(zip(expected, actual)):
        if not points_coincide(e, a):
            diffs.append(f"  [{i}] expected ({e.x},{e.y}), got ({a.x},{a.y})")
    for i in range(len(actual), len(expected)):
        diffs.append(f"  [{i}] expected ({expected[i].x},{expected[i].y}), missing")
    for i in range(len(expected), len(actual)):
        diffs.append(f"  [{i}] unexpected ({actual[i].x},{actual[i].y})")

    if diffs:
        lines.append(f"Paths differ at {len(diffs)} point(s):")
        lines.extend(diffs)
    return "\n".join(lines)
