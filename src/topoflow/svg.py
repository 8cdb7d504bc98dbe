"""
Path descriptor rendering.

Turns an orthogonal point list into the minimal drawing grammar consumed by
the rendering surface: ``M x,y`` (move), ``L x,y`` (line) and
``Q cx,cy x,y`` (quadratic curve). Corners are rounded with a quadratic
curve whose control point is the corner itself.
"""

import math
from typing import List

from .models import Point


def format_number(value: float) -> str:
    """Format a coordinate, dropping the fractional part of integral values."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _xy(x: float, y: float) -> str:
    return f"{format_number(x)},{format_number(y)}"


def to_path(points: List[Point], corner_radius: float) -> str:
    """
    Render points as a path descriptor with rounded corners.

    Each interior corner is cut back by min(corner_radius, half of each
    adjacent segment) and bridged with a quadratic curve. Corners next to a
    zero-length segment are passed through with a straight line.

    Args:
        points: Path to render.
        corner_radius: Maximum rounding radius.

    Returns:
        Path descriptor, or "" for fewer than two points.
    """
    if len(points) < 2:
        return ""

    first = points[0]
    parts = [f"M{_xy(first.x, first.y)}"]

    for i in range(1, len(points) - 1):
        prev, corner, nxt = points[i - 1], points[i], points[i + 1]
        d_in = math.hypot(corner.x - prev.x, corner.y - prev.y)
        d_out = math.hypot(nxt.x - corner.x, nxt.y - corner.y)
        if d_in == 0 or d_out == 0:
            parts.append(f"L{_xy(corner.x, corner.y)}")
            continue

        r = min(corner_radius, d_in / 2, d_out / 2)
        cut_in_x = corner.x - (corner.x - prev.x) / d_in * r
        cut_in_y = corner.y - (corner.y - prev.y) / d_in * r
        cut_out_x = corner.x + (nxt.x - corner.x) / d_out * r
        cut_out_y = corner.y + (nxt.y - corner.y) / d_out * r
        parts.append(f"L{_xy(cut_in_x, cut_in_y)}")
        parts.append(f"Q{_xy(corner.x, corner.y)} {_xy(cut_out_x, cut_out_y)}")

    last = points[-1]
    parts.append(f"L{_xy(last.x, last.y)}")
    return " ".join(parts)
