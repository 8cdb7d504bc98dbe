"""
Channel-based routing inside a container.

Hub-and-spoke edges (a container's hub to one of the elements it contains)
travel through shared lanes instead of being routed independently:
- A header lane just below the container's top edge
- One horizontal lane in each gap between rows of children
- Left, center and right vertical lanes

Branches heading to the same row therefore share coordinates and line up.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from .geometry import (
    AXIS_EPSILON,
    CHANNEL_MARGIN,
    HEADER_LANE_OFFSET,
    ROW_GAP,
    ROW_TOP_PADDING,
    round_half_up,
    segment_intersects_box,
)
from .models import Box, ChannelGrid, Point
from .postprocess import simplify


def row_index(child: Box, container: Box) -> int:
    """Row of a child inside its container, using the placement layer's pitch."""
    return round_half_up((child.y - container.y - ROW_TOP_PADDING) / (child.h + ROW_GAP))


def build_channels(container: Box, children: Iterable[Box]) -> ChannelGrid:
    """
    Derive the routing lanes of a container.

    Args:
        container: The container box.
        children: Its direct children.

    Returns:
        ChannelGrid with the header lane first, then one lane per gap
        between adjacent occupied rows.
    """
    lanes = [round_half_up(container.y + HEADER_LANE_OFFSET)]

    rows: Dict[int, List[Box]] = defaultdict(list)
    for child in children:
        rows[row_index(child, container)].append(child)

    row_keys = sorted(rows)
    for upper, lower in zip(row_keys, row_keys[1:]):
        row_bottom = max(c.bottom for c in rows[upper])
        next_row_top = min(c.y for c in rows[lower])
        lanes.append(round_half_up((row_bottom + next_row_top) / 2))

    return ChannelGrid(
        h=lanes,
        vl=round_half_up(container.x + CHANNEL_MARGIN),
        vc=round_half_up(container.x + container.w / 2),
        vr=round_half_up(container.right - CHANNEL_MARGIN),
    )


def _vertical_run_blocked(
    x: float, y_top: float, y_bottom: float, obstacles: List[Box]
) -> bool:
    return any(segment_intersects_box(x, y_top, x, y_bottom, o) for o in obstacles)


def branch_route(
    hub: Point,
    target: Point,
    grid: Optional[ChannelGrid],
    child: Optional[Box],
    container: Optional[Box],
    obstacles: Optional[Iterable[Box]] = None,
) -> List[Point]:
    """
    Route from a container's hub to a point inside it through its lanes.

    Args:
        hub: Fixed hub point, usually on the header lane.
        target: Point to reach.
        grid: The container's lanes, or None. A grid without horizontal
            lanes also gets the direct route.
        child: The direct child holding the target (selects the row).
        container: The container box, or None.
        obstacles: Sibling boxes the vertical run should avoid.

    Returns:
        Simplified orthogonal path from hub to target.
    """
    if abs(target.x - hub.x) < AXIS_EPSILON and abs(target.y - hub.y) < AXIS_EPSILON:
        return [hub, target]

    direct = [hub, Point(target.x, hub.y), target]
    if grid is None or container is None or not grid.h:
        return simplify(direct)

    row = row_index(child, container) if child is not None else 0
    if row <= 0:
        return simplify(direct)

    lane_y = grid.h[min(row, len(grid.h) - 1)]

    # Drop straight down at the target's x unless a sibling is in the way;
    # then take the nearest vertical lane that is clear
    y_top, y_bottom = min(hub.y, lane_y), max(hub.y, lane_y)
    blocking = list(obstacles or [])
    lane_x = target.x
    if _vertical_run_blocked(lane_x, y_top, y_bottom, blocking):
        candidates = sorted(grid.v, key=lambda x: abs(x - target.x))
        lane_x = candidates[0]
        for x in candidates:
            if not _vertical_run_blocked(x, y_top, y_bottom, blocking):
                lane_x = x
                break

    return simplify(
        [
            hub,
            Point(lane_x, hub.y),
            Point(lane_x, lane_y),
            Point(target.x, lane_y),
            target,
        ]
    )
