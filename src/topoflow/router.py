"""
Direct orthogonal routing between two anchors.

Builds the obstacle-unaware candidate path for a peer-to-peer edge:
- Anchor points on box sides
- Stub points just outside the box, so every route leaves perpendicular
- A 4, 5 or 6 point orthogonal path between the two stubs
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple, Union

from .geometry import AXIS_EPSILON
from .models import Box, Point, Side

SideLike = Union[Side, str]


@dataclass
class EdgeRoute:
    """
    A routed edge between two nodes.

    Attributes:
        source: Source node name.
        target: Target node name.
        points: Final orthogonal point list, anchors included.
        d: Path descriptor for the rendering surface.
        bends: Number of bends in points.
        kind: "peer" for side-to-side edges, "hub" for container branches.
    """

    source: str
    target: str
    points: List[Point] = field(default_factory=list)
    d: str = ""
    bends: int = 0
    kind: str = "peer"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "points": [p.to_dict() for p in self.points],
            "d": self.d,
            "bends": self.bends,
            "kind": self.kind,
        }


def anchor_point(box: Box, side: SideLike, offset: float = 0.5) -> Point:
    """
    Connection point on one side of a box.

    Args:
        box: The box.
        side: Which side to attach to.
        offset: Fraction along the side, from its top/left end.
    """
    side = Side(side)
    if side == Side.TOP:
        return Point(box.x + box.w * offset, box.y)
    if side == Side.BOTTOM:
        return Point(box.x + box.w * offset, box.bottom)
    if side == Side.LEFT:
        return Point(box.x, box.y + box.h * offset)
    return Point(box.right, box.y + box.h * offset)


def stub_point(anchor: Point, side: SideLike, length: float) -> Point:
    """Point length units outside the box, in the direction side faces."""
    side = Side(side)
    if side == Side.TOP:
        return Point(anchor.x, anchor.y - length)
    if side == Side.BOTTOM:
        return Point(anchor.x, anchor.y + length)
    if side == Side.LEFT:
        return Point(anchor.x - length, anchor.y)
    return Point(anchor.x + length, anchor.y)


def default_sides(src_box: Box, dst_box: Box) -> Tuple[Side, Side]:
    """
    Pick attachment sides from the relative placement of two boxes.

    Boxes that are stacked connect bottom-to-top (or top-to-bottom for an
    upward edge); otherwise they connect through their facing sides.
    """
    if dst_box.y >= src_box.bottom:
        return Side.BOTTOM, Side.TOP
    if dst_box.bottom <= src_box.y:
        return Side.TOP, Side.BOTTOM
    if dst_box.center_x >= src_box.center_x:
        return Side.RIGHT, Side.LEFT
    return Side.LEFT, Side.RIGHT


def ortho_route(
    src: Point,
    src_stub: Point,
    src_side: SideLike,
    dst: Point,
    dst_stub: Point,
    dst_side: SideLike,
) -> List[Point]:
    """
    Orthogonal candidate path between two anchors.

    Args:
        src: Source anchor.
        src_stub: Point just outside the source box.
        src_side: Side the source anchor is on.
        dst: Destination anchor.
        dst_stub: Point just outside the destination box.
        dst_side: Side the destination anchor is on.

    Returns:
        [src, src_stub, ..., dst_stub, dst]. Obstacles are not considered.
    """
    src_horizontal = Side(src_side).is_horizontal
    dst_horizontal = Side(dst_side).is_horizontal

    if src_horizontal and dst_horizontal:
        if abs(src_stub.y - dst_stub.y) < AXIS_EPSILON:
            return [src, src_stub, dst_stub, dst]
        mid_x = (src_stub.x + dst_stub.x) / 2
        return [
            src,
            src_stub,
            Point(mid_x, src_stub.y),
            Point(mid_x, dst_stub.y),
            dst_stub,
            dst,
        ]

    if not src_horizontal and not dst_horizontal:
        if abs(src_stub.x - dst_stub.x) < AXIS_EPSILON:
            return [src, src_stub, dst_stub, dst]
        mid_y = (src_stub.y + dst_stub.y) / 2
        return [
            src,
            src_stub,
            Point(src_stub.x, mid_y),
            Point(dst_stub.x, mid_y),
            dst_stub,
            dst,
        ]

    # Mixed axes: a single bend between the stubs
    if src_horizontal:
        return [src, src_stub, Point(dst_stub.x, src_stub.y), dst_stub, dst]
    return [src, src_stub, Point(src_stub.x, dst_stub.y), dst_stub, dst]
