"""
Data models for topology edge routing.

This module contains the small value types passed between the routing
stages. They are immutable snapshots: every routing call builds new ones and
never mutates the caller's.

Classes:
    Point: A plane coordinate in the caller's unit system (pixels).
    Box: An axis-aligned rectangle (node, container or obstacle).
    Side: Which edge of a box an anchor is attached to.
    ChannelGrid: Shared routing lanes derived from a container's children.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List


class Side(str, Enum):
    """Which side of a box an anchor is on."""

    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"

    @property
    def is_horizontal(self) -> bool:
        """Left/right anchors leave the box travelling horizontally."""
        return self in (Side.LEFT, Side.RIGHT)


@dataclass(frozen=True)
class Point:
    """A point on the diagram plane."""

    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Point":
        return cls(data["x"], data["y"])


@dataclass(frozen=True)
class Box:
    """
    Axis-aligned rectangle.

    Attributes:
        x: Left edge.
        y: Top edge.
        w: Width.
        h: Height.
    """

    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def center_x(self) -> float:
        return self.x + self.w / 2

    @property
    def center_y(self) -> float:
        return self.y + self.h / 2

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "w": self.w, "h": self.h}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Box":
        return cls(data["x"], data["y"], data["w"], data["h"])


@dataclass
class ChannelGrid:
    """
    Routing lanes inside one container.

    Built once per layout pass from the container's direct children and
    shared by every hub-and-spoke route in that container, so that branches
    line up on the same coordinates.

    Attributes:
        h: Ascending horizontal lane y coordinates. h[0] is the header lane.
            Required; build_channels always yields at least the header lane.
        vl: Left margin lane x coordinate.
        vc: Center lane x coordinate.
        vr: Right margin lane x coordinate.
    """

    h: List[int]
    vl: int = 0
    vc: int = 0
    vr: int = 0

    @property
    def h0(self) -> int:
        return self.h[0]

    @property
    def v(self) -> List[int]:
        return [self.vl, self.vc, self.vr]
