"""
Diagram-level edge routing.

Combines the direct router, collision resolver, channel router and
postprocessing to route every connection of a topology.
"""

from typing import List, Optional

from .channels import branch_route
from .collision import decompose_diagonals, resolve_collisions
from .geometry import pad
from .models import Point
from .postprocess import count_bends, merge_short_segments, simplify
from .router import EdgeRoute, anchor_point, default_sides, ortho_route, stub_point
from .svg import to_path
from .topology import Connection, Topology
from .tracer import RouteTrace

# Gap between a branch's end point and the top edge of the element it reaches
BRANCH_TARGET_GAP = 2


class DiagramRouter:
    """
    Route all connections of a topology.

    Connections from a container to something it contains are routed as
    hub-and-spoke branches through the container's lanes; all other
    connections are routed side to side around the boxes in between.

    Example:
        >>> router = DiagramRouter(clearance=20, corner_radius=8)
        >>> for route in router.route_all(topology):
        ...     print(route.source, route.target, route.d)
    """

    def __init__(
        self,
        clearance: float = 20,
        corner_radius: float = 8,
        merge_length: float = 16,
        stub_length: float = 20,
        obstacle_padding: float = 0,
        debug: bool = False,
    ):
        """
        Initialize the diagram router.

        Args:
            clearance: Stand-off of detour segments from obstacle edges
            corner_radius: Maximum rounding radius of rendered corners
            merge_length: Segments shorter than this are merged away
            stub_length: Length of the perpendicular exit from each box
            obstacle_padding: Extra margin added to every obstacle box
            debug: Record a RouteTrace, available through get_trace()
        """
        if clearance < 0:
            raise ValueError("clearance must not be negative")
        if corner_radius < 0:
            raise ValueError("corner_radius must not be negative")
        if merge_length < 0:
            raise ValueError("merge_length must not be negative")
        if stub_length <= 0:
            raise ValueError("stub_length must be positive")
        if obstacle_padding < 0:
            raise ValueError("obstacle_padding must not be negative")

        self.clearance = clearance
        self.corner_radius = corner_radius
        self.merge_length = merge_length
        self.stub_length = stub_length
        self.obstacle_padding = obstacle_padding
        self.debug = debug
        self._trace: Optional[RouteTrace] = None

    def get_trace(self) -> Optional[RouteTrace]:
        """Trace of the last route_all() call, if debug was enabled."""
        return self._trace

    def route_all(self, topology: Topology) -> List[EdgeRoute]:
        """
        Route every connection of a topology.

        Args:
            topology: Boxes and connections to route

        Returns:
            One EdgeRoute per connection, in connection order
        """
        self._trace = RouteTrace() if self.debug else None
        return [self.route(topology, c) for c in topology.connections]

    def route(self, topology: Topology, connection: Connection) -> EdgeRoute:
        """Route a single connection."""
        trace = self._trace
        if self.debug and trace is None:
            trace = self._trace = RouteTrace()
        if trace is not None:
            trace.edge = connection.label

        source, target = connection.source, connection.target
        if topology.is_ancestor(source, target):
            points = self._route_branch(topology, source, target, trace)
            kind = "hub"
        elif topology.is_ancestor(target, source):
            points = self._route_branch(topology, target, source, trace)[::-1]
            kind = "hub"
        else:
            points = self._route_peer(topology, connection, trace)
            kind = "peer"

        return EdgeRoute(
            source=source,
            target=target,
            points=points,
            d=to_path(points, self.corner_radius),
            bends=count_bends(points),
            kind=kind,
        )

    def _route_branch(
        self,
        topology: Topology,
        container: str,
        member: str,
        trace: Optional[RouteTrace],
    ) -> List[Point]:
        """Branch from a container's hub down to a member's top edge."""
        container_box = topology.box(container)
        grid = topology.channel_grid(container)
        member_box = topology.box(member)
        owner = topology.owning_child(container, member)

        hub = Point(container_box.center_x, grid.h0)
        target = Point(member_box.center_x, member_box.y - BRANCH_TARGET_GAP)
        siblings = [
            pad(topology.box(child), self.obstacle_padding)
            for child in topology.children(container)
            if child != owner
        ]

        points = branch_route(
            hub, target, grid, topology.box(owner), container_box, siblings
        )
        if trace is not None:
            trace.add_stage(
                "branch",
                {"container": container, "lanes": grid.h, "owner": owner},
                points,
            )
        return points

    def _route_peer(
        self,
        topology: Topology,
        connection: Connection,
        trace: Optional[RouteTrace],
    ) -> List[Point]:
        """Side-to-side route around every unrelated box."""
        src_box = topology.box(connection.source)
        dst_box = topology.box(connection.target)

        auto_src, auto_dst = default_sides(src_box, dst_box)
        src_side = connection.source_side or auto_src
        dst_side = connection.target_side or auto_dst

        src = anchor_point(src_box, src_side)
        dst = anchor_point(dst_box, dst_side)
        src_stub = stub_point(src, src_side, self.stub_length)
        dst_stub = stub_point(dst, dst_side, self.stub_length)

        direct = ortho_route(src, src_stub, src_side, dst, dst_stub, dst_side)
        obstacles = [
            pad(box, self.obstacle_padding)
            for box in topology.obstacles_for(connection.source, connection.target)
        ]
        resolved = resolve_collisions(direct, obstacles, self.clearance, trace)
        merged = merge_short_segments(resolved, self.merge_length)
        final = decompose_diagonals(simplify(merged))

        if trace is not None:
            sides = {"source_side": src_side.value, "target_side": dst_side.value}
            trace.add_stage("direct", sides, direct)
            trace.add_stage("resolved", {"obstacles": len(obstacles)}, resolved)
            trace.add_stage("merged", {"merge_length": self.merge_length}, merged)
            trace.add_stage("simplified", {"bends": count_bends(final)}, final)
        return final
