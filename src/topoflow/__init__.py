"""
topoflow - Orthogonal edge routing for topology diagrams

A Python library that routes axis-aligned, obstacle-avoiding edges between
nested boxes and renders them as smooth path descriptors.

Example:
    >>> from topoflow import Box, DiagramRouter, Topology
    >>> topo = Topology()
    >>> topo.add_node("web", Box(0, 0, 120, 60))
    >>> topo.add_node("db", Box(300, 200, 120, 60))
    >>> topo.connect("web", "db")
    >>> route = DiagramRouter().route_all(topo)[0]
    >>> print(route.d)

Debug Mode Example:
    >>> router = DiagramRouter(debug=True)
    >>> routes = router.route_all(topo)
    >>> print(router.get_trace().summary())
"""

from .channels import branch_route, build_channels, row_index
from .collision import resolve_collisions
from .debug import PathInspector, path_diff
from .diagram import DiagramRouter
from .geometry import is_horizontal_side, pad, segment_intersects_box
from .models import Box, ChannelGrid, Point, Side
from .postprocess import count_bends, merge_short_segments, simplify
from .router import EdgeRoute, anchor_point, default_sides, ortho_route, stub_point
from .svg import to_path
from .topology import Connection, Topology, TopologyError
from .tracer import DetourRecord, RouteStage, RouteTrace

__version__ = "0.3.0"

__all__ = [
    # Main API
    "DiagramRouter",
    "Topology",
    "TopologyError",
    "Connection",
    "EdgeRoute",
    # Models
    "Point",
    "Box",
    "Side",
    "ChannelGrid",
    # Geometry
    "pad",
    "segment_intersects_box",
    "is_horizontal_side",
    # Routers
    "ortho_route",
    "anchor_point",
    "stub_point",
    "default_sides",
    "resolve_collisions",
    "build_channels",
    "branch_route",
    "row_index",
    # Postprocessing
    "simplify",
    "merge_short_segments",
    "count_bends",
    "to_path",
    # Debug/Tracing (for development and debugging)
    "RouteTrace",
    "RouteStage",
    "DetourRecord",
    "PathInspector",
    "path_diff",
]
