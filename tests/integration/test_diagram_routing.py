"""
Integration tests for routing whole diagrams.

These tests build realistic two-container topologies and check the
properties every routed edge must have, regardless of the exact path.
"""

import json

import pytest

from topoflow import (
    Box,
    DiagramRouter,
    PathInspector,
    Point,
    Topology,
    count_bends,
    to_path,
)


def _container(topo, name, x, y):
    """Add a 660x400 container with four children named <name>0..<name>3."""
    topo.add_node(name, Box(x, y, 660, 400))
    for row in range(2):
        for col in range(2):
            topo.add_node(
                f"{name}{row * 2 + col}",
                Box(x + 30 + col * 320, y + 70 + row * 180, 280, 140),
                parent=name,
            )


@pytest.fixture
def two_vnets():
    topo = Topology()
    _container(topo, "hub", 0, 0)
    _container(topo, "spoke", 800, 0)
    for i in range(4):
        topo.connect("hub", f"hub{i}")
        topo.connect("spoke", f"spoke{i}")
    topo.connect("hub0", "spoke3")
    topo.connect("hub0", "hub3", "right", "left")
    topo.connect("hub2", "spoke1", "right", "left")
    topo.connect("hub1", "hub2", "bottom", "top")
    topo.connect("hub", "spoke", "right", "left")
    return topo


class TestDiagramRouting:
    """End-to-end routing of a two-container diagram."""

    def test_one_route_per_connection(self, two_vnets):
        """Test one route per connection, in order."""
        routes = DiagramRouter().route_all(two_vnets)
        assert len(routes) == len(two_vnets.connections)
        assert [(r.source, r.target) for r in routes] == [
            (c.source, c.target) for c in two_vnets.connections
        ]

    def test_routes_are_orthogonal(self, two_vnets):
        """Test that every route is orthogonal."""
        for route in DiagramRouter().route_all(two_vnets):
            assert PathInspector(route.points).diagonal_segments() == [], route

    def test_peer_routes_avoid_unrelated_boxes(self, two_vnets):
        """Test that peer routes clear unrelated boxes."""
        for conn, route in zip(
            two_vnets.connections, DiagramRouter().route_all(two_vnets)
        ):
            if route.kind != "peer":
                continue
            obstacles = two_vnets.obstacles_for(conn.source, conn.target)
            assert PathInspector(route.points).collisions(obstacles) == [], route

    def test_hub_routes_share_lanes(self, two_vnets):
        """Test that hub branches run on the grid's lanes."""
        routes = [
            r for r in DiagramRouter().route_all(two_vnets)
            if r.kind == "hub" and r.source == "hub"
        ]
        grid = two_vnets.channel_grid("hub")
        assert len(routes) == 4
        for route in routes:
            assert route.points[0] == Point(330, grid.h0)
            assert all(p.y in grid.h for p in route.points[:-1])

    def test_descriptor_matches_points(self, two_vnets):
        """Test route descriptors and bend counts."""
        router = DiagramRouter(corner_radius=6)
        for route in router.route_all(two_vnets):
            assert route.d == to_path(route.points, 6)
            assert route.bends == count_bends(route.points)
            assert route.d.startswith("M")

    def test_no_unresolved_edges(self, two_vnets):
        """Test that no edge is left unresolved."""
        router = DiagramRouter(debug=True)
        router.route_all(two_vnets)
        trace = router.get_trace()
        assert trace.unresolved == []
        assert "Edges routed: 13" in trace.summary()

    def test_routes_serialise_to_json(self, two_vnets):
        """Test JSON serialisation of routes."""
        payload = [r.to_dict() for r in DiagramRouter().route_all(two_vnets)]
        restored = json.loads(json.dumps(payload))
        assert restored[0]["points"][0] == {"x": 330, "y": 38}

    def test_repeated_runs_are_identical(self, two_vnets):
        """Test that routing is deterministic."""
        router = DiagramRouter()
        first = [r.points for r in router.route_all(two_vnets)]
        second = [r.points for r in router.route_all(two_vnets)]
        assert first == second


class TestFromLayoutData:
    """Routing a topology described as plain data."""

    def test_plain_data_round_trip(self):
        """Test routing a topology loaded from plain data."""
        topo = Topology.from_dict(
            {
                "nodes": [
                    {"name": "a", "box": {"x": 0, "y": 0, "w": 100, "h": 50}},
                    {"name": "b", "box": {"x": 400, "y": 0, "w": 100, "h": 50}},
                    {"name": "c", "box": {"x": 200, "y": -10, "w": 60, "h": 70}},
                ],
                "connections": [
                    {"source": "a", "target": "b",
                     "source_side": "right", "target_side": "left"}
                ],
            }
        )
        route = DiagramRouter().route_all(topo)[0]
        assert route.points[0] == Point(100, 25)
        assert route.points[-1] == Point(400, 25)
        assert PathInspector(route.points).collisions([topo.box("c")]) == []
