"""Unit tests for the collision resolver."""

from topoflow.collision import (
    avoid_obstacles,
    decompose_diagonals,
    drop_zigzags,
    resolve_collisions,
)
from topoflow.debug import PathInspector
from topoflow.geometry import MAX_AVOIDANCE_PASSES, MAX_PATH_POINTS
from topoflow.models import Box, Point
from topoflow.tracer import RouteTrace


class TestDecomposeDiagonals:
    """Tests for decompose_diagonals()."""

    def test_diagonal_split_at_corner(self):
        """Test that a diagonal bends at (next.x, prev.y)."""
        pts = decompose_diagonals([Point(0, 0), Point(100, 100)])
        assert pts == [Point(0, 0), Point(100, 0), Point(100, 100)]

    def test_orthogonal_untouched(self):
        """Test that orthogonal paths pass through unchanged."""
        pts = [Point(0, 0), Point(100, 0), Point(100, 50)]
        assert decompose_diagonals(pts) == pts

    def test_empty(self):
        """Test empty input."""
        assert decompose_diagonals([]) == []


class TestAvoidObstacles:
    """Tests for avoid_obstacles()."""

    def test_horizontal_detour_prefers_nearer_edge(self):
        """A segment near the bottom edge detours below."""
        pts = avoid_obstacles(
            [Point(0, 110), Point(200, 110)], [Box(80, 80, 40, 40)], 10
        )
        assert Point(0, 130) in pts
        assert Point(200, 130) in pts

    def test_vertical_detour_prefers_nearer_edge(self):
        """A segment near the left edge detours left."""
        pts = avoid_obstacles([Point(85, 0), Point(85, 200)], [Box(80, 80, 40, 40)], 5)
        assert pts == [Point(85, 0), Point(75, 0), Point(75, 200), Point(85, 200)]

    def test_tie_goes_above(self):
        """Test that equidistant edges send the detour above."""
        pts = avoid_obstacles(
            [Point(0, 100), Point(200, 100)], [Box(80, 80, 40, 40)], 20
        )
        assert pts == [Point(0, 100), Point(0, 60), Point(200, 60), Point(200, 100)]

    def test_does_not_mutate_input(self):
        """Test that the caller's list is left alone."""
        original = [Point(0, 100), Point(200, 100)]
        avoid_obstacles(original, [Box(80, 80, 40, 40)], 20)
        assert original == [Point(0, 100), Point(200, 100)]

    def test_point_cap_stops_further_passes(self):
        """A path at MAX_PATH_POINTS after one detour gets no second pass."""
        # Staircase of 58 points, then a long leg crossing two stacked boxes
        pts = [Point((i // 2) * 10, ((i + 1) // 2) * 10) for i in range(58)]
        pts.append(Point(600, 290))
        lower = Box(400, 280, 40, 20)
        upper = Box(400, 250, 40, 25)
        trace = RouteTrace(edge="stairs")

        result = avoid_obstacles(pts, [lower, upper], 10, trace)

        assert len(pts) == MAX_PATH_POINTS - 1
        assert len(result) == MAX_PATH_POINTS + 1
        assert len(trace.detours) == 1
        assert trace.detours[0].coordinate == 270
        assert result[58:] == [Point(280, 270), Point(600, 270), Point(600, 290)]
        assert PathInspector(result).collisions([upper]) == [(58, upper)]


class TestDropZigzags:
    """Tests for drop_zigzags()."""

    def test_backtrack_removed(self):
        """Test that a segment doubling back is removed."""
        pts = [Point(0, 0), Point(100, 0), Point(80, 0), Point(200, 0)]
        assert drop_zigzags(pts) == [Point(0, 0), Point(200, 0)]

    def test_fixed_point(self):
        """Test that a clean path is returned unchanged."""
        pts = [Point(0, 0), Point(100, 0), Point(100, 100)]
        assert drop_zigzags(pts) == pts


class TestResolveCollisions:
    """Tests for resolve_collisions()."""

    def test_no_obstacles_simplifies(self):
        """Test cleanup of a straight path with no obstacles."""
        pts = [Point(0, 0), Point(100, 0), Point(200, 0)]
        assert len(resolve_collisions(pts, [])) == 2

    def test_detours_around_obstacle(self):
        """Test that the result clears a blocking box."""
        obstacle = Box(80, 80, 40, 40)
        result = resolve_collisions([Point(0, 100), Point(200, 100)], [obstacle])
        assert len(result) > 2
        assert PathInspector(result).collisions([obstacle]) == []

    def test_detours_keep_clearance(self):
        """Detour points stay at least clearance - 1 away from the obstacle."""
        clearance = 20
        result = resolve_collisions(
            [Point(0, 100), Point(200, 100)], [Box(80, 80, 40, 40)], clearance
        )
        for p in result:
            if 80 < p.x < 120:
                assert min(abs(p.y - 80), abs(p.y - 120)) >= clearance - 1
        for a, b in zip(result, result[1:]):
            if a.y == b.y and min(a.x, b.x) <= 120 and max(a.x, b.x) >= 80:
                assert min(abs(a.y - 80), abs(a.y - 120)) >= clearance - 1

    def test_zigzag_removed(self):
        """Test zigzag removal through the full resolver."""
        pts = [Point(0, 0), Point(100, 0), Point(80, 0), Point(200, 0)]
        assert len(resolve_collisions(pts, [])) <= 2

    def test_diagonal_decomposed(self):
        """Test that diagonal input comes out orthogonal."""
        result = resolve_collisions(
            [Point(0, 0), Point(100, 100)], [Box(40, 40, 20, 20)], 20
        )
        assert PathInspector(result).diagonal_segments() == []

    def test_no_diagonal_left_after_dedupe(self):
        """Dropping a near-duplicate between two off-axis points is re-split."""
        result = resolve_collisions([Point(0, 0), Point(0.5, 0.5), Point(100, 1.4)], [])
        assert result == [Point(0, 0), Point(100, 0), Point(100, 1.4)]
        assert PathInspector(result).diagonal_segments() == []

    def test_anchors_preserved(self):
        """Test that first and last points are kept exactly."""
        start, end = Point(3.25, 97.5), Point(211.75, 140.5)
        obstacles = [Box(80, 80, 40, 40), Box(150, 60, 30, 100)]
        result = resolve_collisions([start, end], obstacles, 10)
        assert result[0] == start
        assert result[-1] == end

    def test_several_obstacles_orthogonal(self):
        """Test a row of three obstacles on one segment."""
        obstacles = [Box(50, -20, 20, 40), Box(150, -20, 20, 40), Box(250, -20, 20, 40)]
        result = resolve_collisions([Point(0, 0), Point(320, 0)], obstacles, 10)
        assert PathInspector(result).diagonal_segments() == []
        assert PathInspector(result).collisions(obstacles) == []

    def test_zero_clearance_falls_back_to_default(self):
        """Test that clearance 0 uses the default of 1."""
        result = resolve_collisions(
            [Point(0, 100), Point(200, 100)], [Box(80, 80, 40, 40)], 0
        )
        assert Point(0, 79) in result

    def test_unresolvable_returns_partial_result(self):
        """Endpoints inside an obstacle exhaust the bounds without raising."""
        obstacle = Box(-50, -50, 200, 100)
        trace = RouteTrace(edge="inside")
        result = resolve_collisions([Point(0, 0), Point(100, 0)], [obstacle], 1, trace)
        assert result[0] == Point(0, 0)
        assert result[-1] == Point(100, 0)
        assert len(result) <= MAX_PATH_POINTS + 1
        assert PathInspector(result).diagonal_segments() == []
        assert len(trace.detours) == MAX_AVOIDANCE_PASSES
        assert trace.unresolved == ["inside"]

    def test_trace_records_detour(self):
        """Test the detour record written to a trace."""
        trace = RouteTrace(edge="a->b")
        resolve_collisions(
            [Point(0, 100), Point(200, 100)], [Box(80, 80, 40, 40)], 20, trace
        )
        assert len(trace.detours) == 1
        detour = trace.detours[0]
        assert detour.axis == "horizontal"
        assert detour.coordinate == 60
        assert detour.segment_index == 0
        assert trace.unresolved == []

    def test_empty_path(self):
        """Test empty input."""
        assert resolve_collisions([], [Box(0, 0, 10, 10)]) == []

    def test_obstacles_not_modified(self):
        """Test that the obstacle list is left alone."""
        obstacles = [Box(80, 80, 40, 40)]
        resolve_collisions([Point(0, 100), Point(200, 100)], obstacles, 20)
        assert obstacles == [Box(80, 80, 40, 40)]
