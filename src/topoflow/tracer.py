"""
Debug tracing infrastructure for topoflow.

This module provides data structures for capturing detailed traces of the
routing pipeline. When debug mode is enabled, the diagram router records the
point list after every stage of processing and every detour the collision
resolver inserts.

This is primarily useful for:
1. Debugging odd-looking routes (seeing which obstacle caused which detour)
2. Spotting routes the resolver could not fully clear within its bounds
3. Writing targeted tests (verifying specific routing decisions)

Usage:
    >>> router = DiagramRouter(debug=True)
    >>> routes = router.route_all(topology)
    >>> trace = router.get_trace()
    >>> print(trace.summary())
    >>> trace.dump_to_file("route_trace.txt")

The trace captures:
- Pipeline stages per edge (direct, resolved, merged, simplified, ...)
- Point list snapshots at each stage
- Every detour with the segment, obstacle and chosen coordinate
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .models import Box, Point


@dataclass
class DetourRecord:
    """
    Record of a single detour spliced into a path.

    Attributes:
        edge: Label of the edge being routed (e.g. "web->db")
        pass_index: Avoidance pass in which the detour was inserted
        segment_index: Index of the segment's first point
        axis: "horizontal" or "vertical" (orientation of the hit segment)
        coordinate: The y (horizontal) or x (vertical) of the detour
        obstacle: The obstacle that was hit
    """

    edge: str
    pass_index: int
    segment_index: int
    axis: str
    coordinate: float
    obstacle: Box

    def __str__(self) -> str:
        o = self.obstacle
        name = "y" if self.axis == "horizontal" else "x"
        return (
            f"[{self.edge}] pass {self.pass_index}: {self.axis} segment "
            f"{self.segment_index} hit ({o.x},{o.y},{o.w}x{o.h}) -> "
            f"{name}={self.coordinate}"
        )


@dataclass
class RouteStage:
    """
    Snapshot of a path at a pipeline stage.

    The routing pipeline for a peer edge has these stages:
    1. direct - Orthogonal candidate from the direct router
    2. resolved - After obstacle avoidance and cleanup
    3. merged - After short-segment merging
    4. simplified - Final point list

    Hub edges record a single "branch" stage.

    Attributes:
        name: Name of this pipeline stage
        edge: Label of the edge being routed
        data: Dictionary of relevant data at this stage
        points: Optional point list at this stage
    """

    name: str
    edge: str
    data: Dict[str, Any]
    points: Optional[List[Point]] = None

    def __str__(self) -> str:
        lines = [f"=== Stage: {self.edge} {self.name} ==="]
        for key, value in self.data.items():
            str_val = str(value)
            if len(str_val) > 100:
                str_val = str_val[:100] + "..."
            lines.append(f"  {key}: {str_val}")
        if self.points:
            coords = " ".join(f"({p.x},{p.y})" for p in self.points)
            lines.append(f"  Points ({len(self.points)}): {coords}")
        return "\n".join(lines)


@dataclass
class RouteTrace:
    """
    Complete trace of a routing run.

    Attributes:
        stages: Pipeline stages in the order they were recorded
        detours: All detours inserted by the collision resolver
        unresolved: Labels of edges left with residual collisions
        edge: Label attached to records made from now on
    """

    stages: List[RouteStage] = field(default_factory=list)
    detours: List[DetourRecord] = field(default_factory=list)
    unresolved: List[str] = field(default_factory=list)
    edge: str = ""

    def add_stage(
        self,
        name: str,
        data: Dict[str, Any],
        points: Optional[List[Point]] = None,
    ) -> None:
        """
        Add a pipeline stage snapshot for the current edge.

        Args:
            name: Name of the stage (e.g., "resolved")
            data: Dictionary of relevant data at this stage
            points: Optional point list to snapshot
        """
        snapshot = list(points) if points is not None else None
        self.stages.append(RouteStage(name, self.edge, data.copy(), snapshot))

    def add_detour(
        self,
        pass_index: int,
        segment_index: int,
        axis: str,
        coordinate: float,
        obstacle: Box,
    ) -> None:
        """Record a detour for the current edge."""
        self.detours.append(
            DetourRecord(
                self.edge, pass_index, segment_index, axis, coordinate, obstacle
            )
        )

    def mark_unresolved(self) -> None:
        """Flag the current edge as still overlapping an obstacle."""
        if self.edge not in self.unresolved:
            self.unresolved.append(self.edge)

    def get_stage(self, name: str, edge: Optional[str] = None) -> Optional[RouteStage]:
        """Get the first stage with this name (optionally for one edge)."""
        for stage in self.stages:
            if stage.name == name and (edge is None or stage.edge == edge):
                return stage
        return None

    def get_points_at_stage(
        self, name: str, edge: Optional[str] = None
    ) -> Optional[List[Point]]:
        """Get the point snapshot at a specific stage."""
        stage = self.get_stage(name, edge)
        if stage and stage.points:
            return stage.points
        return None

    def get_detours_for(self, edge: str) -> List[DetourRecord]:
        """Get all detours inserted while routing one edge."""
        return [d for d in self.detours if d.edge == edge]

    def summary(self) -> str:
        """
        Generate a human-readable summary of the trace.

        Returns a string with:
        - Edges routed
        - Pipeline stage counts
        - Detour statistics and unresolved edges
        """
        edges: List[str] = []
        for stage in self.stages:
            if stage.edge not in edges:
                edges.append(stage.edge)

        lines = [
            "=" * 60,
            "ROUTE TRACE SUMMARY",
            "=" * 60,
            "",
            f"Edges routed: {len(edges)}",
            f"Pipeline stages: {len(self.stages)}",
            f"Detours inserted: {len(self.detours)}",
            f"Unresolved edges: {len(self.unresolved)}",
            "",
        ]

        detour_counts: Dict[str, int] = {}
        for d in self.detours:
            detour_counts[d.edge] = detour_counts.get(d.edge, 0) + 1

        lines.append("Detours by edge:")
        for edge, count in sorted(detour_counts.items(), key=lambda x: -x[1]):
            lines.append(f"  {edge}: {count}")

        for edge in self.unresolved:
            lines.append(f"  [!] {edge} still overlaps an obstacle")

        return "\n".join(lines)

    def dump(self) -> str:
        """
        Generate a complete human-readable dump of the trace.

        This includes all stages with their point lists and every detour.
        """
        lines = [self.summary(), "", "=" * 60, "DETAILED TRACE", "=" * 60, ""]

        lines.append("PIPELINE STAGES:")
        lines.append("-" * 40)
        for stage in self.stages:
            lines.append(str(stage))
            lines.append("")

        lines.append("DETOURS:")
        lines.append("-" * 40)
        for d in self.detours:
            lines.append(str(d))

        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())
