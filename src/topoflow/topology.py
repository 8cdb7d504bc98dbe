"""
Topology model using networkx for containment.

Uses networkx for:
- The containment tree (edge parent -> child, node attribute ``box``)
- Ancestor/descendant queries when scoping obstacles for an edge
- Per-container child lists for channel grids
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set, Union

import networkx as nx

from .channels import build_channels
from .models import Box, ChannelGrid, Side


class TopologyError(Exception):
    """Raised when a topology is built or queried inconsistently."""

    pass


@dataclass
class Connection:
    """
    An edge to route.

    Attributes:
        source: Source node name.
        target: Target node name.
        source_side: Side of the source box, or None to pick automatically.
        target_side: Side of the target box, or None to pick automatically.
    """

    source: str
    target: str
    source_side: Optional[Side] = None
    target_side: Optional[Side] = None

    @property
    def label(self) -> str:
        return f"{self.source}->{self.target}"


class Topology:
    """
    Nested boxes and the connections between them.

    Node positions come from the layout layer; the topology only records
    them and answers the structural questions the routers need.

    Example:
        >>> topo = Topology()
        >>> topo.add_node("vnet", Box(0, 0, 660, 400))
        >>> topo.add_node("web", Box(30, 70, 280, 140), parent="vnet")
        >>> topo.connect("vnet", "web")
    """

    def __init__(self):
        self.graph: nx.DiGraph = nx.DiGraph()
        self.connections: List[Connection] = []
        self._grids: Dict[str, ChannelGrid] = {}

    def add_node(self, name: str, box: Box, parent: Optional[str] = None) -> None:
        """
        Add a node.

        Args:
            name: Unique node name.
            box: The node's rectangle.
            parent: Name of the containing node, which must already exist.

        Raises:
            TopologyError: If the name is taken or the parent is unknown.
        """
        if name in self.graph:
            raise TopologyError(f"Duplicate node: {name}")
        if parent is not None and parent not in self.graph:
            raise TopologyError(f"Unknown parent '{parent}' for node '{name}'")

        self.graph.add_node(name, box=box)
        if parent is not None:
            self.graph.add_edge(parent, name)
        self._grids.clear()

    def connect(
        self,
        source: str,
        target: str,
        source_side: Optional[Union[Side, str]] = None,
        target_side: Optional[Union[Side, str]] = None,
    ) -> Connection:
        """
        Add a connection between two existing nodes.

        Raises:
            TopologyError: If a node is unknown or source equals target.
            ValueError: If a side is not left/right/top/bottom.
        """
        self._require(source)
        self._require(target)
        if source == target:
            raise TopologyError(f"Cannot connect '{source}' to itself")

        connection = Connection(
            source,
            target,
            Side(source_side) if source_side is not None else None,
            Side(target_side) if target_side is not None else None,
        )
        self.connections.append(connection)
        return connection

    def _require(self, name: str) -> None:
        if name not in self.graph:
            raise TopologyError(f"Unknown node: {name}")

    def box(self, name: str) -> Box:
        self._require(name)
        return self.graph.nodes[name]["box"]

    def parent(self, name: str) -> Optional[str]:
        self._require(name)
        parents = list(self.graph.predecessors(name))
        return parents[0] if parents else None

    def children(self, name: str) -> List[str]:
        self._require(name)
        return list(self.graph.successors(name))

    def child_boxes(self, name: str) -> List[Box]:
        return [self.box(child) for child in self.children(name)]

    def ancestors(self, name: str) -> Set[str]:
        self._require(name)
        return nx.ancestors(self.graph, name)

    def is_ancestor(self, container: str, name: str) -> bool:
        """True if container holds name, directly or through nested nodes."""
        return container in self.ancestors(name)

    def owning_child(self, container: str, name: str) -> Optional[str]:
        """The direct child of container that is name or holds name."""
        if not self.is_ancestor(container, name):
            return None
        node = name
        while self.parent(node) != container:
            node = self.parent(node)
        return node

    def obstacles_for(self, source: str, target: str) -> List[Box]:
        """
        Boxes an edge between source and target has to avoid.

        Everything except the endpoints, what they contain and what
        contains them.
        """
        excluded = {source, target}
        for name in (source, target):
            excluded |= self.ancestors(name)
            excluded |= nx.descendants(self.graph, name)
        return [
            data["box"]
            for name, data in self.graph.nodes(data=True)
            if name not in excluded
        ]

    def channel_grid(self, name: str) -> ChannelGrid:
        """Lanes of a container, built once until the topology changes."""
        if name not in self._grids:
            self._grids[name] = build_channels(self.box(name), self.child_boxes(name))
        return self._grids[name]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Topology":
        """
        Build a topology from the layout layer's plain-data form.

        Expected shape::

            {
                "nodes": [{"name": "vnet", "box": {"x":..,"y":..,"w":..,"h":..},
                           "parent": None}, ...],
                "connections": [{"source": "a", "target": "b",
                                 "source_side": "right", "target_side": "left"}]
            }

        Parents must be listed before their children.

        Raises:
            TopologyError: On missing keys or inconsistent references.
        """
        topo = cls()
        try:
            for node in data.get("nodes", []):
                topo.add_node(
                    node["name"], Box.from_dict(node["box"]), node.get("parent")
                )
            for conn in data.get("connections", []):
                topo.connect(
                    conn["source"],
                    conn["target"],
                    conn.get("source_side"),
                    conn.get("target_side"),
                )
        except KeyError as e:
            raise TopologyError(f"Missing field: {e}") from e
        return topo
