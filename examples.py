#!/usr/bin/env python3
"""
Examples of using the topology edge router.

Run this file to print routed paths for a few example diagrams.
"""

from topoflow import Box, DiagramRouter, Topology


def print_header(title):
    """Print a formatted header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70 + "\n")


def build_vnet(topo, name, x, y):
    """Add a network with a 2x2 grid of subnets."""
    topo.add_node(name, Box(x, y, 660, 400))
    for row in range(2):
        for col in range(2):
            topo.add_node(
                f"{name}-subnet{row * 2 + col}",
                Box(x + 30 + col * 320, y + 70 + row * 180, 280, 140),
                parent=name,
            )


def example_detour():
    """Two boxes with a third one in between"""
    print_header("Example 1: Detour Around an Obstacle")

    topo = Topology()
    topo.add_node("web", Box(0, 0, 100, 50))
    topo.add_node("db", Box(400, 0, 100, 50))
    topo.add_node("firewall", Box(200, -10, 60, 70))
    topo.connect("web", "db")

    for route in DiagramRouter().route_all(topo):
        print(f"{route.source} -> {route.target} ({route.bends} bends)")
        print(f"  {route.d}\n")


def example_hub_and_spoke():
    """Network hub branching to its subnets"""
    print_header("Example 2: Hub and Spoke Through Channels")

    topo = Topology()
    build_vnet(topo, "vnet", 0, 0)
    for i in range(4):
        topo.connect("vnet", f"vnet-subnet{i}")

    for route in DiagramRouter().route_all(topo):
        print(f"{route.target}: {route.d}")


def example_peering_with_trace():
    """Two peered networks, with the debug trace"""
    print_header("Example 3: Peered Networks (debug trace)")

    topo = Topology()
    build_vnet(topo, "east", 0, 0)
    build_vnet(topo, "west", 800, 0)
    topo.connect("east", "west", "right", "left")
    topo.connect("east-subnet2", "west-subnet1", "right", "left")

    router = DiagramRouter(debug=True)
    for route in router.route_all(topo):
        print(f"{route.source} -> {route.target}: {route.d}")
    print()
    print(router.get_trace().summary())


if __name__ == "__main__":
    example_detour()
    example_hub_and_spoke()
    example_peering_with_trace()
