"""Pytest configuration and shared fixtures for topoflow tests."""

import pytest

from topoflow import Box, Topology, build_channels

# Placement constants of a two-column container layout
SUBNET_W = 280
SUBNET_GAP = 40
PAD = 30
PAD_TOP = 70
SUB_H = 140


def make_vnet(x, y):
    """Container box of the standard two-column layout."""
    return Box(x, y, 660, 400)


def make_subnets(vnet):
    """2 columns x 2 rows of children, row-major."""
    subs = []
    for row in range(2):
        for col in range(2):
            subs.append(
                Box(
                    vnet.x + PAD + col * (SUBNET_W + SUBNET_GAP),
                    vnet.y + PAD_TOP + row * (SUB_H + SUBNET_GAP),
                    SUBNET_W,
                    SUB_H,
                )
            )
    return subs


@pytest.fixture
def vnet():
    """Container at (100, 100)."""
    return make_vnet(100, 100)


@pytest.fixture
def subnets(vnet):
    """Its four children."""
    return make_subnets(vnet)


@pytest.fixture
def grid(vnet, subnets):
    """Channel grid of the standard container."""
    return build_channels(vnet, subnets)


@pytest.fixture
def vnet_topology(vnet, subnets):
    """Standard container with children named sub0..sub3."""
    topo = Topology()
    topo.add_node("vnet", vnet)
    for i, box in enumerate(subnets):
        topo.add_node(f"sub{i}", box, parent="vnet")
    return topo


@pytest.fixture
def blocked_topology():
    """Two boxes side by side with a third box between them."""
    topo = Topology()
    topo.add_node("a", Box(0, 0, 100, 50))
    topo.add_node("b", Box(400, 0, 100, 50))
    topo.add_node("blocker", Box(200, -10, 60, 70))
    topo.connect("a", "b")
    return topo
