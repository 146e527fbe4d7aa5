"""Shared fixtures for the test suite."""

import pytest

from astar_kernel.domains.graph import WeightedGraph


def build_graph(edges, directed=True, nodes=()):
    """Build a WeightedGraph from ``(source, target, cost)`` triples."""
    graph = WeightedGraph(directed=directed)
    for name in nodes:
        graph.add_node(name)
    for source, target, cost in edges:
        graph.add_edge(source, target, cost)
    return graph


@pytest.fixture
def diamond_graph():
    """A->B 1, A->C 4, B->D 2, C->D 1: the cheapest A->D path is A, B, D (cost 3)."""
    return build_graph([("A", "B", 1), ("A", "C", 4), ("B", "D", 2), ("C", "D", 1)])


@pytest.fixture
def disconnected_graph():
    """The diamond without edges into D."""
    return build_graph([("A", "B", 1), ("A", "C", 4)], nodes=["D"])
