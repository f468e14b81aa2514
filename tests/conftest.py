"""Shared graphs for the test-suite."""

import pytest

from graph import Graph


@pytest.fixture
def example_graph() -> Graph:
    """A→B(2), A→C(1), B→C(3), B→D(2), C→D(8), C→E(3)."""
    g = Graph()
    for vid in "ABCDE":
        g.create_vertex(vid)
    g.create_edge("A", "B", 2)
    g.create_edge("A", "C", 1)
    g.create_edge("B", "C", 3)
    g.create_edge("B", "D", 2)
    g.create_edge("C", "D", 8)
    g.create_edge("C", "E", 3)
    return g


@pytest.fixture
def disconnected_graph() -> Graph:
    """A–B joined, C and D form a separate island."""
    g = Graph()
    for vid in "ABCD":
        g.create_vertex(vid)
    g.create_edge("A", "B", 1)
    g.create_edge("C", "D", 1)
    return g
