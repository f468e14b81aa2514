"""
graph.py — Graph Container
==========================
The input to a search run.  The step engine only ever reads from it.

Responsibilities:
  1. Build-time construction                (add / create vertices & edges)
  2. Adjacency queries                      (edges_touching, get_edge_between)
  3. Import from adjacency-list text        (text → graph)
  4. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Vertices live in an insertion-ordered dict keyed by id.  That order is
    the canonical vertex order: it seeds `unvisited` and therefore decides
    ties during frontier selection.
  - Edges are an ordered list, not a dict — the same pair may be joined
    twice and the expansion order follows the list.
  - Edges may name vertices that were never added.  The search tolerates
    that; such vertices simply never get a finite distance.
"""

import logging
import math
from typing import Dict, List, Optional, Any

from graph.vertex import Vertex
from graph.edge import Edge

logger = logging.getLogger(__name__)


class GraphFormatError(ValueError):
    """Raised when a serialised graph payload cannot be parsed."""


class Graph:
    """
    Attributes:
        vertices : {vertex_id: Vertex}
        edges    : [Edge, …] in insertion order
    """

    def __init__(self):
        self.vertices: Dict[str, Vertex] = {}
        self.edges:    List[Edge]        = []

    # ==================================================================
    # CONSTRUCTION
    # ==================================================================
    def add_vertex(self, vertex: Vertex) -> Vertex:
        self.vertices[vertex.id] = vertex
        return vertex

    def create_vertex(self, vertex_id: str) -> Vertex:
        """Convenience: create + add in one call."""
        return self.add_vertex(Vertex(id=vertex_id))

    def add_edge(self, edge: Edge) -> Edge:
        self.edges.append(edge)
        return edge

    def create_edge(self, source: str, target: str, cost: float = 1.0) -> Edge:
        return self.add_edge(Edge(source=source, target=target, cost=cost))

    # ==================================================================
    # QUERIES
    # ==================================================================
    def vertex_ids(self) -> List[str]:
        return list(self.vertices.keys())

    def has_vertex(self, vertex_id: str) -> bool:
        return vertex_id in self.vertices

    def edges_touching(self, vertex_id: str) -> List[Edge]:
        return [e for e in self.edges if e.touches(vertex_id)]

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """Cheapest edge joining a and b, ignoring direction."""
        best = None
        for e in self.edges:
            if e.connects(a, b) and (best is None or e.cost < best.cost):
                best = e
        return best

    def vertex_count(self) -> int:
        return len(self.vertices)

    def edge_count(self) -> int:
        return len(self.edges)

    def has_negative_edges(self) -> bool:
        return any(e.cost < 0 for e in self.edges)

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "vertices": {vid: v.to_dict() for vid, v in self.vertices.items()},
            "edges":    [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Graph":
        """
        Accepts `vertices` either as {id: {"id": id}} or as a list of ids /
        vertex dicts.  Anything else raises GraphFormatError.
        """
        if not isinstance(data, dict):
            raise GraphFormatError("graph payload must be an object")

        g = cls()
        raw_vertices = data.get("vertices", {})
        try:
            if isinstance(raw_vertices, dict):
                for vid, vd in raw_vertices.items():
                    g.add_vertex(Vertex.from_dict(vd) if isinstance(vd, dict) else Vertex(id=str(vid)))
            elif isinstance(raw_vertices, list):
                for vd in raw_vertices:
                    g.add_vertex(Vertex.from_dict(vd) if isinstance(vd, dict) else Vertex(id=str(vd)))
            else:
                raise GraphFormatError("'vertices' must be an object or a list")

            raw_edges = data.get("edges", [])
            if not isinstance(raw_edges, list):
                raise GraphFormatError("'edges' must be a list")
            for ed in raw_edges:
                g.add_edge(Edge.from_dict(ed))
        except GraphFormatError:
            raise
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise GraphFormatError(f"malformed graph payload: {e}") from e

        logger.debug("Loaded graph: %d vertices, %d edges", g.vertex_count(), g.edge_count())
        return g

    # ==================================================================
    # FACTORIES
    # ==================================================================
    @classmethod
    def default_network(cls) -> "Graph":
        """Four-router sample network shown before the user loads anything."""
        g = cls()
        for vid in ("A", "B", "C", "D"):
            g.create_vertex(vid)
        g.create_edge("A", "B", 2)
        g.create_edge("A", "C", 5)
        g.create_edge("B", "C", 1)
        g.create_edge("B", "D", 4)
        g.create_edge("C", "D", 1)
        return g

    @classmethod
    def from_adjacency_list(cls, text: str) -> "Graph":
        """
        Parse a simple text adjacency list.

        Supported formats (one vertex per line):
            A: B C D            → A connects to B, C, D  (cost 1)
            A: B(3) C(7)        → A→B cost 3, A→C cost 7
            0 → 1,2,3           → alternate arrow syntax
            0: 1(5), 2(3)       → comma-separated with costs

        Vertices are added in order of first appearance.
        """
        g = cls()

        for lineno, line in enumerate(text.strip().splitlines(), start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            # split on ':' or '→'
            if ":" in line:
                parts = line.split(":", 1)
            elif "→" in line:
                parts = line.split("→", 1)
            elif "->" in line:
                parts = line.split("->", 1)
            else:
                raise GraphFormatError(f"line {lineno}: expected 'vertex: neighbours'")

            src = parts[0].strip()
            if not src:
                raise GraphFormatError(f"line {lineno}: missing vertex name")
            if not g.has_vertex(src):
                g.create_vertex(src)

            for token in parts[1].replace(",", " ").split():
                # parse optional cost: "B(3)" or "B"
                if "(" in token and token.endswith(")"):
                    tgt, cost_str = token[:-1].split("(", 1)
                    try:
                        cost = float(cost_str)
                    except ValueError:
                        raise GraphFormatError(f"line {lineno}: bad cost {cost_str!r}")
                    if not math.isfinite(cost):
                        raise GraphFormatError(f"line {lineno}: cost must be finite, got {cost_str!r}")
                else:
                    tgt, cost = token, 1.0
                if not tgt:
                    raise GraphFormatError(f"line {lineno}: missing vertex name in {token!r}")
                if not g.has_vertex(tgt):
                    g.create_vertex(tgt)
                g.create_edge(src, tgt, cost)

        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def __repr__(self) -> str:
        return f"Graph(vertices={self.vertex_count()}, edges={self.edge_count()})"

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Graph)
            and self.vertices == other.vertices
            and self.edges == other.edges
        )
