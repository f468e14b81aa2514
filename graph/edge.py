"""
edge.py — Weighted Edge
=======================
Connects two vertices with a non-negative cost.

Design decisions:
  - `source` and `target` are vertex-id strings, NOT Vertex references.
    This keeps edges serialisable and avoids circular references.
  - Edges are frozen.  The search treats the graph as undirected by
    synthesising reversed copies at expansion time (`orient_edges`),
    so stored edges are never touched during a run.
  - The wire format uses `from` / `to` / `cost`; `source` / `target` /
    `weight` are accepted on input as well.
"""

import math
from dataclasses import dataclass
from typing import Iterable, List


@dataclass(frozen=True)
class Edge:
    """
    Attributes:
        source : ID of the tail vertex.
        target : ID of the head vertex.
        cost   : Numeric cost (not validated; negatives are the caller's problem).
    """

    source: str
    target: str
    cost:   float = 1.0

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def reversed(self) -> "Edge":
        """Same edge walked the other way, cost preserved."""
        return Edge(source=self.target, target=self.source, cost=self.cost)

    def touches(self, vertex_id: str) -> bool:
        return self.source == vertex_id or self.target == vertex_id

    def connects(self, a: str, b: str) -> bool:
        """True if this edge links a ↔ b in either direction."""
        return (self.source, self.target) in ((a, b), (b, a))

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"from": self.source, "to": self.target, "cost": self.cost}

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        source = data.get("from", data.get("source"))
        target = data.get("to", data.get("target"))
        if source is None or target is None:
            raise KeyError("edge needs 'from' and 'to'")
        cost = float(data.get("cost", data.get("weight", 1.0)))
        if not math.isfinite(cost):
            raise ValueError(f"edge cost must be finite, got {cost}")
        return cls(source=str(source), target=str(target), cost=cost)

    def __repr__(self) -> str:
        return f"Edge({self.source} → {self.target}, cost={self.cost})"


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------
def orient_edges(edges: Iterable[Edge], vertex_id: str) -> List[Edge]:
    """
    Return every edge touching `vertex_id`, oriented so it starts there.

    Edges whose target is `vertex_id` are replaced by their reversed copy;
    edges that do not touch the vertex are dropped.  Original order is kept
    and the input is left untouched.
    """
    oriented = []
    for edge in edges:
        if edge.target == vertex_id:
            oriented.append(edge.reversed())
        elif edge.source == vertex_id:
            oriented.append(edge)
    return oriented
