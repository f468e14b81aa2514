"""
state.py — Search State Snapshot
================================
One SearchState is a complete picture of the search between two
micro-steps: everything the renderer needs to draw a frame and
everything the engine needs to take the next step.

Design decisions:
  - SearchState is a plain dataclass.  The engine is the only writer;
    the stepper, recorder and renderer are pure readers.
  - `copy()` is structural, so an archived snapshot never observes a
    later step.
  - `to_dict()` is JSON-safe.  JSON has no infinity, so unreached
    distances travel as null and `from_dict()` turns null (or a
    non-numeric marker) back into +inf.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Any

from graph import Edge

INF = math.inf


# ---------------------------------------------------------------------------
# Phase — which transition the next `next()` call will apply
# ---------------------------------------------------------------------------
class Phase(Enum):
    TERMINATED      = "terminated"
    SELECT_FRONTIER = "select_frontier"
    EXPANDING       = "expanding"        # vertex chosen, no edge in hand
    RELAX_EDGE      = "relax_edge"       # one edge dequeued, awaiting relax


@dataclass
class SearchState:
    """
    Attributes:
        unvisited      : Vertex ids not yet finalised, in canonical vertex order.
        distances      : {vertex_id: tentative distance}, +inf when unreached.
        previous       : {vertex_id: predecessor id}; the start maps to None.
        current_vertex : Frontier vertex being expanded, or None.
        current_edge   : Edge under relaxation, oriented away from current_vertex.
        edges_left     : Oriented edges from current_vertex still to examine.
        is_done        : True once the search has terminated.
    """

    unvisited:      List[str]                = field(default_factory=list)
    distances:      Dict[str, float]         = field(default_factory=dict)
    previous:       Dict[str, Optional[str]] = field(default_factory=dict)
    current_vertex: Optional[str]            = None
    current_edge:   Optional[Edge]           = None
    edges_left:     List[Edge]               = field(default_factory=list)
    is_done:        bool                     = False

    # ------------------------------------------------------------------
    @property
    def phase(self) -> Phase:
        if self.is_done:
            return Phase.TERMINATED
        if self.current_vertex is None:
            return Phase.SELECT_FRONTIER
        if self.current_edge is not None:
            return Phase.RELAX_EDGE
        return Phase.EXPANDING

    def distance(self, vertex_id: str) -> float:
        """Tentative distance, treating a missing entry as unreached."""
        d = self.distances.get(vertex_id)
        return INF if d is None else d

    def visited(self, all_ids: List[str]) -> List[str]:
        """Ids from `all_ids` that have been finalised."""
        pending = set(self.unvisited)
        return [vid for vid in all_ids if vid not in pending]

    def copy(self) -> "SearchState":
        # Edges are frozen, so copying the containers is a full deep copy.
        return SearchState(
            unvisited=list(self.unvisited),
            distances=dict(self.distances),
            previous=dict(self.previous),
            current_vertex=self.current_vertex,
            current_edge=self.current_edge,
            edges_left=list(self.edges_left),
            is_done=self.is_done,
        )

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "unvisited":      list(self.unvisited),
            "distances":      {k: (None if v == INF else v) for k, v in self.distances.items()},
            "previous":       dict(self.previous),
            "current_vertex": self.current_vertex,
            "current_edge":   self.current_edge.to_dict() if self.current_edge else None,
            "edges_left":     [e.to_dict() for e in self.edges_left],
            "is_done":        self.is_done,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchState":
        edge = data.get("current_edge")
        return cls(
            unvisited=list(data.get("unvisited", [])),
            distances={k: _restore_distance(v) for k, v in data.get("distances", {}).items()},
            previous=dict(data.get("previous", {})),
            current_vertex=data.get("current_vertex"),
            current_edge=Edge.from_dict(edge) if edge else None,
            edges_left=[Edge.from_dict(e) for e in data.get("edges_left", [])],
            is_done=bool(data.get("is_done", False)),
        )


def _restore_distance(value: Any) -> float:
    if value is None:
        return INF
    try:
        return float(value)
    except (TypeError, ValueError):
        return INF
