"""
dijkstra.py — Resumable Dijkstra Step Engine
============================================
Dijkstra's algorithm unrolled into a state machine.  Every call to
`DijkstraEngine.next()` applies exactly ONE micro-step to the current
SearchState and returns whether the search has terminated.

Transitions, checked in this order on every call:
  1. Terminated    — already done, or `end` has left `unvisited`  → done
  2. Select        — no current vertex: pick the unvisited vertex with the
                     smallest finite distance (first in `unvisited` order on
                     ties), orient its edges, drop it from `unvisited`.
                     Nothing selectable → done (end unreachable).
  3. Complete      — current vertex has no edges left: clear it
  4. Dequeue       — take the first edge of `edges_left`
  5. Relax         — dist[from] + cost < dist[to] → update dist / previous

Edges are consumed as if undirected: an edge whose target is the chosen
vertex is reversed at selection time (see graph.orient_edges).

Correctness note: Dijkstra requires non-negative costs.  Negative costs
are not rejected; the result is simply not guaranteed.
"""

import logging
from typing import Dict, List, Optional

from graph import Graph, orient_edges
from algorithms.state import SearchState, Phase, INF

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "for each vertex v: dist[v] ← ∞, prev[v] ← none",    # 0
    "dist[source] ← 0",                                  # 1
    "unexplored ← all vertices",                         # 2
    "while destination in unexplored:",                  # 3
    "    v ← least-valued unexplored vertex",            # 4
    "    mark v explored",                               # 5
    "    for each edge (v, w):",                         # 6
    "        if dist[v] + len(v, w) < dist[w]:",         # 7
    "            dist[w] ← dist[v] + len(v, w)",         # 8
    "            prev[w] ← v",                           # 9
    "return dist, prev",                                 # 10
]

# line the NEXT call will execute, keyed by the phase it starts in
_PHASE_LINE: Dict[Phase, int] = {
    Phase.SELECT_FRONTIER: 4,
    Phase.EXPANDING:       6,
    Phase.RELAX_EDGE:      7,
    Phase.TERMINATED:      10,
}


def initial_state(graph: Graph, start: str) -> SearchState:
    """Distances all ∞ except start = 0, every vertex unvisited."""
    distances = {vid: INF for vid in graph.vertices}
    distances[start] = 0.0
    return SearchState(
        unvisited=graph.vertex_ids(),
        distances=distances,
        previous={start: None},
    )


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
class DijkstraEngine:
    """
    Attributes:
        graph       : The Graph being searched (never mutated).
        start, end  : Source and destination vertex ids.
        state       : Current SearchState.  Replaced, never mutated in place,
                      on every transition.
        last_action : Plain-English description of the last transition.
    """

    def __init__(self, graph: Graph, start: str, end: str, state: Optional[SearchState] = None):
        self.graph = graph
        self.start = start
        self.end   = end
        self.state = state if state is not None else initial_state(graph, start)
        self.last_action = (
            f"Initialise: all distances = ∞ except source '{start}' = 0."
        )

    # ------------------------------------------------------------------
    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def pseudocode_line(self) -> int:
        return _PHASE_LINE[self.state.phase]

    def next(self) -> bool:
        """Apply one micro-step.  Returns True iff the search is done."""
        s = self.state
        if s.is_done:
            return True

        if self.end not in s.unvisited:
            if self.graph.has_vertex(self.end):
                self._terminate(f"'{self.end}' is finalised with distance {s.distance(self.end)}.")
            else:
                self._terminate(f"'{self.end}' is not a vertex of this graph; nothing to reach.")
            return True

        if s.current_vertex is None:
            return self._select_frontier()

        if not s.edges_left and s.current_edge is None:
            nxt = s.copy()
            nxt.current_vertex = None
            self._commit(nxt, f"All edges of '{s.current_vertex}' examined.")
            return False

        if s.current_edge is None:
            nxt = s.copy()
            nxt.current_edge = nxt.edges_left.pop(0)
            e = nxt.current_edge
            self._commit(nxt, f"Examine edge {e.source}→{e.target} (cost {e.cost}).")
            return False

        self._relax()
        return False

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def _select_frontier(self) -> bool:
        s = self.state
        chosen, best = None, INF
        for vid in s.unvisited:
            d = s.distance(vid)
            if d < best:
                chosen, best = vid, d

        if chosen is None:
            self._terminate(f"No reachable vertex left; '{self.end}' is unreachable.")
            return True

        nxt = s.copy()
        nxt.unvisited = [vid for vid in s.unvisited if vid != chosen]
        pending = set(nxt.unvisited)
        nxt.current_vertex = chosen
        nxt.edges_left = [e for e in orient_edges(self.graph.edges, chosen) if e.target in pending]
        self._commit(
            nxt,
            f"Pick '{chosen}' with distance {best} — smallest among unvisited. "
            f"Its distance is now final; {len(nxt.edges_left)} edge(s) to examine.",
        )
        return False

    def _relax(self) -> None:
        s = self.state
        e = s.current_edge
        candidate = s.distance(e.source) + e.cost
        known = s.distance(e.target)

        nxt = s.copy()
        nxt.current_edge = None
        if candidate < known:
            nxt.distances[e.target] = candidate
            nxt.previous[e.target] = e.source
            msg = f"Relax {e.source}→{e.target}: {candidate} < {known} → update."
        else:
            msg = f"Edge {e.source}→{e.target}: {candidate} ≥ {known} → no improvement."
        self._commit(nxt, msg)

    def _terminate(self, reason: str) -> None:
        nxt = self.state.copy()
        nxt.is_done = True
        nxt.current_vertex = None
        nxt.current_edge = None
        nxt.edges_left = []
        self._commit(nxt, reason)
        logger.info("Search %s → %s finished: %s", self.start, self.end, reason)

    def _commit(self, state: SearchState, action: str) -> None:
        self.state = state
        self.last_action = action
        logger.debug(action)


# ---------------------------------------------------------------------------
def shortest_path(previous: Dict[str, Optional[str]], start: str, end: str) -> List[str]:
    """Walk the predecessor table back from `end`.  Empty if unreachable."""
    if end != start and end not in previous:
        return []
    path, cur = [], end
    while cur is not None and len(path) <= len(previous):
        path.append(cur)
        if cur == start:
            break
        cur = previous.get(cur)
    if path[-1] != start:
        return []
    path.reverse()
    return path
