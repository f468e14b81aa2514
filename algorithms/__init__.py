"""
algorithms/
-----------
The step-wise shortest-path search.

    from algorithms import DijkstraEngine, SearchState, initial_state

DijkstraEngine owns one micro-step per `next()` call; SearchState is the
snapshot it produces.  History and playback live in `engine/`.
"""

from algorithms.state    import SearchState, Phase, INF
from algorithms.dijkstra import DijkstraEngine, PSEUDOCODE, initial_state, shortest_path

__all__ = [
    "SearchState",
    "Phase",
    "INF",
    "DijkstraEngine",
    "PSEUDOCODE",
    "initial_state",
    "shortest_path",
]
