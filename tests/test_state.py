"""Tests for SearchState."""

import math

from algorithms import INF, Phase, SearchState
from graph import Edge


def _mid_run_state() -> SearchState:
    return SearchState(
        unvisited=["B", "C"],
        distances={"A": 0.0, "B": 2.0, "C": INF},
        previous={"A": None, "B": "A"},
        current_vertex="A",
        current_edge=Edge("A", "C", 1),
        edges_left=[Edge("A", "D", 4)],
    )


def test_phase():
    assert SearchState().phase is Phase.SELECT_FRONTIER
    s = _mid_run_state()
    assert s.phase is Phase.RELAX_EDGE
    s.current_edge = None
    assert s.phase is Phase.EXPANDING
    s.is_done = True
    assert s.phase is Phase.TERMINATED


def test_distance_defaults_to_infinity():
    s = _mid_run_state()
    assert s.distance("B") == 2.0
    assert s.distance("C") == INF
    assert s.distance("nowhere") == INF


def test_copy_is_independent():
    s = _mid_run_state()
    c = s.copy()
    assert c == s
    c.distances["C"] = 5.0
    c.unvisited.remove("B")
    c.edges_left.clear()
    assert s.distances["C"] == INF
    assert s.unvisited == ["B", "C"]
    assert s.edges_left == [Edge("A", "D", 4)]


def test_to_dict_encodes_infinity_as_null():
    d = _mid_run_state().to_dict()
    assert d["distances"] == {"A": 0.0, "B": 2.0, "C": None}
    assert d["current_edge"] == {"from": "A", "to": "C", "cost": 1}
    assert d["edges_left"] == [{"from": "A", "to": "D", "cost": 4}]


def test_from_dict_restores_infinity():
    s = _mid_run_state()
    restored = SearchState.from_dict(s.to_dict())
    assert math.isinf(restored.distances["C"])
    assert restored == s


def test_from_dict_tolerates_partial_payload():
    s = SearchState.from_dict({"distances": {"A": 0, "B": None, "C": "garbage"}})
    assert s.distances == {"A": 0.0, "B": INF, "C": INF}
    assert s.unvisited == []
    assert s.current_edge is None
    assert not s.is_done


def test_visited():
    s = _mid_run_state()
    assert s.visited(["A", "B", "C", "D"]) == ["A", "D"]
