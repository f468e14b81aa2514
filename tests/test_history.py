"""Tests for the snapshot History."""

import math

from algorithms import INF, SearchState
from engine import History


def _state(**distances) -> SearchState:
    return SearchState(unvisited=list(distances), distances=dict(distances), previous={"A": None})


def test_undo_at_bottom_is_noop():
    h = History(_state(A=0.0))
    assert h.undo() is None
    assert h.depth == 0
    assert len(h) == 1


def test_record_and_undo():
    h = History(_state(A=0.0, B=INF))
    h.record(_state(A=0.0, B=2.0))
    h.record(_state(A=0.0, B=1.0))
    assert h.depth == 2

    restored = h.undo()
    assert restored.distances["B"] == 2.0
    restored = h.undo()
    assert math.isinf(restored.distances["B"])
    assert h.undo() is None


def test_snapshots_do_not_alias_live_state():
    live = _state(A=0.0, B=INF)
    h = History(live)
    h.record(live)
    live.distances["B"] = 7.0
    live.unvisited.clear()
    assert h.latest().distances["B"] == INF
    assert h.latest().unvisited == ["A", "B"]


def test_clear_restarts_log():
    h = History(_state(A=0.0))
    h.record(_state(A=0.0, B=1.0))
    h.clear(_state(X=0.0))
    assert h.depth == 0
    assert list(h.latest().distances) == ["X"]


def test_export_round_trip():
    h = History(_state(A=0.0, B=INF))
    h.record(_state(A=0.0, B=3.0))
    data = h.export()
    assert data[0]["distances"]["B"] is None
    copy = History.from_list(data)
    assert copy.snapshots() == h.snapshots()
    assert math.isinf(copy.undo().distances["B"])


def test_empty_history_has_no_latest():
    h = History()
    assert h.latest() is None
    assert h.depth == 0
    assert not h


def test_exported_snapshots_are_copies():
    h = History(_state(A=0.0, B=INF))
    h.record(_state(A=0.0, B=2.0))
    h.record(_state(A=0.0, B=1.0))

    data = h.export()
    data[1]["distances"]["B"] = 99.0
    data[1]["unvisited"].clear()
    data[1]["previous"]["B"] = "Z"

    restored = h.undo()
    assert restored.distances["B"] == 2.0
    assert restored.unvisited == ["A", "B"]
    assert "B" not in restored.previous


def test_editing_a_recorder_export_leaves_undo_intact(example_graph):
    from engine import Recorder, Stepper

    stepper = Stepper(example_graph, "A", "D")
    stepper.next()
    stepper.next()
    exported = Recorder(stepper).export()["snapshots"]
    exported[1]["distances"]["B"] = 99
    exported[1]["unvisited"].clear()

    stepper.prev()
    assert math.isinf(stepper.state.distances["B"])
    assert stepper.state.unvisited == ["B", "C", "D", "E"]
