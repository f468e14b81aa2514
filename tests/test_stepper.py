"""Tests for the Stepper facade (engine + history)."""

import json

from algorithms import INF, Phase
from engine import Stepper
from graph import Graph


def test_prev_at_start_is_noop(example_graph):
    stepper = Stepper(example_graph, "A", "D")
    initial = stepper.state
    assert stepper.prev() is False
    assert stepper.state == initial
    assert stepper.step_count == 0


def test_undo_all_the_way_back(example_graph):
    stepper = Stepper(example_graph, "A", "D")
    initial = stepper.state.copy()
    for _ in range(11):
        stepper.next()
    assert stepper.step_count == 11

    for _ in range(11):
        assert stepper.prev() is True
    assert stepper.state == initial
    assert stepper.prev() is False


def test_prev_restores_each_snapshot_exactly(example_graph):
    stepper = Stepper(example_graph, "A", "D")
    seen = [stepper.state.copy()]
    while not stepper.next():
        seen.append(stepper.state.copy())
    seen.append(stepper.state.copy())

    for expected in reversed(seen[:-1]):
        stepper.prev()
        assert stepper.state == expected


def test_prev_brings_back_infinity(example_graph):
    stepper = Stepper(example_graph, "A", "D")
    stepper.next()
    stepper.next()
    stepper.next()
    assert stepper.state.distances["B"] == 2
    stepper.prev()
    assert stepper.state.distances["B"] == INF
    assert stepper.phase is Phase.RELAX_EDGE


def test_step_forward_after_undo_matches_original(example_graph):
    stepper = Stepper(example_graph, "A", "D")
    for _ in range(5):
        stepper.next()
    after_five = stepper.state.copy()
    stepper.prev()
    stepper.prev()
    stepper.next()
    stepper.next()
    assert stepper.state == after_five
    assert stepper.step_count == 5


def test_run_to_completion(example_graph):
    stepper = Stepper(example_graph, "A", "D")
    assert stepper.run_to_completion() == 20
    assert stepper.is_done
    assert stepper.phase is Phase.TERMINATED
    assert stepper.path == ["A", "B", "D"]
    # already done: nothing to do, nothing archived
    assert stepper.run_to_completion() == 0
    assert stepper.next() is True
    assert stepper.step_count == 20


def test_run_to_completion_respects_cap(example_graph):
    stepper = Stepper(example_graph, "A", "D")
    assert stepper.run_to_completion(max_steps=3) == 3
    assert not stepper.is_done
    assert stepper.step_count == 3


def test_reset_discards_history(example_graph, disconnected_graph):
    stepper = Stepper(example_graph, "A", "D")
    stepper.run_to_completion()
    stepper.reset(disconnected_graph, "C", "D")
    assert stepper.graph is disconnected_graph
    assert (stepper.start, stepper.end) == ("C", "D")
    assert stepper.step_count == 0
    assert stepper.prev() is False
    assert stepper.state.distances["C"] == 0


def test_unreachable_run_finishes(disconnected_graph):
    stepper = Stepper(disconnected_graph, "A", "D")
    stepper.run_to_completion()
    assert stepper.is_done
    assert stepper.state.distances["D"] == INF
    assert stepper.path == []


def test_on_step_fires_for_every_change(example_graph):
    seen = []
    stepper = Stepper(example_graph, "A", "D", on_step=seen.append)
    assert len(seen) == 1          # initial snapshot
    stepper.next()
    stepper.prev()
    stepper.prev()                 # no-op, no callback
    assert len(seen) == 3
    assert seen[-1] == seen[0]


def test_export_survives_json(example_graph):
    stepper = Stepper(example_graph, "A", "D")
    for _ in range(8):
        stepper.next()
    data = json.loads(json.dumps(stepper.export(), allow_nan=False))

    clone = Stepper.from_dict(data)
    assert clone.state == stepper.state
    assert clone.step_count == 8
    assert clone.last_action == stepper.last_action
    assert clone.graph == stepper.graph

    clone.run_to_completion()
    stepper.run_to_completion()
    assert clone.state == stepper.state
    for _ in range(20):
        clone.prev()
    assert clone.state.distances["E"] == INF


def test_default_network_run():
    stepper = Stepper(Graph.default_network(), "A", "D")
    stepper.run_to_completion()
    assert stepper.state.distances["D"] == 4
    assert stepper.path == ["A", "B", "C", "D"]
