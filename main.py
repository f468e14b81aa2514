"""
main.py — Dijkstra Stepper Flask App
====================================
JSON API that lets a browser UI drive the step engine.  Rendering lives
entirely in the front-end; every response carries the snapshot it needs.

Routes:
  GET  /                       – service banner
  GET  /api/state              – current snapshot + run info
  POST /api/reset              – new run  {graph?, start?, end?}
  POST /api/step/next          – advance one micro-step
  POST /api/step/prev          – undo one micro-step
  POST /api/run                – run to completion, return metrics
  GET  /api/metrics            – analytics for the current run

State management:
  The Flask session only holds a run id.  The Stepper for that id lives
  in RUNS, an in-memory RunStore.  A request checks its Stepper out under
  a per-run lock, so overlapping requests from one session (an auto-run
  timer plus a click) apply their steps one after the other.
"""

import logging
import threading
import uuid
from collections import OrderedDict
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Tuple

from flask import Flask, jsonify, request, session

from config import settings
from graph import Graph, GraphFormatError
from algorithms import PSEUDOCODE
from engine import Stepper, Recorder

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


app = Flask(__name__)
app.secret_key = settings.secret_key


# ---------------------------------------------------------------------------
# Run Store
# ---------------------------------------------------------------------------
class RunStore:
    """
    Live Steppers keyed by run id, least recently used evicted first.

    Attributes:
        max_runs : Upper bound on runs kept in memory.
        _runs    : {run_id: (Stepper, Lock)} in least-recently-used order.
        _guard   : Protects `_runs` itself; never held while a run is in use.
    """

    def __init__(self, max_runs: int = 1000):
        self.max_runs = max_runs
        self._runs: "OrderedDict[str, Tuple[Stepper, threading.Lock]]" = OrderedDict()
        self._guard = threading.Lock()

    @contextmanager
    def checkout(self, run_id: str) -> Iterator[Stepper]:
        """Yield the run's Stepper, holding its lock until the block exits."""
        with self._guard:
            entry = self._runs.get(run_id)
            if entry is None:
                stepper = Stepper(Graph.default_network(), settings.default_start, settings.default_end)
                entry = (stepper, threading.Lock())
                self._runs[run_id] = entry
            self._runs.move_to_end(run_id)
            while len(self._runs) > self.max_runs:
                evicted, _ = self._runs.popitem(last=False)
                logger.info("Evicted run %s", evicted)

        stepper, lock = entry
        with lock:
            yield stepper

    def __contains__(self, run_id: str) -> bool:
        with self._guard:
            return run_id in self._runs

    def __len__(self) -> int:
        with self._guard:
            return len(self._runs)


RUNS = RunStore(settings.max_runs)


# ---------------------------------------------------------------------------
# Run State Helpers
# ---------------------------------------------------------------------------
def current_run_id() -> str:
    run_id = session.get("run_id")
    if not run_id:
        run_id = uuid.uuid4().hex
        session["run_id"] = run_id
    return run_id


def state_payload(stepper: Stepper) -> Dict[str, Any]:
    return {
        "state":           stepper.state.to_dict(),
        "done":            stepper.is_done,
        "phase":           stepper.phase.value,
        "pseudocode_line": stepper.pseudocode_line,
        "step":            stepper.step_count,
        "start":           stepper.start,
        "end":             stepper.end,
        "path":            stepper.path,
        "last_action":     stepper.last_action,
    }


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    return jsonify({
        "name":   "Dijkstra Stepper",
        "status": "running",
        "routes": ["/api/state", "/api/reset", "/api/step/next", "/api/step/prev",
                   "/api/run", "/api/metrics"],
    })


@app.route("/api/state", methods=["GET"])
def api_state():
    with RUNS.checkout(current_run_id()) as stepper:
        payload = state_payload(stepper)
        payload["graph"] = stepper.graph.to_dict()
    payload["pseudocode"] = PSEUDOCODE
    return jsonify(payload)


@app.route("/api/reset", methods=["POST"])
def api_reset():
    data = request.get_json(silent=True) or {}
    raw_graph = data.get("graph")
    try:
        if raw_graph is None:
            graph = None
        elif isinstance(raw_graph, dict) and "text" in raw_graph:
            graph = Graph.from_adjacency_list(str(raw_graph["text"]))
        else:
            graph = Graph.from_dict(raw_graph)
    except GraphFormatError as e:
        logger.warning("Rejected graph payload: %s", e)
        return jsonify({"error": str(e)}), 400

    with RUNS.checkout(current_run_id()) as stepper:
        if graph is None:
            graph = stepper.graph
        start = data.get("start", stepper.start)
        end   = data.get("end", stepper.end)
        if not isinstance(start, str) or not isinstance(end, str):
            return jsonify({"error": "start and end must be vertex ids"}), 400

        stepper.reset(graph, start, end)
        payload = state_payload(stepper)

    payload["graph"] = graph.to_dict()
    if graph.has_negative_edges():
        payload["warning"] = "Negative edge costs: shortest distances are not guaranteed."
    return jsonify(payload)


@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    with RUNS.checkout(current_run_id()) as stepper:
        stepper.next()
        payload = state_payload(stepper)
    return jsonify(payload)


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    with RUNS.checkout(current_run_id()) as stepper:
        moved = stepper.prev()
        payload = state_payload(stepper)
    payload["moved"] = moved
    return jsonify(payload)


@app.route("/api/run", methods=["POST"])
def api_run():
    with RUNS.checkout(current_run_id()) as stepper:
        metrics = Recorder(stepper).run_to_completion(settings.max_run_steps)
        payload = state_payload(stepper)
    payload["metrics"] = metrics.__dict__
    return jsonify(payload)


@app.route("/api/metrics", methods=["GET"])
def api_metrics():
    with RUNS.checkout(current_run_id()) as stepper:
        metrics = Recorder(stepper).get_metrics()
    return jsonify(metrics.__dict__)


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logger.info("Starting Dijkstra Stepper on http://%s:%d", settings.host, settings.port)
    app.run(debug=settings.debug, host=settings.host, port=settings.port)
