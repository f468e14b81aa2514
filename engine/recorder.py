"""
recorder.py — Run Recorder & Analytics
======================================
Computes the numbers the Analytics panel shows for a run by replaying
the stepper's archived snapshots.

Usage:
    rec = Recorder(stepper)
    rec.run_to_completion()          # drives stepper.next() until done
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # serialisable snapshot for save/replay

Metrics are recomputed from the history on every call, so they follow
the stepper through prev() as well as next().
"""

import time
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from algorithms.state import INF
from engine.stepper import Stepper


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    start:              str             = ""
    end:                str             = ""
    vertices_finalized: int             = 0
    edges_examined:     int             = 0
    relaxations:        int             = 0      # edge checks that improved a distance
    path:               List[str]       = field(default_factory=list)
    path_cost:          Optional[float] = None   # None while `end` is unreached
    total_steps:        int             = 0
    wall_time_ms:       float           = 0.0    # only set by run_to_completion
    path_found:         bool            = False
    finished:           bool            = False


class Recorder:
    """
    Attributes:
        stepper : The Stepper whose run is being measured.
        metrics : Last computed RunMetrics.
    """

    def __init__(self, stepper: Stepper):
        self.stepper: Stepper              = stepper
        self.metrics: Optional[RunMetrics] = None
        self._wall_ms: float               = 0.0

    def run_to_completion(self, max_steps: Optional[int] = None) -> RunMetrics:
        """Drive the stepper until done and return the final metrics."""
        t0 = time.monotonic()
        self.stepper.run_to_completion(max_steps)
        self._wall_ms = (time.monotonic() - t0) * 1000
        return self.get_metrics()

    def get_metrics(self) -> RunMetrics:
        self.metrics = self._compute_metrics()
        return self.metrics

    def export(self) -> Dict[str, Any]:
        metrics = self.metrics or self.get_metrics()
        return {
            "start":     self.stepper.start,
            "end":       self.stepper.end,
            "graph":     self.stepper.graph.to_dict(),
            "metrics":   asdict(metrics),
            "snapshots": self.stepper.history.export(),
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self) -> RunMetrics:
        stepper   = self.stepper
        snapshots = stepper.history.snapshots()
        first, last = snapshots[0], snapshots[-1]

        edges_examined = 0
        relaxations    = 0
        for before, after in zip(snapshots, snapshots[1:]):
            if before.current_edge is None and after.current_edge is not None:
                edges_examined += 1
            if any(after.distance(v) < before.distance(v) for v in after.distances):
                relaxations += 1

        cost = last.distance(stepper.end)
        path = stepper.path
        return RunMetrics(
            start=stepper.start,
            end=stepper.end,
            vertices_finalized=len(first.unvisited) - len(last.unvisited),
            edges_examined=edges_examined,
            relaxations=relaxations,
            path=path,
            path_cost=None if cost == INF else cost,
            total_steps=stepper.step_count,
            wall_time_ms=round(self._wall_ms, 2),
            path_found=bool(path),
            finished=last.is_done,
        )
