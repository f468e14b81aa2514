"""
stepper.py — Step-by-Step Playback Facade
=========================================
The Stepper is the ONLY object the UI interacts with during a run.
It owns the DijkstraEngine, archives every snapshot it produces in a
History (enabling exact undo), and exposes next / prev / reset.

Lifecycle:
    Stepper(graph, start, end)      → initial snapshot, empty history
    next()                          → one micro-step, archived
    prev()                          → restore the previous snapshot
    reset(graph, start, end)        → fresh run, history cleared (not undoable)

Auto-play is the caller's job: call next() from a timer and stop
whenever you like.  The stepper never runs anything in the background.

Thread safety:
  This class is NOT thread-safe.  Drive it from a single thread.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from graph import Graph
from algorithms.state import SearchState, Phase
from algorithms.dijkstra import DijkstraEngine, initial_state, shortest_path
from engine.history import History

logger = logging.getLogger(__name__)


class Stepper:
    """
    Attributes:
        engine  : The DijkstraEngine for the current run.
        history : Snapshot log; bottom entry is the initial state.
        on_step : Optional callback(SearchState) fired every time the current
                  snapshot changes.  The UI hooks its re-render here.
    """

    def __init__(
        self,
        graph: Graph,
        start: str,
        end: str,
        on_step: Optional[Callable[[SearchState], None]] = None,
        history: Optional[History] = None,
    ):
        self.on_step: Optional[Callable[[SearchState], None]] = on_step
        if history:
            # resume a saved run at its newest snapshot
            self.history = history
            self.engine  = DijkstraEngine(graph, start, end, history.latest())
        else:
            self.history = History()
            self.initialize(graph, start, end)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def initialize(self, graph: Graph, start: str, end: str) -> SearchState:
        """Start a new run on (graph, start, end) and return its first snapshot."""
        state = initial_state(graph, start)
        self.engine = DijkstraEngine(graph, start, end, state)
        self.history.clear(state)
        logger.info(
            "New run %s → %s on %d vertices / %d edges",
            start, end, graph.vertex_count(), graph.edge_count(),
        )
        self._notify()
        return self.engine.state

    def reset(self, graph: Graph, start: str, end: str) -> None:
        """Discard the run and its history.  Not undoable."""
        self.initialize(graph, start, end)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next(self) -> bool:
        """Advance one micro-step.  Returns True iff the search is done."""
        before = self.engine.state
        done = self.engine.next()
        if self.engine.state is not before:
            self.history.record(self.engine.state)
            self._notify()
        return done

    def prev(self) -> bool:
        """Restore the previous snapshot.  Returns False at the initial one."""
        restored = self.history.undo()
        if restored is None:
            return False
        self.engine.state = restored
        self.engine.last_action = f"Stepped back to step {self.history.depth}."
        self._notify()
        return True

    def run_to_completion(self, max_steps: Optional[int] = None) -> int:
        """
        Call next() until the search is done (or `max_steps` calls were made).
        Returns the number of steps taken.
        """
        taken = 0
        while not self.engine.state.is_done:
            if max_steps is not None and taken >= max_steps:
                logger.warning("Stopped after %d steps without finishing", taken)
                break
            self.next()
            taken += 1
        return taken

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def state(self) -> SearchState:
        return self.engine.state

    @property
    def graph(self) -> Graph:
        return self.engine.graph

    @property
    def start(self) -> str:
        return self.engine.start

    @property
    def end(self) -> str:
        return self.engine.end

    @property
    def is_done(self) -> bool:
        return self.engine.state.is_done

    @property
    def step_count(self) -> int:
        return self.history.depth

    @property
    def phase(self) -> Phase:
        return self.engine.phase

    @property
    def pseudocode_line(self) -> int:
        return self.engine.pseudocode_line

    @property
    def last_action(self) -> str:
        return self.engine.last_action

    @property
    def path(self) -> List[str]:
        """Best path to `end` known so far (empty while unreached)."""
        return shortest_path(self.state.previous, self.start, self.end)

    # ------------------------------------------------------------------
    # Serialisation (whole run: graph, endpoints, history)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "graph":       self.graph.to_dict(),
            "start":       self.start,
            "end":         self.end,
            "history":     self.history.export(),
            "last_action": self.last_action,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Stepper":
        stepper = cls(
            Graph.from_dict(data["graph"]),
            data["start"],
            data["end"],
            history=History.from_list(data.get("history") or []),
        )
        stepper.engine.last_action = data.get("last_action", stepper.engine.last_action)
        return stepper

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _notify(self) -> None:
        if self.on_step:
            self.on_step(self.engine.state)
