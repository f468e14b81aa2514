"""
history.py — Snapshot Undo Stack
================================
Append-only log of SearchState snapshots.  The bottom entry is the
initial state of the run; every forward step pushes one more.

Snapshots are stored in their `to_dict()` form, i.e. plain JSON-safe
values: nothing in the log can alias the live state, and infinite
distances go through the same null round-trip as the HTTP layer.
`undo()` rebuilds the state with `SearchState.from_dict`, which puts
+inf back wherever a distance came out as null.
"""

import copy
import logging
from typing import Any, Dict, List, Optional

from algorithms.state import SearchState

logger = logging.getLogger(__name__)


class History:
    """
    Attributes:
        _snapshots : [serialised SearchState, …], oldest first.
    """

    def __init__(self, initial: Optional[SearchState] = None):
        self._snapshots: List[Dict[str, Any]] = []
        if initial is not None:
            self.clear(initial)

    def clear(self, initial: SearchState) -> None:
        """Drop everything and start a new log at `initial`."""
        self._snapshots = [initial.to_dict()]

    def record(self, state: SearchState) -> None:
        self._snapshots.append(state.to_dict())

    def undo(self) -> Optional[SearchState]:
        """
        Discard the newest snapshot and return the one beneath it.
        Returns None (and changes nothing) at the initial snapshot.
        """
        if len(self._snapshots) <= 1:
            return None
        self._snapshots.pop()
        logger.debug("Undo → depth %d", self.depth)
        return SearchState.from_dict(self._snapshots[-1])

    def latest(self) -> Optional[SearchState]:
        if not self._snapshots:
            return None
        return SearchState.from_dict(self._snapshots[-1])

    @property
    def depth(self) -> int:
        """Number of forward steps currently on the log."""
        return max(len(self._snapshots) - 1, 0)

    def snapshots(self) -> List[SearchState]:
        """Every archived state, oldest first, as fresh objects."""
        return [SearchState.from_dict(s) for s in self._snapshots]

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def export(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._snapshots)

    @classmethod
    def from_list(cls, data: List[Dict[str, Any]]) -> "History":
        h = cls()
        h._snapshots = [SearchState.from_dict(s).to_dict() for s in data]
        return h

    def __len__(self) -> int:
        return len(self._snapshots)
