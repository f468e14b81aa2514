"""
vertex.py — Graph Vertex
========================
A vertex is nothing more than its identifier.  Positions, colours and
labels belong to the renderer, which keeps its own layout keyed by id.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Vertex:
    """
    Attributes:
        id : Unique, hashable identifier (e.g. "A").
    """

    id: str

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"id": self.id}

    @classmethod
    def from_dict(cls, data: dict) -> "Vertex":
        return cls(id=str(data["id"]))

    def __repr__(self) -> str:
        return f"Vertex({self.id})"
