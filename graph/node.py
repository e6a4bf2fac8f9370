"""
node.py — Graph Node
====================
A labelled vertex.  The label *is* the id ("A".."Z"), which keeps edge
ids readable ("A-C") and lets the UI show the id directly.

x / y are canvas coordinates used only by the renderer; no algorithm
reads them.
"""

from typing import Optional


class Node:
    """
    Attributes:
        id    : Unique label, e.g. "A".
        label : Human-readable name shown on the canvas (defaults to id).
        x, y  : Canvas coordinates.
    """

    __slots__ = ("id", "label", "x", "y")

    def __init__(
        self,
        node_id: str,
        x: float = 0.0,
        y: float = 0.0,
        label: Optional[str] = None,
    ):
        self.id:    str   = node_id
        self.label: str   = label or node_id
        self.x:     float = x
        self.y:     float = y

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":    self.id,
            "label": self.label,
            "x":     self.x,
            "y":     self.y,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(node_id=data["id"], x=data.get("x", 0.0), y=data.get("y", 0.0), label=data.get("label"))

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, pos=({self.x:.1f},{self.y:.1f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
