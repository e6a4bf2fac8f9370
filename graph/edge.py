"""
edge.py — Graph Edge
====================
Undirected, weighted connection between two nodes.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - The id is derived from the endpoints in creation order ("A-C"), so
    the event stream can name an edge without a lookup table.
  - source/target only record creation order; traversal works from
    either end.
"""


class Edge:
    """
    Attributes:
        id     : "<source>-<target>".
        source : Node id the edge was drawn from.
        target : Node id the edge was drawn to.
        weight : Positive integer cost.
    """

    __slots__ = ("id", "source", "target", "weight")

    def __init__(self, source: str, target: str, weight: int = 1):
        self.id:     str = f"{source}-{target}"
        self.source: str = source
        self.target: str = target
        self.weight: int = weight

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def connects(self, node_a: str, node_b: str) -> bool:
        """True if this edge links node_a ↔ node_b (either direction)."""
        return {self.source, self.target} == {node_a, node_b}

    def touches(self, node_id: str) -> bool:
        return node_id == self.source or node_id == self.target

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":     self.id,
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
        }

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self.source} ↔ {self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
