"""
graph.py — Graph Container & Generator
=======================================
Single source of truth for the graph.  Algorithms and the API layer
both talk to this object.

Responsibilities:
  1. Validated CRUD on nodes & edges        (add / remove / get)
  2. Adjacency queries                      (neighbours, get_edge_between, …)
  3. Random generation                      (circle layout, positive weights)
  4. Import from adjacency-list text        (text → graph)
  5. Serialisation round-trip               (to_dict / from_dict)

Invariants:
  - Simple and undirected: no self-loops, at most one edge per
    unordered pair.
  - At most MAX_NODES nodes, each labelled with one letter "A".."Z", so
    edge ids ("A-C") never collide.
  - Weights are positive integers.

Design decisions:
  - Nodes & edges stored in insertion-ordered dicts keyed by id.
  - A separate adjacency dict `_adj[node_id] → [(neighbour_id, edge_id)]`
    is maintained incrementally.  Because entries are appended as edges
    are created, neighbours() lists a node's edges in edge-collection
    order, which the traversal algorithms use as their exploration
    order.
  - Every mutator validates first and raises ValidationError before
    touching any state.
"""

import math
import random
import string
from typing import Dict, List, Optional, Set, Tuple

from graph.node import Node
from graph.edge import Edge
from structures.errors import ValidationError, require_int, require_number


MAX_NODES = 26

# canvas geometry for auto-layout
CENTER_X = 200.0
CENTER_Y = 150.0
RADIUS   = 120.0


class Graph:
    """
    Attributes:
        nodes : {node_id: Node}
        edges : {edge_id: Edge}
        _adj  : {node_id: [(neighbour_id, edge_id), …]}
    """

    def __init__(self):
        self.nodes: Dict[str, Node] = {}
        self.edges: Dict[str, Edge] = {}
        self._adj:  Dict[str, List[Tuple[str, str]]] = {}

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(self, node_id: str, x: float = CENTER_X, y: float = CENTER_Y) -> Node:
        if not node_id:
            raise ValidationError("Node label is required", "node")
        if not isinstance(node_id, str) or len(node_id) != 1 or node_id not in string.ascii_uppercase:
            raise ValidationError(f"Node label must be a single letter A-Z, got '{node_id}'", "node")
        if node_id in self.nodes:
            raise ValidationError(f"Node {node_id} already exists", "node")
        if len(self.nodes) >= MAX_NODES:
            raise ValidationError("Maximum number of nodes reached", "node")
        node = Node(node_id=node_id, x=require_number(x, "x"), y=require_number(y, "y"))
        self.nodes[node.id] = node
        self._adj[node.id]  = []
        return node

    def add_next_node(self) -> Node:
        """Create the first free letter label, placed at the canvas centre."""
        if len(self.nodes) >= MAX_NODES:
            raise ValidationError("Maximum number of nodes reached", "node")
        for letter in string.ascii_uppercase:
            if letter not in self.nodes:
                return self.add_node(letter)
        raise ValidationError("No free node label left", "node")

    def remove_node(self, node_id: str) -> List[Edge]:
        """Remove a node and every edge touching it.  Returns the removed edges."""
        self.require_node(node_id, "node")
        touching = [e for e in self.edges.values() if e.touches(node_id)]
        for e in touching:
            self._drop_edge(e)
        del self.nodes[node_id]
        del self._adj[node_id]
        return touching

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, source: str, target: str, weight=1) -> Edge:
        if not source or not target:
            raise ValidationError("Please select source and target nodes", "source" if not source else "target")
        self.require_node(source, "source")
        self.require_node(target, "target")
        if source == target:
            raise ValidationError("Self-loops are not allowed", "target")
        if self.get_edge_between(source, target) is not None:
            raise ValidationError("Edge already exists", "target")
        w = require_int(weight, "weight")
        if w <= 0:
            raise ValidationError("Weight must be a positive number", "weight")

        edge = Edge(source=source, target=target, weight=w)
        self.edges[edge.id] = edge
        self._adj[source].append((target, edge.id))
        self._adj[target].append((source, edge.id))
        return edge

    def remove_edge(self, source: str, target: str) -> Edge:
        if not source or not target:
            raise ValidationError("Please select source and target nodes", "source" if not source else "target")
        edge = self.get_edge_between(source, target)
        if edge is None:
            raise ValidationError("Edge does not exist", "target")
        self._drop_edge(edge)
        return edge

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        for _, eid in self._adj.get(a, []):
            e = self.edges[eid]
            if e.connects(a, b):
                return e
        return None

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[Tuple[str, Edge]]:
        """[(neighbour_id, edge)] in edge-collection order."""
        return [(nbr, self.edges[eid]) for nbr, eid in self._adj.get(node_id, [])]

    def component(self, start: str) -> Set[str]:
        """Node ids in the connected component containing `start`."""
        self.require_node(start, "start")
        seen  = {start}
        stack = [start]
        while stack:
            cur = stack.pop()
            for nbr, _ in self.neighbours(cur):
                if nbr not in seen:
                    seen.add(nbr)
                    stack.append(nbr)
        return seen

    # ==================================================================
    # SERIALISATION / COPY
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes.values()],
            "edges": [e.to_dict() for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        """Rebuild through the validating mutators, so bad input is rejected."""
        g = cls()
        for nd in data.get("nodes", []):
            node = Node.from_dict(nd)
            g.add_node(node.id, node.x, node.y)
        for ed in data.get("edges", []):
            g.add_edge(ed["source"], ed["target"], ed.get("weight", 1))
        return g

    def copy(self) -> "Graph":
        return Graph.from_dict(self.to_dict())

    # ==================================================================
    # GENERATORS
    # ==================================================================
    @classmethod
    def generate_random(
        cls,
        min_nodes: int = 5,
        max_nodes: int = 8,
        min_edges: int = 6,
        max_edges: int = 12,
        weight_range: Tuple[int, int] = (1, 9),
        seed: Optional[int] = None,
    ) -> "Graph":
        """
        Nodes "A", "B", … on a circle; edges between random distinct
        pairs.  The edge count is clamped to the number of possible pairs
        so small graphs cannot loop forever looking for a free pair.
        """
        rng = random.Random(seed)
        g   = cls()

        count = rng.randint(min_nodes, min(max_nodes, MAX_NODES))
        for i in range(count):
            angle = 2 * math.pi * i / count
            g.add_node(
                string.ascii_uppercase[i],
                x=CENTER_X + RADIUS * math.cos(angle),
                y=CENTER_Y + RADIUS * math.sin(angle),
            )

        ids       = g.node_ids()
        free      = [(a, b) for i, a in enumerate(ids) for b in ids[i + 1:]]
        wanted    = min(rng.randint(min_edges, max_edges), len(free))
        for a, b in rng.sample(free, wanted):
            if rng.random() < 0.5:
                a, b = b, a
            g.add_edge(a, b, rng.randint(*weight_range))
        return g

    @classmethod
    def from_adjacency_list(cls, text: str) -> "Graph":
        """
        Parse a simple text adjacency list, one node per line:

            A: B C D            → A connects to B, C, D  (weight 1)
            A: B(3) C(7)        → weights in parentheses
            A -> B, C           → alternate arrow syntax

        An edge listed from both ends is created once.  Lines starting
        with '#' are ignored.  Nodes are laid out on a circle.
        """
        adjacency: Dict[str, List[Tuple[str, str]]] = {}

        for line in text.strip().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            for sep in (":", "->", "→"):
                if sep in line:
                    src, rest = line.split(sep, 1)
                    break
            else:
                raise ValidationError(f"Cannot parse line: '{line}'", "text")

            src = src.strip()
            adjacency.setdefault(src, [])
            for token in rest.replace(",", " ").split():
                if "(" in token and token.endswith(")"):
                    tgt, w_str = token[:-1].split("(", 1)
                else:
                    tgt, w_str = token, "1"
                adjacency.setdefault(tgt, [])
                adjacency[src].append((tgt, w_str))

        g = cls()
        labels = list(adjacency)
        for i, label in enumerate(labels):
            angle = 2 * math.pi * i / len(labels)
            g.add_node(label, x=CENTER_X + RADIUS * math.cos(angle), y=CENTER_Y + RADIUS * math.sin(angle))

        for src, targets in adjacency.items():
            for tgt, w_str in targets:
                if src != tgt and g.get_edge_between(src, tgt) is not None:
                    continue
                g.add_edge(src, tgt, w_str)
        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def require_node(self, node_id: str, field: str) -> None:
        if not node_id:
            raise ValidationError(f"Please select a {field} node", field)
        if node_id not in self.nodes:
            raise ValidationError(f"Unknown node '{node_id}'", field)

    def _drop_edge(self, edge: Edge) -> None:
        for end in (edge.source, edge.target):
            self._adj[end][:] = [(n, eid) for n, eid in self._adj[end] if eid != edge.id]
        del self.edges[edge.id]

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"
