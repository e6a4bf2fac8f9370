"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS traversal from a start node.

  1. Dequeue a node               →  VISIT
  2. Enqueue each unseen neighbour →  DISCOVER_EDGE (the edge that found it)
  3. Queue empty                   →  COMPLETE with both logs

A node is marked visited the moment it is ENQUEUED, so it can never sit
in the queue twice.  Neighbours are explored in edge-collection order
(see Graph.neighbours).
"""

from collections import deque
from typing import Dict, List, Optional

from graph import Graph
from algorithms.step import Outcome, OutcomeStatus, Step, StepGenerator, StepKind


# ---------------------------------------------------------------------------
# Pseudocode — each string is one displayed line; index = pseudocode_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(graph, start):",                   # 0
    "    queue ← [start]",                      # 1
    "    visited ← {start}",                    # 2
    "    while queue is not empty:",            # 3
    "        node ← queue.dequeue()",           # 4
    "        for neighbour in adj(node):",      # 5
    "            if neighbour not visited:",    # 6
    "                visited.add(neighbour)",   # 7
    "                queue.enqueue(neighbour)", # 8
]


def bfs(graph: Graph, start: str) -> StepGenerator:
    graph.require_node(start, "start")

    queue   = deque([start])
    visited = {start}
    parent: Dict[str, Optional[str]] = {start: None}
    order:  List[str] = []
    edges:  List[str] = []

    while queue:
        node = queue.popleft()
        order.append(node)
        yield Step(
            StepKind.VISIT,
            {"node": node, "queue": tuple(queue)},
            f"Dequeue '{node}'. BFS always expands the node discovered earliest (FIFO).",
            4,
        )

        for nbr, edge in graph.neighbours(node):
            if nbr in visited:
                continue
            visited.add(nbr)
            parent[nbr] = node
            queue.append(nbr)
            edges.append(edge.id)
            yield Step(
                StepKind.DISCOVER_EDGE,
                {"edge": edge.id, "from": node, "to": nbr, "queue": tuple(queue)},
                f"Edge {node}→{nbr}: '{nbr}' is new, mark visited and enqueue.",
                8,
            )

    yield Step(StepKind.COMPLETE, {"order": tuple(order), "edges": tuple(edges)}, "Queue is empty, traversal complete.", 3)
    return Outcome(
        OutcomeStatus.COMPLETED, graph,
        f"Breadth-first order from {start}: {' → '.join(order)}",
        {"order": order, "edges": edges, "parents": parent},
    )


def reconstruct(parent: Dict[str, Optional[str]], target: str) -> Optional[List[str]]:
    """Walk predecessor pointers back from target.  None if target was never reached."""
    if target not in parent:
        return None
    path: List[str] = []
    cur: Optional[str] = target
    while cur is not None:
        path.append(cur)
        cur = parent.get(cur)
    path.reverse()
    return path
