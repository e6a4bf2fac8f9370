"""
dfs.py — Depth-First Search
=============================
Recursive DFS: a node is marked visited on ENTRY, then its edges are
tried in edge-collection order; every edge that leads to an unseen node
is logged before the recursion descends through it.

Graphs are capped at 26 nodes, so Python's recursion limit is not a
concern.
"""

from typing import Generator, List, Set

from graph import Graph
from algorithms.step import Outcome, OutcomeStatus, Step, StepGenerator, StepKind


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(node):",                           # 0
    "    visited.add(node)",                    # 1
    "    for neighbour in adj(node):",          # 2
    "        if neighbour not visited:",        # 3
    "            DFS(neighbour)",               # 4
]


def dfs(graph: Graph, start: str) -> StepGenerator:
    graph.require_node(start, "start")

    visited: Set[str]  = set()
    order:   List[str] = []
    edges:   List[str] = []

    def visit(node: str, depth: int) -> Generator[Step, None, None]:
        visited.add(node)
        order.append(node)
        yield Step(
            StepKind.VISIT,
            {"node": node, "depth": depth},
            f"Enter '{node}' and mark it VISITED. DFS explores its neighbours before returning.",
            1,
        )
        for nbr, edge in graph.neighbours(node):
            if nbr in visited:
                continue
            edges.append(edge.id)
            yield Step(
                StepKind.DISCOVER_EDGE,
                {"edge": edge.id, "from": node, "to": nbr, "depth": depth},
                f"Edge {node}→{nbr}: '{nbr}' unseen, go deeper.",
                4,
            )
            yield from visit(nbr, depth + 1)

    yield from visit(start, 0)

    yield Step(StepKind.COMPLETE, {"order": tuple(order), "edges": tuple(edges)}, "Every reachable node explored.", 0)
    return Outcome(
        OutcomeStatus.COMPLETED, graph,
        f"Depth-first order from {start}: {' → '.join(order)}",
        {"order": order, "edges": edges},
    )
