"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based Dijkstra with a LINEAR SCAN for the next node (no heap):
with at most 26 nodes the scan is cheap and its tie-break is easy to
explain: the first node (in node order) holding the minimum wins.

Yields a Step at:
  1. Each selection of the closest unvisited node   →  SELECT
  2. Each relaxation that improves a distance       →  RELAX
  3. Target selected                                →  PATH
  4. Only ∞ distances remain                        →  UNREACHABLE

Weights are positive integers (Graph enforces it), so the greedy
finalisation is sound.

Unreachable is reported explicitly: status UNREACHABLE and path None.
start == target is a valid one-node path with distance 0, never
confused with "no path".
"""

import math
from typing import Dict, List, Optional

from graph import Graph
from algorithms.bfs import reconstruct
from algorithms.step import Outcome, OutcomeStatus, Step, StepGenerator, StepKind
from structures import ValidationError


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, start, target):",              # 0
    "    dist ← {v: ∞ for v in V};  dist[start] ← 0",   # 1
    "    unvisited ← V",                                # 2
    "    while unvisited is not empty:",                # 3
    "        node ← argmin dist over unvisited",        # 4
    "        if dist[node] == ∞: return NOT REACHABLE", # 5
    "        if node == target: return path",          # 6
    "        unvisited.remove(node)",                   # 7
    "        for (neighbour, w) in adj(node):",         # 8
    "            if dist[node] + w < dist[neighbour]:", # 9
    "                dist[neighbour] ← dist[node] + w", # 10
    "                prev[neighbour] ← node",           # 11
]


def dijkstra(graph: Graph, start: str, target: Optional[str] = None) -> StepGenerator:
    graph.require_node(start, "start")
    if not target:
        raise ValidationError("Please select a target node for Dijkstra's algorithm", "target")
    graph.require_node(target, "target")

    INF = math.inf
    dist:   Dict[str, float]         = {nid: INF for nid in graph.nodes}
    prev:   Dict[str, Optional[str]] = {start: None}
    dist[start] = 0

    unvisited: List[str] = graph.node_ids()
    order:     List[str] = []
    relaxed:   List[str] = []

    while unvisited:
        current: Optional[str] = None
        best = INF
        for nid in unvisited:
            if dist[nid] < best:
                best    = dist[nid]
                current = nid

        if current is None:
            break

        order.append(current)
        yield Step(
            StepKind.SELECT,
            {"node": current, "distance": best, "distances": _snapshot(dist)},
            f"Select '{current}': smallest tentative distance ({best}) among unvisited nodes. It is now final.",
            4,
        )

        if current == target:
            break

        unvisited.remove(current)

        for nbr, edge in graph.neighbours(current):
            if nbr not in unvisited:
                continue
            alt = dist[current] + edge.weight
            if alt < dist[nbr]:
                before    = dist[nbr]
                dist[nbr] = alt
                prev[nbr] = current
                relaxed.append(edge.id)
                yield Step(
                    StepKind.RELAX,
                    {"edge": edge.id, "from": current, "node": nbr, "distance": alt, "distances": _snapshot(dist)},
                    f"Relax {current}→{nbr}: {dist[current]} + {edge.weight} = {alt} < {_fmt(before)} → update.",
                    10,
                )

    if dist[target] == INF:
        yield Step(
            StepKind.UNREACHABLE,
            {"start": start, "target": target, "order": tuple(order)},
            f"Every remaining node is at distance ∞, so '{target}' cannot be reached from '{start}'.",
            5,
        )
        return Outcome(
            OutcomeStatus.UNREACHABLE, graph, f"No path found from {start} to {target}",
            {"order": order, "relaxed": relaxed, "path": None, "distance": None},
        )

    path     = reconstruct(prev, target)
    distance = int(dist[target])
    yield Step(
        StepKind.PATH,
        {"path": tuple(path), "distance": distance, "order": tuple(order)},
        f"🎯 Target '{target}' reached. Follow predecessors back: {' → '.join(path)}.",
        6,
    )
    return Outcome(
        OutcomeStatus.PATH_FOUND, graph,
        f"Shortest path {start}→{target}: {'→'.join(path)} (distance {distance})",
        {"order": order, "relaxed": relaxed, "path": path, "distance": distance},
    )


def _snapshot(dist: Dict[str, float]) -> Dict[str, Optional[float]]:
    # ∞ is not valid JSON; None stands in for "not reached yet"
    return {k: (None if v == math.inf else v) for k, v in dist.items()}


def _fmt(d: float) -> str:
    return "∞" if d == math.inf else str(d)
