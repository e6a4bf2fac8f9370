"""
algorithms/__init__.py — Operation Registry
=============================================
Single source of truth for every operation the engine can animate.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict keyed "<structure>.<operation>":
    {
        "array.bubble_sort": AlgoInfo(key, structure, label, fn, pseudocode, params, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The engine and the API both
consume it, so adding an operation is: write the generator, add one
entry here.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from algorithms import array_ops, bst, linked_list, sorting
from algorithms.bfs      import bfs      as _bfs,      PSEUDOCODE as _bfs_pc
from algorithms.dfs      import dfs      as _dfs,      PSEUDOCODE as _dfs_pc
from algorithms.dijkstra import dijkstra as _dijkstra, PSEUDOCODE as _dij_pc
from algorithms.step     import Outcome, OutcomeStatus, Step, StepKind, drain


STRUCTURES = ("array", "list", "tree", "graph")


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each operation
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "array.bubble_sort"
    structure:        str                    # one of STRUCTURES
    label:            str                    # human label, e.g. "Bubble Sort"
    fn:               Callable               # the generator function
    pseudocode:       List[str] = field(default_factory=list)
    required:         List[str] = field(default_factory=list)   # parameter names that must be given
    optional:         List[str] = field(default_factory=list)
    complexity_time:  str       = ""
    description:      str       = ""

    @property
    def params(self) -> List[str]:
        return self.required + self.optional

    def to_dict(self) -> dict:
        return {
            "key":         self.key,
            "structure":   self.structure,
            "label":       self.label,
            "pseudocode":  list(self.pseudocode),
            "required":    list(self.required),
            "optional":    list(self.optional),
            "complexity":  self.complexity_time,
            "description": self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {info.key: info for info in [

    # ---- array ----
    AlgoInfo(
        key="array.bubble_sort", structure="array", label="Bubble Sort",
        fn=sorting.bubble_sort, pseudocode=sorting.BUBBLE_PSEUDOCODE,
        optional=["direction"], complexity_time="O(n²)",
        description="Repeatedly swaps adjacent out-of-order pairs.",
    ),
    AlgoInfo(
        key="array.insertion_sort", structure="array", label="Insertion Sort",
        fn=sorting.insertion_sort, pseudocode=sorting.INSERTION_PSEUDOCODE,
        optional=["direction"], complexity_time="O(n²)",
        description="Shifts larger elements right to open a slot for each key.",
    ),
    AlgoInfo(
        key="array.selection_sort", structure="array", label="Selection Sort",
        fn=sorting.selection_sort, pseudocode=sorting.SELECTION_PSEUDOCODE,
        optional=["direction"], complexity_time="O(n²)",
        description="Finds the best remaining element and swaps it into place.",
    ),
    AlgoInfo(
        key="array.insert", structure="array", label="Insert Element",
        fn=array_ops.insert, required=["value"], optional=["index"], complexity_time="O(n)",
    ),
    AlgoInfo(
        key="array.remove", structure="array", label="Remove Element",
        fn=array_ops.remove, required=["index"], complexity_time="O(n)",
    ),
    AlgoInfo(
        key="array.search", structure="array", label="Linear Search",
        fn=array_ops.search, pseudocode=array_ops.SEARCH_PSEUDOCODE,
        required=["value"], complexity_time="O(n)",
    ),

    # ---- linked list ----
    AlgoInfo(
        key="list.insert", structure="list", label="Insert Node",
        fn=linked_list.insert, required=["value"], optional=["position"], complexity_time="O(n)",
    ),
    AlgoInfo(
        key="list.remove", structure="list", label="Remove Node",
        fn=linked_list.remove, required=["position"], complexity_time="O(n)",
    ),
    AlgoInfo(
        key="list.search", structure="list", label="Search",
        fn=linked_list.search, pseudocode=linked_list.SEARCH_PSEUDOCODE,
        required=["value"], complexity_time="O(n)",
    ),

    # ---- binary search tree ----
    AlgoInfo(
        key="tree.insert", structure="tree", label="BST Insert",
        fn=bst.insert, pseudocode=bst.INSERT_PSEUDOCODE, required=["value"], complexity_time="O(h)",
    ),
    AlgoInfo(
        key="tree.delete", structure="tree", label="BST Delete",
        fn=bst.delete, pseudocode=bst.DELETE_PSEUDOCODE, required=["value"], complexity_time="O(h)",
    ),
    AlgoInfo(
        key="tree.search", structure="tree", label="BST Search",
        fn=bst.search, pseudocode=bst.SEARCH_PSEUDOCODE, required=["value"], complexity_time="O(h)",
    ),
    AlgoInfo(
        key="tree.traverse", structure="tree", label="Traversal",
        fn=bst.traverse, pseudocode=bst.TRAVERSAL_PSEUDOCODE, optional=["order"], complexity_time="O(n)",
        description="inorder, preorder, postorder or levelorder.",
    ),

    # ---- graph ----
    AlgoInfo(
        key="graph.bfs", structure="graph", label="Breadth-First Search",
        fn=_bfs, pseudocode=_bfs_pc, required=["start"], complexity_time="O(V + E)",
        description="Explores layer-by-layer from the start node.",
    ),
    AlgoInfo(
        key="graph.dfs", structure="graph", label="Depth-First Search",
        fn=_dfs, pseudocode=_dfs_pc, required=["start"], complexity_time="O(V + E)",
        description="Dives deep before backtracking.",
    ),
    AlgoInfo(
        key="graph.dijkstra", structure="graph", label="Dijkstra's Algorithm",
        fn=_dijkstra, pseudocode=_dij_pc, required=["start", "target"], complexity_time="O(V²)",
        description="Greedily finalises the closest node. Optimal for positive weights.",
    ),
]}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered operations in insertion order."""
    return list(REGISTRY.values())


def algorithms_for(structure: str) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.structure == structure]


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "STRUCTURES",
    "get_algorithm",
    "list_algorithms",
    "algorithms_for",
    "Step",
    "StepKind",
    "Outcome",
    "OutcomeStatus",
    "drain",
]
