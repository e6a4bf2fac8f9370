"""
tree.py — Binary Search Tree (arena)
=====================================
Nodes live in a flat dict keyed by id; a node refers to its children by
id instead of by object reference.  The tree object owns every node,
so there are no shared subtrees and no back-pointers.

Invariant (strict BST):
    every value in node.left's subtree  <  node.value  <  every value in node.right's subtree

Duplicates are never stored.  The mutating operations live in
algorithms/bst.py; they always work on `copy()` so the caller's tree
stays untouched.

Layout coordinates (see `layout`) are computed on demand and are not
part of the tree.  The renderer may cache them; the tree never reads them.
"""

import random
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from structures.errors import require_int
from structures.ids import next_id


@dataclass
class TreeNode:
    """
    Attributes:
        id    : Stable identity token.
        value : Key.
        left  : Id of the left child, or None for an empty slot.
        right : Id of the right child, or None.
    """

    id:    str
    value: int
    left:  Optional[str] = None
    right: Optional[str] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def to_dict(self) -> dict:
        return {"id": self.id, "value": self.value, "left": self.left, "right": self.right}


class BinarySearchTree:
    """
    Attributes:
        root   : Id of the root node (None when empty).
        _nodes : {node_id: TreeNode}, the arena.
    """

    def __init__(self):
        self.root:   Optional[str]       = None
        self._nodes: Dict[str, TreeNode] = {}

    # ==================================================================
    # Arena access
    # ==================================================================
    def node(self, node_id: str) -> TreeNode:
        return self._nodes[node_id]

    def get(self, node_id: Optional[str]) -> Optional[TreeNode]:
        if node_id is None:
            return None
        return self._nodes.get(node_id)

    def new_node(self, value: int) -> TreeNode:
        """Allocate a detached node in the arena; the caller links it in."""
        n = TreeNode(id=next_id("t"), value=value)
        self._nodes[n.id] = n
        return n

    def discard(self, node_id: str) -> None:
        self._nodes.pop(node_id, None)

    def find(self, value: int) -> Optional[TreeNode]:
        cur = self.get(self.root)
        while cur is not None:
            if value == cur.value:
                return cur
            cur = self.get(cur.left if value < cur.value else cur.right)
        return None

    # ==================================================================
    # Queries
    # ==================================================================
    def inorder(self) -> List[TreeNode]:
        out: List[TreeNode] = []
        stack: List[TreeNode] = []
        cur = self.get(self.root)
        while stack or cur is not None:
            while cur is not None:
                stack.append(cur)
                cur = self.get(cur.left)
            cur = stack.pop()
            out.append(cur)
            cur = self.get(cur.right)
        return out

    def inorder_values(self) -> List[int]:
        return [n.value for n in self.inorder()]

    def height(self) -> int:
        return self._height(self.root)

    def _height(self, node_id: Optional[str]) -> int:
        n = self.get(node_id)
        if n is None:
            return 0
        return 1 + max(self._height(n.left), self._height(n.right))

    def is_valid(self) -> bool:
        """Check the strict BST property over the whole tree."""
        vals = self.inorder_values()
        return all(a < b for a, b in zip(vals, vals[1:])) and len(vals) == len(self._nodes)

    def layout(self) -> Dict[str, Tuple[float, float]]:
        """
        Render coordinates {node_id: (x, y)}.  Each node is spread by the
        height of its own subtree so wide trees don't overlap:
            x = (pos + 1) * (max_width * 1.5 / (2**level + 1)),  y = level + 1
        """
        coords: Dict[str, Tuple[float, float]] = {}

        def place(node_id: Optional[str], level: int, pos: int) -> int:
            n = self.get(node_id)
            if n is None:
                return 0
            h = 1 + max(place(n.left, level + 1, pos * 2), place(n.right, level + 1, pos * 2 + 1))
            max_width = 2 ** h - 1
            coords[n.id] = ((pos + 1) * (max_width * 1.5 / (2 ** level + 1)), float(level + 1))
            return h

        place(self.root, 0, 0)
        return coords

    # ==================================================================
    # Construction
    # ==================================================================
    @classmethod
    def build_balanced(cls, values: Sequence[int]) -> "BinarySearchTree":
        """Middle-element recursion over the sorted, de-duplicated values."""
        ordered = sorted({require_int(v, "value") for v in values})
        tree = cls()

        def build(lo: int, hi: int) -> Optional[str]:
            if lo > hi:
                return None
            mid  = (lo + hi) // 2
            node = tree.new_node(ordered[mid])
            node.left  = build(lo, mid - 1)
            node.right = build(mid + 1, hi)
            return node.id

        tree.root = build(0, len(ordered) - 1)
        return tree

    @classmethod
    def generate_random(
        cls,
        min_size: int = 7,
        max_size: int = 15,
        max_value: int = 99,
        seed: Optional[int] = None,
    ) -> "BinarySearchTree":
        rng  = random.Random(seed)
        size = rng.randint(min_size, max_size)
        return cls.build_balanced([rng.randint(0, max_value) for _ in range(size)])

    def copy(self) -> "BinarySearchTree":
        """Private working copy; node ids are preserved."""
        clone = BinarySearchTree()
        clone.root = self.root
        clone._nodes = {
            nid: TreeNode(id=n.id, value=n.value, left=n.left, right=n.right)
            for nid, n in self._nodes.items()
        }
        return clone

    # ==================================================================
    # Serialisation
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "root":  self.root,
            "nodes": [n.to_dict() for n in self.inorder()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BinarySearchTree":
        tree = cls()
        for nd in data.get("nodes", []):
            tree._nodes[nd["id"]] = TreeNode(
                id=nd["id"],
                value=require_int(nd["value"], "value"),
                left=nd.get("left"),
                right=nd.get("right"),
            )
        tree.root = data.get("root")
        return tree

    # ==================================================================
    # Dunder
    # ==================================================================
    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[TreeNode]:
        return iter(self.inorder())

    def __contains__(self, value: int) -> bool:
        return self.find(value) is not None

    def __repr__(self) -> str:
        return f"BinarySearchTree(root={self.root}, size={len(self)})"
