"""
bst.py — Binary Search Tree Operations
=======================================
Generator-based insert, delete, search and the four classic traversals.

Read-only descent happens on the caller's tree; a working copy is made
only once we know the tree will actually change.  That gives the
identity contract from algorithms/step.py for free:

    outcome.structure is tree   →  nothing changed (absent / duplicate)
    outcome.structure is not tree → a mutated working copy

Delete follows the textbook three cases:
  1. leaf            → unlink it
  2. one child       → splice the child into the parent's slot
  3. two children    → copy the in-order successor's value (leftmost node
                       of the right subtree) into the node, then delete
                       the successor from the right subtree
"""

from collections import deque
from enum import Enum
from typing import Generator, List, Optional

from algorithms.step import Outcome, OutcomeStatus, Step, StepGenerator, StepKind
from structures import BinarySearchTree, TreeNode, ValidationError, require_int


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
SEARCH_PSEUDOCODE: List[str] = [
    "node ← root",                                     # 0
    "while node is not null:",                         # 1
    "    if value == node.value: return node",         # 2
    "    node ← node.left if value < node.value",      # 3
    "           else node.right",                      # 4
    "return NOT FOUND",                                # 5
]

INSERT_PSEUDOCODE: List[str] = [
    "node ← root",                                     # 0
    "while node is not null:",                         # 1
    "    if value == node.value: mark node; return",   # 2
    "    descend left / right",                        # 3
    "attach new node in the empty slot",               # 4
]

DELETE_PSEUDOCODE: List[str] = [
    "find node with value",                            # 0
    "if leaf: remove it",                              # 1
    "elif one child: splice child into parent slot",   # 2
    "else: succ ← leftmost(node.right)",               # 3
    "      node.value ← succ.value",                   # 4
    "      delete succ.value from node.right",         # 5
]

TRAVERSAL_PSEUDOCODE: List[str] = [
    "inorder(n):   inorder(n.left);  visit(n);  inorder(n.right)",    # 0
    "preorder(n):  visit(n);  preorder(n.left);  preorder(n.right)",  # 1
    "postorder(n): postorder(n.left);  postorder(n.right);  visit(n)",# 2
    "levelorder:   queue ← [root]; pop, visit, push left then right", # 3
]


class TraversalOrder(Enum):
    INORDER    = "inorder"
    PREORDER   = "preorder"
    POSTORDER  = "postorder"
    LEVELORDER = "levelorder"

    @classmethod
    def parse(cls, raw) -> "TraversalOrder":
        if isinstance(raw, TraversalOrder):
            return raw
        try:
            return cls(str(raw).lower())
        except ValueError:
            choices = ", ".join(o.value for o in cls)
            raise ValidationError(f"Traversal order must be one of {choices}", "order") from None


def _visit(node: TreeNode, explanation: str, line: int = -1) -> Step:
    return Step(StepKind.VISIT, {"id": node.id, "value": node.value}, explanation, line)


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------
def search(tree: BinarySearchTree, value) -> StepGenerator:
    target = require_int(value, "value")
    parent: Optional[str] = None
    side:   Optional[str] = None
    path:   List[str]     = []

    node = tree.get(tree.root)
    while node is not None:
        path.append(node.id)
        if target == node.value:
            yield _visit(node, f"{target} == {node.value}.", 2)
            yield Step(StepKind.FOUND, {"id": node.id, "value": node.value}, f"🎯 Found {target}.", 2)
            return Outcome(OutcomeStatus.FOUND, tree, f"Found {target} in the tree", {"id": node.id, "path": path})

        side = "left" if target < node.value else "right"
        yield _visit(node, f"{target} {'<' if side == 'left' else '>'} {node.value} → go {side}.", 3 if side == "left" else 4)
        parent = node.id
        node   = tree.get(getattr(node, side))

    yield Step(
        StepKind.NOT_FOUND,
        {"parent": parent, "side": side, "value": target},
        f"Reached an empty slot: {target} is not in the tree.",
        5,
    )
    return Outcome(OutcomeStatus.NOT_FOUND, tree, f"Value {target} not found in the tree", {"id": None, "path": path})


# ---------------------------------------------------------------------------
# Insert
# ---------------------------------------------------------------------------
def insert(tree: BinarySearchTree, value) -> StepGenerator:
    target = require_int(value, "value")
    parent: Optional[str] = None
    side:   Optional[str] = None
    path:   List[str]     = []

    node = tree.get(tree.root)
    while node is not None:
        path.append(node.id)
        if target == node.value:
            yield _visit(node, f"{target} == {node.value}.", 2)
            yield Step(StepKind.TOUCH, {"id": node.id, "value": node.value}, f"{target} is already in the tree, nothing to insert.", 2)
            return Outcome(
                OutcomeStatus.DUPLICATE, tree, f"Value {target} already exists in the tree",
                {"id": node.id, "path": path},
            )
        side = "left" if target < node.value else "right"
        yield _visit(node, f"{target} {'<' if side == 'left' else '>'} {node.value} → go {side}.", 3)
        parent = node.id
        node   = tree.get(getattr(node, side))

    work  = tree.copy()
    fresh = work.new_node(target)
    if parent is None:
        work.root = fresh.id
    else:
        setattr(work.node(parent), side, fresh.id)

    where = f"{side} child of {work.node(parent).value}" if parent else "root"
    yield Step(
        StepKind.INSERT,
        {"id": fresh.id, "value": target, "parent": parent, "side": side},
        f"Empty slot found, attach {target} as the {where}.",
        4,
    )
    return Outcome(OutcomeStatus.INSERTED, work, f"Inserted {target} into the tree", {"id": fresh.id, "path": path})


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------
def delete(tree: BinarySearchTree, value) -> StepGenerator:
    target = require_int(value, "value")
    parent: Optional[str] = None
    side:   Optional[str] = None

    node = tree.get(tree.root)
    while node is not None and node.value != target:
        side = "left" if target < node.value else "right"
        yield _visit(node, f"{target} {'<' if side == 'left' else '>'} {node.value} → go {side}.", 0)
        parent = node.id
        node   = tree.get(getattr(node, side))

    if node is None:
        yield Step(StepKind.NOT_FOUND, {"parent": parent, "side": side, "value": target}, f"{target} is not in the tree.", 0)
        return Outcome(OutcomeStatus.NOT_FOUND, tree, f"Value {target} not found in the tree", {"id": None})

    yield _visit(node, f"Found {target}, delete it.", 0)

    work        = tree.copy()
    replacement = yield from _unlink(work, node.id)
    if parent is None:
        work.root = replacement
    else:
        setattr(work.node(parent), side, replacement)

    return Outcome(OutcomeStatus.DELETED, work, f"Removed {target} from the tree", {"id": node.id})


def _unlink(work: BinarySearchTree, node_id: str) -> Generator[Step, None, Optional[str]]:
    """Remove `node_id` from its subtree.  Returns the id that now fills its slot."""
    node = work.node(node_id)

    if node.is_leaf:
        work.discard(node_id)
        yield Step(StepKind.REMOVE, {"id": node_id, "value": node.value, "case": "leaf"}, f"{node.value} is a leaf, remove it.", 1)
        return None

    if node.left is None or node.right is None:
        child = node.left if node.left is not None else node.right
        work.discard(node_id)
        yield Step(
            StepKind.REMOVE,
            {"id": node_id, "value": node.value, "case": "splice", "child": child},
            f"{node.value} has one child: splice {work.node(child).value} into its place.",
            2,
        )
        return child

    succ = work.node(node.right)
    while succ.left is not None:
        succ = work.node(succ.left)
    yield Step(
        StepKind.SUCCESSOR,
        {"id": succ.id, "value": succ.value, "of": node_id},
        f"Two children: in-order successor is {succ.value} (leftmost in right subtree).",
        3,
    )

    old = node.value
    node.value = succ.value
    yield Step(StepKind.REPLACE, {"id": node_id, "old": old, "value": succ.value}, f"Overwrite {old} with {succ.value}.", 4)

    node.right = yield from _delete_from(work, node.right, succ.value)
    return node_id


def _delete_from(work: BinarySearchTree, root_id: str, value: int) -> Generator[Step, None, Optional[str]]:
    """Delete `value` (known present) from the subtree at root_id; return the new subtree root."""
    node = work.node(root_id)
    if value < node.value:
        yield _visit(node, f"{value} < {node.value} → go left.", 5)
        node.left = yield from _delete_from(work, node.left, value)
        return root_id
    if value > node.value:
        yield _visit(node, f"{value} > {node.value} → go right.", 5)
        node.right = yield from _delete_from(work, node.right, value)
        return root_id
    yield _visit(node, f"Reached the successor's original position ({value}).", 5)
    return (yield from _unlink(work, root_id))


# ---------------------------------------------------------------------------
# Traversals
# ---------------------------------------------------------------------------
def traverse(tree: BinarySearchTree, order="inorder") -> StepGenerator:
    kind = TraversalOrder.parse(order)
    line = list(TraversalOrder).index(kind)

    if kind is TraversalOrder.LEVELORDER:
        visited = _level_order(tree)
    else:
        visited = []
        _recurse(tree, tree.root, kind, visited)

    for n in visited:
        yield _visit(n, f"Visit {n.value}.", line)

    ids = [n.id for n in visited]
    yield Step(
        StepKind.COMPLETE,
        {"order": tuple(ids), "values": tuple(n.value for n in visited)},
        f"{kind.value} traversal complete.",
        line,
    )
    return Outcome(
        OutcomeStatus.COMPLETED, tree, f"{kind.value} traversal complete",
        {"order": ids, "values": [n.value for n in visited]},
    )


def _recurse(tree: BinarySearchTree, node_id: Optional[str], kind: TraversalOrder, out: List[TreeNode]) -> None:
    node = tree.get(node_id)
    if node is None:
        return
    if kind is TraversalOrder.PREORDER:
        out.append(node)
    _recurse(tree, node.left, kind, out)
    if kind is TraversalOrder.INORDER:
        out.append(node)
    _recurse(tree, node.right, kind, out)
    if kind is TraversalOrder.POSTORDER:
        out.append(node)


def _level_order(tree: BinarySearchTree) -> List[TreeNode]:
    out: List[TreeNode] = []
    queue = deque([tree.root] if tree.root is not None else [])
    while queue:
        node = tree.node(queue.popleft())
        out.append(node)
        if node.left is not None:
            queue.append(node.left)
        if node.right is not None:
            queue.append(node.right)
    return out
