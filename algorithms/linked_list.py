"""
linked_list.py — Linked-List Traversal Operations
==================================================
A singly linked list is only reachable from its head, so insert and
remove first walk node-by-node to the position (one VISIT per hop)
before the splice happens.
"""

from typing import List

from algorithms.step import Outcome, OutcomeStatus, Step, StepGenerator, StepKind
from structures import LinkedList, ValidationError, require_index, require_int


SEARCH_PSEUDOCODE: List[str] = [
    "node ← head;  pos ← 0",                     # 0
    "while node is not null:",                   # 1
    "    if node.value == value: return pos",    # 2
    "    node ← node.next;  pos ← pos + 1",      # 3
    "return NOT FOUND",                          # 4
]


def _walk(lst: LinkedList, stop: int, purpose: str) -> StepGenerator:
    for pos in range(stop):
        node = lst.nodes[pos]
        yield Step(
            StepKind.VISIT,
            {"position": pos, "id": node.id, "value": node.value},
            f"Follow next pointer to position {pos} ({purpose}).",
            3,
        )


def insert(lst: LinkedList, value, position=None) -> StepGenerator:
    value = require_int(value, "value")
    pos   = len(lst) if position is None or position == "" else require_index(position, "position", len(lst) + 1)

    yield from _walk(lst, pos, f"looking for insertion point {pos}")

    work = lst.copy()
    node = work.insert(value, pos)
    yield Step(
        StepKind.INSERT,
        {"position": pos, "id": node.id, "value": value},
        f"Link new node {value} in at position {pos}.",
    )
    return Outcome(OutcomeStatus.INSERTED, work, f"Added node with value {value} at position {pos}", {"position": pos, "id": node.id})


def remove(lst: LinkedList, position) -> StepGenerator:
    if not len(lst):
        raise ValidationError("Linked list is empty", "position")
    pos = require_index(position, "position", len(lst))

    yield from _walk(lst, pos, f"looking for position {pos}")

    work = lst.copy()
    node = work.remove(pos)
    yield Step(
        StepKind.REMOVE,
        {"position": pos, "id": node.id, "value": node.value},
        f"Unlink node {node.value} at position {pos}.",
    )
    return Outcome(OutcomeStatus.REMOVED, work, f"Removed node at position {pos}", {"position": pos, "id": node.id})


def search(lst: LinkedList, value) -> StepGenerator:
    target = require_int(value, "value")
    for pos, node in enumerate(lst.nodes):
        yield Step(StepKind.VISIT, {"position": pos, "id": node.id, "value": node.value}, f"Check node {node.value} at position {pos}.", 2)
        if node.value == target:
            yield Step(StepKind.FOUND, {"position": pos, "id": node.id}, f"🎯 Node at position {pos} holds {target}.", 2)
            return Outcome(OutcomeStatus.FOUND, lst, f"Found value {target} at position {pos}", {"position": pos, "id": node.id})
    yield Step(StepKind.NOT_FOUND, {"value": target}, f"Hit the null tail pointer without meeting {target}.", 4)
    return Outcome(OutcomeStatus.NOT_FOUND, lst, f"Value {target} not found in the linked list", {"position": None})
