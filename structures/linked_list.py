"""
linked_list.py — Singly Linked List Model
==========================================
A list of ListNode records.  Each node keeps its id for life, so a
renderer can key on it while positions (plain indices) shift around
after inserts and removals.
"""

import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

from structures.errors import ValidationError, require_index, require_int
from structures.ids import next_id


@dataclass(frozen=True)
class ListNode:
    value: int
    id:    str

    def to_dict(self) -> dict:
        return {"value": self.value, "id": self.id}


class LinkedList:

    def __init__(self, nodes: Optional[Sequence[ListNode]] = None):
        self.nodes: List[ListNode] = list(nodes or [])

    @classmethod
    def from_values(cls, values: Sequence[int]) -> "LinkedList":
        return cls([ListNode(value=require_int(v, "value"), id=next_id("l")) for v in values])

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def insert(self, value, position=None) -> ListNode:
        value = require_int(value, "value")
        pos   = len(self.nodes) if position is None or position == "" else require_index(position, "position", len(self.nodes) + 1)
        node  = ListNode(value=value, id=next_id("l"))
        self.nodes.insert(pos, node)
        return node

    def remove(self, position) -> ListNode:
        if not self.nodes:
            raise ValidationError("Linked list is empty", "position")
        pos = require_index(position, "position", len(self.nodes))
        return self.nodes.pop(pos)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def values(self) -> List[int]:
        return [n.value for n in self.nodes]

    def ids(self) -> List[str]:
        return [n.id for n in self.nodes]

    def position_of(self, node_id: str) -> Optional[int]:
        for i, n in enumerate(self.nodes):
            if n.id == node_id:
                return i
        return None

    # ------------------------------------------------------------------
    # Copy / serialisation
    # ------------------------------------------------------------------
    def copy(self) -> "LinkedList":
        # ListNode is frozen, so sharing the records is safe
        return LinkedList(self.nodes)

    def to_dict(self) -> dict:
        return {"nodes": [n.to_dict() for n in self.nodes]}

    @classmethod
    def from_dict(cls, data: dict) -> "LinkedList":
        nodes = []
        for nd in data.get("nodes", []):
            nodes.append(ListNode(value=require_int(nd["value"], "value"), id=nd.get("id") or next_id("l")))
        return cls(nodes)

    @classmethod
    def generate_random(
        cls,
        min_size: int = 3,
        max_size: int = 8,
        max_value: int = 99,
        seed: Optional[int] = None,
    ) -> "LinkedList":
        rng  = random.Random(seed)
        size = rng.randint(min_size, max_size)
        return cls.from_values([rng.randint(0, max_value) for _ in range(size)])

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[ListNode]:
        return iter(self.nodes)

    def __repr__(self) -> str:
        return "LinkedList(" + " → ".join(str(n.value) for n in self.nodes) + ")"
