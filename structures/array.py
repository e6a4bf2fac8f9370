"""
array.py — Array Model
=======================
Ordered sequence of integers.  The index is the only identity, so the
model is little more than a validated wrapper around a list.

Mutation happens only through insert / remove (and the sorting
algorithms, which always work on a copy).
"""

import random
from typing import Iterator, List, Optional, Sequence

from structures.errors import ValidationError, require_index, require_int


class ArrayModel:
    """
    Attributes:
        values : The underlying list.  Treat as read-only outside this class.
    """

    def __init__(self, values: Optional[Sequence[int]] = None):
        self.values: List[int] = [require_int(v, "value") for v in (values or [])]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def insert(self, value, index=None) -> int:
        """Insert `value` at `index` (default: append).  Returns the index used."""
        value = require_int(value, "value")
        pos   = len(self.values) if index is None or index == "" else require_index(index, "index", len(self.values) + 1)
        self.values.insert(pos, value)
        return pos

    def remove(self, index) -> int:
        """Remove and return the element at `index`."""
        if not self.values:
            raise ValidationError("Array is empty", "index")
        pos = require_index(index, "index", len(self.values))
        return self.values.pop(pos)

    # ------------------------------------------------------------------
    # Copy / serialisation
    # ------------------------------------------------------------------
    def copy(self) -> "ArrayModel":
        return ArrayModel(list(self.values))

    def to_dict(self) -> dict:
        return {"values": list(self.values)}

    @classmethod
    def from_dict(cls, data: dict) -> "ArrayModel":
        return cls(data.get("values", []))

    # ------------------------------------------------------------------
    # Generator
    # ------------------------------------------------------------------
    @classmethod
    def generate_random(
        cls,
        min_size: int = 5,
        max_size: int = 14,
        max_value: int = 99,
        seed: Optional[int] = None,
    ) -> "ArrayModel":
        rng  = random.Random(seed)
        size = rng.randint(min_size, max_size)
        return cls([rng.randint(0, max_value) for _ in range(size)])

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[int]:
        return iter(self.values)

    def __getitem__(self, idx: int) -> int:
        return self.values[idx]

    def __eq__(self, other) -> bool:
        return isinstance(other, ArrayModel) and self.values == other.values

    def __repr__(self) -> str:
        return f"ArrayModel({self.values})"
