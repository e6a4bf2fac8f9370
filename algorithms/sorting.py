"""
sorting.py — Comparison Sorts
==============================
Generator-based bubble, insertion and selection sort.  Each one works on
a private copy of the array and yields a Step at every comparison and
every data movement, so the emitted stream is a complete trace.

Ordering rule shared by all three: an element moves only when it is
STRICTLY out of order for the requested direction.  Equal keys are
never swapped.

Step order per algorithm:
  bubble    : PASS → (COMPARE → SWAP?)* → SETTLE            … → SORTED
  insertion : PASS → (COMPARE → SHIFT)* → COMPARE? → PLACE  … → SORTED
  selection : PASS → (COMPARE → SELECT_MIN?)* → SWAP? → SETTLE … → SORTED
"""

from enum import Enum
from typing import List

from algorithms.step import Outcome, OutcomeStatus, Step, StepGenerator, StepKind
from structures import ArrayModel, ValidationError


class Direction(Enum):
    ASC  = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, raw) -> "Direction":
        if isinstance(raw, Direction):
            return raw
        try:
            return cls(str(raw).lower())
        except ValueError:
            raise ValidationError(f"Direction must be 'asc' or 'desc', got '{raw}'", "direction") from None

    def out_of_order(self, left: int, right: int) -> bool:
        """True if `left` must end up after `right`."""
        return left > right if self is Direction.ASC else left < right


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
BUBBLE_PSEUDOCODE: List[str] = [
    "for i in 0 .. n-2:",                          # 0
    "    for j in 0 .. n-i-2:",                    # 1
    "        if a[j] out of order with a[j+1]:",   # 2
    "            swap(a[j], a[j+1])",              # 3
    "    a[n-1-i] is in place",                    # 4
]

INSERTION_PSEUDOCODE: List[str] = [
    "for i in 1 .. n-1:",                          # 0
    "    key ← a[i];  j ← i - 1",                  # 1
    "    while j ≥ 0 and a[j] out of order with key:",  # 2
    "        a[j+1] ← a[j];  j ← j - 1",           # 3
    "    a[j+1] ← key",                            # 4
]

SELECTION_PSEUDOCODE: List[str] = [
    "for i in 0 .. n-2:",                          # 0
    "    best ← i",                                # 1
    "    for j in i+1 .. n-1:",                    # 2
    "        if a[j] beats a[best]: best ← j",     # 3
    "    if best ≠ i: swap(a[i], a[best])",        # 4
    "    a[i] is in place",                        # 5
]


# ---------------------------------------------------------------------------
# Bubble sort
# ---------------------------------------------------------------------------
def bubble_sort(array: ArrayModel, direction="asc") -> StepGenerator:
    order = Direction.parse(direction)
    work  = array.copy()
    a     = work.values
    n     = len(a)

    for i in range(n - 1):
        yield Step(StepKind.PASS, {"pass": i}, f"Pass {i + 1}: bubble the next extreme value to the end.", 0)
        for j in range(n - i - 1):
            yield Step(
                StepKind.COMPARE,
                {"i": j, "j": j + 1, "left": a[j], "right": a[j + 1]},
                f"Compare a[{j}]={a[j]} with a[{j + 1}]={a[j + 1]}.",
                2,
            )
            if order.out_of_order(a[j], a[j + 1]):
                a[j], a[j + 1] = a[j + 1], a[j]
                yield Step(
                    StepKind.SWAP,
                    {"i": j, "j": j + 1, "values": tuple(a)},
                    f"Out of order, swap positions {j} and {j + 1}.",
                    3,
                )
        yield Step(StepKind.SETTLE, {"index": n - 1 - i}, f"Index {n - 1 - i} now holds its final value.", 4)

    return (yield from _finish(work, "Bubble"))


# ---------------------------------------------------------------------------
# Insertion sort
# ---------------------------------------------------------------------------
def insertion_sort(array: ArrayModel, direction="asc") -> StepGenerator:
    order = Direction.parse(direction)
    work  = array.copy()
    a     = work.values

    for i in range(1, len(a)):
        key = a[i]
        j   = i - 1
        yield Step(StepKind.PASS, {"pass": i - 1, "index": i, "key": key}, f"Take key {key} from index {i}.", 1)

        while j >= 0:
            yield Step(
                StepKind.COMPARE,
                {"i": j, "j": j + 1, "left": a[j], "right": key},
                f"Compare a[{j}]={a[j]} with key {key}.",
                2,
            )
            if not order.out_of_order(a[j], key):
                break
            a[j + 1] = a[j]
            yield Step(
                StepKind.SHIFT,
                {"from": j, "to": j + 1, "values": tuple(a)},
                f"Shift {a[j]} right from index {j} to {j + 1}.",
                3,
            )
            j -= 1

        a[j + 1] = key
        yield Step(StepKind.PLACE, {"index": j + 1, "value": key, "values": tuple(a)}, f"Drop key {key} at index {j + 1}.", 4)

    return (yield from _finish(work, "Insertion"))


# ---------------------------------------------------------------------------
# Selection sort
# ---------------------------------------------------------------------------
def selection_sort(array: ArrayModel, direction="asc") -> StepGenerator:
    order = Direction.parse(direction)
    work  = array.copy()
    a     = work.values
    n     = len(a)

    for i in range(n - 1):
        best = i
        yield Step(StepKind.PASS, {"pass": i, "index": i}, f"Pass {i + 1}: find the value that belongs at index {i}.", 1)
        for j in range(i + 1, n):
            yield Step(
                StepKind.COMPARE,
                {"i": best, "j": j, "left": a[best], "right": a[j]},
                f"Compare candidate a[{best}]={a[best]} with a[{j}]={a[j]}.",
                3,
            )
            if order.out_of_order(a[best], a[j]):
                best = j
                yield Step(StepKind.SELECT_MIN, {"index": j, "value": a[j]}, f"New best candidate {a[j]} at index {j}.", 3)
        if best != i:
            a[i], a[best] = a[best], a[i]
            yield Step(StepKind.SWAP, {"i": i, "j": best, "values": tuple(a)}, f"Swap positions {i} and {best}.", 4)
        yield Step(StepKind.SETTLE, {"index": i}, f"Index {i} now holds its final value.", 5)

    return (yield from _finish(work, "Selection"))


def _finish(work: ArrayModel, label: str) -> StepGenerator:
    yield Step(StepKind.SORTED, {"values": tuple(work.values)}, f"{label} sort finished.")
    return Outcome(OutcomeStatus.COMPLETED, work, "Sorting complete", {"values": list(work.values)})
