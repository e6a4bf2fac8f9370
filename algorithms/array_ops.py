"""
array_ops.py — Array Insert / Remove / Linear Search
=====================================================
Insert and remove validate against the caller's array up front, so a
bad index is reported before any step is produced.
"""

from typing import List

from algorithms.step import Outcome, OutcomeStatus, Step, StepGenerator, StepKind
from structures import ArrayModel, require_int


SEARCH_PSEUDOCODE: List[str] = [
    "for i in 0 .. n-1:",                 # 0
    "    if a[i] == value: return i",     # 1
    "return NOT FOUND",                   # 2
]


def insert(array: ArrayModel, value, index=None) -> StepGenerator:
    work = array.copy()
    pos  = work.insert(value, index)
    val  = work.values[pos]
    yield Step(
        StepKind.INSERT,
        {"index": pos, "value": val, "values": tuple(work.values)},
        f"Insert {val} at index {pos}; later elements move one slot right.",
    )
    return Outcome(OutcomeStatus.INSERTED, work, f"Added {val} at index {pos}", {"index": pos})


def remove(array: ArrayModel, index) -> StepGenerator:
    work = array.copy()
    pos  = require_int(index, "index")
    val  = work.remove(pos)
    yield Step(
        StepKind.REMOVE,
        {"index": pos, "value": val, "values": tuple(work.values)},
        f"Remove {val} from index {pos}; later elements move one slot left.",
    )
    return Outcome(OutcomeStatus.REMOVED, work, f"Removed element at index {pos}", {"index": pos, "value": val})


def search(array: ArrayModel, value) -> StepGenerator:
    target = require_int(value, "value")
    for i, v in enumerate(array.values):
        yield Step(StepKind.VISIT, {"index": i, "value": v}, f"Check a[{i}]={v}.", 1)
        if v == target:
            yield Step(StepKind.FOUND, {"index": i, "value": v}, f"🎯 a[{i}] equals {target}.", 1)
            return Outcome(OutcomeStatus.FOUND, array, f"Found {target} at index {i}", {"index": i})
    yield Step(StepKind.NOT_FOUND, {"value": target}, f"Reached the end without meeting {target}.", 2)
    return Outcome(OutcomeStatus.NOT_FOUND, array, f"Element {target} not found", {"index": None})
