"""
step.py — Algorithm Micro-Steps
================================
Every algorithm is a generator that yields Step objects and finally
*returns* an Outcome:

    def bubble_sort(array, direction="asc") -> Generator[Step, None, Outcome]:
        yield Step(StepKind.COMPARE, {"i": 0, "j": 1}, "Compare 5 and 3")
        …
        return Outcome(OutcomeStatus.COMPLETED, work, "Sorting complete")

A Step records ONE observable decision point (a comparison, a swap, a
visit, an edge relaxation).  It knows nothing about sequence numbers or
timing: the emitter numbers them, the playback controller paces them.

Design decisions:
  - Step is a frozen dataclass.  The algorithm generator is the only
    writer; the emitter / renderer are pure readers.
  - `payload` is a shallow dict of JSON-friendly values (ints, strings,
    tuples) so the API layer can ship it as-is.
  - Outcome.structure is the resulting structure.  When an operation
    changes nothing (search miss, delete of an absent value, duplicate
    insert) it is the caller's ORIGINAL object, so `outcome.structure is
    original` tells "nothing happened" apart from "mutated".
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generator, List, Tuple


# ---------------------------------------------------------------------------
# Step kinds
# ---------------------------------------------------------------------------
class StepKind(Enum):
    # sorting
    PASS          = "pass"           # outer-loop iteration begins
    COMPARE       = "compare"        # two indices compared
    SWAP          = "swap"           # two indices exchanged
    SHIFT         = "shift"          # insertion sort moves one element right
    PLACE         = "place"          # insertion sort drops the key into its slot
    SELECT_MIN    = "select_min"     # selection sort found a better candidate
    SETTLE        = "settle"         # index reached its final position
    SORTED        = "sorted"
    # shared by array / list / tree / graph
    VISIT         = "visit"
    INSERT        = "insert"
    REMOVE        = "remove"
    FOUND         = "found"
    NOT_FOUND     = "not_found"
    COMPLETE      = "complete"
    # tree
    TOUCH         = "touch"          # duplicate insert, existing node flagged
    SUCCESSOR     = "successor"      # in-order successor located
    REPLACE       = "replace"        # node takes the successor's value
    # graph
    DISCOVER_EDGE = "discover_edge"  # edge that led to a newly discovered node
    SELECT        = "select"         # Dijkstra picked the closest unvisited node
    RELAX         = "relax"          # tentative distance improved through an edge
    PATH          = "path"
    UNREACHABLE   = "unreachable"


class OutcomeStatus(Enum):
    COMPLETED   = "completed"
    FOUND       = "found"
    NOT_FOUND   = "not_found"
    INSERTED    = "inserted"
    DUPLICATE   = "duplicate"
    DELETED     = "deleted"
    REMOVED     = "removed"
    PATH_FOUND  = "path_found"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        kind            : What happened.
        payload         : Structure-specific detail (indices, node ids, distances…).
        explanation     : Plain-English "why" for Learning Mode.
        pseudocode_line : 0-based line in the algorithm's PSEUDOCODE (-1 if none).
    """

    kind:            StepKind
    payload:         Dict[str, Any] = field(default_factory=dict)
    explanation:     str            = ""
    pseudocode_line: int            = -1


@dataclass(frozen=True)
class Outcome:
    """
    Attributes:
        status    : How the run ended.
        structure : Resulting structure (original object when unchanged).
        summary   : Message for the user, e.g. "Found 7 at index 3".
        data      : Result details (index, path, distance, visit order…).
    """

    status:    OutcomeStatus
    structure: Any
    summary:   str
    data:      Dict[str, Any] = field(default_factory=dict)


StepGenerator = Generator[Step, None, Outcome]


def drain(gen: StepGenerator) -> Tuple[List[Step], Outcome]:
    """Run an algorithm generator to completion; return (steps, outcome)."""
    steps: List[Step] = []
    while True:
        try:
            steps.append(next(gen))
        except StopIteration as stop:
            if not isinstance(stop.value, Outcome):
                raise TypeError("algorithm generator finished without returning an Outcome") from None
            return steps, stop.value
