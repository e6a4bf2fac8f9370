"""
events.py — Visualization Events
=================================
The renderer contract.  A VisualizationEvent is one numbered, immutable
record of an algorithm micro-step.  Events of one run are totally
ordered by `sequence` (0, 1, 2, …) and renderers rely on that order to
show causally correct highlight transitions (compare → swap → settle).
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from algorithms.step import StepKind


@dataclass(frozen=True)
class VisualizationEvent:
    """
    Attributes:
        sequence        : Monotonic position in the run, starting at 0.
        kind            : StepKind of the underlying micro-step.
        payload         : Structure-specific detail (copied from the Step).
        explanation     : Learning Mode text.
        pseudocode_line : Line to highlight in the pseudocode panel (-1 if none).
    """

    sequence:        int
    kind:            StepKind
    payload:         Dict[str, Any] = field(default_factory=dict)
    explanation:     str            = ""
    pseudocode_line: int            = -1

    def to_dict(self) -> dict:
        return {
            "sequence":        self.sequence,
            "kind":            self.kind.value,
            "payload":         _jsonable(self.payload),
            "explanation":     self.explanation,
            "pseudocode_line": self.pseudocode_line,
        }


def _jsonable(value):
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value
