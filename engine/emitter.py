"""
emitter.py — Step Emitter
==========================
Pure transform from an algorithm's Step log to VisualizationEvents.

No reordering, no batching, no timing: step i becomes the event with
sequence `start + i`.  Payload dicts are copied so an event never
shares mutable state with the Step it came from.
"""

from typing import Iterable, Tuple

from algorithms.step import Step
from engine.events import VisualizationEvent


def emit(steps: Iterable[Step], start: int = 0) -> Tuple[VisualizationEvent, ...]:
    return tuple(
        VisualizationEvent(
            sequence=start + i,
            kind=step.kind,
            payload=dict(step.payload),
            explanation=step.explanation,
            pseudocode_line=step.pseudocode_line,
        )
        for i, step in enumerate(steps)
    )
