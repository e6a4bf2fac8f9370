"""
recorder.py — Run Recorder & Analytics
========================================
Runs one operation from the registry to completion, numbers its steps
into VisualizationEvents, then computes the analytics metrics the UI
needs for the Analytics panel and Comparison Mode.

Usage:
    rec = Recorder()
    run = rec.run("array.bubble_sort", ArrayModel([5, 3, 8, 1]))
    run.outcome.summary              # "Sorting complete"
    run.metrics.comparisons          # the analytics card
    controller.start(run.events)     # hand the events to playback

Comparison Mode:
    The UI runs two operations on the SAME structure, then calls
    compare(run1, run2) → ComparisonResult.

Nothing here waits: the whole algorithm runs synchronously before any
event is played back.
"""

import logging
import time
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from algorithms import AlgoInfo, get_algorithm
from algorithms.step import Outcome, Step, StepKind, drain
from engine.emitter import emit
from engine.events import VisualizationEvent
from graph import Graph
from structures import ArrayModel, BinarySearchTree, LinkedList, ValidationError

logger = logging.getLogger(__name__)


STRUCTURE_TYPES: Dict[str, type] = {
    "array": ArrayModel,
    "list":  LinkedList,
    "tree":  BinarySearchTree,
    "graph": Graph,
}


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    operation:     str   = ""
    label:         str   = ""
    status:        str   = ""
    comparisons:   int   = 0
    swaps:         int   = 0
    shifts:        int   = 0          # insertion-sort shifts
    visits:        int   = 0          # elements / nodes visited
    relaxations:   int   = 0          # Dijkstra distance improvements
    total_events:  int   = 0
    wall_time_ms:  float = 0.0        # time to run the algorithm, not the playback

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Run — everything one execution produced
# ---------------------------------------------------------------------------
@dataclass
class Run:
    info:    AlgoInfo
    outcome: Outcome
    steps:   List[Step]                     = field(default_factory=list)
    events:  Tuple[VisualizationEvent, ...] = ()
    metrics: RunMetrics                     = field(default_factory=RunMetrics)

    @property
    def structure(self) -> Any:
        return self.outcome.structure

    def export(self) -> Dict[str, Any]:
        """Serialisable snapshot for save / replay."""
        return {
            "operation": self.info.key,
            "status":    self.outcome.status.value,
            "summary":   self.outcome.summary,
            "data":      _jsonable(self.outcome.data),
            "metrics":   self.metrics.to_dict(),
            "events":    [ev.to_dict() for ev in self.events],
        }


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_comparisons: str = ""   # which operation compared less
    winner_events:      str = ""   # which operation needed fewer steps overall

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        history : Every Run this recorder produced, oldest first.
    """

    def __init__(self):
        self.history: List[Run] = []

    def run(self, key: str, structure: Any, **params: Any) -> Run:
        """Validate, drain the generator, emit events, compute metrics."""
        try:
            info = self._resolve(key, structure, params)
            t0   = time.monotonic()
            steps, outcome = drain(info.fn(structure, **params))
            wall_ms = (time.monotonic() - t0) * 1000
        except ValidationError as exc:
            logger.debug("%s rejected: %s (field=%s)", key, exc.reason, exc.field)
            raise

        events  = emit(steps)
        metrics = _compute_metrics(info, outcome, steps, wall_ms)
        run     = Run(info=info, outcome=outcome, steps=steps, events=events, metrics=metrics)
        self.history.append(run)

        logger.info("%s → %s (%d events)", key, outcome.status.value, len(events))
        return run

    @property
    def last(self) -> Optional[Run]:
        return self.history[-1] if self.history else None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    @staticmethod
    def _resolve(key: str, structure: Any, params: Dict[str, Any]) -> AlgoInfo:
        info = get_algorithm(key)
        if info is None:
            raise ValidationError(f"Unknown operation: {key}", "operation")

        expected = STRUCTURE_TYPES[info.structure]
        if not isinstance(structure, expected):
            raise ValidationError(
                f"{info.label} needs a {info.structure}, got {type(structure).__name__}", "structure"
            )

        unknown = sorted(set(params) - set(info.params))
        if unknown:
            raise ValidationError(f"Unknown parameter for {key}: {unknown[0]}", unknown[0])
        for name in info.required:
            if params.get(name) in (None, ""):
                raise ValidationError(f"Missing required parameter: {name}", name)
        return info


def _compute_metrics(info: AlgoInfo, outcome: Outcome, steps: List[Step], wall_ms: float) -> RunMetrics:
    counts = Counter(s.kind for s in steps)
    return RunMetrics(
        operation=info.key,
        label=info.label,
        status=outcome.status.value,
        comparisons=counts[StepKind.COMPARE],
        swaps=counts[StepKind.SWAP],
        shifts=counts[StepKind.SHIFT],
        visits=counts[StepKind.VISIT] + counts[StepKind.SELECT],
        relaxations=counts[StepKind.RELAX],
        total_events=len(steps),
        wall_time_ms=round(wall_ms, 2),
    )


def _jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Run, right: Run) -> ComparisonResult:
    """Given two completed Runs, produce a ComparisonResult."""
    l = left.metrics
    r = right.metrics

    def winner(l_val, r_val):
        if l_val == r_val:
            return "tie"
        return l.label if l_val < r_val else r.label

    return ComparisonResult(
        left=l,
        right=r,
        winner_comparisons=winner(l.comparisons, r.comparisons),
        winner_events     =winner(l.total_events, r.total_events),
    )
