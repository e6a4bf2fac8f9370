"""
highlight.py — Renderer Highlight Frames
=========================================
What should be lit up right now is a pure function of the events
delivered so far:

    frame_n = next_frame(frame_{n-1}, event_n)

so there is no shared "currently highlighted" state to keep in sync.
A renderer just keeps the last Frame the playback controller handed it.

Frame fields are structure-agnostic: `current` / `target` hold whatever
locates an element in the structure at hand (array index, list
position, tree node id, graph node id).
"""

from dataclasses import dataclass, replace
from typing import Any, Iterable, List, Optional, Tuple

from algorithms.step import StepKind
from engine.events import VisualizationEvent


@dataclass(frozen=True)
class Frame:
    """
    Attributes:
        sequence : Sequence number of the last applied event (-1 = none yet).
        current  : Primary highlight (e.g. index i being compared, node being expanded).
        target   : Secondary highlight (e.g. index j, node being discovered).
        visited  : Elements visited so far, in visit order, no duplicates.
        edges    : Graph edges discovered / relaxed so far, in order.
        settled  : Array indices known to hold their final value.
        values   : Latest array snapshot after a data movement (None until one happens).
        path     : Final path (Dijkstra) once known.
        found    : Element flagged as the answer (found / touched / inserted).
        message  : Explanation text of the last event.
    """

    sequence: int                       = -1
    current:  Optional[Any]             = None
    target:   Optional[Any]             = None
    visited:  Tuple[Any, ...]           = ()
    edges:    Tuple[str, ...]           = ()
    settled:  Tuple[int, ...]           = ()
    values:   Optional[Tuple[int, ...]] = None
    path:     Tuple[str, ...]           = ()
    found:    Optional[Any]             = None
    message:  str                       = ""

    def to_dict(self) -> dict:
        return {
            "sequence": self.sequence,
            "current":  self.current,
            "target":   self.target,
            "visited":  list(self.visited),
            "edges":    list(self.edges),
            "settled":  list(self.settled),
            "values":   list(self.values) if self.values is not None else None,
            "path":     list(self.path),
            "found":    self.found,
            "message":  self.message,
        }


def _locus(payload: dict) -> Optional[Any]:
    for key in ("index", "position", "node", "id"):
        if payload.get(key) is not None:
            return payload[key]
    return None


def _add(seq: Tuple[Any, ...], item: Any) -> Tuple[Any, ...]:
    return seq if item is None or item in seq else seq + (item,)


def next_frame(frame: Frame, event: VisualizationEvent) -> Frame:
    p    = event.payload
    kind = event.kind
    base = replace(frame, sequence=event.sequence, message=event.explanation)

    if "values" in p and kind is not StepKind.COMPLETE:
        base = replace(base, values=tuple(p["values"]))

    if kind is StepKind.PASS:
        return replace(base, current=p.get("index"), target=None)
    if kind in (StepKind.COMPARE, StepKind.SWAP):
        return replace(base, current=p["i"], target=p["j"])
    if kind is StepKind.SHIFT:
        return replace(base, current=p["from"], target=p["to"])
    if kind is StepKind.PLACE:
        return replace(base, current=p["index"], target=None)
    if kind is StepKind.SELECT_MIN:
        return replace(base, target=p["index"])
    if kind is StepKind.SETTLE:
        return replace(base, settled=_add(base.settled, p["index"]))
    if kind is StepKind.SORTED:
        return replace(base, current=None, target=None, settled=tuple(range(len(p["values"]))))

    if kind in (StepKind.VISIT, StepKind.SELECT):
        loc = _locus(p)
        return replace(base, current=loc, target=None, visited=_add(base.visited, loc))
    if kind in (StepKind.INSERT, StepKind.FOUND, StepKind.TOUCH):
        return replace(base, current=None, target=None, found=_locus(p))
    if kind is StepKind.REMOVE:
        return replace(base, current=None, target=_locus(p))
    if kind is StepKind.SUCCESSOR:
        return replace(base, target=p["id"])
    if kind is StepKind.REPLACE:
        return replace(base, current=p["id"], target=None)

    if kind in (StepKind.DISCOVER_EDGE, StepKind.RELAX):
        return replace(base, target=p.get("to", p.get("node")), edges=_add(base.edges, p["edge"]))
    if kind is StepKind.PATH:
        return replace(base, current=None, target=None, path=tuple(p["path"]), found=p["path"][-1])

    # NOT_FOUND, UNREACHABLE, COMPLETE: clear the transient cursor
    return replace(base, current=None, target=None)


def frames_for(events: Iterable[VisualizationEvent], start: Optional[Frame] = None) -> List[Frame]:
    """Every intermediate frame, one per event."""
    frames: List[Frame] = []
    frame = start or Frame()
    for ev in events:
        frame = next_frame(frame, ev)
        frames.append(frame)
    return frames
