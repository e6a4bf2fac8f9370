"""
engine/
-------
Event, playback & recording layer.

    from engine import Recorder, PlaybackController, emit
"""

from engine.config    import EngineConfig
from engine.events    import VisualizationEvent
from engine.emitter   import emit
from engine.highlight import Frame, next_frame, frames_for
from engine.stepper   import PlaybackController, PlaybackState
from engine.recorder  import Recorder, Run, RunMetrics, ComparisonResult, compare

__all__ = [
    "EngineConfig",
    "VisualizationEvent",
    "emit",
    "Frame",
    "next_frame",
    "frames_for",
    "PlaybackController",
    "PlaybackState",
    "Recorder",
    "Run",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]
