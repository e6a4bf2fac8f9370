"""
stepper.py — Playback Controller
=================================
The PlaybackController is the ONLY component that waits.  It takes the
finished event tuple of one run and hands events to the renderer one
at a time, at a cadence derived from the speed slider.

State machine:
    IDLE      →  start()        →  PLAYING
    PLAYING   →  pause()        →  PAUSED
    PAUSED    →  resume()       →  PLAYING
    PLAYING   →  (last event)   →  FINISHED   (on_complete fires once)
    PLAYING / PAUSED → cancel() →  CANCELLED  (on_complete never fires)
    any       →  start()        →  PLAYING    (a live session is cancelled first)

Timing model:
  The host calls tick() from its event loop / timer / HTTP poll.  At most
  one event is delivered per tick, and the next due time is computed
  only after the on_event callback has returned, so there is exactly
  one pending delivery per session and two deliveries never overlap.
  The clock is injectable; tests pass a fake one and never sleep.

Thread safety:
  This class is NOT thread-safe.  The Flask layer holds the owning
  workspace's lock around every call.
"""

import logging
import time
from enum import Enum
from typing import Callable, Iterable, Optional, Tuple

from engine.config import EngineConfig
from engine.events import VisualizationEvent
from engine.highlight import Frame, next_frame

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackState(Enum):
    IDLE      = "idle"
    PLAYING   = "playing"
    PAUSED    = "paused"
    FINISHED  = "finished"
    CANCELLED = "cancelled"


EventCallback    = Callable[[VisualizationEvent, Frame], None]
CompleteCallback = Callable[[int], None]


# ---------------------------------------------------------------------------
# PlaybackController
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        state    : Current PlaybackState.
        events   : Event tuple of the current session.
        position : Index of the next event to deliver.
        session  : Counter bumped by every start(); identifies the run.
        speed    : Speed percent of the current session.
        delay    : Seconds between deliveries.
        frame    : Highlight frame after the last delivered event.
        on_event    : callback(event, frame); the renderer hooks its redraw here.
        on_complete : callback(session), fired once when a session plays to the end.
    """

    def __init__(
        self,
        on_event: Optional[EventCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
        clock: Callable[[], float] = time.monotonic,
        config: Optional[EngineConfig] = None,
    ):
        self.config:      EngineConfig = config or EngineConfig()
        self.on_event:    Optional[EventCallback]    = on_event
        self.on_complete: Optional[CompleteCallback] = on_complete
        self._clock:      Callable[[], float]        = clock

        self.state:    PlaybackState                  = PlaybackState.IDLE
        self.events:   Tuple[VisualizationEvent, ...] = ()
        self.position: int                            = 0
        self.session:  int                            = 0
        self.speed:    int                            = self.config.default_speed
        self.delay:    float                          = self.config.delay_for(self.speed)
        self.frame:    Frame                          = Frame()

        self._due:       float = 0.0
        self._remaining: float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, events: Iterable[VisualizationEvent], speed_percent=None) -> int:
        """Begin delivering `events` from sequence 0.  Returns the new session id."""
        speed = self.config.default_speed if speed_percent is None else speed_percent
        delay = self.config.delay_for(speed)          # validate before touching state

        if self.is_active:
            logger.info("playback session %d superseded at %d/%d", self.session, self.position, len(self.events))
            self.cancel()

        self.session  += 1
        self.events    = tuple(events)
        self.position  = 0
        self.speed     = self.config.validate_speed(speed)
        self.delay     = delay
        self.frame     = Frame()
        self.state     = PlaybackState.PLAYING
        self._due      = self._clock()               # first event is due immediately
        logger.debug("playback session %d started: %d events, %.3fs apart", self.session, len(self.events), delay)
        return self.session

    def cancel(self) -> bool:
        """Stop now.  Delivered events stay delivered; completion is never signalled."""
        if not self.is_active:
            return False
        self.state = PlaybackState.CANCELLED
        logger.info("playback session %d cancelled at %d/%d", self.session, self.position, len(self.events))
        return True

    def pause(self) -> bool:
        if self.state is not PlaybackState.PLAYING:
            return False
        self._remaining = max(0.0, self._due - self._clock())
        self.state      = PlaybackState.PAUSED
        return True

    def resume(self) -> bool:
        if self.state is not PlaybackState.PAUSED:
            return False
        self._due  = self._clock() + self._remaining
        self.state = PlaybackState.PLAYING
        return True

    def toggle_play(self) -> None:
        if self.state is PlaybackState.PLAYING:
            self.pause()
        else:
            self.resume()

    def set_speed(self, speed_percent) -> None:
        """New cadence applies from the next scheduled delivery on."""
        self.delay = self.config.delay_for(speed_percent)
        self.speed = self.config.validate_speed(speed_percent)

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self) -> Optional[VisualizationEvent]:
        """
        Deliver the next event if one is due.  Returns the delivered
        event, or None when nothing was due / nothing is playing.
        """
        if self.state is not PlaybackState.PLAYING:
            return None
        if self._clock() < self._due:
            return None
        if self.position >= len(self.events):
            self._finish(self.session)
            return None

        session = self.session
        event   = self._deliver()
        if self.session == session and self.state is PlaybackState.PLAYING:
            self._due = self._clock() + self.delay
            if self.position >= len(self.events):
                self._finish(session)
        return event

    def jump_to_end(self) -> int:
        """Deliver every remaining event right away.  Returns how many were delivered."""
        session = self.session
        count   = 0
        while (
            self.session == session
            and self.state in (PlaybackState.PLAYING, PlaybackState.PAUSED)
            and self.position < len(self.events)
        ):
            self._deliver()
            count += 1
        if self.session == session and self.is_active:
            self._finish(session)
        return count

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_active(self) -> bool:
        return self.state in (PlaybackState.PLAYING, PlaybackState.PAUSED)

    @property
    def is_finished(self) -> bool:
        return self.state is PlaybackState.FINISHED

    @property
    def delivered(self) -> Tuple[VisualizationEvent, ...]:
        return self.events[:self.position]

    def to_dict(self) -> dict:
        return {
            "state":     self.state.value,
            "session":   self.session,
            "position":  self.position,
            "total":     len(self.events),
            "speed":     self.speed,
            "delay_ms":  round(self.delay * 1000),
            "frame":     self.frame.to_dict(),
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _deliver(self) -> VisualizationEvent:
        event = self.events[self.position]
        self.position += 1
        self.frame = next_frame(self.frame, event)
        if self.on_event:
            self.on_event(event, self.frame)
        return event

    def _finish(self, session: int) -> None:
        self.state = PlaybackState.FINISHED
        logger.debug("playback session %d finished (%d events)", session, len(self.events))
        if self.on_complete:
            self.on_complete(session)
