"""
Animation Loop
==============
Drives the continuous tumbling rotation of the graph.

Why is this file needed?
------------------------
1. Scheduling: Each tick advances the rotation once (while playing) and then
   requests exactly one frame. Ticks come from a `TickSource`, so tests can
   drive the loop synchronously without a display.
2. Teardown: `shutdown()` stops the tick source. A tick that still arrives
   afterwards is ignored, so no frame is ever requested for a dead canvas.

Classes:
    PlaybackState: PLAYING / PAUSED.
    TickSource: Protocol for anything that calls a handler once per frame.
    QTimerTickSource: Qt event-loop driven ticks.
    ManualTickSource: Ticks fired explicitly (tests, offscreen export).
    AnimationLoop: The state machine.
"""
from __future__ import annotations

from enum import Enum
import logging
from typing import Callable, Optional, Protocol

from PySide6.QtCore import QObject, QTimer, Signal

from knowledgegraph3d.config import FRAME_INTERVAL_MS, ROTATION_STEP_X, ROTATION_STEP_Y
from knowledgegraph3d.model.view_transform import ViewTransform

logger = logging.getLogger(__name__)

TickHandler = Callable[[], None]


class PlaybackState(Enum):
    PLAYING = "playing"
    PAUSED = "paused"


class TickSource(Protocol):
    def set_handler(self, handler: Optional[TickHandler]) -> None: ...
    def start(self) -> None: ...
    def stop(self) -> None: ...
    def is_active(self) -> bool: ...


class QTimerTickSource:
    """Fires the handler from the Qt event loop every `interval_ms`."""

    def __init__(self, interval_ms: int = FRAME_INTERVAL_MS, parent: Optional[QObject] = None) -> None:
        self.timer = QTimer(parent)
        self.timer.setInterval(interval_ms)
        self._handler: Optional[TickHandler] = None
        self.timer.timeout.connect(self._on_timeout)

    def set_handler(self, handler: Optional[TickHandler]) -> None:
        self._handler = handler

    def start(self) -> None:
        self.timer.start()

    def stop(self) -> None:
        self.timer.stop()

    def is_active(self) -> bool:
        return self.timer.isActive()

    def _on_timeout(self) -> None:
        if self._handler is not None:
            self._handler()


class ManualTickSource:
    """Tick source fired by calling `fire()`; nothing happens while stopped."""

    def __init__(self) -> None:
        self._handler: Optional[TickHandler] = None
        self._active = False

    def set_handler(self, handler: Optional[TickHandler]) -> None:
        self._handler = handler

    def start(self) -> None:
        self._active = True

    def stop(self) -> None:
        self._active = False

    def is_active(self) -> bool:
        return self._active

    def fire(self, count: int = 1) -> int:
        """Fire up to `count` ticks. Returns how many were delivered."""
        delivered = 0
        for _ in range(count):
            if not self._active or self._handler is None:
                break
            self._handler()
            delivered += 1
        return delivered


class AnimationLoop(QObject):
    """
    Two-state playback machine (PLAYING initially).

    The loop writes only the rotation angles of the view transform; zoom and
    speed are changed by the controls.
    """
    playback_changed = Signal(bool)  # True when playing

    def __init__(
        self,
        view: ViewTransform,
        on_frame: TickHandler,
        tick_source: Optional[TickSource] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.view = view
        self._on_frame = on_frame
        self.tick_source: TickSource = tick_source if tick_source is not None else QTimerTickSource(parent=self)
        self.tick_source.set_handler(self.tick)

        self._state = PlaybackState.PLAYING
        self._running = False
        self._shut_down = False
        self.tick_count = 0

    # --- PROPERTIES ---

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state is PlaybackState.PLAYING

    @property
    def is_running(self) -> bool:
        return self._running and not self._shut_down

    # --- LIFECYCLE ---

    def start(self) -> None:
        """Begin scheduling ticks. Ignored after shutdown."""
        if self._shut_down:
            logger.warning("AnimationLoop.start() called after shutdown, ignoring.")
            return
        if not self._running:
            self._running = True
            self.tick_source.start()
            logger.debug("Animation loop started.")

    def shutdown(self) -> None:
        """Stop scheduling for good. Safe to call more than once."""
        if self._shut_down:
            return
        self._shut_down = True
        self._running = False
        self.tick_source.stop()
        self.tick_source.set_handler(None)
        logger.debug(f"Animation loop shut down after {self.tick_count} ticks.")

    # --- COMMANDS ---

    def play(self) -> None:
        self._set_state(PlaybackState.PLAYING)

    def pause(self) -> None:
        self._set_state(PlaybackState.PAUSED)

    def toggle(self) -> None:
        self._set_state(PlaybackState.PAUSED if self.is_playing else PlaybackState.PLAYING)

    def reset_rotation(self) -> None:
        """Return to the initial orientation; playback state is unchanged."""
        self.view.reset_rotation()

    # --- TICK ---

    def tick(self) -> None:
        if self._shut_down:
            return
        if self.is_playing:
            speed = self.view.rotation_speed
            self.view.rotate(speed * ROTATION_STEP_X, speed * ROTATION_STEP_Y)
        self.tick_count += 1
        self._on_frame()

    def _set_state(self, state: PlaybackState) -> None:
        if state is self._state:
            return
        self._state = state
        logger.debug(f"Playback state -> {state.value}")
        self.playback_changed.emit(self.is_playing)
