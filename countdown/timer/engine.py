"""Countdown timer state machine.

States
------
NOT_RUNNING   Idle; ``time_left`` is 0.
RUNNING       Counting down; subscribed to the tick source.
PAUSED        Frozen mid-run; ``time_left`` is kept, no subscription.

Transitions
-----------
NOT_RUNNING | PAUSED → RUNNING     (start — restarts from full length)
RUNNING → PAUSED                   (pause)
PAUSED → RUNNING                   (resume)
RUNNING | PAUSED → NOT_RUNNING     (stop, or time runs out)

Anything else raises ``InvalidStateTransition`` and changes nothing.

Second boundaries
-----------------
After every frame that leaves time on the clock, ``ceil(time_left)`` is
compared with the last second announced; when it differs,
``second_reached`` fires with the new value.  A frame that exhausts the
remaining time fires only ``stopped(COMPLETED)`` then ``completed``.
"""

from __future__ import annotations

import logging
import math
import time
from datetime import datetime, timezone
from enum import Enum
from numbers import Real
from typing import Callable

from PyQt6.QtCore import QEventLoop, QMetaObject, QObject, pyqtSignal

from .cleanup import Janitor
from .errors import InvalidArgument, InvalidStateTransition

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class TimerState(Enum):
    NOT_RUNNING = "not_running"
    PAUSED = "paused"
    RUNNING = "running"


class StopCause(Enum):
    STOPPED = "stopped"        # cancelled before time ran out
    COMPLETED = "completed"    # ran all the way to zero


def _check_length(length: object) -> None:
    if isinstance(length, bool) or not isinstance(length, Real):
        raise InvalidArgument(f"Timer length must be a number, got {length!r}")
    if not length > 0:
        raise InvalidArgument(f"Timer length must be greater than 0, got {length!r}")
    if not math.isfinite(length):
        raise InvalidArgument(f"Timer length must be finite, got {length!r}")


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Countdown timer driven by an external tick source.

    The engine connects to ``tick_source.frame`` only while RUNNING and
    advances ``time_left`` by the delta of each frame.

    Signals
    -------
    started()
        The timer started from its full length.
    paused() / resumed()
        The run was frozen / picked up again.
    stopped(cause: StopCause)
        The run ended, either by ``stop()`` or by running out.
    completed()
        The run reached zero.  Fires right after ``stopped(COMPLETED)``.
    length_changed(new_length: float, old_length: float)
        ``set_length`` changed the configured length.
    second_reached(seconds: int)
        A whole second of remaining time was crossed.  Strictly
        decreasing within a run, never 0.
    state_changed(new_state: TimerState)
        Emitted on every transition, before the transition's own signal.
    """

    started = pyqtSignal()
    paused = pyqtSignal()
    resumed = pyqtSignal()
    stopped = pyqtSignal(object)
    completed = pyqtSignal()
    length_changed = pyqtSignal(float, float)
    second_reached = pyqtSignal(int)
    state_changed = pyqtSignal(object)

    def __init__(
        self,
        length: float,
        tick_source: QObject,
        parent: QObject | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        _check_length(length)
        super().__init__(parent)

        self._length = length
        self._time_left: float = 0.0
        self._state: TimerState = TimerState.NOT_RUNNING
        self._last_emitted_second: int | None = None
        self._destroyed = False

        self._tick_source = tick_source
        self._tick_connection: QMetaObject.Connection | None = None
        self._clock = clock

        # Cleaned newest first: the tick subscription goes before the
        # listeners on our own signals.
        self._janitor = Janitor()
        for signal in (
            self.started,
            self.paused,
            self.resumed,
            self.stopped,
            self.completed,
            self.length_changed,
            self.second_reached,
            self.state_changed,
        ):
            self._janitor.add_signal(signal)
        self._janitor.add(self._disconnect_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def length(self) -> float:
        """Configured length in seconds, used by the next ``start()``."""
        return self._length

    @property
    def time_left(self) -> float:
        """Seconds left in the current run (kept while paused)."""
        return self._time_left

    @property
    def is_ticking(self) -> bool:
        """True while subscribed to the tick source (only when RUNNING)."""
        return self._tick_connection is not None

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def current_end_time_utc(self) -> int:
        """Projected end of the run as whole epoch seconds."""
        self._require(
            "estimate end time", {TimerState.RUNNING}, "timer is not running"
        )
        return int(self._clock() + self._time_left)

    def current_end_datetime(self) -> datetime:
        """Projected end of the run as an aware UTC datetime."""
        return datetime.fromtimestamp(self.current_end_time_utc(), tz=timezone.utc)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Run from the full length.  Restarts a paused run."""
        self._require(
            "start",
            {TimerState.NOT_RUNNING, TimerState.PAUSED},
            "timer is already running",
        )
        self._time_left = float(self._length)
        self._last_emitted_second = None
        self._connect_tick()
        logger.debug("Timer started (%ss)", self._length)
        self._set_state(TimerState.RUNNING)
        self.started.emit()

    def pause(self) -> None:
        self._require("pause", {TimerState.RUNNING}, "timer is not running")
        self._disconnect_tick()
        logger.debug("Timer paused with %.3fs left", self._time_left)
        self._set_state(TimerState.PAUSED)
        self.paused.emit()

    def resume(self) -> None:
        self._require("resume", {TimerState.PAUSED}, "timer is not paused")
        self._connect_tick()
        logger.debug("Timer resumed with %.3fs left", self._time_left)
        self._set_state(TimerState.RUNNING)
        self.resumed.emit()

    def stop(self) -> None:
        """Cancel the current run; ``stopped`` fires with ``STOPPED``."""
        self._require(
            "stop",
            {TimerState.RUNNING, TimerState.PAUSED},
            "timer is not running or paused",
        )
        self._finish(StopCause.STOPPED)

    def set_length(self, length: float) -> None:
        """Change the length used by the next ``start()``.

        A run in progress keeps its ``time_left``.
        """
        self._ensure_alive("set length")
        _check_length(length)
        if length == self._length:
            return

        old_length = self._length
        self._length = length
        logger.debug("Timer length changed %ss -> %ss", old_length, length)
        self.length_changed.emit(length, old_length)

    def run_sync(self) -> StopCause:
        """Start the timer and block until it stops.

        Qt events keep being processed while blocked, so the tick source
        and any pending ``stop()`` still get delivered.  Returns why the
        run ended.
        """
        loop = QEventLoop()
        causes: list[StopCause] = []

        def on_stopped(cause: StopCause) -> None:
            causes.append(cause)
            loop.quit()

        connection = self.stopped.connect(on_stopped)
        try:
            self.start()
            # A started listener may already have stopped us.
            if not causes:
                loop.exec()
        finally:
            try:
                self.stopped.disconnect(connection)
            except TypeError:
                pass  # already released by destroy()
        return causes[0]

    def destroy(self) -> None:
        """Stop any run and release every subscription.  Idempotent."""
        if self._destroyed:
            return
        if self._state != TimerState.NOT_RUNNING:
            self.stop()
        self._destroyed = True
        self._janitor.clean()
        logger.debug("Timer destroyed")

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_frame(self, delta: float) -> None:
        if self._state != TimerState.RUNNING:
            return

        remaining = self._time_left - delta
        if remaining <= 0:
            self._finish(StopCause.COMPLETED)
            self.completed.emit()
            return

        self._time_left = remaining
        second = math.ceil(remaining)
        if second != self._last_emitted_second:
            self._last_emitted_second = second
            self.second_reached.emit(second)

    def _finish(self, cause: StopCause) -> None:
        self._disconnect_tick()
        self._time_left = 0.0
        self._last_emitted_second = None
        logger.debug("Timer stopped (%s)", cause.value)
        self._set_state(TimerState.NOT_RUNNING)
        self.stopped.emit(cause)

    def _connect_tick(self) -> None:
        if self._tick_connection is not None:
            return
        self._tick_connection = self._tick_source.frame.connect(self._on_frame)

    def _disconnect_tick(self) -> None:
        if self._tick_connection is None:
            return
        connection, self._tick_connection = self._tick_connection, None
        try:
            self._tick_source.frame.disconnect(connection)
        except TypeError:
            pass

    def _ensure_alive(self, operation: str) -> None:
        if self._destroyed:
            raise InvalidStateTransition(
                operation, "destroyed", "timer has been destroyed"
            )

    def _require(
        self, operation: str, allowed: set[TimerState], reason: str
    ) -> None:
        self._ensure_alive(operation)
        if self._state not in allowed:
            raise InvalidStateTransition(operation, self._state, reason)

    def _set_state(self, new_state: TimerState) -> None:
        self._state = new_state
        self.state_changed.emit(new_state)
