"""Periodic frame source for driving timers.

A ``FrameClock`` emits ``frame(delta_seconds)`` on every beat of an
internal ``QTimer``; the delta is measured with ``QElapsedTimer`` so it
reflects real elapsed time rather than the nominal interval.  Hosts that
run their own loop can skip ``start()`` and call ``advance()`` instead.

Anything exposing a ``frame`` signal that carries a float can stand in
for a ``FrameClock`` wherever a tick source is expected.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QElapsedTimer, QObject, QTimer, pyqtSignal

from .errors import InvalidArgument

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MS = 16  # ~60 frames per second


class FrameClock(QObject):
    """Qt-driven tick source.

    Signals
    -------
    frame(delta_seconds: float)
        Emitted once per frame with the seconds since the previous one.
    """

    frame = pyqtSignal(float)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        interval_ms: int = DEFAULT_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        if interval_ms <= 0:
            raise InvalidArgument("Frame interval must be greater than 0 ms")

        self._elapsed = QElapsedTimer()
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(interval_ms)
        self._qt_timer.timeout.connect(self._on_timeout)

    @property
    def interval_ms(self) -> int:
        return self._qt_timer.interval()

    @property
    def is_active(self) -> bool:
        return self._qt_timer.isActive()

    def start(self) -> None:
        if self._qt_timer.isActive():
            return
        self._elapsed.start()
        self._qt_timer.start()
        logger.debug("Frame clock started (%d ms)", self.interval_ms)

    def stop(self) -> None:
        if not self._qt_timer.isActive():
            return
        self._qt_timer.stop()
        self._elapsed.invalidate()
        logger.debug("Frame clock stopped")

    def advance(self, delta: float) -> None:
        """Emit a single frame of *delta* seconds."""
        if delta < 0:
            raise InvalidArgument("Frame delta cannot be negative")
        self.frame.emit(float(delta))

    def _on_timeout(self) -> None:
        self.frame.emit(self._elapsed.restart() / 1000.0)
