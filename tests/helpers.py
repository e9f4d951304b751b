"""Shared test helpers for Countdown."""

from countdown.timer.engine import TimerEngine
from countdown.timer.frame_clock import FrameClock


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class EventLog:
    """Records every engine signal, in order, as ``(name, payload)``."""

    NAMES = (
        "started",
        "paused",
        "resumed",
        "stopped",
        "completed",
        "length_changed",
        "second_reached",
    )

    def __init__(self, engine: TimerEngine):
        self.events: list = []
        for name in self.NAMES:
            getattr(engine, name).connect(self._recorder(name))

    def _recorder(self, name):
        def record(*args):
            payload = args if len(args) > 1 else args[0] if args else None
            self.events.append((name, payload))
        return record

    def names(self):
        return [name for name, _ in self.events]

    def clear(self):
        self.events.clear()


def feed(clock: FrameClock, *deltas: float) -> None:
    """Push one frame per delta through the clock."""
    for delta in deltas:
        clock.advance(delta)
