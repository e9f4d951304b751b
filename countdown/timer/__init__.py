"""Timer package."""

from .cleanup import Janitor
from .engine import (
    TimerEngine,
    TimerState,
    StopCause,
)
from .errors import (
    TimerError,
    InvalidArgument,
    InvalidStateTransition,
)
from .frame_clock import FrameClock, DEFAULT_INTERVAL_MS

__all__ = [
    "TimerEngine",
    "TimerState",
    "StopCause",
    "FrameClock",
    "DEFAULT_INTERVAL_MS",
    "Janitor",
    "TimerError",
    "InvalidArgument",
    "InvalidStateTransition",
]
