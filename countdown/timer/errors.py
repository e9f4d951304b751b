"""Exceptions raised by the timer engine.

All failures are local and synchronous: the offending call raises and
the engine is left exactly as it was before the call.
"""

from __future__ import annotations


class TimerError(Exception):
    """Base class for every error raised by ``countdown.timer``."""


class InvalidArgument(TimerError, ValueError):
    """A length or delta was not acceptable (e.g. not strictly positive)."""


class InvalidStateTransition(TimerError, RuntimeError):
    """An operation was attempted from a state that does not allow it.

    ``operation`` is the name of the attempted call and ``state`` the
    state the engine was in (a ``TimerState``, or ``"destroyed"``).
    """

    def __init__(self, operation: str, state: object, reason: str) -> None:
        self.operation = operation
        self.state = state
        label = getattr(state, "value", state)
        super().__init__(f"Cannot {operation}: {reason} (state: {label})")
