"""Scoped release of subscriptions.

A ``Janitor`` is an ``ExitStack`` that also knows how to release Qt
signal connections.  Callbacks registered as resources are acquired run
exactly once when cleaned, newest first::

    janitor = Janitor()
    janitor.add_signal(engine.started)
    janitor.add(clock.stop)
    ...
    janitor.clean()
"""

from __future__ import annotations

from contextlib import ExitStack
from typing import Any, Callable


class Janitor(ExitStack):

    def __init__(self) -> None:
        super().__init__()
        self._pending = 0

    def __len__(self) -> int:
        return self._pending

    def add(self, task: Callable[[], Any]) -> None:
        self.callback(task)
        self._pending += 1

    def add_signal(self, signal: Any) -> None:
        """Register "disconnect every slot" for a bound Qt signal."""

        def disconnect_all() -> None:
            try:
                signal.disconnect()
            except TypeError:
                pass  # nothing connected

        self.add(disconnect_all)

    def __exit__(self, *exc_info: Any) -> bool:
        self._pending = 0
        return super().__exit__(*exc_info)

    def clean(self) -> None:
        """Run every task once, newest first.

        The remaining tasks still run when one raises; the last error is
        re-raised afterwards with earlier ones chained as its context.
        """
        self.close()
