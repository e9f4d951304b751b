"""Run a countdown in the terminal: python -m countdown [seconds]."""

from __future__ import annotations

import argparse
import logging
import signal
import sys

from PyQt6.QtCore import QCoreApplication, QTimer

from .settings import load_settings
from .timer import FrameClock, StopCause, TimerEngine, TimerError, TimerState


def _build_parser(default_length: float, default_interval: int) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="countdown", description=__doc__)
    parser.add_argument(
        "seconds", nargs="?", type=float, default=default_length,
        help=f"length of the countdown (default: {default_length:g})",
    )
    parser.add_argument(
        "--interval", type=int, default=default_interval, metavar="MS",
        help=f"frame interval in milliseconds (default: {default_interval})",
    )
    parser.add_argument("--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    settings = load_settings()
    args = _build_parser(settings.default_length, settings.frame_interval_ms).parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    app.setApplicationName("Countdown")

    try:
        clock = FrameClock(interval_ms=args.interval)
        engine = TimerEngine(args.seconds, clock)
    except TimerError as exc:
        print(f"countdown: {exc}", file=sys.stderr)
        return 2

    if settings.show_seconds:
        engine.second_reached.connect(lambda s: print(f"{s}s", flush=True))
    engine.completed.connect(lambda: print("Done!", flush=True))

    # Ctrl-C stops the timer; the idle timer lets Python run the handler
    # while Qt is blocking.
    def on_interrupt(signum, frame) -> None:
        if engine.state != TimerState.NOT_RUNNING:
            engine.stop()

    previous_handler = signal.signal(signal.SIGINT, on_interrupt)
    wake = QTimer()
    wake.timeout.connect(lambda: None)
    wake.start(200)

    clock.start()
    try:
        cause = engine.run_sync()
    finally:
        wake.stop()
        clock.stop()
        engine.destroy()
        signal.signal(signal.SIGINT, previous_handler)

    return 0 if cause == StopCause.COMPLETED else 1


if __name__ == "__main__":
    sys.exit(main())
