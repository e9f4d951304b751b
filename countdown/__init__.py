"""Countdown — a pausable countdown timer engine for Qt hosts."""

__version__ = "0.1.0"
