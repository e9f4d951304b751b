"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/Countdown/settings.json

Usage::

    settings = load_settings()
    settings.default_length = 90
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.frame_clock import DEFAULT_INTERVAL_MS

logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "Countdown"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    default_length: float = 60.0                 # seconds
    frame_interval_ms: int = DEFAULT_INTERVAL_MS

    # ── output ────────────────────────────────────────────────────────
    log_level: str = "WARNING"
    show_seconds: bool = True


def _sanitize(settings: Settings) -> Settings:
    """Replace out-of-range values with their defaults."""
    defaults = Settings()
    if not isinstance(settings.default_length, (int, float)) or settings.default_length <= 0:
        logger.warning("Ignoring invalid default_length %r", settings.default_length)
        settings.default_length = defaults.default_length
    if not isinstance(settings.frame_interval_ms, int) or settings.frame_interval_ms <= 0:
        logger.warning("Ignoring invalid frame_interval_ms %r", settings.frame_interval_ms)
        settings.frame_interval_ms = defaults.frame_interval_ms
    if not isinstance(settings.log_level, str) or not isinstance(
        logging.getLevelName(settings.log_level.upper()), int
    ):
        logger.warning("Ignoring invalid log_level %r", settings.log_level)
        settings.log_level = defaults.log_level
    return settings


def load_settings(path: Path = SETTINGS_PATH) -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not path.exists():
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Could not read settings from %s: %s", path, exc)
        return Settings()
    if not isinstance(data, dict):
        logger.warning("Settings file %s does not hold an object", path)
        return Settings()

    # Only use keys that exist in the dataclass
    valid_keys = {f.name for f in fields(Settings)}
    filtered = {k: v for k, v in data.items() if k in valid_keys}
    return _sanitize(Settings(**filtered))


def save_settings(settings: Settings, path: Path = SETTINGS_PATH) -> None:
    """Write settings to disk as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
