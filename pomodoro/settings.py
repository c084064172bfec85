"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/PomodoroTimer/settings.json

Set ``POMODORO_DATA_DIR`` to keep settings and the storage database
somewhere else.

Usage::

    settings = load_settings()
    settings.notifications_enabled = False
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path

logger = logging.getLogger(__name__)


APP_SUPPORT_DIR = Path(
    os.environ.get("POMODORO_DATA_DIR")
    or Path.home() / "Library" / "Application Support" / "PomodoroTimer"
)
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    default_minutes: int = 25              # must be one of the presets
    restore_on_launch: bool = True
    tick_interval_ms: int = 1000

    # ── notifications ─────────────────────────────────────────────────
    notifications_enabled: bool = True

    # ── logging ───────────────────────────────────────────────────────
    log_level: str = "INFO"

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 440
    window_height: int = 620


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return _checked(Settings(**filtered))
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("ignoring unreadable settings file %s: %s", SETTINGS_PATH, exc)
    return Settings()


def _checked(settings: Settings) -> Settings:
    """Replace values the timer cannot run with by their defaults."""
    interval = settings.tick_interval_ms
    if isinstance(interval, bool) or not isinstance(interval, int) or interval <= 0:
        default = Settings.tick_interval_ms
        logger.warning(
            "tick_interval_ms=%r is not a positive int; using %d", interval, default,
        )
        settings.tick_interval_ms = default
    return settings


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
