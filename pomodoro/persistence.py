"""Key-value storage and the timer snapshot kept in it.

Two independent keys live in the storage table:

- ``pomodoroState``  the :class:`~pomodoro.timer.state.TimerState`
  snapshot, written after every command and every tick, read once at
  startup.
- ``theme``          ``"dark"`` or ``"light"``, owned by the theme toggle.

Snapshot JSON::

    {"remainingSeconds": 1490, "running": true,
     "anchorStartInstant": 1718000000000, "selectedDurationMinutes": 25}

Storage problems (database errors, or a data directory that cannot be
created) never reach the countdown: ``save`` logs and carries on,
``load`` logs and reports "no snapshot" so the engine starts fresh.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from .database.db import get_session
from .database.models import StorageEntry
from .timer.state import TimerConfig, TimerState

logger = logging.getLogger(__name__)

STATE_KEY = "pomodoroState"
THEME_KEY = "theme"

THEMES = ("dark", "light")
DEFAULT_THEME = "dark"

# An unusable data directory surfaces as OSError before SQLAlchemy is reached.
STORAGE_ERRORS = (SQLAlchemyError, OSError)


# ── raw key-value access ─────────────────────────────────────────────────


class LocalStorage:
    """String key-value store backed by the ``storage`` table."""

    def get_item(self, key: str) -> str | None:
        with get_session() as db:
            entry = db.get(StorageEntry, key)
            return entry.value if entry is not None else None

    def set_item(self, key: str, value: str) -> None:
        with get_session() as db:
            entry = db.get(StorageEntry, key)
            if entry is None:
                db.add(StorageEntry(key=key, value=value))
            else:
                entry.value = value

    def remove_item(self, key: str) -> None:
        with get_session() as db:
            entry = db.get(StorageEntry, key)
            if entry is not None:
                db.delete(entry)


# ── snapshot conversion ──────────────────────────────────────────────────


def to_snapshot(state: TimerState) -> dict[str, Any]:
    return {
        "remainingSeconds": state.remaining_seconds,
        "running": state.running,
        "anchorStartInstant": state.anchor_ms,
        "selectedDurationMinutes": state.selected_minutes,
    }


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def from_snapshot(data: object, config: TimerConfig) -> TimerState:
    """Validate *data* and build a state from it.

    Raises ``ValueError`` describing the first problem found.
    """
    if not isinstance(data, dict):
        raise ValueError(f"snapshot must be an object, got {type(data).__name__}")

    minutes = data.get("selectedDurationMinutes")
    remaining = data.get("remainingSeconds")
    running = data.get("running")
    anchor = data.get("anchorStartInstant")

    if not config.is_valid(minutes):
        raise ValueError(f"selectedDurationMinutes {minutes!r} is not a preset")
    if not _is_int(remaining) or not 0 <= remaining <= minutes * 60:
        raise ValueError(f"remainingSeconds {remaining!r} out of range")
    if not isinstance(running, bool):
        raise ValueError(f"running must be a boolean, got {running!r}")
    if anchor is not None and not _is_int(anchor):
        raise ValueError(f"anchorStartInstant must be an int or null, got {anchor!r}")
    if running and anchor is None:
        raise ValueError("running snapshot has no anchorStartInstant")

    return TimerState(
        remaining_seconds=remaining,
        running=running,
        anchor_ms=anchor if running else None,
        selected_minutes=minutes,
    )


# ── stores ───────────────────────────────────────────────────────────────


class SnapshotStore:
    """Saves and restores the timer state under :data:`STATE_KEY`."""

    def __init__(
        self,
        storage: LocalStorage | None = None,
        config: TimerConfig | None = None,
    ) -> None:
        self._storage = storage or LocalStorage()
        self._config = config or TimerConfig()

    def save(self, state: TimerState) -> None:
        """Write *state*.  Failures are logged, never raised."""
        try:
            self._storage.set_item(STATE_KEY, json.dumps(to_snapshot(state)))
        except STORAGE_ERRORS as exc:
            logger.warning("could not save timer snapshot: %s", exc)

    def load(self) -> TimerState | None:
        """Return the saved state, or None when absent or unusable."""
        try:
            raw = self._storage.get_item(STATE_KEY)
        except STORAGE_ERRORS as exc:
            logger.warning("could not read timer snapshot: %s", exc)
            return None
        if raw is None:
            return None
        try:
            return from_snapshot(json.loads(raw), self._config)
        except ValueError as exc:
            # json.JSONDecodeError is a ValueError too
            logger.warning("discarding malformed timer snapshot: %s", exc)
            return None

    def clear(self) -> None:
        try:
            self._storage.remove_item(STATE_KEY)
        except STORAGE_ERRORS as exc:
            logger.warning("could not clear timer snapshot: %s", exc)


class ThemeStore:
    """The dark/light preference under :data:`THEME_KEY`."""

    def __init__(self, storage: LocalStorage | None = None) -> None:
        self._storage = storage or LocalStorage()

    def load(self) -> str:
        try:
            value = self._storage.get_item(THEME_KEY)
        except STORAGE_ERRORS as exc:
            logger.warning("could not read theme preference: %s", exc)
            return DEFAULT_THEME
        return value if value in THEMES else DEFAULT_THEME

    def save(self, theme: str) -> None:
        if theme not in THEMES:
            raise ValueError(f"unknown theme {theme!r}; expected one of {THEMES}")
        try:
            self._storage.set_item(THEME_KEY, theme)
        except STORAGE_ERRORS as exc:
            logger.warning("could not save theme preference: %s", exc)
