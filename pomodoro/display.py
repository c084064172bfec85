"""Display helpers: MM:SS text, ring progress and the window title.

These are pure functions so that both the widgets and the engine can
share them without importing any Qt code.
"""

from __future__ import annotations

DEFAULT_TITLE = "Pomodoro Timer"


def format_time(seconds: int) -> str:
    """Zero-padded ``MM:SS`` for *seconds* (negative input shows 00:00)."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


def progress_fraction(remaining_seconds: int, duration_minutes: int) -> float:
    """0.0 → 1.0 progress through a run of *duration_minutes*."""
    total = duration_minutes * 60
    if total <= 0:
        return 0.0
    elapsed = total - remaining_seconds
    return max(0.0, min(1.0, elapsed / total))


def window_title(remaining_seconds: int, running: bool) -> str:
    """Countdown in the title while running, the plain app name otherwise."""
    if running:
        return f"{format_time(remaining_seconds)} - {DEFAULT_TITLE}"
    return DEFAULT_TITLE
