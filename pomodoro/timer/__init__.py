"""Timer package."""

from .engine import TimerEngine, TICK_INTERVAL_MS
from .state import (
    TimerConfig,
    TimerState,
    TickResult,
    PomodoroError,
    InvalidDurationError,
    DEFAULT_PRESETS,
    DEFAULT_MINUTES,
)
from .ticker import TickSubscription

__all__ = [
    "TimerEngine",
    "TICK_INTERVAL_MS",
    "TimerConfig",
    "TimerState",
    "TickResult",
    "PomodoroError",
    "InvalidDurationError",
    "DEFAULT_PRESETS",
    "DEFAULT_MINUTES",
    "TickSubscription",
]
