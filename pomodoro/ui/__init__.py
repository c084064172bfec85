"""UI package."""

from .progress_ring import ProgressRing
from .timer_widget import TimerWidget
from .styles import PALETTES, build_stylesheet, get_palette

__all__ = [
    "ProgressRing",
    "TimerWidget",
    "PALETTES",
    "build_stylesheet",
    "get_palette",
]
