"""Pomodoro Timer: a drift-free desktop countdown."""

__version__ = "0.1.0"
