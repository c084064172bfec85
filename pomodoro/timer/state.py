"""Timer state and the pure commands that transform it.

Every command takes the current :class:`TimerState` (and the current
time in epoch milliseconds where time matters) and returns a new one.
Nothing here touches Qt, storage or the clock, so the whole countdown
can be exercised with plain integers.

Countdown model
---------------
While running, the remaining time is never decremented.  It is derived
from an *anchor* instant that ``start`` back-dates by however much of
the run has already elapsed::

    remaining = max(selected * 60 - floor((now - anchor) / 1000), 0)

A throttled or suspended tick source therefore never loses time: the
next evaluation catches up no matter how many ticks were skipped.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


# ── errors ────────────────────────────────────────────────────────────────


class PomodoroError(Exception):
    """Base class for timer errors."""


class InvalidDurationError(PomodoroError, ValueError):
    """A duration outside the configured preset list was selected."""

    def __init__(self, minutes: object, presets: tuple[int, ...]) -> None:
        super().__init__(
            f"{minutes!r} is not one of the preset durations {presets}"
        )
        self.minutes = minutes
        self.presets = presets


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_PRESETS: tuple[int, ...] = (15, 25, 35, 45)  # minutes
DEFAULT_MINUTES = 25


# ── data ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimerConfig:
    """The selectable durations and the one used on a fresh start."""

    presets: tuple[int, ...] = DEFAULT_PRESETS
    default_minutes: int = DEFAULT_MINUTES

    def __post_init__(self) -> None:
        presets = tuple(self.presets)
        object.__setattr__(self, "presets", presets)
        if not presets:
            raise ValueError("at least one preset duration is required")
        for minutes in presets:
            if not _is_int(minutes) or minutes <= 0:
                raise ValueError(f"preset durations must be positive ints, got {minutes!r}")
        if not self.is_valid(self.default_minutes):
            raise ValueError(
                f"default duration {self.default_minutes!r} is not a preset"
            )

    def is_valid(self, minutes: object) -> bool:
        return _is_int(minutes) and minutes in self.presets


@dataclass(frozen=True)
class TimerState:
    """Snapshot of the countdown.  Never mutated in place."""

    remaining_seconds: int
    running: bool
    anchor_ms: int | None
    selected_minutes: int

    @property
    def total_seconds(self) -> int:
        return self.selected_minutes * 60


@dataclass(frozen=True)
class TickResult:
    state: TimerState
    completed: bool = False


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# ── queries ───────────────────────────────────────────────────────────────


def initial_state(config: TimerConfig) -> TimerState:
    return TimerState(
        remaining_seconds=config.default_minutes * 60,
        running=False,
        anchor_ms=None,
        selected_minutes=config.default_minutes,
    )


def remaining_at(state: TimerState, now_ms: int) -> int:
    """Seconds left at *now_ms*, derived from the anchor.

    A stopped state just reports its frozen value.  The result is
    clamped to ``[0, total]`` so a clock that jumps backwards cannot
    grow the countdown past its full duration.
    """
    if not state.running or state.anchor_ms is None:
        return state.remaining_seconds
    elapsed = (now_ms - state.anchor_ms) // 1000
    return max(0, min(state.total_seconds, state.total_seconds - elapsed))


# ── commands ──────────────────────────────────────────────────────────────


def start(state: TimerState, now_ms: int) -> TimerState:
    """Begin (or resume) counting down.  No-op when already running.

    The anchor is back-dated by the time already spent so that resuming
    from a paused remainder reproduces the correct elapsed time.  A run
    that already reached zero starts over from the full duration.
    """
    if state.running:
        return state
    remaining = state.remaining_seconds
    if remaining <= 0:
        # restart at full length instead of re-completing on the next tick
        remaining = state.total_seconds
    already_elapsed = state.total_seconds - remaining
    return replace(
        state,
        remaining_seconds=remaining,
        running=True,
        anchor_ms=now_ms - already_elapsed * 1000,
    )


def pause(state: TimerState) -> TimerState:
    """Freeze the countdown at its last computed value.

    The anchor is dropped; ``start`` rebuilds it from the remainder.
    """
    if not state.running:
        return state
    return replace(state, running=False, anchor_ms=None)


def reset(state: TimerState) -> TimerState:
    return replace(
        state,
        remaining_seconds=state.total_seconds,
        running=False,
        anchor_ms=None,
    )


def select_duration(
    state: TimerState, config: TimerConfig, minutes: int,
) -> TimerState:
    """Switch to another preset.  Always cancels an in-progress run.

    Raises :class:`InvalidDurationError` for anything that is not a
    preset; the value is never clamped to the nearest one.
    """
    if not config.is_valid(minutes):
        raise InvalidDurationError(minutes, config.presets)
    return TimerState(
        remaining_seconds=minutes * 60,
        running=False,
        anchor_ms=None,
        selected_minutes=minutes,
    )


def evaluate_tick(state: TimerState, now_ms: int) -> TickResult:
    """Recompute the countdown for one tick.

    ``completed`` is True only on the evaluation that takes a running
    state to zero.  The returned state is stopped at that point, and a
    stopped state is left alone, so repeated evaluations after the end
    can never report completion twice.
    """
    if not state.running:
        return TickResult(state)
    remaining = remaining_at(state, now_ms)
    if remaining > 0:
        return TickResult(replace(state, remaining_seconds=remaining))
    finished = replace(state, remaining_seconds=0, running=False, anchor_ms=None)
    return TickResult(finished, completed=True)
