"""Qt-driven countdown engine for the Pomodoro timer.

States
------
STOPPED   Not counting: fresh, paused, reset, or finished.
RUNNING   Counting down; one tick subscription is live.

Transitions
-----------
STOPPED → RUNNING                 (start)
RUNNING → STOPPED                 (pause)
Any → STOPPED, full duration      (reset)
Any → STOPPED, new duration       (select_duration)
RUNNING → STOPPED at 00:00        (tick reaches zero; completion fires once)

The engine owns exactly one :class:`TimerState` and replaces it through
the pure functions in :mod:`pomodoro.timer.state`.  Every transition
that stops or restarts the run cancels the pending tick subscription
*before* the new state is committed, so a stale tick from an earlier
run can never touch the new one.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, TYPE_CHECKING

from PyQt6.QtCore import QObject, pyqtSignal

from .. import display
from . import state as timer_state
from .state import TimerConfig, TimerState
from .ticker import TickSubscription

if TYPE_CHECKING:
    from ..notifications import Notifier
    from ..persistence import SnapshotStore

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


def wall_clock_ms() -> int:
    return int(time.time() * 1000)


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Pomodoro countdown with anchor-based drift correction.

    Signals
    -------
    tick(remaining_seconds: int)
        Emitted on every tick evaluation while running.
    state_changed(state: TimerState)
        Emitted after every command and after the tick that finishes a
        run.
    completed()
        Emitted exactly once when a run reaches zero by itself.  Never
        emitted for pause, reset or a duration change.
    """

    tick = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    completed = pyqtSignal()

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        config: TimerConfig | None = None,
        clock: Callable[[], int] = wall_clock_ms,
        store: SnapshotStore | None = None,
        notifier: Notifier | None = None,
        tick_interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)

        # ── collaborators ─────────────────────────────────────────────
        self._config: TimerConfig = config or TimerConfig()
        self._clock = clock
        self._store = store
        self._notifier = notifier
        self._tick_interval_ms = tick_interval_ms

        # ── countdown state ───────────────────────────────────────────
        self._state: TimerState = timer_state.initial_state(self._config)
        self._ticks: TickSubscription | None = None

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def config(self) -> TimerConfig:
        return self._config

    @property
    def presets(self) -> tuple[int, ...]:
        return self._config.presets

    @property
    def remaining(self) -> int:
        """Seconds left on the clock as of the last evaluation."""
        return self._state.remaining_seconds

    @property
    def selected_minutes(self) -> int:
        return self._state.selected_minutes

    @property
    def is_running(self) -> bool:
        return self._state.running

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the current run."""
        return display.progress_fraction(
            self._state.remaining_seconds, self._state.selected_minutes,
        )

    @property
    def time_text(self) -> str:
        return display.format_time(self._state.remaining_seconds)

    @property
    def title(self) -> str:
        return display.window_title(self._state.remaining_seconds, self._state.running)

    @property
    def ticking(self) -> bool:
        """True while a tick subscription is live."""
        return self._ticks is not None and self._ticks.active

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start or resume.  No-op while already running."""
        if self._state.running:
            return
        self._cancel_ticks()
        self._commit(timer_state.start(self._state, self._clock()))
        self._subscribe()

    def pause(self) -> None:
        """Freeze the countdown.  No-op while stopped.

        One tick is evaluated first so the frozen value is current even
        if the tick source has been throttled.  If that tick finishes
        the run, it completes normally instead of pausing.
        """
        if not self._state.running:
            return
        self._on_tick()
        if not self._state.running:
            return
        self._cancel_ticks()
        self._commit(timer_state.pause(self._state))

    def toggle(self) -> None:
        """The start/pause button."""
        if self._state.running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        """Stop and refill to the selected duration."""
        self._cancel_ticks()
        self._commit(timer_state.reset(self._state))

    def select_duration(self, minutes: int) -> None:
        """Switch presets, cancelling any run in progress.

        Raises :class:`~pomodoro.timer.state.InvalidDurationError` for a
        value outside the presets; the current state is left untouched.
        """
        new_state = timer_state.select_duration(self._state, self._config, minutes)
        self._cancel_ticks()
        self._commit(new_state)

    def restore(self) -> TimerState:
        """Load the saved snapshot, once, at startup.

        A snapshot that was running picks up where the wall clock says it
        should be; if the run ended while the app was closed, completion
        fires now.
        """
        loaded = self._store.load() if self._store is not None else None
        self._cancel_ticks()
        if loaded is None:
            logger.info("no saved timer state; starting fresh")
            self._commit(timer_state.initial_state(self._config))
            return self._state

        logger.info(
            "restored timer: %s left of %d min (%s)",
            display.format_time(loaded.remaining_seconds),
            loaded.selected_minutes,
            "running" if loaded.running else "stopped",
        )
        self._state = loaded
        if loaded.running:
            self._on_tick()
            if self._state.running:
                self._subscribe()
        self.state_changed.emit(self._state)
        return self._state

    def shutdown(self) -> None:
        """Release the tick subscription and write a final snapshot."""
        self._cancel_ticks()
        self._save()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _subscribe(self) -> None:
        self._ticks = TickSubscription(
            self._on_tick, self._tick_interval_ms, parent=self,
        )
        self._ticks.start()

    def _cancel_ticks(self) -> None:
        if self._ticks is None:
            return
        self._ticks.cancel()
        self._ticks.deleteLater()
        self._ticks = None

    def _on_tick(self) -> None:
        if not self._state.running:
            # stale tick from a finished or cancelled run
            self._cancel_ticks()
            return

        result = timer_state.evaluate_tick(self._state, self._clock())
        self._state = result.state
        self._save()
        self.tick.emit(self._state.remaining_seconds)

        if result.completed:
            self._finish()

    def _finish(self) -> None:
        self._cancel_ticks()
        logger.info("%d-minute run complete", self._state.selected_minutes)
        self.state_changed.emit(self._state)
        if self._notifier is not None:
            self._notifier.notify()
        self.completed.emit()

    def _commit(self, new_state: TimerState) -> None:
        self._state = new_state
        logger.debug("timer state: %s", new_state)
        self._save()
        self.state_changed.emit(new_state)

    def _save(self) -> None:
        if self._store is not None:
            self._store.save(self._state)
