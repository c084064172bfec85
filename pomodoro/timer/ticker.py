"""Cancellable once-per-second tick source."""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import QObject, QTimer


class TickSubscription(QObject):
    """A recurring callback that can be cancelled exactly once.

    After :meth:`cancel` the callback is never invoked again, even if a
    timeout was already queued on the event loop when it was cancelled.
    A cancelled subscription cannot be restarted; acquire a new one.

    Usage::

        with TickSubscription(engine._on_tick, parent=engine) as sub:
            sub.start()
            ...
    """

    def __init__(
        self,
        callback: Callable[[], None],
        interval_ms: int = 1000,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._callback = callback
        self._cancelled = False
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._fire)

    @property
    def active(self) -> bool:
        return not self._cancelled and self._timer.isActive()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def start(self) -> None:
        if self._cancelled:
            raise RuntimeError("cannot restart a cancelled tick subscription")
        self._timer.start()

    def cancel(self) -> None:
        """Stop the timer.  Safe to call repeatedly."""
        if self._cancelled:
            return
        self._cancelled = True
        self._timer.stop()
        self._timer.timeout.disconnect(self._fire)

    def _fire(self) -> None:
        if self._cancelled:
            return
        self._callback()

    def __enter__(self) -> "TickSubscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cancel()
