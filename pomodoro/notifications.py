"""Desktop notification on countdown completion.

The notifier never blocks the timer: without permission every call is a
silent no-op, and a failing platform channel is logged and ignored.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from PyQt6.QtCore import QObject, pyqtSignal

logger = logging.getLogger(__name__)

COMPLETION_TITLE = "Pomodoro Timer"
COMPLETION_BODY = "Time's up! Take a break."


class PermissionStatus(Enum):
    GRANTED = "granted"
    DENIED = "denied"
    UNDETERMINED = "undetermined"


def _tray_available() -> bool:
    from PyQt6.QtWidgets import QSystemTrayIcon
    return QSystemTrayIcon.isSystemTrayAvailable()


class Notifier(QObject):
    """One-shot user alerts behind a permission gate.

    Signals
    -------
    permission_resolved(status: PermissionStatus)
        Emitted once, when :meth:`request_permission` first settles the
        status.
    """

    permission_resolved = pyqtSignal(object)

    def __init__(
        self,
        show_message: Callable[[str, str], None],
        is_available: Callable[[], bool] = _tray_available,
        *,
        enabled: bool = True,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._show_message = show_message
        self._is_available = is_available
        self._enabled = enabled
        self._status = PermissionStatus.UNDETERMINED

    @property
    def status(self) -> PermissionStatus:
        return self._status

    def request_permission(self) -> PermissionStatus:
        """Settle the permission status.  Safe to call any number of times.

        Only the first call probes the platform; the answer is then kept
        for the rest of the session.
        """
        if self._status != PermissionStatus.UNDETERMINED:
            return self._status

        if not self._enabled:
            self._status = PermissionStatus.DENIED
        else:
            try:
                available = self._is_available()
            except Exception:
                logger.exception("notification availability probe failed")
                available = False
            self._status = (
                PermissionStatus.GRANTED if available else PermissionStatus.DENIED
            )

        logger.info("notification permission: %s", self._status.value)
        self.permission_resolved.emit(self._status)
        return self._status

    def notify(self, title: str = COMPLETION_TITLE, body: str = COMPLETION_BODY) -> bool:
        """Show one alert.  Returns False when nothing was shown."""
        if self._status != PermissionStatus.GRANTED:
            logger.debug("notification suppressed (%s)", self._status.value)
            return False
        try:
            self._show_message(title, body)
        except Exception:
            logger.exception("notification channel failed")
            return False
        return True
