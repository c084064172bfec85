"""Main application window for the Pomodoro timer."""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QColor, QIcon, QPainter, QPixmap
from PyQt6.QtWidgets import QMainWindow, QSystemTrayIcon, QVBoxLayout, QWidget

from .display import DEFAULT_TITLE
from .notifications import Notifier, PermissionStatus
from .persistence import LocalStorage, SnapshotStore, ThemeStore
from .settings import Settings, load_settings, save_settings
from .timer.engine import TimerEngine, wall_clock_ms
from .timer.state import DEFAULT_MINUTES, DEFAULT_PRESETS, TimerConfig, TimerState
from .ui.styles import build_stylesheet, get_palette, other_theme
from .ui.timer_widget import TimerWidget

logger = logging.getLogger(__name__)


def make_app_icon(color: str = "#6366F1") -> QIcon:
    """Placeholder icon: a filled circle in the accent colour."""
    icon = QPixmap(256, 256)
    icon.fill(QColor(0, 0, 0, 0))
    p = QPainter(icon)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    p.setBrush(QColor(color))
    p.setPen(QColor(color).darker(120))
    p.drawEllipse(16, 16, 224, 224)
    p.end()
    return QIcon(icon)


def config_from_settings(settings: Settings) -> TimerConfig:
    """Preset list plus the configured starting duration."""
    if TimerConfig(DEFAULT_PRESETS).is_valid(settings.default_minutes):
        return TimerConfig(DEFAULT_PRESETS, settings.default_minutes)
    logger.warning(
        "default_minutes=%r is not a preset; using %d",
        settings.default_minutes, DEFAULT_MINUTES,
    )
    return TimerConfig(DEFAULT_PRESETS, DEFAULT_MINUTES)


class PomodoroApp(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        clock: Callable[[], int] = wall_clock_ms,
        storage: LocalStorage | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle(DEFAULT_TITLE)
        self.setMinimumSize(400, 560)

        # ── geometry save timer ────────────────────────────────────────
        self._geometry_save_timer = QTimer(self)
        self._geometry_save_timer.setSingleShot(True)
        self._geometry_save_timer.setInterval(500)
        self._geometry_save_timer.timeout.connect(self._save_geometry)

        # ── settings + storage ────────────────────────────────────────
        self._settings: Settings = settings or load_settings()
        config = config_from_settings(self._settings)
        storage = storage or LocalStorage()
        self._snapshot_store = SnapshotStore(storage, config)
        self._theme_store = ThemeStore(storage)

        # ── tray icon (notification channel) ──────────────────────────
        self._tray_icon = QSystemTrayIcon(make_app_icon(), self)
        self._tray_icon.setToolTip(DEFAULT_TITLE)
        if QSystemTrayIcon.isSystemTrayAvailable():
            self._tray_icon.show()

        self._notifier = Notifier(
            self._tray_icon.showMessage,
            enabled=self._settings.notifications_enabled,
            parent=self,
        )

        # ── engine ────────────────────────────────────────────────────
        self._timer_engine = TimerEngine(
            self,
            config=config,
            clock=clock,
            store=self._snapshot_store,
            notifier=self._notifier,
            tick_interval_ms=self._settings.tick_interval_ms,
        )

        # ── central widget ────────────────────────────────────────────
        central = QWidget()
        self.setCentralWidget(central)
        root_layout = QVBoxLayout(central)
        root_layout.setContentsMargins(16, 16, 16, 16)

        self._timer_widget = TimerWidget(self._timer_engine, central)
        self._timer_widget.theme_toggle_requested.connect(self.toggle_theme)
        root_layout.addWidget(self._timer_widget)

        # ── theme ─────────────────────────────────────────────────────
        self._theme = self._theme_store.load()
        self._apply_theme(self._theme)

        # ── wire signals ──────────────────────────────────────────────
        self._timer_engine.tick.connect(self._on_tick)
        self._timer_engine.state_changed.connect(self._on_state_changed)

        # ── startup: permission first, so a run that ended while we
        #    were closed can still notify on restore ──────────────────
        if self._notifier.status == PermissionStatus.UNDETERMINED:
            self._notifier.request_permission()
        if self._settings.restore_on_launch:
            self._timer_engine.restore()

        self._restore_geometry()

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def engine(self) -> TimerEngine:
        return self._timer_engine

    @property
    def notifier(self) -> Notifier:
        return self._notifier

    @property
    def theme(self) -> str:
        return self._theme

    def toggle_theme(self) -> None:
        self._theme = other_theme(self._theme)
        self._theme_store.save(self._theme)
        self._apply_theme(self._theme)

    # ══════════════════════════════════════════════════════════════════
    #  TIMER SIGNALS
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self, remaining: int) -> None:
        self._update_title()

    def _on_state_changed(self, state: TimerState) -> None:
        self._update_title()

    def _update_title(self) -> None:
        title = self._timer_engine.title
        self.setWindowTitle(title)
        self._tray_icon.setToolTip(title)

    # ══════════════════════════════════════════════════════════════════
    #  THEME
    # ══════════════════════════════════════════════════════════════════

    def _apply_theme(self, theme: str) -> None:
        palette = get_palette(theme)
        self.setStyleSheet(build_stylesheet(palette))
        self._timer_widget.apply_palette(palette, theme)

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW STATE
    # ══════════════════════════════════════════════════════════════════

    def _restore_geometry(self) -> None:
        """Restore window position and size from settings."""
        s = self._settings
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)
        if s.window_width and s.window_height:
            self.resize(s.window_width, s.window_height)

    def _save_geometry(self) -> None:
        """Persist current window geometry to settings."""
        if not self.isVisible():
            return
        pos = self.pos()
        size = self.size()
        self._settings.window_x = pos.x()
        self._settings.window_y = pos.y()
        self._settings.window_width = size.width()
        self._settings.window_height = size.height()
        try:
            save_settings(self._settings)
        except OSError as exc:
            logger.warning("could not save window geometry: %s", exc)

    def _schedule_geometry_save(self) -> None:
        """Debounce geometry saves; restart the 500ms timer on each move/resize."""
        if hasattr(self, "_geometry_save_timer"):
            self._geometry_save_timer.start()

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._save_geometry()
        self._timer_engine.shutdown()
        self._tray_icon.hide()
        event.accept()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._schedule_geometry_save()

    def moveEvent(self, event) -> None:  # type: ignore[override]
        super().moveEvent(event)
        self._schedule_geometry_save()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Space toggles start/pause, Escape resets."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._timer_engine.toggle()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._timer_engine.reset()
            event.accept()
            return
        super().keyPressEvent(event)
