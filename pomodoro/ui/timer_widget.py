"""Main timer display widget.

Layout (top → bottom):
    - Duration preset row (one button per preset)
    - ProgressRing (large, centred)
    - Start/Pause + Reset buttons
    - Theme toggle
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QButtonGroup, QFrame, QSizePolicy,
)

from ..display import format_time
from ..timer.engine import TimerEngine
from ..timer.state import TimerState
from .progress_ring import ProgressRing


def state_label(state: TimerState) -> str:
    if state.running:
        return "FOCUS TIME"
    if state.remaining_seconds == 0:
        return "DONE"
    if state.remaining_seconds < state.total_seconds:
        return "PAUSED"
    return "READY"


class TimerWidget(QWidget):
    """The timer card: presets, ring and controls."""

    theme_toggle_requested = pyqtSignal()

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._duration_buttons: dict[int, QPushButton] = {}
        self._build_ui()
        self._connect_signals()
        self._on_state_changed(engine.state)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(28, 24, 28, 24)
        layout.setSpacing(0)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        # ── duration selector ────────────────────────────────────────
        preset_row = QHBoxLayout()
        preset_row.setSpacing(10)
        preset_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._duration_group = QButtonGroup(card)
        self._duration_group.setExclusive(True)
        for minutes in self._engine.presets:
            btn = QPushButton(f"{minutes} min", card)
            btn.setObjectName("durationButton")
            btn.setCheckable(True)
            self._duration_group.addButton(btn, minutes)
            self._duration_buttons[minutes] = btn
            preset_row.addWidget(btn)
        layout.addLayout(preset_row)

        layout.addSpacing(16)

        # ── progress ring (centrepiece) ──────────────────────────────
        ring_container = QHBoxLayout()
        ring_container.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._ring = ProgressRing(card)
        self._ring.setSizePolicy(
            QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed,
        )
        self._ring.setFixedSize(320, 320)
        ring_container.addWidget(self._ring)
        layout.addLayout(ring_container)

        layout.addSpacing(16)

        # ── main controls ────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")

        self._reset_btn = QPushButton("Reset", card)
        self._reset_btn.setObjectName("secondaryButton")

        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

        layout.addSpacing(12)

        self._theme_btn = QPushButton("Light mode", card)
        self._theme_btn.setObjectName("secondaryButton")
        layout.addWidget(self._theme_btn, alignment=Qt.AlignmentFlag.AlignCenter)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self._engine.toggle)
        self._reset_btn.clicked.connect(self._engine.reset)
        self._duration_group.idClicked.connect(self._engine.select_duration)
        self._theme_btn.clicked.connect(lambda: self.theme_toggle_requested.emit())

        self._engine.tick.connect(self._refresh_display)
        self._engine.state_changed.connect(self._on_state_changed)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_state_changed(self, state: TimerState) -> None:
        self._start_pause_btn.setText("Pause" if state.running else "Start")

        btn = self._duration_buttons.get(state.selected_minutes)
        if btn is not None and not btn.isChecked():
            btn.setChecked(True)

        self._ring.set_state_label(state_label(state))
        self._ring.set_running(state.running)
        self._refresh_display(state.remaining_seconds)

    def _refresh_display(self, remaining: int) -> None:
        self._ring.set_time_text(format_time(remaining))
        self._ring.set_percent(self._engine.percent_complete)

    # ── theming ───────────────────────────────────────────────────────────

    def apply_palette(self, palette: dict[str, str], theme: str) -> None:
        self._ring.apply_palette(palette)
        self._theme_btn.setText("Light mode" if theme == "dark" else "Dark mode")
