"""Circular progress ring widget rendered with QPainter.

- Fills clockwise from 12 o'clock as the run progresses.
- Shows MM:SS in bold text at the centre plus a small state label.
- Smoothly animates the arc between ticks.
- Gentle glow pulse while the countdown is running.
"""

from __future__ import annotations

import math

from PyQt6.QtCore import Qt, QRectF, QTimer, QVariantAnimation, QEasingCurve
from PyQt6.QtGui import QPainter, QPen, QColor, QFont
from PyQt6.QtWidgets import QWidget


class ProgressRing(QWidget):
    """Custom-painted circular timer ring."""

    # Ring geometry constants
    RING_DIAMETER = 280
    RING_THICKNESS = 14
    GLOW_EXTRA = 6  # extra width for the glow effect

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(self.RING_DIAMETER + 40, self.RING_DIAMETER + 40)

        # ── state ──────────────────────────────────────────────────────
        self._percent: float = 0.0           # 0..1 arc fill
        self._display_percent: float = 0.0   # animated arc fill
        self._time_text: str = "25:00"
        self._state_label: str = "READY"
        self._running: bool = False

        # ── colors ─────────────────────────────────────────────────────
        self._ring_color = QColor("#FFFFFF")
        self._text_color = QColor("#FFFFFF")
        self._muted_color = QColor("#C9C3F2")

        # ── arc transition animation ───────────────────────────────────
        self._arc_anim = QVariantAnimation(self)
        self._arc_anim.setDuration(500)
        self._arc_anim.setEasingCurve(QEasingCurve.Type.OutCubic)
        self._arc_anim.valueChanged.connect(self._on_arc_anim)

        # ── active glow pulse ──────────────────────────────────────────
        self._glow_phase: float = 0.0
        self._glow_timer = QTimer(self)
        self._glow_timer.setInterval(33)  # ~30 fps
        self._glow_timer.timeout.connect(self._on_glow_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC API
    # ══════════════════════════════════════════════════════════════════

    @property
    def percent(self) -> float:
        return self._percent

    @property
    def time_text(self) -> str:
        return self._time_text

    @property
    def state_label(self) -> str:
        return self._state_label

    def set_percent(self, pct: float) -> None:
        """Update the arc fill (0..1). Smoothly animates."""
        pct = max(0.0, min(1.0, pct))
        self._percent = pct
        self._arc_anim.stop()
        self._arc_anim.setStartValue(self._display_percent)
        self._arc_anim.setEndValue(pct)
        self._arc_anim.start()

    def set_time_text(self, text: str) -> None:
        self._time_text = text
        self.update()

    def set_state_label(self, text: str) -> None:
        self._state_label = text
        self.update()

    def set_running(self, running: bool) -> None:
        """Start or stop the glow pulse."""
        self._running = running
        if running:
            if not self._glow_timer.isActive():
                self._glow_timer.start()
        else:
            self._glow_timer.stop()
            self._glow_phase = 0.0
        self.update()

    def apply_palette(self, palette: dict[str, str]) -> None:
        """Update ring/text colors from theme palette."""
        self._ring_color = QColor(palette.get("ring", "#FFFFFF"))
        self._text_color = QColor(palette.get("text", "#FFFFFF"))
        self._muted_color = QColor(palette.get("text_muted", "#C9C3F2"))
        self.update()

    # ══════════════════════════════════════════════════════════════════
    #  ANIMATION SLOTS
    # ══════════════════════════════════════════════════════════════════

    def _on_arc_anim(self, value: object) -> None:
        self._display_percent = float(value)  # type: ignore[arg-type]
        self.update()

    def _on_glow_tick(self) -> None:
        self._glow_phase += 0.06
        if self._glow_phase > 2 * math.pi:
            self._glow_phase -= 2 * math.pi
        self.update()

    # ══════════════════════════════════════════════════════════════════
    #  PAINTING
    # ══════════════════════════════════════════════════════════════════

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        w = self.width()
        h = self.height()
        cx, cy = w / 2, h / 2
        diameter = max(100, min(w, h) - 40)
        radius = diameter / 2
        thickness = self.RING_THICKNESS

        ring_rect = QRectF(cx - radius, cy - radius, diameter, diameter)

        # ── background track ─────────────────────────────────────────
        track_color = QColor(self._ring_color)
        track_color.setAlpha(51)
        track_pen = QPen(track_color, thickness, Qt.PenStyle.SolidLine)
        painter.setPen(track_pen)
        painter.drawEllipse(ring_rect)

        # ── progress arc ─────────────────────────────────────────────
        pct = self._display_percent
        if pct > 0.001:
            arc_pen = QPen(self._ring_color, thickness, Qt.PenStyle.SolidLine)
            arc_pen.setCapStyle(Qt.PenCapStyle.RoundCap)
            painter.setPen(arc_pen)

            # Qt arcs: start at 12 o'clock (90*16), go clockwise (negative)
            start_angle = 90 * 16
            span_angle = -int(pct * 360 * 16)
            painter.drawArc(ring_rect, start_angle, span_angle)

            if self._running:
                glow_color = QColor(self._ring_color)
                glow_color.setAlpha(int(20 + 15 * math.sin(self._glow_phase)))
                glow_pen = QPen(
                    glow_color, thickness + self.GLOW_EXTRA,
                    Qt.PenStyle.SolidLine,
                )
                glow_pen.setCapStyle(Qt.PenCapStyle.RoundCap)
                painter.setPen(glow_pen)
                painter.drawArc(ring_rect, start_angle, span_angle)

        # ── centre text: time ────────────────────────────────────────
        time_font = QFont()
        time_font.setPixelSize(56)
        time_font.setWeight(QFont.Weight.Bold)
        painter.setFont(time_font)
        painter.setPen(self._text_color)

        time_rect = QRectF(ring_rect)
        time_rect.moveTop(time_rect.top() - 10)
        painter.drawText(time_rect, Qt.AlignmentFlag.AlignCenter, self._time_text)

        # ── centre text: state label ─────────────────────────────────
        label_font = QFont()
        label_font.setPixelSize(12)
        label_font.setWeight(QFont.Weight.DemiBold)
        label_font.setLetterSpacing(QFont.SpacingType.AbsoluteSpacing, 3)
        painter.setFont(label_font)
        painter.setPen(self._muted_color)

        label_rect = QRectF(ring_rect)
        label_rect.moveTop(label_rect.top() + 40)
        painter.drawText(label_rect, Qt.AlignmentFlag.AlignCenter, self._state_label)

        painter.end()
