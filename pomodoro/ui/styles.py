"""QSS stylesheets, theming, and ring colors for the Pomodoro timer."""

from __future__ import annotations

from ..persistence import DEFAULT_THEME

# ── palettes ─────────────────────────────────────────────────────────────
#    "dark" mirrors the indigo → purple card; "light" is its daytime twin.

PALETTES: dict[str, dict[str, str]] = {
    "dark": {
        "bg":           "#4C3FB8",
        "bg_secondary": "#5B4BC9",
        "surface":      "#6A5AD6",
        "accent":       "#FFFFFF",
        "accent_text":  "#4F46E5",
        "text":         "#FFFFFF",
        "text_muted":   "#C9C3F2",
        "border":       "#7A6CE0",
        "ring":         "#FFFFFF",
    },
    "light": {
        "bg":           "#F4F3FF",
        "bg_secondary": "#FFFFFF",
        "surface":      "#E9E7FD",
        "accent":       "#4F46E5",
        "accent_text":  "#FFFFFF",
        "text":         "#1E1B4B",
        "text_muted":   "#6B6A8A",
        "border":       "#D4D1F5",
        "ring":         "#4F46E5",
    },
}


def get_palette(theme: str) -> dict[str, str]:
    """Return the colour palette for *theme*, falling back to the default."""
    return dict(PALETTES.get(theme, PALETTES[DEFAULT_THEME]))


def other_theme(theme: str) -> str:
    return "light" if theme == "dark" else "dark"


# ── QSS builder ───────────────────────────────────────────────────────


def build_stylesheet(palette: dict[str, str]) -> str:
    p = palette
    return f"""
    /* ── global ─────────────────────────────────── */
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    QMainWindow {{
        background-color: {p['bg']};
    }}

    /* ── buttons ─────────────────────────────────── */
    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 10px 24px;
        font-size: 14px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        background-color: {p['surface']};
    }}

    QPushButton#durationButton {{
        border-radius: 16px;
        padding: 8px 16px;
    }}

    QPushButton#durationButton:checked {{
        background-color: {p['accent']};
        color: {p['accent_text']};
        border-color: {p['accent']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['accent_text']};
        border: none;
        font-size: 17px;
        padding: 14px 40px;
        border-radius: 24px;
        font-weight: 700;
    }}

    QPushButton#secondaryButton {{
        background-color: transparent;
        color: {p['text_muted']};
        border: 1px solid {p['border']};
        font-size: 13px;
        padding: 8px 16px;
        border-radius: 8px;
    }}

    QPushButton#secondaryButton:hover {{
        color: {p['text']};
        border-color: {p['text_muted']};
    }}

    /* ── frame / card ────────────────────────────── */
    QFrame#card {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 16px;
    }}
    """
