"""Theme configuration — Fluent Design theme and accent color."""

from __future__ import annotations

from qfluentwidgets import Theme, setTheme, setThemeColor

_THEMES = {"light": Theme.LIGHT, "dark": Theme.DARK, "auto": Theme.AUTO}


def apply_theme(name: str = "auto", accent_color: str = "#0078D4") -> None:
    """Apply the application theme ("light", "dark" or "auto")."""
    setTheme(_THEMES.get(name, Theme.AUTO))
    setThemeColor(accent_color)
