"""UI constants — shared dimensions and keys."""

from __future__ import annotations

# Icon size in the game list
LIST_ICON_SIZE = 32

# Main window
WINDOW_MIN_WIDTH = 640
WINDOW_MIN_HEIGHT = 480
WINDOW_DEFAULT_WIDTH = 960
WINDOW_DEFAULT_HEIGHT = 680

# Dialog
DIALOG_MIN_WIDTH = 520
