"""Centralized UI constants for the convolution visualizer.

This file only stores values (numbers, colors, labels).
Keeping these in one place makes the UI easier to tune later because
you do not need to search through the full application for each value.
"""

# Main window sizing defaults.
WINDOW_SIZE = "1280x820"
WINDOW_MIN_SIZE = (980, 640)

# Pixel size of one matrix cell on screen, and the gap around each grid.
GRID_CELL_SIZE = 28
GRID_MARGIN = 4

# Largest input size offered by the sliders (per axis).
MAX_INPUT_SIZE = 16
# Upper limit for the monotone bound search on kernel size and dilation.
BOUND_SEARCH_LIMIT = 100

# The animation advances one output cell per interval.
ANIMATION_INTERVAL_MS = 1000

# Initial parameters when nothing was saved: 5x5 input, 3x3 kernel.
DEFAULT_PARAMS = {
    "input_height": 5,
    "input_width": 5,
    "weight_height": 3,
    "weight_width": 3,
    "padding": 0,
    "dilation": 1,
    "stride_height": 1,
    "stride_width": 1,
}

# Slider rows shown in the parameter panel: (field name, label).
PARAM_CONTROLS = [
    ("input_height", "Input height"),
    ("input_width", "Input width"),
    ("weight_height", "Kernel height"),
    ("weight_width", "Kernel width"),
    ("padding", "Padding"),
    ("dilation", "Dilation"),
    ("stride_height", "Stride height"),
    ("stride_width", "Stride width"),
]

# When axes are linked, editing a height field also sets its width partner.
LINKED_FIELDS = {
    "input_height": "input_width",
    "weight_height": "weight_width",
    "stride_height": "stride_width",
}

# Core color palette used by the app.
COLOR_BG = "#f3f7fb"
COLOR_CARD = "#ffffff"
COLOR_INK = "#0f172a"
COLOR_SUB = "#475569"
COLOR_EDGE = "#cbd5e1"

# Transparent matrix cells are drawn in this color.
COLOR_CELL_EMPTY = "#ffffff"
COLOR_CELL_OUTLINE = "#94a3b8"

# Colors used by the status banner at the bottom.
COLOR_STATUS_INFO_BG = "#e0f2fe"
COLOR_STATUS_INFO_FG = "#0c4a6e"
COLOR_STATUS_WARN_BG = "#fff7ed"
COLOR_STATUS_WARN_FG = "#9a3412"

# Neutral button colors (normal, hover, pressed).
COLOR_NEUTRAL_BTN = "#e5e7eb"
COLOR_NEUTRAL_BTN_HOVER = "#d1d5db"
COLOR_NEUTRAL_BTN_PRESS = "#c7ccd4"
