"""Shared constants for escape-code synthesis and measurement."""

# ANSI escape sequences
ESC = "\x1b"
CSI = f"{ESC}["
RESET = f"{CSI}0m"

# SGR attribute parameters, in canonical emission order
SGR_ATTRIBUTES: tuple[tuple[str, str], ...] = (
    ("bold", "1"),
    ("italic", "3"),
    ("underline", "4"),
    ("strikethrough", "9"),
    ("reverse", "7"),
    ("blink", "5"),
    ("faint", "2"),
)

FAINT = f"{CSI}2m"

# Default ellipsis for truncation
ELLIPSIS = "…"

# Light shade, used for modal backdrops
BACKDROP_CHAR = "░"

# Standard 16-color palette (indices 0-15) as RGB
ANSI_16_PALETTE: tuple[tuple[int, int, int], ...] = (
    (0, 0, 0), (128, 0, 0), (0, 128, 0), (128, 128, 0),
    (0, 0, 128), (128, 0, 128), (0, 128, 128), (192, 192, 192),
    (128, 128, 128), (255, 0, 0), (0, 255, 0), (255, 255, 0),
    (0, 0, 255), (255, 0, 255), (0, 255, 255), (255, 255, 255),
)

# Channel levels of the 6x6x6 cube (indices 16-231)
CUBE_LEVELS: tuple[int, ...] = (0, 95, 135, 175, 215, 255)

# Basic color names and their standard-16 index
COLORS_16 = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
    "bright_black": 8,
    "gray": 8,
    "grey": 8,
    "bright_red": 9,
    "bright_green": 10,
    "bright_yellow": 11,
    "bright_blue": 12,
    "bright_magenta": 13,
    "bright_cyan": 14,
    "bright_white": 15,
}

# Extra names resolved through their true-color value
NAMED_HEX = {
    "orange": "#FFA500",
    "purple": "#800080",
    "pink": "#FFC0CB",
    "brown": "#A52A2A",
    "lime": "#00FF00",
    "navy": "#000080",
    "teal": "#008080",
    "silver": "#C0C0C0",
    "gold": "#FFD700",
}

TRANSPARENT = "transparent"
