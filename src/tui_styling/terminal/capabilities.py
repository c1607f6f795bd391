"""Terminal capability detection - color profile, background and unicode support.

Detection only reads environment variables and the isatty flag of the
output stream. Nothing is cached; callers that render at high frequency
should detect once and pass the resulting ``TerminalCapabilities`` along.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, TextIO

logger = logging.getLogger(__name__)


class ColorProfile(Enum):
    """Color depth a terminal can display."""
    NO_COLOR = "noColor"
    ANSI = "ansi"           # 16 colors (SGR 30-37, 90-97)
    ANSI256 = "ansi256"     # 256-color palette (SGR 38;5;n)
    TRUE_COLOR = "trueColor"  # 24-bit (SGR 38;2;r;g;b)

    @property
    def rank(self) -> int:
        return _PROFILE_RANK[self]


_PROFILE_RANK = {
    ColorProfile.NO_COLOR: 0,
    ColorProfile.ANSI: 1,
    ColorProfile.ANSI256: 2,
    ColorProfile.TRUE_COLOR: 3,
}

# Terminal programs known to render 24-bit color
_TRUE_COLOR_PROGRAMS = ("ghostty", "iterm", "vscode", "hyper", "wezterm", "alacritty", "kitty")
_ANSI256_PROGRAMS = ("apple_terminal", "terminal", "konsole")


@dataclass(frozen=True)
class TerminalCapabilities:
    """
    What the output terminal can display.

    ``has_dark_background`` is ``None`` when the background is unknown.
    """
    profile: ColorProfile = ColorProfile.ANSI
    has_dark_background: Optional[bool] = None
    supports_unicode: bool = True

    @property
    def has_color(self) -> bool:
        return self.profile is not ColorProfile.NO_COLOR

    @property
    def has_true_color(self) -> bool:
        return self.profile is ColorProfile.TRUE_COLOR

    @classmethod
    def true_color(cls, dark: Optional[bool] = True) -> "TerminalCapabilities":
        return cls(ColorProfile.TRUE_COLOR, dark)

    @classmethod
    def ansi256(cls, dark: Optional[bool] = True) -> "TerminalCapabilities":
        return cls(ColorProfile.ANSI256, dark)

    @classmethod
    def ansi(cls, dark: Optional[bool] = True) -> "TerminalCapabilities":
        return cls(ColorProfile.ANSI, dark)

    @classmethod
    def no_color(cls) -> "TerminalCapabilities":
        return cls(ColorProfile.NO_COLOR, None)

    @classmethod
    def detect(
        cls,
        env: Optional[Mapping[str, str]] = None,
        stream: Optional[TextIO] = None,
    ) -> "TerminalCapabilities":
        """Detect capabilities from the environment and output stream."""
        env = os.environ if env is None else env
        stream = sys.stdout if stream is None else stream
        caps = cls(
            profile=detect_color_profile(env, stream),
            has_dark_background=detect_dark_background(env),
            supports_unicode=detect_unicode(env),
        )
        logger.debug("detected terminal capabilities: %s", caps)
        return caps


def _is_tty(stream: Optional[TextIO]) -> bool:
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (OSError, ValueError):
        return False


def detect_color_profile(env: Mapping[str, str], stream: Optional[TextIO] = None) -> ColorProfile:
    """
    Determine the color profile.

    Order: NO_COLOR, FORCE_COLOR, non-TTY output, COLORTERM,
    TERM_PROGRAM, TERM, CI. Falls back to basic ANSI.
    """
    if "NO_COLOR" in env:
        return ColorProfile.NO_COLOR

    force = env.get("FORCE_COLOR")
    if force is not None:
        try:
            level = int(force) if force else 1
        except ValueError:
            level = 1
        if level >= 3:
            return ColorProfile.TRUE_COLOR
        if level == 2:
            return ColorProfile.ANSI256
        if level == 1:
            return ColorProfile.ANSI
        return ColorProfile.NO_COLOR

    if not _is_tty(stream):
        return ColorProfile.NO_COLOR

    term = env.get("TERM", "").lower()
    if term == "dumb":
        return ColorProfile.NO_COLOR

    if env.get("COLORTERM", "").lower() in ("truecolor", "24bit"):
        return ColorProfile.TRUE_COLOR

    program = env.get("TERM_PROGRAM", "").lower()
    if program:
        if any(name in program for name in _TRUE_COLOR_PROGRAMS):
            return ColorProfile.TRUE_COLOR
        if any(name in program for name in _ANSI256_PROGRAMS):
            return ColorProfile.ANSI256

    if term:
        if "truecolor" in term or "24bit" in term or "direct" in term:
            return ColorProfile.TRUE_COLOR
        if "256" in term:
            return ColorProfile.ANSI256
        if "color" in term or term.startswith(("xterm", "screen", "tmux", "linux")):
            return ColorProfile.ANSI

    if "CI" in env:
        return ColorProfile.ANSI

    return ColorProfile.ANSI


def detect_dark_background(env: Mapping[str, str]) -> Optional[bool]:
    """
    Best-effort background detection from COLORFGBG ("fg;bg").

    Background indices 0-6 and 8 are dark; anything else is light.
    Returns None when unknown.
    """
    value = env.get("COLORFGBG")
    if not value:
        return None
    bg = value.split(";")[-1]
    if not bg.isdigit():
        return None
    index = int(bg)
    return index in (0, 1, 2, 3, 4, 5, 6, 8)


def detect_unicode(env: Mapping[str, str]) -> bool:
    """Check locale variables for a UTF-8 encoding."""
    for name in ("LC_ALL", "LC_CTYPE", "LANG"):
        value = env.get(name)
        if value:
            return "utf-8" in value.lower() or "utf8" in value.lower()
    return sys.platform == "win32" or env.get("TERM", "") != "linux"
