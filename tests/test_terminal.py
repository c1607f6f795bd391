"""Tests for terminal capability detection."""

import io

import pytest

from tui_styling.terminal.capabilities import (
    ColorProfile,
    TerminalCapabilities,
    detect_color_profile,
    detect_dark_background,
    detect_unicode,
)


class TestColorProfile:
    """Tests for detect_color_profile."""

    def test_no_color_wins(self, tty) -> None:
        assert detect_color_profile({"NO_COLOR": "1", "COLORTERM": "truecolor"}, tty) is ColorProfile.NO_COLOR

    @pytest.mark.parametrize("level,expected", [
        ("3", ColorProfile.TRUE_COLOR),
        ("2", ColorProfile.ANSI256),
        ("1", ColorProfile.ANSI),
        ("", ColorProfile.ANSI),
        ("0", ColorProfile.NO_COLOR),
    ])
    def test_force_color(self, level: str, expected: ColorProfile) -> None:
        assert detect_color_profile({"FORCE_COLOR": level}, io.StringIO()) is expected

    def test_not_a_tty(self) -> None:
        assert detect_color_profile({"COLORTERM": "truecolor"}, io.StringIO()) is ColorProfile.NO_COLOR

    @pytest.mark.parametrize("env,expected", [
        ({"COLORTERM": "truecolor"}, ColorProfile.TRUE_COLOR),
        ({"COLORTERM": "24bit"}, ColorProfile.TRUE_COLOR),
        ({"TERM_PROGRAM": "iTerm.app"}, ColorProfile.TRUE_COLOR),
        ({"TERM_PROGRAM": "Apple_Terminal"}, ColorProfile.ANSI256),
        ({"TERM": "xterm-256color"}, ColorProfile.ANSI256),
        ({"TERM": "xterm"}, ColorProfile.ANSI),
        ({"TERM": "dumb"}, ColorProfile.NO_COLOR),
        ({"CI": "true"}, ColorProfile.ANSI),
        ({}, ColorProfile.ANSI),
    ])
    def test_tty(self, tty, env: dict, expected: ColorProfile) -> None:
        assert detect_color_profile(env, tty) is expected


class TestBackgroundAndUnicode:
    """Tests for COLORFGBG and locale detection."""

    @pytest.mark.parametrize("value,expected", [
        ("15;0", True),
        ("0;15", False),
        ("7;8", True),
        ("default;default", None),
        ("", None),
    ])
    def test_dark_background(self, value: str, expected) -> None:
        assert detect_dark_background({"COLORFGBG": value}) is expected

    def test_unknown_background(self) -> None:
        assert detect_dark_background({}) is None

    def test_unicode(self) -> None:
        assert detect_unicode({"LANG": "en_US.UTF-8"}) is True
        assert detect_unicode({"LC_ALL": "C", "LANG": "en_US.UTF-8"}) is False


class TestTerminalCapabilities:
    """Tests for TerminalCapabilities."""

    def test_detect(self, tty) -> None:
        caps = TerminalCapabilities.detect(
            env={"COLORTERM": "truecolor", "COLORFGBG": "15;0", "LANG": "en_US.UTF-8"},
            stream=tty,
        )
        assert caps == TerminalCapabilities(ColorProfile.TRUE_COLOR, True, True)
        assert caps.has_color
        assert caps.has_true_color

    def test_presets(self) -> None:
        assert TerminalCapabilities.true_color().profile is ColorProfile.TRUE_COLOR
        assert TerminalCapabilities.ansi256().profile is ColorProfile.ANSI256
        assert TerminalCapabilities.ansi(dark=False).has_dark_background is False
        assert not TerminalCapabilities.no_color().has_color

    def test_profile_rank(self) -> None:
        ranks = [p.rank for p in (ColorProfile.NO_COLOR, ColorProfile.ANSI,
                                  ColorProfile.ANSI256, ColorProfile.TRUE_COLOR)]
        assert ranks == sorted(ranks)
