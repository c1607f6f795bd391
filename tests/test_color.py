"""Tests for color values, conversions and resolution."""

import pytest

from tui_styling.core.color import (
    AdaptiveColor,
    Ansi256Color,
    Color,
    ColorMode,
    CompleteColor,
    HexColor,
    NamedColor,
    RGBColor,
    ansi256_to_rgb,
    darken,
    hex_to_rgb,
    hsl_to_rgb,
    invert,
    lighten,
    mix,
    parse_color,
    resolve_color,
    rgb_to_ansi16,
    rgb_to_ansi256,
    rgb_to_hex,
    rgb_to_hsl,
)
from tui_styling.core.result import Err, InvalidColor, Ok
from tui_styling.terminal.capabilities import ColorProfile


class TestColor:
    """Tests for the concrete Color class."""

    def test_from_16(self) -> None:
        color = Color.from_16(1)
        assert color.mode == ColorMode.STANDARD_16
        assert color.value == 1

    def test_from_256(self) -> None:
        color = Color.from_256(196)
        assert color.mode == ColorMode.EXTENDED_256
        assert color.value == 196

    def test_from_rgb_clamps(self) -> None:
        color = Color.from_rgb(300, 128, -4)
        assert color.mode == ColorMode.TRUE_COLOR
        assert color.value == (255, 128, 0)

    def test_out_of_range_index(self) -> None:
        with pytest.raises(ValueError):
            Color.from_256(256)
        with pytest.raises(ValueError):
            Color.from_16(16)

    def test_to_sgr_fg(self) -> None:
        assert Color.from_16(1).to_sgr_fg() == "31"
        assert Color.from_16(14).to_sgr_fg() == "96"
        assert Color.from_256(196).to_sgr_fg() == "38;5;196"
        assert Color.from_rgb(255, 0, 0).to_sgr_fg() == "38;2;255;0;0"

    def test_to_sgr_bg(self) -> None:
        assert Color.from_16(4).to_sgr_bg() == "44"
        assert Color.from_16(10).to_sgr_bg() == "102"
        assert Color.from_256(21).to_sgr_bg() == "48;5;21"
        assert Color.from_rgb(0, 0, 255).to_sgr_bg() == "48;2;0;0;255"


class TestConversions:
    """Tests for hex, HSL and palette conversions."""

    def test_hex_to_rgb(self) -> None:
        assert hex_to_rgb("#FF8800") == Ok((255, 136, 0))
        assert hex_to_rgb("ff8800") == Ok((255, 136, 0))

    @pytest.mark.parametrize("bad", ["#GG0000", "#FFF", "", "#FF00000"])
    def test_hex_to_rgb_rejects(self, bad: str) -> None:
        result = hex_to_rgb(bad)
        assert isinstance(result, Err)
        assert isinstance(result.error, InvalidColor)

    @pytest.mark.parametrize("hex_str", ["#ff8800", "#000000", "#AbCdEf"])
    def test_hex_round_trip(self, hex_str: str) -> None:
        assert rgb_to_hex(hex_to_rgb(hex_str).unwrap()) == hex_str.upper()

    def test_rgb_to_hex_clamps(self) -> None:
        assert rgb_to_hex((300, -5, 16)) == "#FF0010"

    def test_hsl(self) -> None:
        assert rgb_to_hsl((255, 0, 0)) == (0, 100, 50)
        assert hsl_to_rgb(0, 100, 50) == (255, 0, 0)
        assert hsl_to_rgb(120, 100, 50) == (0, 255, 0)
        assert hsl_to_rgb(0, 0, 50) == (128, 128, 128)

    def test_hue_wraps(self) -> None:
        assert hsl_to_rgb(360, 100, 50) == hsl_to_rgb(0, 100, 50)

    @pytest.mark.parametrize("index,expected", [
        (1, (128, 0, 0)),
        (16, (0, 0, 0)),
        (196, (255, 0, 0)),
        (231, (255, 255, 255)),
        (232, (8, 8, 8)),
        (255, (238, 238, 238)),
    ])
    def test_ansi256_to_rgb(self, index: int, expected: tuple[int, int, int]) -> None:
        assert ansi256_to_rgb(index) == Ok(expected)

    def test_ansi256_to_rgb_out_of_range(self) -> None:
        assert isinstance(ansi256_to_rgb(256), Err)
        assert isinstance(ansi256_to_rgb(-1), Err)

    def test_rgb_to_ansi256(self) -> None:
        assert rgb_to_ansi256((255, 0, 0)) == 196
        assert rgb_to_ansi256((0, 0, 0)) == 16
        assert rgb_to_ansi256((128, 128, 128)) == 244

    def test_rgb_to_ansi16(self) -> None:
        assert rgb_to_ansi16((255, 0, 0)) == 9
        assert rgb_to_ansi16((128, 0, 0)) == 1
        assert rgb_to_ansi16((250, 250, 250)) == 15


class TestManipulation:
    """Tests for lighten/darken/mix/invert."""

    def test_lighten(self) -> None:
        assert lighten("#000000", 50) == Ok("#808080")

    def test_darken(self) -> None:
        assert darken("#FFFFFF", 100) == Ok("#000000")

    def test_mix(self) -> None:
        assert mix("#FFFFFF", "#000000") == Ok("#808080")
        assert mix("#FFFFFF", "#000000", 100) == Ok("#FFFFFF")

    def test_invert(self) -> None:
        assert invert("#FF0000") == Ok("#00FFFF")

    def test_invalid_input(self) -> None:
        assert isinstance(lighten("nope", 10), Err)
        assert isinstance(mix("#000000", "transparent"), Err)


class TestParseColor:
    """Tests for duck-typed color parsing."""

    @pytest.mark.parametrize("raw,expected", [
        ("red", NamedColor("red")),
        ("RED", NamedColor("red")),
        ("transparent", NamedColor("transparent")),
        ("#ff0000", HexColor("#FF0000")),
        (196, Ansi256Color(196)),
        ((255, 0, 0), RGBColor(255, 0, 0)),
        ({"r": 1, "g": 2, "b": 3}, RGBColor(1, 2, 3)),
        ({"light": "black", "dark": "white"}, AdaptiveColor("black", "white")),
        ({"true_color": "#ff0000", "ansi256": 196, "ansi": 9}, CompleteColor("#FF0000", 196, 9)),
    ])
    def test_accepts(self, raw: object, expected: object) -> None:
        assert parse_color(raw) == Ok(expected)

    @pytest.mark.parametrize("raw", ["nope", 300, -1, True, None, (1, 2), {"ansi256": 999}])
    def test_rejects(self, raw: object) -> None:
        result = parse_color(raw)
        assert isinstance(result, Err)
        assert result.error.kind == "invalid_color"

    def test_kind_discriminants(self) -> None:
        assert HexColor("#FFFFFF").kind == "hex"
        assert NamedColor("red").kind == "named"
        assert Ansi256Color(1).kind == "ansi256"
        assert RGBColor(0, 0, 0).kind == "rgb"
        assert CompleteColor().kind == "complete"
        assert AdaptiveColor("a", "b").kind == "adaptive"


class TestResolveColor:
    """Tests for profile-aware resolution."""

    def test_hex_per_profile(self) -> None:
        assert resolve_color("#FF0000", ColorProfile.TRUE_COLOR) == Ok(Color.from_rgb(255, 0, 0))
        assert resolve_color("#FF0000", ColorProfile.ANSI256) == Ok(Color.from_256(196))
        assert resolve_color("#FF0000", ColorProfile.ANSI) == Ok(Color.from_16(9))

    def test_basic_names_stay_basic(self) -> None:
        for profile in (ColorProfile.TRUE_COLOR, ColorProfile.ANSI256, ColorProfile.ANSI):
            assert resolve_color("red", profile) == Ok(Color.from_16(1))

    def test_extra_names_go_through_hex(self) -> None:
        assert resolve_color("orange", ColorProfile.TRUE_COLOR) == Ok(Color.from_rgb(255, 165, 0))
        assert resolve_color("orange", ColorProfile.ANSI256) == Ok(Color.from_256(214))

    def test_ansi256_index(self) -> None:
        assert resolve_color(196, ColorProfile.ANSI256) == Ok(Color.from_256(196))
        assert resolve_color(196, ColorProfile.ANSI) == Ok(Color.from_16(9))
        assert resolve_color(5, ColorProfile.ANSI) == Ok(Color.from_16(5))

    def test_rgb_is_clamped(self) -> None:
        assert resolve_color(RGBColor(300, -10, 0), ColorProfile.TRUE_COLOR) == Ok(Color.from_rgb(255, 0, 0))

    def test_complete_prefers_best_fit(self) -> None:
        color = CompleteColor("#FF0000", 196, 9)
        assert resolve_color(color, ColorProfile.TRUE_COLOR) == Ok(Color.from_rgb(255, 0, 0))
        assert resolve_color(color, ColorProfile.ANSI256) == Ok(Color.from_256(196))
        assert resolve_color(color, ColorProfile.ANSI) == Ok(Color.from_16(9))

    def test_complete_degrades_best_available(self) -> None:
        assert resolve_color(CompleteColor(ansi256=196), ColorProfile.ANSI) == Ok(Color.from_16(9))
        assert resolve_color(CompleteColor(true_color="#00FF00"), ColorProfile.ANSI256) == Ok(Color.from_256(46))

    def test_adaptive(self) -> None:
        color = AdaptiveColor("black", "white")
        assert resolve_color(color, ColorProfile.ANSI, is_dark=True) == Ok(Color.from_16(7))
        assert resolve_color(color, ColorProfile.ANSI, is_dark=None) == Ok(Color.from_16(7))
        assert resolve_color(color, ColorProfile.ANSI, is_dark=False) == Ok(Color.from_16(0))

    def test_transparent_and_no_color(self) -> None:
        assert resolve_color("transparent", ColorProfile.TRUE_COLOR) == Ok(None)
        assert resolve_color("#FF0000", ColorProfile.NO_COLOR) == Ok(None)

    def test_invalid_even_without_color(self) -> None:
        assert isinstance(resolve_color("bogus", ColorProfile.NO_COLOR), Err)

    def test_invalid_variants(self) -> None:
        assert isinstance(resolve_color(NamedColor("bogus"), ColorProfile.ANSI), Err)
        assert isinstance(resolve_color(Ansi256Color(999), ColorProfile.ANSI256), Err)
        assert isinstance(resolve_color(HexColor("#XYZ"), ColorProfile.TRUE_COLOR), Err)
