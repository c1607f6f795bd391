"""Color values, conversions and profile-aware resolution.

A style carries abstract ``ColorValue``s (hex, named, 256-index, RGB,
complete, adaptive). ``resolve_color`` turns one into a concrete ``Color``
for the active ``ColorProfile``; ``Color`` knows its SGR parameters.
"""

from __future__ import annotations

import colorsys
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from tui_styling.core.constants import (
    ANSI_16_PALETTE,
    COLORS_16,
    CUBE_LEVELS,
    NAMED_HEX,
    TRANSPARENT,
)
from tui_styling.core.result import Err, InvalidColor, Ok, Result
from tui_styling.terminal.capabilities import ColorProfile

logger = logging.getLogger(__name__)

RGB = tuple[int, int, int]

_HEX_PATTERN = re.compile(r"^#?([0-9A-Fa-f]{2})([0-9A-Fa-f]{2})([0-9A-Fa-f]{2})$")


class ColorMode(Enum):
    """Color mode for ANSI sequences."""
    STANDARD_16 = "16"      # Standard 16-color (SGR 30-37, 40-47, 90-97, 100-107)
    EXTENDED_256 = "256"    # Extended 256-color (SGR 38;5;n, 48;5;n)
    TRUE_COLOR = "rgb"      # 24-bit true color (SGR 38;2;r;g;b, 48;2;r;g;b)


@dataclass(frozen=True)
class Color:
    """
    A concrete terminal color, ready to be turned into SGR parameters.

    Produced by ``resolve_color``; never holds out-of-range values.
    """
    mode: ColorMode
    value: int | tuple[int, int, int]

    @classmethod
    def from_16(cls, index: int) -> "Color":
        """Create a Color from a standard palette index (0-15)."""
        if not 0 <= index <= 15:
            raise ValueError(f"16-color index must be 0-15, got {index}")
        return cls(ColorMode.STANDARD_16, index)

    @classmethod
    def from_256(cls, index: int) -> "Color":
        """Create a Color from a 256-color index."""
        if not 0 <= index <= 255:
            raise ValueError(f"256-color index must be 0-255, got {index}")
        return cls(ColorMode.EXTENDED_256, index)

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "Color":
        """Create a true color; channels are clamped to 0-255."""
        return cls(ColorMode.TRUE_COLOR, clamp_rgb((r, g, b)))

    def to_sgr_fg(self) -> str:
        """Return SGR parameters for foreground color."""
        if self.mode == ColorMode.STANDARD_16:
            assert isinstance(self.value, int)
            if self.value < 8:
                return str(30 + self.value)
            return str(90 + self.value - 8)
        elif self.mode == ColorMode.EXTENDED_256:
            return f"38;5;{self.value}"
        else:  # TRUE_COLOR
            assert isinstance(self.value, tuple)
            r, g, b = self.value
            return f"38;2;{r};{g};{b}"

    def to_sgr_bg(self) -> str:
        """Return SGR parameters for background color."""
        if self.mode == ColorMode.STANDARD_16:
            assert isinstance(self.value, int)
            if self.value < 8:
                return str(40 + self.value)
            return str(100 + self.value - 8)
        elif self.mode == ColorMode.EXTENDED_256:
            return f"48;5;{self.value}"
        else:  # TRUE_COLOR
            assert isinstance(self.value, tuple)
            r, g, b = self.value
            return f"48;2;{r};{g};{b}"


# ---------------------------------------------------------------------------
# ColorValue variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HexColor:
    """24-bit color as ``#RRGGBB``."""
    value: str
    kind: ClassVar[str] = "hex"


@dataclass(frozen=True)
class NamedColor:
    """Color by name (``red``, ``bright_cyan``, ``orange``, ``transparent``)."""
    name: str
    kind: ClassVar[str] = "named"


@dataclass(frozen=True)
class Ansi256Color:
    """Index into the 256-color palette."""
    index: int
    kind: ClassVar[str] = "ansi256"


@dataclass(frozen=True)
class RGBColor:
    """Color by channels; out-of-range channels are clamped on resolution."""
    r: int
    g: int
    b: int
    kind: ClassVar[str] = "rgb"


@dataclass(frozen=True)
class CompleteColor:
    """One color spelled out for every profile, best first."""
    true_color: Optional[str] = None
    ansi256: Optional[int] = None
    ansi: Optional[int] = None
    kind: ClassVar[str] = "complete"


@dataclass(frozen=True)
class AdaptiveColor:
    """Light/dark pair, picked against the terminal background."""
    light: Any
    dark: Any
    kind: ClassVar[str] = "adaptive"


ColorValue = Union[HexColor, NamedColor, Ansi256Color, RGBColor, CompleteColor, AdaptiveColor]

_VARIANTS = (HexColor, NamedColor, Ansi256Color, RGBColor, CompleteColor, AdaptiveColor)


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------

def _clamp(value: float, low: int, high: int) -> int:
    return int(max(low, min(high, round(value))))


def clamp_rgb(rgb: tuple[float, float, float]) -> RGB:
    """Clamp each channel to an integer in 0-255."""
    r, g, b = rgb
    return (_clamp(r, 0, 255), _clamp(g, 0, 255), _clamp(b, 0, 255))


def hex_to_rgb(hex_str: str) -> Result[RGB]:
    """Parse ``#RRGGBB`` (``#`` optional, any case)."""
    match = _HEX_PATTERN.match(hex_str.strip()) if isinstance(hex_str, str) else None
    if not match:
        return Err(InvalidColor(f"Invalid hex color: {hex_str!r}", hex_str))
    return Ok(tuple(int(part, 16) for part in match.groups()))  # type: ignore[arg-type]


def rgb_to_hex(rgb: tuple[float, float, float]) -> str:
    """Format channels as uppercase ``#RRGGBB``, clamping out-of-range values."""
    r, g, b = clamp_rgb(rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


def rgb_to_hsl(rgb: tuple[float, float, float]) -> tuple[int, int, int]:
    """Get HSL representation (h: 0-360, s: 0-100, l: 0-100)."""
    r, g, b = (channel / 255 for channel in clamp_rgb(rgb))
    h, l, s = colorsys.rgb_to_hls(r, g, b)
    return (round(h * 360) % 360, round(s * 100), round(l * 100))


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """Convert HSL (h: 0-360, s: 0-100, l: 0-100) to RGB."""
    h_norm = (h % 360) / 360
    s_norm = max(0, min(100, s)) / 100
    l_norm = max(0, min(100, l)) / 100
    r, g, b = colorsys.hls_to_rgb(h_norm, l_norm, s_norm)
    return clamp_rgb((r * 255, g * 255, b * 255))


def ansi256_to_rgb(index: int) -> Result[RGB]:
    """Map a 256-palette index to RGB (standard 16, 6x6x6 cube, gray ramp)."""
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index <= 255:
        return Err(InvalidColor(f"ANSI 256 index must be an integer 0-255, got {index!r}", index))
    if index < 16:
        return Ok(ANSI_16_PALETTE[index])
    if index < 232:
        offset = index - 16
        return Ok((
            CUBE_LEVELS[offset // 36],
            CUBE_LEVELS[(offset % 36) // 6],
            CUBE_LEVELS[offset % 6],
        ))
    value = 8 + 10 * (index - 232)
    return Ok((value, value, value))


def _distance(a: RGB, b: RGB) -> int:
    return (a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 + (a[2] - b[2]) ** 2


def _nearest_level(channel: int) -> int:
    return min(range(6), key=lambda i: abs(CUBE_LEVELS[i] - channel))


def rgb_to_ansi256(rgb: tuple[float, float, float]) -> int:
    """Nearest entry of the color cube or the gray ramp (indices 16-255)."""
    r, g, b = clamp_rgb(rgb)
    cube = (_nearest_level(r), _nearest_level(g), _nearest_level(b))
    cube_index = 16 + 36 * cube[0] + 6 * cube[1] + cube[2]
    cube_rgb = (CUBE_LEVELS[cube[0]], CUBE_LEVELS[cube[1]], CUBE_LEVELS[cube[2]])

    step = max(0, min(23, round(((r + g + b) / 3 - 8) / 10)))
    gray_value = 8 + 10 * step
    gray_rgb = (gray_value, gray_value, gray_value)

    if _distance((r, g, b), gray_rgb) < _distance((r, g, b), cube_rgb):
        return 232 + step
    return cube_index


def rgb_to_ansi16(rgb: tuple[float, float, float]) -> int:
    """Nearest entry of the standard 16-color palette."""
    target = clamp_rgb(rgb)
    return min(range(16), key=lambda i: _distance(target, ANSI_16_PALETTE[i]))


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _parse_ansi256(index: Any) -> Result[Ansi256Color]:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index <= 255:
        return Err(InvalidColor(f"ANSI 256 index must be an integer 0-255, got {index!r}", index))
    return Ok(Ansi256Color(index))


def _parse_string(raw: str) -> Result[ColorValue]:
    text = raw.strip()
    lowered = text.lower()
    if lowered == TRANSPARENT or lowered in COLORS_16 or lowered in NAMED_HEX:
        return Ok(NamedColor(lowered))
    if text.startswith("#") or (len(text) == 6 and all(c in "0123456789abcdefABCDEF" for c in text)):
        rgb = hex_to_rgb(text)
        if isinstance(rgb, Err):
            return rgb
        return Ok(HexColor(rgb_to_hex(rgb.value)))
    if text.isdigit():
        return _parse_ansi256(int(text))
    return Err(InvalidColor(f"Unknown color name: {raw!r}", raw))


def _parse_complete(raw: dict) -> Result[CompleteColor]:
    true_color = raw.get("true_color", raw.get("trueColor", raw.get("hex")))
    ansi256 = raw.get("ansi256")
    ansi = raw.get("ansi")
    return _validate_complete(CompleteColor(true_color, ansi256, ansi))


def _validate_complete(color: CompleteColor) -> Result[CompleteColor]:
    true_color = color.true_color
    if true_color is not None:
        rgb = hex_to_rgb(true_color)
        if isinstance(rgb, Err):
            return rgb
        true_color = rgb_to_hex(rgb.value)
    if color.ansi256 is not None:
        checked = _parse_ansi256(color.ansi256)
        if isinstance(checked, Err):
            return checked
    if color.ansi is not None:
        if isinstance(color.ansi, bool) or not isinstance(color.ansi, int) or not 0 <= color.ansi <= 15:
            return Err(InvalidColor(f"Basic ANSI index must be 0-15, got {color.ansi!r}", color.ansi))
    return Ok(CompleteColor(true_color, color.ansi256, color.ansi))


def parse_color(raw: Any) -> Result[ColorValue]:
    """
    Coerce a loosely typed color into a ``ColorValue``.

    Accepts the variants themselves, hex strings, names, integers (256
    palette), ``(r, g, b)`` sequences and dicts shaped like RGB, complete
    or adaptive colors.
    """
    if isinstance(raw, _VARIANTS):
        return Ok(raw)
    if isinstance(raw, bool):
        return Err(InvalidColor(f"Not a color: {raw!r}", raw))
    if isinstance(raw, int):
        return _parse_ansi256(raw)
    if isinstance(raw, str):
        return _parse_string(raw)
    if isinstance(raw, (tuple, list)) and len(raw) == 3:
        if all(isinstance(c, (int, float)) and not isinstance(c, bool) for c in raw):
            return Ok(RGBColor(*(int(round(c)) for c in raw)))
    if isinstance(raw, dict):
        if {"r", "g", "b"} <= raw.keys():
            return parse_color((raw["r"], raw["g"], raw["b"]))
        if {"light", "dark"} <= raw.keys():
            return Ok(AdaptiveColor(raw["light"], raw["dark"]))
        if raw.keys() & {"true_color", "trueColor", "hex", "ansi256", "ansi"}:
            return _parse_complete(raw)
    return Err(InvalidColor(f"Not a color: {raw!r}", raw))


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def _fit_rgb(rgb: RGB, profile: ColorProfile) -> Color:
    if profile is ColorProfile.TRUE_COLOR:
        return Color.from_rgb(*rgb)
    if profile is ColorProfile.ANSI256:
        index = rgb_to_ansi256(rgb)
        logger.debug("degraded %s to 256-color index %d", rgb_to_hex(rgb), index)
        return Color.from_256(index)
    index = rgb_to_ansi16(rgb)
    logger.debug("degraded %s to 16-color index %d", rgb_to_hex(rgb), index)
    return Color.from_16(index)


def _fit_index(index: int, profile: ColorProfile) -> Color:
    if index < 16:
        return Color.from_16(index)
    if profile is ColorProfile.ANSI:
        return _fit_rgb(ansi256_to_rgb(index).unwrap(), profile)
    return Color.from_256(index)


def _resolve_complete(color: CompleteColor, profile: ColorProfile) -> Optional[Color]:
    candidates = (
        (ColorProfile.TRUE_COLOR, color.true_color),
        (ColorProfile.ANSI256, color.ansi256),
        (ColorProfile.ANSI, color.ansi),
    )
    for needed, value in candidates:
        if value is not None and needed.rank <= profile.rank:
            return _resolve_entry(value, profile)
    for _, value in candidates:
        if value is not None:
            return _resolve_entry(value, profile)
    return None


def _resolve_entry(value: str | int, profile: ColorProfile) -> Color:
    if isinstance(value, str):
        return _fit_rgb(hex_to_rgb(value).unwrap(), profile)
    return _fit_index(value, profile)


def resolve_color(
    color: Any,
    profile: ColorProfile,
    is_dark: Optional[bool] = None,
) -> Result[Optional[Color]]:
    """
    Convert any color into the best ``Color`` for a profile.

    Returns ``Ok(None)`` for transparent colors and the no-color profile.
    Adaptive colors use ``dark`` unless the background is known to be light.
    """
    parsed = parse_color(color)
    if isinstance(parsed, Err):
        return parsed
    value = parsed.value

    if isinstance(value, AdaptiveColor):
        chosen = value.light if is_dark is False else value.dark
        return resolve_color(chosen, profile, is_dark)

    if isinstance(value, NamedColor):
        name = value.name.lower()
        if name not in COLORS_16 and name not in NAMED_HEX and name != TRANSPARENT:
            return Err(InvalidColor(f"Unknown color name: {value.name!r}", value))

    if isinstance(value, HexColor):
        rgb = hex_to_rgb(value.value)
        if isinstance(rgb, Err):
            return rgb
    elif isinstance(value, Ansi256Color):
        checked = _parse_ansi256(value.index)
        if isinstance(checked, Err):
            return checked
    elif isinstance(value, CompleteColor):
        checked = _validate_complete(value)
        if isinstance(checked, Err):
            return checked
        value = checked.value

    if profile is ColorProfile.NO_COLOR:
        return Ok(None)

    if isinstance(value, HexColor):
        return Ok(_fit_rgb(rgb.value, profile))
    if isinstance(value, RGBColor):
        return Ok(_fit_rgb(clamp_rgb((value.r, value.g, value.b)), profile))
    if isinstance(value, Ansi256Color):
        return Ok(_fit_index(value.index, profile))
    if isinstance(value, CompleteColor):
        return Ok(_resolve_complete(value, profile))
    # NamedColor
    name = value.name.lower()
    if name == TRANSPARENT:
        return Ok(None)
    if name in COLORS_16:
        return Ok(Color.from_16(COLORS_16[name]))
    return Ok(_fit_rgb(hex_to_rgb(NAMED_HEX[name]).unwrap(), profile))


def to_rgb(color: Any, is_dark: Optional[bool] = None) -> Result[RGB]:
    """RGB channels of any color value (transparent is an error here)."""
    resolved = resolve_color(color, ColorProfile.TRUE_COLOR, is_dark)
    if isinstance(resolved, Err):
        return resolved
    concrete = resolved.value
    if concrete is None:
        return Err(InvalidColor(f"Color has no RGB value: {color!r}", color))
    if concrete.mode is ColorMode.TRUE_COLOR:
        return Ok(concrete.value)  # type: ignore[arg-type]
    return ansi256_to_rgb(concrete.value)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Manipulation
# ---------------------------------------------------------------------------

def lighten(color: Any, amount: float) -> Result[str]:
    """Raise HSL lightness by ``amount`` percent; returns hex."""
    return to_rgb(color).map(lambda rgb: _shift_lightness(rgb, max(0, min(100, amount))))


def darken(color: Any, amount: float) -> Result[str]:
    """Lower HSL lightness by ``amount`` percent; returns hex."""
    return to_rgb(color).map(lambda rgb: _shift_lightness(rgb, -max(0, min(100, amount))))


def _shift_lightness(rgb: RGB, delta: float) -> str:
    h, s, l = rgb_to_hsl(rgb)
    return rgb_to_hex(hsl_to_rgb(h, s, max(0, min(100, l + delta))))


def mix(first: Any, second: Any, weight: float = 50) -> Result[str]:
    """Blend two colors; ``weight`` is the share of the first (0-100)."""
    rgb1 = to_rgb(first)
    if isinstance(rgb1, Err):
        return rgb1
    rgb2 = to_rgb(second)
    if isinstance(rgb2, Err):
        return rgb2
    w = max(0, min(100, weight)) / 100
    return Ok(rgb_to_hex(tuple(a * w + b * (1 - w) for a, b in zip(rgb1.value, rgb2.value))))  # type: ignore[arg-type]


def invert(color: Any) -> Result[str]:
    """Complement each channel; returns hex."""
    return to_rgb(color).map(lambda rgb: rgb_to_hex(tuple(255 - c for c in rgb)))  # type: ignore[arg-type]
