"""Core value types: colors, styles and results."""

from tui_styling.core.color import (
    AdaptiveColor,
    Ansi256Color,
    Color,
    ColorMode,
    ColorValue,
    CompleteColor,
    HexColor,
    NamedColor,
    RGBColor,
    parse_color,
    resolve_color,
)
from tui_styling.core.result import (
    CompositionFailure,
    Err,
    InvalidColor,
    InvalidGeometry,
    Ok,
    Result,
    StylingError,
)
from tui_styling.core.style import (
    Alignment,
    BoxSides,
    StyleBuilder,
    StyleProperties,
    TextTransform,
    VerticalAlignment,
)

__all__ = [
    "AdaptiveColor",
    "Alignment",
    "Ansi256Color",
    "BoxSides",
    "Color",
    "ColorMode",
    "ColorValue",
    "CompleteColor",
    "CompositionFailure",
    "Err",
    "HexColor",
    "InvalidColor",
    "InvalidGeometry",
    "NamedColor",
    "Ok",
    "RGBColor",
    "Result",
    "StyleBuilder",
    "StyleProperties",
    "StylingError",
    "TextTransform",
    "VerticalAlignment",
    "parse_color",
    "resolve_color",
]
