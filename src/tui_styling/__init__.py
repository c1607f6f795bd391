"""
tui-styling: styled text rendering for terminals

Turn abstract styles into escape-coded strings, measure text that contains
escape codes and wide glyphs, and compose blocks into layouts and layered
canvases.

Quick Start:
    >>> import tui_styling as ts
    >>> style = ts.StyleBuilder().bold().fg("cyan").build()
    >>> print(ts.format_text("Hello", style).unwrap().content)
    >>> ts.display_width("\\x1b[1mHello\\x1b[0m 世界")
    10

Features:
    - Three consistent lengths: characters, display columns, UTF-8 bytes
    - Colors as hex, names, 256-palette, RGB, per-profile and light/dark pairs
    - Graceful degradation to 256 and 16 colors, or none at all
    - Wrapping, truncation, alignment, padding and margins
    - Horizontal/vertical joins, grids, weighted layouts and tables
    - Layered canvases with overlays and modals
"""

import logging

__version__ = "0.1.0"

# Core types
from tui_styling.core.color import (
    AdaptiveColor,
    Ansi256Color,
    CompleteColor,
    HexColor,
    NamedColor,
    RGBColor,
    parse_color,
)
from tui_styling.core.result import (
    CompositionFailure,
    Err,
    InvalidColor,
    InvalidGeometry,
    Ok,
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

# Rendering
from tui_styling.render.codes import RenderOptions, combine, generate_codes, render
from tui_styling.render.metrics import display_height, display_width, measure, strip
from tui_styling.render.text import TextRenderOptions, format_text, truncate, wrap

# Layout
from tui_styling.layout.blocks import (
    JoinOptions,
    LayoutBlock,
    flexible,
    grid,
    join_horizontal,
    join_vertical,
    table,
)
from tui_styling.layout.canvas import (
    Canvas,
    CanvasLayer,
    Position,
    create_layer,
    create_modal,
    create_overlay,
    render_canvas,
)

# Terminal
from tui_styling.terminal.capabilities import ColorProfile, TerminalCapabilities

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Core types
    "AdaptiveColor",
    "Alignment",
    "Ansi256Color",
    "BoxSides",
    "CompleteColor",
    "HexColor",
    "NamedColor",
    "RGBColor",
    "StyleBuilder",
    "StyleProperties",
    "TextTransform",
    "VerticalAlignment",
    "parse_color",
    # Results
    "CompositionFailure",
    "Err",
    "InvalidColor",
    "InvalidGeometry",
    "Ok",
    "StylingError",
    # Rendering
    "RenderOptions",
    "TextRenderOptions",
    "combine",
    "display_height",
    "display_width",
    "format_text",
    "generate_codes",
    "measure",
    "render",
    "strip",
    "truncate",
    "wrap",
    # Layout
    "Canvas",
    "CanvasLayer",
    "JoinOptions",
    "LayoutBlock",
    "Position",
    "create_layer",
    "create_modal",
    "create_overlay",
    "flexible",
    "grid",
    "join_horizontal",
    "join_vertical",
    "render_canvas",
    "table",
    # Terminal
    "ColorProfile",
    "TerminalCapabilities",
]
