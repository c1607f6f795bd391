"""Layout: composing text blocks and layered canvases."""

from tui_styling.layout.blocks import (
    JoinOptions,
    LayoutBlock,
    LayoutResult,
    flexible,
    grid,
    join_horizontal,
    join_vertical,
    table,
)
from tui_styling.layout.canvas import (
    Canvas,
    CanvasLayer,
    CanvasRenderOptions,
    CanvasRenderResult,
    Position,
    create_layer,
    create_modal,
    create_overlay,
    place,
    render_canvas,
)

__all__ = [
    "Canvas",
    "CanvasLayer",
    "CanvasRenderOptions",
    "CanvasRenderResult",
    "JoinOptions",
    "LayoutBlock",
    "LayoutResult",
    "Position",
    "create_layer",
    "create_modal",
    "create_overlay",
    "flexible",
    "grid",
    "join_horizontal",
    "join_vertical",
    "place",
    "render_canvas",
    "table",
]
