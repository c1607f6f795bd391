"""Rendering: measuring text, generating escape codes and formatting blocks."""

from tui_styling.render.codes import RenderOptions, RenderResult, combine, generate_codes, render
from tui_styling.render.metrics import (
    TextMetrics,
    byte_length,
    char_count,
    char_width,
    display_height,
    display_width,
    measure,
    split_escapes,
    strip,
    text_metrics,
)
from tui_styling.render.text import (
    TextRenderOptions,
    TextRenderResult,
    align_lines,
    apply_transform,
    format_text,
    pad,
    truncate,
    wrap,
)

__all__ = [
    "RenderOptions",
    "RenderResult",
    "TextMetrics",
    "TextRenderOptions",
    "TextRenderResult",
    "align_lines",
    "apply_transform",
    "byte_length",
    "char_count",
    "char_width",
    "combine",
    "display_height",
    "display_width",
    "format_text",
    "generate_codes",
    "measure",
    "pad",
    "render",
    "split_escapes",
    "strip",
    "text_metrics",
    "truncate",
    "wrap",
]
