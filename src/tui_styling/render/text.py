"""Text formatting - transform, wrap/truncate, align, pad and style text blocks.

All helpers here step over escape sequences with ``split_escapes`` and count
columns with ``char_width``, so escapes are never cut and wide glyphs are
never split.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from tui_styling.core.constants import ELLIPSIS, RESET
from tui_styling.core.result import Err, Ok, Result
from tui_styling.core.style import (
    Alignment,
    BoxSides,
    StyleProperties,
    TextTransform,
    VerticalAlignment,
)
from tui_styling.render.codes import RenderOptions, render
from tui_styling.render.metrics import byte_length, char_width, display_width, split_escapes

logger = logging.getLogger(__name__)

_RESETS = ("\x1b[0m", "\x1b[m")


@dataclass(frozen=True)
class TextRenderOptions:
    """
    Options for ``format_text``.

    Unset ``width``, ``height``, ``alignment`` and ``vertical_alignment``
    fall back to the style's own values. Without ``wrap`` over-wide lines are
    truncated with ``ellipsis``.
    """
    width: Optional[int] = None
    height: Optional[int] = None
    alignment: Optional[Alignment] = None
    vertical_alignment: Optional[VerticalAlignment] = None
    wrap: bool = False
    ellipsis: str = ELLIPSIS
    render_options: RenderOptions = field(default_factory=RenderOptions)


@dataclass(frozen=True)
class TextRenderResult:
    """A formatted block of text."""
    content: str
    lines: tuple[str, ...]
    width: int
    height: int
    byte_length: int


def apply_transform(text: str, transform: Optional[TextTransform | str]) -> str:
    """Change letter case of the visible text, leaving escapes alone."""
    if transform is None:
        return text
    transform = TextTransform(transform)
    parts: list[str] = []
    prev_word = False
    for is_escape, segment in split_escapes(text):
        if is_escape:
            parts.append(segment)
        elif transform is TextTransform.UPPERCASE:
            parts.append(segment.upper())
        elif transform is TextTransform.LOWERCASE:
            parts.append(segment.lower())
        else:
            chars = []
            for ch in segment:
                is_word = ch.isalnum() or ch == "_"
                chars.append(ch.upper() if is_word and not prev_word else ch)
                prev_word = is_word
            parts.append("".join(chars))
    return "".join(parts)


def clip_line(text: str, max_width: int) -> tuple[str, bool, bool]:
    """
    Keep the longest prefix of ``text`` fitting ``max_width`` columns.

    Returns ``(prefix, was_cut, style_open)``; escapes are copied whole and
    ``style_open`` tells whether a non-reset SGR is active at the cut.
    """
    out: list[str] = []
    used = 0
    style_open = False
    for is_escape, segment in split_escapes(text):
        if is_escape:
            out.append(segment)
            if segment.endswith("m"):
                style_open = segment not in _RESETS
            continue
        for i, ch in enumerate(segment):
            w = char_width(ch)
            if used + w > max_width:
                out.append(segment[:i])
                return "".join(out), True, style_open
            used += w
        out.append(segment)
    return "".join(out), False, style_open


def truncate(text: str, width: int, ellipsis: str = ELLIPSIS) -> str:
    """
    Shorten each line to ``width`` columns, ending it with ``ellipsis``.

    Lines that already fit are returned unchanged. When the ellipsis itself
    does not fit it is cut to ``width``.
    """
    if "\n" in text:
        return "\n".join(truncate(line, width, ellipsis) for line in text.split("\n"))
    if width <= 0:
        return ""
    if display_width(text) <= width:
        return text
    available = width - display_width(ellipsis)
    if available <= 0:
        return clip_line(ellipsis, width)[0]
    kept, _, style_open = clip_line(text, available)
    return f"{kept}{RESET if style_open else ''}{ellipsis}"


def _break_word(word: str, width: int) -> list[str]:
    chunks: list[str] = []
    current: list[str] = []
    used = 0
    for is_escape, segment in split_escapes(word):
        if is_escape:
            current.append(segment)
            continue
        for ch in segment:
            w = char_width(ch)
            if used + w > width and used > 0:
                chunks.append("".join(current))
                current, used = [], 0
            current.append(ch)
            used += w
    chunks.append("".join(current))
    return chunks


def wrap_line(line: str, width: int) -> list[str]:
    """Greedy word wrap of one line; over-long words are hard-broken."""
    if width <= 0 or display_width(line) <= width:
        return [line]
    lines: list[str] = []
    current = ""
    for word in line.split(" "):
        candidate = f"{current} {word}" if current else word
        if display_width(candidate) <= width:
            current = candidate
            continue
        if current:
            lines.append(current)
        if display_width(word) <= width:
            current = word
        else:
            *full, current = _break_word(word, width)
            lines.extend(full)
    if current:
        lines.append(current)
    return lines or [""]


def wrap(text: str, width: int) -> list[str]:
    """Word-wrap every line of ``text`` to ``width`` columns."""
    return [wrapped for line in text.split("\n") for wrapped in wrap_line(line, width)]


def pad(text: str, width: int, alignment: Alignment | str = Alignment.LEFT) -> str:
    """Pad a single line with spaces to ``width`` columns."""
    current = display_width(text)
    if current >= width:
        return text
    space = width - current
    alignment = Alignment(alignment)
    if alignment is Alignment.RIGHT:
        return " " * space + text
    if alignment is Alignment.CENTER:
        left = space // 2
        return " " * left + text + " " * (space - left)
    return text + " " * space


def align_lines(
    lines: Iterable[str],
    width: int,
    alignment: Alignment | str = Alignment.LEFT,
) -> list[str]:
    """Pad every line to ``width``; wider lines are left as they are."""
    return [pad(line, width, alignment) for line in lines]


def align_vertical(
    lines: list[str],
    height: int,
    alignment: VerticalAlignment | str = VerticalAlignment.TOP,
) -> list[str]:
    """Add blank lines up to ``height``; the odd line goes to the bottom."""
    if height <= 0 or len(lines) >= height:
        return list(lines)
    space = height - len(lines)
    alignment = VerticalAlignment(alignment)
    if alignment is VerticalAlignment.BOTTOM:
        return [""] * space + list(lines)
    if alignment is VerticalAlignment.MIDDLE:
        top = space // 2
        return [""] * top + list(lines) + [""] * (space - top)
    return list(lines) + [""] * space


def _apply_box(lines: list[str], sides: BoxSides) -> list[str]:
    if sides.is_empty:
        return lines
    inner = max((display_width(line) for line in lines), default=0)
    total = sides.left + inner + sides.right
    middle = [" " * sides.left + pad(line, inner) + " " * sides.right for line in lines]
    return [" " * total] * sides.top + middle + [" " * total] * sides.bottom


def format_text(
    text: str,
    style: Optional[StyleProperties] = None,
    options: Optional[TextRenderOptions] = None,
) -> Result[TextRenderResult]:
    """
    Format text into a styled block.

    Steps run in order: transform, wrap or truncate to ``width``, vertical
    alignment to ``height``, horizontal alignment (to ``width`` or the widest
    line), padding, per-line styling, margin.
    """
    style = style or StyleProperties()
    options = options or TextRenderOptions()

    width = options.width if options.width is not None else style.width
    height = options.height if options.height is not None else style.height
    alignment = options.alignment or style.horizontal_alignment or Alignment.LEFT
    valign = options.vertical_alignment or style.vertical_alignment or VerticalAlignment.TOP

    processed = apply_transform(text, style.transform)
    lines = processed.split("\n")

    if width is not None and width > 0:
        fitted: list[str] = []
        for line in lines:
            if display_width(line) <= width:
                fitted.append(line)
            elif options.wrap:
                fitted.extend(wrap_line(line, width))
            else:
                fitted.append(truncate(line, width, options.ellipsis))
        lines = fitted

    if height is not None and height > 0:
        lines = align_vertical(lines, height, valign)

    target = width if width is not None and width > 0 else max(display_width(line) for line in lines)
    lines = align_lines(lines, target, alignment)

    if style.padding is not None:
        lines = _apply_box(lines, style.padding)

    styled: list[str] = []
    for line in lines:
        rendered = render(line, style, options.render_options)
        if isinstance(rendered, Err):
            logger.debug("formatting failed: %s", rendered.error)
            return rendered
        styled.append(rendered.value.content)

    if style.margin is not None:
        styled = _apply_box(styled, style.margin)

    content = "\n".join(styled)
    return Ok(TextRenderResult(
        content=content,
        lines=tuple(styled),
        width=max(display_width(line) for line in styled),
        height=len(styled),
        byte_length=byte_length(content),
    ))
