"""Canvas - z-ordered layers composited onto a grid of cells.

Each layer is formatted with its style, decomposed into cells that carry
their active SGR codes, and painted in ``z_index`` order. Spaces are
transparent. The finished grid is emitted row by row, writing SGR codes
only when the cell state changes.
"""

from __future__ import annotations

import logging
import zlib
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Iterator, Optional

from tui_styling.core.constants import BACKDROP_CHAR, FAINT, RESET
from tui_styling.core.result import CompositionFailure, Err, InvalidGeometry, Ok, Result
from tui_styling.core.style import StyleProperties
from tui_styling.render.codes import RenderOptions, generate_codes
from tui_styling.render.metrics import byte_length, char_width, measure, split_escapes
from tui_styling.render.text import TextRenderOptions, format_text

logger = logging.getLogger(__name__)

OVERLAY_Z_INDEX = 1000
BACKDROP_Z_INDEX = 1500
MODAL_Z_INDEX = 2000

_RESETS = ("\x1b[0m", "\x1b[m")


@dataclass(frozen=True, slots=True)
class Position:
    """Top-left corner of a layer, in cells."""
    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class CanvasLayer:
    """One stackable piece of content."""
    id: str
    content: str
    position: Position = field(default_factory=Position)
    z_index: int = 0
    style: Optional[StyleProperties] = None
    opacity: float = 1.0
    visible: bool = True


@dataclass(frozen=True, slots=True)
class Cell:
    """
    A single character cell with the SGR codes active for it.

    The right half of a wide glyph is a ``continuation`` cell with an empty
    ``char``; it is never emitted on its own.
    """
    char: str = " "
    codes: tuple[str, ...] = ()
    continuation: bool = False


@dataclass(frozen=True)
class CanvasRenderOptions:
    """``background`` is any color accepted by ``parse_color``."""
    background: Any = None
    render_options: RenderOptions = field(default_factory=RenderOptions)


@dataclass(frozen=True)
class CanvasRenderResult:
    """Composited output and the layers in paint order."""
    content: str
    layers: tuple[CanvasLayer, ...]
    width: int
    height: int
    byte_length: int


class _Surface:
    """Mutable cell grid used while compositing one frame."""

    def __init__(self, width: int, height: int, base_codes: tuple[str, ...]) -> None:
        self.width = width
        self.height = height
        self.base_codes = base_codes
        self._buffer = [[Cell(" ", base_codes) for _ in range(width)] for _ in range(height)]

    def _blank(self) -> Cell:
        return Cell(" ", self.base_codes)

    def _release(self, x: int, y: int) -> None:
        """Blank out the other half of a wide glyph about to be overwritten."""
        row = self._buffer[y]
        cell = row[x]
        if cell.continuation and x > 0:
            row[x - 1] = self._blank()
        elif x + 1 < self.width and row[x + 1].continuation:
            row[x + 1] = self._blank()

    def paint(self, x: int, y: int, char: str, codes: tuple[str, ...]) -> None:
        """Put a glyph at (x, y); out-of-bounds glyphs are clipped."""
        if y < 0 or y >= self.height or x < 0 or x >= self.width:
            return
        wide = char_width(char) == 2
        if wide and x + 1 >= self.width:
            logger.debug("clipped wide glyph %r at right edge", char)
            return
        self._release(x, y)
        self._buffer[y][x] = Cell(char, self.base_codes + codes)
        if wide:
            self._release(x + 1, y)
            self._buffer[y][x + 1] = Cell("", self.base_codes + codes, continuation=True)

    def rows(self) -> Iterator[list[Cell]]:
        yield from self._buffer

    def render(self) -> str:
        """Emit rows, re-applying SGR codes only when they change."""
        lines: list[str] = []
        for row in self.rows():
            parts: list[str] = []
            active: tuple[str, ...] = ()
            for cell in row:
                if cell.continuation:
                    continue
                if cell.codes != active:
                    if active:
                        parts.append(RESET)
                    parts.append("".join(cell.codes))
                    active = cell.codes
                parts.append(cell.char)
            # Reset at end of each row so styles never bleed into the next
            if active:
                parts.append(RESET)
            lines.append("".join(parts))
        return "\n".join(lines)


def _cells(content: str) -> Iterator[tuple[int, int, str, tuple[str, ...]]]:
    """Yield ``(column, row, char, codes)`` for every glyph of the content."""
    for y, line in enumerate(content.split("\n")):
        x = 0
        active: tuple[str, ...] = ()
        for is_escape, segment in split_escapes(line):
            if is_escape:
                if not segment.endswith("m"):
                    continue
                active = () if segment in _RESETS else active + (segment,)
                continue
            for ch in segment:
                w = char_width(ch)
                if w == 0:
                    continue
                yield x, y, " " if ch == "\t" else ch, active
                x += w


def _composite_layer(surface: _Surface, layer: CanvasLayer, render_options: RenderOptions) -> Result[None]:
    opacity = max(0.0, min(1.0, layer.opacity))
    if opacity == 0.0:
        return Ok(None)

    content = layer.content
    if layer.style is not None and not layer.style.is_empty:
        formatted = format_text(content, layer.style, TextRenderOptions(render_options=render_options))
        if isinstance(formatted, Err):
            return formatted
        content = formatted.value.content

    extra = (FAINT,) if opacity < 1.0 else ()
    for x, y, ch, codes in _cells(content):
        if ch == " ":
            continue
        surface.paint(layer.position.x + x, layer.position.y + y, ch, codes + extra)
    return Ok(None)


def render_canvas(
    layers: Iterable[CanvasLayer],
    width: int,
    height: int,
    options: Optional[CanvasRenderOptions] = None,
) -> Result[CanvasRenderResult]:
    """
    Composite layers onto a ``width`` x ``height`` surface.

    The first failing layer aborts the whole frame.
    """
    options = options or CanvasRenderOptions()
    layers = tuple(layers)

    if width < 0 or height < 0:
        return Err(InvalidGeometry(f"Canvas size must not be negative, got {width}x{height}"))

    seen: set[str] = set()
    for layer in layers:
        if layer.id in seen:
            logger.debug("duplicate layer id %r", layer.id)
            return Err(CompositionFailure(f"Duplicate layer id: {layer.id!r}"))
        seen.add(layer.id)

    base_codes: tuple[str, ...] = ()
    if options.background is not None:
        codes = generate_codes(StyleProperties(background=options.background), options.render_options)
        if isinstance(codes, Err):
            return codes
        base_codes = tuple(codes.value)

    # sorted() is stable, so equal z-indexes keep insertion order
    ordered = tuple(sorted((layer for layer in layers if layer.visible), key=lambda layer: layer.z_index))

    surface = _Surface(width, height, base_codes)
    for layer in ordered:
        painted = _composite_layer(surface, layer, options.render_options)
        if isinstance(painted, Err):
            logger.debug("layer %r failed: %s", layer.id, painted.error)
            return painted

    content = surface.render()
    return Ok(CanvasRenderResult(
        content=content,
        layers=ordered,
        width=width,
        height=height,
        byte_length=byte_length(content),
    ))


@dataclass(frozen=True)
class Canvas:
    """
    An immutable set of layers over a fixed-size surface.

    Example:
        >>> canvas = (Canvas(20, 5)
        ...     .with_layer(create_layer("base", "hello"))
        ...     .with_layer(create_overlay("!", x=5)))
        >>> print(canvas.render().unwrap().content)
    """
    width: int
    height: int
    layers: tuple[CanvasLayer, ...] = ()
    background: Any = None

    def with_layer(self, layer: CanvasLayer) -> "Canvas":
        """Add a layer, replacing any layer with the same id."""
        kept = tuple(existing for existing in self.layers if existing.id != layer.id)
        return replace(self, layers=kept + (layer,))

    def without_layer(self, layer_id: str) -> "Canvas":
        return replace(self, layers=tuple(layer for layer in self.layers if layer.id != layer_id))

    def get_layer(self, layer_id: str) -> Optional[CanvasLayer]:
        for layer in self.layers:
            if layer.id == layer_id:
                return layer
        return None

    def render(self, render_options: Optional[RenderOptions] = None) -> Result[CanvasRenderResult]:
        options = CanvasRenderOptions(
            background=self.background,
            render_options=render_options or RenderOptions(),
        )
        return render_canvas(self.layers, self.width, self.height, options)


def create_layer(
    id: str,
    content: str,
    x: int = 0,
    y: int = 0,
    z_index: int = 0,
    style: Optional[StyleProperties] = None,
    opacity: float = 1.0,
    visible: bool = True,
) -> CanvasLayer:
    """Create a layer at (x, y)."""
    return CanvasLayer(id, content, Position(x, y), z_index, style, opacity, visible)


def create_overlay(
    content: str,
    x: int = 0,
    y: int = 0,
    style: Optional[StyleProperties] = None,
    id: Optional[str] = None,
) -> CanvasLayer:
    """
    Create a floating layer above regular content.

    Without an explicit ``id`` one is derived from the position and content,
    so distinct overlays never share an id.
    """
    if id is None:
        id = f"overlay-{x}-{y}-{zlib.crc32(content.encode('utf-8')):08x}"
    return create_layer(id, content, x, y, OVERLAY_Z_INDEX, style)


def create_modal(
    content: str,
    canvas_width: int,
    canvas_height: int,
    style: Optional[StyleProperties] = None,
    id: str = "modal",
) -> tuple[CanvasLayer, CanvasLayer]:
    """
    Create a centered modal and the shaded backdrop beneath it.

    Returns ``(backdrop, modal)``.
    """
    width, height = measure(content)
    x = max(0, (canvas_width - width) // 2)
    y = max(0, (canvas_height - height) // 2)
    backdrop_content = "\n".join([BACKDROP_CHAR * max(0, canvas_width)] * max(0, canvas_height))
    backdrop = create_layer(f"{id}-backdrop", backdrop_content, 0, 0, BACKDROP_Z_INDEX, opacity=0.5)
    modal = create_layer(id, content, x, y, MODAL_Z_INDEX, style)
    return backdrop, modal


def place(
    content: str,
    position: Position,
    width: int,
    height: int,
    render_options: Optional[RenderOptions] = None,
) -> Result[str]:
    """Put content at a position inside an empty ``width`` x ``height`` area."""
    options = CanvasRenderOptions(render_options=render_options or RenderOptions())
    layer = CanvasLayer("content", content, position)
    return render_canvas([layer], width, height, options).map(lambda result: result.content)
