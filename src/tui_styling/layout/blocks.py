"""Block composition - join, grid, flexible and table layouts of text blocks."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from fractions import Fraction
from typing import Optional, Sequence, Union

from tui_styling.core.constants import RESET
from tui_styling.core.result import Err, InvalidGeometry, Ok, Result, collect
from tui_styling.core.style import Alignment, StyleProperties, VerticalAlignment
from tui_styling.render.codes import RenderOptions
from tui_styling.render.metrics import display_width, measure
from tui_styling.render.text import (
    TextRenderOptions,
    align_vertical,
    clip_line,
    format_text,
    pad,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutBlock:
    """
    A piece of content taking part in a layout.

    ``width``/``height`` fit the block to an exact size (clipped or padded);
    ``weight`` is its share in ``flexible`` layouts (default 1).
    """
    content: str
    style: Optional[StyleProperties] = None
    width: Optional[int] = None
    height: Optional[int] = None
    weight: Optional[float] = None


BlockLike = Union[LayoutBlock, str]


@dataclass(frozen=True)
class JoinOptions:
    """
    Options shared by all block operations.

    ``alignment`` is the vertical position of shorter blocks in horizontal
    joins and the horizontal alignment of lines in vertical joins.
    ``style`` is the default style of blocks that have none of their own.
    """
    separator: str = ""
    spacing: int = 0
    alignment: Union[Alignment, VerticalAlignment, str, None] = None
    style: Optional[StyleProperties] = None
    render_options: RenderOptions = field(default_factory=RenderOptions)
    min_width: Optional[int] = None
    max_width: Optional[int] = None
    min_height: Optional[int] = None
    max_height: Optional[int] = None


@dataclass(frozen=True)
class LayoutResult:
    """Composed content, its size and the blocks as they were placed."""
    content: str = ""
    width: int = 0
    height: int = 0
    blocks: tuple[LayoutBlock, ...] = ()


_VERTICAL = {
    "top": VerticalAlignment.TOP,
    "middle": VerticalAlignment.MIDDLE,
    "center": VerticalAlignment.MIDDLE,
    "bottom": VerticalAlignment.BOTTOM,
}

_HORIZONTAL = {
    "left": Alignment.LEFT,
    "center": Alignment.CENTER,
    "middle": Alignment.CENTER,
    "right": Alignment.RIGHT,
}


def _alignment_name(alignment: Union[Alignment, VerticalAlignment, str, None]) -> str:
    if alignment is None:
        return ""
    if isinstance(alignment, (Alignment, VerticalAlignment)):
        return alignment.value
    return alignment.lower()


def _as_block(item: BlockLike) -> LayoutBlock:
    return item if isinstance(item, LayoutBlock) else LayoutBlock(content=item)


def fit(content: str, width: Optional[int] = None, height: Optional[int] = None) -> str:
    """Clip or pad content to an exact size (no ellipsis)."""
    lines = content.split("\n")
    if height is not None:
        height = max(0, height)
        lines = lines[:height] + [""] * (height - len(lines))
    if width is not None:
        width = max(0, width)
        fitted = []
        for line in lines:
            if display_width(line) > width:
                kept, _, style_open = clip_line(line, width)
                line = kept + RESET if style_open else kept
            fitted.append(pad(line, width))
        lines = fitted
    return "\n".join(lines)


def _block_style(block: LayoutBlock, options: JoinOptions) -> Optional[StyleProperties]:
    if block.style is not None and options.style is not None:
        return block.style.inherit(options.style)
    return block.style if block.style is not None else options.style


def _prepare(block: LayoutBlock, options: JoinOptions) -> Result[LayoutBlock]:
    """Fit a block to its explicit size, then style it."""
    content = fit(block.content, block.width, block.height)
    style = _block_style(block, options)
    if style is not None and not style.is_empty:
        formatted = format_text(content, style, TextRenderOptions(render_options=options.render_options))
        if isinstance(formatted, Err):
            return formatted
        content = formatted.value.content
    width, height = measure(content)
    return Ok(replace(block, content=content, width=width, height=height))


def _prepare_all(blocks: Sequence[BlockLike], options: JoinOptions) -> Result[list[LayoutBlock]]:
    return collect([_prepare(_as_block(b), options) for b in blocks])


def _result(content: str, blocks: Sequence[LayoutBlock]) -> LayoutResult:
    width, height = measure(content)
    return LayoutResult(content=content, width=width, height=height, blocks=tuple(blocks))


def join_horizontal(
    blocks: Sequence[BlockLike],
    options: Optional[JoinOptions] = None,
) -> Result[LayoutResult]:
    """
    Place blocks side by side.

    Shorter blocks get filler lines at their own width so every column stays
    rectangular; ``options.alignment`` (top/middle/bottom) decides where the
    filler goes.

    Example:
        >>> join_horizontal(["A\\nB\\nC", "X\\nY"]).unwrap().content
        'AX\\nBY\\nC '
    """
    options = options or JoinOptions()
    if not blocks:
        return Ok(LayoutResult())

    prepared = _prepare_all(blocks, options)
    if isinstance(prepared, Err):
        return prepared
    placed = prepared.value
    if len(placed) == 1:
        return Ok(_result(placed[0].content, placed))

    valign = _VERTICAL.get(_alignment_name(options.alignment), VerticalAlignment.TOP)
    columns = [block.content.split("\n") for block in placed]
    rows = max(len(lines) for lines in columns)
    widths = [block.width or 0 for block in placed]
    columns = [
        [pad(line, width) for line in align_vertical(lines, rows, valign)]
        for lines, width in zip(columns, widths)
    ]

    joiner = options.separator + " " * max(0, options.spacing)
    content = "\n".join(joiner.join(parts) for parts in zip(*columns))
    return Ok(_result(content, placed))


def join_vertical(
    blocks: Sequence[BlockLike],
    options: Optional[JoinOptions] = None,
) -> Result[LayoutResult]:
    """Stack blocks, aligning every line to the widest one."""
    options = options or JoinOptions()
    if not blocks:
        return Ok(LayoutResult())

    prepared = _prepare_all(blocks, options)
    if isinstance(prepared, Err):
        return prepared
    placed = prepared.value
    if len(placed) == 1:
        return Ok(_result(placed[0].content, placed))

    alignment = _HORIZONTAL.get(_alignment_name(options.alignment), Alignment.LEFT)
    max_width = max(block.width or 0 for block in placed)
    blank = " " * max_width

    lines: list[str] = []
    for i, block in enumerate(placed):
        lines.extend(pad(line, max_width, alignment) for line in block.content.split("\n"))
        if i < len(placed) - 1:
            if options.separator:
                lines.append(options.separator)
            lines.extend([blank] * max(0, options.spacing))
    return Ok(_result("\n".join(lines), placed))


def _plain_rows(options: JoinOptions) -> JoinOptions:
    # Rows are already styled; stack them without a separator line
    return replace(options, separator="", style=None)


def grid(
    blocks: Sequence[BlockLike],
    columns: int,
    options: Optional[JoinOptions] = None,
) -> Result[LayoutResult]:
    """Lay blocks out row-major in ``columns`` columns."""
    options = options or JoinOptions()
    if columns <= 0:
        logger.debug("rejected grid with %d columns", columns)
        return Err(InvalidGeometry(f"Grid columns must be greater than 0, got {columns}"))
    if not blocks:
        return Ok(LayoutResult())

    rows: list[LayoutBlock] = []
    for start in range(0, len(blocks), columns):
        row = join_horizontal(blocks[start:start + columns], options)
        if isinstance(row, Err):
            return row
        rows.append(LayoutBlock(row.value.content, width=row.value.width, height=row.value.height))
    return join_vertical(rows, _plain_rows(options))


def _constrain(size: int, low: Optional[int], high: Optional[int]) -> int:
    if low is not None:
        size = max(size, low)
    if high is not None:
        size = min(size, high)
    return size


def flexible(
    blocks: Sequence[BlockLike],
    direction: str,
    total_size: int,
    options: Optional[JoinOptions] = None,
) -> Result[LayoutResult]:
    """
    Share ``total_size`` columns (or rows) between blocks by weight.

    Each block gets ``floor(weight / total_weight * total_size)``; the
    remainder is left unallocated. ``min_*``/``max_*`` options clamp the
    resulting sizes.
    """
    options = options or JoinOptions()
    if direction not in ("horizontal", "vertical"):
        return Err(InvalidGeometry(f"Unknown layout direction: {direction!r}"))
    if not blocks or total_size <= 0:
        return Ok(LayoutResult())

    items = [_as_block(b) for b in blocks]
    weights = [Fraction(1 if b.weight is None else b.weight) for b in items]
    if any(w < 0 for w in weights):
        return Err(InvalidGeometry("Block weights must not be negative"))
    total_weight = sum(weights)
    if total_weight == 0:
        return Err(InvalidGeometry("At least one block needs a positive weight"))

    sized: list[LayoutBlock] = []
    for block, weight in zip(items, weights):
        size = math.floor(weight / total_weight * total_size)
        if direction == "horizontal":
            width = _constrain(size, options.min_width, options.max_width)
            height = block.height
            if options.min_height is not None or options.max_height is not None:
                height = _constrain(height if height is not None else measure(block.content)[1],
                                    options.min_height, options.max_height)
        else:
            height = _constrain(size, options.min_height, options.max_height)
            width = block.width
            if options.min_width is not None or options.max_width is not None:
                width = _constrain(width if width is not None else measure(block.content)[0],
                                   options.min_width, options.max_width)
        sized.append(replace(block, width=width, height=height))

    if direction == "horizontal":
        return join_horizontal(sized, options)
    return join_vertical(sized, options)


def table(
    rows: Sequence[Sequence[BlockLike]],
    column_widths: Sequence[Union[int, str]],
    options: Optional[JoinOptions] = None,
) -> Result[LayoutResult]:
    """
    Render rows of cells as aligned columns.

    ``"auto"`` columns are as wide as their widest cell; integer widths are
    used as given and over-wide cells are truncated. Columns are separated
    by ``options.separator`` (a single space when empty).
    """
    options = options or JoinOptions()
    if not rows:
        return Ok(LayoutResult())

    cells = [[_as_block(cell) for cell in row] for row in rows]
    column_count = max(len(row) for row in cells)
    requested = list(column_widths) + ["auto"] * (column_count - len(column_widths))

    widths: list[int] = []
    for index, wanted in enumerate(requested):
        if wanted == "auto":
            widths.append(max(
                (display_width(row[index].content) for row in cells if index < len(row)),
                default=0,
            ))
        elif isinstance(wanted, int) and not isinstance(wanted, bool) and wanted >= 0:
            widths.append(wanted)
        else:
            return Err(InvalidGeometry(f"Invalid width for column {index}: {wanted!r}"))

    row_options = replace(options, separator=options.separator or " ", style=None)
    joined_rows: list[LayoutBlock] = []
    for row in cells:
        formatted_cells: list[LayoutBlock] = []
        for index, cell in enumerate(row):
            width = widths[index]
            if width == 0:
                formatted_cells.append(LayoutBlock("", width=0))
                continue
            formatted = format_text(
                cell.content,
                _block_style(cell, options),
                TextRenderOptions(width=width, alignment=Alignment.LEFT,
                                  render_options=options.render_options),
            )
            if isinstance(formatted, Err):
                return formatted
            formatted_cells.append(LayoutBlock(formatted.value.content))
        joined = join_horizontal(formatted_cells, row_options)
        if isinstance(joined, Err):
            return joined
        joined_rows.append(LayoutBlock(joined.value.content, width=joined.value.width,
                                       height=joined.value.height))

    return join_vertical(joined_rows, _plain_rows(options))
