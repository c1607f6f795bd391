"""Escape-code synthesis - turn StyleProperties into SGR sequences."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from tui_styling.core.color import resolve_color
from tui_styling.core.constants import CSI, RESET, SGR_ATTRIBUTES
from tui_styling.core.result import Err, Ok, Result
from tui_styling.core.style import StyleProperties
from tui_styling.render.metrics import byte_length
from tui_styling.terminal.capabilities import ColorProfile, TerminalCapabilities

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderOptions:
    """
    Knobs for code generation.

    ``enable_color_support`` is tri-state: ``True`` forces color even on a
    no-color terminal, ``False`` drops color codes (attributes stay) and
    ``None`` follows the terminal. ``capabilities`` is detected from the
    environment on every call when left unset.
    """
    respect_terminal_capabilities: bool = True
    enable_color_support: Optional[bool] = None
    capabilities: Optional[TerminalCapabilities] = None

    def resolved_capabilities(self) -> TerminalCapabilities:
        return self.capabilities if self.capabilities is not None else TerminalCapabilities.detect()


@dataclass(frozen=True)
class RenderResult:
    """Styled text plus the codes that produced it."""
    content: str = ""
    ansi_codes: tuple[str, ...] = field(default_factory=tuple)
    reset_code: str = RESET
    byte_length: int = 0


def _effective_profile(options: RenderOptions, caps: TerminalCapabilities) -> ColorProfile:
    profile = caps.profile if options.respect_terminal_capabilities else ColorProfile.TRUE_COLOR
    if profile is ColorProfile.NO_COLOR and options.enable_color_support is True:
        return ColorProfile.TRUE_COLOR
    return profile


def generate_codes(
    style: StyleProperties,
    options: Optional[RenderOptions] = None,
) -> Result[list[str]]:
    """
    Build the escape sequences for a style.

    Attributes come first in a fixed order (bold, italic, underline,
    strikethrough, reverse, blink, faint), then foreground, then background.
    """
    options = options or RenderOptions()
    caps = options.resolved_capabilities()
    profile = _effective_profile(options, caps)

    colors = []
    for color, layer in ((style.foreground, "fg"), (style.background, "bg")):
        if color is None:
            continue
        resolved = resolve_color(color, profile, caps.has_dark_background)
        if isinstance(resolved, Err):
            logger.debug("color %r rejected: %s", color, resolved.error)
            return resolved
        if resolved.value is not None:
            colors.append((resolved.value, layer))

    if profile is ColorProfile.NO_COLOR:
        return Ok([])

    codes = [f"{CSI}{param}m" for name, param in SGR_ATTRIBUTES if getattr(style, name)]

    if options.enable_color_support is False:
        return Ok(codes)

    for value, layer in colors:
        params = value.to_sgr_fg() if layer == "fg" else value.to_sgr_bg()
        codes.append(f"{CSI}{params}m")

    return Ok(codes)


def render(
    text: str,
    style: StyleProperties,
    options: Optional[RenderOptions] = None,
) -> Result[RenderResult]:
    """Wrap ``text`` in the style's codes and a reset (unchanged if no codes)."""
    codes = generate_codes(style, options)
    if isinstance(codes, Err):
        return codes
    content = f"{''.join(codes.value)}{text}{RESET}" if codes.value else text
    return Ok(RenderResult(
        content=content,
        ansi_codes=tuple(codes.value),
        reset_code=RESET,
        byte_length=byte_length(content),
    ))


def combine(results: Iterable[RenderResult]) -> RenderResult:
    """Concatenate render results; an empty input gives the empty result."""
    results = list(results)
    return RenderResult(
        content="".join(r.content for r in results),
        ansi_codes=tuple(code for r in results for code in r.ansi_codes),
        reset_code=RESET,
        byte_length=sum(r.byte_length for r in results),
    )
