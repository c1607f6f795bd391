"""Typer CLI application for rendering and measuring styled text."""

import logging
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tui_styling.core.result import Err
from tui_styling.core.style import BoxSides, StyleProperties
from tui_styling.layout.blocks import JoinOptions, grid as grid_layout
from tui_styling.render.codes import RenderOptions
from tui_styling.render.metrics import text_metrics
from tui_styling.render.text import TextRenderOptions, format_text
from tui_styling.terminal.capabilities import ColorProfile, TerminalCapabilities

_PROFILES = {
    "none": ColorProfile.NO_COLOR,
    "ansi": ColorProfile.ANSI,
    "ansi256": ColorProfile.ANSI256,
    "truecolor": ColorProfile.TRUE_COLOR,
}


def _capabilities(profile: str) -> TerminalCapabilities:
    """Detect capabilities, or pin the profile when one is given."""
    detected = TerminalCapabilities.detect()
    if profile == "auto":
        return detected
    if profile not in _PROFILES:
        raise typer.BadParameter(f"profile must be one of: auto, {', '.join(_PROFILES)}")
    return TerminalCapabilities(_PROFILES[profile], detected.has_dark_background, detected.supports_unicode)


def _unescape(text: str) -> str:
    return text.replace("\\n", "\n")


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="tui-styling",
        help="Render, measure and lay out styled terminal text.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console()

    def fail(error: Err) -> None:
        console.print(f"[red]{escape(error.error.message)}[/]")
        raise typer.Exit(1)

    @app.callback()
    def main_options(
        verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output")] = False,
    ) -> None:
        """Render, measure and lay out styled terminal text."""
        if verbose:
            logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    @app.command()
    def render(
        text: Annotated[str, typer.Argument(help="Text to render (\\n starts a new line)")],
        fg: Annotated[Optional[str], typer.Option("--fg", help="Foreground color (name, #hex, 0-255)")] = None,
        bg: Annotated[Optional[str], typer.Option("--bg", help="Background color")] = None,
        bold: Annotated[bool, typer.Option("--bold", "-b")] = False,
        italic: Annotated[bool, typer.Option("--italic", "-i")] = False,
        underline: Annotated[bool, typer.Option("--underline", "-u")] = False,
        width: Annotated[Optional[int], typer.Option("--width", "-w", help="Target width in columns")] = None,
        height: Annotated[Optional[int], typer.Option("--height", help="Target height in lines")] = None,
        align: Annotated[str, typer.Option("--align", "-a", help="left, center or right")] = "left",
        valign: Annotated[str, typer.Option("--valign", help="top, middle or bottom")] = "top",
        transform: Annotated[Optional[str], typer.Option("--transform", help="uppercase, lowercase or capitalize")] = None,
        padding: Annotated[int, typer.Option("--padding", "-p", help="Padding on every side")] = 0,
        wrap: Annotated[bool, typer.Option("--wrap", help="Wrap instead of truncating")] = False,
        ellipsis: Annotated[str, typer.Option("--ellipsis", help="Truncation marker")] = "…",
        profile: Annotated[str, typer.Option("--profile", help="auto, none, ansi, ansi256 or truecolor")] = "auto",
    ) -> None:
        """Render text with a style and print the escape-coded result."""
        try:
            style = StyleProperties(
                bold=bold or None,
                italic=italic or None,
                underline=underline or None,
                foreground=fg,
                background=bg,
                horizontal_alignment=align,
                vertical_alignment=valign,
                transform=transform,
                padding=BoxSides.all(padding) if padding else None,
            )
        except ValueError as e:
            raise typer.BadParameter(str(e)) from e

        options = TextRenderOptions(
            width=width,
            height=height,
            wrap=wrap,
            ellipsis=ellipsis,
            render_options=RenderOptions(capabilities=_capabilities(profile)),
        )
        result = format_text(_unescape(text), style, options)
        if isinstance(result, Err):
            fail(result)
        print(result.value.content)

    @app.command()
    def measure(
        text: Annotated[str, typer.Argument(help="Text to measure (\\n starts a new line)")],
    ) -> None:
        """Show character count, display size and byte length."""
        metrics = text_metrics(_unescape(text))
        table = Table(title="Text metrics")
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")
        table.add_row("Characters", str(metrics.chars))
        table.add_row("Width", str(metrics.width))
        table.add_row("Height", str(metrics.height))
        table.add_row("Bytes", str(metrics.byte_length))
        console.print(table)

    @app.command()
    def capabilities() -> None:
        """Show the detected terminal capabilities."""
        caps = TerminalCapabilities.detect()
        background = {None: "unknown", True: "dark", False: "light"}[caps.has_dark_background]
        console.print(f"[bold]Color profile:[/] {caps.profile.value}")
        console.print(f"[bold]Background:[/]    {background}")
        console.print(f"[bold]Unicode:[/]       {'yes' if caps.supports_unicode else 'no'}")

    @app.command()
    def grid(
        items: Annotated[list[str], typer.Argument(help="Cell contents")],
        columns: Annotated[int, typer.Option("--columns", "-c", help="Number of columns")] = 2,
        separator: Annotated[str, typer.Option("--separator", "-s", help="Text between columns")] = " ",
        spacing: Annotated[int, typer.Option("--spacing", help="Extra spaces between columns")] = 0,
    ) -> None:
        """Lay out items in a grid."""
        options = JoinOptions(
            separator=separator,
            spacing=spacing,
            render_options=RenderOptions(capabilities=_capabilities("auto")),
        )
        result = grid_layout([_unescape(item) for item in items], columns, options)
        if isinstance(result, Err):
            fail(result)
        print(result.value.content)

    return app
