"""Shared fixtures: pinned terminal capabilities so tests never depend on the host terminal."""

import pytest

from tui_styling.layout.canvas import CanvasRenderOptions
from tui_styling.render.codes import RenderOptions
from tui_styling.terminal.capabilities import TerminalCapabilities


class FakeTty:
    """Stream stand-in whose isatty() is True."""

    def isatty(self) -> bool:
        return True


@pytest.fixture
def tty() -> FakeTty:
    return FakeTty()


@pytest.fixture
def true_color() -> RenderOptions:
    return RenderOptions(capabilities=TerminalCapabilities.true_color())


@pytest.fixture
def ansi256() -> RenderOptions:
    return RenderOptions(capabilities=TerminalCapabilities.ansi256())


@pytest.fixture
def ansi() -> RenderOptions:
    return RenderOptions(capabilities=TerminalCapabilities.ansi())


@pytest.fixture
def no_color() -> RenderOptions:
    return RenderOptions(capabilities=TerminalCapabilities.no_color())


@pytest.fixture
def canvas_true_color(true_color: RenderOptions) -> CanvasRenderOptions:
    return CanvasRenderOptions(render_options=true_color)
