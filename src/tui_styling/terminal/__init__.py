"""Terminal capability detection consumed by the code synthesizer."""

from tui_styling.terminal.capabilities import ColorProfile, TerminalCapabilities

__all__ = ["ColorProfile", "TerminalCapabilities"]
