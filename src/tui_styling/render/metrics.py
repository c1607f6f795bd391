"""Text metrics - measuring strings that contain escape codes and wide glyphs.

Three lengths are kept apart:

- characters: code points left after escapes are stripped
- display width: terminal columns (wide glyphs count 2, controls 0)
- byte length: UTF-8 size of the raw string, escapes included
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from wcwidth import wcwidth

from tui_styling.core.constants import ESC


def _escape_end(text: str, start: int) -> int:
    """Index just past the escape sequence starting at ``text[start]``.

    ``ESC [`` runs until the first ASCII letter; an unterminated sequence
    swallows the rest of the string. A lone ESC is a sequence of its own.
    """
    if start + 1 < len(text) and text[start + 1] == "[":
        j = start + 2
        while j < len(text):
            ch = text[j]
            if ("A" <= ch <= "Z") or ("a" <= ch <= "z"):
                return j + 1
            j += 1
        return j
    return start + 1


def split_escapes(text: str) -> Iterator[tuple[bool, str]]:
    """
    Split text into ``(is_escape, segment)`` tokens.

    Plain runs are yielded whole; every escape sequence is its own token,
    so callers can copy escapes without ever cutting one in half.
    """
    i = 0
    plain_start = 0
    while i < len(text):
        if text[i] == ESC:
            if plain_start < i:
                yield False, text[plain_start:i]
            end = _escape_end(text, i)
            yield True, text[i:end]
            i = plain_start = end
        else:
            i += 1
    if plain_start < len(text):
        yield False, text[plain_start:]


def strip(text: str) -> str:
    """Remove all escape sequences (and stray ESC characters)."""
    if ESC not in text:
        return text
    return "".join(segment for is_escape, segment in split_escapes(text) if not is_escape)


def char_width(ch: str) -> int:
    """Display width of one code point: 0 for controls, 2 for wide, else 1."""
    if ch == "\t":
        return 1
    cp = ord(ch)
    if cp < 0x20 or 0x7F <= cp <= 0x9F:
        return 0
    return 2 if wcwidth(ch) == 2 else 1


def _line_width(line: str) -> int:
    return sum(char_width(ch) for ch in line)


def display_width(text: str) -> int:
    """Columns occupied by the widest line of ``text``."""
    plain = strip(text)
    if "\n" not in plain:
        return _line_width(plain)
    return max(_line_width(line) for line in plain.split("\n"))


def display_height(text: str) -> int:
    """Number of lines (at least 1)."""
    return strip(text).count("\n") + 1


def measure(text: str) -> tuple[int, int]:
    """Return ``(width, height)``."""
    return display_width(text), display_height(text)


def char_count(text: str) -> int:
    """Code points after stripping escapes."""
    return len(strip(text))


def byte_length(text: str) -> int:
    """UTF-8 size of the raw string."""
    return len(text.encode("utf-8"))


@dataclass(frozen=True, slots=True)
class TextMetrics:
    """All measurements of one string."""
    chars: int
    width: int
    height: int
    byte_length: int


def text_metrics(text: str) -> TextMetrics:
    """Measure everything at once."""
    return TextMetrics(
        chars=char_count(text),
        width=display_width(text),
        height=display_height(text),
        byte_length=byte_length(text),
    )
