"""Style properties - the abstract visual attributes applied to text."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Optional


class Alignment(Enum):
    """Horizontal alignment."""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VerticalAlignment(Enum):
    """Vertical alignment."""
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class TextTransform(Enum):
    """Case transform applied before layout."""
    UPPERCASE = "uppercase"
    LOWERCASE = "lowercase"
    CAPITALIZE = "capitalize"


@dataclass(frozen=True, slots=True)
class BoxSides:
    """Spacing around a box (padding or margin), in cells."""
    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0

    @classmethod
    def all(cls, n: int) -> "BoxSides":
        return cls(n, n, n, n)

    @classmethod
    def symmetric(cls, vertical: int = 0, horizontal: int = 0) -> "BoxSides":
        return cls(vertical, horizontal, vertical, horizontal)

    @classmethod
    def coerce(cls, value: "BoxSides | int | tuple[int, ...] | None") -> "BoxSides":
        """Accept an int, a CSS-like 1/2/4 tuple or a BoxSides."""
        if value is None:
            return cls()
        if isinstance(value, BoxSides):
            return value
        if isinstance(value, int):
            return cls.all(value)
        if len(value) == 1:
            return cls.all(value[0])
        if len(value) == 2:
            return cls.symmetric(value[0], value[1])
        return cls(*value)

    @property
    def is_empty(self) -> bool:
        return not (self.top or self.right or self.bottom or self.left)


def _coerce_enum(enum_cls: type[Enum], value: Any) -> Any:
    if value is None or isinstance(value, enum_cls):
        return value
    return enum_cls(value)


@dataclass(frozen=True)
class StyleProperties:
    """
    Abstract styling for a piece of text.

    Every field is optional; ``None`` means "not set" so styles can be
    layered with ``inherit``. Instances are never mutated.

    Example:
        >>> heading = StyleProperties(bold=True, foreground="cyan")
        >>> warning = heading.with_(foreground="#FFA500")
    """

    # Attributes
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[bool] = None
    strikethrough: Optional[bool] = None
    reverse: Optional[bool] = None
    blink: Optional[bool] = None
    faint: Optional[bool] = None

    # Colors (any value accepted by parse_color)
    foreground: Any = None
    background: Any = None

    # Layout
    horizontal_alignment: Optional[Alignment] = None
    vertical_alignment: Optional[VerticalAlignment] = None
    transform: Optional[TextTransform] = None
    padding: Optional[BoxSides] = None
    margin: Optional[BoxSides] = None
    width: Optional[int] = None
    height: Optional[int] = None

    def __post_init__(self) -> None:
        # Accept plain strings and ints for the structured fields
        object.__setattr__(self, "horizontal_alignment",
                           _coerce_enum(Alignment, self.horizontal_alignment))
        object.__setattr__(self, "vertical_alignment",
                           _coerce_enum(VerticalAlignment, self.vertical_alignment))
        object.__setattr__(self, "transform", _coerce_enum(TextTransform, self.transform))
        if self.padding is not None:
            object.__setattr__(self, "padding", BoxSides.coerce(self.padding))
        if self.margin is not None:
            object.__setattr__(self, "margin", BoxSides.coerce(self.margin))

    def with_(self, **overrides: Any) -> "StyleProperties":
        """Return a copy with the given fields replaced."""
        return replace(self, **overrides)

    def without(self, *names: str) -> "StyleProperties":
        """Return a copy with the given fields cleared."""
        return replace(self, **{name: None for name in names})

    def inherit(self, parent: "StyleProperties") -> "StyleProperties":
        """Fill fields not set here from ``parent``."""
        merged = {
            f.name: getattr(parent, f.name) if getattr(self, f.name) is None else getattr(self, f.name)
            for f in fields(self)
        }
        return StyleProperties(**merged)

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


@dataclass(frozen=True)
class StyleBuilder:
    """
    Fluent API for building StyleProperties.

    Each call returns a new builder; the receiver is left untouched, so a
    partially built style can be shared as a base.

    Example:
        >>> base = StyleBuilder().bold().fg("cyan")
        >>> title = base.underline().build()
        >>> plain = base.build()  # still not underlined
    """
    style: StyleProperties = field(default_factory=StyleProperties)

    def _set(self, **values: Any) -> "StyleBuilder":
        return StyleBuilder(self.style.with_(**values))

    def bold(self, on: bool = True) -> "StyleBuilder":
        return self._set(bold=on)

    def italic(self, on: bool = True) -> "StyleBuilder":
        return self._set(italic=on)

    def underline(self, on: bool = True) -> "StyleBuilder":
        return self._set(underline=on)

    def strikethrough(self, on: bool = True) -> "StyleBuilder":
        return self._set(strikethrough=on)

    def reverse(self, on: bool = True) -> "StyleBuilder":
        return self._set(reverse=on)

    def blink(self, on: bool = True) -> "StyleBuilder":
        return self._set(blink=on)

    def faint(self, on: bool = True) -> "StyleBuilder":
        return self._set(faint=on)

    def fg(self, color: Any) -> "StyleBuilder":
        """Set foreground color."""
        return self._set(foreground=color)

    def bg(self, color: Any) -> "StyleBuilder":
        """Set background color."""
        return self._set(background=color)

    def align(self, alignment: Alignment | str) -> "StyleBuilder":
        return self._set(horizontal_alignment=alignment)

    def valign(self, alignment: VerticalAlignment | str) -> "StyleBuilder":
        return self._set(vertical_alignment=alignment)

    def transform(self, transform: TextTransform | str) -> "StyleBuilder":
        return self._set(transform=transform)

    def padding(self, *sides: int) -> "StyleBuilder":
        """CSS-style shorthand: 1, 2 or 4 values."""
        return self._set(padding=BoxSides.coerce(sides))

    def margin(self, *sides: int) -> "StyleBuilder":
        """CSS-style shorthand: 1, 2 or 4 values."""
        return self._set(margin=BoxSides.coerce(sides))

    def size(self, width: Optional[int] = None, height: Optional[int] = None) -> "StyleBuilder":
        return self._set(width=width, height=height)

    def build(self) -> StyleProperties:
        return self.style
