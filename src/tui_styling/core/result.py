"""
Explicit success/failure values.

Every fallible operation in tui-styling returns either ``Ok(value)`` or
``Err(error)`` instead of raising, so callers can inspect and recover
locally (for example by falling back to unstyled text on ``InvalidColor``).

    >>> result = hex_to_rgb("#FF8800")
    >>> if result.is_ok:
    ...     r, g, b = result.value
    >>> hex_to_rgb("nope").unwrap_or((0, 0, 0))
    (0, 0, 0)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


class StylingError(Exception):
    """Base class for all errors carried by ``Err``."""

    kind = "styling_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.message == other.message  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.message))


class InvalidColor(StylingError):
    """Unparseable or malformed color literal (unknown name, bad hex...)."""

    kind = "invalid_color"

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class InvalidGeometry(StylingError):
    """Impossible layout geometry, e.g. a grid with zero columns."""

    kind = "invalid_geometry"


class CompositionFailure(StylingError):
    """Internal invariant violated while merging blocks or layers."""

    kind = "composition_failure"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result."""
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        return Ok(fn(self.value))

    def and_then(self, fn: Callable[[T], "Result[U]"]) -> "Result[U]":
        return fn(self.value)


@dataclass(frozen=True)
class Err:
    """Failed result carrying a ``StylingError``."""
    error: StylingError

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Any:
        """Raise the carried error."""
        raise self.error

    def unwrap_or(self, default: U) -> U:
        return default

    def map(self, fn: Callable[[Any], Any]) -> "Err":
        return self

    def and_then(self, fn: Callable[[Any], Any]) -> "Err":
        return self


Result = Union[Ok[T], Err]


def collect(results: "list[Result[T]]") -> "Result[list[T]]":
    """Turn a list of results into a result of a list (first error wins)."""
    values: list[T] = []
    for result in results:
        if isinstance(result, Err):
            return result
        values.append(result.value)
    return Ok(values)
