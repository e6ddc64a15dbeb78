"""Conversion between 2-D grid coordinates and flat cell indexes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple
import operator

from ..errors import InvalidSearchInput


Coord = Tuple[int, int]


def to_index(width: int, x: int, y: int) -> int:
    """Return the flat index of ``(x, y)`` on a grid ``width`` cells wide.

    No bounds checking is done; callers guarantee ``0 <= x < width``.
    """

    return y * width + x


def from_index(width: int, index: int) -> Coord:
    """Return the ``(x, y)`` coordinates of ``index``."""

    return index % width, index // width


def in_bounds(width: int, height: int, x: int, y: int) -> bool:
    return 0 <= x < width and 0 <= y < height


@dataclass(frozen=True)
class Point:
    """A cell position on the grid."""

    x: int
    y: int

    def to_index(self, width: int) -> int:
        return to_index(width, self.x, self.y)

    @classmethod
    def from_index(cls, width: int, index: int) -> "Point":
        x, y = from_index(width, index)
        return cls(x, y)

    @classmethod
    def coerce(cls, value: "Point | Coord") -> "Point":
        """Accept either a :class:`Point` or an ``(x, y)`` tuple of integers.

        Non-integer coordinates raise :class:`InvalidSearchInput` rather than
        being truncated.
        """

        if isinstance(value, Point):
            return value
        x, y = value
        try:
            return cls(operator.index(x), operator.index(y))
        except TypeError:
            raise InvalidSearchInput(
                f"coordinates must be integers, got ({x!r}, {y!r})"
            ) from None

    def is_diagonal_to(self, other: "Point") -> bool:
        return self.x != other.x and self.y != other.y


__all__ = ["Coord", "Point", "to_index", "from_index", "in_bounds"]
