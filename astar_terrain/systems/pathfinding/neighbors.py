"""8-connected neighbour enumeration."""

from __future__ import annotations

from typing import List

from ...core.grid.coordinates import Point


def neighbors(point: Point, width: int, height: int) -> List[int]:
    """Return the in-bounds neighbour indexes of ``point``.

    Order is top row (left, centre, right), middle row (left, right), bottom
    row (left, centre, right). Cells on the left or right edge never wrap to
    the other side of the grid.
    """

    index = point.to_index(width)
    has_left = point.x > 0
    has_right = point.x < width - 1
    result: List[int] = []

    if point.y > 0:
        top = index - width
        if has_left:
            result.append(top - 1)
        result.append(top)
        if has_right:
            result.append(top + 1)

    if has_left:
        result.append(index - 1)
    if has_right:
        result.append(index + 1)

    if point.y < height - 1:
        bottom = index + width
        if has_left:
            result.append(bottom - 1)
        result.append(bottom)
        if has_right:
            result.append(bottom + 1)

    return result


__all__ = ["neighbors"]
