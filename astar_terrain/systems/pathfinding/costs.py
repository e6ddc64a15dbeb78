"""Traversal cost and heuristic for weighted grids."""

from __future__ import annotations

import math
from typing import Sequence

from ...core.grid.coordinates import Point


SQRT_2 = math.sqrt(2.0)


def is_wall(cost: float) -> bool:
    """Return ``True`` if ``cost`` is the impassable marker."""

    return cost < 0.0


def edge_cost(
    from_point: Point, to_point: Point, weights: Sequence[float], width: int
) -> float:
    """Return the cost of moving from the centre of one cell to a neighbour.

    Half of each cell's weight is paid. Diagonal moves scale both weights by
    ``sqrt(2)``. A negative destination weight is returned unchanged so the
    caller can treat the neighbour as a wall.
    """

    to_weight = weights[to_point.to_index(width)]
    if to_weight < 0.0:
        return to_weight

    from_weight = weights[from_point.to_index(width)]
    if from_point.is_diagonal_to(to_point):
        from_weight *= SQRT_2
        to_weight *= SQRT_2

    return (from_weight + to_weight) / 2.0


def heuristic(
    from_point: Point, to_point: Point, multiplier: float, min_weight: float
) -> float:
    """Return the Euclidean distance scaled by the cheapest terrain weight.

    With ``multiplier <= 1`` and ``min_weight`` the true minimum of the grid
    the estimate never exceeds the real remaining cost.
    """

    weight_sq = min_weight * min_weight
    dx = (from_point.x - to_point.x) ** 2 * weight_sq
    dy = (from_point.y - to_point.y) ** 2 * weight_sq
    return math.sqrt((dx + dy) * multiplier)


__all__ = ["SQRT_2", "edge_cost", "heuristic", "is_wall"]
