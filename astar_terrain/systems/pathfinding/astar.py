"""A* search over weighted grids, one-shot or in bounded ticks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple
import logging

from ...core.errors import InvalidSearchInput
from ...core.grid.coordinates import Coord, Point, in_bounds
from ...core.queue.hybrid_heap import HybridHeap
from .costs import edge_cost, heuristic, is_wall
from .neighbors import neighbors

logger = logging.getLogger(__name__)


@dataclass
class VisitedRecord:
    """Best known cost to a cell and the cell it was reached from.

    The start cell records itself as ``came_from``.
    """

    score: float
    came_from: int


@dataclass(frozen=True)
class PathStatistics:
    total_distance: float
    nodes_visited_count: int
    path_nodes_count: int


@dataclass(frozen=True)
class PathResult:
    """Outcome of a successful search.

    ``path_indexes`` holds every predecessor on the route: the start is
    included, the goal is not.
    """

    from_index: int
    to_index: int
    total_distance: float
    path_indexes: Set[int]
    visited: Dict[int, VisitedRecord] = field(repr=False)

    def statistics(self) -> PathStatistics:
        return PathStatistics(
            total_distance=self.total_distance,
            nodes_visited_count=len(self.visited),
            path_nodes_count=len(self.path_indexes),
        )


def reconstruct_path(visited: Dict[int, VisitedRecord], to_index: int) -> Set[int]:
    """Walk predecessor links back from ``to_index`` and collect them."""

    path: Set[int] = set()
    key = to_index
    record = visited.get(key)
    while record is not None and record.came_from != key:
        path.add(record.came_from)
        key = record.came_from
        record = visited.get(key)
    return path


# ----------------------------------------------------------------------
# Validation
# ----------------------------------------------------------------------
def _validate_query(
    start: Point,
    goal: Point,
    width: int,
    height: int,
    multiplier: float,
    min_weight: float,
) -> None:
    if width <= 0 or height <= 0:
        raise InvalidSearchInput(f"grid must be at least 1x1, got {width}x{height}")
    for name, point in (("start", start), ("goal", goal)):
        if not in_bounds(width, height, point.x, point.y):
            raise InvalidSearchInput(
                f"{name} ({point.x}, {point.y}) is outside the {width}x{height} grid"
            )
    if multiplier < 0:
        raise InvalidSearchInput(f"heuristic multiplier must be >= 0, got {multiplier}")
    if min_weight < 0:
        raise InvalidSearchInput(f"min_weight must be >= 0, got {min_weight}")


def _validate_weights(weights: Sequence[float], width: int, height: int) -> None:
    expected = width * height
    if len(weights) != expected:
        raise InvalidSearchInput(
            f"expected {expected} weights for a {width}x{height} grid, got {len(weights)}"
        )


# ----------------------------------------------------------------------
# Search session
# ----------------------------------------------------------------------
class SearchSession:
    """Resumable A* search between two cells.

    Each :meth:`tick` expands at most ``max_steps`` cells and keeps the open
    set and visited map so the next call continues where this one stopped.
    """

    def __init__(
        self,
        start: Point | Coord,
        goal: Point | Coord,
        width: int,
        height: int,
        heuristic_multiplier: float = 1.0,
        min_weight: float = 1.0,
    ) -> None:
        self.start = Point.coerce(start)
        self.goal = Point.coerce(goal)
        _validate_query(self.start, self.goal, width, height, heuristic_multiplier, min_weight)

        self.width = width
        self.height = height
        self.multiplier = heuristic_multiplier
        self.min_weight = min_weight
        self.from_index = self.start.to_index(width)
        self.to_index = self.goal.to_index(width)

        self._openset = HybridHeap()
        self._visited: Dict[int, VisitedRecord] = {}
        self.path_indexes: Optional[Set[int]] = None
        self.exhausted = False
        self.steps_taken = 0
        self._seed()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def _seed(self) -> None:
        self._visited[self.from_index] = VisitedRecord(0.0, self.from_index)
        self._openset.push(
            self.from_index,
            heuristic(self.start, self.goal, self.multiplier, self.min_weight),
        )

    def reset(self) -> None:
        """Drop all progress and start the same query again."""
        self._openset.clear()
        self._visited.clear()
        self.path_indexes = None
        self.exhausted = False
        self.steps_taken = 0
        self._seed()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def found(self) -> bool:
        return self.path_indexes is not None

    @property
    def total_distance(self) -> Optional[float]:
        if not self.found:
            return None
        return self._visited[self.to_index].score

    def visited_points(self) -> Dict[int, VisitedRecord]:
        return self._visited

    def openset_points(self) -> List[Tuple[int, float]]:
        return self._openset.items()

    def result(self) -> Optional[PathResult]:
        """Return the :class:`PathResult` once the goal has been reached."""
        if self.path_indexes is None:
            return None
        return PathResult(
            from_index=self.from_index,
            to_index=self.to_index,
            total_distance=self._visited[self.to_index].score,
            path_indexes=self.path_indexes,
            visited=self._visited,
        )

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def tick(self, max_steps: int, weights: Sequence[float]) -> Optional[float]:
        """Expand up to ``max_steps`` cells.

        Returns the total distance once the goal is reached and ``None``
        otherwise. A budget below one still performs a single step.
        """
        _validate_weights(weights, self.width, self.height)
        if self.found:
            return self.total_distance
        if self.exhausted:
            return None

        remaining = max(1, max_steps)
        while remaining > 0:
            current = self._openset.pop()
            if current is None:
                self.exhausted = True
                logger.debug(
                    "A*: no path from %s to %s after %d steps (%d cells visited)",
                    self.start, self.goal, self.steps_taken, len(self._visited),
                )
                return None

            if current == self.to_index:
                self.path_indexes = reconstruct_path(self._visited, self.to_index)
                distance = self._visited[self.to_index].score
                logger.debug(
                    "A*: reached %s from %s, distance %.4f after %d steps",
                    self.goal, self.start, distance, self.steps_taken,
                )
                return distance

            self._expand(current, weights)
            self.steps_taken += 1
            remaining -= 1

        return None

    def run(self, weights: Sequence[float]) -> Optional[float]:
        """Search until the goal is reached or the open set is empty."""
        while not self.found and not self.exhausted:
            self.tick(len(weights), weights)
        return self.total_distance

    def _expand(self, current_index: int, weights: Sequence[float]) -> None:
        current_score = self._visited[current_index].score
        current_point = Point.from_index(self.width, current_index)

        for neighbor_index in neighbors(current_point, self.width, self.height):
            neighbor_point = Point.from_index(self.width, neighbor_index)
            weight = edge_cost(current_point, neighbor_point, weights, self.width)
            if is_wall(weight):
                continue

            tentative_g = current_score + weight
            record = self._visited.get(neighbor_index)
            if record is not None and record.score <= tentative_g:
                continue
            if record is None:
                self._visited[neighbor_index] = VisitedRecord(tentative_g, current_index)
            else:
                record.score = tentative_g
                record.came_from = current_index

            tentative_f = tentative_g + heuristic(
                neighbor_point, self.goal, self.multiplier, self.min_weight
            )
            if neighbor_index in self._openset:
                self._openset.change_priority(neighbor_index, tentative_f)
            else:
                self._openset.push(neighbor_index, tentative_f)


# ----------------------------------------------------------------------
# Public entry points
# ----------------------------------------------------------------------
def begin_search(
    start: Point | Coord,
    goal: Point | Coord,
    width: int,
    height: int,
    heuristic_multiplier: float = 1.0,
    min_weight: float = 1.0,
) -> SearchSession:
    """Create a :class:`SearchSession` ready to be advanced with ``tick``."""

    return SearchSession(start, goal, width, height, heuristic_multiplier, min_weight)


def find_path(
    start: Point | Coord,
    goal: Point | Coord,
    width: int,
    height: int,
    heuristic_multiplier: float,
    min_weight: float,
    weights: Sequence[float],
) -> Optional[PathResult]:
    """Return the cheapest path from ``start`` to ``goal`` or ``None``.

    ``weights`` holds one value per cell in index order; negative values are
    walls. "No path" is reported as ``None``, malformed input raises
    :class:`InvalidSearchInput`.
    """

    session = begin_search(start, goal, width, height, heuristic_multiplier, min_weight)
    _validate_weights(weights, width, height)
    session.run(weights)
    return session.result()


__all__ = [
    "PathResult",
    "PathStatistics",
    "SearchSession",
    "VisitedRecord",
    "begin_search",
    "find_path",
    "reconstruct_path",
]
