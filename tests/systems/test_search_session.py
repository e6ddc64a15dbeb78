import pytest

from astar_terrain.core.errors import InvalidSearchInput
from astar_terrain.systems.pathfinding.astar import begin_search, find_path, SearchSession


def _alternating_rows() -> list[float]:
    weights: list[float] = []
    for row in range(10):
        weights.extend([1.0 if row % 2 == 0 else 2.0] * 10)
    return weights


def _run(session: SearchSession, budget: int, weights) -> tuple[float | None, int]:
    calls = 0
    while True:
        calls += 1
        distance = session.tick(budget, weights)
        if distance is not None or session.exhausted:
            return distance, calls


def test_session_initial_state():
    session = begin_search((0, 0), (9, 9), 10, 10, 1, 1.0)
    assert session.visited_points()[0].score == 0.0
    assert session.visited_points()[0].came_from == 0
    assert [key for key, _ in session.openset_points()] == [0]
    assert session.path_indexes is None
    assert not session.found
    assert session.total_distance is None
    assert session.result() is None


@pytest.mark.parametrize("budget", [1, 3, 7, 50])
def test_incremental_matches_one_shot(budget):
    weights = _alternating_rows()
    expected = find_path((9, 9), (0, 9), 10, 10, 1, 1.0, weights)

    session = begin_search((9, 9), (0, 9), 10, 10, 1, 1.0)
    distance, _ = _run(session, budget, weights)

    assert distance == pytest.approx(expected.total_distance)
    assert session.path_indexes == expected.path_indexes
    assert session.result().total_distance == pytest.approx(expected.total_distance)


def test_tick_returns_none_until_found_and_preserves_state():
    weights = [1.0] * 100
    session = begin_search((0, 0), (9, 9), 10, 10, 1, 1.0)

    assert session.tick(1, weights) is None
    visited_after_one = dict(session.visited_points())
    assert len(visited_after_one) == 4

    assert session.tick(1, weights) is None
    assert set(visited_after_one) <= set(session.visited_points())
    assert session.steps_taken == 2


def test_zero_budget_performs_single_step():
    weights = [1.0] * 100
    session = begin_search((0, 0), (9, 0), 10, 10, 1, 1.0)
    assert session.tick(0, weights) is None
    assert session.steps_taken == 1

    distance, calls = _run(session, 0, weights)
    assert distance == pytest.approx(9.0)
    assert calls < 100


def test_tick_after_found_keeps_returning_distance():
    weights = [1.0] * 100
    session = begin_search((0, 0), (9, 0), 10, 10, 1, 1.0)
    distance, _ = _run(session, 100, weights)
    assert distance == pytest.approx(9.0)
    steps = session.steps_taken
    assert session.tick(5, weights) == distance
    assert session.steps_taken == steps


def test_session_exhausted_without_path():
    weights = [1.0] * 100
    for y in range(10):
        weights[y * 10 + 5] = -1.0
    session = begin_search((0, 0), (9, 9), 10, 10, 1, 1.0)
    distance, _ = _run(session, 10, weights)
    assert distance is None
    assert session.exhausted
    assert not session.found
    assert session.tick(10, weights) is None
    assert len(session.visited_points()) == 50


def test_reset_restarts_search():
    weights = _alternating_rows()
    session = begin_search((0, 0), (0, 9), 10, 10, 1, 1.0)
    first, _ = _run(session, 4, weights)

    session.reset()
    assert not session.found
    assert session.steps_taken == 0
    assert list(session.visited_points()) == [0]

    second, _ = _run(session, 4, weights)
    assert first == pytest.approx(13.5)
    assert second == first


def test_run_to_completion():
    session = begin_search((0, 0), (9, 9), 10, 10, 1, 1.0)
    assert session.run([1.0] * 100) == pytest.approx(12.727922)


def test_openset_never_holds_duplicates():
    weights = _alternating_rows()
    session = begin_search((0, 0), (9, 9), 10, 10, 1, 1.0)
    while session.tick(1, weights) is None and not session.exhausted:
        keys = [key for key, _ in session.openset_points()]
        assert len(keys) == len(set(keys))


def test_tick_rejects_wrong_weight_length():
    session = begin_search((0, 0), (1, 1), 2, 2, 1, 1.0)
    with pytest.raises(InvalidSearchInput):
        session.tick(1, [1.0] * 3)


def test_begin_search_validates_bounds():
    with pytest.raises(InvalidSearchInput):
        begin_search((0, 0), (2, 0), 2, 2, 1, 1.0)
