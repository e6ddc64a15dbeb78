"""cProfile helpers for measuring search tick performance."""

from __future__ import annotations

import cProfile
import pstats
from collections import deque
from pathlib import Path
from typing import Deque, Optional, Sequence
import time

from ..config import CONFIG
from ..systems.pathfinding.astar import SearchSession

# Rolling history of the last 1000 tick durations in seconds
_TICK_HISTORY_LEN = 1000
_tick_durations: Deque[float] = deque(maxlen=_TICK_HISTORY_LEN)


def record_tick(duration: float) -> None:
    """Append a tick ``duration`` in seconds to the rolling history."""

    _tick_durations.append(duration)


def average_tick_ms() -> float:
    """Return the mean recorded tick time in milliseconds, ``0.0`` if none."""

    if not _tick_durations:
        return 0.0
    return sum(_tick_durations) / len(_tick_durations) * 1000.0


def profile_search(
    session: SearchSession,
    weights: Sequence[float],
    ticks_per_call: Optional[int] = None,
    out_path: str | Path = "profile.prof",
) -> pstats.Stats:
    """Drive ``session`` to completion under cProfile and dump stats to ``out_path``.

    Parameters
    ----------
    session:
        A freshly created or reset search session.
    weights:
        Weight array the session searches over.
    ticks_per_call:
        Budget passed to every :meth:`SearchSession.tick` call. Defaults to
        ``search.ticks_per_frame`` from the configuration.
    out_path:
        File to write cProfile data to.

    Returns
    -------
    pstats.Stats
        Profiling statistics for the execution.
    """

    if ticks_per_call is None:
        ticks_per_call = CONFIG.search.ticks_per_frame
    path = Path(out_path)
    profiler = cProfile.Profile()
    profiler.enable()
    last = time.perf_counter()
    while not session.found and not session.exhausted:
        session.tick(ticks_per_call, weights)
        now = time.perf_counter()
        record_tick(now - last)
        last = now
    profiler.disable()
    profiler.dump_stats(str(path))
    return pstats.Stats(profiler)


__all__ = ["profile_search", "record_tick", "average_tick_ms", "_tick_durations"]
