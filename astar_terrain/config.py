"""Simple configuration loader for astar_terrain."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


CONFIG_PATH = Path(__file__).resolve().parents[1] / "config.yaml"


@dataclass
class SearchConfig:
    """Defaults for path queries."""

    heuristic_multiplier: float = 1.0
    ticks_per_frame: int = 50
    wall_threshold: Optional[float] = None


@dataclass
class TerrainConfig:
    """Range that inverted pixel brightness is mapped onto."""

    min_weight: float = 1.0
    max_weight: float = 10.0


@dataclass
class LoggingConfig:
    global_level: str = "INFO"
    module_levels: Dict[str, str] = field(default_factory=dict)


@dataclass
class Config:
    """Top level configuration dataclass."""

    search: SearchConfig
    terrain: TerrainConfig
    logging: LoggingConfig


def _parse_config(data: dict[str, Any]) -> Config:
    """Convert raw ``data`` into :class:`Config`."""

    search_data = data.get("search") or {}
    threshold = search_data.get("wall_threshold")
    search = SearchConfig(
        heuristic_multiplier=float(search_data.get("heuristic_multiplier", 1.0)),
        ticks_per_frame=int(search_data.get("ticks_per_frame", 50)),
        wall_threshold=float(threshold) if threshold is not None else None,
    )

    terrain_data = data.get("terrain") or {}
    terrain = TerrainConfig(
        min_weight=float(terrain_data.get("min_weight", 1.0)),
        max_weight=float(terrain_data.get("max_weight", 10.0)),
    )

    logging_data = data.get("logging") or {}
    logging_cfg = LoggingConfig(
        global_level=str(logging_data.get("global_level", "INFO")).upper(),
        module_levels=dict(logging_data.get("module_levels") or {}),
    )

    return Config(search=search, terrain=terrain, logging=logging_cfg)


def load_config(path: Path = CONFIG_PATH) -> Config:
    """Load configuration from ``path`` and return a :class:`Config`."""

    path = Path(path)
    if path.is_file():
        raw = yaml.safe_load(path.read_text()) or {}
    else:
        raw = {}
    return _parse_config(raw)


# Load configuration at module import time.
CONFIG = load_config()


__all__ = [
    "CONFIG",
    "Config",
    "SearchConfig",
    "TerrainConfig",
    "LoggingConfig",
    "load_config",
]
