"""Command-line entry point: find a path across an image's terrain."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional
import argparse
import logging

from PIL import Image

from .config import CONFIG, load_config
from .systems.pathfinding.astar import find_path
from .terrain.weights import min_weight, weights_from_image


log_level_str = CONFIG.logging.global_level
numeric_level = getattr(logging, log_level_str, logging.INFO)
logging.basicConfig(
    level=numeric_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)
logger = logging.getLogger(__name__)

# Apply per-module levels if defined
if CONFIG.logging.module_levels:
    for module_name, level_str in CONFIG.logging.module_levels.items():
        module_numeric_level = getattr(logging, level_str.upper(), None)
        if module_numeric_level is not None:
            logging.getLogger(module_name).setLevel(module_numeric_level)
        else:
            logger.warning("Invalid log level '%s' for module '%s' in config.", level_str, module_name)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="astar-terrain",
        description="Find the cheapest path between two pixels of an image.",
    )
    parser.add_argument("image", type=Path)
    parser.add_argument("x0", type=int)
    parser.add_argument("y0", type=int)
    parser.add_argument("x1", type=int)
    parser.add_argument("y1", type=int)
    parser.add_argument("--config", type=Path, default=None)
    parser.add_argument("--multiplier", type=float, default=None)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    cfg = load_config(args.config) if args.config is not None else CONFIG

    with Image.open(args.image) as image:
        width, height = image.size
        weights = weights_from_image(image, cfg.search.wall_threshold)

    multiplier = args.multiplier
    if multiplier is None:
        multiplier = cfg.search.heuristic_multiplier

    try:
        result = find_path(
            (args.x0, args.y0),
            (args.x1, args.y1),
            width,
            height,
            multiplier,
            min_weight(weights),
            weights,
        )
    except ValueError as exc:
        logger.error("Cannot search %s: %s", args.image, exc)
        return 2
    if result is None:
        logger.info("No path from (%s, %s) to (%s, %s)", args.x0, args.y0, args.x1, args.y1)
        return 1

    stats = result.statistics()
    logger.info(
        "distance: %.3f, visited: %d, path cells: %d",
        stats.total_distance,
        stats.nodes_visited_count,
        stats.path_nodes_count,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
