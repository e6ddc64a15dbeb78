"""Derive per-cell traversal weights from pixel brightness using :mod:`Pillow`."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from PIL import Image

from ..config import CONFIG


RGB = Tuple[int, int, int]

WALL = -1.0


def brightness(r: int, g: int, b: int) -> float:
    """Return the HSV value component of an 8-bit RGB colour in ``[0, 1]``."""

    return max(r, g, b) / 255.0


def normalize(
    input_min: float,
    input_max: float,
    output_min: float,
    output_max: float,
    value: float,
) -> float:
    """Linearly map ``value`` from the input range onto the output range."""

    return output_min + (value - input_min) * (output_max - output_min) / (
        input_max - input_min
    )


def weight_from_rgb(
    r: int,
    g: int,
    b: int,
    wall_threshold: Optional[float] = None,
    min_weight: Optional[float] = None,
    max_weight: Optional[float] = None,
) -> float:
    """Return the traversal weight of a single pixel.

    Dark pixels are expensive and bright pixels cheap: brightness is inverted
    and rescaled to ``[min_weight, max_weight]``. Pixels darker than
    ``wall_threshold`` become walls.
    """

    if min_weight is None:
        min_weight = CONFIG.terrain.min_weight
    if max_weight is None:
        max_weight = CONFIG.terrain.max_weight

    value = brightness(r, g, b)
    if wall_threshold is not None and value < wall_threshold:
        return WALL
    inverted = abs(value - 1.0)
    return normalize(0.0, 1.0, min_weight, max_weight, inverted)


def weights_from_pixels(
    pixels: Iterable[RGB], wall_threshold: Optional[float] = None
) -> List[float]:
    """Convert row-major RGB ``pixels`` into a flat weight list."""

    return [weight_from_rgb(r, g, b, wall_threshold) for r, g, b in pixels]


def weights_from_image(
    image: Image.Image, wall_threshold: Optional[float] = None
) -> List[float]:
    """Return one weight per pixel of ``image`` in cell index order.

    ``image`` must already be decoded; any mode Pillow can convert to RGB is
    accepted.
    """

    return weights_from_pixels(image.convert("RGB").getdata(), wall_threshold)


def min_weight(weights: Sequence[float]) -> float:
    """Return the smallest passable weight, the scale the heuristic needs.

    Raises ``ValueError`` when every cell is a wall.
    """

    passable = [w for w in weights if w >= 0.0]
    if not passable:
        raise ValueError("weights contain no passable cells")
    return min(passable)


__all__ = [
    "WALL",
    "brightness",
    "normalize",
    "weight_from_rgb",
    "weights_from_pixels",
    "weights_from_image",
    "min_weight",
]
