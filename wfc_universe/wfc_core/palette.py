"""
Reference tile alphabet and its RGB codec.

Provides:
- Tile: the three-colour reference alphabet
- tile_to_rgb / rgb_to_tile: label <-> pixel colour
- grid_from_array / array_from_grid: numpy H x W x 3 image <-> label grid
- minify: one-character form used by the state dumps
- generate_random_sample: random Tile grid for building sample bitmaps

Unknown colours are an input-format error and are never coerced to a
default tile.
"""

import random
from enum import Enum
from typing import Dict, Optional, Tuple

import numpy as np

from .types import Grid, Label, label_name

RGB = Tuple[int, int, int]


class MalformedCellError(ValueError):
    """A sample cell does not encode any known label."""


class Tile(Enum):
    """Reference alphabet: pure red, green and blue pixels."""

    RED = (255, 0, 0)
    GREEN = (0, 255, 0)
    BLUE = (0, 0, 255)

    @property
    def rgb(self) -> RGB:
        return self.value

    @property
    def char(self) -> str:
        return self.name[0]


RGB_TO_TILE: Dict[RGB, Tile] = {tile.rgb: tile for tile in Tile}


def tile_to_rgb(tile: Tile) -> RGB:
    return tile.rgb


def rgb_to_tile(rgb, where: Optional[Tuple[int, int]] = None) -> Tile:
    """
    Decode one pixel colour.

    Args:
        rgb: (r, g, b) triple (any sequence of three ints)
        where: Optional (x, y) used in the error message

    Raises:
        MalformedCellError: If the colour is not in the palette
    """
    key = tuple(int(v) for v in rgb)
    tile = RGB_TO_TILE.get(key)
    if tile is None:
        location = f" at {where}" if where is not None else ""
        raise MalformedCellError(f"Invalid pixel color{location}: {key}")
    return tile


def minify(label: Label) -> str:
    """Single character for a label ('R', 'G', 'B' for tiles)."""
    if isinstance(label, Tile):
        return label.char
    return label_name(label)[:1] or "?"


def grid_from_array(pixels: np.ndarray) -> Grid:
    """
    Convert an H x W x 3 RGB array to a Tile grid (grid[y][x]).

    Raises:
        ValueError: If the array is not H x W x 3
        MalformedCellError: On the first pixel outside the palette
    """
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"Expected an H x W x 3 RGB array, got shape {pixels.shape}")

    height, width, _ = pixels.shape
    grid: Grid = []
    for y in range(height):
        row = []
        for x in range(width):
            row.append(rgb_to_tile(pixels[y, x], where=(x, y)))
        grid.append(row)
    return grid


def array_from_grid(grid: Grid) -> np.ndarray:
    """Convert a Tile grid to an H x W x 3 uint8 RGB array."""
    height = len(grid)
    width = len(grid[0]) if height else 0
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    for y, row in enumerate(grid):
        for x, tile in enumerate(row):
            if not isinstance(tile, Tile):
                raise MalformedCellError(f"Cannot encode label {tile!r} at {(x, y)}")
            pixels[y, x] = tile.rgb
    return pixels


def generate_random_sample(width: int, height: int, rng: Optional[random.Random] = None) -> Grid:
    """Random Tile grid, uniformly drawn per cell."""
    if width < 1 or height < 1:
        raise ValueError(f"Sample dimensions must be positive, got {width}x{height}")
    rng = rng or random.Random()
    tiles = list(Tile)
    return [[rng.choice(tiles) for _ in range(width)] for _ in range(height)]
