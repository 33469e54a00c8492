"""
Bitmap input/output for tile grids.

Provides:
- read_bitmap(path): image file -> Tile grid
- save_bitmap(grid, path): Tile grid -> image file

Images are read through Pillow, converted to RGB and decoded pixel by pixel
with the palette; any colour outside it raises MalformedCellError.
"""

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from wfc_core.palette import array_from_grid, grid_from_array
from wfc_core.types import Grid

PathLike = Union[str, Path]


def read_bitmap(path: PathLike) -> Grid:
    """
    Load a sample image as a grid, grid[y][x].

    Raises:
        FileNotFoundError: If the file doesn't exist
        MalformedCellError: If a pixel is not a palette colour
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Sample image not found: {path}")

    with Image.open(path) as img:
        pixels = np.asarray(img.convert("RGB"))

    return grid_from_array(pixels)


def save_bitmap(grid: Grid, path: PathLike) -> Path:
    """
    Write a Tile grid as an image; the format follows the file extension.

    Returns:
        The written path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(array_from_grid(grid)).save(path)
    return path
