"""
Unit tests for wfc_core/palette.py.

Focus: colour codec, rejection of unknown colours, array conversion,
random sample generation.
"""

import random

import numpy as np
import pytest

from wfc_core.palette import (
    MalformedCellError,
    Tile,
    array_from_grid,
    generate_random_sample,
    grid_from_array,
    minify,
    rgb_to_tile,
    tile_to_rgb,
)

R, G, B = Tile.RED, Tile.GREEN, Tile.BLUE


class TestColourCodec:

    @pytest.mark.parametrize("tile,rgb", [
        (R, (255, 0, 0)),
        (G, (0, 255, 0)),
        (B, (0, 0, 255)),
    ])
    def test_palette_colours(self, tile, rgb):
        assert tile_to_rgb(tile) == rgb
        assert rgb_to_tile(rgb) is tile

    def test_numpy_pixel(self):
        assert rgb_to_tile(np.array([0, 0, 255], dtype=np.uint8)) is B

    def test_unknown_colour_rejected(self):
        with pytest.raises(MalformedCellError, match="Invalid pixel color at \\(3, 1\\)"):
            rgb_to_tile((255, 255, 255), where=(3, 1))

    def test_near_miss_not_coerced(self):
        with pytest.raises(MalformedCellError):
            rgb_to_tile((254, 0, 0))

    def test_minify(self):
        assert [minify(t) for t in Tile] == ["R", "G", "B"]
        assert minify("stone") == "s"


class TestArrays:

    def test_grid_from_array(self):
        pixels = np.zeros((2, 3, 3), dtype=np.uint8)
        pixels[:, :] = (255, 0, 0)
        pixels[1, 2] = (0, 255, 0)

        grid = grid_from_array(pixels)

        assert grid == [[R, R, R], [R, R, G]]

    def test_bad_pixel_location_reported(self):
        pixels = np.zeros((2, 2, 3), dtype=np.uint8)
        pixels[:, :] = (0, 0, 255)
        pixels[1, 0] = (9, 9, 9)

        with pytest.raises(MalformedCellError, match="\\(0, 1\\)"):
            grid_from_array(pixels)

    def test_wrong_shape(self):
        with pytest.raises(ValueError):
            grid_from_array(np.zeros((2, 2), dtype=np.uint8))

    def test_array_from_grid(self):
        pixels = array_from_grid([[R, G], [B, R]])

        assert pixels.shape == (2, 2, 3)
        assert pixels.dtype == np.uint8
        assert tuple(pixels[0, 1]) == (0, 255, 0)
        assert tuple(pixels[1, 0]) == (0, 0, 255)

    def test_array_from_grid_rejects_foreign_labels(self):
        with pytest.raises(MalformedCellError):
            array_from_grid([[R, "x"]])


class TestRandomSample:

    def test_shape_and_alphabet(self):
        grid = generate_random_sample(4, 3, random.Random(0))

        assert len(grid) == 3
        assert all(len(row) == 4 for row in grid)
        assert {tile for row in grid for tile in row} <= set(Tile)

    def test_seeded(self):
        assert generate_random_sample(5, 5, random.Random(9)) == generate_random_sample(5, 5, random.Random(9))

    def test_non_positive(self):
        with pytest.raises(ValueError):
            generate_random_sample(0, 4)
