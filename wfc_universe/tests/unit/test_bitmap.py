"""
Unit tests for wfc_io/bitmap.py.

Bitmaps are written with Pillow directly so reading is tested
independently of save_bitmap().
"""

import pytest
from PIL import Image

from wfc_core.palette import MalformedCellError, Tile
from wfc_io.bitmap import read_bitmap, save_bitmap

R, G, B = Tile.RED, Tile.GREEN, Tile.BLUE


def _write_pixels(path, rows):
    height, width = len(rows), len(rows[0])
    img = Image.new("RGB", (width, height))
    for y, row in enumerate(rows):
        for x, rgb in enumerate(row):
            img.putpixel((x, y), rgb)
    img.save(path)


class TestReadBitmap:

    def test_reads_row_major(self, tmp_path):
        path = tmp_path / "sample.bmp"
        _write_pixels(path, [
            [(255, 0, 0), (0, 0, 255)],
            [(255, 0, 0), (255, 0, 0)],
        ])

        assert read_bitmap(path) == [[R, B], [R, R]]

    def test_png_with_alpha(self, tmp_path):
        path = tmp_path / "sample.png"
        img = Image.new("RGBA", (2, 1), (0, 255, 0, 255))
        img.save(path)

        assert read_bitmap(path) == [[G, G]]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_bitmap(tmp_path / "nope.bmp")

    def test_foreign_colour(self, tmp_path):
        path = tmp_path / "bad.bmp"
        _write_pixels(path, [[(255, 0, 0), (255, 255, 255)]])

        with pytest.raises(MalformedCellError, match="\\(1, 0\\)"):
            read_bitmap(path)


class TestSaveBitmap:

    def test_writes_palette_colours(self, tmp_path):
        path = save_bitmap([[R, G, B]], tmp_path / "out" / "final.bmp")

        assert path.exists()
        with Image.open(path) as img:
            assert img.size == (3, 1)
            rgb = img.convert("RGB")
            assert [rgb.getpixel((x, 0)) for x in range(3)] == [(255, 0, 0), (0, 255, 0), (0, 0, 255)]

    def test_read_back(self, tmp_path):
        grid = [[R, B], [B, G], [G, R]]
        path = save_bitmap(grid, tmp_path / "grid.bmp")
        assert read_bitmap(path) == grid
