"""
Unit tests for wfc_fixedpoint/decode.py.
"""

from wfc_core.palette import Tile
from wfc_fixedpoint.decode import decode
from wfc_fixedpoint.wave import Wave

R, G, B = Tile.RED, Tile.GREEN, Tile.BLUE


def test_fully_collapsed():
    wave = Wave.from_rows([
        [{R}, {G}, {B}],
        [{B}, {B}, {R}],
    ])
    assert decode(wave) == [[R, G, B], [B, B, R]]


def test_undetermined_cell_gives_none():
    wave = Wave.from_rows([[{R}, {G, B}]])
    assert decode(wave) is None


def test_empty_cell_gives_none():
    wave = Wave.from_rows([[{R}, set()]])
    assert decode(wave) is None


def test_does_not_mutate():
    wave = Wave.from_rows([[{R}, {G}]])
    before = wave.copy()
    decode(wave)
    assert wave == before
