"""
Decode a fully collapsed wave into an output grid.

All decisions are final by the time this runs: decode never chooses and
never mutates the wave.
"""

from typing import Optional

from wfc_core.types import Grid

from .wave import Wave


def decode(wave: Wave) -> Optional[Grid]:
    """
    Grid of one label per cell, or None if any cell is undetermined or empty.

    Example:
        >>> decode(Wave.from_rows([[{"R"}, {"B"}]]))
        [['R', 'B']]
        >>> decode(Wave.from_rows([[{"R", "B"}, {"B"}]])) is None
        True
    """
    if not wave.is_fully_collapsed():
        return None

    grid: Grid = []
    for y in range(wave.height):
        row = []
        for x in range(wave.width):
            (label,) = wave.get(x, y)
            row.append(label)
        grid.append(row)
    return grid
