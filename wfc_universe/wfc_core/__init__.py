"""
wfc_core: Core primitives for the tile synthesizer.

Provides:
- types: Label, Cell, Grid, Direction, Rule
- palette: Tile alphabet and RGB codec
- rules: Adjacency rule extraction
"""

__all__ = [
    "palette",
    "rules",
    "types",
]
