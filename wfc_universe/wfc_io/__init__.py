"""
wfc_io: File-facing collaborators of the solver.

Provides:
- bitmap: Image <-> Tile grid
- trace: Rule and wave dumps
- config: GenerationConfig from JSON and CLI flags
- driver: End-to-end run_generation
"""

__all__ = [
    "bitmap",
    "config",
    "driver",
    "trace",
]
