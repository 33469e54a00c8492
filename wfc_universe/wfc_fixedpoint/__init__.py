"""
Collapse solver for the tile synthesizer.

Modules:
- wave.py: Possibility grid, snapshots, contradiction check
- propagate.py: Adjacency filter pass and its fixed point
- collapse.py: Lowest-entropy collapse loop with retry/backtracking
- decode.py: Fully collapsed wave -> output grid
"""

from .wave import Wave, has_contradiction
from .propagate import PropagationReceipt, propagate, propagate_to_fixpoint
from .decode import decode
from .collapse import (
    CollapseRun,
    RunResult,
    RunStatus,
    choose_lowest_entropy_cell,
    generate,
)

__all__ = [
    "Wave",
    "has_contradiction",
    "PropagationReceipt",
    "propagate",
    "propagate_to_fixpoint",
    "decode",
    "CollapseRun",
    "RunResult",
    "RunStatus",
    "choose_lowest_entropy_cell",
    "generate",
]
