"""
Adjacency propagation: a local constraint filter applied grid-wide.

Key principles:
1. Finite lattice: each cell holds a subset of the alphabet
2. Monotone: a pass only REMOVES labels, never adds them
3. Collapsed cells are frozen: only a reset to a snapshot can change them
4. Convergence-based: passes repeat until two consecutive waves are equal

Survival test for a label l at an undetermined cell, for each in-bounds
direction d:
- every rule Rule(l, m, d) must still find m in the neighbour on the d side
  (passing one rule does not excuse failing another);
- if no rule Rule(l, _, d) exists at all, l was never seen with anything on
  that side and is removed there.

Termination: each non-final pass removes at least one label, so the number
of passes is bounded by the initial total entropy plus one. The grid size
alone is not a bound: removals can bounce between two cells several times.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Tuple

from wfc_core.rules import build_requirement_index
from wfc_core.types import Direction, Label

from .wave import Wave

RequirementIndex = Dict[Tuple[Label, Direction], FrozenSet[Label]]


# =============================================================================
# Types
# =============================================================================


@dataclass
class PropagationReceipt:
    """Counters describing one fixed-point computation."""
    passes: int           # Passes applied, including the final no-change pass
    removals: int         # Total labels removed across all passes
    converged: bool       # Two consecutive passes produced the same wave
    contradiction: bool   # Some cell is empty


# =============================================================================
# Single pass
# =============================================================================


def _as_index(rules) -> RequirementIndex:
    if isinstance(rules, dict):
        return rules
    return build_requirement_index(rules)


def _admissible(
    label: Label,
    neighbours: List[Tuple[Direction, FrozenSet[Label]]],
    index: RequirementIndex,
) -> bool:
    for direction, options in neighbours:
        required = index.get((label, direction))
        if not required or not required <= options:
            return False
    return True


def propagate(wave: Wave, rules) -> Wave:
    """
    One filtering pass over every cell.

    Pure: reads only `wave` and returns a new wave; the argument is left
    untouched.

    Args:
        wave: Current possibility grid
        rules: Rule set, or an index from build_requirement_index()

    Returns:
        New wave with inadmissible labels removed
    """
    result, _ = _propagate_pass(wave, _as_index(rules))
    return result


def _propagate_pass(wave: Wave, index: RequirementIndex) -> Tuple[Wave, int]:
    result = wave.copy()
    removed = 0

    for cell in wave.cells():
        labels = wave[cell]
        if len(labels) <= 1:
            continue

        neighbours = [(direction, wave[n]) for direction, n in wave.neighbors(cell.x, cell.y)]
        survivors = {label for label in labels if _admissible(label, neighbours, index)}

        if len(survivors) != len(labels):
            removed += len(labels) - len(survivors)
            result.set(cell.x, cell.y, survivors)

    return result, removed


# =============================================================================
# Fixed point
# =============================================================================


def propagate_to_fixpoint(
    wave: Wave,
    rules,
    max_passes: Optional[int] = None,
    stop_on_contradiction: bool = True,
) -> Tuple[Wave, PropagationReceipt]:
    """
    Apply propagate() until nothing changes.

    A single pass only sees direct neighbours; multi-hop consistency emerges
    from repeated passes.

    Args:
        wave: Starting wave (not mutated)
        rules: Rule set or requirement index
        max_passes: Optional cap on the number of passes
        stop_on_contradiction: Return as soon as a pass leaves an empty cell

    Returns:
        (wave_star, receipt)
    """
    index = _as_index(rules)
    current = wave.copy()
    passes = 0
    removals = 0

    while max_passes is None or passes < max_passes:
        updated, removed = _propagate_pass(current, index)
        passes += 1
        removals += removed

        if updated == current:
            return updated, PropagationReceipt(passes, removals, True, updated.has_contradiction())

        current = updated
        if stop_on_contradiction and current.has_contradiction():
            return current, PropagationReceipt(passes, removals, False, True)

    return current, PropagationReceipt(passes, removals, False, current.has_contradiction())


__all__ = [
    "PropagationReceipt",
    "propagate",
    "propagate_to_fixpoint",
]
