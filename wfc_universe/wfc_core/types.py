"""
Core type definitions for the tile synthesizer.

Coordinates follow image conventions: (0, 0) is the top-left cell, x grows
to the right and y grows downward. Grids are stored row-major, grid[y][x].
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Hashable, List, Tuple

# A label is any hashable value (Tile enum members in the reference alphabet)
Label = Hashable

# Grid representation
Grid = List[List[Label]]  # Grid[y][x] = label


@dataclass(frozen=True, order=True)
class Cell:
    """Cell coordinates (x, y)."""
    x: int
    y: int

    def __iter__(self):
        """Allow tuple unpacking: x, y = cell"""
        return iter((self.x, self.y))

    def shifted(self, direction: "Direction") -> "Cell":
        dx, dy = direction.offset
        return Cell(self.x + dx, self.y + dy)


class Direction(Enum):
    """The four grid directions, valued by their (dx, dy) offset."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def offset(self) -> Tuple[int, int]:
        return self.value

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    def __str__(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class Rule:
    """
    Observed adjacency fact.

    Read as: `subject` may appear on the `direction` side of `neighbor`.
    Rules are immutable so they can live in sets; a rule set carries no
    multiplicity or weight.
    """
    subject: Label
    neighbor: Label
    direction: Direction

    def describe(self) -> str:
        """Human-readable form used by the rule dump."""
        return f"{label_name(self.subject)} can be at {self.direction} of {label_name(self.neighbor)}"


RuleSet = FrozenSet[Rule]


def label_name(label: Label) -> str:
    """Display name of a label (enum members print by name)."""
    if isinstance(label, Enum):
        return label.name.capitalize()
    return str(label)


def label_key(label: Label) -> Tuple[str, str]:
    """
    Deterministic enumeration key for labels.

    Labels are semantically unordered; this key only fixes the order in which
    candidates are listed so that a seeded run is reproducible across
    processes (set iteration order depends on hash randomization).
    """
    return (type(label).__name__, label_name(label))


def sorted_labels(labels) -> List[Label]:
    return sorted(labels, key=label_key)
