"""
Adjacency rule extraction.

Provides:
- extract_rules(grid, alphabet=None): observed (subject, neighbor, direction) facts
- rule_alphabet(rules): every label mentioned by a rule set
- build_requirement_index(rules): (label, direction) -> labels the neighbour on that side must admit

A rule Rule(s, n, d) records that label s was seen on the d side of label n.
Only in-bounds neighbours contribute; there is no wraparound and no
synthetic boundary label, so boundary cells simply produce fewer rules.
"""

from typing import Dict, FrozenSet, Iterable, Optional, Set, Tuple

from .palette import MalformedCellError
from .types import Direction, Grid, Label, Rule, RuleSet


def check_grid(grid: Grid) -> Tuple[int, int]:
    """
    Validate a rectangular, non-empty grid.

    Returns:
        (width, height)

    Raises:
        ValueError: If the grid is empty or ragged
    """
    if not grid or not grid[0]:
        raise ValueError("Grid must have at least one cell")
    width = len(grid[0])
    for y, row in enumerate(grid):
        if len(row) != width:
            raise ValueError(f"Ragged grid: row {y} has {len(row)} cells, expected {width}")
    return width, len(grid)


def extract_rules(grid: Grid, alphabet: Optional[Iterable[Label]] = None) -> RuleSet:
    """
    Derive the deduplicated set of adjacency rules observed in a sample grid.

    For every cell (x, y) and every direction d whose neighbour
    (x + dx, y + dy) lies inside the grid, emits
    Rule(label(neighbour), label(x, y), d).

    Args:
        grid: Sample grid, grid[y][x]
        alphabet: Optional set of admissible labels; any other cell value is
            rejected

    Returns:
        Immutable rule set

    Raises:
        ValueError: Empty or ragged grid
        MalformedCellError: A cell value outside `alphabet`

    Example:
        >>> rules = extract_rules([["R", "B"]])
        >>> Rule("B", "R", Direction.RIGHT) in rules and Rule("R", "B", Direction.LEFT) in rules
        True
        >>> len(rules)
        2
    """
    width, height = check_grid(grid)

    if alphabet is not None:
        allowed = set(alphabet)
        for y, row in enumerate(grid):
            for x, label in enumerate(row):
                if label not in allowed:
                    raise MalformedCellError(f"Unknown label {label!r} at {(x, y)}")

    rules: Set[Rule] = set()
    for y in range(height):
        for x in range(width):
            current = grid[y][x]
            for direction in Direction:
                nx, ny = x + direction.dx, y + direction.dy
                if 0 <= nx < width and 0 <= ny < height:
                    rules.add(Rule(grid[ny][nx], current, direction))

    return frozenset(rules)


def rule_alphabet(rules: Iterable[Rule]) -> FrozenSet[Label]:
    """Union of all subjects and neighbours appearing in the rule set."""
    labels: Set[Label] = set()
    for rule in rules:
        labels.add(rule.subject)
        labels.add(rule.neighbor)
    return frozenset(labels)


def build_requirement_index(rules: Iterable[Rule]) -> Dict[Tuple[Label, Direction], FrozenSet[Label]]:
    """
    Index rules by their subject.

    Maps (label, direction) to every neighbour label named by a rule
    Rule(label, m, direction). A cell holding `label` keeps it only while the
    neighbour on that side still admits ALL of them. Missing keys mean the
    sample never showed `label` with anything on that side.
    """
    index: Dict[Tuple[Label, Direction], Set[Label]] = {}
    for rule in rules:
        index.setdefault((rule.subject, rule.direction), set()).add(rule.neighbor)
    return {key: frozenset(values) for key, values in index.items()}
