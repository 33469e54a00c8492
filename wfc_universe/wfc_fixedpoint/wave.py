"""
Wave: the grid of per-cell possibility sets.

A cell with one possibility is collapsed, a cell with more is undetermined
and a cell with none is contradictory. The wave owns its sets: accessors
return frozen copies and snapshots are explicit deep copies, so no two waves
ever alias a cell set.

Provides:
- Wave: bounds-checked possibility grid
- has_contradiction(wave): any empty cell
"""

from typing import FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple

from wfc_core.palette import minify
from wfc_core.types import Cell, Direction, Label, sorted_labels


class Wave:
    """
    Possibility grid of fixed outer dimensions.

    Cells are addressed by (x, y) with (0, 0) at the top-left corner.
    """

    def __init__(self, width: int, height: int, cells: List[List[Set[Label]]]):
        if width < 1 or height < 1:
            raise ValueError(f"Wave dimensions must be positive, got {width}x{height}")
        if len(cells) != height or any(len(row) != width for row in cells):
            raise ValueError(f"Cell rows do not match {width}x{height}")
        self._width = width
        self._height = height
        self._cells = cells

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def new(cls, width: int, height: int, alphabet: Iterable[Label]) -> "Wave":
        """Every cell starts with a fresh copy of the full alphabet."""
        labels = frozenset(alphabet)
        cells = [[set(labels) for _ in range(width)] for _ in range(height)]
        return cls(width, height, cells)

    @classmethod
    def from_rows(cls, rows: List[List[Iterable[Label]]]) -> "Wave":
        """Build a wave from explicit per-cell label collections, rows[y][x]."""
        if not rows or not rows[0]:
            raise ValueError("Wave must have at least one cell")
        cells = [[set(labels) for labels in row] for row in rows]
        return cls(len(rows[0]), len(rows), cells)

    def copy(self) -> "Wave":
        """Snapshot: a fully independent deep copy."""
        cells = [[set(labels) for labels in row] for row in self._cells]
        return Wave(self._width, self._height, cells)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def _check(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell {(x, y)} outside {self._width}x{self._height} wave")

    def get(self, x: int, y: int) -> FrozenSet[Label]:
        self._check(x, y)
        return frozenset(self._cells[y][x])

    def __getitem__(self, cell: Tuple[int, int]) -> FrozenSet[Label]:
        x, y = cell
        return self.get(x, y)

    def set(self, x: int, y: int, labels: Iterable[Label]) -> None:
        self._check(x, y)
        self._cells[y][x] = set(labels)

    def collapse(self, x: int, y: int, label: Label) -> None:
        """
        Commit a cell to a single label.

        Raises:
            ValueError: If the label is not currently possible at the cell
        """
        self._check(x, y)
        if label not in self._cells[y][x]:
            raise ValueError(f"Label {label!r} is not possible at {(x, y)}")
        self._cells[y][x] = {label}

    def cells(self) -> Iterator[Cell]:
        """All cells in row-major order."""
        for y in range(self._height):
            for x in range(self._width):
                yield Cell(x, y)

    def neighbors(self, x: int, y: int) -> Iterator[Tuple[Direction, Cell]]:
        """In-bounds 4-neighbours of a cell."""
        for direction in Direction:
            nx, ny = x + direction.dx, y + direction.dy
            if self.in_bounds(nx, ny):
                yield direction, Cell(nx, ny)

    # -------------------------------------------------------------------------
    # Entropy queries
    # -------------------------------------------------------------------------

    def entropy(self, x: int, y: int) -> int:
        self._check(x, y)
        return len(self._cells[y][x])

    def is_collapsed(self, x: int, y: int) -> bool:
        return self.entropy(x, y) == 1

    def is_fully_collapsed(self) -> bool:
        return all(len(labels) == 1 for row in self._cells for labels in row)

    def has_contradiction(self) -> bool:
        return any(len(labels) == 0 for row in self._cells for labels in row)

    def total_entropy(self) -> int:
        """Sum of possibility-set sizes over the whole grid."""
        return sum(len(labels) for row in self._cells for labels in row)

    def collapsed_count(self) -> int:
        return sum(1 for row in self._cells for labels in row if len(labels) == 1)

    def lowest_entropy_cells(self) -> List[Cell]:
        """
        Undetermined cells sharing the smallest possibility count (> 1).

        Collapsed and contradictory cells are never candidates. Returns an
        empty list when nothing is left to decide.
        """
        best: Optional[int] = None
        candidates: List[Cell] = []
        for cell in self.cells():
            size = len(self._cells[cell.y][cell.x])
            if size <= 1:
                continue
            if best is None or size < best:
                best = size
                candidates = [cell]
            elif size == best:
                candidates.append(cell)
        return candidates

    # -------------------------------------------------------------------------
    # Comparison and display
    # -------------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, Wave):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and self._cells == other._cells
        )

    __hash__ = None

    def render(self) -> str:
        """
        Minified dump: one line per row, tab-separated cells, each cell the
        concatenated characters of its sorted possibilities ('-' if empty).
        """
        lines = []
        for row in self._cells:
            parts = ["".join(minify(label) for label in sorted_labels(labels)) or "-" for labels in row]
            lines.append("\t".join(parts))
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return f"Wave({self._width}x{self._height}, entropy={self.total_entropy()})"


def has_contradiction(wave: Wave) -> bool:
    """True iff any cell's possibility set is empty."""
    return wave.has_contradiction()
