"""
Collapse driver: the outer observe / propagate / retry loop.

States: RUNNING -> DONE | UNSATISFIABLE | EXHAUSTED

Loop, starting from a wave holding the full alphabet everywhere:
0. Propagate to a fixed point; a contradiction here is UNSATISFIABLE.
1. No undetermined cell left -> DONE.
2. Pick an undetermined cell of lowest entropy (ties broken by the rng).
3. Collapse it to an untried label chosen uniformly by the rng.
4. Propagate to a fixed point.
5. Contradiction -> restore the snapshot taken before step 3 and retry the
   same cell with the tried labels excluded. No label left -> UNSATISFIABLE,
   or, with backtracking enabled, reopen the previous decision.
6. Otherwise snapshot the wave and go back to 1.

Randomness comes only from the injected random.Random. Candidate labels and
cells are enumerated in a fixed order so that a seeded run is reproducible.

Retry-from-snapshot is not a complete search: UNSATISFIABLE means "no label
for the stuck cell survived", not a proof that no solution exists. The
optional decision stack turns it into chronological backtracking.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Set

from wfc_core.rules import build_requirement_index, rule_alphabet
from wfc_core.types import Cell, Grid, Label, Rule, label_name, sorted_labels

from .decode import decode
from .propagate import propagate_to_fixpoint
from .wave import Wave

logger = logging.getLogger(__name__)


# =============================================================================
# Types
# =============================================================================


class RunStatus(Enum):
    RUNNING = "running"
    DONE = "done"
    UNSATISFIABLE = "unsatisfiable"
    EXHAUSTED = "exhausted"


@dataclass
class RunResult:
    """
    Outcome of one collapse run.

    `grid` is set only when status is DONE. UNSATISFIABLE and EXHAUSTED are
    kept apart so callers can tell "ran out of budget" from "ran out of
    labels to try".
    """
    status: RunStatus
    grid: Optional[Grid]
    attempts: int     # Labels tried (successful or not)
    retries: int      # Attempts rejected because of a contradiction
    backtracks: int   # Decisions reopened (backtracking mode only)
    collapses: int    # Committed decisions still standing at the end

    @property
    def ok(self) -> bool:
        return self.status is RunStatus.DONE


@dataclass
class Decision:
    """One committed collapse, kept on the stack when backtracking."""
    cell: Cell
    tried: Set[Label]
    snapshot: Wave  # Wave before the collapse was applied


# =============================================================================
# Cell choice
# =============================================================================


def choose_lowest_entropy_cell(wave: Wave, rng: random.Random) -> Optional[Cell]:
    """
    Uniformly pick one of the undetermined cells with the fewest possibilities.

    Returns None when no undetermined cell exists.
    """
    candidates = wave.lowest_entropy_cells()
    if not candidates:
        return None
    return rng.choice(candidates)


# =============================================================================
# Driver
# =============================================================================


class CollapseRun:
    """
    One generation request.

    Owns the wave, the last committed snapshot, the rng and the counters.
    A run is single-use: call run() once.

    Args:
        width, height: Output dimensions (independent of the sample's)
        rules: Immutable rule set, shared read-only
        rng: Random source; built from `seed` when omitted
        seed: Seed for the default random source
        max_attempts: Budget on label trials; exceeding it gives EXHAUSTED
        backtrack: Reopen earlier decisions when a cell runs out of labels
        tracer: Optional sink with write_rules(rules) and write_state(wave, tag)
    """

    def __init__(
        self,
        width: int,
        height: int,
        rules: Iterable[Rule],
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        max_attempts: Optional[int] = None,
        backtrack: bool = False,
        tracer=None,
    ):
        self.rules = frozenset(rules)
        self.alphabet = rule_alphabet(self.rules)
        self.rng = rng if rng is not None else random.Random(seed)
        self.max_attempts = max_attempts
        self.backtrack = backtrack
        self.tracer = tracer

        self.wave = Wave.new(width, height, self.alphabet)
        self.snapshot: Optional[Wave] = None
        self.decisions: List[Decision] = []
        self.status = RunStatus.RUNNING

        self.attempts = 0
        self.retries = 0
        self.backtracks = 0
        self.collapses = 0

        self._index = build_requirement_index(self.rules)

    def run(self) -> RunResult:
        if self.status is not RunStatus.RUNNING or self.snapshot is not None:
            raise RuntimeError("CollapseRun.run() can only be called once")

        logger.debug(
            f"Starting {self.wave.width}x{self.wave.height} run: "
            f"{len(self.rules)} rules, alphabet {[label_name(l) for l in sorted_labels(self.alphabet)]}"
        )
        if self.tracer is not None:
            self.tracer.write_rules(self.rules)
            self.tracer.write_state(self.wave, "initial")

        self.wave, receipt = propagate_to_fixpoint(self.wave, self._index)
        self.snapshot = self.wave.copy()
        if receipt.contradiction:
            logger.debug("Initial propagation left an empty cell")
            return self._finish(RunStatus.UNSATISFIABLE)

        while True:
            cell = choose_lowest_entropy_cell(self.wave, self.rng)
            if cell is None:
                return self._finish(RunStatus.DONE)

            status = self._settle(cell, set())
            if status is not None:
                return self._finish(status)

    def _settle(self, cell: Cell, tried: Set[Label]) -> Optional[RunStatus]:
        """
        Commit one label at `cell`, retrying from the snapshot on contradiction.

        Returns a terminal status, or None once a non-contradictory collapse has
        been committed.
        """
        while True:
            options = [label for label in sorted_labels(self.snapshot.get(cell.x, cell.y)) if label not in tried]

            if not options:
                if not self.backtrack or not self.decisions:
                    logger.debug(f"No label left to try at {tuple(cell)}")
                    return RunStatus.UNSATISFIABLE
                decision = self.decisions.pop()
                self.backtracks += 1
                self.collapses -= 1
                logger.debug(f"Backtracking to {tuple(decision.cell)} after exhausting {tuple(cell)}")
                self.snapshot = decision.snapshot
                self.wave = decision.snapshot
                cell, tried = decision.cell, decision.tried
                continue

            if self.max_attempts is not None and self.attempts >= self.max_attempts:
                logger.debug(f"Attempt budget of {self.max_attempts} exhausted")
                return RunStatus.EXHAUSTED

            label = self.rng.choice(options)
            tried.add(label)
            self.attempts += 1

            candidate = self.snapshot.copy()
            candidate.collapse(cell.x, cell.y, label)
            candidate, receipt = propagate_to_fixpoint(candidate, self._index)

            if receipt.contradiction:
                self.retries += 1
                if self.tracer is not None:
                    self.tracer.write_state(candidate, "contradiction")
                continue

            if self.backtrack:
                self.decisions.append(Decision(cell, tried, self.snapshot))
            self.wave = candidate
            self.snapshot = candidate.copy()
            self.collapses += 1
            logger.debug(
                f"Collapsed {tuple(cell)} to {label_name(label)}: "
                f"{self.wave.collapsed_count()}/{self.wave.width * self.wave.height} cells decided"
            )
            if self.tracer is not None:
                self.tracer.write_state(self.wave, "after_rule")
            return None

    def _finish(self, status: RunStatus) -> RunResult:
        self.status = status
        grid = decode(self.wave) if status is RunStatus.DONE else None
        if self.tracer is not None:
            self.tracer.write_state(self.wave, status.value)

        result = RunResult(
            status=status,
            grid=grid,
            attempts=self.attempts,
            retries=self.retries,
            backtracks=self.backtracks,
            collapses=self.collapses,
        )
        logger.info(
            f"Run finished: {status.value} after {result.attempts} attempts "
            f"({result.retries} retries, {result.backtracks} backtracks)"
        )
        return result


# =============================================================================
# Entry point
# =============================================================================


def generate(
    width: int,
    height: int,
    rules: Iterable[Rule],
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    max_attempts: Optional[int] = None,
    backtrack: bool = False,
    tracer=None,
) -> Optional[Grid]:
    """
    Synthesize a width x height grid consistent with `rules`.

    Returns the grid, or None when the run ends UNSATISFIABLE or EXHAUSTED
    (use CollapseRun directly to see which).

    Example:
        >>> from wfc_core.rules import extract_rules
        >>> rules = extract_rules([["R", "R"], ["R", "R"]])
        >>> generate(3, 2, rules, seed=0)
        [['R', 'R', 'R'], ['R', 'R', 'R']]
    """
    run = CollapseRun(
        width,
        height,
        rules,
        rng=rng,
        seed=seed,
        max_attempts=max_attempts,
        backtrack=backtrack,
        tracer=tracer,
    )
    return run.run().grid


__all__ = [
    "CollapseRun",
    "Decision",
    "RunResult",
    "RunStatus",
    "choose_lowest_entropy_cell",
    "generate",
]
