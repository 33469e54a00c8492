"""
Human-readable debug dumps of a collapse run.

Files written into the trace directory:
- rules.txt: one "<subject> can be at <direction> of <neighbor>" line per rule
- state_<seq>_<tag>.txt: the wave's possibility sets at a checkpoint

The sequence counter belongs to the writer, so two runs with two writers
never share numbering. Dumps are diagnostic only; the solver never reads
them back.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Union

from wfc_core.types import Rule, label_key

logger = logging.getLogger(__name__)


def clear_directory(path: Union[str, Path]) -> int:
    """
    Delete the regular files directly inside `path` (subdirectories are kept).

    Creates the directory when it is missing.

    Returns:
        Number of files removed
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    removed = 0
    for entry in path.iterdir():
        if entry.is_file():
            entry.unlink()
            removed += 1
    return removed


def _rule_order(rule: Rule):
    return (label_key(rule.subject), rule.direction.name, label_key(rule.neighbor))


class TraceWriter:
    """File sink for rule and wave dumps."""

    def __init__(self, output_dir: Union[str, Path]):
        self.output_dir = Path(output_dir)
        self.sequence = 0
        self.written: List[Path] = []

    def clear(self) -> int:
        removed = clear_directory(self.output_dir)
        logger.debug(f"Cleared {removed} files from {self.output_dir}")
        return removed

    def write_rules(self, rules: Iterable[Rule]) -> Path:
        path = self.output_dir / "rules.txt"
        lines = [rule.describe() for rule in sorted(rules, key=_rule_order)]
        return self._write(path, "\n".join(lines) + ("\n" if lines else ""))

    def write_state(self, wave, tag: str) -> Path:
        path = self.output_dir / f"state_{self.sequence}_{tag}.txt"
        self.sequence += 1
        return self._write(path, wave.render())

    def _write(self, path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            f.write(text)
        self.written.append(path)
        logger.debug(f"Saving into file: {path}")
        return path
