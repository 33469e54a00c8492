"""
End-to-end generation: sample bitmap -> rules -> collapse run -> output bitmap.

Provides:
- setup_logger: File + console logger used by the scripts
- run_generation: Wire a GenerationConfig to the solver
"""

import logging
import random
from pathlib import Path
from typing import Optional

from wfc_core.palette import Tile
from wfc_core.rules import extract_rules
from wfc_fixedpoint.collapse import CollapseRun, RunResult

from .bitmap import read_bitmap, save_bitmap
from .config import GenerationConfig
from .trace import TraceWriter


def setup_logger(name: str, log_file: Optional[Path] = None, level=logging.INFO) -> logging.Logger:
    """
    Setup a named logger.

    Args:
        name: Logger name
        log_file: Optional path to a log file (parent dirs are created)
        level: Logging level

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear any existing handlers
    logger.handlers = []

    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def run_generation(config: GenerationConfig, logger: Optional[logging.Logger] = None) -> RunResult:
    """
    Read the sample, extract rules, generate and save the output.

    The output file is written only when the run is DONE.

    Raises:
        FileNotFoundError: Missing sample image
        MalformedCellError: Sample pixel outside the palette
    """
    logger = logger or logging.getLogger(__name__)

    tracer = None
    if config.trace_dir:
        tracer = TraceWriter(config.trace_dir)
        tracer.clear()

    logger.info(f"Reading sample: {config.sample_path}")
    sample = read_bitmap(config.sample_path)
    logger.info(f"Sample is {len(sample[0])}x{len(sample)}")

    rules = extract_rules(sample, alphabet=list(Tile))
    logger.info(f"Extracted {len(rules)} rules")

    run = CollapseRun(
        config.width,
        config.height,
        rules,
        rng=random.Random(config.seed),
        max_attempts=config.max_attempts,
        backtrack=config.backtrack,
        tracer=tracer,
    )
    result = run.run()

    if result.ok:
        path = save_bitmap(result.grid, config.output_path)
        logger.info(f"Generated {config.width}x{config.height} image: {path}")
    else:
        logger.error(
            f"No image generated: {result.status.value} "
            f"after {result.attempts} attempts ({result.retries} retries)"
        )

    return result
