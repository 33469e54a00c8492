#!/usr/bin/env python3
"""
Generate a tile image from a sample bitmap.

Usage:
    python generate.py --sample imgs/noel.bmp --output imgs/noel_final.bmp --width 16 --height 16
    python generate.py --config generate.json --seed 7 --trace-dir imgs/output
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from wfc_io.config import add_config_arguments, config_from_args
from wfc_io.driver import run_generation, setup_logger


def main() -> int:
    parser = argparse.ArgumentParser(description="Wave function collapse tile generator")
    add_config_arguments(parser)
    parser.add_argument("--log-file", type=str, default=None, help="Optional log file")
    args = parser.parse_args()

    config = config_from_args(args)
    logger = setup_logger("generate", Path(args.log_file) if args.log_file else None)

    logger.info("=" * 80)
    logger.info(f"Sample: {config.sample_path}")
    logger.info(f"Output: {config.output_path} ({config.width}x{config.height})")
    logger.info(f"Random seed: {config.seed}")
    logger.info("=" * 80)

    result = run_generation(config, logger)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
