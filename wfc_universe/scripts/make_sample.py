#!/usr/bin/env python3
"""
Write a random Red/Green/Blue sample bitmap.

Usage:
    python make_sample.py imgs/random.bmp --width 4 --height 4 --seed 1
"""

import argparse
import random
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from wfc_core.palette import generate_random_sample
from wfc_io.bitmap import save_bitmap


def main() -> int:
    parser = argparse.ArgumentParser(description="Random sample bitmap")
    parser.add_argument("output", type=str, help="Output bitmap path")
    parser.add_argument("--width", type=int, default=4)
    parser.add_argument("--height", type=int, default=4)
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    args = parser.parse_args()

    grid = generate_random_sample(args.width, args.height, random.Random(args.seed))
    path = save_bitmap(grid, args.output)
    print(f"Saved {args.width}x{args.height} sample to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
