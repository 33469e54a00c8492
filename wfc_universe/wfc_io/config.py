"""
Generation settings.

Settings come from three layers, later ones winning:
1. GenerationConfig defaults
2. An optional JSON file (keys are the field names)
3. Command-line flags that were actually given
"""

import argparse
import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union


@dataclass
class GenerationConfig:
    sample_path: str = "imgs/sample.bmp"
    output_path: str = "imgs/sample_final.bmp"
    width: int = 16
    height: int = 16
    seed: Optional[int] = None
    max_attempts: Optional[int] = 10000
    backtrack: bool = False
    trace_dir: Optional[str] = None  # No dumps when unset

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Output dimensions must be positive, got {self.width}x{self.height}")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError(f"max_attempts must be positive, got {self.max_attempts}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _known_keys() -> set:
    return {f.name for f in fields(GenerationConfig)}


def config_from_dict(data: Dict[str, Any]) -> GenerationConfig:
    """
    Build a config from a plain dict.

    Raises:
        ValueError: On keys that are not GenerationConfig fields
    """
    unknown = set(data) - _known_keys()
    if unknown:
        raise ValueError(f"Unknown config keys: {sorted(unknown)}")
    return GenerationConfig(**data)


def load_config(path: Union[str, Path]) -> GenerationConfig:
    """
    Load a JSON config file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the JSON is not an object or has unknown keys
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")

    return config_from_dict(data)


def add_config_arguments(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Register the generation flags; every default is None so unset flags don't override."""
    parser.add_argument("--config", type=str, default=None, help="JSON config file")
    parser.add_argument("--sample", dest="sample_path", type=str, default=None, help="Sample bitmap")
    parser.add_argument("--output", dest="output_path", type=str, default=None, help="Output bitmap")
    parser.add_argument("--width", type=int, default=None, help="Output width (default: 16)")
    parser.add_argument("--height", type=int, default=None, help="Output height (default: 16)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible runs")
    parser.add_argument(
        "--max-attempts", dest="max_attempts", type=int, default=None,
        help="Budget on collapse attempts (default: 10000)",
    )
    parser.add_argument(
        "--backtrack", action="store_true", default=None,
        help="Reopen earlier decisions instead of giving up on a stuck cell",
    )
    parser.add_argument("--trace-dir", dest="trace_dir", type=str, default=None, help="Directory for debug dumps")
    return parser


def config_from_args(args: argparse.Namespace, base: Optional[GenerationConfig] = None) -> GenerationConfig:
    """Overlay parsed flags on `base` (or on the --config file, or on the defaults)."""
    if base is None:
        config_path = getattr(args, "config", None)
        base = load_config(config_path) if config_path else GenerationConfig()

    data = base.to_dict()
    for key in _known_keys():
        value = getattr(args, key, None)
        if value is not None:
            data[key] = value

    return GenerationConfig(**data)
