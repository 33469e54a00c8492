"""
Unit tests for wfc_io/config.py.

Focus: defaults, validation, JSON loading, flag overlay precedence.
"""

import argparse
import json

import pytest

from wfc_io.config import (
    GenerationConfig,
    add_config_arguments,
    config_from_args,
    config_from_dict,
    load_config,
)


def _parse(argv):
    parser = add_config_arguments(argparse.ArgumentParser())
    return parser.parse_args(argv)


class TestGenerationConfig:

    def test_defaults(self):
        config = GenerationConfig()

        assert (config.width, config.height) == (16, 16)
        assert config.sample_path == "imgs/sample.bmp"
        assert config.output_path == "imgs/sample_final.bmp"
        assert config.seed is None
        assert config.backtrack is False
        assert config.trace_dir is None

    @pytest.mark.parametrize("width,height", [(0, 4), (4, 0), (-2, 3)])
    def test_non_positive_dimensions(self, width, height):
        with pytest.raises(ValueError, match="positive"):
            GenerationConfig(width=width, height=height)

    def test_bad_budget(self):
        with pytest.raises(ValueError):
            GenerationConfig(max_attempts=0)

    def test_unlimited_budget(self):
        assert GenerationConfig(max_attempts=None).max_attempts is None


class TestLoading:

    def test_from_dict(self):
        config = config_from_dict({"width": 8, "seed": 3})
        assert (config.width, config.height, config.seed) == (8, 16, 3)

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="colour"):
            config_from_dict({"colour": "red"})

    def test_load_json(self, tmp_path):
        path = tmp_path / "generate.json"
        path.write_text(json.dumps({"sample_path": "a.bmp", "height": 5, "backtrack": True}))

        config = load_config(path)

        assert config.sample_path == "a.bmp"
        assert config.height == 5
        assert config.backtrack is True

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.json")

    def test_non_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError):
            load_config(path)


class TestArguments:

    def test_no_flags_keeps_defaults(self):
        assert config_from_args(_parse([])) == GenerationConfig()

    def test_flags_override(self):
        args = _parse(["--width", "4", "--seed", "9", "--backtrack", "--trace-dir", "dumps"])

        config = config_from_args(args)

        assert config.width == 4
        assert config.height == 16
        assert config.seed == 9
        assert config.backtrack is True
        assert config.trace_dir == "dumps"

    def test_flags_override_config_file(self, tmp_path):
        path = tmp_path / "generate.json"
        path.write_text(json.dumps({"width": 30, "height": 20}))

        config = config_from_args(_parse(["--config", str(path), "--height", "7"]))

        assert (config.width, config.height) == (30, 7)

    def test_explicit_base(self):
        base = GenerationConfig(output_path="x.bmp")
        config = config_from_args(_parse(["--max-attempts", "50"]), base=base)

        assert config.output_path == "x.bmp"
        assert config.max_attempts == 50
