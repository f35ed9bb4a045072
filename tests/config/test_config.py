# Copyright 2026 tsbindgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the generator configuration module."""

from pathlib import Path

import pytest

from tsbindgen.compiler.emitter import DEFAULT_DERIVES, DEFAULT_PRELUDE
from tsbindgen.config import CONFIG_FILE_NAME, ConfigError, GeneratorConfig, load_config, parse_config

# ###############
# Helpers
# ###############


def _write_config(tmp_path: Path, content: str) -> Path:
    """Write a config file and return its path."""
    config_file = tmp_path / CONFIG_FILE_NAME
    config_file.write_text(content, encoding="utf-8")
    return config_file


# ###############
# Normal Cases
# ###############


def test_empty_document_yields_defaults() -> None:
    """An empty file is a valid configuration with every default."""
    config = parse_config("")

    assert config == GeneratorConfig()
    assert config.input is None
    assert config.strict is False
    assert config.derives == list(DEFAULT_DERIVES)
    assert config.module_prelude == list(DEFAULT_PRELUDE)
    assert config.primitives == {}


def test_full_config() -> None:
    """Every key is parsed into its attribute."""
    content = """\
input: types/api.d.ts
output: src/api.rs
root-module: api
strict: true
derives: [Debug, Clone, Serialize, Deserialize]
module-prelude:
  - "use serde::{Deserialize, Serialize};"
  - "#[allow(unused_imports)]"
primitives:
  number: i64
  any: serde_json::Value
"""
    config = parse_config(content)

    assert config.input == "types/api.d.ts"
    assert config.output == "src/api.rs"
    assert config.root_module == "api"
    assert config.strict is True
    assert config.derives == ["Debug", "Clone", "Serialize", "Deserialize"]
    assert config.module_prelude == ["use serde::{Deserialize, Serialize};", "#[allow(unused_imports)]"]
    assert config.primitives == {"number": "i64", "any": "serde_json::Value"}


def test_empty_lists_are_allowed() -> None:
    """Derives and prelude can be switched off entirely."""
    config = parse_config("derives: []\nmodule-prelude: []\n")

    assert config.derives == []
    assert config.module_prelude == []


def test_emit_options() -> None:
    """The emitter settings mirror the configuration."""
    config = parse_config("derives: [Clone]\nmodule-prelude: []\nprimitives: {number: u32}\n")
    options = config.emit_options()

    assert options.derives == ["Clone"]
    assert options.prelude == []
    assert options.primitives == {"number": "u32"}


def test_load_resolves_paths_against_config_directory(tmp_path: Path) -> None:
    """Input and output paths are relative to the directory holding the config file."""
    config_file = _write_config(tmp_path, "input: api.d.ts\noutput: out/api.rs\n")
    config = load_config(config_file)

    assert config.base_dir == tmp_path
    assert config.input_path() == tmp_path / "api.d.ts"
    assert config.output_path() == tmp_path / "out" / "api.rs"


def test_paths_unset() -> None:
    """Unset input and output have no path."""
    config = parse_config("strict: false\n")

    assert config.input_path() is None
    assert config.output_path() is None


# ###############
# Error Cases
# ###############


def test_missing_file(tmp_path: Path) -> None:
    """A missing config file raises ConfigError."""
    with pytest.raises(ConfigError, match="Config file not found"):
        load_config(tmp_path / CONFIG_FILE_NAME)


def test_invalid_yaml() -> None:
    """Malformed YAML raises ConfigError naming the source."""
    with pytest.raises(ConfigError, match="Invalid YAML in cfg.yaml"):
        parse_config("input: [unclosed", source_label="cfg.yaml")


def test_non_mapping_document() -> None:
    """A top-level list is rejected."""
    with pytest.raises(ConfigError, match="must be a YAML mapping"):
        parse_config("- input\n")


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("input: 3\n", "'input' must be a string"),
        ("output: [a]\n", "'output' must be a string"),
        ("root-module: {a: b}\n", "'root-module' must be a string"),
        ("strict: 'yes'\n", "'strict' must be a boolean"),
        ("derives: Debug\n", "'derives' must be a list of strings"),
        ("derives: [Debug, 1]\n", "'derives' must be a list of strings"),
        ("module-prelude: use\n", "'module-prelude' must be a list of strings"),
        ("primitives: [number]\n", "'primitives' must be a YAML mapping"),
        ("primitives: {integer: i64}\n", "unknown primitive 'integer'"),
        ("primitives: {number: ''}\n", "'number' must be a non-empty string"),
        ("primitives: {number: 5}\n", "'number' must be a non-empty string"),
    ],
)
def test_invalid_field(content: str, message: str) -> None:
    """A field with the wrong shape raises ConfigError."""
    with pytest.raises(ConfigError, match=message):
        parse_config(content)
