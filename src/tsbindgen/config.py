# Copyright 2026 tsbindgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the tsbindgen configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from tsbindgen.compiler.emitter import DEFAULT_DERIVES, DEFAULT_PRELUDE, EmitOptions
from tsbindgen.model.types import PrimitiveKind

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".tsbindgen.yaml"


class ConfigError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""


@dataclass
class GeneratorConfig:
    """The parsed generator configuration.

    Attributes:
        input: Declaration file to translate, relative to the config file.
        output: Rust file to write, relative to the config file.
        root_module: Name of a module wrapping all top-level declarations.
        strict: Treat diagnostics as errors.
        derives: Traits derived on every struct and enum.
        module_prelude: Lines placed at the top of every module.
        primitives: Rust type overrides per primitive kind.
        base_dir: Directory relative paths are resolved against.
    """

    input: str | None = None
    output: str | None = None
    root_module: str | None = None
    strict: bool = False
    derives: list[str] = field(default_factory=lambda: list(DEFAULT_DERIVES))
    module_prelude: list[str] = field(default_factory=lambda: list(DEFAULT_PRELUDE))
    primitives: dict[str, str] = field(default_factory=dict)
    base_dir: Path = field(default_factory=Path)

    def emit_options(self) -> EmitOptions:
        """Return the emitter settings described by this configuration."""
        return EmitOptions(
            derives=list(self.derives),
            prelude=list(self.module_prelude),
            primitives=dict(self.primitives),
        )

    def input_path(self) -> Path | None:
        return self.base_dir / self.input if self.input is not None else None

    def output_path(self) -> Path | None:
        return self.base_dir / self.output if self.output is not None else None


def load_config(path: Path) -> GeneratorConfig:
    """Load and parse a tsbindgen configuration file.

    Args:
        path: Path to the `.tsbindgen.yaml` file.

    Returns:
        A GeneratorConfig whose relative paths resolve against the file's directory.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    config = parse_config(text, source_label=str(path))
    config.base_dir = path.parent
    return config


def parse_config(text: str, source_label: str = "<string>") -> GeneratorConfig:
    """Parse configuration YAML text into a GeneratorConfig.

    An empty document yields the defaults.

    Args:
        text: Raw YAML content.
        source_label: Human-readable label used in error messages (e.g. the file path).

    Raises:
        ConfigError: If the YAML is invalid or a field has the wrong shape.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return GeneratorConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: config must be a YAML mapping")

    config = GeneratorConfig(
        input=_optional_string(data, "input", source_label),
        output=_optional_string(data, "output", source_label),
        root_module=_optional_string(data, "root-module", source_label),
    )
    if "strict" in data:
        if not isinstance(data["strict"], bool):
            raise ConfigError(f"{source_label}: 'strict' must be a boolean")
        config.strict = data["strict"]
    if "derives" in data:
        config.derives = _string_list(data, "derives", source_label)
    if "module-prelude" in data:
        config.module_prelude = _string_list(data, "module-prelude", source_label)
    if "primitives" in data:
        config.primitives = _parse_primitives(data["primitives"], source_label)
    return config


# ################
# Implementation
# ################

_PRIMITIVE_NAMES = [kind.value for kind in PrimitiveKind]


def _optional_string(mapping: dict[str, object], key: str, source_label: str) -> str | None:
    """Extract an optional string field from a mapping, raising ConfigError on a wrong type."""
    if key not in mapping:
        return None
    value = mapping[key]
    if not isinstance(value, str):
        raise ConfigError(f"{source_label}: '{key}' must be a string")
    return value


def _string_list(mapping: dict[str, object], key: str, source_label: str) -> list[str]:
    value = mapping[key]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{source_label}: '{key}' must be a list of strings")
    return list(value)


def _parse_primitives(value: object, source_label: str) -> dict[str, str]:
    """Parse the primitive override mapping, e.g. ``{number: i64}``."""
    if not isinstance(value, dict):
        raise ConfigError(f"{source_label}: 'primitives' must be a YAML mapping")
    primitives: dict[str, str] = {}
    for name, rust_type in value.items():
        if name not in _PRIMITIVE_NAMES:
            expected = ", ".join(_PRIMITIVE_NAMES)
            raise ConfigError(f"{source_label}: primitives: unknown primitive '{name}' (expected one of {expected})")
        if not isinstance(rust_type, str) or not rust_type:
            raise ConfigError(f"{source_label}: primitives: '{name}' must be a non-empty string")
        primitives[name] = rust_type
    return primitives
