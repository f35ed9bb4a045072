# Copyright 2026 tsbindgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of Declaration Model artifacts.

Artifacts are JSON files holding one model tree, used to inspect the output of
a pipeline stage. The format is versioned so future schema changes can be
detected.
"""

from __future__ import annotations

import json
from pathlib import Path

from tsbindgen.model.entities import ModuleDef

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"
ARTIFACT_SUFFIX = ".model.json"


def serialize(module: ModuleDef, *, pretty: bool = False) -> str:
    """Serialize a model tree to a JSON string.

    Args:
        module: Root of the tree.
        pretty: Indent the output for reading instead of writing it compactly.
    """
    obj = {"v": ARTIFACT_FORMAT_VERSION, "root": module.model_dump(mode="json")}
    if pretty:
        return json.dumps(obj, indent=2)
    return json.dumps(obj, separators=(",", ":"))


def deserialize(data: str) -> ModuleDef:
    """Deserialize a model tree from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize`.

    Returns:
        The reconstructed root :class:`ModuleDef`.

    Raises:
        ValueError: If the artifact format version is not recognised or the
            content does not describe a model tree.
    """
    obj = json.loads(data)
    version = obj.get("v") if isinstance(obj, dict) else None
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")
    # pydantic's ValidationError is a ValueError
    return ModuleDef.model_validate(obj.get("root"))


def write_artifact(module: ModuleDef, path: Path, *, pretty: bool = False) -> None:
    """Write an artifact to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(module, pretty=pretty), encoding="utf-8")


def read_artifact(path: Path) -> ModuleDef:
    """Read and deserialize an artifact from *path*."""
    return deserialize(path.read_text(encoding="utf-8"))
