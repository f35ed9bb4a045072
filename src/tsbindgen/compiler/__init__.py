# Copyright 2026 tsbindgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Translation pipeline: model building, normalization, deduplication and emission."""

from tsbindgen.compiler.artifact import ARTIFACT_SUFFIX, deserialize, read_artifact, serialize, write_artifact
from tsbindgen.compiler.build import (
    CompilerError,
    Stage,
    TranslationResult,
    build_stage,
    translate,
    translate_file,
    translate_model,
)
from tsbindgen.compiler.builder import ModelBuildError, build_model
from tsbindgen.compiler.dedup import DeclarationIndex, UnionIndex, UnionSite, deduplicate, discover_unions
from tsbindgen.compiler.diagnostics import Diagnostic, DiagnosticKind, Diagnostics
from tsbindgen.compiler.emitter import EmitOptions, emit
from tsbindgen.compiler.normalizer import CONVENTIONS, format_doc, normalize

__all__ = [
    "build_model",
    "ModelBuildError",
    "normalize",
    "format_doc",
    "CONVENTIONS",
    "deduplicate",
    "discover_unions",
    "DeclarationIndex",
    "UnionIndex",
    "UnionSite",
    "emit",
    "EmitOptions",
    "Diagnostic",
    "DiagnosticKind",
    "Diagnostics",
    "serialize",
    "deserialize",
    "write_artifact",
    "read_artifact",
    "ARTIFACT_SUFFIX",
    "translate",
    "translate_file",
    "translate_model",
    "build_stage",
    "Stage",
    "TranslationResult",
    "CompilerError",
]
