# Copyright 2026 tsbindgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Translation workflow: declaration source text to Rust source text.

The stages run once each, in order:

1. Parse the source into a raw syntax tree.
2. Build the Declaration Model.
3. Normalize identifiers and doc comments.
4. Deduplicate unions that mirror an enum.
5. Emit Rust code.

Recoverable problems are collected in one :class:`Diagnostics` value that is
returned with the result. Unrecoverable problems raise :class:`CompilerError`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path

from tsbindgen.compiler.artifact import ARTIFACT_SUFFIX, read_artifact
from tsbindgen.compiler.builder import ModelBuildError, build_model
from tsbindgen.compiler.dedup import deduplicate
from tsbindgen.compiler.diagnostics import Diagnostics
from tsbindgen.compiler.emitter import EmitOptions, emit
from tsbindgen.compiler.normalizer import normalize
from tsbindgen.model.entities import ModuleDef
from tsbindgen.parser import LexerError, ParseError, parse

# ###############
# Public Interface
# ###############


class CompilerError(Exception):
    """Raised when the translation encounters any unrecoverable error.

    Covers unreadable input, lexer and parse errors, a missing root
    namespace, and, in strict mode, any diagnostic.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


class Stage(enum.Enum):
    """Pipeline stages whose model tree can be inspected."""

    BUILT = "built"
    NORMALIZED = "normalized"
    DEDUPLICATED = "deduplicated"


@dataclass
class TranslationResult:
    """Outcome of one translation run.

    Attributes:
        source: The emitted Rust source text.
        module: The final (normalized, deduplicated) model tree.
        diagnostics: Every recoverable problem found during the run.
    """

    source: str
    module: ModuleDef
    diagnostics: Diagnostics


def build_stage(
    text: str,
    stage: Stage = Stage.DEDUPLICATED,
    *,
    root_module: str | None = None,
    diagnostics: Diagnostics | None = None,
    origin: str = "<input>",
) -> ModuleDef:
    """Run the pipeline up to *stage* and return the model tree at that point.

    Args:
        text: Declaration source text.
        stage: Last stage to run.
        root_module: Name of a synthesized root module wrapping all top-level
            declarations. When omitted the first top-level namespace is the root.
        diagnostics: Collector for recoverable problems. A fresh one is used
            when omitted.
        origin: Name of the input used in error messages.

    Raises:
        CompilerError: On lexer or parse errors, or when no root module exists.
    """
    if diagnostics is None:
        diagnostics = Diagnostics()
    try:
        source_file = parse(text)
    except (LexerError, ParseError) as exc:
        raise CompilerError(f"Parse error in '{origin}': {exc}") from exc

    try:
        module = build_model(source_file, diagnostics, root_module=root_module)
    except ModelBuildError as exc:
        raise CompilerError(f"Cannot build model for '{origin}': {exc}") from exc
    if stage == Stage.BUILT:
        return module

    module = normalize(module)
    if stage == Stage.NORMALIZED:
        return module

    return deduplicate(module, diagnostics)


def translate(
    text: str,
    *,
    options: EmitOptions | None = None,
    root_module: str | None = None,
    strict: bool = False,
    origin: str = "<input>",
) -> TranslationResult:
    """Translate declaration source text into Rust source text.

    Args:
        text: Declaration source text.
        options: Emitter settings (derives, module prelude, primitive mapping).
        root_module: See :func:`build_stage`.
        strict: Treat any diagnostic as an error.
        origin: Name of the input used in error messages.

    Returns:
        The emitted source together with the final model and all diagnostics.

    Raises:
        CompilerError: On unrecoverable errors, or on any diagnostic when
            *strict* is set.
    """
    diagnostics = Diagnostics()
    module = build_stage(text, Stage.BUILT, root_module=root_module, diagnostics=diagnostics, origin=origin)
    return translate_model(module, options=options, strict=strict, origin=origin, diagnostics=diagnostics)


def translate_model(
    module: ModuleDef,
    *,
    options: EmitOptions | None = None,
    strict: bool = False,
    origin: str = "<model>",
    diagnostics: Diagnostics | None = None,
) -> TranslationResult:
    """Translate a model tree taken at any stage into Rust source text.

    Normalization and deduplication are applied first; both leave a tree that
    already went through them unchanged, so an artifact of any stage works.

    Raises:
        CompilerError: On any diagnostic when *strict* is set.
    """
    if diagnostics is None:
        diagnostics = Diagnostics()
    module = deduplicate(normalize(module), diagnostics)
    source = emit(module, options, diagnostics)
    if strict and diagnostics:
        lines = "\n".join(f"  {d}" for d in diagnostics.entries)
        raise CompilerError(f"Diagnostics in '{origin}' (strict mode):\n{lines}")
    return TranslationResult(source=source, module=module, diagnostics=diagnostics)


def translate_file(
    input_path: Path,
    output_path: Path | None = None,
    *,
    options: EmitOptions | None = None,
    root_module: str | None = None,
    strict: bool = False,
) -> TranslationResult:
    """Translate a declaration file, writing the result to *output_path* if given.

    A file named ``*.model.json`` (see ``dump-model``) is read as a model
    artifact instead of declaration source; *root_module* does not apply to it.
    Parent directories of *output_path* are created as needed. Nothing is
    written when the translation fails.

    Raises:
        CompilerError: If the input cannot be read, the output cannot be
            written, or the translation fails.
    """
    origin = str(input_path)
    if input_path.name.endswith(ARTIFACT_SUFFIX):
        result = translate_model(_read_model(input_path), options=options, strict=strict, origin=origin)
    else:
        text = read_source(input_path)
        result = translate(text, options=options, root_module=root_module, strict=strict, origin=origin)
    if output_path is not None:
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(result.source, encoding="utf-8")
        except OSError as exc:
            raise CompilerError(f"Cannot write output file '{output_path}': {exc}") from exc
    return result


def read_source(input_path: Path) -> str:
    """Read a declaration file as text.

    Raises:
        CompilerError: If the file cannot be read.
    """
    try:
        return input_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CompilerError(f"Cannot read source file '{input_path}': {exc}") from exc


# ################
# Implementation
# ################


def _read_model(path: Path) -> ModuleDef:
    try:
        return read_artifact(path)
    except OSError as exc:
        raise CompilerError(f"Cannot read model artifact '{path}': {exc}") from exc
    except ValueError as exc:
        raise CompilerError(f"Invalid model artifact '{path}': {exc}") from exc
