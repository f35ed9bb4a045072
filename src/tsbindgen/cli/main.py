# Copyright 2026 tsbindgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the tsbindgen command-line interface."""

import argparse
import sys
from pathlib import Path

from yachalk import chalk

from tsbindgen.compiler.artifact import ARTIFACT_SUFFIX, serialize, write_artifact
from tsbindgen.compiler.build import CompilerError, Stage, build_stage, read_source, translate_file
from tsbindgen.compiler.diagnostics import DiagnosticKind, Diagnostics
from tsbindgen.config import CONFIG_FILE_NAME, ConfigError, GeneratorConfig, load_config

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the tsbindgen CLI."""
    parser = argparse.ArgumentParser(
        prog="tsbindgen",
        description="tsbindgen: generate serde-annotated Rust types from TypeScript declarations",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Translate a declaration file into Rust source",
        description=(
            "Translate a TypeScript declaration file into Rust source code. "
            f"Missing arguments are taken from the configuration file ({CONFIG_FILE_NAME})."
        ),
    )
    generate_parser.add_argument(
        "input",
        nargs="?",
        help=(
            "Declaration file to translate, or a model artifact written by dump-model "
            f"(*{ARTIFACT_SUFFIX}); default: 'input' from the configuration"
        ),
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        help="Rust file to write (default: 'output' from the configuration)",
    )
    generate_parser.add_argument(
        "--config",
        help=f"Configuration file (default: {CONFIG_FILE_NAME} in the current directory, if present)",
    )
    generate_parser.add_argument(
        "--root-module",
        help="Wrap all top-level declarations in a module of this name",
    )
    generate_parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Treat diagnostics as errors",
    )

    # dump-model subcommand
    dump_parser = subparsers.add_parser(
        "dump-model",
        help="Write the declaration model as JSON",
        description="Run the pipeline up to a stage and write the model tree as a JSON artifact.",
    )
    dump_parser.add_argument("input", help="Declaration file to read")
    dump_parser.add_argument(
        "-o",
        "--output",
        help="File to write (default: standard output)",
    )
    dump_parser.add_argument(
        "--stage",
        choices=[stage.value for stage in Stage],
        default=Stage.DEDUPLICATED.value,
        help=f"Pipeline stage to stop after (default: {Stage.DEDUPLICATED.value})",
    )
    dump_parser.add_argument(
        "--root-module",
        help="Wrap all top-level declarations in a module of this name",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "generate":
        return _cmd_generate(args)
    if args.command == "dump-model":
        return _cmd_dump_model(args)
    return 0


def _error(message: str) -> None:
    print(chalk.red(f"Error: {message}"), file=sys.stderr)


def _report(diagnostics: Diagnostics) -> None:
    """Print the collected diagnostics once, after the run."""
    for diagnostic in diagnostics.entries:
        print(chalk.yellow(f"Warning: {diagnostic}"))


def _tally(diagnostics: Diagnostics) -> str:
    """Count diagnostics per kind, e.g. ``2 unsupported-type, 1 ambiguous-match``."""
    counts = []
    for kind in DiagnosticKind:
        found = diagnostics.of_kind(kind)
        if found:
            counts.append(f"{len(found)} {kind.value}")
    return ", ".join(counts)


def _load_generator_config(args: argparse.Namespace) -> GeneratorConfig:
    if args.config is not None:
        return load_config(Path(args.config))
    default = Path.cwd() / CONFIG_FILE_NAME
    if default.exists():
        return load_config(default)
    return GeneratorConfig()


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    try:
        config = _load_generator_config(args)
    except ConfigError as exc:
        _error(str(exc))
        return 1

    input_path = Path(args.input) if args.input is not None else config.input_path()
    output_path = Path(args.output) if args.output is not None else config.output_path()
    if input_path is None:
        _error("no input file given and none configured.")
        return 1
    if output_path is None:
        _error("no output file given and none configured.")
        return 1

    root_module = args.root_module if args.root_module is not None else config.root_module
    strict = args.strict if args.strict is not None else config.strict

    try:
        result = translate_file(
            input_path,
            output_path,
            options=config.emit_options(),
            root_module=root_module,
            strict=strict,
        )
    except CompilerError as exc:
        _error(str(exc))
        return 1

    _report(result.diagnostics)
    summary = f"Wrote '{output_path}'"
    if result.diagnostics:
        print(chalk.yellow(f"{summary} with {len(result.diagnostics)} warning(s): {_tally(result.diagnostics)}."))
    else:
        print(chalk.green(f"{summary}."))
    return 0


def _cmd_dump_model(args: argparse.Namespace) -> int:
    """Handle the dump-model subcommand."""
    input_path = Path(args.input)
    diagnostics = Diagnostics()
    try:
        module = build_stage(
            read_source(input_path),
            Stage(args.stage),
            root_module=args.root_module,
            diagnostics=diagnostics,
            origin=str(input_path),
        )
    except CompilerError as exc:
        _error(str(exc))
        return 1

    if args.output is None:
        print(serialize(module, pretty=True))
    else:
        try:
            write_artifact(module, Path(args.output), pretty=True)
        except OSError as exc:
            _error(f"cannot write '{args.output}': {exc}")
            return 1
        print(chalk.green(f"Wrote model ({args.stage}) to '{args.output}'."))
    # stdout carries only the JSON
    for diagnostic in diagnostics.entries:
        print(chalk.yellow(f"Warning: {diagnostic}"), file=sys.stderr)
    return 0
