# Copyright 2026 tsbindgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recoverable diagnostics collected across a translation run.

Diagnostics never abort a stage. They are gathered in a single collector that
is threaded through the pipeline and reported once at the end of the run.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

# ###############
# Public Interface
# ###############


class DiagnosticKind(enum.Enum):
    """Categories of recoverable problems."""

    UNSUPPORTED_TYPE = "unsupported-type"
    UNSUPPORTED_MEMBER = "unsupported-member"
    UNSUPPORTED_INITIALIZER = "unsupported-initializer"
    UNSUPPORTED_UNION = "unsupported-union"
    AMBIGUOUS_MATCH = "ambiguous-match"


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable problem found while translating declarations.

    Attributes:
        kind: Category of the problem.
        message: Human-readable description.
        path: Dotted path of the declaration the problem belongs to, if known.
    """

    kind: DiagnosticKind
    message: str
    path: str = ""

    def __str__(self) -> str:
        location = f"{self.path}: " if self.path else ""
        return f"[{self.kind.value}] {location}{self.message}"


@dataclass
class Diagnostics:
    """Ordered collector of diagnostics for one run."""

    entries: list[Diagnostic] = field(default_factory=list)

    def report(self, kind: DiagnosticKind, message: str, path: str = "") -> None:
        """Record a diagnostic."""
        self.entries.append(Diagnostic(kind=kind, message=message, path=path))

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        """Return the diagnostics of one category in the order they were reported."""
        return [d for d in self.entries if d.kind == kind]

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)
