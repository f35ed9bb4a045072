# Copyright 2026 tsbindgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Naming normalizer: rewrites identifiers to Rust naming conventions.

Every identifier in the returned tree is a ``ResolvedIdent`` carrying both the
source spelling and the rewritten one. Member lists are treated as a whole:
their dominant casing decides whether they need rewriting and which splitter
is used, so siblings are never split inconsistently.
"""

from __future__ import annotations

from dataclasses import dataclass

from tsbindgen.compiler.casing import Case, dominant_case, to_case
from tsbindgen.model.entities import (
    EnumDef,
    EnumMember,
    FieldDef,
    Ident,
    Item,
    ModuleDef,
    ResolvedIdent,
    StructDef,
    TypeAliasDef,
)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Convention:
    """Naming convention of one declaration kind.

    Attributes:
        ident: Casing of the declaration's own identifier.
        members: Casing of its members, if it has any.
    """

    ident: Case
    members: Case | None = None


CONVENTIONS: dict[str, Convention] = {
    "enum": Convention(ident=Case.PASCAL, members=Case.PASCAL),
    "struct": Convention(ident=Case.PASCAL, members=Case.SNAKE),
    "type_alias": Convention(ident=Case.PASCAL),
    "module": Convention(ident=Case.SNAKE),
}

DOC_OPEN = "/**"
DOC_CLOSE = "*/"


def format_doc(doc: str) -> str:
    """Wrap a documentation string in a Rust block doc comment.

    Empty strings stay empty and text that already starts with ``/**`` is
    returned unchanged.
    """
    if not doc:
        return ""
    if doc.startswith(DOC_OPEN):
        return doc
    body = "\n".join(f" * {line}" for line in doc.split("\n"))
    return f"{DOC_OPEN}\n{body}\n{DOC_CLOSE}"


def normalize(module: ModuleDef) -> ModuleDef:
    """Return a copy of *module* with every identifier resolved and every doc formatted."""
    return _normalize_module(module)


# ################
# Implementation
# ################


def _resolve(ident: Ident, case: Case, source: Case | None = None) -> ResolvedIdent:
    if isinstance(ident, ResolvedIdent):
        return ident
    return ResolvedIdent(original=ident.name, rewritten=to_case(ident.name, case, source))


def _keep(ident: Ident) -> ResolvedIdent:
    if isinstance(ident, ResolvedIdent):
        return ident
    return ResolvedIdent(original=ident.name, rewritten=ident.name)


def _member_idents(idents: list[Ident], case: Case | None) -> list[ResolvedIdent]:
    """Resolve a sibling set, rewriting only if its dominant style is not *case*."""
    dominant = dominant_case(ident.original for ident in idents)
    if case is None or dominant is None or dominant == case:
        return [_keep(ident) for ident in idents]
    return [_resolve(ident, case, dominant) for ident in idents]


def _normalize_item(item: Item) -> Item:
    if isinstance(item, ModuleDef):
        return _normalize_module(item)
    if isinstance(item, StructDef):
        return _normalize_struct(item)
    if isinstance(item, EnumDef):
        return _normalize_enum(item)
    return _normalize_type_alias(item)


def _normalize_module(module: ModuleDef) -> ModuleDef:
    convention = CONVENTIONS["module"]
    return ModuleDef(
        ident=_resolve(module.ident, convention.ident),
        doc=format_doc(module.doc),
        contents=[_normalize_item(item) for item in module.contents],
    )


def _normalize_struct(struct: StructDef) -> StructDef:
    convention = CONVENTIONS["struct"]
    idents = _member_idents([m.ident for m in struct.members], convention.members)
    return StructDef(
        ident=_resolve(struct.ident, convention.ident),
        doc=format_doc(struct.doc),
        members=[
            FieldDef(ident=ident, doc=format_doc(member.doc), type=member.type)
            for ident, member in zip(idents, struct.members, strict=True)
        ],
    )


def _normalize_enum(enum_def: EnumDef) -> EnumDef:
    convention = CONVENTIONS["enum"]
    idents = _member_idents([m.ident for m in enum_def.members], convention.members)
    return EnumDef(
        ident=_resolve(enum_def.ident, convention.ident),
        doc=format_doc(enum_def.doc),
        members=[
            EnumMember(ident=ident, doc=format_doc(member.doc), init=member.init)
            for ident, member in zip(idents, enum_def.members, strict=True)
        ],
    )


def _normalize_type_alias(alias: TypeAliasDef) -> TypeAliasDef:
    # The definition keeps its literal spellings; they are renamed at emission.
    return TypeAliasDef(
        ident=_resolve(alias.ident, CONVENTIONS["type_alias"].ident),
        doc=format_doc(alias.doc),
        definition=alias.definition,
    )
