# Copyright 2026 tsbindgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Rust code emitter for normalized, deduplicated Declaration Models.

Each model item becomes a block of lines. Modules indent their contents by
four spaces, so the emitted text mirrors the module nesting of the input.
Unmatched closed literal unions are materialized as enums: a union in a field
gets an enum named after its struct and field, placed right after the struct;
a union in a type alias becomes an enum named after the alias, or, when the
union is an array or optional, an enum named ``<Alias>Item`` that the alias
wraps. Synthesized names never reuse a name already taken in their module.

References to declared items are resolved against the tree and rendered with
the item's emitted name and a path relative to the referencing module.
References that resolve to nothing are written as they appear.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from tsbindgen.compiler.casing import Case, to_case
from tsbindgen.compiler.dedup import DeclarationIndex, DeclPath, relative_path
from tsbindgen.compiler.diagnostics import DiagnosticKind, Diagnostics
from tsbindgen.compiler.normalizer import format_doc
from tsbindgen.model.entities import EnumDef, FieldDef, Item, ModuleDef, StructDef, TypeAliasDef
from tsbindgen.model.types import (
    IdentifierType,
    LiteralType,
    PathType,
    PrimitiveKind,
    PrimitiveType,
    ReferenceType,
    TypeRef,
    UnionType,
    UnknownType,
)

# ###############
# Public Interface
# ###############

INDENT = "    "
PLACEHOLDER_TYPE = "serde_json::Value"

DEFAULT_DERIVES: tuple[str, ...] = ("Debug", "Serialize", "Deserialize")
DEFAULT_PRELUDE: tuple[str, ...] = ("use serde::{Deserialize, Serialize};",)
DEFAULT_PRIMITIVES: dict[str, str] = {
    PrimitiveKind.STRING.value: "String",
    PrimitiveKind.NUMBER.value: "f64",
    PrimitiveKind.BOOLEAN.value: "bool",
    PrimitiveKind.OBJECT.value: "serde_json::Map<String, serde_json::Value>",
    PrimitiveKind.ANY.value: "serde_json::Value",
}

RUST_KEYWORDS = frozenset(
    {
        "abstract", "as", "async", "await", "become", "box", "break", "const", "continue",
        "crate", "do", "dyn", "else", "enum", "extern", "false", "final", "fn", "for", "gen",
        "if", "impl", "in", "let", "loop", "macro", "match", "mod", "move", "mut", "override",
        "priv", "pub", "ref", "return", "self", "Self", "static", "struct", "super", "trait",
        "true", "try", "type", "typeof", "unsafe", "unsized", "use", "virtual", "where",
        "while", "yield",
    }
)  # fmt: skip

# Keywords that cannot be written as raw identifiers.
_NON_RAW_KEYWORDS = frozenset({"self", "Self", "super", "crate"})


@dataclass
class EmitOptions:
    """Output settings of the emitter.

    Attributes:
        derives: Traits derived on every struct and enum.
        prelude: Lines placed at the top of every module block.
        primitives: Rust type per primitive kind name; missing kinds use the defaults.
    """

    derives: list[str] = field(default_factory=lambda: list(DEFAULT_DERIVES))
    prelude: list[str] = field(default_factory=lambda: list(DEFAULT_PRELUDE))
    primitives: dict[str, str] = field(default_factory=dict)

    def primitive(self, kind: PrimitiveKind) -> str:
        return self.primitives.get(kind.value, DEFAULT_PRIMITIVES[kind.value])


def emit(root: ModuleDef, options: EmitOptions | None = None, diagnostics: Diagnostics | None = None) -> str:
    """Render the model rooted at *root* as Rust source text.

    Args:
        root: Normalized and deduplicated root module.
        options: Output settings. Defaults to :class:`EmitOptions` defaults.
        diagnostics: Collector receiving ``unsupported-union`` reports.
            A throwaway collector is used when omitted.

    Returns:
        The Rust source, terminated by a newline.
    """
    emitter = _Emitter(
        options if options is not None else EmitOptions(),
        diagnostics if diagnostics is not None else Diagnostics(),
        DeclarationIndex.build(root),
    )
    return "\n".join(emitter.module(root, ())) + "\n"


def rust_ident(name: str) -> str:
    """Turn *name* into a valid Rust identifier.

    Keywords become raw identifiers; the keywords that cannot be raw get a
    trailing underscore. Characters outside ``[A-Za-z0-9_]`` are replaced by
    underscores and a leading digit is prefixed with one.
    """
    if not name:
        return "Empty"
    name = _INVALID_CHARS.sub("_", name)
    if name[0].isdigit():
        return f"_{name}"
    if name in _NON_RAW_KEYWORDS:
        return f"{name}_"
    if name in RUST_KEYWORDS:
        return f"r#{name}"
    return name


def rust_string(value: str) -> str:
    """Quote *value* as a Rust string literal."""
    out: list[str] = []
    for char in value:
        if char in _STRING_ESCAPES:
            out.append(_STRING_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            out.append(f"\\u{{{ord(char):x}}}")
        else:
            out.append(char)
    return '"' + "".join(out) + '"'


def format_number(value: float) -> str:
    """Render a number the way it was most likely written (no ``.0`` for integers)."""
    if isinstance(value, int) or value.is_integer():
        return str(int(value))
    return repr(value)


def wire_text(value: str | float) -> str:
    """Text form of a wire value, as carried by a rename annotation."""
    if isinstance(value, str):
        return value
    return format_number(value)


# ################
# Implementation
# ################

_INVALID_CHARS = re.compile(r"[^A-Za-z0-9_]")

_STRING_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t", "\0": "\\0"}


def _indented(lines: list[str]) -> list[str]:
    return [f"{INDENT}{line}" if line else line for line in lines]


def _doc_lines(doc: str) -> list[str]:
    return doc.split("\n") if doc else []


def _rename(value: str) -> str:
    return f"#[serde(rename = {rust_string(value)})]"


def _unraw(ident: str) -> str:
    return ident[2:] if ident.startswith("r#") else ident


def _unique(base: str, taken: set[str]) -> str:
    """Return *base*, or *base* with the lowest free numeric suffix, and add it to *taken*."""
    name = base
    suffix = 2
    while name in taken:
        name = f"{base}{suffix}"
        suffix += 1
    taken.add(name)
    return name


def _variant_names(values: list[str]) -> list[str]:
    """PascalCase variant names for literal values, made unique by numeric suffixes."""
    seen: set[str] = set()
    return [_unique(rust_ident(to_case(value, Case.PASCAL)), seen) for value in values]


def _item_name(item: Item) -> str:
    """Name an item is emitted under. Type aliases keep their source spelling."""
    if isinstance(item, TypeAliasDef):
        return rust_ident(item.ident.original)
    return rust_ident(item.ident.display)


def _path_segment(segment: str, last: bool) -> str:
    if last:
        return rust_ident(segment)
    if segment in _NON_RAW_KEYWORDS:
        # `super`, `self` and `crate` are path keywords here
        return segment
    return rust_ident(to_case(segment, Case.SNAKE))


class _Emitter:
    """Builds the output line by line."""

    def __init__(self, options: EmitOptions, diagnostics: Diagnostics, declarations: DeclarationIndex) -> None:
        self._options = options
        self._diagnostics = diagnostics
        self._declarations = declarations
        # Path of the module being emitted and the item names taken in it.
        self._scope: DeclPath = ()
        self._taken: set[str] = set()

    def module(self, module: ModuleDef, parent: DeclPath) -> list[str]:
        path = (*parent, module.ident.display)
        outer = (self._scope, self._taken)
        self._scope = path
        self._taken = {_item_name(item) for item in module.contents}
        blocks: list[list[str]] = []
        if self._options.prelude:
            blocks.append(list(self._options.prelude))
        for item in module.contents:
            blocks.extend(self._item(item, path))
        self._scope, self._taken = outer

        body: list[str] = []
        for index, block in enumerate(blocks):
            if index:
                body.append("")
            body.extend(block)
        header = f"pub mod {rust_ident(module.ident.display)} {{"
        if not body:
            return [*_doc_lines(module.doc), f"{header}}}"]
        return [*_doc_lines(module.doc), header, *_indented(body), "}"]

    def _item(self, item: Item, path: DeclPath) -> list[list[str]]:
        if isinstance(item, ModuleDef):
            return [self.module(item, path)]
        if isinstance(item, StructDef):
            return self._struct(item, path)
        if isinstance(item, EnumDef):
            return [self._enum(item)]
        return self._type_alias(item, path)

    def _derive(self) -> list[str]:
        if not self._options.derives:
            return []
        return [f"#[derive({', '.join(self._options.derives)})]"]

    def _block(self, doc: str, header: str, body: list[str]) -> list[str]:
        lines = [*_doc_lines(doc), *self._derive()]
        if not body:
            return [*lines, f"{header} {{}}"]
        return [*lines, f"{header} {{", *_indented(body), "}"]

    def _struct(self, struct: StructDef, path: DeclPath) -> list[list[str]]:
        name = rust_ident(struct.ident.display)
        body: list[str] = []
        synthesized: list[list[str]] = []
        for member in struct.members:
            body.extend(_doc_lines(member.doc))
            field_name = rust_ident(member.ident.display)
            if _unraw(field_name) != member.ident.original:
                body.append(_rename(member.ident.original))
            body.append(f"pub {field_name}: {self._field_type(struct, member, path, synthesized)},")
        return [self._block(struct.doc, f"pub struct {name}", body), *synthesized]

    def _field_type(
        self,
        struct: StructDef,
        member: FieldDef,
        path: DeclPath,
        synthesized: list[list[str]],
    ) -> str:
        field_type = member.type
        if not isinstance(field_type, UnionType):
            return self._type(field_type)
        site = ".".join([*path, struct.ident.display, member.ident.display])
        if not field_type.is_closed_literal():
            return self._unsupported_union(field_type, site)
        base = to_case(struct.ident.display, Case.PASCAL) + to_case(member.ident.original, Case.PASCAL)
        enum_name = _unique(rust_ident(base), self._taken)
        doc = format_doc(f"Values of `{struct.ident.display}.{member.ident.original}`.")
        synthesized.append(self._literal_enum(enum_name, doc, field_type))
        return self._modified(enum_name, field_type)

    def _enum(self, enum_def: EnumDef) -> list[str]:
        body: list[str] = []
        for member in enum_def.members:
            body.extend(_doc_lines(member.doc))
            body.append(_rename(wire_text(member.wire_value)))
            body.append(f"{rust_ident(member.ident.display)},")
        return self._block(enum_def.doc, f"pub enum {rust_ident(enum_def.ident.display)}", body)

    def _type_alias(self, alias: TypeAliasDef, path: DeclPath) -> list[list[str]]:
        name = _item_name(alias)
        definition = alias.definition
        if isinstance(definition, UnionType) and definition.is_closed_literal():
            if not (definition.array or definition.optional):
                return [self._literal_enum(name, alias.doc, definition)]
            # The enum holds one element; the alias keeps the Vec/Option shape.
            item_name = _unique(rust_ident(to_case(alias.ident.display, Case.PASCAL) + "Item"), self._taken)
            alias_lines = [*_doc_lines(alias.doc), f"pub type {name} = {self._modified(item_name, definition)};"]
            doc = format_doc(f"Values of `{alias.ident.original}`.")
            return [alias_lines, self._literal_enum(item_name, doc, definition)]
        if isinstance(definition, UnionType):
            rendered = self._unsupported_union(definition, ".".join([*path, alias.ident.display]))
        else:
            rendered = self._type(definition)
        return [[*_doc_lines(alias.doc), f"pub type {name} = {rendered};"]]

    def _literal_enum(self, name: str, doc: str, union: UnionType) -> list[str]:
        """Enum over the union's literal values; *name* is used as given."""
        values = [wire_text(value) for value in union.literal_values()]
        body: list[str] = []
        for value, variant in zip(values, _variant_names(values), strict=True):
            body.append(_rename(value))
            body.append(f"{variant},")
        return self._block(doc, f"pub enum {name}", body)

    def _unsupported_union(self, union: UnionType, site: str) -> str:
        self._diagnostics.report(
            DiagnosticKind.UNSUPPORTED_UNION,
            "Union with non-literal members cannot be represented; emitted as a placeholder",
            site,
        )
        return self._modified(PLACEHOLDER_TYPE, union)

    def _reference(self, segments: list[str]) -> str | None:
        """Rust path of the declared item *segments* names from the current module, if any."""
        target = self._declarations.lookup(self._scope, segments)
        if target is None:
            return None
        item = self._declarations.resolve(target)
        if item is None or isinstance(item, ModuleDef):
            return None
        relative = relative_path(target, target[:-1], self._scope)
        modules = [s if s == "super" else rust_ident(s) for s in relative[:-1]]
        return "::".join([*modules, _item_name(item)])

    def _type(self, type_ref: TypeRef) -> str:
        return self._modified(self._bare(type_ref), type_ref)

    def _bare(self, type_ref: TypeRef) -> str:
        if isinstance(type_ref, PrimitiveType):
            return self._options.primitive(type_ref.primitive)
        if isinstance(type_ref, LiteralType):
            kind = PrimitiveKind.STRING if isinstance(type_ref.value, str) else PrimitiveKind.NUMBER
            return self._options.primitive(kind)
        if isinstance(type_ref, IdentifierType):
            return self._reference([type_ref.name]) or rust_ident(type_ref.name)
        if isinstance(type_ref, PathType):
            names = [s.name for s in type_ref.segments]
            resolved = self._reference(names)
            if resolved is not None:
                return resolved
            last = len(names) - 1
            return "::".join(_path_segment(name, i == last) for i, name in enumerate(names))
        if isinstance(type_ref, ReferenceType):
            return self._type(type_ref.target)
        if isinstance(type_ref, UnknownType):
            return PLACEHOLDER_TYPE
        # Unions are materialized by the item emitters.
        return PLACEHOLDER_TYPE

    @staticmethod
    def _modified(rendered: str, type_ref: TypeRef) -> str:
        if type_ref.array:
            rendered = f"Vec<{rendered}>"
        if type_ref.optional:
            rendered = f"Option<{rendered}>"
        return rendered
