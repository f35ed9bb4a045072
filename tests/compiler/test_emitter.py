# Copyright 2026 tsbindgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the Rust emitter."""

import pytest

from tsbindgen.compiler.diagnostics import DiagnosticKind, Diagnostics
from tsbindgen.compiler.emitter import (
    PLACEHOLDER_TYPE,
    EmitOptions,
    emit,
    format_number,
    rust_ident,
    rust_string,
    wire_text,
)
from tsbindgen.model import (
    EnumDef,
    EnumMember,
    FieldDef,
    IdentifierType,
    LiteralType,
    ModuleDef,
    PathType,
    PrimitiveKind,
    PrimitiveType,
    ReferenceType,
    ResolvedIdent,
    StructDef,
    TypeAliasDef,
    TypeRef,
    UnionType,
    UnknownType,
)

# ###############
# Test Helpers
# ###############

BARE = EmitOptions(prelude=[])


def _id(original: str, rewritten: str | None = None) -> ResolvedIdent:
    return ResolvedIdent(original=original, rewritten=rewritten if rewritten is not None else original)


def _module(*contents: object, name: str = "net", doc: str = "") -> ModuleDef:
    return ModuleDef(ident=_id(name), doc=doc, contents=list(contents))


def _struct(name: str, *fields: tuple[str, str, TypeRef], doc: str = "") -> StructDef:
    return StructDef(
        ident=_id(name),
        doc=doc,
        members=[FieldDef(ident=_id(original, rewritten), type=t) for original, rewritten, t in fields],
    )


def _union(*values: str | float, **modifiers: bool) -> UnionType:
    return UnionType(members=[LiteralType(value=v) for v in values], **modifiers)


def _string(**modifiers: bool) -> PrimitiveType:
    return PrimitiveType(primitive=PrimitiveKind.STRING, **modifiers)


def _number(**modifiers: bool) -> PrimitiveType:
    return PrimitiveType(primitive=PrimitiveKind.NUMBER, **modifiers)


def _field_line(type_ref: TypeRef, options: EmitOptions = BARE) -> str:
    """Emit a one-field struct and return the rendered field line."""
    output = emit(_module(_struct("S", ("f", "f", type_ref))), options)
    [line] = [line.strip() for line in output.splitlines() if line.strip().startswith("pub f:")]
    return line


# ###############
# Identifiers and Literals
# ###############


class TestRustIdent:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Ping", "Ping"),
            ("user_id", "user_id"),
            ("type", "r#type"),
            ("match", "r#match"),
            ("self", "self_"),
            ("Self", "Self_"),
            ("super", "super_"),
            ("crate", "crate_"),
            ("", "Empty"),
            ("1st", "_1st"),
            ("foo-bar", "foo_bar"),
            ("$ref", "_ref"),
        ],
    )
    def test_rust_ident(self, name: str, expected: str) -> None:
        assert rust_ident(name) == expected


class TestLiterals:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("plain", '"plain"'),
            ('a"b', '"a\\"b"'),
            ("a\\b", '"a\\\\b"'),
            ("line\nbreak", '"line\\nbreak"'),
            ("tab\there", '"tab\\there"'),
            ("\x01", '"\\u{1}"'),
            ("", '""'),
        ],
    )
    def test_rust_string(self, value: str, expected: str) -> None:
        assert rust_string(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(1.0, "1"), (-2.0, "-2"), (1.5, "1.5"), (0.25, "0.25"), (3, "3")],
    )
    def test_format_number(self, value: float, expected: str) -> None:
        assert format_number(value) == expected

    def test_wire_text(self) -> None:
        assert wire_text("a") == "a"
        assert wire_text(16.0) == "16"


# ###############
# Type Rendering
# ###############


class TestTypes:
    @pytest.mark.parametrize(
        ("type_ref", "expected"),
        [
            (_string(), "String"),
            (_number(), "f64"),
            (PrimitiveType(primitive=PrimitiveKind.BOOLEAN), "bool"),
            (PrimitiveType(primitive=PrimitiveKind.OBJECT), "serde_json::Map<String, serde_json::Value>"),
            (PrimitiveType(primitive=PrimitiveKind.ANY), "serde_json::Value"),
            (UnknownType(description="tuple"), PLACEHOLDER_TYPE),
        ],
    )
    def test_bare_types(self, type_ref: TypeRef, expected: str) -> None:
        assert _field_line(type_ref) == f"pub f: {expected},"

    def test_modifier_composition(self) -> None:
        assert _field_line(_string(array=True, optional=True)) == "pub f: Option<Vec<String>>,"
        assert _field_line(_number(array=True)) == "pub f: Vec<f64>,"
        assert _field_line(_string(optional=True)) == "pub f: Option<String>,"

    def test_references(self) -> None:
        assert _field_line(ReferenceType(target=IdentifierType(name="Kind"))) == "pub f: Kind,"
        reference = ReferenceType(target=IdentifierType(name="Kind"), array=True, optional=True)
        assert _field_line(reference) == "pub f: Option<Vec<Kind>>,"

    @pytest.mark.parametrize(
        ("segments", "expected"),
        [
            (["super", "Kind"], "super::Kind"),
            (["super", "super", "inner", "Kind"], "super::super::inner::Kind"),
            (["Inner", "Kind"], "inner::Kind"),
            (["net", "type"], "net::r#type"),
        ],
    )
    def test_paths(self, segments: list[str], expected: str) -> None:
        path = PathType(segments=[IdentifierType(name=s) for s in segments])
        assert _field_line(ReferenceType(target=path)) == f"pub f: {expected},"

    def test_reference_uses_rewritten_item_name(self) -> None:
        target = StructDef(ident=_id("fooBar", "FooBar"))
        reference = ReferenceType(target=IdentifierType(name="fooBar"), optional=True)
        output = emit(_module(target, _struct("P", ("f", "f", reference))), BARE)
        assert "pub struct FooBar {}" in output
        assert "pub f: Option<FooBar>," in output

    def test_reference_to_alias_keeps_source_spelling(self) -> None:
        alias = TypeAliasDef(ident=_id("requestId", "RequestId"), definition=_string())
        reference = ReferenceType(target=IdentifierType(name="requestId"))
        output = emit(_module(alias, _struct("P", ("f", "f", reference))), BARE)
        assert "pub f: requestId," in output

    def test_reference_to_enclosing_module_gets_super(self) -> None:
        status = EnumDef(ident=_id("status", "Status"))
        inner = _module(_struct("Reply", ("s", "s", ReferenceType(target=IdentifierType(name="status")))), name="v1")
        output = emit(_module(status, inner, name="api"), BARE)
        assert "pub s: super::Status," in output

    def test_dotted_reference_is_made_relative(self) -> None:
        kind = EnumDef(ident=_id("kind", "Kind"))
        inner = ModuleDef(ident=_id("Inner", "inner"), contents=[kind])
        path = PathType(segments=[IdentifierType(name="Inner"), IdentifierType(name="kind")])
        sibling = _module(_struct("P", ("k", "k", ReferenceType(target=path))), name="other")
        output = emit(_module(inner, sibling), BARE)
        assert "pub k: super::inner::Kind," in output

    def test_primitive_overrides(self) -> None:
        options = EmitOptions(prelude=[], primitives={"number": "i64"})
        assert _field_line(_number(), options) == "pub f: i64,"
        assert _field_line(_string(), options) == "pub f: String,"

    def test_non_literal_union_becomes_placeholder(self) -> None:
        union = UnionType(members=[LiteralType(value="a"), _string()], optional=True)
        diagnostics = Diagnostics()
        output = emit(_module(_struct("S", ("f", "f", union))), BARE, diagnostics)
        assert f"pub f: Option<{PLACEHOLDER_TYPE}>," in output
        [diagnostic] = diagnostics.of_kind(DiagnosticKind.UNSUPPORTED_UNION)
        assert diagnostic.path == "net.S.f"


# ###############
# Modules
# ###############


class TestModules:
    def test_empty_module_without_prelude(self) -> None:
        assert emit(_module(), BARE) == "pub mod net {}\n"

    def test_prelude_opens_every_module(self) -> None:
        output = emit(_module(_module(name="inner")))
        assert output == (
            "pub mod net {\n"
            "    use serde::{Deserialize, Serialize};\n"
            "\n"
            "    pub mod inner {\n"
            "        use serde::{Deserialize, Serialize};\n"
            "    }\n"
            "}\n"
        )

    def test_module_doc_and_keyword_name(self) -> None:
        output = emit(_module(name="type", doc="/**\n * Types.\n*/"), BARE)
        assert output == "/**\n * Types.\n*/\npub mod r#type {}\n"

    def test_items_are_separated_by_blank_lines(self) -> None:
        output = emit(_module(_struct("A"), _struct("B")), EmitOptions(prelude=[], derives=[]))
        assert output == "pub mod net {\n    pub struct A {}\n\n    pub struct B {}\n}\n"


# ###############
# Structs
# ###############


class TestStructs:
    def test_full_struct(self) -> None:
        struct = _struct(
            "Ping",
            ("id", "id", _number()),
            ("userName", "user_name", _string(optional=True)),
            doc="/**\n * A ping.\n*/",
        )
        assert emit(_module(struct)) == (
            "pub mod net {\n"
            "    use serde::{Deserialize, Serialize};\n"
            "\n"
            "    /**\n"
            "     * A ping.\n"
            "    */\n"
            "    #[derive(Debug, Serialize, Deserialize)]\n"
            "    pub struct Ping {\n"
            "        pub id: f64,\n"
            '        #[serde(rename = "userName")]\n'
            "        pub user_name: Option<String>,\n"
            "    }\n"
            "}\n"
        )

    def test_raw_keyword_field_needs_no_rename(self) -> None:
        output = emit(_module(_struct("S", ("type", "type", _string()))), BARE)
        assert "pub r#type: String," in output
        assert "rename" not in output

    def test_sanitized_field_is_renamed(self) -> None:
        output = emit(_module(_struct("S", ("$ref", "$ref", _string()))), BARE)
        assert '#[serde(rename = "$ref")]\n        pub _ref: String,' in output

    def test_field_doc(self) -> None:
        struct = StructDef(
            ident=_id("S"),
            members=[FieldDef(ident=_id("a"), doc="/**\n * Field.\n*/", type=_string())],
        )
        output = emit(_module(struct), BARE)
        assert "        /**\n         * Field.\n        */\n        pub a: String," in output

    def test_custom_derives(self) -> None:
        output = emit(_module(_struct("S")), EmitOptions(prelude=[], derives=["Clone", "Serialize"]))
        assert "#[derive(Clone, Serialize)]\n    pub struct S {}" in output

    def test_literal_union_field_synthesizes_enum(self) -> None:
        struct = _struct("Ping", ("mode", "mode", _union("x", "y", optional=True)))
        assert emit(_module(struct), BARE) == (
            "pub mod net {\n"
            "    #[derive(Debug, Serialize, Deserialize)]\n"
            "    pub struct Ping {\n"
            "        pub mode: Option<PingMode>,\n"
            "    }\n"
            "\n"
            "    /**\n"
            "     * Values of `Ping.mode`.\n"
            "    */\n"
            "    #[derive(Debug, Serialize, Deserialize)]\n"
            "    pub enum PingMode {\n"
            '        #[serde(rename = "x")]\n'
            "        X,\n"
            '        #[serde(rename = "y")]\n'
            "        Y,\n"
            "    }\n"
            "}\n"
        )

    def test_synthesized_enum_name_uses_original_field_spelling(self) -> None:
        struct = _struct("Ping", ("pingMode", "ping_mode", _union("a", "b", array=True)))
        output = emit(_module(struct), BARE)
        assert "pub ping_mode: Vec<PingPingMode>," in output
        assert "pub enum PingPingMode {" in output

    def test_synthesized_enum_avoids_declared_names(self) -> None:
        ping = _struct("Ping", ("mode", "mode", _union("x", "y")))
        output = emit(_module(ping, _struct("PingMode", ("id", "id", _number()))), BARE)
        assert output.count("pub struct PingMode {") == 1
        assert "pub mode: PingMode2," in output
        assert "pub enum PingMode2 {" in output

    def test_synthesized_enums_avoid_each_other(self) -> None:
        struct = _struct("Ping", ("mode", "mode", _union("x", "y")), ("Mode", "mode2", _union("a", "b")))
        output = emit(_module(struct), BARE)
        assert "pub mode: PingMode," in output
        assert "pub mode2: PingMode2," in output
        assert "pub enum PingMode {" in output
        assert "pub enum PingMode2 {" in output

    def test_synthesized_names_are_scoped_per_module(self) -> None:
        inner = _module(_struct("PingMode"), name="inner")
        output = emit(_module(_struct("Ping", ("mode", "mode", _union("x", "y"))), inner), BARE)
        assert "pub mode: PingMode," in output
        assert "PingMode2" not in output


# ###############
# Enums
# ###############


class TestEnums:
    def test_every_variant_is_renamed(self) -> None:
        enum_def = EnumDef(
            ident=_id("Kind"),
            members=[
                EnumMember(ident=_id("a", "A")),
                EnumMember(ident=_id("B"), init="b"),
                EnumMember(ident=_id("C"), init=3.0),
            ],
        )
        assert emit(_module(enum_def), BARE) == (
            "pub mod net {\n"
            "    #[derive(Debug, Serialize, Deserialize)]\n"
            "    pub enum Kind {\n"
            '        #[serde(rename = "a")]\n'
            "        A,\n"
            '        #[serde(rename = "b")]\n'
            "        B,\n"
            '        #[serde(rename = "3")]\n'
            "        C,\n"
            "    }\n"
            "}\n"
        )

    def test_empty_enum(self) -> None:
        output = emit(_module(EnumDef(ident=_id("Never"))), BARE)
        assert "pub enum Never {}" in output

    def test_numeric_literal_variants(self) -> None:
        alias = TypeAliasDef(ident=_id("Level", "Level"), definition=_union(1.0, 2.5))
        output = emit(_module(alias), BARE)
        assert '#[serde(rename = "1")]\n        _1,' in output
        assert '#[serde(rename = "2.5")]\n        _25,' in output

    def test_colliding_variant_names_get_suffixes(self) -> None:
        alias = TypeAliasDef(ident=_id("Sep"), definition=_union("a-b", "a_b", "aB"))
        output = emit(_module(alias), BARE)
        assert "        AB,\n" in output
        assert "        AB2,\n" in output
        assert "        AB3,\n" in output

    def test_empty_string_variant(self) -> None:
        alias = TypeAliasDef(ident=_id("Blank"), definition=_union("", "x"))
        output = emit(_module(alias), BARE)
        assert '#[serde(rename = "")]\n        Empty,' in output


# ###############
# Type Aliases
# ###############


class TestTypeAliases:
    def test_alias_uses_original_name(self) -> None:
        alias = TypeAliasDef(ident=_id("requestId", "RequestId"), definition=_string())
        assert "pub type requestId = String;" in emit(_module(alias), BARE)

    def test_alias_to_reference(self) -> None:
        definition = ReferenceType(target=IdentifierType(name="Kind"), array=True)
        alias = TypeAliasDef(ident=_id("Kinds"), definition=definition)
        assert "pub type Kinds = Vec<Kind>;" in emit(_module(alias), BARE)

    def test_literal_union_alias_becomes_enum(self) -> None:
        alias = TypeAliasDef(ident=_id("Mode"), doc="/**\n * Mode.\n*/", definition=_union("on", "off"))
        output = emit(_module(alias), BARE)
        assert "    /**\n     * Mode.\n    */\n    #[derive(Debug, Serialize, Deserialize)]\n" in output
        assert "    pub enum Mode {" in output
        assert "pub type" not in output

    def test_array_literal_union_alias_keeps_sequence_shape(self) -> None:
        alias = TypeAliasDef(ident=_id("Modes"), doc="/**\n * Modes.\n*/", definition=_union("x", "y", array=True))
        reference = ReferenceType(target=IdentifierType(name="Modes"))
        output = emit(_module(alias, _struct("P", ("m", "m", reference))), BARE)
        assert "    /**\n     * Modes.\n    */\n    pub type Modes = Vec<ModesItem>;\n" in output
        assert "     * Values of `Modes`.\n" in output
        assert "    pub enum ModesItem {" in output
        assert "pub m: Modes," in output

    def test_optional_literal_union_alias(self) -> None:
        alias = TypeAliasDef(ident=_id("mode", "Mode"), definition=_union("on", "off", optional=True))
        output = emit(_module(alias), BARE)
        assert "pub type mode = Option<ModeItem>;" in output
        assert "pub enum ModeItem {" in output

    def test_alias_item_enum_avoids_declared_names(self) -> None:
        alias = TypeAliasDef(ident=_id("Modes"), definition=_union("x", "y", array=True))
        output = emit(_module(alias, _struct("ModesItem")), BARE)
        assert "pub type Modes = Vec<ModesItem2>;" in output
        assert "pub enum ModesItem2 {" in output

    def test_mixed_union_alias_is_placeholder(self) -> None:
        union = UnionType(members=[LiteralType(value="a"), IdentifierType(name="Other")])
        alias = TypeAliasDef(ident=_id("Mixed"), definition=union)
        diagnostics = Diagnostics()
        output = emit(_module(alias), BARE, diagnostics)
        assert f"pub type Mixed = {PLACEHOLDER_TYPE};" in output
        [diagnostic] = diagnostics.of_kind(DiagnosticKind.UNSUPPORTED_UNION)
        assert diagnostic.path == "net.Mixed"
