# Copyright 2026 tsbindgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the Declaration Model entities and type expressions."""

import pytest
from pydantic import ValidationError

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
    RawIdent,
    ReferenceType,
    ResolvedIdent,
    StructDef,
    TypeAliasDef,
    TypeModifiers,
    UnionType,
    UnknownType,
)

# ###############
# Type Expressions
# ###############


class TestTypeModifiers:
    def test_defaults_are_false(self) -> None:
        t = PrimitiveType(primitive=PrimitiveKind.STRING)
        assert not t.array
        assert not t.optional

    @pytest.mark.parametrize(
        "type_ref",
        [
            PrimitiveType(primitive=PrimitiveKind.NUMBER, array=True, optional=True),
            LiteralType(value="a", array=True, optional=True),
            IdentifierType(name="Kind", array=True, optional=True),
            ReferenceType(target=IdentifierType(name="Kind"), array=True, optional=True),
            UnknownType(description="x", array=True, optional=True),
        ],
    )
    def test_modifiers_compose_with_every_variant(self, type_ref: TypeModifiers) -> None:
        assert type_ref.array
        assert type_ref.optional

    def test_model_copy_sets_modifier(self) -> None:
        t = IdentifierType(name="Kind").model_copy(update={"optional": True})
        assert t.optional
        assert t.name == "Kind"


class TestUnionType:
    def test_closed_literal(self) -> None:
        union = UnionType(members=[LiteralType(value="a"), LiteralType(value=1.0)])
        assert union.is_closed_literal()
        assert union.literal_values() == ["a", 1.0]

    def test_union_with_reference_is_not_closed(self) -> None:
        union = UnionType(members=[LiteralType(value="a"), IdentifierType(name="Other")])
        assert not union.is_closed_literal()

    def test_empty_union_is_not_closed(self) -> None:
        assert not UnionType(members=[]).is_closed_literal()

    def test_discriminator_validates_members(self) -> None:
        union = UnionType.model_validate(
            {"members": [{"kind": "literal", "value": "a"}, {"kind": "primitive", "primitive": "string"}]}
        )
        assert isinstance(union.members[0], LiteralType)
        assert isinstance(union.members[1], PrimitiveType)
        assert union.members[1].primitive == PrimitiveKind.STRING

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValidationError):
            UnionType.model_validate({"members": [{"kind": "tuple"}]})


class TestPathType:
    def test_segments(self) -> None:
        path = PathType(segments=[IdentifierType(name="net"), IdentifierType(name="Kind")])
        assert [s.name for s in path.segments] == ["net", "Kind"]


# ###############
# Identifiers
# ###############


class TestIdentifiers:
    def test_raw_ident(self) -> None:
        ident = RawIdent(name="fooBar")
        assert ident.original == "fooBar"
        assert ident.display == "fooBar"

    def test_resolved_ident(self) -> None:
        ident = ResolvedIdent(original="fooBar", rewritten="foo_bar")
        assert ident.display == "foo_bar"
        assert ident.is_renamed

    def test_resolved_ident_unchanged(self) -> None:
        assert not ResolvedIdent(original="id", rewritten="id").is_renamed

    def test_ident_discriminator(self) -> None:
        member = FieldDef.model_validate(
            {
                "ident": {"kind": "resolved", "original": "a", "rewritten": "a"},
                "type": {"kind": "primitive", "primitive": "boolean"},
            }
        )
        assert isinstance(member.ident, ResolvedIdent)


# ###############
# Declarations
# ###############


class TestEnumDef:
    def test_wire_value_prefers_init(self) -> None:
        assert EnumMember(ident=RawIdent(name="A"), init="a").wire_value == "a"

    def test_wire_value_falls_back_to_original_spelling(self) -> None:
        member = EnumMember(ident=ResolvedIdent(original="some-value", rewritten="SomeValue"))
        assert member.wire_value == "some-value"

    def test_numeric_init(self) -> None:
        assert EnumMember(ident=RawIdent(name="Low"), init=1.0).wire_value == 1.0

    def test_wire_values(self) -> None:
        enum_def = EnumDef(
            ident=RawIdent(name="Kind"),
            members=[
                EnumMember(ident=RawIdent(name="A"), init="a"),
                EnumMember(ident=RawIdent(name="B")),
            ],
        )
        assert enum_def.wire_values() == {"a", "B"}


class TestModuleDef:
    def test_contents_keep_order_and_kinds(self) -> None:
        module = ModuleDef(
            ident=RawIdent(name="net"),
            contents=[
                StructDef(ident=RawIdent(name="Ping")),
                EnumDef(ident=RawIdent(name="Kind")),
                TypeAliasDef(ident=RawIdent(name="Id"), definition=PrimitiveType(primitive=PrimitiveKind.STRING)),
                ModuleDef(ident=RawIdent(name="inner")),
            ],
        )
        assert [item.kind for item in module.contents] == ["struct", "enum", "type_alias", "module"]

    def test_dump_and_validate(self) -> None:
        module = ModuleDef(
            ident=RawIdent(name="net"),
            doc="Network.",
            contents=[
                StructDef(
                    ident=RawIdent(name="Ping"),
                    members=[
                        FieldDef(
                            ident=RawIdent(name="kind"),
                            type=ReferenceType(target=IdentifierType(name="Kind"), optional=True),
                        )
                    ],
                )
            ],
        )
        assert ModuleDef.model_validate(module.model_dump(mode="json")) == module
