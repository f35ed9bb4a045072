# Copyright 2026 tsbindgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Language-neutral Declaration Model (modules, structs, enums, type aliases, types)."""

from tsbindgen.model.entities import (
    EnumDef,
    EnumMember,
    FieldDef,
    Ident,
    Item,
    ModuleDef,
    RawIdent,
    ResolvedIdent,
    StructDef,
    TypeAliasDef,
)
from tsbindgen.model.types import (
    IdentifierType,
    LiteralType,
    PathType,
    PrimitiveKind,
    PrimitiveType,
    ReferenceType,
    TypeModifiers,
    TypeRef,
    UnionType,
    UnknownType,
)

__all__ = [
    # Type system
    "PrimitiveKind",
    "TypeModifiers",
    "PrimitiveType",
    "LiteralType",
    "IdentifierType",
    "PathType",
    "ReferenceType",
    "UnionType",
    "UnknownType",
    "TypeRef",
    # Declarations
    "RawIdent",
    "ResolvedIdent",
    "Ident",
    "FieldDef",
    "EnumMember",
    "StructDef",
    "EnumDef",
    "TypeAliasDef",
    "ModuleDef",
    "Item",
]
