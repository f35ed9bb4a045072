# Copyright 2026 tsbindgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type expressions of the Declaration Model."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class PrimitiveKind(Enum):
    """Primitive leaf types understood by the model."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ANY = "any"


class TypeModifiers(BaseModel):
    """Flags attachable to any type expression.

    Attributes:
        array: The value is a sequence of the underlying type.
        optional: The value may be absent.
    """

    array: bool = False
    optional: bool = False


class PrimitiveType(TypeModifiers):
    """A primitive leaf type."""

    kind: Literal["primitive"] = "primitive"
    primitive: PrimitiveKind


class LiteralType(TypeModifiers):
    """A fixed string or numeric literal."""

    kind: Literal["literal"] = "literal"
    value: str | float


class IdentifierType(TypeModifiers):
    """A bare, unresolved reference to a declared name."""

    kind: Literal["identifier"] = "identifier"
    name: str


class PathType(TypeModifiers):
    """A dotted access path to a nested declaration."""

    kind: Literal["path"] = "path"
    segments: list[IdentifierType]


class ReferenceType(TypeModifiers):
    """An explicit reference to another declared item."""

    kind: Literal["reference"] = "reference"
    target: TypeRef


class UnionType(TypeModifiers):
    """A closed set of alternative types."""

    kind: Literal["union"] = "union"
    members: list[TypeRef]

    def is_closed_literal(self) -> bool:
        """Return True if every member is a literal."""
        return bool(self.members) and all(isinstance(m, LiteralType) for m in self.members)

    def literal_values(self) -> list[str | float]:
        """Return the literal values of the members in declaration order."""
        return [m.value for m in self.members if isinstance(m, LiteralType)]


class UnknownType(TypeModifiers):
    """Placeholder for a type expression the builder could not translate."""

    kind: Literal["unknown"] = "unknown"
    description: str = ""


TypeRef = Annotated[
    PrimitiveType | LiteralType | IdentifierType | PathType | ReferenceType | UnionType | UnknownType,
    _Field(discriminator="kind"),
]


# Resolve forward references for models that use TypeRef.
ReferenceType.model_rebuild()
UnionType.model_rebuild()
