# Copyright 2026 tsbindgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Declarations of the Declaration Model: modules, structs, enums and type aliases."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel
from pydantic import Field as _Field

from tsbindgen.model.types import TypeRef

# ###############
# Public Interface
# ###############


class RawIdent(BaseModel):
    """An identifier as spelled in the source, before naming normalization."""

    kind: Literal["raw"] = "raw"
    name: str

    @property
    def original(self) -> str:
        return self.name

    @property
    def display(self) -> str:
        return self.name


class ResolvedIdent(BaseModel):
    """An identifier after naming normalization.

    Attributes:
        original: Spelling in the source; used on the wire.
        rewritten: Spelling following the target naming convention; used in code.
    """

    kind: Literal["resolved"] = "resolved"
    original: str
    rewritten: str

    @property
    def display(self) -> str:
        return self.rewritten

    @property
    def is_renamed(self) -> bool:
        return self.original != self.rewritten


Ident = Annotated[RawIdent | ResolvedIdent, _Field(discriminator="kind")]


class FieldDef(BaseModel):
    """A named, typed member of a struct."""

    ident: Ident
    doc: str = ""
    type: TypeRef


class EnumMember(BaseModel):
    """A variant of an enum, optionally carrying an explicit wire value."""

    ident: Ident
    doc: str = ""
    init: str | float | None = None

    @property
    def wire_value(self) -> str | float:
        """The value this variant serializes to."""
        if self.init is not None:
            return self.init
        return self.ident.original


class StructDef(BaseModel):
    """A record declaration."""

    kind: Literal["struct"] = "struct"
    ident: Ident
    doc: str = ""
    members: list[FieldDef] = _Field(default_factory=list)


class EnumDef(BaseModel):
    """A closed set of named variants."""

    kind: Literal["enum"] = "enum"
    ident: Ident
    doc: str = ""
    members: list[EnumMember] = _Field(default_factory=list)

    def wire_values(self) -> set[str | float]:
        """Return the set of values the enum serializes."""
        return {m.wire_value for m in self.members}


class TypeAliasDef(BaseModel):
    """A named alias for a type expression."""

    kind: Literal["type_alias"] = "type_alias"
    ident: Ident
    doc: str = ""
    definition: TypeRef


class ModuleDef(BaseModel):
    """A namespace; contents keep their declaration order."""

    kind: Literal["module"] = "module"
    ident: Ident
    doc: str = ""
    contents: list[Item] = _Field(default_factory=list)


Item = Annotated[ModuleDef | StructDef | EnumDef | TypeAliasDef, _Field(discriminator="kind")]


# Resolve forward references in self-referential models.
ModuleDef.model_rebuild()
