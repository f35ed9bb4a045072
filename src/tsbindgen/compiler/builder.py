# Copyright 2026 tsbindgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Model builder: raw syntax tree to Declaration Model.

Only four constructs are carried into the model: namespaces, interfaces,
enums and type aliases. Every other statement is skipped. Type expressions
the model cannot represent are reported as diagnostics and replaced by an
``UnknownType`` placeholder.
"""

from __future__ import annotations

from tsbindgen.compiler.diagnostics import DiagnosticKind, Diagnostics
from tsbindgen.model.entities import (
    EnumDef,
    EnumMember,
    FieldDef,
    Item,
    ModuleDef,
    RawIdent,
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
    TypeRef,
    UnionType,
    UnknownType,
)
from tsbindgen.parser import syntax

# ###############
# Public Interface
# ###############


class ModelBuildError(Exception):
    """Raised when the syntax tree has no declaration that can serve as the model root."""


def build_model(
    source_file: syntax.SourceFile,
    diagnostics: Diagnostics,
    *,
    root_module: str | None = None,
) -> ModuleDef:
    """Build the Declaration Model from a parsed declaration file.

    Args:
        source_file: Root of the parsed syntax tree.
        diagnostics: Collector receiving unsupported-construct reports.
        root_module: When given, every top-level declaration is placed in a
            synthesized module of this name. Otherwise the first top-level
            namespace is the root.

    Returns:
        The root module of the model.

    Raises:
        ModelBuildError: If no root module can be determined.
    """
    return _ModelBuilder(source_file, diagnostics).build(root_module)


def process_type(node: syntax.TypeNode, diagnostics: Diagnostics, path: str = "") -> TypeRef:
    """Translate one type expression node into a model type."""
    return _TypeProcessor(diagnostics, path).process(node)


# ################
# Implementation
# ################

_PRIMITIVE_KEYWORDS: dict[str, PrimitiveKind] = {
    "string": PrimitiveKind.STRING,
    "number": PrimitiveKind.NUMBER,
    "boolean": PrimitiveKind.BOOLEAN,
    "object": PrimitiveKind.OBJECT,
    "any": PrimitiveKind.ANY,
}


class _TypeProcessor:
    """Translates type expression nodes, reporting what it cannot represent."""

    def __init__(self, diagnostics: Diagnostics, path: str) -> None:
        self._diagnostics = diagnostics
        self._path = path

    def process(self, node: syntax.TypeNode) -> TypeRef:
        if isinstance(node, syntax.ParenthesizedType):
            return self.process(node.type)

        if isinstance(node, syntax.UnionType):
            return self._union(node)

        if isinstance(node, syntax.LiteralType):
            return self._literal(node)

        if isinstance(node, syntax.ArrayType):
            return self._array(node, node.element_type)

        if isinstance(node, syntax.TypeReference):
            if _reference_name(node.type_name) == "Array" and len(node.type_arguments) == 1:
                return self._array(node, node.type_arguments[0])
            if node.type_arguments:
                return self._unsupported(node, f"generic type reference '{_reference_name(node.type_name)}'")
            return ReferenceType(target=self.process(node.type_name))

        if isinstance(node, syntax.Identifier):
            return IdentifierType(name=node.text)

        if isinstance(node, syntax.QualifiedName):
            return PathType(segments=[IdentifierType(name=part) for part in _flatten(node)])

        if isinstance(node, syntax.StringLiteral):
            return LiteralType(value=node.text)

        if isinstance(node, syntax.NumericLiteral):
            return LiteralType(value=_parse_number(node.text))

        if isinstance(node, syntax.KeywordType) and node.keyword in _PRIMITIVE_KEYWORDS:
            return PrimitiveType(primitive=_PRIMITIVE_KEYWORDS[node.keyword])

        if isinstance(node, syntax.TypeOperator) and node.operator == "readonly":
            return self.process(node.type)

        return self._unsupported(node, _describe(node))

    def _union(self, node: syntax.UnionType) -> UnionType:
        members: list[TypeRef] = []
        for child in node.types:
            processed = self.process(child)
            # `(A | B) | C` is the same set as `A | B | C`
            if isinstance(processed, UnionType) and not processed.array and not processed.optional:
                members.extend(processed.members)
            else:
                members.append(processed)
        return UnionType(members=members)

    def _literal(self, node: syntax.LiteralType) -> TypeRef:
        literal = node.literal
        if isinstance(literal, (syntax.StringLiteral, syntax.NumericLiteral)):
            return self.process(literal)
        return self._unsupported(node, f"literal type '{literal.keyword}'")

    def _array(self, node: syntax.Node, element: syntax.TypeNode) -> TypeRef:
        inner = self.process(element)
        if isinstance(inner, UnknownType):
            return inner
        if inner.array:
            return self._unsupported(node, "nested array type")
        return inner.model_copy(update={"array": True})

    def _unsupported(self, node: syntax.Node, description: str) -> UnknownType:
        self._diagnostics.report(
            DiagnosticKind.UNSUPPORTED_TYPE,
            f"Unsupported type expression {description} at line {node.line}, column {node.column}",
            self._path,
        )
        return UnknownType(description=description)


class _ModelBuilder:
    """Walks the syntax tree and assembles the model."""

    def __init__(self, source_file: syntax.SourceFile, diagnostics: Diagnostics) -> None:
        self._file = source_file
        self._diagnostics = diagnostics

    def build(self, root_module: str | None) -> ModuleDef:
        if root_module is not None:
            return ModuleDef(
                ident=RawIdent(name=root_module),
                contents=self._items(self._file.statements, [root_module]),
            )
        for statement in self._file.statements:
            if isinstance(statement, syntax.ModuleDeclaration):
                return self._module(statement, [])
        raise ModelBuildError("No top-level namespace found; set a root module name to wrap the declarations")

    def _doc(self, node: syntax.DocumentedNode) -> str:
        return self._file.documentation(node)

    def _items(self, statements: list[syntax.StatementNode], path: list[str]) -> list[Item]:
        contents: list[Item] = []
        for statement in statements:
            if isinstance(statement, syntax.ModuleDeclaration):
                contents.append(self._module(statement, path))
            elif isinstance(statement, syntax.InterfaceDeclaration):
                contents.append(self._struct(statement, path))
            elif isinstance(statement, syntax.EnumDeclaration):
                contents.append(self._enum(statement, path))
            elif isinstance(statement, syntax.TypeAliasDeclaration):
                contents.append(self._type_alias(statement, path))
        return contents

    def _module(self, node: syntax.ModuleDeclaration, path: list[str]) -> ModuleDef:
        inner_path = [*path, node.name]
        return ModuleDef(
            ident=RawIdent(name=node.name),
            doc=self._doc(node),
            contents=self._items(node.body, inner_path),
        )

    def _struct(self, node: syntax.InterfaceDeclaration, path: list[str]) -> StructDef:
        struct_path = [*path, node.name]
        for base in node.heritage:
            self._diagnostics.report(
                DiagnosticKind.UNSUPPORTED_MEMBER,
                f"Members inherited from {_heritage_name(base)} are not included",
                ".".join(struct_path),
            )
        members: list[FieldDef] = []
        for member in node.members:
            if not isinstance(member, syntax.PropertySignature):
                self._diagnostics.report(
                    DiagnosticKind.UNSUPPORTED_MEMBER,
                    f"Skipped {member.kind.value} at line {member.line}, column {member.column}",
                    ".".join(struct_path),
                )
                continue
            field_path = ".".join([*struct_path, member.name])
            if member.type is None:
                field_type: TypeRef = PrimitiveType(primitive=PrimitiveKind.ANY)
            else:
                field_type = process_type(member.type, self._diagnostics, field_path)
            field_type = field_type.model_copy(update={"optional": member.question_token})
            members.append(FieldDef(ident=RawIdent(name=member.name), doc=self._doc(member), type=field_type))
        return StructDef(ident=RawIdent(name=node.name), doc=self._doc(node), members=members)

    def _enum(self, node: syntax.EnumDeclaration, path: list[str]) -> EnumDef:
        enum_path = [*path, node.name]
        members: list[EnumMember] = []
        for member in node.members:
            init: str | float | None = None
            initializer = member.initializer
            if isinstance(initializer, syntax.StringLiteral):
                init = initializer.text
            elif isinstance(initializer, syntax.NumericLiteral):
                init = _parse_number(initializer.text)
            elif initializer is not None:
                self._diagnostics.report(
                    DiagnosticKind.UNSUPPORTED_INITIALIZER,
                    f"Initializer '{initializer.text}' of '{member.name}' is not a literal",
                    ".".join(enum_path),
                )
            members.append(EnumMember(ident=RawIdent(name=member.name), doc=self._doc(member), init=init))
        return EnumDef(ident=RawIdent(name=node.name), doc=self._doc(node), members=members)

    def _type_alias(self, node: syntax.TypeAliasDeclaration, path: list[str]) -> TypeAliasDef:
        alias_path = ".".join([*path, node.name])
        return TypeAliasDef(
            ident=RawIdent(name=node.name),
            doc=self._doc(node),
            definition=process_type(node.type, self._diagnostics, alias_path),
        )


def _flatten(name: syntax.Identifier | syntax.QualifiedName) -> list[str]:
    if isinstance(name, syntax.Identifier):
        return [name.text]
    return [*_flatten(name.left), name.right.text]


def _reference_name(name: syntax.Identifier | syntax.QualifiedName) -> str:
    return ".".join(_flatten(name))


def _heritage_name(node: syntax.TypeNode) -> str:
    if isinstance(node, syntax.TypeReference):
        return f"'{_reference_name(node.type_name)}'"
    return _describe(node)


def _parse_number(text: str) -> float:
    """Parse a numeric literal the way JavaScript's parseFloat/Number would."""
    sign = -1.0 if text.startswith("-") else 1.0
    digits = text.lstrip("-")
    if digits[:2].lower() == "0x":
        return sign * float(int(digits[2:], 16))
    return sign * float(digits)


def _describe(node: syntax.Node) -> str:
    if isinstance(node, syntax.KeywordType):
        return f"'{node.keyword}'"
    if isinstance(node, syntax.TypeOperator):
        return f"'{node.operator}' operator"
    return node.kind.value
