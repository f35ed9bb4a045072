# Copyright 2026 tsbindgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Raw syntax tree for TypeScript declaration files.

The node shapes loosely follow the TypeScript compiler API so that the model
builder can discriminate node kinds the same way (``isUnionTypeNode`` and
friends become ``isinstance`` checks). Nodes carry their source location and,
for declarations and members, the JSDoc comment attached to their first token.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field

# ###############
# Public Interface
# ###############


class SyntaxKind(enum.Enum):
    """Discriminator for every syntax node produced by the parser."""

    SOURCE_FILE = "SourceFile"
    MODULE_DECLARATION = "ModuleDeclaration"
    INTERFACE_DECLARATION = "InterfaceDeclaration"
    ENUM_DECLARATION = "EnumDeclaration"
    ENUM_MEMBER = "EnumMember"
    TYPE_ALIAS_DECLARATION = "TypeAliasDeclaration"
    UNKNOWN_STATEMENT = "UnknownStatement"
    PROPERTY_SIGNATURE = "PropertySignature"
    METHOD_SIGNATURE = "MethodSignature"
    INDEX_SIGNATURE = "IndexSignature"
    CALL_SIGNATURE = "CallSignature"
    PARENTHESIZED_TYPE = "ParenthesizedType"
    UNION_TYPE = "UnionType"
    INTERSECTION_TYPE = "IntersectionType"
    LITERAL_TYPE = "LiteralType"
    ARRAY_TYPE = "ArrayType"
    TYPE_REFERENCE = "TypeReference"
    IDENTIFIER = "Identifier"
    QUALIFIED_NAME = "QualifiedName"
    STRING_LITERAL = "StringLiteral"
    NUMERIC_LITERAL = "NumericLiteral"
    KEYWORD_TYPE = "KeywordType"
    TYPE_LITERAL = "TypeLiteral"
    TUPLE_TYPE = "TupleType"
    FUNCTION_TYPE = "FunctionType"
    TYPE_OPERATOR = "TypeOperator"
    INDEXED_ACCESS_TYPE = "IndexedAccessType"
    UNKNOWN_EXPRESSION = "UnknownExpression"


@dataclass
class Node:
    """Base class of all syntax nodes."""

    line: int
    column: int

    kind = SyntaxKind.UNKNOWN_STATEMENT


# ---- Type expressions ----


@dataclass
class Identifier(Node):
    text: str

    kind = SyntaxKind.IDENTIFIER


@dataclass
class QualifiedName(Node):
    """A dotted name ``left.right`` where *left* may itself be qualified."""

    left: Identifier | QualifiedName
    right: Identifier

    kind = SyntaxKind.QUALIFIED_NAME


@dataclass
class StringLiteral(Node):
    text: str

    kind = SyntaxKind.STRING_LITERAL


@dataclass
class NumericLiteral(Node):
    """A numeric literal; *text* keeps the source spelling (sign folded in)."""

    text: str

    kind = SyntaxKind.NUMERIC_LITERAL


@dataclass
class KeywordType(Node):
    """A keyword used as a type: ``string``, ``number``, ``null``, ``true`` ..."""

    keyword: str

    kind = SyntaxKind.KEYWORD_TYPE


@dataclass
class ParenthesizedType(Node):
    type: TypeNode

    kind = SyntaxKind.PARENTHESIZED_TYPE


@dataclass
class UnionType(Node):
    types: list[TypeNode]

    kind = SyntaxKind.UNION_TYPE


@dataclass
class IntersectionType(Node):
    types: list[TypeNode]

    kind = SyntaxKind.INTERSECTION_TYPE


@dataclass
class LiteralType(Node):
    literal: StringLiteral | NumericLiteral | KeywordType

    kind = SyntaxKind.LITERAL_TYPE


@dataclass
class ArrayType(Node):
    element_type: TypeNode

    kind = SyntaxKind.ARRAY_TYPE


@dataclass
class TypeReference(Node):
    type_name: Identifier | QualifiedName
    type_arguments: list[TypeNode] = field(default_factory=list)

    kind = SyntaxKind.TYPE_REFERENCE


@dataclass
class TypeLiteral(Node):
    members: list[MemberNode] = field(default_factory=list)

    kind = SyntaxKind.TYPE_LITERAL


@dataclass
class TupleType(Node):
    elements: list[TypeNode] = field(default_factory=list)

    kind = SyntaxKind.TUPLE_TYPE


@dataclass
class FunctionType(Node):
    return_type: TypeNode

    kind = SyntaxKind.FUNCTION_TYPE


@dataclass
class TypeOperator(Node):
    """A prefix type operator such as ``keyof``, ``typeof`` or ``readonly``."""

    operator: str
    type: TypeNode

    kind = SyntaxKind.TYPE_OPERATOR


@dataclass
class IndexedAccessType(Node):
    object_type: TypeNode

    kind = SyntaxKind.INDEXED_ACCESS_TYPE


TypeNode = (
    Identifier
    | QualifiedName
    | StringLiteral
    | NumericLiteral
    | KeywordType
    | ParenthesizedType
    | UnionType
    | IntersectionType
    | LiteralType
    | ArrayType
    | TypeReference
    | TypeLiteral
    | TupleType
    | FunctionType
    | TypeOperator
    | IndexedAccessType
)


# ---- Members ----


@dataclass
class PropertySignature(Node):
    name: str
    type: TypeNode | None
    question_token: bool = False
    readonly: bool = False
    doc: str | None = None

    kind = SyntaxKind.PROPERTY_SIGNATURE


@dataclass
class MethodSignature(Node):
    name: str
    doc: str | None = None

    kind = SyntaxKind.METHOD_SIGNATURE


@dataclass
class IndexSignature(Node):
    type: TypeNode | None
    doc: str | None = None

    kind = SyntaxKind.INDEX_SIGNATURE


@dataclass
class CallSignature(Node):
    doc: str | None = None

    kind = SyntaxKind.CALL_SIGNATURE


MemberNode = PropertySignature | MethodSignature | IndexSignature | CallSignature


@dataclass
class UnknownExpression(Node):
    """An initializer expression that is neither a string nor a numeric literal."""

    text: str

    kind = SyntaxKind.UNKNOWN_EXPRESSION


@dataclass
class EnumMember(Node):
    name: str
    initializer: StringLiteral | NumericLiteral | UnknownExpression | None = None
    doc: str | None = None

    kind = SyntaxKind.ENUM_MEMBER


# ---- Statements ----


@dataclass
class InterfaceDeclaration(Node):
    name: str
    members: list[MemberNode] = field(default_factory=list)
    heritage: list[TypeNode] = field(default_factory=list)
    doc: str | None = None

    kind = SyntaxKind.INTERFACE_DECLARATION


@dataclass
class EnumDeclaration(Node):
    name: str
    members: list[EnumMember] = field(default_factory=list)
    is_const: bool = False
    doc: str | None = None

    kind = SyntaxKind.ENUM_DECLARATION


@dataclass
class TypeAliasDeclaration(Node):
    name: str
    type: TypeNode
    doc: str | None = None

    kind = SyntaxKind.TYPE_ALIAS_DECLARATION


@dataclass
class UnknownStatement(Node):
    """Any statement the parser recognises only well enough to skip."""

    text: str
    doc: str | None = None

    kind = SyntaxKind.UNKNOWN_STATEMENT


@dataclass
class ModuleDeclaration(Node):
    """A ``namespace``/``module`` block. Dotted names are parsed as nested declarations."""

    name: str
    body: list[StatementNode] = field(default_factory=list)
    doc: str | None = None

    kind = SyntaxKind.MODULE_DECLARATION


StatementNode = ModuleDeclaration | InterfaceDeclaration | EnumDeclaration | TypeAliasDeclaration | UnknownStatement

DocumentedNode = StatementNode | MemberNode | EnumMember


@dataclass
class SourceFile(Node):
    """Root of the syntax tree of one declaration document."""

    statements: list[StatementNode] = field(default_factory=list)

    kind = SyntaxKind.SOURCE_FILE

    def documentation(self, node: DocumentedNode) -> str:
        """Return the documentation comment text attached to *node*.

        The comment delimiters, the leading ``*`` of each line and any trailing
        ``@tag`` section are removed. Returns an empty string when the node has
        no documentation comment.
        """
        return _documentation_text(node.doc)


# ################
# Implementation
# ################

_LEADING_STAR = re.compile(r"^\s*\* ?")


def _documentation_text(raw: str | None) -> str:
    if not raw:
        return ""
    body = raw.strip()
    body = body.removeprefix("/**").removesuffix("*/")
    lines: list[str] = []
    for line in body.split("\n"):
        text = _LEADING_STAR.sub("", line).rstrip()
        if text.lstrip().startswith("@"):
            break
        lines.append(text)
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    if len(lines) == 1:
        return lines[0].strip()
    return "\n".join(lines)
